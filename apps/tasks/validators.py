"""
Explicit validation for task payloads.

Each function returns a ValidationResultDTO instead of raising, so callers
decide how to surface failures. Only `description` and `completed` are
ever writable by clients; `owner_id` comes from the session.
"""
from typing import Any, Mapping

from apps.core.dtos import ValidationResultDTO

MUTABLE_FIELDS = ('description', 'completed')


def validate_description(value: Any) -> ValidationResultDTO:
    """Description must be a string that is non-empty once trimmed."""
    if value is None:
        return ValidationResultDTO.fail("description", "Description is required")
    if not isinstance(value, str):
        return ValidationResultDTO.fail("description", "Description must be a string")
    description = value.strip()
    if not description:
        return ValidationResultDTO.fail("description", "Description must not be empty")
    return ValidationResultDTO.ok(description=description)


def validate_completed(value: Any) -> ValidationResultDTO:
    # bool only; 0/1 and "true" are rejected
    if not isinstance(value, bool):
        return ValidationResultDTO.fail("completed", "Completed must be true or false")
    return ValidationResultDTO.ok(completed=value)


FIELD_VALIDATORS = {
    'description': validate_description,
    'completed': validate_completed,
}


def _validate_fields(data: Mapping[str, Any]) -> ValidationResultDTO:
    errors = {}
    cleaned = {}

    for key in data:
        if key not in MUTABLE_FIELDS:
            errors[key] = f"Field '{key}' cannot be set"

    for key in MUTABLE_FIELDS:
        if key not in data:
            continue
        result = FIELD_VALIDATORS[key](data[key])
        if result.valid:
            cleaned.update(result.cleaned_data)
        else:
            errors.update(result.errors)

    if errors:
        return ValidationResultDTO(
            valid=False,
            error="; ".join(errors.values()),
            errors=errors,
        )
    return ValidationResultDTO(valid=True, cleaned_data=cleaned)


def validate_task_create(payload: Mapping[str, Any]) -> ValidationResultDTO:
    """
    Validate a new task. `description` is required, `completed` defaults
    to False, and any other key (including `owner`) is rejected.
    """
    result = _validate_fields(payload)
    if 'description' not in payload:
        errors = dict(result.errors)
        errors['description'] = "Description is required"
        return ValidationResultDTO(valid=False, error="; ".join(errors.values()), errors=errors)
    if not result.valid:
        return result

    cleaned = dict(result.cleaned_data)
    cleaned.setdefault('completed', False)
    return ValidationResultDTO(valid=True, cleaned_data=cleaned)


def validate_task_patch(patch: Mapping[str, Any]) -> ValidationResultDTO:
    """
    Validate a partial update. Keys outside the allow-list are an error,
    not silently dropped. An empty patch is valid and changes nothing.
    """
    return _validate_fields(patch)
