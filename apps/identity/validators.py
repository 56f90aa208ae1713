"""Signup field validation for Identity app."""
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from apps.core.dtos import ValidationResultDTO

MIN_PASSWORD_LENGTH = 7


def validate_name(value) -> ValidationResultDTO:
    if not isinstance(value, str) or not value.strip():
        return ValidationResultDTO.fail("name", "Name is required")
    return ValidationResultDTO.ok(name=value.strip())


def validate_email_address(value) -> ValidationResultDTO:
    if not isinstance(value, str) or not value.strip():
        return ValidationResultDTO.fail("email", "Email is required")
    email = value.strip().lower()
    try:
        validate_email(email)
    except ValidationError:
        return ValidationResultDTO.fail("email", "Email is invalid")
    return ValidationResultDTO.ok(email=email)


def validate_password(value) -> ValidationResultDTO:
    """
    Passwords must be at least 7 characters and must not contain
    the word "password" in any case. The value is kept exactly as typed,
    since login checks the raw input.
    """
    if not isinstance(value, str) or not value.strip():
        return ValidationResultDTO.fail("password", "Password is required")
    password = value
    if len(password.strip()) < MIN_PASSWORD_LENGTH:
        return ValidationResultDTO.fail(
            "password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if "password" in password.lower():
        return ValidationResultDTO.fail("password", 'Password cannot contain "password"')
    return ValidationResultDTO.ok(password=password)


def validate_registration(name, email, password) -> ValidationResultDTO:
    """Validate every signup field and collect all failures."""
    errors = {}
    cleaned = {}
    for result in (validate_name(name), validate_email_address(email), validate_password(password)):
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
