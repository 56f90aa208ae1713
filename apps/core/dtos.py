"""DTOs shared across apps."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ValidationResultDTO:
    """
    Outcome of an explicit validation function.

    `error` is a summary message, `errors` maps field names to messages,
    and `cleaned_data` holds normalized values when the input is valid.
    """
    valid: bool
    error: Optional[str] = None
    errors: Dict[str, str] = field(default_factory=dict)
    cleaned_data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, **cleaned_data) -> "ValidationResultDTO":
        return cls(valid=True, cleaned_data=cleaned_data)

    @classmethod
    def fail(cls, field_name: str, message: str) -> "ValidationResultDTO":
        return cls(valid=False, error=message, errors={field_name: message})
