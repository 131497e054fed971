"""Shared validation error types."""

from dataclasses import dataclass
from typing import Any


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


def require_symbol(value: str, field: str) -> str:
    """
    Ensure a configurable separator is a non-empty string.

    Args:
        value: Candidate symbol
        field: Name for error messages

    Raises:
        ValidationError: If the symbol is empty or not a string
    """
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} must be a non-empty string, got {value!r}")
    return value
