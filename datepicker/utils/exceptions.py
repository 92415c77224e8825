"""Exception hierarchy for the date picker engine."""

from typing import Any, Optional


class DatePickerError(Exception):
    """Base exception for all date picker errors.

    Args:
        message: Human-readable error description
        details: Optional dictionary containing additional error context

    Example:
        >>> raise DatePickerError("Engine misconfigured", {"field": "min"})
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(DatePickerError):
    """Raised at construction time when the engine configuration is unusable.

    Typical causes are ``min > max`` bounds, an unknown time zone or a field
    pattern without any editable segment.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value

        error_details = details or {}
        if field_name:
            error_details["field_name"] = field_name
        if field_value is not None:
            error_details["field_value"] = str(field_value)

        super().__init__(message, error_details)


class InvariantViolation(DatePickerError):
    """Raised when internal state breaks a contract (e.g. range start after end).

    These indicate a caller bug in supplied bounds or predicates, never user error.
    """


class TimezoneError(DatePickerError):
    """Raised when timezone operations fail."""
