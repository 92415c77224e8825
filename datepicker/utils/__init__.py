"""Shared utilities: exceptions and logging setup."""

from .exceptions import ConfigurationError, DatePickerError, InvariantViolation, TimezoneError
from .logging import VERBOSE, get_log_level, get_logger, setup_logging

__all__ = [
    "VERBOSE",
    "ConfigurationError",
    "DatePickerError",
    "InvariantViolation",
    "TimezoneError",
    "get_log_level",
    "get_logger",
    "setup_logging",
]
