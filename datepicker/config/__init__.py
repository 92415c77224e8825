"""Application settings for the date picker."""

from .settings import DatePickerSettings, LoggingSettings, get_settings, reset_settings

__all__ = ["DatePickerSettings", "LoggingSettings", "get_settings", "reset_settings"]
