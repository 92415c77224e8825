"""
Timezone package for the date picker.

Example usage:
    >>> from datepicker.timezone import today_in, start_of_day
    >>> today = today_in("Europe/Berlin")
    >>> midnight = start_of_day(today, "Europe/Berlin")
"""

from .service import (
    TimezoneService,
    get_timezone,
    get_timezone_service,
    is_valid_timezone,
    start_of_day,
    to_timezone,
    today_in,
)

__all__ = [
    "TimezoneService",
    "get_timezone",
    "get_timezone_service",
    "is_valid_timezone",
    "start_of_day",
    "to_timezone",
    "today_in",
]
