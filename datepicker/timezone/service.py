"""Timezone service for the date picker.

Resolves IANA zone names with a zoneinfo + pytz fallback strategy and answers
"what is today" for a configured zone. All timezone work goes through here so
the engine never touches a tz library directly.
"""

import importlib.util
import logging
from datetime import date, datetime, timezone as dt_timezone
from typing import Any, Optional

from ..utils.exceptions import TimezoneError

logger = logging.getLogger(__name__)

DEFAULT_TZ_NAME = "UTC"

# Check for timezone library availability
ZONEINFO_AVAILABLE = importlib.util.find_spec("zoneinfo") is not None
PYTZ_AVAILABLE = importlib.util.find_spec("pytz") is not None

ZoneInfo = None
if ZONEINFO_AVAILABLE:
    from zoneinfo import ZoneInfo

pytz = None
if PYTZ_AVAILABLE:
    import pytz


class TimezoneService:
    """Resolves and caches tzinfo objects by name.

    Uses zoneinfo when the zone is known to the system database and falls back
    to pytz (which ships its own database) otherwise.
    """

    def __init__(self) -> None:
        self._zones: dict[str, Any] = {}
        self._validate_timezone_support()

    def _validate_timezone_support(self) -> None:
        """Validate that timezone libraries are available.

        Raises:
            TimezoneError: If no timezone library is available.
        """
        if not ZONEINFO_AVAILABLE and not PYTZ_AVAILABLE:
            raise TimezoneError(
                "No timezone library available. Install Python 3.9+ for zoneinfo "
                "or install pytz package."
            )

        if ZONEINFO_AVAILABLE:
            logger.debug("Using zoneinfo for timezone handling")
        else:
            logger.debug("Using pytz fallback for timezone handling")

    def get_timezone(self, name: Optional[str] = None) -> Any:
        """Get a tzinfo object for an IANA zone name.

        Args:
            name: Zone name such as ``Europe/Berlin``; ``None`` means UTC.

        Returns:
            tzinfo object for the zone.

        Raises:
            TimezoneError: If the zone name is unknown.
        """
        name = name or DEFAULT_TZ_NAME
        if name in self._zones:
            return self._zones[name]

        if name.upper() == "UTC":
            tz: Any = dt_timezone.utc
        else:
            tz = self._resolve(name)

        self._zones[name] = tz
        logger.debug(f"Resolved timezone: {name} -> {tz}")
        return tz

    def _resolve(self, name: str) -> Any:
        errors = []
        if ZONEINFO_AVAILABLE and ZoneInfo is not None:
            try:
                return ZoneInfo(name)
            except Exception as e:
                errors.append(str(e))
        if PYTZ_AVAILABLE and pytz is not None:
            try:
                return pytz.timezone(name)
            except Exception as e:
                errors.append(str(e))
        raise TimezoneError(f"Unknown timezone '{name}'", {"errors": errors})

    def is_valid_timezone(self, name: str) -> bool:
        """Check whether a zone name can be resolved."""
        try:
            self.get_timezone(name)
        except TimezoneError:
            return False
        return True

    def now(self, name: Optional[str] = None) -> datetime:
        """Get the current time in the named zone.

        Raises:
            TimezoneError: If the zone cannot be resolved.
        """
        return datetime.now(self.get_timezone(name))

    def today(self, name: Optional[str] = None) -> date:
        """Get today's calendar date in the named zone."""
        return self.now(name).date()

    def to_timezone(self, dt: datetime, name: Optional[str] = None) -> datetime:
        """Convert a datetime into the named zone.

        Naive datetimes are assumed to already be wall-clock time in that zone.

        Raises:
            TimezoneError: If conversion fails.
            TypeError: If dt is not a datetime object.
        """
        if not isinstance(dt, datetime):
            raise TypeError(f"Expected datetime object, got {type(dt)}")

        tz = self.get_timezone(name)
        try:
            if dt.tzinfo is None:
                if hasattr(tz, "localize"):
                    return tz.localize(dt)
                return dt.replace(tzinfo=tz)
            return dt.astimezone(tz)
        except Exception as e:
            raise TimezoneError(f"Failed to convert datetime to {name}: {e}") from e

    def start_of_day(self, day: date, name: Optional[str] = None) -> datetime:
        """Midnight of ``day`` as an aware datetime in the named zone."""
        return self.to_timezone(datetime(day.year, day.month, day.day), name)


_timezone_service: Optional[TimezoneService] = None


def get_timezone_service() -> TimezoneService:
    """Get global timezone service instance.

    Returns:
        Singleton TimezoneService instance.
    """
    if "_timezone_service" not in globals() or globals()["_timezone_service"] is None:
        globals()["_timezone_service"] = TimezoneService()
    return globals()["_timezone_service"]


def get_timezone(name: Optional[str] = None) -> Any:
    """Get a tzinfo object for a zone name."""
    return get_timezone_service().get_timezone(name)


def is_valid_timezone(name: str) -> bool:
    """Check whether a zone name can be resolved."""
    return get_timezone_service().is_valid_timezone(name)


def today_in(name: Optional[str] = None) -> date:
    """Get today's date in the named zone."""
    return get_timezone_service().today(name)


def to_timezone(dt: datetime, name: Optional[str] = None) -> datetime:
    """Convert a datetime into the named zone."""
    return get_timezone_service().to_timezone(dt, name)


def start_of_day(day: date, name: Optional[str] = None) -> datetime:
    """Midnight of ``day`` in the named zone."""
    return get_timezone_service().start_of_day(day, name)
