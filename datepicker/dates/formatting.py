"""Field patterns, segment tokenization and the formatter cache.

A field pattern such as ``MM/DD/YYYY`` describes how a date is laid out as
editable segments. Supported tokens:

    YYYY  year (4 digits)        YY  year (2 digits)
    MM    month (zero padded)    M   month
    DD    day (zero padded)      D   day
    HH    hour 0-23              hh  hour 1-12
    mm    minute                 a   day period (AM/PM)
    G     era

Anything else is a literal separator.
"""

import calendar
import logging
from datetime import date, datetime
from enum import Enum
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"
DEFAULT_PATTERN = "MM/DD/YYYY"

LOCALE_PATTERNS = {
    "en-us": "MM/DD/YYYY",
    "en-gb": "DD/MM/YYYY",
    "en-ca": "YYYY-MM-DD",
    "de": "DD.MM.YYYY",
    "fr": "DD/MM/YYYY",
    "es": "DD/MM/YYYY",
    "it": "DD/MM/YYYY",
    "nl": "DD-MM-YYYY",
    "ja": "YYYY/MM/DD",
    "zh": "YYYY/MM/DD",
    "ko": "YYYY. MM. DD.",
    "sv": "YYYY-MM-DD",
    "en": "MM/DD/YYYY",
}


class SegmentType(str, Enum):
    """Kinds of segment in a date field."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    ERA = "era"
    DAY_PERIOD = "dayPeriod"
    HOUR = "hour"
    MINUTE = "minute"
    LITERAL = "literal"


class FormatToken(NamedTuple):
    """One token of a tokenized field pattern."""

    type: SegmentType
    width: int
    text: str
    twelve_hour: bool = False


# Longest tokens first so "YYYY" wins over "YY"
_TOKENS = (
    ("YYYY", SegmentType.YEAR, 4, False),
    ("YY", SegmentType.YEAR, 2, False),
    ("MM", SegmentType.MONTH, 2, False),
    ("M", SegmentType.MONTH, 1, False),
    ("DD", SegmentType.DAY, 2, False),
    ("D", SegmentType.DAY, 1, False),
    ("HH", SegmentType.HOUR, 2, False),
    ("hh", SegmentType.HOUR, 2, True),
    ("mm", SegmentType.MINUTE, 2, False),
    ("a", SegmentType.DAY_PERIOD, 2, False),
    ("G", SegmentType.ERA, 2, False),
)


def normalize_locale(locale: Optional[str]) -> str:
    """Normalize ``en_US`` / ``EN-us`` style tags to ``en-us``."""
    return (locale or DEFAULT_LOCALE).replace("_", "-").lower()


def pattern_for_locale(locale: Optional[str]) -> str:
    """Pick the field pattern for a locale, falling back to its language, then en-US."""
    tag = normalize_locale(locale)
    if tag in LOCALE_PATTERNS:
        return LOCALE_PATTERNS[tag]
    language = tag.split("-", 1)[0]
    return LOCALE_PATTERNS.get(language, DEFAULT_PATTERN)


def tokenize(pattern: str) -> list[FormatToken]:
    """Split a field pattern into segment and literal tokens.

    Adjacent literal characters are merged into one literal token.

    Example:
        >>> [t.type.value for t in tokenize("DD.MM.YYYY")]
        ['day', 'literal', 'month', 'literal', 'year']
    """
    tokens: list[FormatToken] = []
    literal = ""
    i = 0
    while i < len(pattern):
        for text, segment_type, width, twelve_hour in _TOKENS:
            if pattern.startswith(text, i):
                if literal:
                    tokens.append(FormatToken(SegmentType.LITERAL, len(literal), literal))
                    literal = ""
                tokens.append(FormatToken(segment_type, width, text, twelve_hour))
                i += len(text)
                break
        else:
            literal += pattern[i]
            i += 1
    if literal:
        tokens.append(FormatToken(SegmentType.LITERAL, len(literal), literal))
    return tokens


class DateFormatter:
    """Formats dates for one (locale, time zone, pattern) combination."""

    def __init__(self, locale: str, time_zone: Optional[str], pattern: str) -> None:
        self.locale = locale
        self.time_zone = time_zone
        self.pattern = pattern
        self.tokens = tokenize(pattern)

    def format(self, value: date) -> str:
        """Render a date through the field pattern."""
        parts = []
        for token in self.tokens:
            parts.append(format_token(token, value))
        return "".join(parts)

    def format_month_year(self, value: date) -> str:
        """Heading text for a month grid, e.g. ``January 2024``."""
        return f"{calendar.month_name[value.month]} {value.year}"

    def format_weekday(self, value: date, long: bool = False) -> str:
        """Weekday name for a date."""
        names = calendar.day_name if long else calendar.day_abbr
        return names[value.weekday()]

    def __repr__(self) -> str:
        return f"DateFormatter(locale={self.locale!r}, time_zone={self.time_zone!r}, pattern={self.pattern!r})"


def format_token(token: FormatToken, value: date) -> str:
    """Render one token of ``value``."""
    if token.type == SegmentType.LITERAL:
        return token.text
    if token.type == SegmentType.YEAR:
        if token.width == 2:
            return str(value.year % 100).zfill(2)
        return str(value.year).zfill(token.width)
    if token.type == SegmentType.MONTH:
        return str(value.month).zfill(token.width)
    if token.type == SegmentType.DAY:
        return str(value.day).zfill(token.width)
    if token.type == SegmentType.ERA:
        return "AD"

    hour = value.hour if isinstance(value, datetime) else 0
    minute = value.minute if isinstance(value, datetime) else 0
    if token.type == SegmentType.HOUR:
        if token.twelve_hour:
            return str(hour % 12 or 12).zfill(token.width)
        return str(hour).zfill(token.width)
    if token.type == SegmentType.MINUTE:
        return str(minute).zfill(token.width)
    return "PM" if hour >= 12 else "AM"


class FormatterCache:
    """Formatter instances keyed by a normalized ``(locale, time_zone, pattern)`` tuple.

    Owned by one engine. Callers clear it when the locale or time zone changes.
    """

    def __init__(self) -> None:
        self._formatters: dict[tuple[str, str, str], DateFormatter] = {}

    def get(
        self, locale: Optional[str], time_zone: Optional[str], pattern: Optional[str] = None
    ) -> DateFormatter:
        """Get or create the formatter for the given options."""
        tag = normalize_locale(locale)
        resolved_pattern = pattern or pattern_for_locale(tag)
        key = (tag, time_zone or "UTC", resolved_pattern)

        formatter = self._formatters.get(key)
        if formatter is None:
            formatter = DateFormatter(tag, time_zone, resolved_pattern)
            self._formatters[key] = formatter
            logger.debug(f"Created formatter for {key}")
        return formatter

    def clear(self) -> None:
        """Drop every cached formatter."""
        if self._formatters:
            logger.debug(f"Invalidating {len(self._formatters)} cached formatter(s)")
        self._formatters.clear()

    def __len__(self) -> int:
        return len(self._formatters)
