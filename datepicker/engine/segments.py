"""Segmented text representation of a date field.

A field such as ``03/15/2024`` is held as a tuple of ``DateSegment`` values
(month, literal, day, literal, year). Segments are edited digit by digit;
a date is only synthesized once every editable segment has been filled in.
All functions here are pure: they take a segment tuple and return a new one.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import AbstractSet, Mapping, NamedTuple, Optional, Sequence, Union

from ..dates.formatting import DateFormatter, FormatToken, SegmentType, format_token
from ..dates.utils import days_in_month
from ..timezone import to_timezone
from .types import FocusDirection

logger = logging.getLogger(__name__)

SegmentValue = Union[int, str, None]

LEAP_YEAR = 2000
TWO_DIGIT_CENTURY = 2000

NON_NUMERIC = frozenset({SegmentType.ERA, SegmentType.DAY_PERIOD, SegmentType.LITERAL})
DAY_PERIODS = ("AM", "PM")

PLACEHOLDERS = {
    SegmentType.DAY: "dd",
    SegmentType.MONTH: "mm",
    SegmentType.HOUR: "--",
    SegmentType.MINUTE: "--",
    SegmentType.DAY_PERIOD: "--",
    SegmentType.ERA: "AD",
}


@dataclass(frozen=True)
class AdvanceRule:
    """When a numeric segment stops accepting digits and focus moves on.

    Attributes:
        max_digits: Buffer length that always completes the segment. ``None``
            uses the digit count of the segment's maximum (2 for day/month,
            4 for a four-digit year).
    """

    max_digits: Optional[int] = None

    def digits_for(self, maximum: int) -> int:
        if self.max_digits is not None:
            return self.max_digits
        return len(str(maximum))


DEFAULT_ADVANCE_RULE = AdvanceRule()


@dataclass(frozen=True)
class DateSegment:
    """One editable field, or a literal separator, of a date field."""

    type: SegmentType
    text: str
    value: SegmentValue = None
    min: Optional[int] = None
    max: Optional[int] = None
    is_placeholder: bool = False
    is_editable: bool = False
    placeholder_value: SegmentValue = None
    buffer: str = ""
    width: int = 0
    twelve_hour: bool = False

    @property
    def is_literal(self) -> bool:
        return self.type == SegmentType.LITERAL


SegmentList = tuple[DateSegment, ...]


class DigitResult(NamedTuple):
    """Outcome of a digit keystroke."""

    segments: SegmentList
    advance: bool


def segments_text(segments: Sequence[DateSegment]) -> str:
    """Concatenate segment texts into the field's display string."""
    return "".join(segment.text for segment in segments)


def _placeholder_text(token: FormatToken) -> str:
    if token.type == SegmentType.YEAR:
        return "y" * token.width
    return PLACEHOLDERS.get(token.type, "--")


def _numeric_range(token: FormatToken, reference: Optional[date]) -> tuple[Optional[int], Optional[int]]:
    if token.type == SegmentType.YEAR:
        return (0, 99) if token.width == 2 else (1, 9999)
    if token.type == SegmentType.MONTH:
        return 1, 12
    if token.type == SegmentType.DAY:
        if reference is not None:
            return 1, days_in_month(reference.year, reference.month)
        return 1, 31
    if token.type == SegmentType.HOUR:
        return (1, 12) if token.twelve_hour else (0, 23)
    if token.type == SegmentType.MINUTE:
        return 0, 59
    return None, None


def _field_value(token: FormatToken, value: date) -> SegmentValue:
    if token.type == SegmentType.YEAR:
        return value.year % 100 if token.width == 2 else value.year
    if token.type == SegmentType.MONTH:
        return value.month
    if token.type == SegmentType.DAY:
        return value.day
    if token.type == SegmentType.ERA:
        return "AD"

    hour = value.hour if isinstance(value, datetime) else 0
    if token.type == SegmentType.HOUR:
        return (hour % 12 or 12) if token.twelve_hour else hour
    if token.type == SegmentType.MINUTE:
        return value.minute if isinstance(value, datetime) else 0
    return DAY_PERIODS[1] if hour >= 12 else DAY_PERIODS[0]


def _value_text(segment: DateSegment, value: SegmentValue) -> str:
    if isinstance(value, int):
        return str(value).zfill(segment.width)
    return str(value)


def decompose(
    value: Optional[date],
    valid_segments: AbstractSet[SegmentType],
    formatter: DateFormatter,
    time_zone: Optional[str] = None,
    placeholder: Optional[date] = None,
) -> SegmentList:
    """Build the segment list for a date.

    Segments whose type is not in ``valid_segments`` render as placeholders
    even when ``value`` supplies a field, so a freshly opened field starts blank.

    Args:
        value: Date to decompose, or ``None`` for an empty field
        valid_segments: Segment types that hold user-entered values
        formatter: Formatter whose pattern defines the segment order
        time_zone: Zone aware datetimes are converted into first
        placeholder: Date whose fields seed ArrowUp/ArrowDown on empty segments
    """
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = to_timezone(value, time_zone)

    reference = value or placeholder
    segments: list[DateSegment] = []
    for token in formatter.tokens:
        if token.type == SegmentType.LITERAL:
            segments.append(DateSegment(type=token.type, text=token.text, width=token.width))
            continue

        low, high = _numeric_range(token, reference)
        placeholder_value = _field_value(token, reference) if reference is not None else None
        segment = DateSegment(
            type=token.type,
            text=_placeholder_text(token),
            min=low,
            max=high,
            is_placeholder=True,
            is_editable=token.type != SegmentType.ERA,
            placeholder_value=placeholder_value,
            width=token.width,
            twelve_hour=token.twelve_hour,
        )
        if value is not None and (token.type in valid_segments or token.type == SegmentType.ERA):
            segment = replace(
                segment,
                value=_field_value(token, value),
                text=format_token(token, value),
                is_placeholder=False,
            )
        segments.append(segment)

    return _refresh_day(tuple(segments))


def _index_of(segments: Sequence[DateSegment], segment_type: SegmentType) -> Optional[int]:
    for index, segment in enumerate(segments):
        if segment.type == segment_type:
            return index
    return None


def _values(segments: Sequence[DateSegment]) -> dict[SegmentType, SegmentValue]:
    return {segment.type: segment.value for segment in segments if not segment.is_literal}


def _full_year(segment: DateSegment) -> Optional[int]:
    if not isinstance(segment.value, int):
        return None
    if segment.width == 2:
        return TWO_DIGIT_CENTURY + segment.value
    return segment.value


def _day_max(segments: Sequence[DateSegment]) -> int:
    """Days in the month currently entered, or 31 while the month is unknown."""
    month_index = _index_of(segments, SegmentType.MONTH)
    month = segments[month_index].value if month_index is not None else None
    if not isinstance(month, int):
        return 31

    year_index = _index_of(segments, SegmentType.YEAR)
    year = _full_year(segments[year_index]) if year_index is not None else None
    if year is None or year < 1:
        year = LEAP_YEAR
    return days_in_month(year, month)


def _refresh_day(segments: SegmentList) -> SegmentList:
    """Keep the day segment's maximum (and value) in step with month/year."""
    index = _index_of(segments, SegmentType.DAY)
    if index is None:
        return segments

    day = segments[index]
    maximum = _day_max(segments)
    if day.max == maximum:
        return segments

    updated = replace(day, max=maximum)
    if isinstance(day.value, int) and day.value > maximum:
        updated = replace(updated, value=maximum, text=_value_text(updated, maximum), buffer="")
    return segments[:index] + (updated,) + segments[index + 1 :]


def _with_segment(segments: SegmentList, index: int, segment: DateSegment) -> SegmentList:
    return _refresh_day(segments[:index] + (segment,) + segments[index + 1 :])


def apply_digit(
    segments: SegmentList,
    segment_type: SegmentType,
    digit: str,
    rules: Optional[Mapping[SegmentType, AdvanceRule]] = None,
) -> DigitResult:
    """Append a typed digit to a segment's buffer.

    When the concatenated buffer would exceed the segment maximum (or its
    digit count), the buffer restarts from the new digit alone. Values are
    clamped into ``[min, max]``; a buffer of only zeros is held as a leading
    zero without a value. ``advance`` is set once the buffer is unambiguous:
    another digit would overflow (``value * 10 > max``) or the buffer already
    holds as many digits as the segment's advance rule allows.
    """
    index = _index_of(segments, segment_type)
    if index is None:
        return DigitResult(segments, False)

    segment = segments[index]
    if (
        not segment.is_editable
        or segment.type in NON_NUMERIC
        or len(digit) != 1
        or not digit.isdigit()
        or segment.min is None
        or segment.max is None
    ):
        logger.debug(f"Ignoring digit {digit!r} for segment {segment_type.value}")
        return DigitResult(segments, False)

    maximum = _day_max(segments) if segment.type == SegmentType.DAY else segment.max
    rule = (rules or {}).get(segment.type, DEFAULT_ADVANCE_RULE)
    max_digits = rule.digits_for(maximum)

    candidate = segment.buffer + digit
    if len(candidate) > max_digits or int(candidate) > maximum:
        candidate = digit

    number = int(candidate)
    complete = len(candidate) >= max_digits
    advance = complete or number * 10 > maximum

    if number < segment.min and not complete:
        # Leading zero: keep the buffer, no value yet
        updated = replace(segment, buffer=candidate, text=candidate, value=None, is_placeholder=False)
        return DigitResult(_with_segment(segments, index, updated), False)

    value = max(segment.min, min(number, maximum))
    updated = replace(
        segment,
        value=value,
        max=maximum,
        buffer="" if advance else candidate,
        text=_value_text(segment, value) if advance else candidate,
        is_placeholder=False,
    )
    return DigitResult(_with_segment(segments, index, updated), advance)


def apply_backspace(segments: SegmentList, segment_type: SegmentType) -> SegmentList:
    """Remove the last entered digit; an emptied segment becomes a placeholder again."""
    index = _index_of(segments, segment_type)
    if index is None:
        return segments

    segment = segments[index]
    if not segment.is_editable or segment.is_placeholder:
        return segments

    placeholder = replace(
        segment,
        value=None,
        buffer="",
        text=_placeholder_text(FormatToken(segment.type, segment.width, "")),
        is_placeholder=True,
    )
    if segment.type in NON_NUMERIC:
        return _with_segment(segments, index, placeholder)

    source = segment.buffer or (str(segment.value) if segment.value is not None else "")
    remaining = source[:-1]
    if not remaining:
        return _with_segment(segments, index, placeholder)

    number = int(remaining)
    value = number if segment.min is not None and number >= segment.min else None
    updated = replace(segment, value=value, buffer=remaining, text=remaining)
    return _with_segment(segments, index, updated)


def step_segment(segments: SegmentList, segment_type: SegmentType, delta: int) -> SegmentList:
    """Spin a segment up or down, wrapping within ``[min, max]``.

    An empty segment starts from its placeholder value. Day period toggles
    between AM and PM.
    """
    index = _index_of(segments, segment_type)
    if index is None:
        return segments

    segment = segments[index]
    if not segment.is_editable or segment.is_literal:
        return segments

    if segment.type == SegmentType.DAY_PERIOD:
        if segment.value is None:
            value: SegmentValue = segment.placeholder_value or DAY_PERIODS[0]
        else:
            value = DAY_PERIODS[1] if segment.value == DAY_PERIODS[0] else DAY_PERIODS[0]
        updated = replace(segment, value=value, text=str(value), buffer="", is_placeholder=False)
        return _with_segment(segments, index, updated)

    if segment.min is None or segment.max is None:
        return segments

    maximum = _day_max(segments) if segment.type == SegmentType.DAY else segment.max
    if not isinstance(segment.value, int):
        if isinstance(segment.placeholder_value, int):
            number = min(max(segment.placeholder_value, segment.min), maximum)
        else:
            number = segment.min if delta > 0 else maximum
    else:
        number = segment.value + delta
        if number > maximum:
            number = segment.min
        elif number < segment.min:
            number = maximum

    updated = replace(
        segment,
        value=number,
        max=maximum,
        text=_value_text(segment, number),
        buffer="",
        is_placeholder=False,
    )
    return _with_segment(segments, index, updated)


def clear_buffers(segments: SegmentList) -> SegmentList:
    """Commit any half-typed buffers; segments without a value return to placeholders."""
    cleared = []
    for segment in segments:
        if not segment.buffer:
            cleared.append(segment)
        elif segment.value is None:
            token = FormatToken(segment.type, segment.width, "")
            cleared.append(replace(segment, buffer="", text=_placeholder_text(token), is_placeholder=True))
        else:
            cleared.append(replace(segment, buffer="", text=_value_text(segment, segment.value)))
    return tuple(cleared)


def editable_types(segments: Sequence[DateSegment]) -> list[SegmentType]:
    """Segment types that accept focus, in display order."""
    return [segment.type for segment in segments if segment.is_editable and not segment.is_literal]


def first_editable(segments: Sequence[DateSegment]) -> Optional[SegmentType]:
    types = editable_types(segments)
    return types[0] if types else None


def last_editable(segments: Sequence[DateSegment]) -> Optional[SegmentType]:
    types = editable_types(segments)
    return types[-1] if types else None


def move_focus(
    segments: Sequence[DateSegment],
    current: Optional[SegmentType],
    direction: FocusDirection,
    wrap: bool = False,
) -> Optional[SegmentType]:
    """Next or previous editable segment, skipping literals.

    Clamps at either end unless ``wrap`` is requested.
    """
    types = editable_types(segments)
    if not types:
        return current
    if current not in types:
        return types[0] if direction == FocusDirection.NEXT else types[-1]

    position = types.index(current) + (1 if direction == FocusDirection.NEXT else -1)
    if 0 <= position < len(types):
        return types[position]
    if wrap:
        return types[position % len(types)]
    return current


def to_date(
    segments: Sequence[DateSegment], valid_segments: AbstractSet[SegmentType]
) -> Optional[date]:
    """Synthesize a date once every editable segment is valid.

    Returns ``None`` for partial input. The day is clamped to the entered
    month's length. With hour/minute segments the result is a ``datetime``.
    """
    required = set(editable_types(segments))
    if not required or not required.issubset(valid_segments):
        return None

    values = _values(segments)
    if any(values.get(segment_type) is None for segment_type in required):
        return None

    year_index = _index_of(segments, SegmentType.YEAR)
    if year_index is None or SegmentType.MONTH not in values or SegmentType.DAY not in values:
        return None

    year = _full_year(segments[year_index])
    month = values[SegmentType.MONTH]
    day = values[SegmentType.DAY]
    if not isinstance(year, int) or not isinstance(month, int) or not isinstance(day, int):
        return None
    if not 1 <= year <= 9999:
        return None
    day = min(day, days_in_month(year, month))

    if SegmentType.HOUR not in values:
        return date(year, month, day)

    hour_index = _index_of(segments, SegmentType.HOUR)
    hour = values[SegmentType.HOUR]
    if not isinstance(hour, int) or hour_index is None:
        return None
    if segments[hour_index].twelve_hour:
        hour = hour % 12
        if values.get(SegmentType.DAY_PERIOD) == DAY_PERIODS[1]:
            hour += 12
    minute = values.get(SegmentType.MINUTE)
    return datetime(year, month, day, hour, minute if isinstance(minute, int) else 0)
