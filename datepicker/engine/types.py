"""Value types shared by the engine components."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Union

from ..dates.utils import end_of_month
from ..utils.exceptions import ConfigurationError, InvariantViolation


class SelectionMode(str, Enum):
    """How clicks build the selection."""

    SINGLE = "single"
    RANGE = "range"


class PickerState(str, Enum):
    """Top-level engine state."""

    IDLE = "idle"
    FOCUSED = "focused"
    EDITING_SEGMENT = "editing-segment"


class Direction(str, Enum):
    """Arrow-key direction in the grid."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class PageDirection(str, Enum):
    """Paging direction for months/years."""

    PREV = "prev"
    NEXT = "next"


class FocusDirection(str, Enum):
    """Segment focus movement."""

    NEXT = "next"
    PREV = "prev"


@dataclass(frozen=True)
class VisibleRange:
    """The span of dates rendered in the grid.

    Attributes:
        start: First date of the grid (falls on the first day of week)
        end: Last date of the grid
        month: First day of the displayed month
    """

    start: date
    end: date
    month: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvariantViolation(
                "Visible range start is after its end",
                {"start": self.start.isoformat(), "end": self.end.isoformat()},
            )

    @property
    def month_end(self) -> date:
        """Last day of the displayed month."""
        return end_of_month(self.month)

    def contains(self, value: date) -> bool:
        """Whether ``value`` lies in the displayed month."""
        return self.month <= value <= self.month_end


@dataclass(frozen=True)
class Bounds:
    """Inclusive selectable range; ``None`` is unbounded on that side."""

    min: Optional[date] = None
    max: Optional[date] = None

    def __post_init__(self) -> None:
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ConfigurationError(
                "min must not be after max",
                field_name="min",
                field_value=self.min,
                details={"max": self.max.isoformat()},
            )

    def contains(self, value: date) -> bool:
        """Whether ``value`` is inside the bounds."""
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True


@dataclass(frozen=True)
class RangeSelection:
    """Start/end selection used in range mode."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise InvariantViolation(
                "Range selection start is after its end",
                {"start": self.start.isoformat(), "end": self.end.isoformat()},
            )

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    def contains(self, value: date) -> bool:
        """Inclusive membership; a half-open range only contains its start."""
        if self.start is None:
            return False
        if self.end is None:
            return value == self.start
        return self.start <= value <= self.end


Selection = Union[Optional[date], RangeSelection]


def is_selection_complete(selection: Selection) -> bool:
    """A single value is complete when set; a range when both ends are set."""
    if isinstance(selection, RangeSelection):
        return selection.is_complete
    return selection is not None


@dataclass(frozen=True)
class ValueChangeDetails:
    """Payload of a "value changed" notification."""

    value: Selection
    value_as_string: Optional[str]


@dataclass(frozen=True)
class FocusChangeDetails:
    """Payload of a "focus changed" notification."""

    focused_value: date
    visible_range: VisibleRange
