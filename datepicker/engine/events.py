"""Typed inbound events consumed by the engine.

Events form a closed union (``Event``); the engine dispatches on the concrete
class and rejects anything else.
"""

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Union

from ..dates.formatting import SegmentType
from .types import RangeSelection


@dataclass(frozen=True)
class FocusCell:
    date: date
    type: ClassVar[str] = "FOCUS_CELL"


@dataclass(frozen=True)
class ClickCell:
    date: date
    type: ClassVar[str] = "CLICK_CELL"


@dataclass(frozen=True)
class HoverCell:
    """Pointer over a cell; previews the end of an in-progress range."""

    date: date
    type: ClassVar[str] = "HOVER_CELL"


@dataclass(frozen=True)
class ArrowLeft:
    type: ClassVar[str] = "ARROW_LEFT"


@dataclass(frozen=True)
class ArrowRight:
    type: ClassVar[str] = "ARROW_RIGHT"


@dataclass(frozen=True)
class ArrowUp:
    type: ClassVar[str] = "ARROW_UP"


@dataclass(frozen=True)
class ArrowDown:
    type: ClassVar[str] = "ARROW_DOWN"


@dataclass(frozen=True)
class PageUp:
    """Previous month, or previous year when ``larger`` (Shift+PageUp)."""

    larger: bool = False
    type: ClassVar[str] = "PAGE_UP"


@dataclass(frozen=True)
class PageDown:
    """Next month, or next year when ``larger`` (Shift+PageDown)."""

    larger: bool = False
    type: ClassVar[str] = "PAGE_DOWN"


@dataclass(frozen=True)
class Home:
    type: ClassVar[str] = "HOME"


@dataclass(frozen=True)
class End:
    type: ClassVar[str] = "END"


@dataclass(frozen=True)
class Enter:
    type: ClassVar[str] = "ENTER"


@dataclass(frozen=True)
class ClickNext:
    type: ClassVar[str] = "CLICK_NEXT"


@dataclass(frozen=True)
class ClickPrev:
    type: ClassVar[str] = "CLICK_PREV"


@dataclass(frozen=True)
class ClickTrigger:
    type: ClassVar[str] = "CLICK_TRIGGER"


@dataclass(frozen=True)
class FocusSegment:
    segment: SegmentType
    type: ClassVar[str] = "FOCUS_SEGMENT"


@dataclass(frozen=True)
class BlurSegment:
    type: ClassVar[str] = "BLUR_SEGMENT"


@dataclass(frozen=True)
class TypeDigit:
    """A digit keystroke into the focused segment."""

    digit: str
    type: ClassVar[str] = "TYPE_DIGIT"


@dataclass(frozen=True)
class Backspace:
    type: ClassVar[str] = "BACKSPACE"


@dataclass(frozen=True)
class SetValue:
    """Programmatic override of the selection."""

    value: Union[date, RangeSelection]
    type: ClassVar[str] = "SET_VALUE"


@dataclass(frozen=True)
class ClearValue:
    type: ClassVar[str] = "CLEAR_VALUE"


Event = Union[
    FocusCell,
    ClickCell,
    HoverCell,
    ArrowLeft,
    ArrowRight,
    ArrowUp,
    ArrowDown,
    PageUp,
    PageDown,
    Home,
    End,
    Enter,
    ClickNext,
    ClickPrev,
    ClickTrigger,
    FocusSegment,
    BlurSegment,
    TypeDigit,
    Backspace,
    SetValue,
    ClearValue,
]
