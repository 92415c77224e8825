"""Headless date picker engine: segments, grid navigation, cell state and the state machine."""

from .cells import CellState, is_selectable, resolve_cell_state, resolve_grid
from .config import PickerConfig
from .events import (
    ArrowDown,
    ArrowLeft,
    ArrowRight,
    ArrowUp,
    Backspace,
    BlurSegment,
    ClearValue,
    ClickCell,
    ClickNext,
    ClickPrev,
    ClickTrigger,
    End,
    Enter,
    Event,
    FocusCell,
    FocusSegment,
    HoverCell,
    Home,
    PageDown,
    PageUp,
    SetValue,
    TypeDigit,
)
from .machine import DatePickerEngine, PickerContext
from .navigation import GridNavigator
from .segments import AdvanceRule, DateSegment, decompose, to_date
from .selection import select_date, selection_to_string
from .types import (
    Bounds,
    Direction,
    FocusChangeDetails,
    PageDirection,
    PickerState,
    RangeSelection,
    Selection,
    SelectionMode,
    ValueChangeDetails,
    VisibleRange,
)

__all__ = [
    "AdvanceRule",
    "ArrowDown",
    "ArrowLeft",
    "ArrowRight",
    "ArrowUp",
    "Backspace",
    "BlurSegment",
    "Bounds",
    "CellState",
    "ClearValue",
    "ClickCell",
    "ClickNext",
    "ClickPrev",
    "ClickTrigger",
    "DatePickerEngine",
    "DateSegment",
    "Direction",
    "End",
    "Enter",
    "Event",
    "FocusCell",
    "FocusChangeDetails",
    "FocusSegment",
    "GridNavigator",
    "HoverCell",
    "Home",
    "PageDirection",
    "PageDown",
    "PageUp",
    "PickerConfig",
    "PickerContext",
    "PickerState",
    "RangeSelection",
    "Selection",
    "SelectionMode",
    "SetValue",
    "TypeDigit",
    "ValueChangeDetails",
    "VisibleRange",
    "decompose",
    "is_selectable",
    "resolve_cell_state",
    "resolve_grid",
    "select_date",
    "selection_to_string",
    "to_date",
]
