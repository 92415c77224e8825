"""Per-cell state flags for the calendar grid.

Everything here is a pure function of its arguments so callers may cache
results freely between context changes.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional, Sequence

from .types import Bounds, RangeSelection, Selection, VisibleRange

UnavailablePredicate = Callable[[date], bool]


@dataclass(frozen=True)
class CellState:
    """Display and interaction flags for one grid cell."""

    is_selected: bool
    is_disabled: bool
    is_unavailable: bool
    is_invalid: bool
    is_outside_range: bool
    is_focused: bool
    is_today: bool
    is_range_start: bool
    is_range_end: bool
    is_selectable: bool


def is_selectable(is_disabled: bool, is_unavailable: bool) -> bool:
    """A cell can be picked when it is neither disabled nor unavailable."""
    return not is_disabled and not is_unavailable


def as_date(value: Optional[date]) -> Optional[date]:
    """Calendar date part of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def _range_ends(selection: Selection) -> tuple[Optional[date], Optional[date]]:
    if isinstance(selection, RangeSelection):
        return as_date(selection.start), as_date(selection.end)
    return None, None


def _is_selected(value: date, selection: Selection) -> bool:
    if isinstance(selection, RangeSelection):
        start, end = _range_ends(selection)
        if start is None:
            return False
        if end is None:
            return value == start
        return start <= value <= end
    return value == as_date(selection)


def _is_wrong_side_of_preview(
    value: date, selection: Selection, preview: Optional[date]
) -> bool:
    """While only a range start is set, dates opposite the hovered end are disabled."""
    start, end = _range_ends(selection)
    if start is None or end is not None or preview is None or preview == start:
        return False
    if preview > start:
        return value < start
    return value > start


def resolve_cell_state(
    value: date,
    selection: Selection,
    bounds: Bounds,
    is_unavailable: Optional[UnavailablePredicate],
    focused: Optional[date],
    visible: VisibleRange,
    today: date,
    disabled: bool = False,
    preview: Optional[date] = None,
) -> CellState:
    """Compute the flags of the cell showing ``value``.

    Args:
        value: Date shown in the cell
        selection: Current selection
        bounds: Inclusive min/max
        is_unavailable: Caller predicate for non-selectable dates
        focused: Focused date
        visible: Visible range; padding days outside its month are flagged
        today: Today's date in the configured zone
        disabled: Caller-level disabled flag for this cell (or the whole engine)
        preview: Hovered end while a range selection is in progress

    Disabled takes precedence: a date that is both disabled and unavailable
    reports ``is_unavailable = False``.
    """
    is_invalid = not bounds.contains(value)
    is_disabled = disabled or is_invalid or _is_wrong_side_of_preview(value, selection, preview)
    unavailable = (
        is_unavailable is not None and not is_disabled and bool(is_unavailable(value))
    )
    start, end = _range_ends(selection)

    return CellState(
        is_selected=_is_selected(value, selection),
        is_disabled=is_disabled,
        is_unavailable=unavailable,
        is_invalid=is_invalid,
        is_outside_range=not visible.contains(value),
        is_focused=value == as_date(focused),
        is_today=value == today,
        is_range_start=start is not None and value == start,
        is_range_end=end is not None and value == end,
        is_selectable=is_selectable(is_disabled, unavailable),
    )


def resolve_grid(
    weeks: Sequence[Sequence[date]],
    selection: Selection,
    bounds: Bounds,
    is_unavailable: Optional[UnavailablePredicate],
    focused: Optional[date],
    visible: VisibleRange,
    today: date,
    disabled: bool = False,
    preview: Optional[date] = None,
) -> dict[date, CellState]:
    """Resolve every cell of a grid in one pass.

    The unavailable predicate is memoized for this pass only.
    """
    memo: dict[date, bool] = {}

    def memoized(value: date) -> bool:
        if value not in memo:
            memo[value] = bool(is_unavailable(value)) if is_unavailable is not None else False
        return memo[value]

    states: dict[date, CellState] = {}
    for week in weeks:
        for value in week:
            states[value] = resolve_cell_state(
                value,
                selection,
                bounds,
                memoized if is_unavailable is not None else None,
                focused,
                visible,
                today,
                disabled=disabled,
                preview=preview,
            )
    return states
