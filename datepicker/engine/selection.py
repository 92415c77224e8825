"""Single-value and start/end range selection transitions."""

import logging
from datetime import date
from typing import Optional

from .types import RangeSelection, Selection, SelectionMode

logger = logging.getLogger(__name__)


def select_date(current: Selection, value: date, mode: SelectionMode) -> Selection:
    """Apply a click on ``value`` to the current selection.

    Single mode replaces the value outright. Range mode walks through
    start -> end -> fresh start:

    - nothing selected: ``value`` becomes the start
    - only a start: ``value`` becomes the end, swapped with the start if it
      comes first
    - both set: a new range starts at ``value``

    Args:
        current: Current selection (a date, ``None`` or a ``RangeSelection``)
        value: Clicked date
        mode: Selection mode

    Returns:
        The new selection
    """
    if mode == SelectionMode.SINGLE:
        return value

    if not isinstance(current, RangeSelection):
        current = RangeSelection()

    if current.start is None or current.is_complete:
        selection = RangeSelection(start=value)
    elif value < current.start:
        selection = RangeSelection(start=value, end=current.start)
    else:
        selection = RangeSelection(start=current.start, end=value)

    logger.debug(f"Range selection: {current} -> {selection}")
    return selection


def selection_to_string(selection: Selection) -> Optional[str]:
    """ISO text for a selection; ranges use the ``start/end`` interval form."""
    if isinstance(selection, RangeSelection):
        if selection.is_empty:
            return None
        start = selection.start.isoformat() if selection.start else ""
        end = selection.end.isoformat() if selection.end else ""
        return f"{start}/{end}"
    if selection is None:
        return None
    return selection.isoformat()
