"""Grid navigation: focus movement, paging and visible range computation."""

import logging
from datetime import date, timedelta
from typing import Optional

from ..dates.utils import (
    MONDAY,
    add_months,
    add_years,
    end_of_month,
    end_of_week,
    month_grid_bounds,
    start_of_month,
    start_of_week,
    week_rows,
)
from .types import Bounds, Direction, PageDirection, VisibleRange

logger = logging.getLogger(__name__)

_DAY_OFFSETS = {
    Direction.LEFT: -1,
    Direction.RIGHT: 1,
    Direction.UP: -7,
    Direction.DOWN: 7,
}


class GridNavigator:
    """Computes focus moves and visible ranges for a month grid.

    Focus is never clamped to bounds here: it may land on a disabled date.
    Whether a date can be selected is a cell-state concern.
    """

    def __init__(self, first_day_of_week: int = MONDAY, fixed_weeks: bool = False):
        """Initialize the navigator.

        Args:
            first_day_of_week: Python weekday number the grid starts on (0=Monday)
            fixed_weeks: Always lay the grid out as six weeks
        """
        self.first_day_of_week = first_day_of_week
        self.fixed_weeks = fixed_weeks

    def move(self, current: date, direction: Direction, bounds: Optional[Bounds] = None) -> date:
        """Step focus one day (left/right) or one week (up/down).

        Args:
            current: Currently focused date
            direction: Arrow direction
            bounds: Accepted for symmetry with paging; the result is not clamped

        Returns:
            New focused date
        """
        target = current + timedelta(days=_DAY_OFFSETS[direction])
        logger.debug(f"Grid move {direction.value}: {current} -> {target}")
        return target

    def page(self, current: date, direction: PageDirection, larger: bool = False) -> date:
        """Step focus one month, or one year when ``larger``.

        The day of month is preserved and clamped to the target month's length.
        """
        step = 1 if direction == PageDirection.NEXT else -1
        target = add_years(current, step) if larger else add_months(current, step)
        logger.debug(f"Page {direction.value} (larger={larger}): {current} -> {target}")
        return target

    def visible_range_for(self, focused: date) -> VisibleRange:
        """Visible range for the month containing ``focused``."""
        grid_start, grid_end = month_grid_bounds(focused, self.first_day_of_week, self.fixed_weeks)
        return VisibleRange(start=grid_start, end=grid_end, month=start_of_month(focused))

    def repage(self, focused: date, visible: VisibleRange) -> VisibleRange:
        """Recentre the visible range on ``focused``'s month if it fell outside.

        Returns:
            ``visible`` unchanged when it already shows ``focused``'s month
        """
        if visible.contains(focused):
            return visible
        repaged = self.visible_range_for(focused)
        logger.debug(f"Repaged visible range to {repaged.month:%B %Y} for focus {focused}")
        return repaged

    def page_visible(self, visible: VisibleRange, direction: PageDirection) -> VisibleRange:
        """The visible range one month before or after ``visible``."""
        step = 1 if direction == PageDirection.NEXT else -1
        return self.visible_range_for(add_months(visible.month, step))

    def is_range_at_boundary(
        self, visible: VisibleRange, bounds: Bounds, direction: PageDirection
    ) -> bool:
        """Whether paging in ``direction`` would show a month entirely outside bounds.

        Used to disable the previous/next triggers.
        """
        if direction == PageDirection.PREV:
            if bounds.min is None:
                return False
            previous_month_end = visible.month - timedelta(days=1)
            return previous_month_end < bounds.min

        if bounds.max is None:
            return False
        next_month_start = end_of_month(visible.month) + timedelta(days=1)
        return next_month_start > bounds.max

    def weeks(self, visible: VisibleRange) -> list[list[date]]:
        """Rows of seven dates covering the visible grid."""
        return week_rows(visible.start, visible.end)

    def start_of_week(self, current: date) -> date:
        """First day of the week containing ``current``."""
        return start_of_week(current, self.first_day_of_week)

    def end_of_week(self, current: date) -> date:
        """Last day of the week containing ``current``."""
        return end_of_week(current, self.first_day_of_week)

    def __repr__(self) -> str:
        return (
            f"GridNavigator(first_day_of_week={self.first_day_of_week!r}, "
            f"fixed_weeks={self.fixed_weeks!r})"
        )
