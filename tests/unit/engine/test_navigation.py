"""Unit tests for GridNavigator focus movement and visible range paging."""

from datetime import date, timedelta

import pytest

from datepicker.dates.utils import add_months
from datepicker.engine.navigation import GridNavigator
from datepicker.engine.types import Bounds, Direction, PageDirection


class TestVisibleRange:
    """Tests for visible range computation."""

    def test_monday_start_grid(self) -> None:
        """Test that January 2024 with Monday first spans Jan 1 to Feb 4."""
        visible = GridNavigator(first_day_of_week=0).visible_range_for(date(2024, 1, 15))

        assert visible.start == date(2024, 1, 1)
        assert visible.end == date(2024, 2, 4)
        assert visible.month == date(2024, 1, 1)

    def test_sunday_start_grid(self) -> None:
        """Test that a Sunday-first grid pads back into December."""
        visible = GridNavigator(first_day_of_week=6).visible_range_for(date(2024, 1, 15))

        assert visible.start == date(2023, 12, 31)
        assert visible.end == date(2024, 2, 3)

    def test_fixed_weeks_spans_six_weeks(self) -> None:
        """Test that fixed_weeks always lays out 42 days."""
        navigator = GridNavigator(fixed_weeks=True)

        visible = navigator.visible_range_for(date(2024, 2, 1))

        assert visible.end - visible.start == timedelta(days=41)
        assert len(navigator.weeks(visible)) == 6

    @pytest.mark.parametrize("first_day_of_week", range(7))
    def test_grid_starts_on_first_day_of_week(self, first_day_of_week: int) -> None:
        """Test that every month's grid starts on the configured weekday and is ordered."""
        navigator = GridNavigator(first_day_of_week=first_day_of_week)
        month = date(2023, 1, 1)
        for _ in range(24):
            visible = navigator.visible_range_for(month)
            assert visible.start <= visible.end
            assert visible.start.weekday() == first_day_of_week
            assert (visible.end - visible.start).days % 7 == 6
            month = add_months(month, 1)

    def test_weeks_are_rows_of_seven(self) -> None:
        """Test that weeks split the grid into seven-day rows."""
        navigator = GridNavigator()

        weeks = navigator.weeks(navigator.visible_range_for(date(2024, 1, 15)))

        assert len(weeks) == 5
        assert all(len(week) == 7 for week in weeks)
        assert weeks[0][0] == date(2024, 1, 1)

    def test_contains_uses_displayed_month(self) -> None:
        """Test that padding days are not inside the visible month."""
        visible = GridNavigator().visible_range_for(date(2024, 1, 15))

        assert visible.contains(date(2024, 1, 31))
        assert not visible.contains(date(2024, 2, 4))


class TestMove:
    """Tests for arrow and page movement."""

    @pytest.mark.parametrize(
        ("direction", "expected"),
        [
            (Direction.LEFT, date(2024, 1, 14)),
            (Direction.RIGHT, date(2024, 1, 16)),
            (Direction.UP, date(2024, 1, 8)),
            (Direction.DOWN, date(2024, 1, 22)),
        ],
    )
    def test_arrow_moves(self, direction: Direction, expected: date) -> None:
        """Test that arrows move one day or one week."""
        assert GridNavigator().move(date(2024, 1, 15), direction) == expected

    def test_move_is_not_clamped_to_bounds(self) -> None:
        """Test that focus may land outside min/max."""
        bounds = Bounds(min=date(2024, 1, 10), max=date(2024, 1, 20))

        assert GridNavigator().move(date(2024, 1, 10), Direction.LEFT, bounds) == date(2024, 1, 9)

    def test_arrow_down_across_month_repages(self) -> None:
        """Test that moving from Jan 28 to Feb 4 repages to February."""
        navigator = GridNavigator(first_day_of_week=0)
        visible = navigator.visible_range_for(date(2024, 1, 28))

        focused = navigator.move(date(2024, 1, 28), Direction.DOWN)
        repaged = navigator.repage(focused, visible)

        assert focused == date(2024, 2, 4)
        assert repaged.month == date(2024, 2, 1)

    def test_repage_keeps_range_when_contained(self) -> None:
        """Test that repage returns the same range when the focus is still visible."""
        navigator = GridNavigator()
        visible = navigator.visible_range_for(date(2024, 1, 15))

        assert navigator.repage(date(2024, 1, 20), visible) is visible

    def test_page_clamps_day_of_month(self) -> None:
        """Test that Jan 31 plus a month lands on Feb 29 in a leap year."""
        assert GridNavigator().page(date(2024, 1, 31), PageDirection.NEXT) == date(2024, 2, 29)

    def test_larger_page_moves_a_year(self) -> None:
        """Test that a larger page moves by a year, clamping Feb 29."""
        assert GridNavigator().page(date(2024, 2, 29), PageDirection.NEXT, larger=True) == date(
            2025, 2, 28
        )

    def test_page_visible(self) -> None:
        """Test that paging the visible range moves one month."""
        navigator = GridNavigator()
        visible = navigator.visible_range_for(date(2024, 1, 15))

        assert navigator.page_visible(visible, PageDirection.PREV).month == date(2023, 12, 1)

    def test_start_and_end_of_week(self) -> None:
        """Test week boundaries for a Sunday-first navigator."""
        navigator = GridNavigator(first_day_of_week=6)

        assert navigator.start_of_week(date(2024, 1, 17)) == date(2024, 1, 14)
        assert navigator.end_of_week(date(2024, 1, 17)) == date(2024, 1, 20)


class TestRangeBoundary:
    """Tests for previous/next trigger boundaries."""

    def test_prev_blocked_when_previous_month_before_min(self) -> None:
        """Test that paging back from January is blocked by min=Jan 10."""
        navigator = GridNavigator()
        visible = navigator.visible_range_for(date(2024, 1, 15))
        bounds = Bounds(min=date(2024, 1, 10), max=date(2024, 1, 20))

        assert navigator.is_range_at_boundary(visible, bounds, PageDirection.PREV) is True
        assert navigator.is_range_at_boundary(visible, bounds, PageDirection.NEXT) is True

    def test_unbounded_never_at_boundary(self) -> None:
        """Test that missing bounds never block paging."""
        navigator = GridNavigator()
        visible = navigator.visible_range_for(date(2024, 1, 15))

        assert navigator.is_range_at_boundary(visible, Bounds(), PageDirection.PREV) is False
        assert navigator.is_range_at_boundary(visible, Bounds(), PageDirection.NEXT) is False

    def test_partial_month_in_bounds_is_reachable(self) -> None:
        """Test that a month overlapping min stays reachable."""
        navigator = GridNavigator()
        visible = navigator.visible_range_for(date(2024, 2, 15))
        bounds = Bounds(min=date(2024, 1, 31))

        assert navigator.is_range_at_boundary(visible, bounds, PageDirection.PREV) is False
