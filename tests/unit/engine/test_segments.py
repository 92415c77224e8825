"""Unit tests for segment decomposition, digit entry and date synthesis."""

from datetime import date, datetime

import pytest

from datepicker.dates.formatting import DateFormatter, SegmentType
from datepicker.engine.segments import (
    AdvanceRule,
    apply_backspace,
    apply_digit,
    clear_buffers,
    decompose,
    editable_types,
    move_focus,
    segments_text,
    step_segment,
    to_date,
)
from datepicker.engine.types import FocusDirection

ALL_DATE_SEGMENTS = frozenset({SegmentType.MONTH, SegmentType.DAY, SegmentType.YEAR})


def _segment(segments, segment_type):
    return next(s for s in segments if s.type == segment_type)


class TestDecompose:
    """Tests for building segments from a date."""

    def test_decompose_full_date(self, us_formatter: DateFormatter) -> None:
        """Test that a fully valid date yields month, day and year segments in pattern order."""
        segments = decompose(date(2024, 3, 15), ALL_DATE_SEGMENTS, us_formatter)

        assert [s.type for s in segments] == [
            SegmentType.MONTH,
            SegmentType.LITERAL,
            SegmentType.DAY,
            SegmentType.LITERAL,
            SegmentType.YEAR,
        ]
        assert segments_text(segments) == "03/15/2024"
        assert _segment(segments, SegmentType.MONTH).value == 3
        assert _segment(segments, SegmentType.DAY).max == 31

    def test_decompose_without_valid_segments_shows_placeholders(
        self, us_formatter: DateFormatter
    ) -> None:
        """Test that segments not marked valid render as placeholders."""
        segments = decompose(date(2024, 3, 15), frozenset(), us_formatter)

        assert segments_text(segments) == "mm/dd/yyyy"
        month = _segment(segments, SegmentType.MONTH)
        assert month.is_placeholder is True
        assert month.value is None
        assert month.placeholder_value == 3

    def test_decompose_empty_uses_placeholder_date(self, us_formatter: DateFormatter) -> None:
        """Test that an empty field seeds placeholder values but keeps the day range open."""
        segments = decompose(None, frozenset(), us_formatter, placeholder=date(2024, 2, 10))

        day = _segment(segments, SegmentType.DAY)
        assert day.placeholder_value == 10
        assert day.max == 31

    def test_literals_are_not_editable(self, us_formatter: DateFormatter) -> None:
        """Test that only date fields accept focus."""
        segments = decompose(date(2024, 3, 15), ALL_DATE_SEGMENTS, us_formatter)

        assert editable_types(segments) == [SegmentType.MONTH, SegmentType.DAY, SegmentType.YEAR]

    def test_decompose_time_pattern(self) -> None:
        """Test that hour, minute and day period segments come from a datetime."""
        formatter = DateFormatter("en-us", None, "MM/DD/YYYY hh:mm a")
        valid = frozenset(
            {
                SegmentType.MONTH,
                SegmentType.DAY,
                SegmentType.YEAR,
                SegmentType.HOUR,
                SegmentType.MINUTE,
                SegmentType.DAY_PERIOD,
            }
        )

        segments = decompose(datetime(2024, 3, 15, 14, 30), valid, formatter)

        assert segments_text(segments) == "03/15/2024 02:30 PM"

    def test_era_always_shows_value(self) -> None:
        """Test that the era segment is fixed and not editable."""
        formatter = DateFormatter("en-us", None, "DD.MM.YYYY G")

        segments = decompose(date(2024, 3, 15), frozenset({SegmentType.DAY}), formatter)

        era = _segment(segments, SegmentType.ERA)
        assert era.text == "AD"
        assert era.is_editable is False


class TestToDate:
    """Tests for synthesizing a date from segments."""

    @pytest.mark.parametrize(
        "value",
        [date(2024, 2, 29), date(1999, 12, 31), date(2024, 1, 1), date(2023, 6, 15)],
    )
    def test_decompose_then_to_date_round_trips(
        self, us_formatter: DateFormatter, value: date
    ) -> None:
        """Test that a fully valid decomposition converts back to the same date."""
        segments = decompose(value, ALL_DATE_SEGMENTS, us_formatter)

        assert to_date(segments, ALL_DATE_SEGMENTS) == value

    def test_partial_input_returns_none(self, us_formatter: DateFormatter) -> None:
        """Test that a missing segment yields no date."""
        segments = decompose(date(2024, 3, 15), ALL_DATE_SEGMENTS, us_formatter)

        assert to_date(segments, frozenset({SegmentType.MONTH, SegmentType.DAY})) is None

    def test_two_digit_year_maps_to_current_century(self) -> None:
        """Test that YY years are read as 20YY."""
        formatter = DateFormatter("en-us", None, "DD/MM/YY")
        segments = decompose(date(2024, 7, 4), ALL_DATE_SEGMENTS, formatter)

        assert segments_text(segments) == "04/07/24"
        assert to_date(segments, ALL_DATE_SEGMENTS) == date(2024, 7, 4)

    def test_time_pattern_yields_datetime(self) -> None:
        """Test that a 12-hour PM time converts back to a 24-hour datetime."""
        formatter = DateFormatter("en-us", None, "MM/DD/YYYY hh:mm a")
        valid = frozenset(t.type for t in formatter.tokens if t.type != SegmentType.LITERAL)
        value = datetime(2024, 3, 15, 14, 30)

        segments = decompose(value, valid, formatter)

        assert to_date(segments, valid) == value


class TestApplyDigit:
    """Tests for digit entry and the auto-advance rule."""

    def _empty(self, formatter: DateFormatter):
        return decompose(None, frozenset(), formatter)

    def test_leading_zero_then_digit_advances(self, us_formatter: DateFormatter) -> None:
        """Test that "0" then "2" in the month segment sets February and advances."""
        first = apply_digit(self._empty(us_formatter), SegmentType.MONTH, "0")

        month = _segment(first.segments, SegmentType.MONTH)
        assert first.advance is False
        assert month.value is None
        assert month.buffer == "0"

        second = apply_digit(first.segments, SegmentType.MONTH, "2")

        month = _segment(second.segments, SegmentType.MONTH)
        assert second.advance is True
        assert month.value == 2
        assert month.text == "02"

    def test_ambiguous_digit_waits_for_more(self, us_formatter: DateFormatter) -> None:
        """Test that "1" in a month could still become 10-12 so focus stays."""
        result = apply_digit(self._empty(us_formatter), SegmentType.MONTH, "1")

        assert result.advance is False
        assert _segment(result.segments, SegmentType.MONTH).value == 1

    def test_unambiguous_digit_advances_immediately(self, us_formatter: DateFormatter) -> None:
        """Test that "5" in a month cannot be extended and advances."""
        result = apply_digit(self._empty(us_formatter), SegmentType.MONTH, "5")

        assert result.advance is True
        assert _segment(result.segments, SegmentType.MONTH).text == "05"

    def test_overflowing_buffer_restarts_with_new_digit(self, us_formatter: DateFormatter) -> None:
        """Test that "1" then "3" in a month becomes March rather than 13."""
        first = apply_digit(self._empty(us_formatter), SegmentType.MONTH, "1")
        second = apply_digit(first.segments, SegmentType.MONTH, "3")

        assert _segment(second.segments, SegmentType.MONTH).value == 3
        assert second.advance is True

    def test_four_digit_year_advances_after_fourth_digit(
        self, us_formatter: DateFormatter
    ) -> None:
        """Test that the year segment keeps focus until four digits are typed."""
        segments = self._empty(us_formatter)
        advances = []
        for digit in "2024":
            result = apply_digit(segments, SegmentType.YEAR, digit)
            segments = result.segments
            advances.append(result.advance)

        assert advances == [False, False, False, True]
        assert _segment(segments, SegmentType.YEAR).value == 2024

    def test_custom_advance_rule(self, us_formatter: DateFormatter) -> None:
        """Test that a per-segment rule can cap the digit count."""
        rules = {SegmentType.YEAR: AdvanceRule(max_digits=2)}
        first = apply_digit(self._empty(us_formatter), SegmentType.YEAR, "2", rules)
        second = apply_digit(first.segments, SegmentType.YEAR, "0", rules)

        assert first.advance is False
        assert second.advance is True
        assert _segment(second.segments, SegmentType.YEAR).value == 20

    def test_day_maximum_follows_entered_month(self, us_formatter: DateFormatter) -> None:
        """Test that in February 2023 a "3" cannot start a longer day and advances."""
        segments = decompose(date(2023, 2, 1), ALL_DATE_SEGMENTS, us_formatter)

        result = apply_digit(segments, SegmentType.DAY, "3")

        assert _segment(result.segments, SegmentType.DAY).max == 28
        assert result.advance is True

    def test_month_change_clamps_day(self, us_formatter: DateFormatter) -> None:
        """Test that switching 31 January to April clamps the day to 30."""
        segments = decompose(date(2024, 1, 31), ALL_DATE_SEGMENTS, us_formatter)

        result = apply_digit(segments, SegmentType.MONTH, "4")

        assert _segment(result.segments, SegmentType.DAY).value == 30

    def test_non_digit_is_ignored(self, us_formatter: DateFormatter) -> None:
        """Test that non-digit input leaves segments untouched."""
        segments = self._empty(us_formatter)

        result = apply_digit(segments, SegmentType.MONTH, "x")

        assert result.segments == segments
        assert result.advance is False


class TestBackspaceAndStep:
    """Tests for backspace, spinning and focus movement."""

    def test_backspace_removes_last_digit(self, us_formatter: DateFormatter) -> None:
        """Test that backspace on 12 leaves 1."""
        segments = decompose(date(2024, 12, 1), ALL_DATE_SEGMENTS, us_formatter)

        updated = apply_backspace(segments, SegmentType.MONTH)

        month = _segment(updated, SegmentType.MONTH)
        assert month.value == 1
        assert month.buffer == "1"

    def test_backspace_to_empty_restores_placeholder(self, us_formatter: DateFormatter) -> None:
        """Test that deleting the only digit returns the placeholder text."""
        segments = decompose(date(2024, 3, 1), ALL_DATE_SEGMENTS, us_formatter)

        updated = apply_backspace(segments, SegmentType.MONTH)

        month = _segment(updated, SegmentType.MONTH)
        assert month.is_placeholder is True
        assert month.text == "mm"

    def test_step_wraps_at_maximum(self, us_formatter: DateFormatter) -> None:
        """Test that spinning December up wraps to January."""
        segments = decompose(date(2024, 12, 1), ALL_DATE_SEGMENTS, us_formatter)

        updated = step_segment(segments, SegmentType.MONTH, 1)

        assert _segment(updated, SegmentType.MONTH).value == 1

    def test_step_on_placeholder_starts_from_placeholder_value(
        self, us_formatter: DateFormatter
    ) -> None:
        """Test that spinning an empty segment starts at the placeholder date's value."""
        segments = decompose(None, frozenset(), us_formatter, placeholder=date(2024, 6, 10))

        updated = step_segment(segments, SegmentType.MONTH, 1)

        assert _segment(updated, SegmentType.MONTH).value == 6

    def test_step_toggles_day_period(self) -> None:
        """Test that spinning AM gives PM."""
        formatter = DateFormatter("en-us", None, "hh:mm a MM/DD/YYYY")
        valid = frozenset(t.type for t in formatter.tokens if t.type != SegmentType.LITERAL)
        segments = decompose(datetime(2024, 3, 15, 9, 0), valid, formatter)

        updated = step_segment(segments, SegmentType.DAY_PERIOD, 1)

        assert _segment(updated, SegmentType.DAY_PERIOD).value == "PM"

    def test_clear_buffers_commits_value(self, us_formatter: DateFormatter) -> None:
        """Test that a half-typed value keeps its number once buffers are cleared."""
        result = apply_digit(decompose(None, frozenset(), us_formatter), SegmentType.MONTH, "1")

        cleared = clear_buffers(result.segments)

        month = _segment(cleared, SegmentType.MONTH)
        assert month.buffer == ""
        assert month.text == "01"

    def test_move_focus_clamps_and_wraps(self, us_formatter: DateFormatter) -> None:
        """Test that focus stops at the last segment unless wrapping is requested."""
        segments = decompose(date(2024, 3, 15), ALL_DATE_SEGMENTS, us_formatter)

        assert move_focus(segments, SegmentType.MONTH, FocusDirection.NEXT) == SegmentType.DAY
        assert move_focus(segments, SegmentType.YEAR, FocusDirection.NEXT) == SegmentType.YEAR
        assert (
            move_focus(segments, SegmentType.YEAR, FocusDirection.NEXT, wrap=True)
            == SegmentType.MONTH
        )
