"""Unit tests for PickerConfig validation."""

from datetime import date

import pytest

from datepicker.config.settings import DatePickerSettings
from datepicker.dates.formatting import SegmentType
from datepicker.engine.config import PickerConfig
from datepicker.engine.segments import AdvanceRule
from datepicker.engine.types import Bounds, SelectionMode
from datepicker.utils.exceptions import ConfigurationError


class TestPickerConfigValidation:
    """Tests for construction-time validation."""

    def test_defaults(self) -> None:
        """Test default configuration values."""
        config = PickerConfig()

        assert config.selection_mode == SelectionMode.SINGLE
        assert config.locale == "en-US"
        assert config.time_zone is None
        assert config.first_day_of_week == 0
        assert config.bounds == Bounds()

    def test_min_after_max_raises(self) -> None:
        """Test that inverted bounds are rejected."""
        with pytest.raises(ConfigurationError):
            PickerConfig(min=date(2024, 1, 20), max=date(2024, 1, 10))

    def test_unknown_time_zone_raises(self) -> None:
        """Test that unknown zones are rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            PickerConfig(time_zone="Not/AZone")

        assert exc_info.value.field_name == "time_zone"

    def test_pattern_missing_segment_raises(self) -> None:
        """Test that a pattern without a year is rejected."""
        with pytest.raises(ConfigurationError) as exc_info:
            PickerConfig(format_pattern="MM/DD")

        assert exc_info.value.details["missing"] == ["year"]

    def test_valid_pattern_and_rules(self) -> None:
        """Test that explicit patterns and advance rules are accepted."""
        config = PickerConfig(
            format_pattern="DD.MM.YYYY",
            advance_rules={SegmentType.YEAR: AdvanceRule(max_digits=2)},
        )

        assert config.advance_rules[SegmentType.YEAR].max_digits == 2

    def test_mode_from_string(self) -> None:
        """Test that the selection mode accepts its string value."""
        assert PickerConfig(selection_mode="range").selection_mode == SelectionMode.RANGE


class TestPickerConfigFromSettings:
    """Tests for seeding configuration from settings."""

    def test_settings_values_copied(self) -> None:
        """Test that settings provide picker defaults."""
        settings = DatePickerSettings(locale="de-DE", first_day_of_week=6, fixed_weeks=True)

        config = PickerConfig.from_settings(settings)

        assert config.locale == "de-DE"
        assert config.first_day_of_week == 6
        assert config.fixed_weeks is True

    def test_overrides_win(self) -> None:
        """Test that keyword overrides take precedence over settings."""
        settings = DatePickerSettings(locale="de-DE")

        config = PickerConfig.from_settings(settings, locale="fr-FR", readonly=True)

        assert config.locale == "fr-FR"
        assert config.readonly is True
