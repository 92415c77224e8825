"""Unit tests for field patterns, tokenization and the formatter cache."""

from datetime import date, datetime

import pytest

from datepicker.dates.formatting import (
    DateFormatter,
    FormatterCache,
    SegmentType,
    normalize_locale,
    pattern_for_locale,
    tokenize,
)


class TestTokenize:
    """Tests for pattern tokenization."""

    def test_date_pattern(self) -> None:
        """Test that separators become literal tokens."""
        tokens = tokenize("DD.MM.YYYY")

        assert [token.type for token in tokens] == [
            SegmentType.DAY,
            SegmentType.LITERAL,
            SegmentType.MONTH,
            SegmentType.LITERAL,
            SegmentType.YEAR,
        ]
        assert tokens[1].text == "."

    def test_time_pattern(self) -> None:
        """Test that 12-hour and day period tokens are recognized."""
        tokens = [token for token in tokenize("MM/DD/YYYY hh:mm a") if token.type != SegmentType.LITERAL]

        hour = tokens[3]
        assert hour.type == SegmentType.HOUR
        assert hour.twelve_hour is True
        assert tokens[4].type == SegmentType.MINUTE
        assert tokens[5].type == SegmentType.DAY_PERIOD

    def test_adjacent_literals_merge(self) -> None:
        """Test that multi-character separators form one literal."""
        tokens = tokenize("YYYY. MM. DD.")

        assert tokens[1].text == ". "
        assert tokens[-1].text == "."


class TestLocalePatterns:
    """Tests for locale to pattern resolution."""

    @pytest.mark.parametrize(
        ("locale", "pattern"),
        [
            ("en-US", "MM/DD/YYYY"),
            ("en_GB", "DD/MM/YYYY"),
            ("de-AT", "DD.MM.YYYY"),
            ("xx-YY", "MM/DD/YYYY"),
            (None, "MM/DD/YYYY"),
        ],
    )
    def test_pattern_for_locale(self, locale, pattern: str) -> None:
        """Test region, language and default fallbacks."""
        assert pattern_for_locale(locale) == pattern

    def test_normalize_locale(self) -> None:
        """Test tag normalization."""
        assert normalize_locale("EN_us") == "en-us"


class TestDateFormatter:
    """Tests for DateFormatter output."""

    def test_format_date(self, us_formatter: DateFormatter) -> None:
        """Test pattern rendering of a date."""
        assert us_formatter.format(date(2024, 3, 5)) == "03/05/2024"

    def test_format_twelve_hour(self) -> None:
        """Test 12-hour clock rendering."""
        formatter = DateFormatter("en-us", None, "YYYY-MM-DD hh:mm a")

        assert formatter.format(datetime(2024, 3, 5, 0, 7)) == "2024-03-05 12:07 AM"
        assert formatter.format(datetime(2024, 3, 5, 13, 30)) == "2024-03-05 01:30 PM"

    def test_two_digit_year(self) -> None:
        """Test YY rendering."""
        assert DateFormatter("en-us", None, "DD/MM/YY").format(date(2024, 3, 5)) == "05/03/24"

    def test_headings(self, us_formatter: DateFormatter) -> None:
        """Test month-year and weekday labels."""
        assert us_formatter.format_month_year(date(2024, 3, 1)) == "March 2024"
        assert us_formatter.format_weekday(date(2024, 3, 4)) == "Mon"
        assert us_formatter.format_weekday(date(2024, 3, 4), long=True) == "Monday"


class TestFormatterCache:
    """Tests for formatter caching."""

    def test_same_key_reuses_instance(self) -> None:
        """Test that equivalent options share one formatter."""
        cache = FormatterCache()

        first = cache.get("en-US", None)
        second = cache.get("en_us", "UTC")

        assert first is second
        assert len(cache) == 1

    def test_different_zone_creates_new_instance(self) -> None:
        """Test that the time zone is part of the key."""
        cache = FormatterCache()

        cache.get("en-US", None)
        cache.get("en-US", "Europe/Berlin")

        assert len(cache) == 2

    def test_clear(self) -> None:
        """Test that clearing drops every formatter."""
        cache = FormatterCache()
        first = cache.get("de-DE", None)

        cache.clear()

        assert len(cache) == 0
        assert cache.get("de-DE", None) is not first

    def test_explicit_pattern_overrides_locale(self) -> None:
        """Test that an explicit pattern wins over the locale default."""
        formatter = FormatterCache().get("de-DE", None, "YYYY-MM-DD")

        assert formatter.pattern == "YYYY-MM-DD"
