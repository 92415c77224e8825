"""Date utilities: calendar arithmetic, field patterns and formatting."""

from .formatting import (
    DEFAULT_LOCALE,
    DateFormatter,
    FormatterCache,
    FormatToken,
    SegmentType,
    pattern_for_locale,
    tokenize,
)
from .utils import (
    add_months,
    add_years,
    days_in_month,
    end_of_month,
    end_of_week,
    month_grid_bounds,
    start_of_month,
    start_of_week,
    week_dates,
    week_rows,
    with_month,
    with_year,
)

__all__ = [
    "DEFAULT_LOCALE",
    "DateFormatter",
    "FormatToken",
    "FormatterCache",
    "SegmentType",
    "add_months",
    "add_years",
    "days_in_month",
    "end_of_month",
    "end_of_week",
    "month_grid_bounds",
    "pattern_for_locale",
    "start_of_month",
    "start_of_week",
    "tokenize",
    "week_dates",
    "week_rows",
    "with_month",
    "with_year",
]
