"""Calendar arithmetic on ``datetime.date`` values.

Dates are immutable and compare by calendar fields, so they are shared freely
between the engine, its collaborators and callers. Month and year steps go
through ``dateutil.relativedelta`` which clamps the day of month
(Jan 31 + 1 month -> Feb 28/29).
"""

import calendar
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

# Python weekday numbering: Monday=0 ... Sunday=6
MONDAY = 0
SUNDAY = 6
DAYS_PER_WEEK = 7
FIXED_WEEK_COUNT = 6


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping to the target month's last day."""
    return value + relativedelta(months=months)


def add_years(value: date, years: int) -> date:
    """Shift a date by whole years (Feb 29 clamps to Feb 28)."""
    return value + relativedelta(years=years)


def with_month(value: date, month: int) -> date:
    """Same day in another month of the same year, clamped to that month's length."""
    return value + relativedelta(month=month)


def with_year(value: date, year: int) -> date:
    """Same month and day in another year (Feb 29 clamps to Feb 28)."""
    return value + relativedelta(year=year)


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month."""
    return calendar.monthrange(year, month)[1]


def start_of_month(value: date) -> date:
    """First day of the month containing ``value``."""
    return value.replace(day=1)


def end_of_month(value: date) -> date:
    """Last day of the month containing ``value``."""
    return value.replace(day=days_in_month(value.year, value.month))


def start_of_week(value: date, first_day_of_week: int = MONDAY) -> date:
    """First day of the week containing ``value``.

    Args:
        value: Any date in the week
        first_day_of_week: Python weekday number the week starts on
    """
    offset = (value.weekday() - first_day_of_week) % DAYS_PER_WEEK
    return value - timedelta(days=offset)


def end_of_week(value: date, first_day_of_week: int = MONDAY) -> date:
    """Last day of the week containing ``value``."""
    return start_of_week(value, first_day_of_week) + timedelta(days=DAYS_PER_WEEK - 1)


def month_grid_bounds(
    month: date, first_day_of_week: int = MONDAY, fixed_weeks: bool = False
) -> tuple[date, date]:
    """Return the first and last date of a month grid padded to full weeks.

    With ``fixed_weeks`` the grid always spans six weeks so its height stays
    constant from month to month.
    """
    grid_start = start_of_week(start_of_month(month), first_day_of_week)
    if fixed_weeks:
        grid_end = grid_start + timedelta(days=FIXED_WEEK_COUNT * DAYS_PER_WEEK - 1)
    else:
        grid_end = end_of_week(end_of_month(month), first_day_of_week)
    return grid_start, grid_end


def week_rows(start: date, end: date) -> list[list[date]]:
    """Split a week-aligned span into rows of seven dates."""
    rows: list[list[date]] = []
    row: list[date] = []
    current = start
    while current <= end:
        row.append(current)
        if len(row) == DAYS_PER_WEEK:
            rows.append(row)
            row = []
        current += timedelta(days=1)
    if row:
        rows.append(row)
    return rows


def week_dates(reference: date, first_day_of_week: int = MONDAY) -> list[date]:
    """The seven dates of the week containing ``reference``."""
    first = start_of_week(reference, first_day_of_week)
    return [first + timedelta(days=i) for i in range(DAYS_PER_WEEK)]
