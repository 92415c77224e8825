"""Command-line argument parsing for the date picker demo."""

import argparse
import logging
from datetime import date, datetime

from ..engine.types import SelectionMode

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["--value", "2024-03-15", "--print"])
        >>> args.value
        datetime.date(2024, 3, 15)
    """
    parser = argparse.ArgumentParser(
        description="Date Picker - keyboard-driven calendar with segmented date entry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                  # Interactive picker focused on today
  %(prog)s --value 2024-03-15 --print       # Render March 2024 once and exit
  %(prog)s --mode range --min 2024-01-10 --max 2024-01-20
  %(prog)s --locale de-DE --first-day-of-week 0
        """,
    )

    picker_group = parser.add_argument_group("picker", "Picker behaviour")
    picker_group.add_argument("--value", type=parse_date, help="Initial value (YYYY-MM-DD)")
    picker_group.add_argument(
        "--mode",
        choices=[mode.value for mode in SelectionMode],
        help="Selection mode (default: from settings)",
    )
    picker_group.add_argument("--min", dest="min_date", type=parse_date, help="Earliest selectable date")
    picker_group.add_argument("--max", dest="max_date", type=parse_date, help="Latest selectable date")
    picker_group.add_argument("--locale", help="Locale tag, e.g. en-US or de-DE")
    picker_group.add_argument("--time-zone", help="IANA time zone used for 'today'")
    picker_group.add_argument(
        "--first-day-of-week",
        type=int,
        choices=range(7),
        metavar="{0-6}",
        help="First grid column: 0=Monday ... 6=Sunday",
    )
    picker_group.add_argument(
        "--fixed-weeks", action="store_true", default=None, help="Always render six weeks"
    )
    picker_group.add_argument("--pattern", help="Field pattern, e.g. DD.MM.YYYY or MM/DD/YYYY HH:mm")
    picker_group.add_argument("--readonly", action="store_true", help="Allow navigation only")

    parser.add_argument(
        "--print",
        dest="print_once",
        action="store_true",
        help="Render the picker once and exit instead of running interactively",
    )

    logging_group = parser.add_argument_group("logging", "Logging configuration options")
    logging_group.add_argument("--log-level", choices=LOG_LEVELS, help="Console log level")
    logging_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show errors on console (sets console level to ERROR)",
    )
    logging_group.add_argument("--log-dir", help="Write a rotating log file to this directory")
    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console output"
    )

    return parser


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD command-line date.

    Raises:
        argparse.ArgumentTypeError: If the string is not a valid date
    """
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"Invalid date format: {date_str}. Use YYYY-MM-DD") from err


__all__ = [
    "create_parser",
    "parse_date",
]
