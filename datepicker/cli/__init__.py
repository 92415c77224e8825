"""Command-line entry point for the date picker demo."""

import argparse
import asyncio
import logging
from typing import Any, Optional

from ..config.settings import DatePickerSettings, get_settings
from ..display.console_renderer import ConsoleRenderer
from ..engine.config import PickerConfig
from ..engine.machine import DatePickerEngine
from ..ui.interactive import InteractiveController
from ..utils.exceptions import DatePickerError
from ..utils.logging import setup_logging_from_settings
from .parser import create_parser, parse_date

logger = logging.getLogger(__name__)


def apply_cli_overrides(settings: DatePickerSettings, args: argparse.Namespace) -> DatePickerSettings:
    """Copy command-line picker and logging options onto the settings."""
    for attr, setting in (
        ("locale", "locale"),
        ("time_zone", "time_zone"),
        ("first_day_of_week", "first_day_of_week"),
        ("fixed_weeks", "fixed_weeks"),
        ("pattern", "format_pattern"),
        ("mode", "selection_mode"),
    ):
        value = getattr(args, attr, None)
        if value is not None:
            setattr(settings, setting, value)

    if args.quiet:
        settings.logging.console_level = "ERROR"
    elif args.log_level:
        settings.logging.console_level = args.log_level
    if args.log_dir:
        settings.logging.file_enabled = True
        settings.logging.file_directory = args.log_dir
    if args.no_log_colors:
        settings.logging.console_colors = False
    return settings


def build_engine(settings: DatePickerSettings, args: argparse.Namespace) -> DatePickerEngine:
    """Create the engine from settings plus per-run options."""
    overrides: dict[str, Any] = {"readonly": args.readonly}
    if args.value is not None:
        overrides["value"] = args.value
    if args.min_date is not None:
        overrides["min"] = args.min_date
    if args.max_date is not None:
        overrides["max"] = args.max_date
    return DatePickerEngine(PickerConfig.from_settings(settings, **overrides))


def main_entry(argv: Optional[list[str]] = None) -> int:
    """Run the date picker from the command line.

    Returns:
        Process exit code
    """
    args = create_parser().parse_args(argv)
    renderer = ConsoleRenderer()

    try:
        settings = apply_cli_overrides(get_settings(), args)
        setup_logging_from_settings(settings.logging)
        engine = build_engine(settings, args)
    except (DatePickerError, ValueError) as e:
        print(renderer.render_error(str(e)))
        return 1

    if args.print_once:
        print(renderer.render(engine))
        return 0

    controller = InteractiveController(engine, renderer)
    try:
        asyncio.run(controller.start())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    if controller.last_value is not None:
        print(controller.last_value.value_as_string)
    return 0


__all__ = ["apply_cli_overrides", "build_engine", "create_parser", "main_entry", "parse_date"]
