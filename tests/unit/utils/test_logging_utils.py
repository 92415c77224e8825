"""Unit tests for logging setup."""

import logging
from pathlib import Path

import pytest

from datepicker.config.settings import LoggingSettings
from datepicker.utils.logging import (
    VERBOSE,
    AutoColoredFormatter,
    get_log_level,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo handler and level changes made by setup_logging."""
    logger = logging.getLogger("datepicker")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestLogLevels:
    """Tests for level name handling."""

    def test_verbose_level(self) -> None:
        """Test the custom VERBOSE level."""
        assert get_log_level("verbose") == VERBOSE == 15
        assert logging.getLevelName(VERBOSE) == "VERBOSE"

    def test_standard_level(self) -> None:
        """Test standard names resolve through logging."""
        assert get_log_level("warning") == logging.WARNING

    def test_unknown_level(self) -> None:
        """Test that unknown names raise AttributeError."""
        with pytest.raises(AttributeError):
            get_log_level("LOUD")

    def test_logger_verbose_method(self, caplog) -> None:
        """Test that loggers gain a verbose() method."""
        logger = get_logger("tests")
        with caplog.at_level(VERBOSE, logger="datepicker"):
            logger.verbose("chatty detail")

        assert "chatty detail" in caplog.text
        assert logger.name == "datepicker.tests"


class TestSetupLogging:
    """Tests for handler configuration."""

    def test_console_handler(self) -> None:
        """Test that setup installs one console handler at the requested level."""
        logger = setup_logging("DEBUG", enable_colors=False)

        assert logger.name == "datepicker"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path: Path) -> None:
        """Test that a rotating file handler is added when requested."""
        logger = setup_logging("INFO", log_file="picker.log", log_dir=tmp_path / "logs")

        assert len(logger.handlers) == 2
        assert (tmp_path / "logs" / "picker.log").exists()

    def test_invalid_level_falls_back_to_info(self) -> None:
        """Test that an unknown level name does not break setup."""
        assert setup_logging("LOUD").level == logging.INFO

    def test_from_settings(self, tmp_path: Path) -> None:
        """Test configuration from LoggingSettings."""
        settings = LoggingSettings(
            console_level="ERROR", file_enabled=True, file_directory=str(tmp_path)
        )

        logger = setup_logging_from_settings(settings)

        assert logger.level == logging.ERROR
        assert (tmp_path / "datepicker.log").exists()


class TestAutoColoredFormatter:
    """Tests for colored output."""

    def test_colors_disabled(self) -> None:
        """Test that disabling colors leaves level names untouched."""
        formatter = AutoColoredFormatter("%(levelname)s %(message)s", enable_colors=False)
        record = logging.LogRecord("datepicker", logging.ERROR, __file__, 1, "boom", None, None)

        assert formatter.format(record) == "ERROR boom"
