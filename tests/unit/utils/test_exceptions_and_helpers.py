"""Unit tests for the exception hierarchy and terminal helpers."""

import subprocess
from unittest.mock import patch

from datepicker.utils.exceptions import (
    ConfigurationError,
    DatePickerError,
    InvariantViolation,
    TimezoneError,
)
from datepicker.utils.helpers import secure_clear_screen


class TestExceptions:
    """Tests for error types."""

    def test_hierarchy(self) -> None:
        """Test that every error derives from DatePickerError."""
        for error_type in (ConfigurationError, InvariantViolation, TimezoneError):
            assert issubclass(error_type, DatePickerError)

    def test_message_with_details(self) -> None:
        """Test string formatting with and without details."""
        assert str(DatePickerError("plain")) == "plain"
        assert str(DatePickerError("bad", {"key": 1})) == "bad: {'key': 1}"

    def test_configuration_error_fields(self) -> None:
        """Test that field name and value land in the details."""
        error = ConfigurationError("Unknown time zone", field_name="time_zone", field_value="X/Y")

        assert error.field_name == "time_zone"
        assert error.details == {"field_name": "time_zone", "field_value": "X/Y"}


class TestSecureClearScreen:
    """Tests for clearing the terminal."""

    def test_clear_success(self) -> None:
        """Test that a successful clear returns True."""
        with patch("datepicker.utils.helpers.subprocess.run") as mock_run:
            assert secure_clear_screen() is True

        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs["check"] is True

    def test_clear_failure_prints_newlines(self, capsys) -> None:
        """Test the newline fallback when the clear command is missing."""
        with patch("datepicker.utils.helpers.subprocess.run", side_effect=FileNotFoundError("clear")):
            assert secure_clear_screen() is False

        assert capsys.readouterr().out.count("\n") >= 50

    def test_clear_timeout(self) -> None:
        """Test that a hung clear command is treated as failure."""
        with patch(
            "datepicker.utils.helpers.subprocess.run",
            side_effect=subprocess.TimeoutExpired("clear", 5),
        ):
            assert secure_clear_screen() is False
