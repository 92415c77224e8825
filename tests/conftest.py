"""Shared fixtures for the date picker test suite."""

import os
from datetime import date
from typing import Any
from unittest.mock import patch

import pytest

from datepicker.config.settings import reset_settings
from datepicker.dates.formatting import DateFormatter
from datepicker.engine.config import PickerConfig
from datepicker.engine.machine import DatePickerEngine

# Monday
FIXED_TODAY = date(2024, 1, 15)


@pytest.fixture(autouse=True)
def fixed_today():
    """Pin "today" so grid flags and default focus are deterministic."""
    with patch("datepicker.engine.machine.today_in", return_value=FIXED_TODAY) as mock_today:
        yield mock_today


@pytest.fixture(autouse=True)
def clean_environment():
    """Keep DATEPICKER_* variables and the settings singleton out of every test."""
    picker_vars = {key: value for key, value in os.environ.items() if key.startswith("DATEPICKER_")}
    for key in picker_vars:
        del os.environ[key]
    reset_settings()
    yield
    reset_settings()
    os.environ.update(picker_vars)


@pytest.fixture
def us_formatter() -> DateFormatter:
    """Formatter for the MM/DD/YYYY pattern."""
    return DateFormatter("en-us", None, "MM/DD/YYYY")


@pytest.fixture
def make_engine():
    """Factory building an engine from PickerConfig keyword arguments."""

    def _make(**options: Any) -> DatePickerEngine:
        return DatePickerEngine(PickerConfig(**options))

    return _make


@pytest.fixture
def engine(make_engine) -> DatePickerEngine:
    """Single-mode engine with default configuration."""
    return make_engine()
