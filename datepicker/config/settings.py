"""Settings management using Pydantic for type validation and configuration."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, cast

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..engine.types import SelectionMode
from ..utils.logging import get_log_level

CONFIG_FILE_NAME = "config.yaml"
ENV_PREFIX = "DATEPICKER_"


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    # Console Logging
    console_level: str = Field(
        default="WARNING",
        description="Console log level: DEBUG, VERBOSE, INFO, WARNING, ERROR, CRITICAL",
    )
    console_colors: bool = Field(
        default=True, description="Enable colored console output (auto-detected)"
    )

    # File Logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_directory: Optional[str] = Field(default=None, description="Log directory")
    file_name: str = Field(default="datepicker.log", description="Log file name")

    # Third-party Libraries
    third_party_level: str = Field(
        default="WARNING", description="Log level for third-party libraries"
    )

    @field_validator("console_level", "third_party_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Normalize and check a level name.

        Raises:
            ValueError: If the level name is unknown
        """
        try:
            get_log_level(v)
        except AttributeError as e:
            raise ValueError(f"Unknown log level: {v}") from e
        return v.upper()


class DatePickerSettings(BaseSettings):
    """Application settings with environment variable and YAML support.

    Priority: explicit keyword arguments > environment (``DATEPICKER_*``) >
    ``config.yaml`` > defaults.
    """

    # Picker defaults
    locale: str = Field(default="en-US", description="Locale tag choosing the field pattern")
    time_zone: Optional[str] = Field(default=None, description="IANA time zone for 'today'")
    first_day_of_week: int = Field(default=0, ge=0, le=6, description="0=Monday ... 6=Sunday")
    fixed_weeks: bool = Field(default=False, description="Always render six-week grids")
    format_pattern: Optional[str] = Field(default=None, description="Field pattern override")
    selection_mode: SelectionMode = Field(
        default=SelectionMode.SINGLE, description="Default selection mode"
    )

    # File Paths
    config_dir: Path = Field(default_factory=lambda: Path.home() / ".config" / "datepicker")

    # Logging Configuration
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings, description="Logging settings"
    )

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    def __init__(self, **kwargs: Any) -> None:
        # Environment variables outrank YAML, so treat them like explicit arguments
        env_vars_set = {
            key[len(ENV_PREFIX) :].lower().split("__", 1)[0]
            for key in os.environ
            if key.upper().startswith(ENV_PREFIX)
        }
        super().__init__(**kwargs)
        self._load_yaml_config(explicit=set(kwargs) | env_vars_set)

    def _find_config_file(self) -> Optional[Path]:
        """Find config file, checking project directory first, then user config dir."""
        project_root = Path(__file__).parent.parent.parent
        project_config = project_root / "config" / CONFIG_FILE_NAME
        if project_config.exists():
            return project_config

        user_config = self.config_dir / CONFIG_FILE_NAME
        if user_config.exists():
            return user_config

        return None

    def _load_picker_config(self, config_data: dict, explicit: set[str]) -> None:
        """Load picker defaults from the ``picker`` YAML section."""
        picker = config_data.get("picker") or {}
        for key in (
            "locale",
            "time_zone",
            "first_day_of_week",
            "fixed_weeks",
            "format_pattern",
            "selection_mode",
        ):
            if key in picker and key not in explicit:
                setattr(self, key, picker[key])

    def _load_logging_config(self, config_data: dict, explicit: set[str]) -> None:
        """Load logging settings from the ``logging`` YAML section."""
        if "logging" in explicit or not isinstance(config_data.get("logging"), dict):
            return
        merged = {**self.logging.model_dump(), **config_data["logging"]}
        self.logging = LoggingSettings(**merged)

    def _load_yaml_config(self, explicit: set[str]) -> None:
        """Load configuration from YAML file if it exists."""
        config_file = self._find_config_file()
        if not config_file:
            return

        try:
            with config_file.open() as f:
                config_data = yaml.safe_load(f)

            if not config_data:
                return

            self._load_picker_config(config_data, explicit)
            self._load_logging_config(config_data, explicit)

        except Exception as e:
            # Don't fail if YAML loading fails, just continue with defaults/env vars
            logging.warning(f"Could not load YAML config from {config_file}: {e}")

    @property
    def config_file(self) -> Path:
        """Path to the user's YAML configuration file."""
        return self.config_dir / CONFIG_FILE_NAME


# Global settings management
_settings_instance: Optional[DatePickerSettings] = None


def get_settings() -> DatePickerSettings:
    """Get the global settings instance, creating it lazily if needed."""
    if globals()["_settings_instance"] is None:
        globals()["_settings_instance"] = DatePickerSettings()
    return cast(DatePickerSettings, globals()["_settings_instance"])


def reset_settings() -> None:
    """Reset the global settings instance (primarily for testing)."""
    globals()["_settings_instance"] = None
