"""Per-engine configuration validated with Pydantic."""

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..dates.formatting import DEFAULT_LOCALE, SegmentType, tokenize
from ..timezone import is_valid_timezone
from ..utils.exceptions import ConfigurationError
from .segments import AdvanceRule
from .types import Bounds, RangeSelection, SelectionMode

if TYPE_CHECKING:
    from ..config.settings import DatePickerSettings

logger = logging.getLogger(__name__)

REQUIRED_PATTERN_SEGMENTS = frozenset({SegmentType.DAY, SegmentType.MONTH, SegmentType.YEAR})


class PickerConfig(BaseModel):
    """Configuration of one date picker engine.

    Attributes:
        selection_mode: Single value or start/end range
        min: Earliest selectable date (inclusive)
        max: Latest selectable date (inclusive)
        value: Initial selection
        focused_value: Initially focused date (defaults to the value or today)
        locale: Locale tag choosing the field pattern
        time_zone: IANA zone used for "today" (None means UTC)
        first_day_of_week: Python weekday the grid starts on (0=Monday ... 6=Sunday)
        fixed_weeks: Always render six weeks
        disabled: Engine ignores every event
        readonly: Navigation works, selection does not change
        is_date_unavailable: Predicate marking individual dates unavailable
        format_pattern: Explicit field pattern overriding the locale default
        advance_rules: Per-segment digit-count rules for auto-advance

    Example:
        >>> config = PickerConfig(min=date(2024, 1, 10), max=date(2024, 1, 20))
        >>> config.bounds.contains(date(2024, 1, 15))
        True
    """

    selection_mode: SelectionMode = Field(default=SelectionMode.SINGLE, description="Selection mode")
    min: Optional[date] = Field(default=None, description="Earliest selectable date")
    max: Optional[date] = Field(default=None, description="Latest selectable date")
    value: Optional[Union[datetime, date, RangeSelection]] = Field(
        default=None, description="Initial value"
    )
    focused_value: Optional[date] = Field(default=None, description="Initially focused date")
    locale: str = Field(default=DEFAULT_LOCALE, description="Locale tag")
    time_zone: Optional[str] = Field(default=None, description="IANA time zone name")
    first_day_of_week: int = Field(default=0, ge=0, le=6, description="0=Monday ... 6=Sunday")
    fixed_weeks: bool = Field(default=False, description="Always render six weeks")
    disabled: bool = Field(default=False, description="Ignore all events")
    readonly: bool = Field(default=False, description="Allow navigation only")
    is_date_unavailable: Optional[Callable[[date], bool]] = Field(
        default=None, description="Predicate for unavailable dates"
    )
    format_pattern: Optional[str] = Field(default=None, description="Field pattern override")
    advance_rules: dict[SegmentType, AdvanceRule] = Field(
        default_factory=dict, description="Per-segment auto-advance rules"
    )

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    @field_validator("time_zone")
    @classmethod
    def validate_time_zone(cls, v: Optional[str]) -> Optional[str]:
        """Reject zone names the timezone service cannot resolve.

        Raises:
            ConfigurationError: If the zone is unknown
        """
        if v is not None and not is_valid_timezone(v):
            raise ConfigurationError("Unknown time zone", field_name="time_zone", field_value=v)
        return v

    @field_validator("format_pattern")
    @classmethod
    def validate_format_pattern(cls, v: Optional[str]) -> Optional[str]:
        """Require day, month and year segments in an explicit pattern.

        Raises:
            ConfigurationError: If a required segment is missing
        """
        if v is None:
            return v
        present = {token.type for token in tokenize(v)}
        missing = REQUIRED_PATTERN_SEGMENTS - present
        if missing:
            raise ConfigurationError(
                "Field pattern must contain day, month and year",
                field_name="format_pattern",
                field_value=v,
                details={"missing": sorted(segment.value for segment in missing)},
            )
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "PickerConfig":
        """Fail construction when ``min`` is after ``max``.

        Raises:
            ConfigurationError: If the bounds are inverted
        """
        Bounds(min=self.min, max=self.max)
        return self

    @property
    def bounds(self) -> Bounds:
        """Inclusive min/max as a ``Bounds`` value."""
        return Bounds(min=self.min, max=self.max)

    @classmethod
    def from_settings(cls, settings: "DatePickerSettings", **overrides: Any) -> "PickerConfig":
        """Seed a configuration from application settings.

        Args:
            settings: Loaded application settings
            **overrides: Field values taking precedence over the settings
        """
        defaults: dict[str, Any] = {
            "locale": settings.locale,
            "time_zone": settings.time_zone,
            "first_day_of_week": settings.first_day_of_week,
            "fixed_weeks": settings.fixed_weeks,
            "format_pattern": settings.format_pattern,
            "selection_mode": settings.selection_mode,
        }
        defaults.update(overrides)
        logger.debug(f"Building picker config from settings with overrides: {sorted(overrides)}")
        return cls(**defaults)
