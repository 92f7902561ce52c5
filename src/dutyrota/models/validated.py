"""
Pydantic Validated Settings
===========================
Strict validation for settings arriving from storage or the command line.

Usage:
    from dutyrota.models.validated import ValidatedSettings

    settings = ValidatedSettings(year=2025, start_weekday=2).to_dataclass()
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .settings import (
    DEFAULT_COUNTRY,
    DEFAULT_START_MONTH,
    DEFAULT_START_WEEKDAY,
    DEFAULT_TITLE,
    MAX_TITLE_LENGTH,
    SchedulerSettings,
    _current_year,
)


class ValidatedSettings(BaseModel):
    """
    Pydantic-validated scheduler settings.

    Can be converted to/from the dataclass SchedulerSettings.
    """
    model_config = ConfigDict(validate_assignment=True)

    title: str = Field(default=DEFAULT_TITLE, min_length=1, max_length=MAX_TITLE_LENGTH)
    # Upper bound leaves room for the following year's blackout end
    year: int = Field(default_factory=_current_year, ge=1, le=9998)
    start_month: int = Field(default=DEFAULT_START_MONTH, ge=0, le=11)
    start_weekday: int = Field(default=DEFAULT_START_WEEKDAY, ge=0, le=6)
    country_code: str = Field(default=DEFAULT_COUNTRY, min_length=2, max_length=2)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be blank")
        return v

    @field_validator("country_code")
    @classmethod
    def upper_country(cls, v: str) -> str:
        return v.upper()

    def to_dataclass(self) -> SchedulerSettings:
        return SchedulerSettings(
            title=self.title,
            year=self.year,
            start_month=self.start_month,
            start_weekday=self.start_weekday,
            country_code=self.country_code,
        )

    @classmethod
    def from_dataclass(cls, settings: SchedulerSettings) -> "ValidatedSettings":
        return cls(**settings.to_dict())
