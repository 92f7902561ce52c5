"""Scheduler settings and defaults."""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict

MAX_PEOPLE = 20
MAX_TITLE_LENGTH = 50
DEFAULT_TITLE = "Duty Rotation Scheduler"
DEFAULT_START_WEEKDAY = 2  # Tuesday
DEFAULT_START_MONTH = 0    # January
DEFAULT_COUNTRY = "US"
YEAR_CHOICES = 13  # Years offered around the current one


def _current_year() -> int:
    return date.today().year


@dataclass
class SchedulerSettings:
    """User-facing settings that drive schedule generation."""

    title: str = DEFAULT_TITLE
    year: int = field(default_factory=_current_year)
    start_month: int = DEFAULT_START_MONTH      # 0=January .. 11=December
    start_weekday: int = DEFAULT_START_WEEKDAY  # 0=Sunday .. 6=Saturday
    country_code: str = DEFAULT_COUNTRY

    def year_choices(self) -> range:
        first = _current_year() - YEAR_CHOICES // 2
        return range(first, first + YEAR_CHOICES)

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        return {
            "title": self.title,
            "year": self.year,
            "start_month": self.start_month,
            "start_weekday": self.start_weekday,
            "country_code": self.country_code,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "SchedulerSettings":
        """Create from dictionary, ignoring unknown keys."""
        cfg = cls()
        for key, value in d.items():
            if hasattr(cfg, key):
                setattr(cfg, key, value)
        return cfg
