"""Public holiday records supplied by the holiday provider."""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from dutyrota.utils.dates import to_utc_date


@dataclass(frozen=True)
class Holiday:
    """A named single calendar date, kept as the provider's ISO string."""
    date: str
    name: str = ""

    @property
    def day(self) -> Optional[date]:
        """Parsed date, or None if the provider sent something malformed."""
        try:
            return to_utc_date(self.date)
        except (ValueError, TypeError):
            return None

    def label(self) -> str:
        return f"{self.date}: {self.name}"

    def to_dict(self) -> dict:
        return {"date": self.date, "name": self.name}

    @classmethod
    def from_dict(cls, d: dict) -> "Holiday":
        return cls(date=str(d.get("date", "")).strip(), name=str(d.get("name", "")))
