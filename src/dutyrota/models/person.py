"""Person model for roster members."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple

from dutyrota.utils.dates import to_utc_date


@dataclass(frozen=True)
class Leave:
    """Inclusive leave interval, stored as ISO strings."""
    start: str
    end: str

    def span(self) -> Optional[Tuple[date, date]]:
        """Parsed (start, end) pair, or None if either bound is malformed."""
        try:
            return to_utc_date(self.start), to_utc_date(self.end)
        except (ValueError, TypeError):
            return None

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}

    @classmethod
    def from_dict(cls, d: dict) -> "Leave":
        if not isinstance(d, dict):
            raise ValueError(f"Leave entry must be an object with start and end, got {d!r}")
        return cls(start=str(d.get("start", "")).strip(), end=str(d.get("end", "")).strip())


@dataclass
class Person:
    """A roster member and their leave."""

    id: int
    name: str
    leave: List[Leave] = field(default_factory=list)

    def __post_init__(self):
        self.name = str(self.name).strip()
        self.leave = [
            lv if isinstance(lv, Leave) else Leave.from_dict(lv)
            for lv in (self.leave or [])
        ]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "leave": [lv.to_dict() for lv in self.leave],
        }

    @classmethod
    def from_dict(cls, d: dict) -> "Person":
        """Create from dictionary."""
        if not isinstance(d, dict):
            raise ValueError(f"Person entry must be an object, got {d!r}")
        leave = d.get("leave") or []
        if not isinstance(leave, list):
            raise ValueError(f"Leave for person {d.get('id')} must be a list")
        return cls(
            id=int(d["id"]),
            name=d.get("name", ""),
            leave=[Leave.from_dict(lv) for lv in leave],
        )
