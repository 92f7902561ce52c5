"""Week, schedule and load counter models."""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterator, List, Optional

import pandas as pd

from dutyrota.utils.dates import format_iso

from .assignment import UNASSIGNED, Assignment, AssignmentKind


@dataclass
class Week:
    """One duty week: ``start`` through ``end`` inclusive."""
    start: date
    end: date
    assignment: Assignment = UNASSIGNED
    has_holiday: bool = False
    is_blackout: bool = False
    notes: str = ""

    @property
    def assigned_person_id(self) -> Optional[int]:
        return self.assignment.person_id if self.assignment.is_person else None


@dataclass
class DutyCount:
    """Per-person duty totals exposed after a pass."""
    total: int = 0
    holiday: int = 0


@dataclass
class LoadCounter(DutyCount):
    """Running totals used inside one assignment pass."""
    last_assigned_index: float = float("-inf")

    def sort_key(self):
        return (self.total, self.holiday, self.last_assigned_index)

    def as_count(self) -> DutyCount:
        return DutyCount(total=self.total, holiday=self.holiday)


@dataclass
class Schedule:
    """Ordered duty weeks for one calendar year."""

    year: int
    weeks: List[Week] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.weeks)

    def __iter__(self) -> Iterator[Week]:
        return iter(self.weeks)

    def __getitem__(self, index: int) -> Week:
        return self.weeks[index]

    def to_dataframe(self, names: Optional[Dict[int, str]] = None) -> pd.DataFrame:
        """One row per week; ``names`` maps person ids to display names."""
        columns = ["week_start", "week_end", "assigned_to", "kind", "has_holiday", "is_blackout", "notes"]
        if not self.weeks:
            return pd.DataFrame(columns=columns)

        names = names or {}
        rows = []
        for w in self.weeks:
            if w.assignment.is_person:
                assigned = names.get(w.assignment.person_id, str(w.assignment.person_id))
            else:
                assigned = w.assignment.kind.label
            rows.append({
                "week_start": format_iso(w.start),
                "week_end": format_iso(w.end),
                "assigned_to": assigned,
                "kind": w.assignment.kind.value,
                "has_holiday": w.has_holiday,
                "is_blackout": w.is_blackout,
                "notes": w.notes,
            })
        return pd.DataFrame(rows, columns=columns)

    def summary(self) -> Dict[str, int]:
        """Counts of weeks by assignment kind."""
        out = {kind.value: 0 for kind in AssignmentKind}
        for w in self.weeks:
            out[w.assignment.kind.value] += 1
        out["weeks"] = len(self.weeks)
        out["holiday_weeks"] = sum(1 for w in self.weeks if w.has_holiday)
        return out
