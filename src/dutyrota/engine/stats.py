"""
Duty Statistics
===============
Recount per-person totals from a schedule's existing assignments. Manual
overrides are kept as they are; the greedy pass is not re-run.
"""
from typing import Dict, Sequence

import pandas as pd

from dutyrota.models.person import Person
from dutyrota.models.schedule import DutyCount, Schedule
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.engine.stats")


def recount_assignments(schedule: Schedule, people: Sequence[Person]) -> Dict[int, DutyCount]:
    """
    Rebuild {total, holiday} per roster member by scanning assignments.

    Weeks assigned to ids not in the roster are ignored.
    """
    counts = {p.id: DutyCount() for p in people}
    for week in schedule.weeks:
        pid = week.assigned_person_id
        if pid is None or pid not in counts:
            continue
        counts[pid].total += 1
        if week.has_holiday:
            counts[pid].holiday += 1

    logger.debug(f"Recounted {len(schedule)} weeks for {len(counts)} people")
    return counts


def counts_to_dataframe(counts: Dict[int, DutyCount], people: Sequence[Person]) -> pd.DataFrame:
    """Per-person table in roster order."""
    rows = [
        {
            "Name": p.name,
            "Total": counts.get(p.id, DutyCount()).total,
            "Holiday": counts.get(p.id, DutyCount()).holiday,
        }
        for p in people
    ]
    return pd.DataFrame(rows, columns=["Name", "Total", "Holiday"])


def load_spread(counts: Dict[int, DutyCount]) -> int:
    """Max minus min total duties; 0 for an empty roster."""
    if not counts:
        return 0
    totals = [c.total for c in counts.values()]
    return max(totals) - min(totals)
