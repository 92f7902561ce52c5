"""
Fair Assignment Engine
======================
Greedy chronological assignment of duty weeks.

Each non-blackout week goes to the available person with the lowest
(total duties, holiday duties, last assigned week index). Remaining ties
resolve by roster order, so the first week of a fresh run always goes to
the first available roster member.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Sequence

from dutyrota.models.assignment import UNAVAILABLE, Assignment
from dutyrota.models.holiday import Holiday
from dutyrota.models.person import Person
from dutyrota.models.schedule import DutyCount, LoadCounter, Schedule
from dutyrota.models.settings import SchedulerSettings
from dutyrota.utils.logging_setup import PassLogger

from .generator import generate_weeks
from .overlap import person_on_leave, week_has_holiday

log = PassLogger("dutyrota.engine.assignment")


@dataclass
class AssignmentResult:
    """Filled-in schedule plus the per-person counts from the pass."""
    schedule: Schedule
    counts: Dict[int, DutyCount] = field(default_factory=dict)


def pick_person(available: Sequence[Person], counters: Dict[int, LoadCounter]) -> Person:
    """Least-loaded candidate; ``min`` keeps the first of equal keys."""
    return min(available, key=lambda p: counters[p.id].sort_key())


def assign_people_to_weeks(
    schedule: Schedule,
    people: Sequence[Person],
    holidays: Optional[Iterable[Holiday]] = None,
) -> AssignmentResult:
    """
    Assign a person (or ``UNAVAILABLE``) to every non-blackout week.

    The input schedule is not modified. When ``holidays`` is given the
    holiday flag of each assigned week is re-derived from it; otherwise the
    week's existing ``has_holiday`` flag is used.
    """
    holiday_list: Optional[List[Holiday]] = list(holidays) if holidays is not None else None
    roster = list(people)
    counters: Dict[int, LoadCounter] = {p.id: LoadCounter() for p in roster}

    log.phase(f"Assigning {len(schedule)} weeks across {len(roster)} people")
    weeks = []
    for index, week in enumerate(schedule.weeks):
        if week.is_blackout:
            weeks.append(replace(week))
            continue

        available = [p for p in roster if not person_on_leave(p, week.start, week.end)]
        if not available:
            log.week(week.start, "no one available")
            weeks.append(replace(week, assignment=UNAVAILABLE))
            continue

        chosen = pick_person(available, counters)
        has_holiday = week.has_holiday
        if holiday_list is not None:
            has_holiday = week_has_holiday(week.start, week.end, holiday_list)

        counter = counters[chosen.id]
        counter.total += 1
        if has_holiday:
            counter.holiday += 1
        counter.last_assigned_index = index

        log.week(week.start, f"{chosen.name} (total={counter.total}, holiday={counter.holiday})")
        weeks.append(replace(week, assignment=Assignment.for_person(chosen.id), has_holiday=has_holiday))

    counts = {pid: c.as_count() for pid, c in counters.items()}
    log.step("Totals: " + ", ".join(f"{p.name}={counts[p.id].total}" for p in roster))
    return AssignmentResult(schedule=Schedule(year=schedule.year, weeks=weeks), counts=counts)


def regenerate(
    settings: SchedulerSettings,
    people: Sequence[Person],
    holidays: Iterable[Holiday] = (),
) -> AssignmentResult:
    """Build and assign a fresh schedule from the current inputs."""
    holiday_list = list(holidays)
    with log.section(f"Regenerating {settings.year} ({len(holiday_list)} holidays)"):
        schedule = generate_weeks(
            settings.year,
            settings.start_month,
            settings.start_weekday,
            holiday_list,
        )
        return assign_people_to_weeks(schedule, people, holiday_list)
