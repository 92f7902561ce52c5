# dutyrota/models - Data models for the duty scheduler
from .assignment import BLACKOUT, UNASSIGNED, UNAVAILABLE, Assignment, AssignmentKind
from .holiday import Holiday
from .person import Leave, Person
from .schedule import DutyCount, LoadCounter, Schedule, Week
from .settings import MAX_PEOPLE, SchedulerSettings
from .validated import ValidatedSettings

__all__ = [
    "Assignment", "AssignmentKind", "BLACKOUT", "UNASSIGNED", "UNAVAILABLE",
    "Holiday",
    "Person", "Leave",
    "Week", "Schedule", "DutyCount", "LoadCounter",
    "SchedulerSettings", "ValidatedSettings", "MAX_PEOPLE",
]
