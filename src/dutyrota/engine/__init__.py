# dutyrota/engine - week generation and fair assignment
from .assignment import AssignmentResult, assign_people_to_weeks, regenerate
from .blackout import BlackoutPeriod, blackout_period, is_week_in_blackout
from .generator import first_week_start, generate_weeks
from .overlap import holidays_in_week, person_on_leave, week_has_holiday
from .roster import Roster, reassign_week, set_week_notes, unassign_person
from .stats import counts_to_dataframe, load_spread, recount_assignments

__all__ = [
    "AssignmentResult",
    "assign_people_to_weeks",
    "regenerate",
    "BlackoutPeriod",
    "blackout_period",
    "is_week_in_blackout",
    "first_week_start",
    "generate_weeks",
    "holidays_in_week",
    "person_on_leave",
    "week_has_holiday",
    "Roster",
    "reassign_week",
    "set_week_notes",
    "unassign_person",
    "recount_assignments",
    "counts_to_dataframe",
    "load_spread",
]
