"""
Roster & Manual Edits
=====================
Roster store object and the edit operations applied to a generated
schedule. Validation happens before any mutation; schedule edits return a
new Schedule and leave the input untouched.
"""
import copy
from dataclasses import replace
from typing import Dict, Iterator, List, Optional, Sequence

from dutyrota.errors import ValidationError
from dutyrota.models.assignment import UNASSIGNED, Assignment
from dutyrota.models.person import Leave, Person
from dutyrota.models.schedule import Schedule
from dutyrota.models.settings import MAX_PEOPLE
from dutyrota.utils.dates import format_iso, to_utc_date
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.engine.roster")


class Roster:
    """Ordered team members; ids are unique and never reused while present."""

    def __init__(self, people: Optional[Sequence[Person]] = None, max_people: int = MAX_PEOPLE):
        self.max_people = max_people
        self._people: List[Person] = []
        for p in people or []:
            if self._find(p.id) is not None:
                raise ValidationError(f"Duplicate person id: {p.id}")
            self._people.append(copy.deepcopy(p))

    @classmethod
    def default(cls) -> "Roster":
        return cls([Person(id=i, name=f"Person {i}") for i in (1, 2, 3)])

    def __len__(self) -> int:
        return len(self._people)

    def __iter__(self) -> Iterator[Person]:
        return iter(self._people)

    @property
    def people(self) -> List[Person]:
        """Snapshot safe to hand to the engine."""
        return copy.deepcopy(self._people)

    def names(self) -> Dict[int, str]:
        return {p.id: p.name for p in self._people}

    def _find(self, person_id: int) -> Optional[Person]:
        for p in self._people:
            if p.id == person_id:
                return p
        return None

    def get(self, person_id: int) -> Person:
        person = self._find(person_id)
        if person is None:
            raise ValidationError(f"No person with id {person_id}")
        return person

    def find_by_name(self, name: str) -> Optional[Person]:
        """Case-insensitive exact name match, first in roster order."""
        key = str(name).lower()
        for p in self._people:
            if p.name.lower() == key:
                return p
        return None

    def next_id(self) -> int:
        return max((p.id for p in self._people), default=0) + 1

    def add_person(self, name: str) -> Person:
        name = str(name).strip()
        if not name:
            raise ValidationError("Person name cannot be empty")
        if len(self._people) >= self.max_people:
            raise ValidationError(f"Maximum {self.max_people} people allowed")
        person = Person(id=self.next_id(), name=name)
        self._people.append(person)
        logger.info(f"Added person {person.id}: {person.name}")
        return person

    def rename_person(self, person_id: int, name: str) -> Person:
        name = str(name).strip()
        if not name:
            raise ValidationError("Person name cannot be empty")
        person = self.get(person_id)
        person.name = name
        return person

    def remove_person(self, person_id: int, schedule: Optional[Schedule] = None) -> Optional[Schedule]:
        """
        Drop a person from the roster.

        If a schedule is given, returns a copy with that person's weeks
        reset to unassigned. Other weeks are not re-run.
        """
        person = self.get(person_id)
        updated = unassign_person(schedule, person_id) if schedule is not None else None
        self._people.remove(person)
        logger.info(f"Removed person {person_id}: {person.name}")
        return updated

    def add_leave(self, person_id: int, start: str, end: str) -> Leave:
        """
        Record an inclusive leave interval.

        Raises:
            ValidationError: unknown person, malformed date, end before
                start, or an identical interval already recorded
        """
        person = self.get(person_id)
        try:
            start_day = to_utc_date(start)
            end_day = to_utc_date(end)
        except ValueError:
            raise ValidationError(f"Invalid date format for leave: {start!r} to {end!r}") from None
        if start_day > end_day:
            raise ValidationError("Leave end date must be on or after the start date.")

        leave = Leave(start=format_iso(start_day), end=format_iso(end_day))
        if leave in person.leave:
            raise ValidationError("This leave period already exists for this person.")
        person.leave.append(leave)
        logger.info(f"Leave {leave.start}..{leave.end} added for {person.name}")
        return leave

    def remove_leave(self, person_id: int, index: int) -> None:
        """Remove a leave entry by position; out-of-range is ignored."""
        person = self.get(person_id)
        if 0 <= index < len(person.leave):
            del person.leave[index]

    def to_list(self) -> List[dict]:
        return [p.to_dict() for p in self._people]

    @classmethod
    def from_list(cls, rows: Sequence[dict]) -> "Roster":
        return cls([Person.from_dict(r) for r in rows])


def _check_index(schedule: Schedule, index: int) -> None:
    if not 0 <= index < len(schedule):
        raise ValidationError(f"Week index {index} out of range (0-{len(schedule) - 1})")


def unassign_person(schedule: Schedule, person_id: int) -> Schedule:
    """Copy of ``schedule`` with every week of ``person_id`` unassigned."""
    weeks = [
        replace(w, assignment=UNASSIGNED) if w.assigned_person_id == person_id else replace(w)
        for w in schedule.weeks
    ]
    return Schedule(year=schedule.year, weeks=weeks)


def reassign_week(schedule: Schedule, index: int, person_id: Optional[int]) -> Schedule:
    """
    Manually set a week's person (None clears it).

    Raises:
        ValidationError: bad index, or the week is in the blackout period
    """
    _check_index(schedule, index)
    if schedule.weeks[index].is_blackout:
        raise ValidationError("Cannot assign duty during the designated holiday period.")
    assignment = UNASSIGNED if person_id is None else Assignment.for_person(person_id)
    weeks = [replace(w) for w in schedule.weeks]
    weeks[index] = replace(weeks[index], assignment=assignment)
    return Schedule(year=schedule.year, weeks=weeks)


def set_week_notes(schedule: Schedule, index: int, notes: str) -> Schedule:
    _check_index(schedule, index)
    weeks = [replace(w) for w in schedule.weeks]
    weeks[index] = replace(weeks[index], notes=str(notes or "").strip())
    return Schedule(year=schedule.year, weeks=weeks)
