"""Week assignment value: a person or one of the sentinel statuses."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AssignmentKind(str, Enum):
    """What occupies a week's assignment slot."""
    UNASSIGNED = "unassigned"
    PERSON = "person"
    BLACKOUT = "blackout"        # Inside the year-end holiday period
    UNAVAILABLE = "unavailable"  # Everyone on leave

    @property
    def label(self) -> str:
        """Display text used in exports for the non-person kinds."""
        return {
            AssignmentKind.UNASSIGNED: "Unassigned",
            AssignmentKind.PERSON: "",
            AssignmentKind.BLACKOUT: "Holiday Period",
            AssignmentKind.UNAVAILABLE: "No one available",
        }[self]

    @classmethod
    def from_label(cls, text: str) -> Optional["AssignmentKind"]:
        """Recognize a sentinel label or value (case-insensitive); None otherwise."""
        key = str(text).strip().lower()
        if key == "":
            return cls.UNASSIGNED
        for member in cls:
            if member is cls.PERSON:
                continue
            if key in (member.value, member.label.lower()):
                return member
        return None


@dataclass(frozen=True)
class Assignment:
    """Tagged assignment; ``person_id`` is set only for ``PERSON``."""
    kind: AssignmentKind = AssignmentKind.UNASSIGNED
    person_id: Optional[int] = None

    def __post_init__(self):
        if self.kind is AssignmentKind.PERSON and self.person_id is None:
            raise ValueError("person assignment needs a person_id")
        if self.kind is not AssignmentKind.PERSON and self.person_id is not None:
            raise ValueError(f"{self.kind.value} assignment cannot carry a person_id")

    @classmethod
    def for_person(cls, person_id: int) -> "Assignment":
        return cls(AssignmentKind.PERSON, int(person_id))

    @classmethod
    def unassigned(cls) -> "Assignment":
        return cls(AssignmentKind.UNASSIGNED)

    @property
    def is_person(self) -> bool:
        return self.kind is AssignmentKind.PERSON

    def to_value(self):
        """Plain value for JSON: the person id, the sentinel value, or None."""
        if self.kind is AssignmentKind.PERSON:
            return self.person_id
        if self.kind is AssignmentKind.UNASSIGNED:
            return None
        return self.kind.value

    @classmethod
    def from_value(cls, value) -> "Assignment":
        if value is None:
            return cls.unassigned()
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.for_person(value)
        kind = AssignmentKind.from_label(str(value))
        if kind is None:
            raise ValueError(f"Unknown assignment value: {value!r}")
        return cls(kind)


UNASSIGNED = Assignment(AssignmentKind.UNASSIGNED)
BLACKOUT = Assignment(AssignmentKind.BLACKOUT)
UNAVAILABLE = Assignment(AssignmentKind.UNAVAILABLE)
