"""Holiday and leave overlap checks for a week span."""
from datetime import date
from typing import Iterable, List

from dutyrota.models.holiday import Holiday
from dutyrota.models.person import Person
from dutyrota.utils.dates import DateLike, spans_overlap, to_utc_date
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.engine.overlap")


def holidays_in_week(week_start: DateLike, week_end: DateLike, holidays: Iterable[Holiday]) -> List[Holiday]:
    """Holidays falling within [week_start, week_end]; malformed dates are skipped."""
    start = to_utc_date(week_start)
    end = to_utc_date(week_end)
    found = []
    for holiday in holidays:
        day = holiday.day
        if day is None:
            logger.warning(f"Skipping holiday with invalid date: {holiday.date!r} ({holiday.name})")
            continue
        if start <= day <= end:
            found.append(holiday)
    return found


def week_has_holiday(week_start: DateLike, week_end: DateLike, holidays: Iterable[Holiday]) -> bool:
    return bool(holidays_in_week(week_start, week_end, holidays))


def person_on_leave(person: Person, week_start: date, week_end: date) -> bool:
    """True iff any of the person's leave intervals overlaps the week."""
    start = to_utc_date(week_start)
    end = to_utc_date(week_end)
    for leave in person.leave:
        span = leave.span()
        if span is None:
            logger.warning(
                f"Invalid leave date format for person {person.id}: {leave.start} or {leave.end}"
            )
            continue
        if spans_overlap(span[0], span[1], start, end):
            return True
    return False
