"""Year-end blackout period: Monday before Christmas to Friday after New Year."""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from dutyrota.utils.dates import format_iso, friday_after, monday_before, spans_overlap
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.engine.blackout")


@dataclass(frozen=True)
class BlackoutPeriod:
    start: date
    end: date

    def overlaps(self, week_start: date, week_end: date) -> bool:
        return spans_overlap(week_start, week_end, self.start, self.end)

    def __str__(self) -> str:
        return f"{format_iso(self.start)}..{format_iso(self.end)}"


def blackout_period(year: int) -> Optional[BlackoutPeriod]:
    """
    Blackout window for a schedule year.

    Returns None when the dates cannot be computed (e.g. the following
    New Year's Day is outside the supported calendar range).
    """
    try:
        christmas = date(year, 12, 25)
        new_year = date(year + 1, 1, 1)
        return BlackoutPeriod(start=monday_before(christmas), end=friday_after(new_year))
    except (ValueError, OverflowError) as e:
        logger.error(f"Cannot compute blackout period for {year}: {e}")
        return None


def is_week_in_blackout(week_start: date, week_end: date, year: int) -> bool:
    """True iff the week overlaps the blackout window of ``year``."""
    period = blackout_period(year)
    if period is None:
        return False
    return period.overlaps(week_start, week_end)
