"""
Schedule Generator
==================
Builds the ordered duty weeks for a year and tags blackout/holiday weeks.
"""
from datetime import date, timedelta
from typing import Iterable, Optional, Sequence

from dutyrota.errors import ValidationError
from dutyrota.models.assignment import BLACKOUT, UNASSIGNED
from dutyrota.models.holiday import Holiday
from dutyrota.models.schedule import Schedule, Week
from dutyrota.utils.dates import DAY_NAMES, MONTH_NAMES, sunday_weekday
from dutyrota.utils.logging_setup import get_logger, log_function_call

from .blackout import blackout_period
from .overlap import week_has_holiday

logger = get_logger("dutyrota.engine.generator")

WEEK_LENGTH = 7
MIN_YEAR = 1
MAX_YEAR = 9998


def validate_inputs(year: int, start_month: int, start_weekday: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    if not 0 <= start_month <= 11:
        raise ValidationError(f"start_month must be 0-11, got {start_month}")
    if not 0 <= start_weekday <= 6:
        raise ValidationError(f"start_weekday must be 0-6, got {start_weekday}")


def first_week_start(year: int, start_month: int, start_weekday: int) -> date:
    """First date in ``start_month`` of ``year`` falling on ``start_weekday``."""
    first = date(year, start_month + 1, 1)
    offset = (start_weekday - sunday_weekday(first) + 7) % 7
    return first + timedelta(days=offset)


@log_function_call
def generate_weeks(
    year: int,
    start_month: int = 0,
    start_weekday: int = 2,
    holidays: Optional[Iterable[Holiday]] = None,
) -> Schedule:
    """
    Build every 7-day week whose start date falls in ``year``.

    Weeks start on ``start_weekday`` (0=Sunday) from the first such day of
    ``start_month`` (0=January). Weeks overlapping the blackout period are
    pre-assigned ``BLACKOUT``; all others are left unassigned.

    Raises:
        ValidationError: on out-of-range year, month or weekday
    """
    validate_inputs(year, start_month, start_weekday)
    holiday_list: Sequence[Holiday] = list(holidays or [])
    period = blackout_period(year)

    weeks = []
    anchor = first_week_start(year, start_month, start_weekday)
    while anchor.year == year:
        end = anchor + timedelta(days=WEEK_LENGTH - 1)
        in_blackout = period.overlaps(anchor, end) if period else False
        weeks.append(Week(
            start=anchor,
            end=end,
            assignment=BLACKOUT if in_blackout else UNASSIGNED,
            has_holiday=week_has_holiday(anchor, end, holiday_list),
            is_blackout=in_blackout,
        ))
        anchor += timedelta(days=WEEK_LENGTH)

    logger.info(
        f"Generated {len(weeks)} weeks for {year} starting {DAY_NAMES[start_weekday]}s "
        f"from {MONTH_NAMES[start_month]} (blackout {period})"
    )
    return Schedule(year=year, weeks=weeks)
