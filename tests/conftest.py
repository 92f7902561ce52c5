"""Pytest configuration and fixtures."""
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from dutyrota.models.holiday import Holiday
from dutyrota.models.person import Leave, Person
from dutyrota.models.schedule import Schedule, Week
from dutyrota.models.settings import SchedulerSettings


@pytest.fixture
def sample_people():
    """Three-person roster without leave."""
    return [
        Person(id=1, name="Alice"),
        Person(id=2, name="Bob"),
        Person(id=3, name="Charlie"),
    ]


@pytest.fixture
def us_holidays_2025():
    """A few US public holidays spanning 2025 and New Year 2026."""
    return [
        Holiday(date="2025-01-01", name="New Year's Day"),
        Holiday(date="2025-07-04", name="Independence Day"),
        Holiday(date="2025-11-27", name="Thanksgiving Day"),
        Holiday(date="2025-12-25", name="Christmas Day"),
        Holiday(date="2026-01-01", name="New Year's Day"),
    ]


@pytest.fixture
def settings_2025():
    """Tuesday-start schedule from January 2025."""
    return SchedulerSettings(year=2025, start_month=0, start_weekday=2)


def make_weeks(first: date, count: int, holiday_indexes=()):
    """Contiguous plain weeks starting at ``first``."""
    return [
        Week(
            start=first + timedelta(days=7 * i),
            end=first + timedelta(days=7 * i + 6),
            has_holiday=i in holiday_indexes,
        )
        for i in range(count)
    ]


@pytest.fixture
def plain_schedule():
    """Ten contiguous non-blackout weeks from 2025-03-04."""
    return Schedule(year=2025, weeks=make_weeks(date(2025, 3, 4), 10))


@pytest.fixture
def person_with_leave():
    return Person(id=7, name="Dana", leave=[Leave("2025-03-10", "2025-03-12")])


@pytest.fixture
def weeks_from():
    """Factory for contiguous weeks: ``weeks_from(first, count, holiday_indexes)``."""
    return make_weeks


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers and levels installed by setup_logging()."""
    yield
    logger = logging.getLogger("dutyrota")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
