"""Tests for calendar utilities."""
from datetime import date, datetime, timedelta, timezone

import pytest

from dutyrota.utils.dates import (
    format_iso,
    friday_after,
    monday_before,
    spans_overlap,
    sunday_weekday,
    to_utc_date,
)


class TestWeekday:

    def test_sunday_is_zero(self):
        assert sunday_weekday(date(2025, 1, 5)) == 0  # Sunday
        assert sunday_weekday(date(2025, 1, 7)) == 2  # Tuesday
        assert sunday_weekday(date(2025, 1, 11)) == 6  # Saturday


class TestMondayBefore:

    @pytest.mark.parametrize("day,expected", [
        (date(2025, 12, 25), date(2025, 12, 22)),  # Thursday
        (date(2025, 12, 22), date(2025, 12, 22)),  # already Monday
        (date(2022, 12, 25), date(2022, 12, 19)),  # Sunday goes back six days
        (date(2021, 12, 25), date(2021, 12, 20)),  # Saturday
    ])
    def test_monday_before(self, day, expected):
        assert monday_before(day) == expected

    def test_never_moves_forward(self):
        start = date(2024, 1, 1)
        for i in range(14):
            d = start + timedelta(days=i)
            m = monday_before(d)
            assert m <= d
            assert sunday_weekday(m) == 1
            assert (d - m).days < 7


class TestFridayAfter:

    @pytest.mark.parametrize("day,expected", [
        (date(2026, 1, 1), date(2026, 1, 2)),   # Thursday
        (date(2025, 1, 3), date(2025, 1, 3)),   # already Friday
        (date(2022, 1, 1), date(2022, 1, 7)),   # Saturday goes to next Friday
        (date(2023, 1, 1), date(2023, 1, 6)),   # Sunday
    ])
    def test_friday_after(self, day, expected):
        assert friday_after(day) == expected

    def test_never_moves_backward(self):
        start = date(2024, 1, 1)
        for i in range(14):
            d = start + timedelta(days=i)
            f = friday_after(d)
            assert f >= d
            assert sunday_weekday(f) == 5
            assert (f - d).days < 7


class TestNormalization:

    def test_date_passthrough(self):
        assert to_utc_date(date(2025, 3, 1)) == date(2025, 3, 1)

    def test_iso_string(self):
        assert to_utc_date(" 2025-03-01 ") == date(2025, 3, 1)

    def test_aware_datetime_uses_utc_day(self):
        # 23:30 at UTC-5 is already the next day in UTC
        tz = timezone(timedelta(hours=-5))
        assert to_utc_date(datetime(2025, 3, 1, 23, 30, tzinfo=tz)) == date(2025, 3, 2)

    def test_naive_datetime(self):
        assert to_utc_date(datetime(2025, 3, 1, 23, 30)) == date(2025, 3, 1)

    @pytest.mark.parametrize("bad", ["2025-13-01", "not a date", "", "03/01/2025", 20250301])
    def test_malformed_raises(self, bad):
        with pytest.raises(ValueError):
            to_utc_date(bad)

    def test_format_iso(self):
        assert format_iso(date(2025, 1, 7)) == "2025-01-07"
        assert format_iso(date(987, 6, 5)) == "0987-06-05"


class TestOverlap:

    def test_touching_intervals_overlap(self):
        assert spans_overlap(date(2025, 1, 1), date(2025, 1, 7), date(2025, 1, 7), date(2025, 1, 9))

    def test_disjoint(self):
        assert not spans_overlap(date(2025, 1, 1), date(2025, 1, 7), date(2025, 1, 8), date(2025, 1, 9))
