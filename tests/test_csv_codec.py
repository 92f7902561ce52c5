"""Tests for the schedule CSV codec."""
from datetime import date

import pytest

from dutyrota.engine.assignment import assign_people_to_weeks, regenerate
from dutyrota.engine.generator import generate_weeks
from dutyrota.engine.roster import set_week_notes
from dutyrota.errors import CsvImportError
from dutyrota.io.csv_codec import (
    CSV_HEADERS,
    decode_schedule,
    encode_schedule,
    escape_field,
    export_filename,
    read_schedule_csv,
    split_csv_line,
    write_schedule_csv,
)
from dutyrota.models.assignment import BLACKOUT, UNASSIGNED, UNAVAILABLE, Assignment
from dutyrota.models.holiday import Holiday
from dutyrota.models.person import Person

HEADER = "Week Start Date,Week End Date,Assigned To,Holidays,Notes"


class TestEscaping:

    @pytest.mark.parametrize("raw,expected", [
        ("plain", "plain"),
        ("a,b", '"a,b"'),
        ('say "hi"', '"say ""hi"""'),
        ("two\nlines", '"two\nlines"'),
        ("", ""),
        (None, ""),
    ])
    def test_escape_field(self, raw, expected):
        assert escape_field(raw) == expected

    def test_split_plain(self):
        assert split_csv_line("a,b,,d") == ["a", "b", "", "d"]

    def test_split_quoted_comma_and_quotes(self):
        assert split_csv_line('x,"a, b","say ""hi""",z') == ["x", "a, b", 'say "hi"', "z"]

    def test_split_trims_values(self):
        assert split_csv_line(" a , b ") == ["a", "b"]

    def test_unterminated_quote_swallows_rest_of_line(self):
        assert split_csv_line('a,"b,c') == ["a", "b,c"]


class TestEncode:

    def test_header_row(self, sample_people):
        text = encode_schedule(generate_weeks(2025, 9, 2), sample_people)
        assert text.splitlines()[0] == HEADER
        assert ",".join(CSV_HEADERS) == HEADER

    def test_rows(self, sample_people):
        schedule = assign_people_to_weeks(generate_weeks(2025, 9, 2), sample_people).schedule
        lines = encode_schedule(schedule, sample_people).split("\n")
        assert len(lines) == 1 + len(schedule)
        assert lines[1] == "2025-10-07,2025-10-13,Alice,,"
        assert lines[-1] == "2025-12-30,2026-01-05,Holiday Period,,"

    def test_sentinel_and_unknown_labels(self, sample_people, plain_schedule):
        plain_schedule.weeks[0].assignment = UNAVAILABLE
        plain_schedule.weeks[1].assignment = Assignment.for_person(99)
        lines = encode_schedule(plain_schedule, sample_people).split("\n")
        assert lines[1].split(",")[2] == "No one available"
        assert lines[2].split(",")[2] == "Unknown Person"
        assert lines[3].split(",")[2] == "Unassigned"

    def test_holidays_column(self, sample_people, us_holidays_2025):
        schedule = generate_weeks(2025, 6, 2, us_holidays_2025)
        text = encode_schedule(schedule, sample_people, us_holidays_2025)
        assert "2025-07-01,2025-07-07,Unassigned,2025-07-04: Independence Day," in text

    def test_multiple_holidays_quoted_with_newline(self, sample_people):
        holidays = [Holiday("2025-07-03", "Eve"), Holiday("2025-07-04", "Day")]
        schedule = generate_weeks(2025, 6, 2, holidays)
        text = encode_schedule(schedule, sample_people, holidays)
        assert '"2025-07-03: Eve\n2025-07-04: Day"' in text

    def test_export_filename(self):
        assert export_filename(2025, "Duty  Rotation Scheduler") == "duty-schedule-2025-Duty_Rotation_Scheduler.csv"


class TestDecode:

    def test_roundtrip(self, settings_2025, sample_people, us_holidays_2025):
        result = regenerate(settings_2025, sample_people, us_holidays_2025)
        schedule = set_week_notes(result.schedule, 3, 'Swap with "Bob", confirmed')
        text = encode_schedule(schedule, sample_people, us_holidays_2025)

        imported = decode_schedule(text, sample_people, us_holidays_2025)

        assert imported.warnings == []
        assert len(imported.schedule) == len(schedule)
        for original, decoded in zip(schedule.weeks, imported.schedule.weeks):
            assert decoded.start == original.start
            assert decoded.end == original.end
            assert decoded.assignment == original.assignment
            assert decoded.notes == original.notes
            assert decoded.is_blackout == original.is_blackout
            assert decoded.has_holiday == original.has_holiday
        assert imported.schedule.year == 2025

    def test_names_resolve_case_insensitively(self, sample_people):
        text = f"{HEADER}\n2025-03-04,2025-03-10,aLiCe,,"
        week = decode_schedule(text, sample_people).schedule.weeks[0]
        assert week.assigned_person_id == 1

    def test_sentinels_pass_through(self, sample_people):
        text = "\n".join([
            HEADER,
            "2025-03-04,2025-03-10,No one available,,",
            "2025-03-11,2025-03-17,Unassigned,,",
            "2025-03-18,2025-03-24,,,",
        ])
        weeks = decode_schedule(text, sample_people).schedule.weeks
        assert [w.assignment for w in weeks] == [UNAVAILABLE, UNASSIGNED, UNASSIGNED]

    def test_unresolved_name_becomes_unassigned(self, sample_people):
        text = f"{HEADER}\n2025-03-04,2025-03-10,Mallory,,"
        imported = decode_schedule(text, sample_people)
        assert imported.schedule.weeks[0].assignment == UNASSIGNED
        assert len(imported.warnings) == 1
        assert imported.skipped_rows == 0

    def test_blackout_rederived_from_dates(self, sample_people):
        text = f"{HEADER}\n2025-12-23,2025-12-29,Alice,,"
        week = decode_schedule(text, sample_people).schedule.weeks[0]
        assert week.is_blackout
        assert week.assignment == BLACKOUT

    def test_holidays_column_is_ignored(self, sample_people, us_holidays_2025):
        text = f"{HEADER}\n2025-03-04,2025-03-10,Alice,2025-03-05: Made Up,"
        week = decode_schedule(text, sample_people, us_holidays_2025).schedule.weeks[0]
        assert not week.has_holiday

    def test_holiday_flag_from_current_list(self, sample_people, us_holidays_2025):
        text = f"{HEADER}\n2025-07-01,2025-07-07,Alice,,"
        week = decode_schedule(text, sample_people, us_holidays_2025).schedule.weeks[0]
        assert week.has_holiday

    def test_short_row_skipped_with_warning(self, sample_people, caplog):
        text = f"{HEADER}\n2025-03-04,2025-03-10,Alice,\n2025-03-11,2025-03-17,Bob,,"
        imported = decode_schedule(text, sample_people)
        assert len(imported.schedule) == 1
        assert imported.schedule.weeks[0].assigned_person_id == 2
        assert imported.skipped_rows == 1
        assert "Incorrect number of columns" in imported.warnings[0]
        assert "Skipping row 1" in caplog.text

    def test_invalid_date_skipped(self, sample_people):
        text = f"{HEADER}\n03/04/2025,2025-03-10,Alice,,\n2025-03-11,2025-03-17,Bob,,"
        imported = decode_schedule(text, sample_people)
        assert len(imported.schedule) == 1
        assert "Invalid date format" in imported.warnings[0]

    def test_crlf_and_blank_lines(self, sample_people):
        text = f"{HEADER}\r\n\r\n2025-03-04,2025-03-10,Alice,,\r\n"
        assert len(decode_schedule(text, sample_people).schedule) == 1

    def test_multiline_field_rows_are_skipped(self, sample_people):
        holidays = [Holiday("2025-07-03", "Eve"), Holiday("2025-07-04", "Day")]
        schedule = generate_weeks(2025, 6, 2, holidays)
        text = encode_schedule(schedule, sample_people, holidays)

        imported = decode_schedule(text, sample_people, holidays)

        starts = [w.start for w in imported.schedule.weeks]
        assert date(2025, 7, 1) not in starts
        assert len(imported.schedule) == len(schedule) - 1
        assert imported.skipped_rows == 2

    def test_explicit_year(self, sample_people):
        text = f"{HEADER}\n2025-03-04,2025-03-10,Alice,,"
        assert decode_schedule(text, sample_people, year=2024).schedule.year == 2024


class TestDecodeFailures:

    @pytest.mark.parametrize("text", ["", "   \n  "])
    def test_empty(self, text, sample_people):
        with pytest.raises(CsvImportError, match="empty"):
            decode_schedule(text, sample_people)

    def test_header_only(self, sample_people):
        with pytest.raises(CsvImportError, match="at least one data row"):
            decode_schedule(HEADER, sample_people)

    @pytest.mark.parametrize("header", [
        "Week Start Date,Week End Date,Assigned To,Holidays",
        "Week End Date,Week Start Date,Assigned To,Holidays,Notes",
        "week start date,Week End Date,Assigned To,Holidays,Notes",
        HEADER + ",Extra",
    ])
    def test_header_mismatch(self, header, sample_people):
        with pytest.raises(CsvImportError, match="Invalid CSV headers"):
            decode_schedule(f"{header}\n2025-03-04,2025-03-10,Alice,,", sample_people)

    def test_all_rows_skipped(self, sample_people):
        text = f"{HEADER}\nonly,three,columns\nbad-date,2025-03-10,Alice,,"
        with pytest.raises(CsvImportError, match="No valid schedule data"):
            decode_schedule(text, sample_people)

    def test_header_whitespace_tolerated(self, sample_people):
        header = " , ".join(CSV_HEADERS)
        assert len(decode_schedule(f"{header}\n2025-03-04,2025-03-10,Alice,,", sample_people).schedule) == 1


class TestFiles:

    def test_write_then_read(self, tmp_path, sample_people, settings_2025):
        result = regenerate(settings_2025, sample_people)
        path = write_schedule_csv(tmp_path / "out" / "schedule.csv", result.schedule, sample_people)
        imported = read_schedule_csv(path, sample_people)
        assert [w.assignment for w in imported.schedule.weeks] == [w.assignment for w in result.schedule.weeks]

    def test_bom_is_ignored(self, tmp_path, sample_people):
        path = tmp_path / "bom.csv"
        path.write_text(f"{HEADER}\n2025-03-04,2025-03-10,Alice,,", encoding="utf-8-sig")
        assert len(read_schedule_csv(path, sample_people).schedule) == 1

    def test_missing_file(self, tmp_path, sample_people):
        with pytest.raises(CsvImportError, match="Failed to read"):
            read_schedule_csv(tmp_path / "nope.csv", sample_people)

    def test_rename_after_export_leaves_unresolved(self, tmp_path, sample_people, plain_schedule):
        plain_schedule.weeks[0].assignment = Assignment.for_person(1)
        text = encode_schedule(plain_schedule, sample_people)
        renamed = [Person(id=1, name="Alicia"), *sample_people[1:]]
        imported = decode_schedule(text, renamed)
        assert imported.schedule.weeks[0].assignment == UNASSIGNED
