"""
Schedule CSV Codec
==================
Text exchange format for a generated schedule.

Columns: Week Start Date, Week End Date, Assigned To, Holidays, Notes.
Fields containing a comma, quote or newline are quoted with inner quotes
doubled. Decoding splits the text into physical lines first, so a quoted
field spanning several lines is not reassembled: its pieces fail the column
count check and are skipped. Holidays are never read back; the blackout and
holiday flags are re-derived from the dates.
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from dutyrota.errors import CsvImportError
from dutyrota.engine.blackout import is_week_in_blackout
from dutyrota.engine.overlap import holidays_in_week, week_has_holiday
from dutyrota.models.assignment import BLACKOUT, UNASSIGNED, Assignment, AssignmentKind
from dutyrota.models.holiday import Holiday
from dutyrota.models.person import Person
from dutyrota.models.schedule import Schedule, Week
from dutyrota.utils.dates import format_iso, to_utc_date
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.io.csv_codec")

CSV_HEADERS = ["Week Start Date", "Week End Date", "Assigned To", "Holidays", "Notes"]
UNKNOWN_PERSON = "Unknown Person"


@dataclass
class ImportResult:
    """Decoded schedule plus the warnings for rows that were skipped."""
    schedule: Schedule
    warnings: List[str] = field(default_factory=list)
    skipped_rows: int = 0


# --- Encoding ---------------------------------------------------------------

def escape_field(value) -> str:
    if value is None:
        return ""
    text = str(value)
    if "," in text or "\n" in text or '"' in text:
        text = '"' + text.replace('"', '""') + '"'
    return text


def assigned_label(assignment: Assignment, people: Sequence[Person]) -> str:
    if assignment.is_person:
        for p in people:
            if p.id == assignment.person_id:
                return p.name
        return UNKNOWN_PERSON
    return assignment.kind.label


def encode_schedule(
    schedule: Schedule,
    people: Sequence[Person],
    holidays: Iterable[Holiday] = (),
) -> str:
    """Render the schedule as CSV text (``\\n`` line endings, no trailing newline)."""
    holiday_list = list(holidays)
    lines = [",".join(CSV_HEADERS)]
    for week in schedule.weeks:
        holidays_text = "\n".join(h.label() for h in holidays_in_week(week.start, week.end, holiday_list))
        row = [
            format_iso(week.start),
            format_iso(week.end),
            assigned_label(week.assignment, people),
            holidays_text,
            week.notes or "",
        ]
        lines.append(",".join(escape_field(v) for v in row))
    return "\n".join(lines)


def export_filename(year: int, title: str) -> str:
    slug = re.sub(r"\s+", "_", title)
    return f"duty-schedule-{year}-{slug}.csv"


# --- Decoding ---------------------------------------------------------------

class _ScanState(Enum):
    NORMAL = "normal"
    IN_QUOTES = "in_quotes"


def split_csv_line(line: str) -> List[str]:
    """
    Split one physical line into fields.

    Two-state scanner: a quote in NORMAL opens a quoted section; inside it a
    doubled quote is a literal quote and a single quote closes it. Commas
    only separate fields in NORMAL. Values are stripped of surrounding
    whitespace.
    """
    values: List[str] = []
    current: List[str] = []
    state = _ScanState.NORMAL
    i = 0
    while i < len(line):
        char = line[i]
        if state is _ScanState.IN_QUOTES:
            if char == '"':
                if i + 1 < len(line) and line[i + 1] == '"':
                    current.append('"')
                    i += 1
                else:
                    state = _ScanState.NORMAL
            else:
                current.append(char)
        elif char == '"':
            state = _ScanState.IN_QUOTES
        elif char == ",":
            values.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1
    values.append("".join(current).strip())
    return values


def resolve_assignment(name: str, people: Sequence[Person]) -> Optional[Assignment]:
    """
    Map an "Assigned To" value back to an assignment.

    Person names match case-insensitively and take precedence over sentinel
    labels. Returns None when the value is neither.
    """
    key = name.lower()
    for p in people:
        if p.name.lower() == key:
            return Assignment.for_person(p.id)
    kind = AssignmentKind.from_label(name)
    if kind is None:
        return None
    return Assignment(kind)


def decode_schedule(
    text: str,
    people: Sequence[Person],
    holidays: Iterable[Holiday] = (),
    year: Optional[int] = None,
) -> ImportResult:
    """
    Rebuild a schedule from CSV text.

    Args:
        text: CSV content
        people: Current roster, used to resolve names to ids
        holidays: Current holiday list, used to re-derive holiday flags
        year: Schedule year; defaults to the first imported week's year

    Raises:
        CsvImportError: empty input, wrong header, or no usable rows
    """
    if not text or not text.strip():
        raise CsvImportError("File is empty or could not be read.")

    lines = [line for line in re.split(r"\r?\n", text) if line.strip() != ""]
    if len(lines) < 2:
        raise CsvImportError("CSV file must contain headers and at least one data row.")

    headers = [h.strip() for h in lines[0].lstrip("\ufeff").split(",")]
    if headers != CSV_HEADERS:
        logger.error(f"Expected headers {CSV_HEADERS}, found {headers}")
        raise CsvImportError(f"Invalid CSV headers. Expected: {', '.join(CSV_HEADERS)}")

    holiday_list = list(holidays)
    result_weeks: List[Week] = []
    warnings: List[str] = []

    def skip(message: str) -> None:
        logger.warning(message)
        warnings.append(message)

    for row_number, line in enumerate(lines[1:], start=1):
        values = split_csv_line(line)
        if len(values) != len(CSV_HEADERS):
            skip(
                f"Skipping row {row_number}: Incorrect number of columns. "
                f"Expected {len(CSV_HEADERS)}, got {len(values)}. Line: {line}"
            )
            continue

        start_text, end_text, assigned_text, _holidays_text, notes = values
        try:
            start = to_utc_date(start_text)
            end = to_utc_date(end_text)
        except ValueError:
            skip(f"Skipping row {row_number}: Invalid date format. Start: {start_text}, End: {end_text}")
            continue

        assignment = resolve_assignment(assigned_text, people)
        if assignment is None:
            message = f"Row {row_number}: could not find person for name {assigned_text!r}; left unassigned"
            logger.warning(message)
            warnings.append(message)
            assignment = UNASSIGNED

        in_blackout = is_week_in_blackout(start, end, start.year)
        result_weeks.append(Week(
            start=start,
            end=end,
            assignment=BLACKOUT if in_blackout else assignment,
            has_holiday=week_has_holiday(start, end, holiday_list),
            is_blackout=in_blackout,
            notes=notes,
        ))

    if not result_weeks:
        raise CsvImportError("No valid schedule data could be imported from the CSV.")

    skipped = len(lines) - 1 - len(result_weeks)
    schedule_year = year if year is not None else result_weeks[0].start.year
    logger.info(f"Imported {len(result_weeks)} weeks from CSV ({skipped} rows skipped)")
    return ImportResult(
        schedule=Schedule(year=schedule_year, weeks=result_weeks),
        warnings=warnings,
        skipped_rows=skipped,
    )


def write_schedule_csv(
    path: Union[str, Path],
    schedule: Schedule,
    people: Sequence[Person],
    holidays: Iterable[Holiday] = (),
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(encode_schedule(schedule, people, holidays))
    return path


def read_schedule_csv(
    path: Union[str, Path],
    people: Sequence[Person],
    holidays: Iterable[Holiday] = (),
    year: Optional[int] = None,
) -> ImportResult:
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except OSError as e:
        raise CsvImportError(f"Failed to read the file: {e}") from e
    return decode_schedule(text, people, holidays, year=year)
