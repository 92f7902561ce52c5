"""Excel export of a duty schedule."""
import io
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from dutyrota.engine.overlap import holidays_in_week
from dutyrota.engine.stats import counts_to_dataframe, recount_assignments
from dutyrota.models.assignment import AssignmentKind
from dutyrota.models.holiday import Holiday
from dutyrota.models.person import Person
from dutyrota.models.schedule import DutyCount, Schedule
from dutyrota.utils.dates import format_iso

from .csv_codec import CSV_HEADERS, assigned_label

# Row fills by week state
ROW_COLORS = {
    AssignmentKind.BLACKOUT: "DDDDDD",
    AssignmentKind.UNAVAILABLE: "FFC7CE",
    AssignmentKind.UNASSIGNED: "FFF2CC",
}
HOLIDAY_COLOR = "DDEEFF"

THIN = Side(border_style="thin", color="CCCCCC")
BORDER_THIN = Border(top=THIN, bottom=THIN, left=THIN, right=THIN)

COLUMN_WIDTHS = [14, 14, 22, 36, 40]


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _write_header(ws, headers: List[str]) -> None:
    for j, title in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=j, value=title)
        cell.font = Font(bold=True)
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = BORDER_THIN
    ws.freeze_panes = "A2"


def export_schedule_to_excel(
    schedule: Schedule,
    people: List[Person],
    output: Union[str, Path, io.BytesIO],
    holidays: Iterable[Holiday] = (),
    counts: Optional[Dict[int, DutyCount]] = None,
    title: str = "",
) -> None:
    """
    Write the schedule to an Excel workbook.

    Args:
        schedule: Schedule to export
        people: Roster used to display names
        output: File path or BytesIO buffer
        holidays: Holiday list for the Holidays column
        counts: Per-person totals; recounted from the schedule if omitted
        title: Optional title written above the summary table
    """
    holiday_list = list(holidays)
    if counts is None:
        counts = recount_assignments(schedule, people)

    wb = Workbook()

    # ========== Schedule Sheet ==========
    ws = wb.active
    ws.title = "Schedule"
    _write_header(ws, CSV_HEADERS)

    for r, week in enumerate(schedule.weeks, start=2):
        in_week = holidays_in_week(week.start, week.end, holiday_list)
        values = [
            format_iso(week.start),
            format_iso(week.end),
            assigned_label(week.assignment, people),
            "\n".join(h.label() for h in in_week),
            week.notes,
        ]
        color = ROW_COLORS.get(week.assignment.kind)
        if color is None and week.has_holiday:
            color = HOLIDAY_COLOR
        for j, val in enumerate(values, start=1):
            cell = ws.cell(row=r, column=j, value=val)
            cell.border = BORDER_THIN
            cell.alignment = Alignment(vertical="top", wrap_text=j >= 4)
            if color:
                cell.fill = _fill(color)

    for i, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(i)].width = width

    # ========== Summary Sheet ==========
    ws_sum = wb.create_sheet("Summary")
    start_row = 1
    if title:
        ws_sum.cell(row=1, column=1, value=title).font = Font(bold=True, size=14)
        ws_sum.cell(row=2, column=1, value=f"Year {schedule.year}")
        start_row = 4

    df = counts_to_dataframe(counts, people)
    for j, col in enumerate(df.columns, start=1):
        ws_sum.cell(row=start_row, column=j, value=col).font = Font(bold=True)
    for i in range(len(df)):
        for j in range(len(df.columns)):
            value = df.iat[i, j]
            ws_sum.cell(row=start_row + 1 + i, column=1 + j, value=value if j == 0 else int(value))
    for i in range(1, len(df.columns) + 1):
        ws_sum.column_dimensions[get_column_letter(i)].width = 18

    if isinstance(output, io.BytesIO):
        wb.save(output)
    else:
        wb.save(str(output))
