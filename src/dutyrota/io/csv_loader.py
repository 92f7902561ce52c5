"""CSV loading and saving for roster data."""
from pathlib import Path
from typing import List, Union

import pandas as pd

from dutyrota.models.person import Leave, Person
from dutyrota.utils.logging_setup import get_logger

logger = get_logger("dutyrota.io.csv_loader")

TEAM_COLUMNS = ["id", "name", "leave"]


def _safe_int(value, default: int = 0) -> int:
    """Safely convert value to int."""
    try:
        return int(value)
    except (ValueError, TypeError):
        return default


def parse_leave(text: str) -> List[Leave]:
    """Parse ``start:end;start:end``; pieces without a colon are dropped."""
    leave = []
    for chunk in str(text or "").split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        if ":" not in chunk:
            logger.warning(f"Ignoring leave entry without ':' separator: {chunk!r}")
            continue
        start, end = chunk.split(":", 1)
        leave.append(Leave(start=start.strip(), end=end.strip()))
    return leave


def format_leave(leave: List[Leave]) -> str:
    return ";".join(f"{lv.start}:{lv.end}" for lv in leave)


def load_team(source: Union[str, Path, pd.DataFrame]) -> List[Person]:
    """
    Load a roster from a CSV file or DataFrame.

    Args:
        source: Path to CSV file or pandas DataFrame with a ``name`` column
            and optional ``id`` and ``leave`` columns

    Returns:
        List of Person objects in file order
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype=str)

    df = df.fillna("")

    if "name" not in df.columns:
        raise ValueError("CSV must have a 'name' column")

    people: List[Person] = []
    used_ids = set()
    for _, row in df.iterrows():
        name = str(row["name"]).strip()
        if not name:
            continue
        pid = _safe_int(row.get("id", ""), 0)
        if pid <= 0 or pid in used_ids:
            pid = 0  # assigned below
        person = Person(id=pid, name=name, leave=parse_leave(row.get("leave", "")))
        if pid:
            used_ids.add(pid)
        people.append(person)

    next_id = max(used_ids, default=0) + 1
    for p in people:
        if p.id == 0:
            p.id = next_id
            used_ids.add(next_id)
            next_id += 1

    return people


def save_team(people: List[Person], path: Union[str, Path]) -> None:
    """Save a roster to CSV."""
    rows = [{"id": p.id, "name": p.name, "leave": format_leave(p.leave)} for p in people]
    df = pd.DataFrame(rows, columns=TEAM_COLUMNS)
    df.to_csv(path, index=False)


def team_to_dataframe(people: List[Person]) -> pd.DataFrame:
    """Roster as a table for display."""
    if not people:
        return pd.DataFrame(columns=["id", "name", "leave_count"])
    return pd.DataFrame(
        [{"id": p.id, "name": p.name, "leave_count": len(p.leave)} for p in people]
    )
