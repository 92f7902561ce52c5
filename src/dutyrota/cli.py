from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from dutyrota.engine.assignment import regenerate
from dutyrota.engine.roster import Roster
from dutyrota.engine.stats import counts_to_dataframe, recount_assignments
from dutyrota.errors import DutyRotaError
from dutyrota.io.csv_codec import export_filename, read_schedule_csv, write_schedule_csv
from dutyrota.io.csv_loader import load_team
from dutyrota.io.excel_export import export_schedule_to_excel
from dutyrota.io.holidays import HolidayFetchResult, NagerDateProvider, load_holidays_file
from dutyrota.io.store import SettingsStore
from dutyrota.models.holiday import Holiday
from dutyrota.models.validated import ValidatedSettings
from dutyrota.utils.logging_setup import level_for_verbosity, setup_logging


def _load_roster(args: argparse.Namespace) -> Roster:
    if args.team:
        return Roster(load_team(args.team))
    return SettingsStore(args.store).load().roster


def _load_holidays(args: argparse.Namespace, year: int, country: str) -> HolidayFetchResult:
    if args.holidays:
        return load_holidays_file(args.holidays)
    if args.fetch_holidays:
        return NagerDateProvider(country).fetch(year)
    return HolidayFetchResult()


def _print_counts(counts, people, as_json: bool, extra: Optional[dict] = None) -> None:
    df = counts_to_dataframe(counts, people)
    if as_json:
        payload = dict(extra or {})
        payload["counts"] = df.to_dict(orient="records")
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    for key, value in (extra or {}).items():
        print(f" - {key}: {value}")
    print(df.to_string(index=False))


def cmd_generate(args: argparse.Namespace) -> int:
    stored = SettingsStore(args.store).load().settings
    overrides = {k: v for k, v in {
        "title": args.title,
        "year": args.year,
        "start_month": args.start_month,
        "start_weekday": args.start_weekday,
        "country_code": args.country,
    }.items() if v is not None}
    try:
        settings = ValidatedSettings(**{**stored.to_dict(), **overrides}).to_dataclass()
    except PydanticValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2

    roster = _load_roster(args)
    fetched = _load_holidays(args, settings.year, settings.country_code)
    if fetched.error:
        print(fetched.error, file=sys.stderr)

    result = regenerate(settings, roster.people, fetched.holidays)

    out = Path(args.out) if args.out else Path(export_filename(settings.year, settings.title))
    write_schedule_csv(out, result.schedule, roster.people, fetched.holidays)
    if args.excel:
        export_schedule_to_excel(
            result.schedule, roster.people, args.excel,
            holidays=fetched.holidays, counts=result.counts, title=settings.title,
        )

    summary = {"file": str(out), **result.schedule.summary()}
    weeks = result.schedule.to_dataframe(roster.names()) if args.weeks else None
    if weeks is not None and args.json_out:
        summary["schedule"] = weeks.to_dict(orient="records")
    _print_counts(result.counts, roster.people, args.json_out, summary)
    if weeks is not None and not args.json_out:
        print(weeks.to_string(index=False))
    return 0


def cmd_import(args: argparse.Namespace) -> int:
    roster = _load_roster(args)
    holidays: List[Holiday] = []
    if args.holidays:
        fetched = load_holidays_file(args.holidays)
        if fetched.error:
            print(fetched.error, file=sys.stderr)
        holidays = fetched.holidays

    try:
        imported = read_schedule_csv(args.csv, roster.people, holidays)
    except DutyRotaError as e:
        print(f"Error importing schedule from CSV: {e}", file=sys.stderr)
        return 1

    for warning in imported.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    counts = recount_assignments(imported.schedule, roster.people)
    summary = {"imported_weeks": len(imported.schedule), "skipped_rows": imported.skipped_rows}
    _print_counts(counts, roster.people, args.json_out, summary)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="dutyrota", description="Weekly duty rotation scheduler")
    p.add_argument("--store", default="data/dutyrota.json", help="Settings/roster JSON file")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--log-file", default=None, help="Optional rotating log file")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate and assign a schedule")
    g.add_argument("--team", help="Roster CSV (name[,id,leave]); defaults to the stored roster")
    g.add_argument("--holidays", help="Holiday CSV/JSON file with date,name")
    g.add_argument("--fetch-holidays", action="store_true", help="Fetch public holidays from Nager.Date")
    g.add_argument("--year", type=int)
    g.add_argument("--start-month", type=int, help="0=January .. 11=December")
    g.add_argument("--start-weekday", type=int, help="0=Sunday .. 6=Saturday")
    g.add_argument("--country", help="Two-letter country code for holiday lookup")
    g.add_argument("--title")
    g.add_argument("--out", help="Schedule CSV output path")
    g.add_argument("--excel", help="Optional .xlsx output path")
    g.add_argument("--weeks", action="store_true", help="Also print the week-by-week table")
    g.add_argument("--json", dest="json_out", action="store_true", help="JSON summary output")
    g.set_defaults(func=cmd_generate)

    i = sub.add_parser("import", help="Import a schedule CSV and recount duties")
    i.add_argument("csv", help="Schedule CSV to import")
    i.add_argument("--team", help="Roster CSV; defaults to the stored roster")
    i.add_argument("--holidays", help="Holiday CSV/JSON file with date,name")
    i.add_argument("--json", dest="json_out", action="store_true", help="JSON summary output")
    i.set_defaults(func=cmd_import)
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=level_for_verbosity(args.verbose), log_file=args.log_file)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
