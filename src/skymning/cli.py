"""CLI commands for skymning."""

from __future__ import annotations

import argparse
import calendar
import logging
import sys
from pathlib import Path

from rich.logging import RichHandler

from skymning.config import AnalyticsSettings, get_analytics_settings, get_db_path, set_db_path
from skymning.dates import (
    InvalidArgumentError,
    current_iso_week,
    parse_date,
    today as current_date,
)
from skymning.db import Database
from skymning.display import (
    console,
    print_dashboard,
    print_entry_deleted,
    print_entry_saved,
    print_error,
    print_insight,
    print_month,
    print_no_data_message,
    print_summary_saved,
    print_week,
    print_weekday_patterns,
)
from skymning.queries import (
    get_dashboard,
    get_monthly_overview,
    get_mood_insight,
    get_week_overview,
    get_weekday_patterns,
    remove_entry,
    save_entry,
    save_monthly_summary,
    save_weekly_summary,
)


def _date_arg(value: str) -> str:
    try:
        parse_date(value)
    except InvalidArgumentError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return value


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="skymning",
        description="Daily mood journal with streaks and insights",
    )
    parser.add_argument("--db", default=None, help="Path to the journal database")
    parser.add_argument("--today", type=_date_arg, default=None, help="Override today's date (YYYY-MM-DD)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("dashboard", help="Show main dashboard")
    add_parser = subparsers.add_parser("add", help="Write or update a daily entry")
    add_parser.add_argument("--mood", "-m", type=int, required=True, choices=range(1, 6), help="Mood 1-5")
    add_parser.add_argument("--summary", "-s", required=True, help="Short reflection")
    add_parser.add_argument("--date", "-d", type=_date_arg, default=None, help="Date to fill in (default today)")
    week_parser = subparsers.add_parser("week", help="Show one ISO week")
    week_parser.add_argument("--year", type=int, default=None)
    week_parser.add_argument("--week", type=int, default=None)
    month_parser = subparsers.add_parser("month", help="Show one month overview")
    month_parser.add_argument("--year", type=int, default=None)
    month_parser.add_argument("--month", type=int, default=None)
    subparsers.add_parser("patterns", help="Mood per weekday")
    subparsers.add_parser("insight", help="Mood trend over the last two weeks")
    summary_parser = subparsers.add_parser("summary", help="Write the reflection for a week or a month")
    period = summary_parser.add_mutually_exclusive_group(required=True)
    period.add_argument("--week", type=int, help="ISO week number")
    period.add_argument("--month", type=int, help="Month number 1-12")
    summary_parser.add_argument("--year", type=int, default=None, help="Default: the current year")
    summary_parser.add_argument("--text", "-t", required=True, help="The reflection")
    delete_parser = subparsers.add_parser("delete", help="Delete the entry for a date")
    delete_parser.add_argument("--date", "-d", type=_date_arg, required=True)
    config_parser = subparsers.add_parser("config", help="Save settings to the config file")
    config_parser.add_argument("--db-path", required=True, help="Where the journal database lives")
    return parser


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "dashboard"
    setup_logging(args.verbose)

    if command == "config":
        do_config(args.db_path)
        return

    settings = get_analytics_settings()
    today_str = args.today or current_date()
    db_path = Path(args.db).expanduser() if args.db else get_db_path()

    db = Database(db_path)

    try:
        if command == "dashboard":
            do_dashboard(db, today_str, settings)
        elif command == "add":
            do_add(db, today_str, mood=args.mood, summary=args.summary, date=args.date)
        elif command == "week":
            do_week(db, today_str, year=args.year, week=args.week)
        elif command == "month":
            do_month(db, today_str, year=args.year, month=args.month)
        elif command == "patterns":
            do_patterns(db, today_str, settings)
        elif command == "insight":
            do_insight(db, today_str, settings)
        elif command == "summary":
            do_summary(db, today_str, text=args.text, year=args.year, week=args.week, month=args.month)
        elif command == "delete":
            do_delete(db, date=args.date)
    except InvalidArgumentError as exc:
        print_error(str(exc))
        sys.exit(2)
    finally:
        db.close()


def do_dashboard(db: Database, today: str, settings: AnalyticsSettings | None = None) -> dict:
    """Show the dashboard. Returns the data shown (useful for testing)."""
    data = get_dashboard(db, today, settings)
    if not data["has_entries"]:
        print_no_data_message()
        return data
    print_dashboard(data)
    return data


def do_add(db: Database, today: str, mood: int, summary: str, date: str | None = None) -> dict:
    entry = save_entry(db, mood, summary, today, date=date)
    print_entry_saved(entry)
    return entry


def do_week(db: Database, today: str, year: int | None = None, week: int | None = None) -> dict:
    """Show one ISO week; defaults to the current week."""
    current = current_iso_week(today)
    data = get_week_overview(
        db,
        year if year is not None else current.year,
        week if week is not None else current.week,
    )
    print_week(data)
    return data


def do_month(db: Database, today: str, year: int | None = None, month: int | None = None) -> dict:
    """Show one month; defaults to the current month."""
    ref = parse_date(today)
    data = get_monthly_overview(
        db,
        year if year is not None else ref.year,
        month if month is not None else ref.month,
    )
    print_month(data)
    return data


def do_patterns(db: Database, today: str, settings: AnalyticsSettings | None = None) -> dict | None:
    settings = settings or AnalyticsSettings()
    result = get_weekday_patterns(db, today, settings)
    print_weekday_patterns(result, settings.weekday_pattern_days)
    return result


def do_insight(db: Database, today: str, settings: AnalyticsSettings | None = None) -> dict | None:
    settings = settings or AnalyticsSettings()
    result = get_mood_insight(db, today, settings)
    print_insight(result, settings.mood_insight_days)
    return result


def do_summary(
    db: Database,
    today: str,
    text: str,
    year: int | None = None,
    week: int | None = None,
    month: int | None = None,
) -> dict:
    """Save a weekly summary when `week` is given, else a monthly one."""
    if week is not None:
        year = year if year is not None else current_iso_week(today).year
        saved = save_weekly_summary(db, year, week, text)
        print_summary_saved(f"Week {saved['week']}, {saved['year']}", saved["summary"])
        return saved

    if month is None:
        raise InvalidArgumentError("Either a week or a month is required")
    year = year if year is not None else parse_date(today).year
    saved = save_monthly_summary(db, year, month, text)
    print_summary_saved(f"{calendar.month_name[saved['month']]} {saved['year']}", saved["summary"])
    return saved


def do_delete(db: Database, date: str) -> bool:
    deleted = remove_entry(db, date)
    print_entry_deleted(date, deleted)
    return deleted


def do_config(db_path: str) -> Path:
    """Persist the database location so later runs pick it up."""
    path = Path(db_path).expanduser().resolve()
    set_db_path(path)
    console.print(f"Journal database set to [bold]{path}[/]")
    return path


if __name__ == "__main__":
    main()
