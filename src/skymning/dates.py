"""Calendar helpers for skymning. Pure functions, no side effects.

Dates travel through the code base as ISO strings (YYYY-MM-DD); they are
parsed at the edges of each function and formatted back on return.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable

MIN_YEAR = 2020
MAX_YEAR = 2100

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidArgumentError(ValueError):
    """Raised for malformed dates, out-of-range periods and too-short inputs."""


@dataclass(frozen=True)
class ISOWeekKey:
    """ISO-8601 week key. The year is the ISO year, not the calendar year."""

    year: int
    week: int

    def __str__(self) -> str:
        return f"{self.year}-W{self.week:02d}"


@dataclass(frozen=True)
class DateRange:
    start_date: str  # inclusive
    end_date: str  # exclusive


def parse_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string to a date object."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidArgumentError(f"Malformed date: {value!r} (expected YYYY-MM-DD)")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid date: {value!r}") from exc


def today(clock: Callable[[], date] = date.today) -> str:
    """Return the current local date as YYYY-MM-DD."""
    return clock().isoformat()


def add_days(value: str, days: int) -> str:
    return (parse_date(value) + timedelta(days=days)).isoformat()


def subtract_days(value: str, days: int) -> str:
    return add_days(value, -days)


def day_of_week(value: str) -> int:
    """Day of week with 0=Sunday .. 6=Saturday."""
    return parse_date(value).isoweekday() % 7


def day_of_year(value: str) -> int:
    """Ordinal day within the calendar year, Jan 1 = 1."""
    return parse_date(value).timetuple().tm_yday


def validate_year(year: int) -> int:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidArgumentError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}")
    return year


def validate_month(month: int) -> int:
    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"Month must be between 1 and 12, got {month}")
    return month


def validate_iso_week(key: ISOWeekKey) -> ISOWeekKey:
    """Check the week number exists in its ISO year (some years have 53)."""
    if not 1 <= key.week <= 53:
        raise InvalidArgumentError(f"Week must be between 1 and 53, got {key.week}")
    try:
        date.fromisocalendar(key.year, key.week, 1)
    except ValueError as exc:
        raise InvalidArgumentError(f"ISO year {key.year} has no week {key.week}") from exc
    return key


def iso_week_key_of(value: str) -> ISOWeekKey:
    iso = parse_date(value).isocalendar()
    return ISOWeekKey(year=iso[0], week=iso[1])


def current_iso_week(today_str: str) -> ISOWeekKey:
    return iso_week_key_of(today_str)


def date_from_iso_week_key(key: ISOWeekKey) -> str:
    """Return the Monday of the given ISO week."""
    validate_iso_week(key)
    return date.fromisocalendar(key.year, key.week, 1).isoformat()


def adjacent_iso_week(key: ISOWeekKey, direction: str) -> ISOWeekKey:
    """Step exactly one ISO week back ("prev") or forward ("next")."""
    if direction not in ("prev", "next"):
        raise InvalidArgumentError(f"Direction must be 'prev' or 'next', got {direction!r}")
    step = -7 if direction == "prev" else 7
    return iso_week_key_of(add_days(date_from_iso_week_key(key), step))


def week_date_range(key: ISOWeekKey) -> DateRange:
    monday = date_from_iso_week_key(key)
    return DateRange(start_date=monday, end_date=add_days(monday, 7))


def week_days(key: ISOWeekKey) -> list[str]:
    """The seven dates of an ISO week, Monday first."""
    monday = date_from_iso_week_key(key)
    return [add_days(monday, i) for i in range(7)]


def month_date_range(year: int, month: int) -> DateRange:
    validate_month(month)
    try:
        start = date(year, month, 1)
        if month == 12:
            end = date(year + 1, 1, 1)
        else:
            end = date(year, month + 1, 1)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid year: {year}") from exc
    return DateRange(start_date=start.isoformat(), end_date=end.isoformat())


def adjacent_month(year: int, month: int, direction: str) -> tuple[int, int]:
    validate_month(month)
    if direction == "prev":
        return (year - 1, 12) if month == 1 else (year, month - 1)
    if direction == "next":
        return (year + 1, 1) if month == 12 else (year, month + 1)
    raise InvalidArgumentError(f"Direction must be 'prev' or 'next', got {direction!r}")


def iso_weeks_overlapping_month(year: int, month: int) -> list[ISOWeekKey]:
    """All ISO weeks with at least one day inside the month, in order."""
    month_range = month_date_range(year, month)
    first = parse_date(month_range.start_date)
    last = parse_date(month_range.end_date) - timedelta(days=1)

    weeks: list[ISOWeekKey] = []
    current = first - timedelta(days=first.weekday())  # Monday on or before the 1st
    while current <= last:
        key = iso_week_key_of(current.isoformat())
        if key not in weeks:
            weeks.append(key)
        current += timedelta(days=7)
    return weeks
