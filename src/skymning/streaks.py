"""Streak tracking for skymning."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from skymning.dates import parse_date

# Upper bound on how many recent dates the store hands to the streak walk.
MAX_STREAK_ENTRIES = 400


@dataclass
class StreakInfo:
    current_streak: int
    longest_streak: int
    last_entry_date: str | None  # YYYY-MM-DD
    is_active_today: bool


def get_streak_from_dates(dates: list[str], reference_date: str) -> int:
    """Given a list of entry dates and a reference date,
    count consecutive days backwards from reference_date."""
    if not dates:
        return 0

    date_set = {parse_date(d) for d in dates}
    current = parse_date(reference_date)

    streak = 0
    while current in date_set:
        streak += 1
        current -= timedelta(days=1)

    return streak


def compute_streak(recent_dates: list[str], today: str) -> int:
    """Current streak from entry dates ordered most-recent-first.

    The streak only counts if the latest entry is from today or yesterday;
    a full skipped day breaks it. The caller bounds the input size
    (see MAX_STREAK_ENTRIES).
    """
    if not recent_dates:
        return 0

    latest = parse_date(recent_dates[0])
    today_date = parse_date(today)
    if latest not in (today_date, today_date - timedelta(days=1)):
        return 0

    return get_streak_from_dates(recent_dates, recent_dates[0])


def longest_streak(dates: list[str]) -> int:
    """Longest run of consecutive days, in any input order."""
    if not dates:
        return 0

    sorted_dates = sorted({parse_date(d) for d in dates})
    longest = 1
    current = 1
    for i in range(1, len(sorted_dates)):
        if (sorted_dates[i] - sorted_dates[i - 1]).days == 1:
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def calculate_streak(recent_dates: list[str], today: str) -> StreakInfo:
    """Calculate streak details from entry dates ordered most-recent-first."""
    if not recent_dates:
        return StreakInfo(
            current_streak=0,
            longest_streak=0,
            last_entry_date=None,
            is_active_today=False,
        )

    current = compute_streak(recent_dates, today)
    return StreakInfo(
        current_streak=current,
        longest_streak=max(longest_streak(recent_dates), current),
        last_entry_date=recent_dates[0],
        is_active_today=recent_dates[0] == today,
    )
