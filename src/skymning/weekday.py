"""Weekday mood patterns over a trailing window."""

from __future__ import annotations

from dataclasses import dataclass

from skymning.dates import day_of_week, subtract_days

WEEKDAY_PATTERN_DAYS = 90
MIN_PATTERN_ENTRIES = 14
MIN_PATTERN_WEEKDAYS = 3

DAY_NAMES: list[str] = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]


@dataclass(frozen=True)
class WeekdayPattern:
    day_index: int  # 0=Sunday .. 6=Saturday
    day_name: str
    average: float
    count: int


@dataclass(frozen=True)
class WeekdayPatternResult:
    patterns: list[WeekdayPattern]
    best_day: WeekdayPattern
    worst_day: WeekdayPattern
    total_entries: int


def weekday_patterns(
    records: list[dict],
    today: str,
    window_days: int = WEEKDAY_PATTERN_DAYS,
    min_entries: int = MIN_PATTERN_ENTRIES,
    min_weekdays: int = MIN_PATTERN_WEEKDAYS,
) -> WeekdayPatternResult | None:
    """Average mood per weekday for records within `window_days` of today.

    Returns None when there are fewer than `min_entries` records in the
    window or fewer than `min_weekdays` distinct weekdays with data.
    """
    cutoff = subtract_days(today, window_days)
    in_window = [r for r in records if r["date"] >= cutoff]
    if len(in_window) < min_entries:
        return None

    sums = [0] * 7
    counts = [0] * 7
    for record in in_window:
        index = day_of_week(record["date"])
        sums[index] += record["mood"]
        counts[index] += 1

    patterns = [
        WeekdayPattern(
            day_index=i,
            day_name=DAY_NAMES[i],
            average=sums[i] / counts[i],
            count=counts[i],
        )
        for i in range(7)
        if counts[i] > 0
    ]
    if len(patterns) < min_weekdays:
        return None

    # Strict comparisons keep the lowest day_index on ties.
    best = patterns[0]
    worst = patterns[0]
    for pattern in patterns[1:]:
        if pattern.average > best.average:
            best = pattern
        if pattern.average < worst.average:
            worst = pattern

    return WeekdayPatternResult(
        patterns=patterns,
        best_day=best,
        worst_day=worst,
        total_entries=len(in_window),
    )
