"""Mood aggregation over weeks and months.

Pure functions that aggregate entry rows into averages, distributions and
overviews. No side effects, no DB access - accepts raw rows as input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from skymning.dates import (
    ISOWeekKey,
    adjacent_month,
    iso_weeks_overlapping_month,
    month_date_range,
    week_date_range,
)
from skymning.insight import MoodTrend

# Narrower than the insight trend threshold; month averages move less.
PERIOD_TREND_THRESHOLD = 0.15

MOOD_LABELS: dict[int, str] = {
    1: "Awful",
    2: "Bad",
    3: "Okay",
    4: "Good",
    5: "Great",
}

_WEEK_DESCRIPTIONS: list[tuple[float, str]] = [
    (4.5, "A really good week"),
    (4.0, "A good week overall"),
    (3.5, "A fairly good week"),
    (3.0, "A perfectly okay week"),
    (2.5, "A somewhat heavier week"),
    (2.0, "A tough week"),
]

_PERIOD_DESCRIPTIONS: list[tuple[float, str]] = [
    (4.5, "Really good days"),
    (4.0, "Good days overall"),
    (3.5, "Fairly good days"),
    (3.0, "Perfectly okay days"),
    (2.5, "Somewhat heavier days"),
    (2.0, "Some heavy days"),
]


@dataclass
class PeriodComparison:
    current_average: float | None
    previous_average: float | None
    delta: float | None
    trend: MoodTrend | None


@dataclass
class WeekOverview:
    key: ISOWeekKey
    entries: list[dict]
    average_mood: float | None
    summary: str | None = None


@dataclass
class MonthlyOverview:
    year: int
    month: int
    weeks: list[WeekOverview]
    overall_average: float | None
    total_entries: int
    distribution: dict[int, int]
    comparison: PeriodComparison
    best_week: WeekOverview | None = None
    worst_week: WeekOverview | None = None
    summary: str | None = None
    previous_month: tuple[int, int] | None = None


def mood_label(mood: int) -> str:
    return MOOD_LABELS.get(mood, "Unknown")


def _round_one_decimal(value: float) -> float:
    """Round half up to one decimal, so 3.45 shows as 3.5."""
    return math.floor(value * 10 + 0.5) / 10


def _describe(average: float | None, bands: list[tuple[float, str]], floor_text: str) -> str:
    if average is None:
        return ""
    rounded = _round_one_decimal(average)
    for threshold, text in bands:
        if rounded >= threshold:
            return text
    return floor_text


def week_mood_description(average: float | None) -> str:
    return _describe(average, _WEEK_DESCRIPTIONS, "A really hard week")


def period_mood_description(average: float | None) -> str:
    return _describe(average, _PERIOD_DESCRIPTIONS, "A tough period")


def average_mood(records: list[dict]) -> float | None:
    """Mean mood of the records, or None when there are none."""
    if not records:
        return None
    return sum(r["mood"] for r in records) / len(records)


def mood_distribution(records: list[dict]) -> dict[int, int]:
    """Count of records per mood value, zero-filled for 1..5."""
    counts = {mood: 0 for mood in MOOD_LABELS}
    for record in records:
        counts[record["mood"]] = counts.get(record["mood"], 0) + 1
    return counts


def recent_mood_average(records: list[dict]) -> dict | None:
    average = average_mood(records)
    if average is None:
        return None
    return {"average": average, "count": len(records)}


def compare_periods(current_average: float | None, previous_average: float | None) -> PeriodComparison:
    """Compare two period averages.

    Without data on either side there is no delta and no trend.
    """
    if current_average is None or previous_average is None:
        return PeriodComparison(current_average, previous_average, None, None)

    delta = current_average - previous_average
    rounded = round(delta, 9)
    if rounded > PERIOD_TREND_THRESHOLD:
        trend = MoodTrend.IMPROVING
    elif rounded < -PERIOD_TREND_THRESHOLD:
        trend = MoodTrend.DECLINING
    else:
        trend = MoodTrend.STABLE
    return PeriodComparison(current_average, previous_average, delta, trend)


def week_overview(records: list[dict], key: ISOWeekKey, summary: str | None = None) -> WeekOverview:
    """Entries of `records` that fall inside the ISO week, with their average."""
    week_range = week_date_range(key)
    week_entries = [
        r for r in records if week_range.start_date <= r["date"] < week_range.end_date
    ]
    return WeekOverview(
        key=key,
        entries=week_entries,
        average_mood=average_mood(week_entries),
        summary=summary,
    )


def week_overviews(
    month_records: list[dict],
    year: int,
    month: int,
    summaries: dict[ISOWeekKey, str] | None = None,
) -> list[WeekOverview]:
    """One overview per ISO week overlapping the month.

    Only entries inside the month are counted, so the first and last week may
    be partial.
    """
    month_range = month_date_range(year, month)
    in_month = [
        r for r in month_records if month_range.start_date <= r["date"] < month_range.end_date
    ]
    summaries = summaries or {}
    return [
        week_overview(in_month, key, summaries.get(key))
        for key in iso_weeks_overlapping_month(year, month)
    ]


def best_and_worst_week(weeks: list[WeekOverview]) -> tuple[WeekOverview, WeekOverview] | None:
    """Best and worst week by average mood.

    Needs at least two weeks with entries and distinct best and worst weeks.
    """
    with_entries = [w for w in weeks if w.average_mood is not None]
    if len(with_entries) < 2:
        return None

    best = with_entries[0]
    worst = with_entries[0]
    for week in with_entries[1:]:
        if week.average_mood > best.average_mood:
            best = week
        if week.average_mood < worst.average_mood:
            worst = week

    if best.key == worst.key:
        return None
    return best, worst


def monthly_overview(
    month_records: list[dict],
    previous_month_records: list[dict],
    year: int,
    month: int,
    week_summaries: dict[ISOWeekKey, str] | None = None,
    month_summary: str | None = None,
) -> MonthlyOverview:
    """Aggregate a month of entries into weeks, distribution and comparison."""
    weeks = week_overviews(month_records, year, month, week_summaries)
    month_range = month_date_range(year, month)
    in_month = [
        r for r in month_records if month_range.start_date <= r["date"] < month_range.end_date
    ]
    overall = average_mood(in_month)
    highlights = best_and_worst_week(weeks)

    return MonthlyOverview(
        year=year,
        month=month,
        weeks=weeks,
        overall_average=overall,
        total_entries=len(in_month),
        distribution=mood_distribution(in_month),
        comparison=compare_periods(overall, average_mood(previous_month_records)),
        best_week=highlights[0] if highlights else None,
        worst_week=highlights[1] if highlights else None,
        summary=month_summary,
        previous_month=adjacent_month(year, month, "prev"),
    )
