"""Read and write operations on the journal, shared by the CLI and the MCP server.

Each function fetches a bounded set of rows from the Database, runs them
through the pure analytics modules and returns plain dicts. "Today" is always
passed in by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from skymning.config import AnalyticsSettings
from skymning.dates import (
    InvalidArgumentError,
    ISOWeekKey,
    adjacent_iso_week,
    adjacent_month,
    day_of_year,
    iso_week_key_of,
    iso_weeks_overlapping_month,
    month_date_range,
    parse_date,
    subtract_days,
    validate_iso_week,
    validate_month,
    validate_year,
    week_date_range,
    week_days,
)
from skymning.db import Database
from skymning.insight import insight_cache_key, insight_message, mood_insight
from skymning.periods import (
    WeekOverview,
    monthly_overview,
    period_mood_description,
    recent_mood_average,
    week_mood_description,
    week_overview,
)
from skymning.streaks import calculate_streak
from skymning.weekday import weekday_patterns

logger = logging.getLogger(__name__)

# Past days that can still be filled in after the fact.
MAX_DAYS_TO_FILL_IN = 5
MOOD_TREND_LIMIT = 50


def _settings(settings: AnalyticsSettings | None) -> AnalyticsSettings:
    return settings or AnalyticsSettings()


def _week_dict(week: WeekOverview | None) -> dict | None:
    if week is None:
        return None
    return {
        "year": week.key.year,
        "week": week.key.week,
        "entries": week.entries,
        "average_mood": week.average_mood,
        "summary": week.summary,
    }


def _clean_summary(summary: str) -> str:
    if not summary or not summary.strip():
        raise InvalidArgumentError("Summary must not be empty")
    return summary.strip()


def save_entry(db: Database, mood: int, summary: str, today: str, date: str | None = None) -> dict:
    """Create or update the entry for `date` (default today).

    Future dates and dates more than MAX_DAYS_TO_FILL_IN days back are refused.
    """
    target = date or today
    days_ago = (parse_date(today) - parse_date(target)).days
    if days_ago < 0:
        raise InvalidArgumentError(f"Cannot write an entry for a future date: {target}")
    if days_ago > MAX_DAYS_TO_FILL_IN:
        raise InvalidArgumentError(
            f"Entries can only be filled in up to {MAX_DAYS_TO_FILL_IN} days back"
        )
    return db.upsert_entry(target, mood, _clean_summary(summary))


def remove_entry(db: Database, date: str) -> bool:
    """Delete the entry for `date`. False when there was none."""
    parse_date(date)
    deleted = db.delete_entry(date)
    if deleted:
        logger.debug("Deleted entry for %s", date)
    return deleted


def save_weekly_summary(db: Database, year: int, week: int, summary: str) -> dict:
    """Create or replace the reflection for an ISO week."""
    key = validate_iso_week(ISOWeekKey(validate_year(year), week))
    text = _clean_summary(summary)
    db.set_weekly_summary(key.year, key.week, text)
    return {"year": key.year, "week": key.week, "summary": text}


def save_monthly_summary(db: Database, year: int, month: int, summary: str) -> dict:
    """Create or replace the reflection for a month."""
    validate_year(year)
    validate_month(month)
    text = _clean_summary(summary)
    db.set_monthly_summary(year, month, text)
    return {"year": year, "month": month, "summary": text}


def get_streak(db: Database, today: str, settings: AnalyticsSettings | None = None) -> dict:
    recent_dates = db.get_recent_dates(_settings(settings).streak_window)
    return asdict(calculate_streak(recent_dates, today))


def get_mood_insight(db: Database, today: str, settings: AnalyticsSettings | None = None) -> dict | None:
    """Insight over the last mood_insight_days, or None with too few entries.

    The rendered message is cached per day, entry count and insight.
    """
    cutoff = subtract_days(today, _settings(settings).mood_insight_days)
    entries = db.get_entries_since(cutoff)
    moods = [e["mood"] for e in reversed(entries)]  # most recent first
    insight = mood_insight(moods)
    if insight is None:
        return None

    key = insight_cache_key(insight)
    message = db.get_insight_message(today, insight.entry_count, key)
    if message is None:
        message = insight_message(insight, day_of_year(today))
        db.put_insight_message(today, insight.entry_count, key, message)
        logger.debug("Cached insight message for %s (%d entries)", today, insight.entry_count)

    return {
        "trend": insight.trend.value,
        "stability": insight.stability.value,
        "level": insight.level.value,
        "average": insight.average,
        "entry_count": insight.entry_count,
        "message": message,
    }


def get_weekday_patterns(db: Database, today: str, settings: AnalyticsSettings | None = None) -> dict | None:
    cfg = _settings(settings)
    entries = db.get_entries_since(subtract_days(today, cfg.weekday_pattern_days))
    result = weekday_patterns(
        entries,
        today,
        window_days=cfg.weekday_pattern_days,
        min_entries=cfg.weekday_min_entries,
        min_weekdays=cfg.weekday_min_weekdays,
    )
    return asdict(result) if result else None


def get_recent_mood(db: Database, today: str, days: int = 7) -> dict | None:
    """Average mood over the last `days` days (1..30)."""
    if not 1 <= days <= 30:
        raise InvalidArgumentError(f"Days must be between 1 and 30, got {days}")
    entries = db.get_entries_since(subtract_days(today, days))
    result = recent_mood_average(entries)
    if result is not None:
        result["description"] = period_mood_description(result["average"])
    return result


def get_mood_trend(db: Database, limit: int = MOOD_TREND_LIMIT) -> list[dict]:
    """The last `limit` moods, oldest first."""
    entries = db.get_recent_entries(limit)
    return [{"date": e["date"], "mood": e["mood"]} for e in reversed(entries)]


def get_week_overview(db: Database, year: int, week: int) -> dict:
    key = validate_iso_week(ISOWeekKey(validate_year(year), week))
    week_range = week_date_range(key)
    entries = db.get_entries_range(week_range.start_date, week_range.end_date)
    overview = week_overview(entries, key, db.get_weekly_summary(key.year, key.week))
    by_date = {e["date"]: e for e in entries}

    result = _week_dict(overview)
    result.update({
        "start_date": week_range.start_date,
        "end_date": week_range.end_date,
        "days": [{"date": d, "entry": by_date.get(d)} for d in week_days(key)],
        "description": week_mood_description(overview.average_mood),
        "previous": asdict(adjacent_iso_week(key, "prev")),
        "next": asdict(adjacent_iso_week(key, "next")),
    })
    return result


def get_monthly_overview(db: Database, year: int, month: int) -> dict:
    validate_year(year)
    validate_month(month)
    month_range = month_date_range(year, month)
    prev_year, prev_month = adjacent_month(year, month, "prev")
    prev_range = month_date_range(prev_year, prev_month)

    week_summaries: dict[ISOWeekKey, str] = {}
    for key in iso_weeks_overlapping_month(year, month):
        summary = db.get_weekly_summary(key.year, key.week)
        if summary:
            week_summaries[key] = summary

    overview = monthly_overview(
        db.get_entries_range(month_range.start_date, month_range.end_date),
        db.get_entries_range(prev_range.start_date, prev_range.end_date),
        year,
        month,
        week_summaries=week_summaries,
        month_summary=db.get_monthly_summary(year, month),
    )
    comparison = overview.comparison
    return {
        "year": overview.year,
        "month": overview.month,
        "weeks": [_week_dict(w) for w in overview.weeks],
        "overall_average": overview.overall_average,
        "total_entries": overview.total_entries,
        "distribution": overview.distribution,
        "description": period_mood_description(overview.overall_average),
        "comparison": {
            "current_average": comparison.current_average,
            "previous_average": comparison.previous_average,
            "delta": comparison.delta,
            "trend": comparison.trend.value if comparison.trend else None,
        },
        "best_week": _week_dict(overview.best_week),
        "worst_week": _week_dict(overview.worst_week),
        "summary": overview.summary,
        "previous_month": {"year": prev_year, "month": prev_month},
    }


def get_dashboard(db: Database, today: str, settings: AnalyticsSettings | None = None) -> dict:
    """Everything the dashboard shows, in one dict."""
    if not db.has_any_entries():
        return {"has_entries": False, "today": today}

    yesterday = subtract_days(today, 1)
    last_week = adjacent_iso_week(iso_week_key_of(today), "prev")
    return {
        "has_entries": True,
        "today": today,
        "today_entry": db.get_entry(today),
        "yesterday_entry": db.get_entry(yesterday),
        "yesterday": yesterday,
        "streak": get_streak(db, today, settings),
        "insight": get_mood_insight(db, today, settings),
        "weekday_patterns": get_weekday_patterns(db, today, settings),
        "recent_mood": get_recent_mood(db, today),
        "mood_trend": get_mood_trend(db),
        "last_week": {
            "year": last_week.year,
            "week": last_week.week,
            "summary": db.get_weekly_summary(last_week.year, last_week.week),
        },
    }
