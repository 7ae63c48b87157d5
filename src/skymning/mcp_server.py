"""MCP server for skymning.

Exposes the journal's streak, insight and overview views as MCP tools so an
assistant can look at them mid-conversation.
Run via: python3 -m skymning.mcp_server
"""
from __future__ import annotations

from datetime import date
from typing import Any

from mcp.server.fastmcp import FastMCP

from skymning.dates import InvalidArgumentError, current_iso_week, parse_date

mcp = FastMCP(name="skymning")


def _get_db():
    from skymning.config import get_db_path
    from skymning.db import Database
    return Database(get_db_path())


def _today() -> str:
    return date.today().isoformat()


@mcp.tool()
def get_streak() -> dict[str, Any]:
    """Get the current journaling streak and the longest streak."""
    db = _get_db()
    try:
        from skymning.config import get_analytics_settings
        from skymning.queries import get_streak as query_streak
        return query_streak(db, _today(), get_analytics_settings())
    finally:
        db.close()


@mcp.tool()
def get_mood_insight() -> dict[str, Any]:
    """Get the mood trend, stability, level and message for the last two weeks."""
    db = _get_db()
    try:
        from skymning.config import get_analytics_settings
        from skymning.queries import get_mood_insight as query_insight
        settings = get_analytics_settings()
        insight = query_insight(db, _today(), settings)
        if insight is None:
            return {"error": f"Not enough entries in the last {settings.mood_insight_days} days."}
        return insight
    finally:
        db.close()


@mcp.tool()
def get_weekday_patterns() -> dict[str, Any]:
    """Get average mood per weekday with the best and worst day."""
    db = _get_db()
    try:
        from skymning.config import get_analytics_settings
        from skymning.queries import get_weekday_patterns as query_patterns
        result = query_patterns(db, _today(), get_analytics_settings())
        if result is None:
            return {"error": "Not enough entries to find weekday patterns."}
        return result
    finally:
        db.close()


@mcp.tool()
def get_week(year: int = 0, week: int = 0) -> dict[str, Any]:
    """Get entries and average mood for an ISO week (default: current week)."""
    current = current_iso_week(_today())
    db = _get_db()
    try:
        from skymning.queries import get_week_overview
        return get_week_overview(db, year or current.year, week or current.week)
    except InvalidArgumentError as exc:
        return {"error": str(exc)}
    finally:
        db.close()


@mcp.tool()
def get_month(year: int = 0, month: int = 0) -> dict[str, Any]:
    """Get the monthly overview: weeks, distribution and comparison with last month."""
    ref = parse_date(_today())
    db = _get_db()
    try:
        from skymning.queries import get_monthly_overview
        return get_monthly_overview(db, year or ref.year, month or ref.month)
    except InvalidArgumentError as exc:
        return {"error": str(exc)}
    finally:
        db.close()


@mcp.tool()
def add_entry(mood: int, summary: str, entry_date: str = "") -> dict[str, Any]:
    """Write or update a daily entry.

    mood: 1 (worst) to 5 (best).
    entry_date: YYYY-MM-DD, defaults to today. Up to 5 days back can be filled in.
    """
    db = _get_db()
    try:
        from skymning.queries import save_entry
        return save_entry(db, mood, summary, _today(), date=entry_date or None)
    except InvalidArgumentError as exc:
        return {"error": str(exc)}
    finally:
        db.close()


@mcp.tool()
def delete_entry(entry_date: str) -> dict[str, Any]:
    """Delete the entry for a date (YYYY-MM-DD)."""
    db = _get_db()
    try:
        from skymning.queries import remove_entry
        return {"date": entry_date, "deleted": remove_entry(db, entry_date)}
    except InvalidArgumentError as exc:
        return {"error": str(exc)}
    finally:
        db.close()


@mcp.tool()
def set_week_summary(summary: str, year: int = 0, week: int = 0) -> dict[str, Any]:
    """Write the reflection for an ISO week (default: current week)."""
    current = current_iso_week(_today())
    db = _get_db()
    try:
        from skymning.queries import save_weekly_summary
        return save_weekly_summary(db, year or current.year, week or current.week, summary)
    except InvalidArgumentError as exc:
        return {"error": str(exc)}
    finally:
        db.close()


@mcp.tool()
def set_month_summary(summary: str, year: int = 0, month: int = 0) -> dict[str, Any]:
    """Write the reflection for a month (default: current month)."""
    ref = parse_date(_today())
    db = _get_db()
    try:
        from skymning.queries import save_monthly_summary
        return save_monthly_summary(db, year or ref.year, month or ref.month, summary)
    except InvalidArgumentError as exc:
        return {"error": str(exc)}
    finally:
        db.close()


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
