"""SQLite database layer for skymning."""

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from skymning.dates import InvalidArgumentError, parse_date

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".skymning" / "journal.db"


def _now() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


class Database:
    """SQLite database manager with WAL mode."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or DEFAULT_DB_PATH
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.init_db()
        logger.debug("Opened journal database at %s", self.db_path)

    def init_db(self) -> None:
        """Create tables if they do not exist."""
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS entries (
                date TEXT PRIMARY KEY,
                mood INTEGER NOT NULL CHECK (mood BETWEEN 1 AND 5),
                summary TEXT NOT NULL,
                created_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS weekly_summaries (
                year INTEGER NOT NULL,
                week INTEGER NOT NULL,
                summary TEXT NOT NULL,
                created_at TEXT NOT NULL,
                UNIQUE (year, week)
            );

            CREATE TABLE IF NOT EXISTS monthly_summaries (
                year INTEGER NOT NULL,
                month INTEGER NOT NULL,
                summary TEXT NOT NULL,
                created_at TEXT NOT NULL,
                UNIQUE (year, month)
            );

            CREATE TABLE IF NOT EXISTS insight_messages (
                date TEXT NOT NULL,
                entry_count INTEGER NOT NULL,
                insight_key TEXT NOT NULL,
                message TEXT NOT NULL,
                PRIMARY KEY (date, entry_count, insight_key)
            );
        """)
        self.conn.commit()

    # ── Entries ──────────────────────────────────────────────────────────────

    def upsert_entry(self, date: str, mood: int, summary: str) -> dict:
        """Insert or replace the entry for a date. One entry per date."""
        parse_date(date)
        if not 1 <= mood <= 5:
            raise InvalidArgumentError(f"Mood must be between 1 and 5, got {mood}")
        self.conn.execute(
            "INSERT INTO entries (date, mood, summary, created_at) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(date) DO UPDATE SET mood = excluded.mood, summary = excluded.summary",
            (date, mood, summary, _now()),
        )
        self.conn.commit()
        logger.debug("Saved entry for %s (mood %d)", date, mood)
        return self.get_entry(date)

    def get_entry(self, date: str) -> dict | None:
        """Get the entry for a specific date."""
        row = self.conn.execute(
            "SELECT * FROM entries WHERE date = ?", (date,)
        ).fetchone()
        return dict(row) if row else None

    def delete_entry(self, date: str) -> bool:
        cursor = self.conn.execute("DELETE FROM entries WHERE date = ?", (date,))
        self.conn.commit()
        return cursor.rowcount > 0

    def has_any_entries(self) -> bool:
        row = self.conn.execute("SELECT 1 FROM entries LIMIT 1").fetchone()
        return row is not None

    def get_entries_range(self, start_date: str, end_date: str) -> list[dict]:
        """Get entries in [start_date, end_date), oldest first."""
        rows = self.conn.execute(
            "SELECT * FROM entries WHERE date >= ? AND date < ? ORDER BY date",
            (start_date, end_date),
        ).fetchall()
        return [dict(row) for row in rows]

    def get_entries_since(self, start_date: str) -> list[dict]:
        """Get entries on or after start_date, oldest first."""
        rows = self.conn.execute(
            "SELECT * FROM entries WHERE date >= ? ORDER BY date",
            (start_date,),
        ).fetchall()
        return [dict(row) for row in rows]

    def get_recent_entries(self, limit: int) -> list[dict]:
        """Get the most recent entries, newest first."""
        rows = self.conn.execute(
            "SELECT * FROM entries ORDER BY date DESC LIMIT ?", (limit,)
        ).fetchall()
        return [dict(row) for row in rows]

    def get_recent_dates(self, limit: int) -> list[str]:
        """Get the most recent entry dates, newest first."""
        rows = self.conn.execute(
            "SELECT date FROM entries ORDER BY date DESC LIMIT ?", (limit,)
        ).fetchall()
        return [row["date"] for row in rows]

    # ── Summaries ────────────────────────────────────────────────────────────

    def set_weekly_summary(self, year: int, week: int, summary: str) -> None:
        self.conn.execute(
            "INSERT INTO weekly_summaries (year, week, summary, created_at) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(year, week) DO UPDATE SET summary = excluded.summary",
            (year, week, summary, _now()),
        )
        self.conn.commit()

    def get_weekly_summary(self, year: int, week: int) -> str | None:
        row = self.conn.execute(
            "SELECT summary FROM weekly_summaries WHERE year = ? AND week = ?",
            (year, week),
        ).fetchone()
        return row["summary"] if row else None

    def set_monthly_summary(self, year: int, month: int, summary: str) -> None:
        self.conn.execute(
            "INSERT INTO monthly_summaries (year, month, summary, created_at) VALUES (?, ?, ?, ?) "
            "ON CONFLICT(year, month) DO UPDATE SET summary = excluded.summary",
            (year, month, summary, _now()),
        )
        self.conn.commit()

    def get_monthly_summary(self, year: int, month: int) -> str | None:
        row = self.conn.execute(
            "SELECT summary FROM monthly_summaries WHERE year = ? AND month = ?",
            (year, month),
        ).fetchone()
        return row["summary"] if row else None

    # ── Insight message cache ────────────────────────────────────────────────

    def get_insight_message(self, date: str, entry_count: int, insight_key: str) -> str | None:
        """Cached insight message for a day, entry count and insight, if any."""
        row = self.conn.execute(
            "SELECT message FROM insight_messages "
            "WHERE date = ? AND entry_count = ? AND insight_key = ?",
            (date, entry_count, insight_key),
        ).fetchone()
        return row["message"] if row else None

    def put_insight_message(self, date: str, entry_count: int, insight_key: str, message: str) -> None:
        """Cache an insight message. Only the latest message is kept."""
        self.conn.execute("DELETE FROM insight_messages")
        self.conn.execute(
            "INSERT INTO insight_messages (date, entry_count, insight_key, message) VALUES (?, ?, ?, ?)",
            (date, entry_count, insight_key, message),
        )
        self.conn.commit()

    def close(self) -> None:
        """Close the database connection."""
        self.conn.close()
