"""Configuration file management for skymning.

Reads and writes ~/.skymning/config.json for settings that don't belong in the DB
(database location, analytics windows and gating thresholds).
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from skymning.insight import MOOD_INSIGHT_DAYS
from skymning.streaks import MAX_STREAK_ENTRIES
from skymning.weekday import MIN_PATTERN_ENTRIES, MIN_PATTERN_WEEKDAYS, WEEKDAY_PATTERN_DAYS

DEFAULT_CONFIG_PATH: Path = Path.home() / ".skymning" / "config.json"


@dataclass
class AnalyticsSettings:
    mood_insight_days: int = MOOD_INSIGHT_DAYS
    weekday_pattern_days: int = WEEKDAY_PATTERN_DAYS
    weekday_min_entries: int = MIN_PATTERN_ENTRIES
    weekday_min_weekdays: int = MIN_PATTERN_WEEKDAYS
    streak_window: int = MAX_STREAK_ENTRIES


def load_config(config_path: Path | None = None) -> dict:
    """Load config from JSON file. Returns {} if file missing or invalid."""
    path = config_path or DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return {}


def save_config(data: dict, config_path: Path | None = None) -> None:
    """Write config dict to JSON file. Creates parent dirs if needed."""
    path = config_path or DEFAULT_CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def get_db_path(config_path: Path | None = None) -> Path | None:
    """Return the configured database path, or None if not set."""
    config = load_config(config_path)
    raw = config.get("db_path")
    if raw:
        return Path(raw).expanduser()
    return None


def set_db_path(path: Path, config_path: Path | None = None) -> None:
    """Persist the database path to config."""
    config = load_config(config_path)
    config["db_path"] = str(path)
    save_config(config, config_path)


def get_analytics_settings(config_path: Path | None = None) -> AnalyticsSettings:
    """Analytics settings from the "analytics" section, defaults for the rest.

    Unknown keys and non-positive or non-integer values are ignored.
    """
    section = load_config(config_path).get("analytics")
    settings = AnalyticsSettings()
    if not isinstance(section, dict):
        return settings
    for name in settings.__dataclass_fields__:
        value = section.get(name)
        if isinstance(value, int) and not isinstance(value, bool) and value > 0:
            setattr(settings, name, value)
    return settings
