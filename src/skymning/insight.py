"""Mood insight classification and message selection. Pure functions, no side effects.

An insight summarizes the last couple of weeks of moods: whether they are
trending up or down, how much they swing, and the overall level. The message
shown for an insight is picked deterministically from the insight and the day
of the year, so it stays the same through a day and changes from day to day.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from skymning.dates import InvalidArgumentError

TREND_THRESHOLD = 0.3
FLUCTUATION_THRESHOLD = 0.8
HIGH_LEVEL_THRESHOLD = 3.5
MEDIUM_LEVEL_THRESHOLD = 2.5
MIN_INSIGHT_ENTRIES = 4
MOOD_INSIGHT_DAYS = 14


class MoodTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class MoodStability(str, Enum):
    STABLE = "stable"
    FLUCTUATING = "fluctuating"


class MoodLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class MoodInsight:
    trend: MoodTrend
    stability: MoodStability
    average: float  # unrounded mean over the whole window
    level: MoodLevel
    entry_count: int


INSIGHT_MESSAGES: dict[tuple[MoodTrend, MoodLevel], list[str]] = {
    (MoodTrend.IMPROVING, MoodLevel.HIGH): [
        "A positive trend! You seem to have found a good rhythm.",
        "Things are heading up. Good to see.",
        "The last while has been good for you.",
        "Nice flow right now. Keep it up.",
        "Things seem to be rolling along nicely.",
        "You are on the right track right now.",
        "Lovely days lately. Keep going!",
    ],
    (MoodTrend.IMPROVING, MoodLevel.MEDIUM): [
        "It seems to be brightening a little. Well done.",
        "The trend is pointing upwards.",
        "Somewhat better lately.",
        "Slowly moving in the right direction.",
        "Step by step it gets better.",
        "A careful rise. That is positive.",
    ],
    (MoodTrend.IMPROVING, MoodLevel.LOW): [
        "It looks like it is getting a little better. Take it easy.",
        "Small steps in the right direction.",
        "A little lighter, even if it is still tough.",
        "A touch better. It shows.",
        "Carefully upwards. Good effort.",
        "It is slowly turning. Hang in there.",
    ],
    (MoodTrend.DECLINING, MoodLevel.HIGH): [
        "A bit heavier recently, but you have been doing well overall.",
        "Some tougher days, but the foundation is solid.",
        "A small dip, nothing to worry about.",
        "Somewhat slower right now, but you have margin.",
        "A temporary slump. You are doing well at heart.",
        "Some weaker days, but stable overall.",
    ],
    (MoodTrend.DECLINING, MoodLevel.MEDIUM): [
        "A somewhat heavier period right now. That is okay.",
        "Not the easiest days. Take care of yourself.",
        "Somewhat heavier lately.",
        "A small decline. Be kind to yourself.",
        "It has been a bit harder. It will pass.",
        "Some heavy days. Take it easy.",
    ],
    (MoodTrend.DECLINING, MoodLevel.LOW): [
        "A tough period. Good that you keep reflecting.",
        "Hard right now. Writing it down is the right call.",
        "Difficult days. Reflecting helps.",
        "A heavy stretch. But you keep going.",
        "Hard right now. Good that you stop and write.",
        "A rough time. You are doing what you can.",
    ],
    (MoodTrend.STABLE, MoodLevel.HIGH): [
        "Steadily good. Keep doing what you are doing.",
        "Even and good days.",
        "You seem to have found a good balance.",
        "Nice and stable. You are doing well.",
        "A fine, even stretch. Keep it up.",
        "Everything is rolling along well for you.",
    ],
    (MoodTrend.STABLE, MoodLevel.MEDIUM): [
        "Steady. Perfectly okay days.",
        "Calm and even right now.",
        "Neither up nor down. That is okay too.",
        "An even stretch. Sometimes that is exactly what you need.",
        "Steady in the middle. It works.",
        "No big swings. Calm and comfortable.",
    ],
    (MoodTrend.STABLE, MoodLevel.LOW): [
        "Tough right now, but you are holding on. That counts.",
        "Difficult days. Reflecting helps.",
        "Heavy, but good that you keep writing.",
        "A hard stretch, but you are not giving up.",
        "Rough, but you are sticking to the routine.",
        "Tough days. Writing it down helps you.",
    ],
}

FLUCTUATING_ADDITIONS: list[str] = [
    "Your mood has varied quite a bit.",
    "A bit up and down lately.",
    "Uneven days, but that is completely normal.",
]

_MESSAGE_SALT = 0
_ADDITION_SALT = 5


def _mean(values: list[int]) -> float:
    return sum(values) / len(values)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def calculate_mood_level(average: float) -> MoodLevel:
    if average >= HIGH_LEVEL_THRESHOLD:
        return MoodLevel.HIGH
    if average >= MEDIUM_LEVEL_THRESHOLD:
        return MoodLevel.MEDIUM
    return MoodLevel.LOW


def calculate_trend(recent_average: float, older_average: float) -> MoodTrend:
    """Thresholds are exclusive: a difference of exactly 0.3 is stable."""
    # Rounded so that e.g. 3.6 - 3.3 lands on the threshold, not just above it.
    difference = round(recent_average - older_average, 9)
    if difference > TREND_THRESHOLD:
        return MoodTrend.IMPROVING
    if difference < -TREND_THRESHOLD:
        return MoodTrend.DECLINING
    return MoodTrend.STABLE


def calculate_stability(moods: list[int]) -> MoodStability:
    """Fluctuating when the population standard deviation reaches 0.8."""
    if len(moods) < 2:
        return MoodStability.STABLE

    mean = _mean(moods)
    variance = sum((m - mean) ** 2 for m in moods) / len(moods)
    if math.sqrt(variance) >= FLUCTUATION_THRESHOLD:
        return MoodStability.FLUCTUATING
    return MoodStability.STABLE


def classify_mood_insight(moods: list[int]) -> MoodInsight:
    """Classify moods ordered most-recent-first.

    The first half (rounded down) is the recent half; chronological input
    must be reversed by the caller. Raises InvalidArgumentError for fewer than
    MIN_INSIGHT_ENTRIES moods or moods outside 1..5.
    """
    if len(moods) < MIN_INSIGHT_ENTRIES:
        raise InvalidArgumentError(
            f"Need at least {MIN_INSIGHT_ENTRIES} moods for an insight, got {len(moods)}"
        )
    if any(not 1 <= m <= 5 for m in moods):
        raise InvalidArgumentError("Moods must be between 1 and 5")

    midpoint = len(moods) // 2
    recent_average = _mean(moods[:midpoint])
    older_average = _mean(moods[midpoint:])
    average = _mean(moods)

    return MoodInsight(
        trend=calculate_trend(recent_average, older_average),
        stability=calculate_stability(moods),
        average=average,
        level=calculate_mood_level(average),
        entry_count=len(moods),
    )


def mood_insight(moods: list[int]) -> MoodInsight | None:
    """Like classify_mood_insight, but None when there are too few moods."""
    if len(moods) < MIN_INSIGHT_ENTRIES:
        return None
    return classify_mood_insight(moods)


def stable_index(insight: MoodInsight, day_of_year: int, length: int, salt: int = 0) -> int:
    """Index into a list of `length` that is fixed for a given insight and day."""
    digest = abs(
        _round_half_up(insight.average * 1000)
        + insight.entry_count * 7
        + day_of_year * 13
        + salt
    )
    return digest % length


def insight_cache_key(insight: MoodInsight) -> str:
    """Everything besides day and entry count that the message depends on."""
    return ":".join([
        insight.trend.value,
        insight.level.value,
        insight.stability.value,
        str(_round_half_up(insight.average * 1000)),
    ])


def insight_message(insight: MoodInsight, day_of_year: int) -> str:
    """Pick the message for an insight on a given day of the year."""
    messages = INSIGHT_MESSAGES[(insight.trend, insight.level)]
    message = messages[stable_index(insight, day_of_year, len(messages), _MESSAGE_SALT)]

    if insight.stability == MoodStability.FLUCTUATING:
        index = stable_index(insight, day_of_year, len(FLUCTUATING_ADDITIONS), _ADDITION_SALT)
        return f"{message} {FLUCTUATING_ADDITIONS[index]}"

    return message
