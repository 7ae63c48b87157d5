"""Tests for mood insight classification and message selection."""

import pytest

from skymning.dates import InvalidArgumentError
from skymning.insight import (
    FLUCTUATING_ADDITIONS,
    INSIGHT_MESSAGES,
    MoodInsight,
    MoodLevel,
    MoodStability,
    MoodTrend,
    calculate_mood_level,
    calculate_stability,
    calculate_trend,
    classify_mood_insight,
    insight_cache_key,
    insight_message,
    mood_insight,
    stable_index,
)


class TestCalculateTrend:
    def test_exactly_threshold_is_stable(self):
        assert calculate_trend(0.3, 0.0) == MoodTrend.STABLE

    def test_above_threshold_improving(self):
        assert calculate_trend(0.31, 0.0) == MoodTrend.IMPROVING

    def test_exactly_negative_threshold_is_stable(self):
        assert calculate_trend(0.0, 0.3) == MoodTrend.STABLE

    def test_below_negative_threshold_declining(self):
        assert calculate_trend(0.0, 0.31) == MoodTrend.DECLINING

    def test_equal_averages(self):
        assert calculate_trend(3.0, 3.0) == MoodTrend.STABLE


class TestCalculateMoodLevel:
    def test_exactly_high(self):
        assert calculate_mood_level(3.5) == MoodLevel.HIGH

    def test_just_below_high(self):
        assert calculate_mood_level(3.49999) == MoodLevel.MEDIUM

    def test_exactly_medium(self):
        assert calculate_mood_level(2.5) == MoodLevel.MEDIUM

    def test_below_medium(self):
        assert calculate_mood_level(2.49) == MoodLevel.LOW

    def test_extremes(self):
        assert calculate_mood_level(5.0) == MoodLevel.HIGH
        assert calculate_mood_level(1.0) == MoodLevel.LOW


class TestCalculateStability:
    def test_constant_moods_stable(self):
        assert calculate_stability([3, 3, 3, 3]) == MoodStability.STABLE

    def test_wide_swings_fluctuating(self):
        assert calculate_stability([1, 5, 1, 5]) == MoodStability.FLUCTUATING

    def test_single_sample_stable(self):
        assert calculate_stability([1]) == MoodStability.STABLE

    def test_small_spread_stable(self):
        # population stddev 0.5
        assert calculate_stability([3, 4]) == MoodStability.STABLE

    def test_stddev_one_fluctuating(self):
        assert calculate_stability([2, 4]) == MoodStability.FLUCTUATING


class TestClassifyMoodInsight:
    def test_scenario_improving_medium(self):
        insight = classify_mood_insight([5, 5, 4, 2, 2, 1])
        assert insight.trend == MoodTrend.IMPROVING
        assert insight.level == MoodLevel.MEDIUM
        assert insight.stability == MoodStability.FLUCTUATING
        assert insight.average == pytest.approx(19 / 6)
        assert insight.entry_count == 6

    def test_average_is_unrounded(self):
        insight = classify_mood_insight([4, 4, 4, 3])
        assert insight.average == 3.75

    def test_declining(self):
        insight = classify_mood_insight([1, 2, 4, 5])
        assert insight.trend == MoodTrend.DECLINING

    def test_odd_length_recent_half_rounds_down(self):
        # recent [5, 4] avg 4.5, older [3, 2, 1] avg 2.0
        insight = classify_mood_insight([5, 4, 3, 2, 1])
        assert insight.trend == MoodTrend.IMPROVING
        assert insight.level == MoodLevel.MEDIUM

    def test_stable_high(self):
        insight = classify_mood_insight([4, 4, 4, 4, 4, 4])
        assert insight.trend == MoodTrend.STABLE
        assert insight.level == MoodLevel.HIGH
        assert insight.stability == MoodStability.STABLE

    def test_half_averages_exactly_threshold_apart_is_stable(self):
        # recent half averages 3.6, older half 3.3
        recent = [4] * 6 + [3] * 4
        older = [4] * 3 + [3] * 7
        assert classify_mood_insight(recent + older).trend == MoodTrend.STABLE
        assert classify_mood_insight(older + recent).trend == MoodTrend.STABLE

    def test_half_averages_just_over_threshold(self):
        # recent half averages 3.7, older half 3.3
        recent = [4] * 7 + [3] * 3
        older = [4] * 3 + [3] * 7
        assert classify_mood_insight(recent + older).trend == MoodTrend.IMPROVING
        assert classify_mood_insight(older + recent).trend == MoodTrend.DECLINING

    def test_too_few_moods_raises(self):
        with pytest.raises(InvalidArgumentError):
            classify_mood_insight([3, 3, 3])

    def test_out_of_range_mood_raises(self):
        with pytest.raises(InvalidArgumentError):
            classify_mood_insight([3, 3, 6, 3])

    def test_mood_insight_gate_returns_none(self):
        assert mood_insight([3, 3, 3]) is None
        assert mood_insight([]) is None

    def test_mood_insight_gate_passes_through(self):
        assert mood_insight([3, 3, 3, 3]) == classify_mood_insight([3, 3, 3, 3])


class TestInsightMessage:
    def _insight(self, **overrides) -> MoodInsight:
        fields = {
            "trend": MoodTrend.STABLE,
            "stability": MoodStability.STABLE,
            "average": 3.0,
            "level": MoodLevel.MEDIUM,
            "entry_count": 4,
        }
        fields.update(overrides)
        return MoodInsight(**fields)

    def test_stable_index_formula(self):
        # 3000 + 4 * 7 + 1 * 13 = 3041; 3041 % 6 == 5
        assert stable_index(self._insight(), day_of_year=1, length=6) == 5

    def test_same_day_same_message(self):
        insight = classify_mood_insight([5, 5, 4, 2, 2, 1])
        assert insight_message(insight, 160) == insight_message(insight, 160)

    def test_message_from_matching_list(self):
        insight = self._insight()
        for day in range(1, 30):
            message = insight_message(insight, day)
            assert message in INSIGHT_MESSAGES[(MoodTrend.STABLE, MoodLevel.MEDIUM)]

    def test_day_changes_selection_deterministically(self):
        insight = self._insight()
        messages = {insight_message(insight, day) for day in range(1, 8)}
        assert len(messages) > 1
        assert insight_message(insight, 3) == insight_message(insight, 3)

    def test_fluctuating_appends_sentence(self):
        insight = self._insight(stability=MoodStability.FLUCTUATING)
        message = insight_message(insight, 42)
        assert any(message.endswith(" " + addition) for addition in FLUCTUATING_ADDITIONS)
        candidates = INSIGHT_MESSAGES[(MoodTrend.STABLE, MoodLevel.MEDIUM)]
        assert any(message.startswith(candidate + " ") for candidate in candidates)

    def test_cache_key_covers_message_inputs(self):
        base = self._insight()
        assert insight_cache_key(base) == "stable:medium:stable:3000"
        assert insight_cache_key(self._insight(trend=MoodTrend.DECLINING)) != insight_cache_key(base)
        assert insight_cache_key(self._insight(stability=MoodStability.FLUCTUATING)) != insight_cache_key(base)
        assert insight_cache_key(self._insight(average=3.25)) != insight_cache_key(base)

    def test_every_key_has_messages(self):
        for trend in MoodTrend:
            for level in MoodLevel:
                assert INSIGHT_MESSAGES[(trend, level)]
