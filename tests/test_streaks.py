"""Tests for the streak tracking system."""

from skymning.dates import subtract_days
from skymning.streaks import (
    StreakInfo,
    calculate_streak,
    compute_streak,
    get_streak_from_dates,
    longest_streak,
)


class TestGetStreakFromDates:
    """Tests for get_streak_from_dates function."""

    def test_consecutive_five_days(self):
        dates = ["2026-01-01", "2026-01-02", "2026-01-03", "2026-01-04", "2026-01-05"]
        assert get_streak_from_dates(dates, "2026-01-05") == 5

    def test_reference_not_in_dates(self):
        dates = ["2026-01-01", "2026-01-02"]
        assert get_streak_from_dates(dates, "2026-01-05") == 0

    def test_gap_breaks_streak(self):
        dates = ["2026-01-01", "2026-01-02", "2026-01-04", "2026-01-05"]
        assert get_streak_from_dates(dates, "2026-01-05") == 2

    def test_empty_dates(self):
        assert get_streak_from_dates([], "2026-01-01") == 0


class TestComputeStreak:
    """Tests for compute_streak (dates most-recent-first)."""

    def test_three_days_ending_today(self):
        dates = ["2024-06-12", "2024-06-11", "2024-06-10"]
        assert compute_streak(dates, "2024-06-12") == 3

    def test_two_day_gap_breaks_streak(self):
        dates = ["2024-06-12", "2024-06-11", "2024-06-10"]
        assert compute_streak(dates, "2024-06-14") == 0

    def test_latest_yesterday_keeps_streak(self):
        dates = ["2024-06-12", "2024-06-11", "2024-06-10"]
        assert compute_streak(dates, "2024-06-13") == 3

    def test_empty(self):
        assert compute_streak([], "2024-06-12") == 0

    def test_gap_inside_history(self):
        dates = ["2024-06-12", "2024-06-11", "2024-06-09", "2024-06-08"]
        assert compute_streak(dates, "2024-06-12") == 2

    def test_duplicates_are_harmless(self):
        dates = ["2024-06-12", "2024-06-12", "2024-06-11"]
        assert compute_streak(dates, "2024-06-12") == 2

    def test_across_leap_day(self):
        dates = ["2024-03-01", "2024-02-29", "2024-02-28"]
        assert compute_streak(dates, "2024-03-01") == 3

    def test_across_year_boundary(self):
        dates = ["2025-01-01", "2024-12-31", "2024-12-30"]
        assert compute_streak(dates, "2025-01-02") == 3

    def test_run_of_k_days(self):
        today = "2024-06-12"
        for k in range(1, 15):
            dates = [subtract_days(today, i) for i in range(k)]
            assert compute_streak(dates, today) == k

    def test_latest_two_or_more_days_old(self):
        today = "2024-06-12"
        for offset in range(2, 6):
            dates = [subtract_days(today, offset + i) for i in range(5)]
            assert compute_streak(dates, today) == 0


class TestLongestStreak:
    def test_empty(self):
        assert longest_streak([]) == 0

    def test_single(self):
        assert longest_streak(["2026-01-01"]) == 1

    def test_picks_longest_run(self):
        dates = [
            "2026-01-11", "2026-01-10",
            "2026-01-04", "2026-01-03", "2026-01-02", "2026-01-01",
        ]
        assert longest_streak(dates) == 4

    def test_order_independent(self):
        dates = ["2026-01-02", "2026-01-01", "2026-01-03"]
        assert longest_streak(dates) == 3


class TestCalculateStreak:
    def test_empty_dates(self):
        result = calculate_streak([], "2026-01-05")
        assert result == StreakInfo(
            current_streak=0,
            longest_streak=0,
            last_entry_date=None,
            is_active_today=False,
        )

    def test_active_today(self):
        dates = ["2026-01-05", "2026-01-04", "2026-01-03"]
        result = calculate_streak(dates, "2026-01-05")
        assert result.current_streak == 3
        assert result.is_active_today is True
        assert result.last_entry_date == "2026-01-05"

    def test_yesterday_only(self):
        dates = ["2026-01-04", "2026-01-03"]
        result = calculate_streak(dates, "2026-01-05")
        assert result.current_streak == 2
        assert result.is_active_today is False

    def test_longest_tracked_when_broken(self):
        dates = ["2026-01-04", "2026-01-03", "2026-01-02", "2026-01-01"]
        result = calculate_streak(dates, "2026-01-10")
        assert result.current_streak == 0
        assert result.longest_streak == 4
