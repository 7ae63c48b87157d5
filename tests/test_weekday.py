"""Tests for weekday mood patterns."""

from skymning.dates import add_days
from skymning.weekday import DAY_NAMES, weekday_patterns

TODAY = "2024-06-30"  # a Sunday; 90 days back is 2024-04-01


def _records(dates: list[str], mood: int = 3) -> list[dict]:
    return [{"date": d, "mood": mood} for d in dates]


def _consecutive(start: str, count: int, mood: int = 3) -> list[dict]:
    return _records([add_days(start, i) for i in range(count)], mood)


MONDAYS = ["2024-05-27", "2024-06-03", "2024-06-10", "2024-06-17", "2024-06-24"]
TUESDAYS = ["2024-05-28", "2024-06-04", "2024-06-11", "2024-06-18", "2024-06-25"]
WEDNESDAYS = ["2024-06-05", "2024-06-12", "2024-06-19", "2024-06-26"]


class TestGating:
    def test_thirteen_records_is_none(self):
        assert weekday_patterns(_consecutive("2024-06-18", 13), TODAY) is None

    def test_fourteen_records_two_weekdays_is_none(self):
        mondays = ["2024-05-13", "2024-05-20", "2024-05-27", "2024-06-03",
                   "2024-06-10", "2024-06-17", "2024-06-24"]
        tuesdays = [add_days(d, 1) for d in mondays]
        records = _records(mondays, 4) + _records(tuesdays, 2)
        assert len(records) == 14
        assert weekday_patterns(records, TODAY) is None

    def test_fourteen_records_three_weekdays(self):
        records = _records(MONDAYS, 5) + _records(TUESDAYS, 2) + _records(WEDNESDAYS, 3)
        result = weekday_patterns(records, TODAY)
        assert result is not None
        assert result.total_entries == 14
        assert [p.day_index for p in result.patterns] == [1, 2, 3]
        assert result.best_day.day_index == 1
        assert result.best_day.day_name == "Monday"
        assert result.best_day.average == 5.0
        assert result.worst_day.day_index == 2
        assert result.worst_day.average == 2.0

    def test_records_outside_window_ignored(self):
        records = _consecutive("2024-06-18", 13) + _records(["2024-03-01"])
        assert weekday_patterns(records, TODAY) is None

    def test_record_on_cutoff_counts(self):
        records = _consecutive("2024-06-18", 13) + _records(["2024-04-01"])
        result = weekday_patterns(records, TODAY)
        assert result is not None
        assert result.total_entries == 14

    def test_custom_thresholds(self):
        records = _records(MONDAYS[:1] + TUESDAYS[:1], 3)
        result = weekday_patterns(records, TODAY, min_entries=2, min_weekdays=2)
        assert result is not None
        assert len(result.patterns) == 2

    def test_custom_window(self):
        records = _consecutive("2024-06-17", 14)
        assert weekday_patterns(records, TODAY, window_days=7) is None


class TestAggregation:
    def test_all_days_counted(self):
        result = weekday_patterns(_consecutive("2024-06-17", 14), TODAY)
        assert result is not None
        assert [p.day_index for p in result.patterns] == list(range(7))
        assert all(p.count == 2 for p in result.patterns)
        assert [p.day_name for p in result.patterns] == DAY_NAMES

    def test_ties_go_to_lowest_day_index(self):
        result = weekday_patterns(_consecutive("2024-06-17", 14, mood=3), TODAY)
        assert result.best_day.day_index == 0
        assert result.worst_day.day_index == 0

    def test_average_per_day(self):
        records = (
            _records(MONDAYS[:2], 5) + _records(MONDAYS[2:4], 3)
            + _records(TUESDAYS, 2) + _records(WEDNESDAYS, 4) + _records(MONDAYS[4:], 4)
        )
        result = weekday_patterns(records, TODAY)
        monday = next(p for p in result.patterns if p.day_index == 1)
        assert monday.count == 5
        assert monday.average == (5 + 5 + 3 + 3 + 4) / 5
