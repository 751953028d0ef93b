"""Tests for boardgame_stats.stats.achievements (logging checkpoints)."""

from __future__ import annotations

from datetime import date, timedelta

from boardgame_stats.stats.achievements import Achievement, logging_achievements
from boardgame_stats.taxonomy.metric_taxonomy import Metric


class TestLoggingAchievements:
    def test_one_long_play_crosses_two_hour_checkpoints(self, make_play):
        result = logging_achievements([make_play(1, "2024-01-15", 12_000)], 2024)
        assert result == [
            Achievement(Metric.HOURS, 100, date(2024, 1, 15)),
            Achievement(Metric.HOURS, 200, date(2024, 1, 15)),
        ]

    def test_hours_use_whole_hours(self, make_play):
        plays = [make_play(1, "2024-01-01", 5_999)]
        assert logging_achievements(plays, 2024) == []
        plays.append(make_play(1, "2024-01-02", 1))
        assert logging_achievements(plays, 2024) == [
            Achievement(Metric.HOURS, 100, date(2024, 1, 2)),
        ]

    def test_totals_are_all_time(self, make_play):
        plays = [make_play(1, "2023-06-01", 0) for _ in range(249)]
        plays.append(make_play(1, "2024-02-02", 0))
        assert logging_achievements(plays, 2024) == [
            Achievement(Metric.PLAYS, 250, date(2024, 2, 2)),
        ]
        assert logging_achievements(plays, 2023) == []

    def test_sessions_count_distinct_days(self, make_play):
        start = date(2023, 12, 1)
        plays = [make_play(1, start + timedelta(days=i), 0) for i in range(100)]
        # A second play on the 100th day adds no session.
        plays.append(make_play(2, start + timedelta(days=99), 0))
        assert logging_achievements(plays, 2024) == [
            Achievement(Metric.SESSIONS, 100, start + timedelta(days=99)),
        ]

    def test_input_order_does_not_matter(self, make_play):
        plays = [make_play(1, "2024-03-01", 3_000), make_play(1, "2024-01-01", 3_000)]
        assert logging_achievements(plays, 2024) == [
            Achievement(Metric.HOURS, 100, date(2024, 3, 1)),
        ]

    def test_ordered_by_metric_then_threshold(self, make_play):
        plays = [make_play(1, "2024-05-01", 0) for _ in range(250)]
        plays.append(make_play(1, "2024-05-02", 6_000))
        result = logging_achievements(plays, 2024)
        assert [(a.metric, a.threshold) for a in result] == [
            (Metric.HOURS, 100),
            (Metric.PLAYS, 250),
        ]

    def test_no_plays(self):
        assert logging_achievements([], 2024) == []
