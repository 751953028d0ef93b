"""Tests for metric and milestone taxonomy — enums, thresholds, band and club lookup."""

from __future__ import annotations

import pytest

from boardgame_stats.taxonomy.metric_taxonomy import (
    BAND_ORDER,
    COST_CLUB_ORDER,
    METRIC_ORDER,
    METRIC_UNITS,
    MILESTONE_THRESHOLDS,
    CostClub,
    Metric,
    MilestoneBand,
)


class TestMetricEnum:
    def test_values(self):
        assert {m.value for m in Metric} == {"hours", "sessions", "plays"}

    def test_display_order(self):
        assert METRIC_ORDER == (Metric.HOURS, Metric.SESSIONS, Metric.PLAYS)

    def test_string_round_trip(self):
        assert Metric("sessions") is Metric.SESSIONS
        assert Metric.PLAYS == "plays"

    def test_unknown_raises(self):
        with pytest.raises(ValueError):
            Metric("minutes")


class TestMilestoneBand:
    def test_thresholds(self):
        assert [b.threshold for b in BAND_ORDER] == [5, 10, 25, 100]
        assert set(MILESTONE_THRESHOLDS) == set(MilestoneBand)

    def test_next_threshold(self):
        assert MilestoneBand.FIVES.next_threshold == 10
        assert MilestoneBand.QUARTERS.next_threshold == 100
        assert MilestoneBand.CENTURIES.next_threshold is None

    @pytest.mark.parametrize(
        "value, expected",
        [
            (4.99, None),
            (5, MilestoneBand.FIVES),
            (9.9, MilestoneBand.FIVES),
            (10, MilestoneBand.DIMES),
            (24, MilestoneBand.DIMES),
            (25, MilestoneBand.QUARTERS),
            (99.5, MilestoneBand.QUARTERS),
            (100, MilestoneBand.CENTURIES),
            (1000, MilestoneBand.CENTURIES),
        ],
    )
    def test_for_value(self, value, expected):
        assert MilestoneBand.for_value(value) == expected

    def test_contains_is_half_open(self):
        assert MilestoneBand.DIMES.contains(10)
        assert not MilestoneBand.DIMES.contains(25)
        assert MilestoneBand.CENTURIES.contains(10_000)

    def test_for_threshold(self):
        assert MilestoneBand.for_threshold(25) is MilestoneBand.QUARTERS
        with pytest.raises(ValueError):
            MilestoneBand.for_threshold(50)

    def test_display_names(self):
        assert [b.display_name for b in BAND_ORDER] == ["five", "dime", "quarter", "century"]


class TestCostClub:
    def test_order_and_thresholds(self):
        assert [c.threshold for c in COST_CLUB_ORDER] == [5.0, 2.5, 1.0, 0.5]

    def test_labels(self):
        assert [c.label for c in COST_CLUB_ORDER] == ["$5", "$2.50", "$1", "$0.50"]

    def test_next_threshold_runs_downwards(self):
        assert CostClub.FIVE_DOLLAR.next_threshold == 2.5
        assert CostClub.FIFTY_CENTS.next_threshold is None

    @pytest.mark.parametrize(
        "cost, expected",
        [
            (7.5, None),
            (5.0, CostClub.FIVE_DOLLAR),
            (2.51, CostClub.FIVE_DOLLAR),
            (2.5, CostClub.TWO_FIFTY),
            (1.0, CostClub.ONE_DOLLAR),
            (0.5, CostClub.FIFTY_CENTS),
            (0.01, CostClub.FIFTY_CENTS),
        ],
    )
    def test_for_value(self, cost, expected):
        assert CostClub.for_value(cost) == expected

    def test_contains_has_inclusive_upper_bound(self):
        assert CostClub.ONE_DOLLAR.contains(1.0)
        assert not CostClub.ONE_DOLLAR.contains(0.5)
        assert CostClub.FIFTY_CENTS.contains(0.5)

    def test_units(self):
        assert METRIC_UNITS == {Metric.HOURS: "hour", Metric.SESSIONS: "session", Metric.PLAYS: "play"}
