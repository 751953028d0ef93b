"""
Tests for boardgame_stats/stats/h_index.py.

What we test
------------
h_index():
  - Reference sequences ([10,5,3,2,1] -> 3, [1,1,1,1] -> 1, [] -> 0).
  - Fractional hour values compare directly against the rank.

h_index_for_metric() / h_index_breakdown():
  - All three metrics over the sample collection, all time and per year.
  - Orphan plays never contribute.

Year-over-year:
  - h_index_through_year() is an as-of snapshot, not a single-year slice.
  - new_h_index_games() can be longer than the raw index increase.
"""

from __future__ import annotations

import pytest

from boardgame_stats.stats.h_index import (
    contributor_ids,
    h_index,
    h_index_breakdown,
    h_index_for_metric,
    h_index_increase,
    h_index_through_year,
    new_h_index_games,
)
from boardgame_stats.taxonomy.metric_taxonomy import Metric


class TestHIndex:
    @pytest.mark.parametrize(
        "values, expected",
        [
            ([10, 5, 3, 2, 1], 3),
            ([1, 1, 1, 1], 1),
            ([5, 4, 3, 2, 1], 3),
            ([100], 1),
            ([], 0),
            ([0, 0], 0),
        ],
    )
    def test_reference_sequences(self, values, expected):
        assert h_index(values) == expected

    def test_fractional_hours(self):
        assert h_index([2.5, 2.1]) == 2
        assert h_index([2.5, 1.99]) == 1

    def test_never_exceeds_length(self):
        assert h_index([50, 40, 30]) == 3


class TestHIndexForMetric:
    def test_all_time_per_metric(self, sample_collection):
        games, plays = sample_collection.games, sample_collection.plays
        # plays [6, 2, 1]; sessions [5, 2, 1]; hours [7.0, 3.5, 0.83]
        assert h_index_for_metric(games, plays, None, Metric.PLAYS) == 2
        assert h_index_for_metric(games, plays, None, Metric.SESSIONS) == 2
        assert h_index_for_metric(games, plays, None, Metric.HOURS) == 2

    def test_single_year_slice(self, sample_collection):
        games, plays = sample_collection.games, sample_collection.plays
        # 2023: only Azul, 3 plays on 2 days
        assert h_index_for_metric(games, plays, 2023, "plays") == 1
        assert h_index_for_metric(games, plays, 2023, "sessions") == 1

    def test_metric_accepts_plain_string(self, sample_collection):
        games, plays = sample_collection.games, sample_collection.plays
        assert h_index_for_metric(games, plays, None, "plays") == h_index_for_metric(
            games, plays, None, Metric.PLAYS
        )

    def test_unknown_metric_raises(self, sample_collection):
        with pytest.raises(ValueError):
            h_index_for_metric(sample_collection.games, sample_collection.plays, None, "minutes")

    def test_orphan_plays_ignored(self, sample_collection, make_play):
        games = sample_collection.games
        orphans = [make_play(99, "2024-01-01") for _ in range(10)]
        with_orphans = list(sample_collection.plays) + orphans
        assert h_index_for_metric(games, with_orphans, None, "plays") == 2
        ids = [row.game.id for row in h_index_breakdown(games, with_orphans, None, "plays")]
        assert 99 not in ids

    def test_no_plays_is_zero(self, make_game):
        assert h_index_for_metric([make_game(1)], [], None, "hours") == 0


class TestHIndexBreakdown:
    def test_sorted_descending(self, sample_collection):
        rows = h_index_breakdown(sample_collection.games, sample_collection.plays, None, "plays")
        assert [r.game.name for r in rows] == ["Azul", "Brass", "Azul: Crystal Mosaic"]
        assert [r.value for r in rows] == [6, 2, 1]

    def test_hours_are_fractional(self, sample_collection):
        rows = h_index_breakdown(sample_collection.games, sample_collection.plays, None, "hours")
        assert rows[0].game.name == "Brass"
        assert rows[0].value == pytest.approx(7.0)
        assert rows[1].value == pytest.approx(3.5)

    def test_contributor_ids(self, sample_collection):
        rows = h_index_breakdown(sample_collection.games, sample_collection.plays, None, "plays")
        assert contributor_ids(rows, 2) == {1, 2}

    def test_year_slice_positional(self, sample_collection):
        rows = h_index_breakdown(sample_collection.games, sample_collection.plays, 2023, "plays")
        assert [(r.game.name, r.value) for r in rows] == [("Azul", 3)]


class TestYearOverYear:
    def test_through_year_is_cumulative(self, make_game, make_play):
        games = [make_game(1), make_game(2)]
        plays = [
            make_play(1, "2023-01-01"),
            make_play(1, "2023-01-02"),
            make_play(2, "2023-01-03"),
            make_play(2, "2024-01-03"),
        ]
        # Single-year 2024 slice: [1] -> 1.  As-of 2024: [2, 2] -> 2.
        assert h_index_for_metric(games, plays, 2024, "plays") == 1
        assert h_index_through_year(games, plays, 2024, "plays") == 2
        assert h_index_through_year(games, plays, 2023, "plays") == 1
        assert h_index_increase(games, plays, 2024, "plays") == 1

    def test_new_games_can_outnumber_increase(self, make_game, make_play):
        games = [make_game(1, "A"), make_game(2, "B"), make_game(3, "C")]
        plays = [
            make_play(3, "2023-06-01"),
            make_play(1, "2024-01-01"),
            make_play(1, "2024-01-02"),
            make_play(2, "2024-02-01"),
            make_play(2, "2024-02-02"),
        ]
        increase = h_index_increase(games, plays, 2024, "sessions")
        new = new_h_index_games(games, plays, 2024, "sessions")

        assert increase == 1
        assert [e.game.name for e in new] == ["A", "B"]
        assert len(new) >= increase

    def test_new_entry_reports_this_year_value(self, make_game, make_play):
        games = [make_game(1)]
        plays = [
            make_play(1, "2023-01-01", 120),
            make_play(1, "2024-01-01", 60),
        ]
        # As-of 2023: 2.0 hours -> h=1 already; as-of 2024: 3.0 hours -> still h=1.
        assert new_h_index_games(games, plays, 2024, "hours") == []

        plays.append(make_play(1, "2024-06-01", 30))
        entries = new_h_index_games([make_game(1)], plays[1:], 2024, "hours")
        assert len(entries) == 1
        assert entries[0].value == pytest.approx(1.5)
        assert entries[0].this_year_value == pytest.approx(1.5)

    def test_previous_contributors_not_new(self, sample_collection):
        games, plays = sample_collection.games, sample_collection.plays
        new = new_h_index_games(games, plays, 2024, "plays")
        # As-of 2023 contributors: {Azul}.  As-of 2024: {Azul, Brass}.
        assert [e.game.name for e in new] == ["Brass"]
        assert new[0].this_year_value == 2
