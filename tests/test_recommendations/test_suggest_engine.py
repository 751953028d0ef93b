"""Tests for boardgame_stats.recommendations.engine (heuristic merging)."""

from __future__ import annotations

from datetime import date

from boardgame_stats.recommendations.engine import (
    Recommendation,
    merge_suggestions,
    suggest_games,
)
from boardgame_stats.recommendations.heuristics import Suggestion

TODAY = date(2024, 5, 10)


class TestSuggestGames:
    def test_merged_output(self, sample_collection, fake_rng):
        recs = suggest_games(
            sample_collection.games, sample_collection.plays, fake_rng(0.0), today=TODAY
        )
        assert [r.game.name for r in recs] == ["Brass", "Azul", "Cascadia"]

        brass, azul, cascadia = recs
        assert brass.reasons == [
            "Fresh and recent",
            "Squaring up: 3 sessions",
            "Squaring up: 3 plays",
            "Gathering dust",
        ]
        assert brass.stats == [
            "2 total sessions",
            "2 sessions",
            "2 plays",
            "Last played May 2024",
        ]
        assert azul.reasons == ["Closest to a five", "Closest to a dime", "Closest to a dime"]
        assert azul.stats == ["3.5 total hours", "5 total sessions", "6 total plays"]
        assert (cascadia.reasons, cascadia.stats) == (["Shelf of shame"], ["Never played"])

    def test_cost_club_suggestions_are_opt_in(self, sample_collection, fake_rng):
        recs = suggest_games(
            sample_collection.games,
            sample_collection.plays,
            fake_rng(0.0),
            today=TODAY,
            cost_club=True,
        )
        assert [r.game.name for r in recs] == ["Brass", "Azul", "Cascadia"]
        azul = recs[1]
        assert azul.reasons[3:] == [
            "Join the $5/hour club",
            "Join the $5/session club",
            "Join the $5/play club",
        ]
        assert azul.stats[3:] == ["$11.43/hour", "$8.00/session", "$6.67/play"]

        default = suggest_games(
            sample_collection.games, sample_collection.plays, fake_rng(0.0), today=TODAY
        )
        assert not any("club" in reason for rec in default for reason in rec.reasons)

    def test_no_duplicates_and_parallel_lists(self, sample_collection, fake_rng):
        for r in (0.0, 0.3, 0.7, 0.99):
            recs = suggest_games(
                sample_collection.games, sample_collection.plays, fake_rng(r), today=TODAY
            )
            ids = [rec.game.id for rec in recs]
            assert len(ids) == len(set(ids))
            assert all(len(rec.reasons) == len(rec.stats) > 0 for rec in recs)

    def test_only_owned_base_games(self, sample_collection, fake_rng):
        recs = suggest_games(
            sample_collection.games, sample_collection.plays, fake_rng(0.5), today=TODAY
        )
        assert all(rec.game.is_base_game for rec in recs)

    def test_empty_collection(self, fake_rng):
        assert suggest_games([], [], fake_rng(0.0), today=TODAY) == []

    def test_orphan_plays_do_not_break_suggestions(self, sample_collection, make_play, fake_rng):
        plays = list(sample_collection.plays) + [make_play(77, "2024-05-09")]
        recs = suggest_games(sample_collection.games, plays, fake_rng(0.0), today=TODAY)
        assert 77 not in {rec.game.id for rec in recs}


class TestMergeSuggestions:
    def test_first_occurrence_order(self, make_game):
        a, b = make_game(1, "A"), make_game(2, "B")
        merged = merge_suggestions([
            Suggestion(b, "r1", "s1"),
            Suggestion(a, "r2", "s2"),
            Suggestion(b, "r3", "s3"),
        ])
        assert merged == [
            Recommendation(game=b, reasons=["r1", "r3"], stats=["s1", "s3"]),
            Recommendation(game=a, reasons=["r2"], stats=["s2"]),
        ]

    def test_empty(self):
        assert merge_suggestions([]) == []
