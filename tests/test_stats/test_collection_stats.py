"""Tests for boardgame_stats.stats.collection (ownership and diagnostics)."""

from __future__ import annotations

from datetime import date

import pytest

from boardgame_stats.models.game import Copy
from boardgame_stats.stats.collection import (
    ExpansionTotals,
    YearInfo,
    acquisition_years,
    available_years,
    games_with_unknown_acquisition_date,
    is_game_owned,
    owned_base_games_missing_price_paid,
    owned_games_never_played,
    total_bgg_entries,
    total_expansions,
    total_games_owned,
    was_game_acquired_in_year,
)


@pytest.fixture
def catalog(make_game):
    """Mixed catalog: duplicates, sold copies, expansions, missing data."""
    return [
        make_game(1, "Twice Owned", copies=[
            Copy(copy_id="a", status_owned=True, acquisition_date=date(2023, 2, 1), price_paid=30),
            Copy(copy_id="b", status_owned=True, acquisition_date=date(2024, 4, 1), price_paid=None),
        ]),
        make_game(2, "Sold", copies=[
            Copy(copy_id="c", status_owned=False, acquisition_date=date(2024, 1, 5), price_paid=20),
        ]),
        make_game(3, "No Date", copies=[
            Copy(copy_id="d", status_owned=True, acquisition_date=None, price_paid=15),
        ]),
        make_game(4, "Expansion", expansion=True, acquired="2024-07-01"),
        make_game(5, "Expandalone", expandalone=True, acquired="2021-12-24"),
        make_game(6, "Wishlist", copies=[]),
    ]


class TestOwnership:
    def test_is_game_owned(self, catalog):
        assert [is_game_owned(g) for g in catalog] == [True, False, True, True, True, False]

    def test_acquired_in_year_ignores_current_ownership(self, catalog):
        assert was_game_acquired_in_year(catalog[1], 2024)
        assert not was_game_acquired_in_year(catalog[2], 2024)


class TestTotals:
    def test_bgg_entries_count_owned_copies(self, catalog):
        # 2 copies of game 1, game 3, expansion, expandalone.
        assert total_bgg_entries(catalog) == 5

    def test_bgg_entries_for_year_count_acquisitions(self, catalog):
        # game 1 copy b, sold game 2, expansion.
        assert total_bgg_entries(catalog, 2024) == 3
        assert total_bgg_entries(catalog, 2022) == 0

    def test_games_owned_counts_base_games_once(self, catalog):
        assert total_games_owned(catalog) == 2
        assert total_games_owned(catalog, 2024) == 2

    def test_expansions(self, catalog):
        assert total_expansions(catalog) == ExpansionTotals(total=2, expandalones=1, expansion_only=1)
        assert total_expansions(catalog, 2021) == ExpansionTotals(total=1, expandalones=1, expansion_only=0)


class TestDiagnostics:
    def test_unknown_acquisition_date(self, catalog):
        assert [g.id for g in games_with_unknown_acquisition_date(catalog)] == [3]

    def test_never_played(self, catalog, make_play):
        plays = [make_play(1, "2024-01-01")]
        assert [g.id for g in owned_games_never_played(catalog, plays)] == [3]
        assert [g.id for g in owned_games_never_played(catalog, plays, 2024)] == [2]

    def test_never_played_counts_plays_from_any_year(self, catalog, make_play):
        plays = [make_play(3, "2019-05-05")]
        assert [g.id for g in owned_games_never_played(catalog, plays)] == [1]

    def test_missing_price_paid(self, catalog):
        assert [g.id for g in owned_base_games_missing_price_paid(catalog)] == [1]


class TestYears:
    def test_acquisition_years_newest_first(self, catalog):
        assert acquisition_years(catalog) == [2024, 2023, 2021]

    def test_available_years(self, catalog, make_play):
        plays = [make_play(1, "2023-03-03"), make_play(1, "2025-01-01")]
        assert available_years(plays, catalog) == [
            YearInfo(2025, has_plays=True, is_pre_logging=False),
            YearInfo(2024, has_plays=False, is_pre_logging=False),
            YearInfo(2023, has_plays=True, is_pre_logging=False),
            YearInfo(2021, has_plays=False, is_pre_logging=True),
        ]

    def test_available_years_without_games(self, make_play):
        assert available_years([make_play(1, "2022-01-01")]) == [
            YearInfo(2022, has_plays=True, is_pre_logging=False),
        ]

    def test_no_plays_nothing_is_pre_logging(self, catalog):
        assert all(not info.is_pre_logging for info in available_years([], catalog))
