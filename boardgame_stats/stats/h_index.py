"""
H-index calculations over the three engagement metrics.

The h-index of a collection is the largest rank ``r`` such that the r-th
highest per-game value is at least ``r``.  The same rank walk serves all
three metrics; only the per-game value list differs:

    plays     "traditional" h-index (play counts)
    sessions  unique play days per game
    hours     total hours per game (fractional values compare directly)

Year-over-year
--------------
``h_index_through_year()`` is an as-of snapshot (plays dated ``<= year``),
not a single-year slice.  ``new_h_index_games()`` diffs the *contributor
sets* of two snapshots: the games at rank ``r <= h`` whose own value is
``>= r``.  Its result can be longer than the raw index delta: two games at
2 sessions each can both join a session h-index that only rises from 1 to 2.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from boardgame_stats.models.game import Game
from boardgame_stats.models.play import Play
from boardgame_stats.stats.metrics import (
    GameValue,
    NewGameEntry,
    aggregate,
    aggregate_through_year,
    index_games,
    metric_value,
    ranked_values,
)
from boardgame_stats.taxonomy.metric_taxonomy import Metric

logger = logging.getLogger(__name__)


def h_index(sorted_values: Sequence[float]) -> int:
    """Compute the h-index of a descending-sorted value sequence.

    Scanning stops at the first rank that fails ``value >= rank``; with
    descending input no later rank can pass.

    Args:
        sorted_values: Per-game values, highest first.

    Returns:
        The h-index; 0 for an empty sequence.
    """
    result = 0
    for rank, value in enumerate(sorted_values, start=1):
        if value >= rank:
            result = rank
        else:
            break
    return result


def h_index_for_metric(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
) -> int:
    """H-index of ``metric`` over plays in ``year`` (all time when ``None``)."""
    aggregates = aggregate(plays, year, games)
    return h_index([value for _, value in ranked_values(aggregates, metric)])


def h_index_breakdown(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
) -> list[GameValue]:
    """Every played game with its metric value, highest first."""
    return _breakdown(games, aggregate(plays, year, games), metric)


def h_index_through_year(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
) -> int:
    """H-index of ``metric`` using only plays dated in or before ``year``."""
    aggregates = aggregate_through_year(plays, year, games)
    return h_index([value for _, value in ranked_values(aggregates, metric)])


def h_index_increase(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
) -> int:
    """``h_index_through_year(year) - h_index_through_year(year - 1)``."""
    current = h_index_through_year(games, plays, year, metric)
    previous = h_index_through_year(games, plays, year - 1, metric)
    return current - previous


def contributor_ids(breakdown: Sequence[GameValue], index: int) -> set[int]:
    """Ids of the games whose rank and value jointly satisfy ``value >= rank <= index``."""
    contributors: set[int] = set()
    for rank, row in enumerate(breakdown[:index], start=1):
        if row.value >= rank:
            contributors.add(row.game.id)
    return contributors


def new_h_index_games(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
) -> list[NewGameEntry]:
    """Games in the contributor set as of ``year`` but not as of ``year - 1``.

    Each entry reports the game's cumulative value as of ``year`` and the part
    of it played during ``year`` alone.  Ordered by cumulative value, highest
    first.
    """
    current = _breakdown(games, aggregate_through_year(plays, year, games), metric)
    previous = _breakdown(games, aggregate_through_year(plays, year - 1, games), metric)

    current_ids = contributor_ids(current, h_index([r.value for r in current]))
    previous_ids = contributor_ids(previous, h_index([r.value for r in previous]))

    this_year = aggregate(plays, year, games)
    result = [
        NewGameEntry(
            game=row.game,
            value=row.value,
            this_year_value=metric_value(this_year.get(row.game.id), metric),
        )
        for row in current
        if row.game.id in current_ids and row.game.id not in previous_ids
    ]
    logger.debug(
        "new_h_index_games year=%s metric=%s: %d new contributors", year, metric, len(result)
    )
    return result


def _breakdown(games: Sequence[Game], aggregates, metric: Metric | str) -> list[GameValue]:
    lookup = index_games(games)
    return [
        GameValue(game=lookup[gid], value=value)
        for gid, value in ranked_values(aggregates, metric)
        if gid in lookup
    ]
