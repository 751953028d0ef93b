"""
Metric engine: per-game aggregation of the play log.

Every engagement statistic in this package starts here.  ``aggregate()``
collapses a play list into one ``GameAggregate`` per game holding the three
raw quantities the metrics are derived from:

    plays     -> play_count
    sessions  -> len(unique_days)
    hours     -> total_minutes / 60

Year filtering is a pure narrowing of the input: ``aggregate(plays, 2024)``
is identical to ``aggregate(filter_plays_by_year(plays, 2024))``.  The
"through year" variant narrows to ``date.year <= year`` and backs every
year-over-year comparison.

Ordering
--------
The returned dict preserves the order in which games first appear in the
play list.  Ranked outputs downstream use a stable sort on that order, so
ties are broken deterministically for a given input.

Orphans
-------
When ``games`` is supplied, plays whose ``game_id`` is not in the catalog are
dropped before aggregation.  Callers that resolve aggregates to ``Game``
objects always pass the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from boardgame_stats.models.game import Game
from boardgame_stats.models.play import Play
from boardgame_stats.taxonomy.metric_taxonomy import Metric
from boardgame_stats.utils.time_utils import is_in_year, is_through_year


@dataclass(frozen=True)
class GameValue:
    """A game paired with one metric value (a ranked-list row)."""

    game: Game
    value: float


@dataclass(frozen=True)
class NewGameEntry:
    """A game that newly qualified for something during a year.

    Attributes:
        game:            The game.
        value:           Cumulative metric value as of the end of the year.
        this_year_value: Portion of ``value`` contributed by that year's plays.
    """

    game: Game
    value: float
    this_year_value: float


@dataclass
class GameAggregate:
    """Raw per-game totals over a (filtered) play list.

    Attributes:
        game_id:       ``Game.id`` the totals belong to.
        play_count:    Number of plays.
        unique_days:   Distinct play dates (same-day replays collapse).
        total_minutes: Sum of play durations in minutes.
    """

    game_id: int
    play_count: int = 0
    unique_days: set[date] = field(default_factory=set)
    total_minutes: float = 0.0

    def add(self, play: Play) -> None:
        self.play_count += 1
        self.unique_days.add(play.date)
        self.total_minutes += play.duration_min

    def value(self, metric: Metric | str) -> float:
        """Return the value of ``metric`` for this game."""
        return metric_value(self, metric)


def metric_value(agg: Optional[GameAggregate], metric: Metric | str) -> float:
    """Select a metric value from an aggregate; a missing aggregate is 0.

    Raises:
        ValueError: If ``metric`` is not a known ``Metric`` value.
    """
    metric = Metric(metric)
    if agg is None:
        return 0
    if metric == Metric.PLAYS:
        return agg.play_count
    if metric == Metric.SESSIONS:
        return len(agg.unique_days)
    return agg.total_minutes / 60


# ── Play filters ──────────────────────────────────────────────────────────────

def filter_plays_by_year(plays: Sequence[Play], year: Optional[int]) -> list[Play]:
    """Plays dated in ``year`` (all plays when ``year`` is ``None``)."""
    if year is None:
        return list(plays)
    return [p for p in plays if is_in_year(p.date, year)]


def filter_plays_through_year(plays: Sequence[Play], year: Optional[int]) -> list[Play]:
    """Plays dated in or before ``year`` (all plays when ``year`` is ``None``)."""
    if year is None:
        return list(plays)
    return [p for p in plays if is_through_year(p.date, year)]


def index_games(games: Iterable[Game]) -> dict[int, Game]:
    """Build the id -> Game lookup used to resolve aggregates."""
    return {g.id: g for g in games}


def known_plays(games: Iterable[Game], plays: Sequence[Play]) -> list[Play]:
    """Drop plays whose game is not in the catalog."""
    ids = {g.id for g in games}
    return [p for p in plays if p.game_id in ids]


# ── Aggregation ───────────────────────────────────────────────────────────────

def aggregate(
    plays: Sequence[Play],
    year: Optional[int] = None,
    games: Optional[Iterable[Game]] = None,
) -> dict[int, GameAggregate]:
    """Aggregate plays per game, optionally narrowed to a single year.

    Args:
        plays: Play log.
        year:  Calendar year to keep, or ``None`` for all plays.
        games: Catalog; when given, orphan plays are ignored.

    Returns:
        ``{game_id: GameAggregate}`` in first-appearance order.
    """
    return _aggregate(filter_plays_by_year(plays, year), games)


def aggregate_through_year(
    plays: Sequence[Play],
    year: Optional[int],
    games: Optional[Iterable[Game]] = None,
) -> dict[int, GameAggregate]:
    """Aggregate plays dated in or before ``year`` (an as-of snapshot)."""
    return _aggregate(filter_plays_through_year(plays, year), games)


def _aggregate(
    plays: Iterable[Play],
    games: Optional[Iterable[Game]],
) -> dict[int, GameAggregate]:
    allowed = {g.id for g in games} if games is not None else None
    result: dict[int, GameAggregate] = {}
    for play in plays:
        if allowed is not None and play.game_id not in allowed:
            continue
        agg = result.get(play.game_id)
        if agg is None:
            agg = result[play.game_id] = GameAggregate(game_id=play.game_id)
        agg.add(play)
    return result


def ranked_values(
    aggregates: dict[int, GameAggregate],
    metric: Metric | str,
) -> list[tuple[int, float]]:
    """``(game_id, value)`` pairs sorted by value descending (stable on ties)."""
    pairs = [(gid, agg.value(metric)) for gid, agg in aggregates.items()]
    pairs.sort(key=lambda pair: pair[1], reverse=True)
    return pairs
