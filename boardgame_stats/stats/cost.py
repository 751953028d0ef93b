"""
Cost statistics: what each hour, session and play of an owned game cost.

Only owned base games are priced.  A game's price is the sum of
``price_paid`` over its owned copies; a game none of whose owned copies
carries a price is *unpriced* and left out of every cost-per-unit figure.

Cost per unit is ``price / value``, capped at ``price`` so that a game with
less than one logged hour never looks dearer than it was.  A game whose
metric value is 0 has no cost per unit.

Clubs
-----
``CostClub`` mirrors ``MilestoneBand`` in the opposite direction, and the
same two membership notions apply:

  - *membership* (``cost_club_games``): cumulative, ``cost <= threshold``;
  - *club band* (``value_club_games`` and the year-over-year functions):
    cost inside the club's half-open range, so a $0.40/hour game belongs to
    the fifty-cents band and not also to the one-dollar band.

Play totals are always as-of: ``year=None`` means all time and ``year=2024``
counts every play dated 2024 or earlier.  The year-over-year functions
compare the end of ``year`` with the end of ``year - 1``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from boardgame_stats.models.game import Copy, Game
from boardgame_stats.models.play import Play
from boardgame_stats.stats.collection import is_game_owned
from boardgame_stats.stats.metrics import GameAggregate, aggregate_through_year, metric_value
from boardgame_stats.taxonomy.metric_taxonomy import CostClub, Metric
from boardgame_stats.utils.math_utils import mean, median
from boardgame_stats.utils.time_utils import is_in_year, is_through_year

logger = logging.getLogger(__name__)


# ── Result types ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GameCost:
    """A game with the summed price of the copies being counted (``None`` if unpriced)."""

    game: Game
    price_paid: Optional[float]


@dataclass
class CostTotals:
    """Money spent on owned base games.

    Attributes:
        total_cost:          Sum over priced games.
        games:               Every counted game, most expensive first
                             (unpriced games sort as 0).
        games_without_price: Counted games with no price on any copy.
    """

    total_cost: float = 0.0
    games: list[GameCost] = field(default_factory=list)
    games_without_price: int = 0


@dataclass(frozen=True)
class CostEntry:
    """A priced game with its metric value and cost per metric unit."""

    game: Game
    metric_value: float
    cost_per_metric: float
    price_paid: float


@dataclass(frozen=True)
class CostClubCandidate:
    """A game outside a club and how much more play would bring it in."""

    game: Game
    metric_value: float
    cost_per_metric: float
    price_paid: float
    additional_needed: float


@dataclass(frozen=True)
class NewClubEntry:
    """A game that entered a club band during a year.

    Attributes:
        this_year_value: Metric value contributed by that year's plays.
    """

    game: Game
    metric_value: float
    cost_per_metric: float
    price_paid: float
    this_year_value: float


@dataclass
class CostPerMetricStats:
    """Cost-per-unit distribution over priced owned base games.

    Unplayed games are included at their full price.  ``overall_rate`` is
    total price over total metric value (``None`` when nothing was played).
    """

    median: Optional[float] = None
    game_average: Optional[float] = None
    overall_rate: Optional[float] = None
    games: list[CostEntry] = field(default_factory=list)

    @property
    def game_count(self) -> int:
        return len(self.games)


@dataclass
class UnplayedCost:
    """Priced owned base games that have never been played, dearest first."""

    total_cost: float = 0.0
    games: list[GameCost] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.games)


# ── Pricing ───────────────────────────────────────────────────────────────────

def _sum_prices(copies: Iterable[Copy]) -> Optional[float]:
    prices = [copy.price_paid for copy in copies if copy.price_paid is not None]
    return sum(prices) if prices else None


def price_paid(game: Game) -> Optional[float]:
    """Summed price of the owned copies of ``game``; ``None`` when none is priced."""
    return _sum_prices(copy for copy in game.copies if copy.status_owned)


def cost_per_metric(price: float, value: float) -> Optional[float]:
    """``price / value`` capped at ``price``; ``None`` when ``value`` is not positive."""
    if value <= 0:
        return None
    return min(price / value, price)


def _is_priceable(game: Game) -> bool:
    return game.is_base_game and is_game_owned(game)


def _costs_through_year(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
) -> dict[int, CostEntry]:
    """Cost entries for priced, played, owned base games in catalog order."""
    aggregates = aggregate_through_year(plays, year, games)
    result: dict[int, CostEntry] = {}
    for game in games:
        if not _is_priceable(game):
            continue
        price = price_paid(game)
        if price is None:
            continue
        value = metric_value(aggregates.get(game.id), metric)
        cost = cost_per_metric(price, value)
        if cost is None:
            continue
        result[game.id] = CostEntry(game, value, cost, price)
    return result


# ── Totals ────────────────────────────────────────────────────────────────────

def total_cost(games: Sequence[Game], year: Optional[int] = None) -> CostTotals:
    """Money spent on owned base games, or on the copies acquired in ``year``."""
    totals = CostTotals()
    for game in games:
        if not game.is_base_game:
            continue
        copies = [c for c in game.copies if c.status_owned]
        if year is not None:
            copies = [
                c for c in copies
                if c.acquisition_date is not None and is_in_year(c.acquisition_date, year)
            ]
        if not copies:
            continue

        price = _sum_prices(copies)
        if price is None:
            totals.games_without_price += 1
        else:
            totals.total_cost += price
        totals.games.append(GameCost(game, price))

    totals.games.sort(key=lambda row: row.price_paid or 0, reverse=True)
    return totals


def cost_per_metric_stats(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
) -> CostPerMetricStats:
    """Median, average and overall cost per ``metric`` unit.

    With a ``year``, an unplayed game only counts if one of its owned copies
    has a known acquisition date in or before that year.
    """
    aggregates = aggregate_through_year(plays, year, games)
    rows: list[tuple[CostEntry, GameAggregate | None]] = []

    for game in games:
        if not _is_priceable(game):
            continue
        price = price_paid(game)
        if price is None:
            continue
        agg = aggregates.get(game.id)
        value = metric_value(agg, metric)
        cost = cost_per_metric(price, value)
        if cost is None:
            if year is not None and not any(
                c.status_owned
                and c.acquisition_date is not None
                and is_through_year(c.acquisition_date, year)
                for c in game.copies
            ):
                continue
            cost, value = price, 0
        rows.append((CostEntry(game, value, cost, price), agg))

    rows.sort(
        key=lambda row: (
            row[0].cost_per_metric,
            -row[0].metric_value,
            -metric_value(row[1], Metric.HOURS),
            -metric_value(row[1], Metric.SESSIONS),
            -metric_value(row[1], Metric.PLAYS),
        )
    )
    entries = [entry for entry, _ in rows]
    costs = [e.cost_per_metric for e in entries]
    total_metric = sum(e.metric_value for e in entries)

    return CostPerMetricStats(
        median=median(costs),
        game_average=mean(costs),
        overall_rate=sum(e.price_paid for e in entries) / total_metric if total_metric > 0 else None,
        games=entries,
    )


def unplayed_cost(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int] = None,
) -> UnplayedCost:
    """Money sitting on the shelf: priced owned base games never played at all.

    With a ``year``, only copies with a known acquisition date in or before
    that year are counted.
    """
    played = {p.game_id for p in plays}
    result = UnplayedCost()
    for game in games:
        if not game.is_base_game or game.id in played:
            continue
        copies = [c for c in game.copies if c.status_owned]
        if year is not None:
            copies = [
                c for c in copies
                if c.acquisition_date is not None and is_through_year(c.acquisition_date, year)
            ]
        price = _sum_prices(copies)
        if price is None:
            continue
        result.games.append(GameCost(game, price))
        result.total_cost += price

    result.games.sort(key=lambda row: row.price_paid, reverse=True)
    return result


# ── Club membership ───────────────────────────────────────────────────────────

def cost_club_games(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
    club: CostClub | str,
) -> list[CostEntry]:
    """Games at or below ``club``'s cost per unit, cheapest first."""
    club = CostClub(club)
    rows = [
        entry for entry in _costs_through_year(games, plays, year, metric).values()
        if entry.cost_per_metric <= club.threshold
    ]
    rows.sort(key=lambda entry: entry.cost_per_metric)
    return rows


def games_approaching_cost_club(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
    club: CostClub | str,
    limit: int = 5,
) -> list[CostClubCandidate]:
    """The ``limit`` games outside ``club`` needing the least extra play to join it."""
    club = CostClub(club)
    candidates: list[CostClubCandidate] = []
    for entry in _costs_through_year(games, plays, year, metric).values():
        if entry.cost_per_metric <= club.threshold:
            continue
        candidates.append(
            CostClubCandidate(
                game=entry.game,
                metric_value=entry.metric_value,
                cost_per_metric=entry.cost_per_metric,
                price_paid=entry.price_paid,
                additional_needed=entry.price_paid / club.threshold - entry.metric_value,
            )
        )
    candidates.sort(key=lambda c: c.additional_needed)
    return candidates[:limit]


# ── Club bands, year over year ────────────────────────────────────────────────

def value_club_games(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
    club: CostClub | str,
) -> list[CostEntry]:
    """Games whose cost per unit sits inside ``club``'s band, cheapest first."""
    club = CostClub(club)
    rows = [
        entry for entry in _costs_through_year(games, plays, year, metric).values()
        if club.contains(entry.cost_per_metric)
    ]
    rows.sort(key=lambda entry: entry.cost_per_metric)
    return rows


def value_club_increase(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
    club: CostClub | str,
) -> int:
    """Net change in ``club`` band membership between the end of ``year - 1`` and ``year``."""
    current = value_club_games(games, plays, year, metric, club)
    previous = value_club_games(games, plays, year - 1, metric, club)
    return len(current) - len(previous)


def new_value_club_games(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
    club: CostClub | str,
) -> list[NewClubEntry]:
    """Games inside ``club``'s band at the end of ``year`` but not a year earlier."""
    club = CostClub(club)
    previous = _costs_through_year(games, plays, year - 1, metric)

    result: list[NewClubEntry] = []
    for entry in value_club_games(games, plays, year, metric, club):
        before = previous.get(entry.game.id)
        if before is not None and club.contains(before.cost_per_metric):
            continue
        result.append(
            NewClubEntry(
                game=entry.game,
                metric_value=entry.metric_value,
                cost_per_metric=entry.cost_per_metric,
                price_paid=entry.price_paid,
                this_year_value=entry.metric_value - (before.metric_value if before else 0),
            )
        )
    return result


def skipped_value_club_count(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
    club: CostClub | str,
) -> int:
    """Games that dropped straight through ``club``'s band during ``year``.

    A game skips a club when its cost was above the club's threshold (or it
    had no cost yet) at the end of ``year - 1`` and at or below the next
    stricter club's threshold at the end of ``year``.  The fifty-cents club
    can never be skipped.
    """
    club = CostClub(club)
    lower = club.next_threshold
    if lower is None:
        return 0

    current = _costs_through_year(games, plays, year, metric)
    previous = _costs_through_year(games, plays, year - 1, metric)

    skipped = 0
    for game_id, entry in current.items():
        if entry.cost_per_metric > lower:
            continue
        before = previous.get(game_id)
        if before is None or before.cost_per_metric > club.threshold:
            skipped += 1
    logger.debug("%d games skipped the %s club in %d", skipped, club.value, year)
    return skipped
