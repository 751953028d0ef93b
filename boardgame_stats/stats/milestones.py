"""
Milestone classification: fives, dimes, quarters and centuries.

Two membership notions coexist and must not be confused:

  - *Band* membership (``classify``): a value sits only in its highest band,
    so a 12-session game is a dime and not also a five.
  - *Cumulative* membership (``cumulative_count``): "games with N or more",
    counted regardless of band.

Year semantics
--------------
``classify`` and ``cumulative_count`` narrow to a single year (``None`` for
all time).  The year-over-year functions (``milestone_increase``,
``new_milestone_games``, ``skipped_milestone_count``) compare as-of snapshots
at the end of ``year`` and ``year - 1``, recomputing band membership at both
cutoffs rather than tracking individual transitions.  A game that jumps from
fives straight to centuries in one year therefore counts +1 for centuries,
-1 for fives, and as "skipped" for dimes and quarters.
"""

from __future__ import annotations

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
)
from boardgame_stats.taxonomy.metric_taxonomy import (
    BAND_ORDER,
    MILESTONE_THRESHOLDS,
    Metric,
    MilestoneBand,
)


def next_milestone_target(count: float) -> Optional[int]:
    """Next band threshold strictly above ``count``; ``None`` from 100 up."""
    for threshold in sorted(MILESTONE_THRESHOLDS.values()):
        if count < threshold:
            return threshold
    return None


def classify(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
) -> dict[MilestoneBand, list[GameValue]]:
    """Partition played games into milestone bands.

    Returns:
        ``{band: [GameValue, ...]}`` with all four bands present, each list
        sorted by value descending.  Games below 5 appear nowhere.
    """
    lookup = index_games(games)
    bands: dict[MilestoneBand, list[GameValue]] = {band: [] for band in BAND_ORDER}

    for game_id, agg in aggregate(plays, year, games).items():
        value = agg.value(metric)
        band = MilestoneBand.for_value(value)
        if band is not None:
            bands[band].append(GameValue(game=lookup[game_id], value=value))

    for rows in bands.values():
        rows.sort(key=lambda row: row.value, reverse=True)
    return bands


def cumulative_count(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
    threshold: float,
) -> int:
    """Number of games whose ``metric`` value is ``>= threshold``."""
    return sum(
        1 for agg in aggregate(plays, year, games).values() if agg.value(metric) >= threshold
    )


def games_in_band_through_year(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
    band: MilestoneBand | str,
) -> list[GameValue]:
    """Games whose as-of-``year`` value sits inside ``band``, highest first."""
    band = MilestoneBand(band)
    lookup = index_games(games)
    rows = [
        GameValue(game=lookup[game_id], value=agg.value(metric))
        for game_id, agg in aggregate_through_year(plays, year, games).items()
        if band.contains(agg.value(metric))
    ]
    rows.sort(key=lambda row: row.value, reverse=True)
    return rows


def milestone_increase(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
    band: MilestoneBand | str,
) -> int:
    """Net change in ``band`` membership between the end of ``year - 1`` and ``year``.

    Can be negative: games leaving a band for a higher one reduce its count.
    """
    current = games_in_band_through_year(games, plays, year, metric, band)
    previous = games_in_band_through_year(games, plays, year - 1, metric, band)
    return len(current) - len(previous)


def new_milestone_games(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
    band: MilestoneBand | str,
) -> list[NewGameEntry]:
    """Games inside ``band`` at the end of ``year`` that were not inside it a year earlier."""
    band = MilestoneBand(band)
    previous = aggregate_through_year(plays, year - 1, games)
    this_year = aggregate(plays, year, games)

    result: list[NewGameEntry] = []
    for row in games_in_band_through_year(games, plays, year, metric, band):
        if band.contains(metric_value(previous.get(row.game.id), metric)):
            continue
        result.append(
            NewGameEntry(
                game=row.game,
                value=row.value,
                this_year_value=metric_value(this_year.get(row.game.id), metric),
            )
        )
    return result


def skipped_milestone_count(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
    band: MilestoneBand | str,
) -> int:
    """Games that jumped over ``band`` entirely during ``year``.

    A game skips a band when it was below the band's lower bound at the end
    of ``year - 1`` (or unplayed) and at or beyond the next band's lower
    bound at the end of ``year``.  Centuries can never be skipped.
    """
    band = MilestoneBand(band)
    upper = band.next_threshold
    if upper is None:
        return 0

    current = aggregate_through_year(plays, year, games)
    previous = aggregate_through_year(plays, year - 1, games)

    skipped = 0
    for game_id, agg in current.items():
        if agg.value(metric) < upper:
            continue
        if metric_value(previous.get(game_id), metric) < band.threshold:
            skipped += 1
    return skipped
