"""
Caller-owned memoization of the per-(year, metric) statistics bundle.

Several report sections need the same h-index and milestone numbers for the
same year and metric.  ``StatsSnapshotCache`` computes each bundle once per
collection and hands back the same frozen ``StatsSnapshot`` on repeat calls.
The cache is never shared between collections; call ``invalidate()`` if the
underlying data is swapped out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from boardgame_stats.models.collection import Collection
from boardgame_stats.stats.h_index import (
    h_index_for_metric,
    h_index_increase,
    new_h_index_games,
)
from boardgame_stats.stats.metrics import GameValue, NewGameEntry
from boardgame_stats.stats.milestones import (
    classify,
    cumulative_count,
    milestone_increase,
    new_milestone_games,
    skipped_milestone_count,
)
from boardgame_stats.taxonomy.metric_taxonomy import BAND_ORDER, Metric, MilestoneBand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatsSnapshot:
    """H-index and milestone figures for one (year, metric) pair.

    Attributes:
        year:                 Year of the single-year slice (``None`` = all time).
        metric:               Metric the figures are computed on.
        h_index:              H-index over the slice.
        bands:                Band partition of the slice.
        cumulative_counts:    Games at or above each band's lower bound.
        h_index_increase:     Year-over-year index change (year only).
        new_h_index_games:    New contributors during the year (year only).
        band_increases:       Net band membership change (year only).
        new_band_games:       Games newly inside each band (year only).
        skipped_band_counts:  Games that jumped each band (year only).
    """

    year: Optional[int]
    metric: Metric
    h_index: int
    bands: dict[MilestoneBand, list[GameValue]]
    cumulative_counts: dict[MilestoneBand, int]
    h_index_increase: Optional[int] = None
    new_h_index_games: list[NewGameEntry] = field(default_factory=list)
    band_increases: dict[MilestoneBand, int] = field(default_factory=dict)
    new_band_games: dict[MilestoneBand, list[NewGameEntry]] = field(default_factory=dict)
    skipped_band_counts: dict[MilestoneBand, int] = field(default_factory=dict)


class StatsSnapshotCache:
    """Memoizes ``StatsSnapshot`` objects for one collection."""

    def __init__(self, collection: Collection) -> None:
        self._collection = collection
        self._snapshots: dict[tuple[Optional[int], Metric], StatsSnapshot] = {}

    def get(self, year: Optional[int], metric: Metric | str) -> StatsSnapshot:
        key = (year, Metric(metric))
        snapshot = self._snapshots.get(key)
        if snapshot is None:
            snapshot = self._snapshots[key] = self._compute(*key)
        return snapshot

    def invalidate(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)

    def _compute(self, year: Optional[int], metric: Metric) -> StatsSnapshot:
        games, plays = self._collection.games, self._collection.plays
        logger.debug("Computing stats snapshot year=%s metric=%s", year, metric)

        base = dict(
            year=year,
            metric=metric,
            h_index=h_index_for_metric(games, plays, year, metric),
            bands=classify(games, plays, year, metric),
            cumulative_counts={
                band: cumulative_count(games, plays, year, metric, band.threshold)
                for band in BAND_ORDER
            },
        )
        if year is None:
            return StatsSnapshot(**base)

        return StatsSnapshot(
            **base,
            h_index_increase=h_index_increase(games, plays, year, metric),
            new_h_index_games=new_h_index_games(games, plays, year, metric),
            band_increases={
                band: milestone_increase(games, plays, year, metric, band)
                for band in BAND_ORDER
            },
            new_band_games={
                band: new_milestone_games(games, plays, year, metric, band)
                for band in BAND_ORDER
            },
            skipped_band_counts={
                band: skipped_milestone_count(games, plays, year, metric, band)
                for band in BAND_ORDER
            },
        )
