"""
Recommendation engine: runs every heuristic in priority order and merges
their picks per game.

Priority order
--------------
    1. fresh and recent
    2. squaring up      hours, sessions, plays
    3. milestone        hours, sessions, plays
    4. cost club        hours, sessions, plays (only when enabled)
    5. gathering dust
    6. shelf of shame

A game picked by several heuristics appears once, its reasons and stats
accumulated in parallel lists in the order above.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from boardgame_stats.models.game import Game
from boardgame_stats.models.play import Play
from boardgame_stats.recommendations.heuristics import (
    Suggestion,
    build_profiles,
    closest_milestone,
    fresh_and_recent,
    gathering_dust,
    join_cost_club,
    shelf_of_shame,
    squaring_up,
)
from boardgame_stats.recommendations.random_source import RandomSource
from boardgame_stats.stats.h_index import h_index_for_metric
from boardgame_stats.taxonomy.metric_taxonomy import METRIC_ORDER
from boardgame_stats.utils.time_utils import today as local_today

logger = logging.getLogger(__name__)


@dataclass
class Recommendation:
    """One suggested game; ``reasons[i]`` is backed by ``stats[i]``."""

    game: Game
    reasons: list[str] = field(default_factory=list)
    stats: list[str] = field(default_factory=list)


def suggest_games(
    games: Sequence[Game],
    plays: Sequence[Play],
    rng: RandomSource,
    today: Optional[date] = None,
    recent_days: int = 30,
    cost_club: bool = False,
) -> list[Recommendation]:
    """Run every heuristic over the owned base games and merge the picks.

    Args:
        games:       Full catalog.
        plays:       Full play log.
        rng:         Random source for every tie-break.
        today:       Reference day for "recent"; defaults to the local date.
        recent_days: Size of the "fresh and recent" window in days.
        cost_club:   Also suggest games closest to the $5 cost club.

    Returns:
        Merged recommendations in first-pick order; empty when no heuristic
        finds a candidate.
    """
    today = today or local_today()
    profiles = build_profiles(games, plays)

    suggestions: list[Optional[Suggestion]] = [fresh_and_recent(profiles, rng, today, recent_days)]
    for metric in METRIC_ORDER:
        current = h_index_for_metric(games, plays, None, metric)
        suggestions.append(squaring_up(profiles, current, metric, rng))
    for metric in METRIC_ORDER:
        suggestions.append(closest_milestone(profiles, metric, rng))
    if cost_club:
        for metric in METRIC_ORDER:
            suggestions.append(join_cost_club(profiles, metric, rng))
    suggestions.append(gathering_dust(profiles, rng))
    suggestions.append(shelf_of_shame(profiles, rng))

    merged = merge_suggestions(s for s in suggestions if s is not None)
    logger.debug(
        "suggest_games: %d profiles, %d suggestions, %d games",
        len(profiles), sum(s is not None for s in suggestions), len(merged),
    )
    return merged


def merge_suggestions(suggestions) -> list[Recommendation]:
    """Group suggestions by game id, keeping first-occurrence order."""
    by_game: dict[int, Recommendation] = {}
    for suggestion in suggestions:
        rec = by_game.get(suggestion.game.id)
        if rec is None:
            rec = by_game[suggestion.game.id] = Recommendation(game=suggestion.game)
        rec.reasons.append(suggestion.reason)
        rec.stats.append(suggestion.stat)
    return list(by_game.values())
