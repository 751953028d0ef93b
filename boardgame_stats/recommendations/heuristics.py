"""
Recommendation heuristics: each looks at the owned base games from one angle
and proposes at most one game with a reason and a supporting stat.

Heuristics (in engine priority order)
-------------------------------------
fresh_and_recent    Played within the recent window, fewest sessions so far.
                    Ties: uniform.
squaring_up         One per metric.  Finds how many more games must reach
                    ``h + 1`` for the h-index to rise, takes the value of
                    the N-th best game still below ``h + 1`` as a cutoff, and
                    picks uniformly among every candidate at or above it.
closest_milestone   One per metric.  For each next milestone target (5, 10,
                    25, 100) keeps the games at the highest value chasing it,
                    then picks one weighted by ``1/sqrt(group size)`` so rare
                    targets are not crowded out by common ones.
join_cost_club      Optional, one per metric.  Among priced games still above
                    a cost club threshold, keeps those needing the fewest
                    whole extra units to get under it and picks uniformly.
gathering_dust      Played game with the oldest last play.  Ties: uniform.
shelf_of_shame      Uniform pick among owned base games never played.

Profiles only cover owned base games; the h-index a squaring-up heuristic
works towards is the all-time index over every cataloged play.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Sequence

from boardgame_stats.models.game import Game
from boardgame_stats.models.play import Play
from boardgame_stats.recommendations.random_source import (
    RandomSource,
    choose_uniform,
    choose_weighted_by_sqrt_rarity,
)
from boardgame_stats.stats.collection import is_game_owned
from boardgame_stats.stats import cost as cost_stats
from boardgame_stats.stats.milestones import next_milestone_target
from boardgame_stats.taxonomy.metric_taxonomy import METRIC_UNITS, CostClub, Metric, MilestoneBand
from boardgame_stats.utils.time_utils import month_year_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Suggestion:
    """One heuristic's pick."""

    game: Game
    reason: str
    stat: str


@dataclass
class GameProfile:
    """Play-derived profile of one owned base game.

    Attributes:
        game:           The game.
        play_count:     Number of plays.
        unique_days:    Distinct play dates.
        total_minutes:  Sum of play durations.
        last_play_date: Most recent play, ``None`` if never played.
        price_paid:     Summed price of the owned copies, ``None`` if unpriced.
    """

    game: Game
    play_count: int = 0
    unique_days: set[date] = field(default_factory=set)
    total_minutes: float = 0.0
    last_play_date: Optional[date] = None
    price_paid: Optional[float] = None

    def add(self, play: Play) -> None:
        self.play_count += 1
        self.unique_days.add(play.date)
        self.total_minutes += play.duration_min
        if self.last_play_date is None or play.date > self.last_play_date:
            self.last_play_date = play.date

    def value(self, metric: Metric | str) -> float:
        metric = Metric(metric)
        if metric == Metric.PLAYS:
            return self.play_count
        if metric == Metric.SESSIONS:
            return len(self.unique_days)
        return self.total_minutes / 60


def build_profiles(games: Sequence[Game], plays: Sequence[Play]) -> list[GameProfile]:
    """Profiles for owned base games, in catalog order."""
    profiles = {
        g.id: GameProfile(game=g, price_paid=cost_stats.price_paid(g))
        for g in games
        if g.is_base_game and is_game_owned(g)
    }
    for play in plays:
        profile = profiles.get(play.game_id)
        if profile is not None:
            profile.add(play)
    return list(profiles.values())


# ── Heuristics ────────────────────────────────────────────────────────────────

def fresh_and_recent(
    profiles: Sequence[GameProfile],
    rng: RandomSource,
    today: date,
    recent_days: int = 30,
) -> Optional[Suggestion]:
    cutoff = today - timedelta(days=recent_days)
    recent = [
        p for p in profiles
        if p.last_play_date is not None and p.last_play_date >= cutoff
    ]
    if not recent:
        return None

    fewest = min(len(p.unique_days) for p in recent)
    pick = choose_uniform([p for p in recent if len(p.unique_days) == fewest], rng)
    return Suggestion(
        game=pick.game,
        reason="Fresh and recent",
        stat=_count_text(fewest, "total session"),
    )


def squaring_up(
    profiles: Sequence[GameProfile],
    current_h_index: int,
    metric: Metric | str,
    rng: RandomSource,
) -> Optional[Suggestion]:
    metric = Metric(metric)
    target = current_h_index + 1

    needed = target - sum(1 for p in profiles if p.value(metric) >= target)
    if needed <= 0:
        return None

    candidates = [p for p in profiles if 0 < p.value(metric) < target]
    if not candidates:
        return None
    candidates.sort(key=lambda p: p.value(metric), reverse=True)

    cutoff = candidates[min(needed - 1, len(candidates) - 1)].value(metric)
    pick = choose_uniform([p for p in candidates if p.value(metric) >= cutoff], rng)
    logger.debug(
        "squaring_up metric=%s target=%d needed=%d cutoff=%s pick=%s",
        metric, target, needed, cutoff, pick.game.name,
    )

    value = pick.value(metric)
    if metric == Metric.HOURS:
        return Suggestion(pick.game, f"Squaring up: {target} hours", f"{value:.1f} hours")
    unit = "session" if metric == Metric.SESSIONS else "play"
    return Suggestion(
        pick.game,
        f"Squaring up: {_count_text(target, unit)}",
        _count_text(int(value), unit),
    )


def closest_milestone(
    profiles: Sequence[GameProfile],
    metric: Metric | str,
    rng: RandomSource,
) -> Optional[Suggestion]:
    metric = Metric(metric)
    chasing: list[tuple[GameProfile, float, int]] = []
    for profile in profiles:
        value = profile.value(metric)
        if value <= 0:
            continue
        target = next_milestone_target(value)
        if target is not None:
            chasing.append((profile, value, target))
    if not chasing:
        return None

    best_per_target: dict[int, float] = {}
    for _, value, target in chasing:
        best_per_target[target] = max(value, best_per_target.get(target, value))

    closest = [entry for entry in chasing if entry[1] == best_per_target[entry[2]]]
    profile, value, target = choose_weighted_by_sqrt_rarity(closest, lambda e: e[2], rng)

    prefix = "Almost a" if value >= math.floor(target * 0.9) else "Closest to a"
    name = MilestoneBand.for_threshold(target).display_name
    if metric == Metric.HOURS:
        stat = f"{value:.1f} total hours"
    elif metric == Metric.SESSIONS:
        stat = _count_text(int(value), "total session")
    else:
        stat = _count_text(int(value), "total play")
    return Suggestion(profile.game, f"{prefix} {name}", stat)


def join_cost_club(
    profiles: Sequence[GameProfile],
    metric: Metric | str,
    rng: RandomSource,
    club: CostClub | str = CostClub.FIVE_DOLLAR,
) -> Optional[Suggestion]:
    metric = Metric(metric)
    club = CostClub(club)

    candidates: list[tuple[GameProfile, float, float]] = []
    for profile in profiles:
        value = profile.value(metric)
        if profile.price_paid is None or value <= 0:
            continue
        cost = profile.price_paid / value
        if cost <= club.threshold:
            continue
        candidates.append((profile, cost, profile.price_paid / club.threshold - value))
    if not candidates:
        return None

    fewest = min(math.floor(needed) for _, _, needed in candidates)
    closest = [c for c in candidates if math.floor(c[2]) == fewest]
    profile, cost, _ = choose_weighted_by_sqrt_rarity(closest, lambda c: club, rng)

    unit = METRIC_UNITS[metric]
    return Suggestion(profile.game, f"Join the {club.label}/{unit} club", f"${cost:.2f}/{unit}")


def gathering_dust(profiles: Sequence[GameProfile], rng: RandomSource) -> Optional[Suggestion]:
    played = [p for p in profiles if p.last_play_date is not None]
    if not played:
        return None

    oldest = min(p.last_play_date for p in played)
    pick = choose_uniform([p for p in played if p.last_play_date == oldest], rng)
    return Suggestion(pick.game, "Gathering dust", f"Last played {month_year_label(oldest)}")


def shelf_of_shame(profiles: Sequence[GameProfile], rng: RandomSource) -> Optional[Suggestion]:
    pick = choose_uniform([p for p in profiles if p.play_count == 0], rng)
    if pick is None:
        return None
    return Suggestion(pick.game, "Shelf of shame", "Never played")


def _count_text(count: int, unit: str) -> str:
    """``"1 total session"`` / ``"3 total sessions"``."""
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"
