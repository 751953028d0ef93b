"""
Play statistics: totals, play time, per-game breakdowns and top games.

Every function takes an optional ``year`` (single-year slice, ``None`` for
all time) and honours the orphan rule: plays whose game is not in the
catalog are ignored wherever a ``games`` argument is accepted.

Durations
---------
Ingestion imputes a duration for plays logged without one, so every real
play has ``duration_min > 0``.  A zero duration is treated as "no duration
data": such plays still count as plays and sessions but are left out of the
min / max / median / average figures.

Top-game ordering
-----------------
Rankings sort by the requested metric, then total minutes, then sessions,
then plays, all descending.  Remaining ties keep first-appearance order.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from boardgame_stats.models.game import Game
from boardgame_stats.models.play import Play
from boardgame_stats.stats.metrics import (
    GameAggregate,
    aggregate,
    filter_plays_by_year,
    index_games,
    known_plays,
)
from boardgame_stats.taxonomy.metric_taxonomy import Metric
from boardgame_stats.utils.math_utils import mean, median


# ── Result types ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DailySessionStats:
    median_minutes: Optional[float] = None
    average_minutes: Optional[float] = None


@dataclass(frozen=True)
class GamesPlayedSummary:
    """Distinct games played.

    Attributes:
        total:        Games with at least one play in the period.
        new_to_me:    Games whose first-ever play falls in ``year``; ``None``
                      when no year was given.
        my_games:     Played games with any play (all time) on an owned copy.
        others_games: Played games only ever played on someone else's copy.
    """

    total: int
    new_to_me: Optional[int]
    my_games: int
    others_games: int


@dataclass(frozen=True)
class PlayTimeTotals:
    total_minutes: float
    total_hours: float
    plays_with_actual_duration: int
    plays_with_estimated_duration: int
    total_plays: int


@dataclass(frozen=True)
class GamePlayTime:
    game: Game
    total_minutes: float
    total_hours: float
    play_count: int
    actual_count: int
    estimated_count: int
    min_minutes: Optional[float]
    max_minutes: Optional[float]
    median_minutes: Optional[float]
    avg_minutes: Optional[float]


@dataclass(frozen=True)
class GameDaysPlayed:
    game: Game
    unique_days: int
    min_minutes: Optional[float]
    max_minutes: Optional[float]
    median_minutes: Optional[float]
    avg_minutes: Optional[float]
    median_plays: Optional[float]
    avg_plays: Optional[float]


@dataclass(frozen=True)
class TopGame:
    """A ranked game with all three metrics (``hours`` is fractional)."""

    game: Game
    value: float
    hours: float
    sessions: int
    plays: int


@dataclass(frozen=True)
class SinglePlay:
    game: Game
    duration_min: float
    date: date


# ── Totals ────────────────────────────────────────────────────────────────────

def total_plays(plays: Sequence[Play], year: Optional[int] = None) -> int:
    return len(filter_plays_by_year(plays, year))


def total_days_played(plays: Sequence[Play], year: Optional[int] = None) -> int:
    return len({p.date for p in filter_plays_by_year(plays, year)})


def daily_session_stats(plays: Sequence[Play], year: Optional[int] = None) -> DailySessionStats:
    """Median and mean minutes per gaming day; days summing to zero are skipped."""
    per_day: dict[date, float] = {}
    for play in filter_plays_by_year(plays, year):
        per_day[play.date] = per_day.get(play.date, 0.0) + play.duration_min

    minutes = [m for m in per_day.values() if m > 0]
    if not minutes:
        return DailySessionStats()
    return DailySessionStats(median_minutes=median(minutes), average_minutes=mean(minutes))


def games_played_summary(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int] = None,
) -> GamesPlayedSummary:
    catalog_plays = known_plays(games, plays)
    played_ids = {p.game_id for p in filter_plays_by_year(catalog_plays, year)}
    own_copy_ids = {p.game_id for p in catalog_plays if p.copy_id is not None}

    my_games = len(played_ids & own_copy_ids)
    new_to_me = None
    if year is not None:
        new_to_me = sum(1 for d in _first_play_dates(catalog_plays).values() if d.year == year)

    return GamesPlayedSummary(
        total=len(played_ids),
        new_to_me=new_to_me,
        my_games=my_games,
        others_games=len(played_ids) - my_games,
    )


def total_play_time(plays: Sequence[Play], year: Optional[int] = None) -> PlayTimeTotals:
    total_minutes = 0.0
    actual = estimated = count = 0
    for play in filter_plays_by_year(plays, year):
        count += 1
        if play.duration_min <= 0:
            continue
        total_minutes += play.duration_min
        if play.duration_estimated:
            estimated += 1
        else:
            actual += 1

    return PlayTimeTotals(
        total_minutes=total_minutes,
        total_hours=total_minutes / 60,
        plays_with_actual_duration=actual,
        plays_with_estimated_duration=estimated,
        total_plays=count,
    )


# ── Per-game breakdowns ───────────────────────────────────────────────────────

def play_time_by_game(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int] = None,
) -> list[GamePlayTime]:
    """Per-game play time, most minutes first."""
    lookup = index_games(games)
    per_game: dict[int, list[Play]] = {}
    for play in filter_plays_by_year(known_plays(games, plays), year):
        per_game.setdefault(play.game_id, []).append(play)

    rows: list[GamePlayTime] = []
    for game_id, game_plays in per_game.items():
        durations = [p.duration_min for p in game_plays if p.duration_min > 0]
        total = sum(durations)
        rows.append(
            GamePlayTime(
                game=lookup[game_id],
                total_minutes=total,
                total_hours=total / 60,
                play_count=len(game_plays),
                actual_count=sum(1 for p in game_plays if p.duration_min > 0 and not p.duration_estimated),
                estimated_count=sum(1 for p in game_plays if p.duration_min > 0 and p.duration_estimated),
                min_minutes=min(durations) if durations else None,
                max_minutes=max(durations) if durations else None,
                median_minutes=median(durations),
                avg_minutes=mean(durations),
            )
        )
    rows.sort(key=lambda row: row.total_minutes, reverse=True)
    return rows


def days_played_by_game(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int] = None,
) -> list[GameDaysPlayed]:
    """Per-game session breakdown (minutes and plays per play day), most days first."""
    lookup = index_games(games)
    minutes_per_day: dict[int, dict[date, float]] = {}
    plays_per_day: dict[int, dict[date, int]] = {}
    for play in filter_plays_by_year(known_plays(games, plays), year):
        mins = minutes_per_day.setdefault(play.game_id, {})
        mins[play.date] = mins.get(play.date, 0.0) + play.duration_min
        counts = plays_per_day.setdefault(play.game_id, {})
        counts[play.date] = counts.get(play.date, 0) + 1

    rows: list[GameDaysPlayed] = []
    for game_id, mins in minutes_per_day.items():
        day_minutes = list(mins.values())
        day_plays = list(plays_per_day[game_id].values())
        rows.append(
            GameDaysPlayed(
                game=lookup[game_id],
                unique_days=len(mins),
                min_minutes=min(day_minutes),
                max_minutes=max(day_minutes),
                median_minutes=median(day_minutes),
                avg_minutes=mean(day_minutes),
                median_plays=median(day_plays),
                avg_plays=mean(day_plays),
            )
        )
    rows.sort(key=lambda row: row.unique_days, reverse=True)
    return rows


# ── Top games ─────────────────────────────────────────────────────────────────

def top_games_by_metric(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    metric: Metric | str,
    limit: int = 3,
) -> list[TopGame]:
    """The ``limit`` highest-ranked games played in ``year``."""
    return _ranked(games, aggregate(plays, year, games), metric)[:limit]


def top_new_to_me_game(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
) -> Optional[TopGame]:
    """Highest-ranked game whose first-ever play falls in ``year``."""
    first_dates = _first_play_dates(known_plays(games, plays))
    new_ids = {gid for gid, d in first_dates.items() if d.year == year}
    aggregates = {gid: agg for gid, agg in aggregate(plays, year, games).items() if gid in new_ids}
    ranked = _ranked(games, aggregates, metric)
    return ranked[0] if ranked else None


def top_returning_game(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: int,
    metric: Metric | str,
) -> Optional[TopGame]:
    """Highest-ranked game played in ``year`` whose first play came earlier."""
    first_dates = _first_play_dates(known_plays(games, plays))
    aggregates = {
        gid: agg for gid, agg in aggregate(plays, year, games).items()
        if first_dates[gid].year < year
    }
    ranked = _ranked(games, aggregates, metric)
    return ranked[0] if ranked else None


def longest_single_plays(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int],
    count: int = 5,
) -> list[SinglePlay]:
    """The ``count`` longest individual plays (zero-duration plays excluded)."""
    lookup = index_games(games)
    candidates = [
        p for p in filter_plays_by_year(known_plays(games, plays), year) if p.duration_min > 0
    ]
    candidates.sort(key=lambda p: p.duration_min, reverse=True)
    return [
        SinglePlay(game=lookup[p.game_id], duration_min=p.duration_min, date=p.date)
        for p in candidates[:count]
    ]


def _first_play_dates(plays: Sequence[Play]) -> dict[int, date]:
    first: dict[int, date] = {}
    for play in plays:
        current = first.get(play.game_id)
        if current is None or play.date < current:
            first[play.game_id] = play.date
    return first


def _ranked(
    games: Sequence[Game],
    aggregates: dict[int, GameAggregate],
    metric: Metric | str,
) -> list[TopGame]:
    lookup = index_games(games)
    rows = [
        TopGame(
            game=lookup[gid],
            value=agg.value(metric),
            hours=agg.value(Metric.HOURS),
            sessions=len(agg.unique_days),
            plays=agg.play_count,
        )
        for gid, agg in aggregates.items()
    ]
    rows.sort(key=lambda r: (r.value, r.hours, r.sessions, r.plays), reverse=True)
    return rows
