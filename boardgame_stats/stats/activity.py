"""
Activity calendar analysis: extremes, streaks, dry spells.

The play log is collapsed into one ``DayTotals`` per calendar date holding
total minutes plus per-game minutes and play counts.  All scans then walk
the dates in ascending order, which is what makes every "first occurrence
wins" tie-break hold:

    longest / shortest day   first date reaching the extreme total
    longest streak           first run of consecutive dates reaching the max
    longest dry spell        first gap reaching the max
    most-games day           first date reaching the max distinct games

A dry spell is the run of empty days *between* two logged dates, reported
by its own first and last day: plays on 2024-01-15 and 2024-01-20 give a
4-day dry spell spanning 2024-01-16..2024-01-19.

Input is plays only; apply ``metrics.known_plays()`` beforehand when orphan
plays must be excluded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Sequence

from boardgame_stats.models.play import Play
from boardgame_stats.stats.metrics import filter_plays_by_year
from boardgame_stats.utils.time_utils import days_between


@dataclass(frozen=True)
class DayGameMinutes:
    game_id: int
    minutes: float


@dataclass(frozen=True)
class DayGamePlays:
    game_id: int
    play_count: int


@dataclass
class ActivityStats:
    """Calendar statistics for a play log.

    Attributes:
        total_days:               Distinct dates with at least one play.
        total_minutes:            Sum of all play minutes.
        longest_day_minutes:      Highest single-day total (``None`` if no plays).
        longest_day_date:         Date of that total.
        longest_day_games:        Per-game minutes on that day.
        shortest_day_minutes:     Lowest single-day total (``None`` if no plays).
        shortest_day_date:        Date of that total.
        shortest_day_games:       Per-game minutes on that day.
        longest_streak:           Longest run of consecutive play dates.
        longest_streak_start:     First date of that run.
        longest_streak_end:       Last date of that run.
        longest_dry_spell:        Longest gap in whole days between play dates.
        longest_dry_spell_start:  First empty day of that gap.
        longest_dry_spell_end:    Last empty day of that gap.
        most_games_day:           Most distinct games played on one date.
        most_games_day_date:      Date of that day.
        most_games_day_games:     Per-game play counts on that day.
    """

    total_days: int = 0
    total_minutes: float = 0.0
    longest_day_minutes: Optional[float] = None
    longest_day_date: Optional[date] = None
    longest_day_games: list[DayGameMinutes] = field(default_factory=list)
    shortest_day_minutes: Optional[float] = None
    shortest_day_date: Optional[date] = None
    shortest_day_games: list[DayGameMinutes] = field(default_factory=list)
    longest_streak: int = 0
    longest_streak_start: Optional[date] = None
    longest_streak_end: Optional[date] = None
    longest_dry_spell: int = 0
    longest_dry_spell_start: Optional[date] = None
    longest_dry_spell_end: Optional[date] = None
    most_games_day: int = 0
    most_games_day_date: Optional[date] = None
    most_games_day_games: list[DayGamePlays] = field(default_factory=list)


@dataclass
class DayTotals:
    minutes: float = 0.0
    game_minutes: dict[int, float] = field(default_factory=dict)
    game_plays: dict[int, int] = field(default_factory=dict)

    def minute_breakdown(self) -> list[DayGameMinutes]:
        return [DayGameMinutes(gid, m) for gid, m in self.game_minutes.items()]

    def play_breakdown(self) -> list[DayGamePlays]:
        return [DayGamePlays(gid, n) for gid, n in self.game_plays.items()]


def daily_totals(plays: Sequence[Play]) -> dict[date, DayTotals]:
    """Per-date totals in ascending date order."""
    by_date: dict[date, DayTotals] = {}
    for play in plays:
        day = by_date.setdefault(play.date, DayTotals())
        day.minutes += play.duration_min
        day.game_minutes[play.game_id] = day.game_minutes.get(play.game_id, 0) + play.duration_min
        day.game_plays[play.game_id] = day.game_plays.get(play.game_id, 0) + 1
    return dict(sorted(by_date.items()))


def analyze_activity(plays: Sequence[Play], year: Optional[int] = None) -> ActivityStats:
    """Compute calendar statistics for ``plays`` (narrowed to ``year`` if given)."""
    days = daily_totals(filter_plays_by_year(plays, year))
    if not days:
        return ActivityStats()

    stats = ActivityStats(
        total_days=len(days),
        total_minutes=sum(d.minutes for d in days.values()),
    )
    _fill_day_extremes(stats, days)
    _fill_streak(stats, list(days))
    _fill_dry_spell(stats, list(days))
    _fill_most_games_day(stats, days)
    return stats


def _fill_day_extremes(stats: ActivityStats, days: dict[date, DayTotals]) -> None:
    for day, totals in days.items():
        if stats.longest_day_minutes is None or totals.minutes > stats.longest_day_minutes:
            stats.longest_day_minutes = totals.minutes
            stats.longest_day_date = day
            stats.longest_day_games = totals.minute_breakdown()
        if stats.shortest_day_minutes is None or totals.minutes < stats.shortest_day_minutes:
            stats.shortest_day_minutes = totals.minutes
            stats.shortest_day_date = day
            stats.shortest_day_games = totals.minute_breakdown()


def _fill_streak(stats: ActivityStats, dates: list[date]) -> None:
    stats.longest_streak = 1
    stats.longest_streak_start = stats.longest_streak_end = dates[0]
    run_length = 1
    run_start = dates[0]

    for prev, curr in zip(dates, dates[1:]):
        if days_between(prev, curr) == 1:
            run_length += 1
            if run_length > stats.longest_streak:
                stats.longest_streak = run_length
                stats.longest_streak_start = run_start
                stats.longest_streak_end = curr
        else:
            run_length = 1
            run_start = curr


def _fill_dry_spell(stats: ActivityStats, dates: list[date]) -> None:
    for prev, curr in zip(dates, dates[1:]):
        gap = days_between(prev, curr) - 1
        if gap > stats.longest_dry_spell:
            stats.longest_dry_spell = gap
            stats.longest_dry_spell_start = prev + timedelta(days=1)
            stats.longest_dry_spell_end = curr - timedelta(days=1)


def _fill_most_games_day(stats: ActivityStats, days: dict[date, DayTotals]) -> None:
    for day, totals in days.items():
        if len(totals.game_plays) > stats.most_games_day:
            stats.most_games_day = len(totals.game_plays)
            stats.most_games_day_date = day
            stats.most_games_day_games = totals.play_breakdown()
