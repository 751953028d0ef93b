"""
Logging achievements: the days cumulative totals crossed round checkpoints.

Checkpoints are fixed per metric:

    hours     every 100 hours       (floor of cumulative minutes / 60)
    sessions  every 100 play days   (distinct dates)
    plays     every 250 plays

Totals are all-time: the whole play log is replayed in date order, and only
the crossings that land inside the requested year are reported.  One long
play can cross several checkpoints at once; each gets its own entry with
the same date.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

from boardgame_stats.models.play import Play
from boardgame_stats.taxonomy.metric_taxonomy import METRIC_ORDER, Metric

HOURS_STEP = 100
SESSIONS_STEP = 100
PLAYS_STEP = 250


@dataclass(frozen=True)
class Achievement:
    metric: Metric
    threshold: int
    date: date


def logging_achievements(plays: Sequence[Play], year: int) -> list[Achievement]:
    """Checkpoints crossed during ``year``, ordered by metric then threshold.

    Args:
        plays: Full play log (not pre-filtered to the year).
        year:  Year whose crossings are reported.

    Returns:
        ``Achievement`` list: hours first, then sessions, then plays, each in
        ascending threshold order.
    """
    ordered = sorted(plays, key=lambda p: p.date)

    achievements: list[Achievement] = []
    total_minutes = 0.0
    total_plays = 0
    seen_days: set[date] = set()
    next_hours = HOURS_STEP
    next_sessions = SESSIONS_STEP
    next_plays = PLAYS_STEP

    for play in ordered:
        total_minutes += play.duration_min
        whole_hours = int(total_minutes // 60)
        while next_hours <= whole_hours:
            achievements.append(Achievement(Metric.HOURS, next_hours, play.date))
            next_hours += HOURS_STEP

        if play.date not in seen_days:
            seen_days.add(play.date)
            while next_sessions <= len(seen_days):
                achievements.append(Achievement(Metric.SESSIONS, next_sessions, play.date))
                next_sessions += SESSIONS_STEP

        total_plays += 1
        while next_plays <= total_plays:
            achievements.append(Achievement(Metric.PLAYS, next_plays, play.date))
            next_plays += PLAYS_STEP

    in_year = [a for a in achievements if a.date.year == year]
    in_year.sort(key=lambda a: (METRIC_ORDER.index(a.metric), a.threshold))
    return in_year
