"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept already-computed statistics (dataclasses from
``boardgame_stats.stats`` and ``reporting.snapshot``) and return plain
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Values
------
Hours are shown with one decimal, minutes as ``"2h 05m"``.  Missing values
(``None``) render as ``N/A``.
"""

from __future__ import annotations

from typing import Optional, Sequence

from boardgame_stats.models.game import Game
from boardgame_stats.recommendations.engine import Recommendation
from boardgame_stats.reporting.snapshot import StatsSnapshot
from boardgame_stats.stats.achievements import Achievement
from boardgame_stats.stats.activity import ActivityStats
from boardgame_stats.stats.collection import ExpansionTotals
from boardgame_stats.stats.cost import (
    CostClubCandidate,
    CostEntry,
    CostPerMetricStats,
    CostTotals,
    NewClubEntry,
    UnplayedCost,
)
from boardgame_stats.stats.plays import (
    DailySessionStats,
    GamesPlayedSummary,
    PlayTimeTotals,
    SinglePlay,
    TopGame,
)
from boardgame_stats.taxonomy.metric_taxonomy import (
    BAND_ORDER,
    COST_CLUB_ORDER,
    METRIC_ORDER,
    METRIC_UNITS,
    CostClub,
    Metric,
)


def format_minutes(minutes: Optional[float]) -> str:
    """``125`` -> ``"2h 05m"``; ``None`` -> ``"N/A"``."""
    if minutes is None:
        return "N/A"
    total = int(round(minutes))
    return f"{total // 60}h {total % 60:02d}m"


def format_metric_value(value: float, metric: Metric | str) -> str:
    if Metric(metric) == Metric.HOURS:
        return f"{value:.1f}"
    return str(int(value))


def _period(year: Optional[int]) -> str:
    return str(year) if year is not None else "All time"


# ── Summary ───────────────────────────────────────────────────────────────────


def format_summary(
    year:         Optional[int],
    bgg_entries:  int,
    games_owned:  int,
    expansions:   ExpansionTotals,
    total_plays:  int,
    days_played:  int,
    games_played: GamesPlayedSummary,
    play_time:    PlayTimeTotals,
    daily:        DailySessionStats,
    h_indices:    dict[Metric, int],
) -> str:
    """Format the collection and play overview."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== Collection Summary ===")
    lines.append(f"  Period: {_period(year)}")

    lines.append("")
    lines.append("  ---- Collection ----")
    acquired = "acquired" if year is not None else "owned"
    lines.append(f"  BGG entries {acquired}:  {bgg_entries:>6}")
    lines.append(f"  Base games:            {games_owned:>6}")
    lines.append(
        f"  Expansions:            {expansions.total:>6}  "
        f"({expansions.expansion_only} expansions, {expansions.expandalones} expandalones)"
    )

    lines.append("")
    lines.append("  ---- Plays ----")
    lines.append(f"  Plays logged:          {total_plays:>6}")
    lines.append(f"  Days played:           {days_played:>6}")
    lines.append(f"  Games played:          {games_played.total:>6}")
    if games_played.new_to_me is not None:
        lines.append(f"    new to me:           {games_played.new_to_me:>6}")
    lines.append(f"    my games:            {games_played.my_games:>6}")
    lines.append(f"    others' games:       {games_played.others_games:>6}")
    lines.append(
        f"  Play time:             {play_time.total_hours:>6.1f}h  "
        f"({play_time.plays_with_actual_duration} timed, "
        f"{play_time.plays_with_estimated_duration} estimated)"
    )
    lines.append(f"  Median gaming day:     {format_minutes(daily.median_minutes):>8}")
    lines.append(f"  Average gaming day:    {format_minutes(daily.average_minutes):>8}")

    lines.append("")
    lines.append("  ---- H-index ----")
    for metric in METRIC_ORDER:
        lines.append(f"  {metric.value.capitalize():<10} {h_indices.get(metric, 0):>4}")

    return "\n".join(lines)


# ── Milestones ────────────────────────────────────────────────────────────────


def format_milestones(snapshot: StatsSnapshot, max_games: int = 10) -> str:
    """Format the band partition with cumulative counts.

    Bands list at most ``max_games`` games each, highest value first.
    """
    metric = snapshot.metric
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Milestones by {metric.value} ===")
    lines.append(f"  Period:  {_period(snapshot.year)}")
    lines.append(f"  H-index: {snapshot.h_index}")

    lines.append("")
    header = f"  {'Band':<10}  {'In band':>7}  {'N or more':>9}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for band in BAND_ORDER:
        lines.append(
            f"  {band.value:<10}  {len(snapshot.bands[band]):>7}  "
            f"{snapshot.cumulative_counts[band]:>9}"
        )

    for band in reversed(BAND_ORDER):
        rows = snapshot.bands[band]
        if not rows:
            continue
        lines.append("")
        lines.append(f"  [{band.value.upper()}]")
        for row in rows[:max_games]:
            lines.append(
                f"    {row.game.name[:40]:<40}  {format_metric_value(row.value, metric):>7}"
            )
        if len(rows) > max_games:
            lines.append(f"    ... showing {max_games} of {len(rows)}")

    return "\n".join(lines)


# ── Year in review ────────────────────────────────────────────────────────────


def format_year_review(
    snapshot:      StatsSnapshot,
    activity:      ActivityStats,
    achievements:  Sequence[Achievement],
    top_games:     Sequence[TopGame],
    new_to_me:     Optional[TopGame],
    returning:     Optional[TopGame],
    longest_plays: Sequence[SinglePlay],
    games_by_id:   dict[int, Game],
) -> str:
    """Format the year-over-year review for ``snapshot.year``."""
    metric = snapshot.metric
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== {snapshot.year} in Review ({metric.value}) ===")

    # ── H-index ───────────────────────────────────────────────────────────────
    lines.append("")
    lines.append("  ---- H-index ----")
    delta = snapshot.h_index_increase or 0
    lines.append(f"  Played this year: {snapshot.h_index}   change (all time): {delta:+d}")
    if snapshot.new_h_index_games:
        lines.append("  New contributors:")
        for entry in snapshot.new_h_index_games:
            lines.append(
                f"    {entry.game.name[:40]:<40}  "
                f"{format_metric_value(entry.value, metric):>7}  "
                f"(+{format_metric_value(entry.this_year_value, metric)} this year)"
            )

    # ── Milestones ────────────────────────────────────────────────────────────
    lines.append("")
    lines.append("  ---- Milestones ----")
    header = f"  {'Band':<10}  {'Change':>6}  {'New':>4}  {'Skipped':>7}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for band in BAND_ORDER:
        lines.append(
            f"  {band.value:<10}  {snapshot.band_increases.get(band, 0):>+6d}  "
            f"{len(snapshot.new_band_games.get(band, [])):>4}  "
            f"{snapshot.skipped_band_counts.get(band, 0):>7}"
        )

    # ── Top games ─────────────────────────────────────────────────────────────
    lines.append("")
    lines.append("  ---- Top games ----")
    if not top_games:
        lines.append("  (no plays logged this year)")
    for rank, row in enumerate(top_games, start=1):
        lines.append(
            f"  {rank:>2}. {row.game.name[:40]:<40}  "
            f"{format_metric_value(row.value, metric):>7}"
        )
    if new_to_me is not None:
        lines.append(f"  Top new to me:   {new_to_me.game.name}")
    if returning is not None:
        lines.append(f"  Top returning:   {returning.game.name}")

    # ── Calendar ──────────────────────────────────────────────────────────────
    lines.append("")
    lines.append("  ---- Calendar ----")
    lines.append(f"  Days played:        {activity.total_days}")
    lines.append(f"  Total play time:    {format_minutes(activity.total_minutes)}")
    if activity.longest_day_date is not None:
        lines.append(
            f"  Longest day:        {format_minutes(activity.longest_day_minutes)} "
            f"on {activity.longest_day_date.isoformat()}"
        )
        lines.append(
            f"  Shortest day:       {format_minutes(activity.shortest_day_minutes)} "
            f"on {activity.shortest_day_date.isoformat()}"
        )
        lines.append(
            f"  Longest streak:     {activity.longest_streak} days "
            f"({activity.longest_streak_start} .. {activity.longest_streak_end})"
        )
    if activity.longest_dry_spell > 0:
        lines.append(
            f"  Longest dry spell:  {activity.longest_dry_spell} days "
            f"({activity.longest_dry_spell_start} .. {activity.longest_dry_spell_end})"
        )
    if activity.most_games_day_date is not None:
        names = ", ".join(
            _game_name(games_by_id, g.game_id) for g in activity.most_games_day_games
        )
        lines.append(
            f"  Most games in a day: {activity.most_games_day} "
            f"on {activity.most_games_day_date.isoformat()} ({names})"
        )

    if longest_plays:
        lines.append("")
        lines.append("  ---- Longest plays ----")
        for play in longest_plays:
            lines.append(
                f"  {play.game.name[:40]:<40}  {format_minutes(play.duration_min):>8}  "
                f"{play.date.isoformat()}"
            )

    # ── Achievements ──────────────────────────────────────────────────────────
    lines.append("")
    lines.append("  ---- Logging achievements ----")
    if not achievements:
        lines.append("  (no checkpoints crossed this year)")
    for ach in achievements:
        lines.append(f"  {ach.threshold:>6} {ach.metric.value:<9} reached {ach.date.isoformat()}")

    return "\n".join(lines)


def _game_name(games_by_id: dict[int, Game], game_id: int) -> str:
    game = games_by_id.get(game_id)
    return game.name if game is not None else f"#{game_id}"


# ── Cost ──────────────────────────────────────────────────────────────────────


def format_money(amount: Optional[float]) -> str:
    """``12.5`` -> ``"$12.50"``; ``None`` -> ``"N/A"``."""
    if amount is None:
        return "N/A"
    return f"${amount:,.2f}"


def format_cost_report(
    year:           Optional[int],
    metric:         Metric | str,
    totals:         CostTotals,
    per_metric:     CostPerMetricStats,
    clubs:          dict[CostClub, list[CostEntry]],
    target_club:    CostClub,
    approaching:    Sequence[CostClubCandidate],
    unplayed:       UnplayedCost,
    club_increases: Optional[dict[CostClub, int]] = None,
    new_club_games: Optional[dict[CostClub, list[NewClubEntry]]] = None,
    skipped_clubs:  Optional[dict[CostClub, int]] = None,
    max_games:      int = 5,
) -> str:
    """Format spending, cost per unit and cost-club standings.

    The year-over-year arguments are only passed for a single-year report.
    """
    metric = Metric(metric)
    unit = METRIC_UNITS[metric]
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Cost per {unit} ===")
    lines.append(f"  Period: {_period(year)}")

    lines.append("")
    lines.append("  ---- Spending ----")
    spent = "acquired" if year is not None else "owned"
    lines.append(f"  Base games {spent}:   {len(totals.games):>6}")
    lines.append(f"  Total paid:           {format_money(totals.total_cost):>10}")
    lines.append(f"  Without a price:      {totals.games_without_price:>6}")
    lines.append(
        f"  Unplayed:             {format_money(unplayed.total_cost):>10}  ({unplayed.count} games)"
    )

    lines.append("")
    lines.append(f"  ---- Cost per {unit} ----")
    lines.append(f"  Median game:          {format_money(per_metric.median):>10}")
    lines.append(f"  Average game:         {format_money(per_metric.game_average):>10}")
    lines.append(f"  Overall:              {format_money(per_metric.overall_rate):>10}")
    for entry in per_metric.games[:max_games]:
        lines.append(
            f"    {entry.game.name:<32} {format_money(entry.cost_per_metric):>9}/{unit}"
            f"  ({format_metric_value(entry.metric_value, metric)} {unit}s)"
        )

    lines.append("")
    lines.append("  ---- Clubs ----")
    for club in COST_CLUB_ORDER:
        rows = clubs.get(club, [])
        change = ""
        if club_increases is not None:
            change = f"  ({club_increases.get(club, 0):+d}"
            if skipped_clubs is not None:
                change += f", {skipped_clubs.get(club, 0)} skipped"
            change += ")"
        lines.append(f"  [{club.label}/{unit}]  {len(rows)} games{change}")
        for entry in rows[:max_games]:
            lines.append(f"    {entry.game.name:<32} {format_money(entry.cost_per_metric):>9}")
        for new in (new_club_games or {}).get(club, [])[:max_games]:
            lines.append(
                f"    new: {new.game.name:<27} "
                f"+{format_metric_value(new.this_year_value, metric)} {unit}s this year"
            )

    lines.append("")
    lines.append(f"  ---- Closest to the {target_club.label}/{unit} club ----")
    if not approaching:
        lines.append("  (no priced games outside the club)")
    for cand in approaching:
        lines.append(
            f"    {cand.game.name:<32} {format_money(cand.cost_per_metric):>9}/{unit}"
            f"  needs {cand.additional_needed:.1f} more"
        )

    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(recommendations: Sequence[Recommendation]) -> str:
    """Format merged suggestions, one block per game."""
    lines: list[str] = []
    lines.append("")
    lines.append("=== What to Play Next ===")

    if not recommendations:
        lines.append("")
        lines.append("  (no suggestions -- no owned base games found)")
        return "\n".join(lines)

    for rec in recommendations:
        lines.append("")
        lines.append(f"  {rec.game.name}")
        for reason, stat in zip(rec.reasons, rec.stats):
            lines.append(f"    - {reason:<28}  {stat}")

    return "\n".join(lines)
