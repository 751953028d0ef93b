"""
Collection statistics: ownership counts, acquisition years and diagnostics.

Ownership and acquisition are properties of copies, not games:

  - a game is *owned* when any of its copies has ``status_owned``;
  - a game was *acquired in* a year when any copy's acquisition date falls
    in that year, whether or not the copy is still owned.

Every count here takes an optional ``year``.  Without one it describes the
collection as it stands today (owned only); with one it describes what was
acquired during that year.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from boardgame_stats.models.game import Game
from boardgame_stats.models.play import Play
from boardgame_stats.utils.time_utils import is_in_year


@dataclass(frozen=True)
class ExpansionTotals:
    """Expansion counts; ``expandalones`` and ``expansion_only`` never overlap."""

    total: int
    expandalones: int
    expansion_only: int


@dataclass(frozen=True)
class YearInfo:
    """A selectable year.

    Attributes:
        year:           Calendar year.
        has_plays:      At least one play is logged in the year.
        is_pre_logging: Acquisitions only, earlier than the first logged play.
    """

    year: int
    has_plays: bool
    is_pre_logging: bool


# ── Copy-level predicates ─────────────────────────────────────────────────────

def is_game_owned(game: Game) -> bool:
    return any(copy.status_owned for copy in game.copies)


def was_game_acquired_in_year(game: Game, year: int) -> bool:
    return any(
        copy.acquisition_date is not None and is_in_year(copy.acquisition_date, year)
        for copy in game.copies
    )


def _counts(game: Game, year: Optional[int]) -> bool:
    if year is None:
        return is_game_owned(game)
    return was_game_acquired_in_year(game, year)


# ── Totals ────────────────────────────────────────────────────────────────────

def total_bgg_entries(games: Sequence[Game], year: Optional[int] = None) -> int:
    """Number of copies: owned ones today, or those acquired in ``year``.

    Base games, expansions and expandalones all count, once per copy.
    """
    total = 0
    for game in games:
        for copy in game.copies:
            if year is None:
                total += copy.status_owned
            elif copy.acquisition_date is not None and is_in_year(copy.acquisition_date, year):
                total += 1
    return total


def total_games_owned(games: Sequence[Game], year: Optional[int] = None) -> int:
    """Number of base games owned (or acquired in ``year``)."""
    return sum(1 for g in games if g.is_base_game and _counts(g, year))


def total_expansions(games: Sequence[Game], year: Optional[int] = None) -> ExpansionTotals:
    expansion_only = sum(1 for g in games if g.is_expansion and _counts(g, year))
    expandalones = sum(1 for g in games if g.is_expandalone and _counts(g, year))
    return ExpansionTotals(
        total=expansion_only + expandalones,
        expandalones=expandalones,
        expansion_only=expansion_only,
    )


# ── Diagnostics ───────────────────────────────────────────────────────────────

def games_with_unknown_acquisition_date(games: Sequence[Game]) -> list[Game]:
    """Games with at least one owned copy that has no acquisition date."""
    return [
        g for g in games
        if any(c.status_owned and c.acquisition_date is None for c in g.copies)
    ]


def owned_games_never_played(
    games: Sequence[Game],
    plays: Sequence[Play],
    year: Optional[int] = None,
) -> list[Game]:
    """Base games with no plays at all that are owned (or were acquired in ``year``).

    Plays from any year count: a game acquired in ``year`` and played the
    year after is not listed.
    """
    played = {p.game_id for p in plays}
    return [
        g for g in games
        if g.is_base_game and g.id not in played and _counts(g, year)
    ]


def owned_base_games_missing_price_paid(games: Sequence[Game]) -> list[Game]:
    """Owned base games with at least one owned copy lacking a price."""
    return [
        g for g in games
        if g.is_base_game and any(c.status_owned and c.price_paid is None for c in g.copies)
    ]


# ── Years ─────────────────────────────────────────────────────────────────────

def acquisition_years(games: Sequence[Game]) -> list[int]:
    """Distinct copy acquisition years, most recent first."""
    years = {
        copy.acquisition_date.year
        for game in games
        for copy in game.copies
        if copy.acquisition_date is not None
    }
    return sorted(years, reverse=True)


def available_years(
    plays: Sequence[Play],
    games: Optional[Sequence[Game]] = None,
) -> list[YearInfo]:
    """Every year with plays or acquisitions, most recent first.

    Acquisition-only years before the first logged play are flagged
    ``is_pre_logging``; acquisition-only years after it are not.
    """
    play_years = {p.date.year for p in plays}
    first_play_year = min(play_years) if play_years else None

    infos = {year: YearInfo(year, has_plays=True, is_pre_logging=False) for year in play_years}
    if games is not None:
        for year in acquisition_years(games):
            if year in infos:
                continue
            pre_logging = first_play_year is not None and year < first_play_year
            infos[year] = YearInfo(year, has_plays=False, is_pre_logging=pre_logging)

    return sorted(infos.values(), key=lambda info: info.year, reverse=True)
