"""
Engagement metric and milestone taxonomy.

Three small vocabularies describe every engagement statistic:
  - ``Metric``        — the *unit*: what is being counted per game?
  - ``MilestoneBand`` — the *tier*: which play-volume band does a value sit in?
  - ``CostClub``      — the *value tier*: how cheap is each unit of play?

Bands are half-open ranges with an inclusive lower bound::

    fives     [5, 10)
    dimes     [10, 25)
    quarters  [25, 100)
    centuries [100, inf)

A value sits in exactly one band (the highest whose lower bound it meets).
Cumulative "N or more" membership is a separate question answered by
``value >= band.threshold``.

Usage example::

    from boardgame_stats.taxonomy.metric_taxonomy import Metric, MilestoneBand

    band = MilestoneBand.for_value(12)      # MilestoneBand.DIMES
    band.threshold                          # 10

This module has NO imports from any other ``boardgame_stats`` package.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional


class Metric(StrEnum):
    """Per-game engagement metric."""

    HOURS = "hours"
    """Total logged minutes / 60 (fractional)."""

    SESSIONS = "sessions"
    """Distinct calendar days on which the game was played."""

    PLAYS = "plays"
    """Raw number of logged plays."""


# Display order used wherever results are grouped by metric.
METRIC_ORDER: tuple[Metric, ...] = (Metric.HOURS, Metric.SESSIONS, Metric.PLAYS)


class MilestoneBand(StrEnum):
    """Play-volume band, ascending."""

    FIVES = "fives"
    DIMES = "dimes"
    QUARTERS = "quarters"
    CENTURIES = "centuries"

    @property
    def threshold(self) -> int:
        """Inclusive lower bound of the band."""
        return MILESTONE_THRESHOLDS[self]

    @property
    def next_threshold(self) -> Optional[int]:
        """Exclusive upper bound (the next band's lower bound), or ``None``."""
        idx = BAND_ORDER.index(self)
        if idx + 1 < len(BAND_ORDER):
            return BAND_ORDER[idx + 1].threshold
        return None

    @property
    def display_name(self) -> str:
        """Singular name used in recommendation text ("Almost a dime")."""
        return _SINGULAR_NAMES[self]

    def contains(self, value: float) -> bool:
        """True if ``value`` falls inside this band's half-open range."""
        upper = self.next_threshold
        return value >= self.threshold and (upper is None or value < upper)

    @classmethod
    def for_value(cls, value: float) -> Optional["MilestoneBand"]:
        """Return the single band ``value`` belongs to, or ``None`` below 5."""
        for band in reversed(BAND_ORDER):
            if value >= band.threshold:
                return band
        return None

    @classmethod
    def for_threshold(cls, threshold: int) -> "MilestoneBand":
        """Look up a band by its lower bound (5, 10, 25 or 100).

        Raises:
            ValueError: If ``threshold`` is not a band lower bound.
        """
        for band, value in MILESTONE_THRESHOLDS.items():
            if value == threshold:
                return band
        raise ValueError(
            f"No milestone band starts at {threshold}. "
            f"Must be one of {sorted(MILESTONE_THRESHOLDS.values())}."
        )


MILESTONE_THRESHOLDS: dict[MilestoneBand, int] = {
    MilestoneBand.FIVES:     5,
    MilestoneBand.DIMES:     10,
    MilestoneBand.QUARTERS:  25,
    MilestoneBand.CENTURIES: 100,
}

BAND_ORDER: tuple[MilestoneBand, ...] = (
    MilestoneBand.FIVES,
    MilestoneBand.DIMES,
    MilestoneBand.QUARTERS,
    MilestoneBand.CENTURIES,
)

_SINGULAR_NAMES: dict[MilestoneBand, str] = {
    MilestoneBand.FIVES:     "five",
    MilestoneBand.DIMES:     "dime",
    MilestoneBand.QUARTERS:  "quarter",
    MilestoneBand.CENTURIES: "century",
}


class CostClub(StrEnum):
    """Cost-per-metric club, from the loosest to the strictest.

    Clubs run the opposite way to milestone bands: a *lower* cost per hour,
    session or play is better.  Ranges are half-open with an inclusive upper
    bound::

        five_dollar  (2.50, 5.00]
        two_fifty    (1.00, 2.50]
        one_dollar   (0.50, 1.00]
        fifty_cents  (0, 0.50]
    """

    FIVE_DOLLAR = "five_dollar"
    TWO_FIFTY = "two_fifty"
    ONE_DOLLAR = "one_dollar"
    FIFTY_CENTS = "fifty_cents"

    @property
    def threshold(self) -> float:
        """Inclusive upper bound on cost per metric unit."""
        return COST_CLUB_THRESHOLDS[self]

    @property
    def next_threshold(self) -> Optional[float]:
        """Exclusive lower bound (the next stricter club's threshold), or ``None``."""
        idx = COST_CLUB_ORDER.index(self)
        if idx + 1 < len(COST_CLUB_ORDER):
            return COST_CLUB_ORDER[idx + 1].threshold
        return None

    @property
    def label(self) -> str:
        """Dollar label used in report and suggestion text ("$5", "$2.50")."""
        value = self.threshold
        return f"${value:.0f}" if value == int(value) else f"${value:.2f}"

    def contains(self, cost: float) -> bool:
        """True if ``cost`` falls inside this club's range."""
        lower = self.next_threshold
        return cost <= self.threshold and (lower is None or cost > lower)

    @classmethod
    def for_value(cls, cost: float) -> Optional["CostClub"]:
        """Return the single club ``cost`` belongs to, or ``None`` above $5."""
        for club in reversed(COST_CLUB_ORDER):
            if cost <= club.threshold:
                return club
        return None


COST_CLUB_THRESHOLDS: dict[CostClub, float] = {
    CostClub.FIVE_DOLLAR: 5.0,
    CostClub.TWO_FIFTY:   2.5,
    CostClub.ONE_DOLLAR:  1.0,
    CostClub.FIFTY_CENTS: 0.5,
}

COST_CLUB_ORDER: tuple[CostClub, ...] = (
    CostClub.FIVE_DOLLAR,
    CostClub.TWO_FIFTY,
    CostClub.ONE_DOLLAR,
    CostClub.FIFTY_CENTS,
)

METRIC_UNITS: dict[Metric, str] = {
    Metric.HOURS:    "hour",
    Metric.SESSIONS: "session",
    Metric.PLAYS:    "play",
}
