"""Small numeric helpers shared by the statistics modules."""

from __future__ import annotations

from typing import Iterable, Optional


def median(values: Iterable[float]) -> Optional[float]:
    """Median of ``values``; mean of the two middle values for even counts.

    Returns ``None`` for an empty input.
    """
    ordered = sorted(values)
    if not ordered:
        return None
    mid = len(ordered) // 2
    if len(ordered) % 2 == 0:
        return (ordered[mid - 1] + ordered[mid]) / 2
    return ordered[mid]


def mean(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean of ``values``, or ``None`` for an empty input."""
    items = list(values)
    if not items:
        return None
    return sum(items) / len(items)
