"""
Random selection helpers for the recommendation heuristics.

All randomness flows through a caller-supplied ``RandomSource``: anything
with a ``random() -> float`` method returning values in ``[0, 1)``.
``random.Random`` satisfies it; tests pass a fixed-sequence fake.
"""

from __future__ import annotations

import math
from typing import Callable, Hashable, Optional, Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...


def choose_uniform(items: Sequence[T], rng: RandomSource) -> Optional[T]:
    """Pick one item with equal probability; ``None`` for an empty sequence."""
    if not items:
        return None
    index = min(int(rng.random() * len(items)), len(items) - 1)
    return items[index]


def choose_weighted_by_sqrt_rarity(
    items: Sequence[T],
    group_key: Callable[[T], Hashable],
    rng: RandomSource,
) -> Optional[T]:
    """Pick one item, weighting each by ``1 / sqrt(size of its group)``.

    Items from small groups are favoured over items from crowded ones, while
    every group as a whole still gains weight with its size.  Selection
    inverts the cumulative weights; a draw at the upper edge falls back to
    the last item.

    Args:
        items:     Candidates, in a stable order.
        group_key: Maps a candidate to the group it is counted in.
        rng:       Random source.

    Returns:
        The chosen item, or ``None`` for an empty sequence.
    """
    if not items:
        return None

    group_sizes: dict[Hashable, int] = {}
    for item in items:
        key = group_key(item)
        group_sizes[key] = group_sizes.get(key, 0) + 1

    weights = [1 / math.sqrt(group_sizes[group_key(item)]) for item in items]
    target = rng.random() * sum(weights)

    cumulative = 0.0
    for item, weight in zip(items, weights):
        cumulative += weight
        if target <= cumulative:
            return item
    return items[-1]
