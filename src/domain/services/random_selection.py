"""Randomized selection helpers used by the assignment engine.

All randomness flows through a RandomSourceProtocol. Draws are without
replacement: each call removes the picked item from its candidate list.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from typing import TypeVar

from src.domain.ports.random_source import RandomSourceProtocol

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def draw_without_replacement(
    candidates: Sequence[T],
    count: int,
    rng: RandomSourceProtocol,
) -> list[T]:
    """Draw ``count`` distinct items uniformly at random.

    Args:
        candidates: Items to draw from. Not modified.
        count: Number of items to draw.
        rng: Random source.

    Returns:
        The drawn items in draw order.

    Raises:
        ValueError: If count is negative or exceeds the number of candidates.
    """
    if count < 0 or count > len(candidates):
        raise ValueError(
            f"Cannot draw {count} items from {len(candidates)} candidates"
        )
    remaining = list(candidates)
    drawn: list[T] = []
    for _ in range(count):
        drawn.append(remaining.pop(rng.randbelow(len(remaining))))
    return drawn


def stratified_sample(
    buckets: Mapping[K, Sequence[T]],
    count: int,
    rng: RandomSourceProtocol,
    order: Sequence[K] | None = None,
) -> list[tuple[K, T]]:
    """Draw ``count`` items round-robin across buckets.

    Each round takes one random item from every non-empty bucket, in
    ``order``, until ``count`` items are drawn. Once every bucket is
    exhausted the draw stops early, so callers must check the pool size
    first when they need exactly ``count`` items.

    Args:
        buckets: Candidates grouped by stratum.
        count: Number of items to draw.
        rng: Random source.
        order: Stratum visiting order. Defaults to the mapping's order.

    Returns:
        (stratum, item) pairs in draw order.
    """
    keys = list(order) if order is not None else list(buckets)
    remaining = {key: list(buckets.get(key, ())) for key in keys}
    drawn: list[tuple[K, T]] = []
    while len(drawn) < count and any(remaining.values()):
        for key in keys:
            if len(drawn) >= count:
                break
            pool = remaining[key]
            if pool:
                drawn.append((key, pool.pop(rng.randbelow(len(pool)))))
    return drawn
