"""
Weighted reference-table sampling.

The college and hometown tables are small static lists of entries that carry
an integer ``weight``.  Sampling expands every entry into ``weight`` copies in
a flat pool and draws uniformly from it, so selection probability is
proportional to weight without any cumulative-distribution bookkeeping.

Usage:
    pool = build_weighted_pool(ALL_COLLEGES, lambda c: c.weight)
    college = weighted_choice(pool, rng)
"""

from __future__ import annotations

import random
from typing import Callable, Iterable, List, Sequence, TypeVar

T = TypeVar("T")


def build_weighted_pool(
    entries: Iterable[T],
    weight_of: Callable[[T], int],
) -> List[T]:
    """Expand each entry into ``weight`` copies.

    Entries with a weight of zero (or less) never enter the pool and so can
    never be selected.
    """
    pool: List[T] = []
    for entry in entries:
        weight = int(weight_of(entry))
        if weight <= 0:
            continue
        pool.extend([entry] * weight)
    return pool


def add_pseudo_entries(pool: List[T], entry: T, weight: int) -> List[T]:
    """Append ``weight`` copies of a synthetic entry to an existing pool."""
    if weight > 0:
        pool.extend([entry] * weight)
    return pool


def weighted_choice(pool: Sequence[T], rng: random.Random = None) -> T:
    """Uniform draw from an expanded pool."""
    if not pool:
        raise ValueError("Cannot sample from an empty weighted pool")
    rng = rng or random
    return pool[rng.randrange(len(pool))]
