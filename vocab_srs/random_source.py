"""
Injectable random source.

Everything that shuffles or samples takes a RandomSource, so the normal
process-wide mode and the seeded "same content for everyone today" mode go
through the same code path.
"""

from __future__ import annotations

import random
from datetime import date
from typing import Optional, Protocol, Sequence, TypeVar


T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that yields floats uniformly in [0, 1)."""

    def next(self) -> float:
        ...


class StdRandomSource:
    """
    RandomSource backed by random.Random.

    With seed=None it draws from OS entropy; with a string seed the sequence
    is reproducible across processes.
    """

    def __init__(self, seed: Optional[str] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def next(self) -> float:
        return self._random.random()

    def __repr__(self):
        return f"<StdRandomSource(seed={self.seed!r})>"


def system_random() -> StdRandomSource:
    """Non-deterministic source for regular sessions."""
    return StdRandomSource()


def seeded(seed: str) -> StdRandomSource:
    """Deterministic source keyed by an arbitrary string."""
    return StdRandomSource(seed)


def for_day(day: date) -> StdRandomSource:
    """Deterministic source keyed by a calendar date (YYYY-MM-DD)."""
    return seeded(day.isoformat())


def randbelow(rng: RandomSource, n: int) -> int:
    """Integer in [0, n) drawn from rng."""
    index = int(rng.next() * n)
    # next() is < 1.0, but guard against sources that return exactly 1.0
    return min(index, n - 1)


def shuffled(items: Sequence[T], rng: RandomSource) -> list[T]:
    """
    Return a shuffled copy (Fisher-Yates).
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = randbelow(rng, i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def sample(items: Sequence[T], count: int, rng: RandomSource) -> list[T]:
    """
    Sample up to count items without replacement.
    """
    if count <= 0:
        return []
    pool = list(items)
    take = min(count, len(pool))
    for i in range(take):
        j = i + randbelow(rng, len(pool) - i)
        pool[i], pool[j] = pool[j], pool[i]
    return pool[:take]
