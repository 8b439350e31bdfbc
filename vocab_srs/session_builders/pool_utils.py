"""
Pool utilities for session builders.

These helpers provide shared, minimal primitives for building and reasoning
about session pools without enforcing a single scheduling policy.
"""

from __future__ import annotations
from typing import Iterable, Mapping, Sequence

from vocab_srs.schemas import Word
from vocab_srs.scheduling.memory_state import WordHistory


def dedupe_by_key(words: Iterable[Word], exclude: Iterable[str] = ()) -> list[Word]:
    """
    Drop repeated words (by natural key) and any key in exclude.

    First occurrence wins, so order is preserved.
    """
    seen = set(exclude)
    unique = []
    for word in words:
        if word.key in seen:
            continue
        seen.add(word.key)
        unique.append(word)
    return unique


def fill_in_order(
    pools: Mapping[str, Sequence[Word]],
    order: Sequence[str],
    target_size: int
) -> list[tuple[str, Word]]:
    """
    Fill a session by walking pools in order until target_size is reached.

    A word already taken from an earlier pool is skipped in later ones.

    Returns:
        (pool name, word) pairs in fill order
    """
    session: list[tuple[str, Word]] = []
    taken: set[str] = set()
    for name in order:
        for word in pools.get(name, []):
            if len(session) >= target_size:
                return session
            if word.key in taken:
                continue
            taken.add(word.key)
            session.append((name, word))
    return session


def struggling_words(
    pool: Iterable[Word],
    history: Mapping[str, WordHistory]
) -> list[Word]:
    """
    Words from pool answered wrong more often than right.
    """
    return [
        word for word in pool
        if word.key in history and history[word.key].is_struggling
    ]
