"""
Distractor generation for choice-based exercises.

Wrong options are drawn from other words' translations. A candidate whose
translation matches the correct one (ignoring case) is never used, so a
question can't end up with two right answers.
"""

from __future__ import annotations

from typing import Iterable, Optional

from vocab_srs.random_source import RandomSource, sample, shuffled, system_random
from vocab_srs.schemas import Word

DEFAULT_DISTRACTOR_COUNT = 3


def _answer_key(text: str) -> str:
    return text.strip().casefold()


def eligible_translations(correct: Word, candidates: Iterable[Word]) -> list[str]:
    """
    Unique candidate translations that differ from the correct answer.

    Order follows the candidates; the first spelling of a translation wins.
    """
    seen = {_answer_key(correct.translation)}
    eligible: list[str] = []
    for candidate in candidates:
        key = _answer_key(candidate.translation)
        if not key or key in seen:
            continue
        seen.add(key)
        eligible.append(candidate.translation)
    return eligible


def distractors(
    correct: Word,
    candidates: Iterable[Word],
    count: int = DEFAULT_DISTRACTOR_COUNT,
    rng: Optional[RandomSource] = None
) -> list[str]:
    """
    Pick up to ``count`` wrong translations for ``correct``.

    Returns fewer than ``count`` when the pool is too small; a two- or
    three-option question is acceptable.
    """
    rng = rng or system_random()
    return sample(eligible_translations(correct, candidates), count, rng)


def build_options(
    correct: Word,
    candidates: Iterable[Word],
    count: int = DEFAULT_DISTRACTOR_COUNT,
    rng: Optional[RandomSource] = None
) -> list[str]:
    """
    Correct translation plus distractors, in shuffled order.
    """
    rng = rng or system_random()
    options = [correct.translation] + distractors(correct, candidates, count, rng)
    return shuffled(options, rng)
