"""
Typed pool and item models shared across session builders.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from vocab_srs.schemas import Word


PoolName = Literal["due", "priority", "pool"]


class PresentationMode(str, Enum):
    """How a review item is shown to the learner."""
    FLASHCARD = "flashcard"   # Flip to reveal, self-graded
    TYPE = "type"             # Type the source-language term
    LISTEN = "listen"         # Hear the term, pick the translation
    CHOICE = "choice"         # Read the term, pick the translation

    @property
    def uses_options(self) -> bool:
        return self in (PresentationMode.LISTEN, PresentationMode.CHOICE)


@dataclass(frozen=True)
class ReviewItem:
    """
    A single step within a practice session.
    """
    word: Word
    presentation_options: list[str] = field(default_factory=list)
    mode: PresentationMode = PresentationMode.FLASHCARD
    origin: PoolName = "pool"


@dataclass
class ReviewPools:
    """
    Launch-scoped inputs for one session.

    due is soonest-due first; priority_pool is the subset of pool the learner
    gets wrong more often than right.
    """
    due: list[Word]
    pool: list[Word]
    priority_pool: list[Word]
