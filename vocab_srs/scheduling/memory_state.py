"""
Memory State - Card State and Review History

Defines the per-word scheduling record and the derived quantities used by
session building.

Key concepts:
- Ease factor: how fast the interval grows after consecutive correct answers
- Interval: days until the card is next due
- Repetitions: consecutive correct answers, reset on any mistake
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Optional
import math

from vocab_srs.schemas import Word, normalize_key
from vocab_srs.scheduling.constants import (
    DEFAULT_EASE,
    DEFAULT_INTERVAL_DAYS,
    DEFAULT_REPETITIONS,
    MASTERED_REPETITIONS,
    MAX_INTERVAL_DAYS,
    MIN_EASE,
    MIN_INTERVAL_DAYS,
    Outcome,
)


@dataclass(frozen=True)
class CardState:
    """
    Scheduling state for one (learner, word) pair.

    Invariants: ease_factor >= MIN_EASE, interval_days >= 1, repetitions >= 0,
    next_review_at == time of last update + interval_days.
    """
    learner_id: str
    word_key: str

    # Copies of the word so due cards resolve without a content lookup
    term: str
    translation: str

    ease_factor: float
    interval_days: int
    repetitions: int
    next_review_at: datetime

    last_outcome: Optional[Outcome] = None
    last_review_at: Optional[datetime] = None

    def to_word(self) -> Word:
        return Word(term=self.term, translation=self.translation)


@dataclass(frozen=True)
class ReviewEvent:
    """
    Log entry for a single answered review item.
    """
    learner_id: str
    word_key: str
    timestamp: datetime
    was_correct: bool

    ease_before: Optional[float]
    interval_before: Optional[int]
    ease_after: float
    interval_after: int

    # Session context (optional)
    session_id: Optional[str] = None
    session_position: Optional[int] = None
    presentation_mode: Optional[str] = None


@dataclass(frozen=True)
class WordHistory:
    """
    Aggregate answer counts for one word, derived from review events.
    """
    word_key: str
    correct_count: int = 0
    incorrect_count: int = 0
    last_seen: Optional[datetime] = None

    @property
    def is_struggling(self) -> bool:
        """More wrong answers than right ones."""
        return self.incorrect_count > self.correct_count


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def initialize_new_card(
    learner_id: str,
    word: Word,
    now: datetime
) -> CardState:
    """
    Seed state for a word the learner has never reviewed.
    """
    now = ensure_utc(now)
    return CardState(
        learner_id=learner_id,
        word_key=word.key,
        term=word.term,
        translation=word.translation,
        ease_factor=DEFAULT_EASE,
        interval_days=DEFAULT_INTERVAL_DAYS,
        repetitions=DEFAULT_REPETITIONS,
        next_review_at=now + timedelta(days=DEFAULT_INTERVAL_DAYS),
    )


def sanitize(card: CardState) -> CardState:
    """
    Clamp stored values back into their valid ranges.

    Bad rows (negative interval, ease below the floor, NaN) must never block
    a session, so they are repaired instead of rejected.
    """
    ease = card.ease_factor
    if ease is None or not math.isfinite(ease):
        ease = DEFAULT_EASE
    ease = max(MIN_EASE, float(ease))

    interval = card.interval_days
    if interval is None or not math.isfinite(interval):
        interval = MIN_INTERVAL_DAYS
    interval = min(MAX_INTERVAL_DAYS, max(MIN_INTERVAL_DAYS, int(interval)))

    repetitions = card.repetitions
    if repetitions is None or not math.isfinite(repetitions):
        repetitions = 0
    repetitions = max(0, int(repetitions))

    return replace(
        card,
        word_key=normalize_key(card.word_key),
        ease_factor=ease,
        interval_days=interval,
        repetitions=repetitions,
        next_review_at=ensure_utc(card.next_review_at),
        last_review_at=ensure_utc(card.last_review_at) if card.last_review_at else None,
    )


def is_due(card: CardState, now: datetime) -> bool:
    """A card is due once its scheduled time has passed."""
    return ensure_utc(card.next_review_at) <= ensure_utc(now)


def is_mastered(card: CardState) -> bool:
    return card.repetitions >= MASTERED_REPETITIONS
