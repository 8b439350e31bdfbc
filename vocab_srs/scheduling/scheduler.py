"""
Scheduler - Review Algorithm Logic

Pure scheduling and state updates (no database calls).

Main workflow:
1. Load card state (caller's responsibility)
2. Seed defaults if the word was never reviewed
3. Apply the correct/incorrect update rule
4. Return the new card state (and, optionally, the event to log)

This module handles ONLY the algorithm logic.
Database I/O is handled by the database and store modules.
"""

from __future__ import annotations
import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from vocab_srs.schemas import Word
from vocab_srs.scheduling import memory_state
from vocab_srs.scheduling.constants import (
    EASE_BONUS,
    EASE_PENALTY,
    EASE_PRECISION,
    FIRST_INTERVAL_DAYS,
    MAX_INTERVAL_DAYS,
    MIN_EASE,
    MIN_INTERVAL_DAYS,
    SECOND_INTERVAL_DAYS,
    Outcome,
)


def next_state(
    current: Optional[memory_state.CardState],
    outcome: Outcome,
    now: datetime,
    learner_id: str = "",
    word: Optional[Word] = None
) -> memory_state.CardState:
    """
    Compute the card state that follows a review.

    Never raises on bad stored values; they are clamped first. The input
    state is left untouched.

    Args:
        current: Existing state, or None for a first-ever review
        outcome: CORRECT or INCORRECT
        now: Review timestamp (naive values are read as UTC)
        learner_id: Owner of the new card when current is None
        word: Word being reviewed, required when current is None

    Returns:
        New CardState with next_review_at = now + interval_days

    Raises:
        ValueError: current is None and no word was given. This is a caller
            bug, not bad stored data; every caller in the package passes the
            reviewed word.
    """
    now = memory_state.ensure_utc(now)

    if current is None:
        if word is None:
            raise ValueError("word is required to seed a new card")
        card = memory_state.initialize_new_card(learner_id, word, now)
    else:
        card = memory_state.sanitize(current)

    if isinstance(outcome, bool):
        outcome = Outcome.from_bool(outcome)
    outcome = Outcome(outcome)
    if outcome is Outcome.CORRECT:
        repetitions, interval, ease = _apply_correct(card)
    else:
        repetitions, interval, ease = _apply_incorrect(card)

    return replace(
        card,
        ease_factor=ease,
        interval_days=interval,
        repetitions=repetitions,
        next_review_at=now + timedelta(days=interval),
        last_outcome=outcome,
        last_review_at=now,
    )


def _apply_correct(card: memory_state.CardState) -> tuple[int, int, float]:
    """
    Correct answer: grow the interval, nudge ease up.

    The interval uses the ease from before this review.
    """
    repetitions = card.repetitions + 1

    if repetitions == 1:
        interval = FIRST_INTERVAL_DAYS
    elif repetitions == 2:
        interval = SECOND_INTERVAL_DAYS
    else:
        # Halves round up; capped before flooring so huge ease values stay finite
        grown = min(card.interval_days * card.ease_factor, MAX_INTERVAL_DAYS)
        interval = max(MIN_INTERVAL_DAYS, math.floor(grown + 0.5))
        interval = min(MAX_INTERVAL_DAYS, interval)

    ease = round(card.ease_factor + EASE_BONUS, EASE_PRECISION)
    # Rounding must never turn a bump into a decrease
    ease = max(card.ease_factor, ease)
    return repetitions, interval, ease


def _apply_incorrect(card: memory_state.CardState) -> tuple[int, int, float]:
    """
    Incorrect answer: collapse the interval to one day, lower ease.
    """
    ease = max(MIN_EASE, round(card.ease_factor - EASE_PENALTY, EASE_PRECISION))
    return 0, MIN_INTERVAL_DAYS, ease


def build_review_event(
    before: Optional[memory_state.CardState],
    after: memory_state.CardState,
    session_id: Optional[str] = None,
    session_position: Optional[int] = None,
    presentation_mode: Optional[str] = None
) -> memory_state.ReviewEvent:
    """
    Build the log entry for a review that produced ``after``.
    """
    return memory_state.ReviewEvent(
        learner_id=after.learner_id,
        word_key=after.word_key,
        timestamp=after.last_review_at,
        was_correct=after.last_outcome is Outcome.CORRECT,
        ease_before=before.ease_factor if before else None,
        interval_before=before.interval_days if before else None,
        ease_after=after.ease_factor,
        interval_after=after.interval_days,
        session_id=session_id,
        session_position=session_position,
        presentation_mode=presentation_mode,
    )
