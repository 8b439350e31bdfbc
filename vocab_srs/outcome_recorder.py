"""
Outcome recording.

Turns one answered review item into a new card state: load, schedule,
persist. This is a plain request/response boundary; it does not retry.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from vocab_srs.context import LearnerContext
from vocab_srs.errors import OutcomeNotSaved, StoreError
from vocab_srs.schemas import Word
from vocab_srs.scheduling import build_review_event, next_state
from vocab_srs.scheduling.constants import Outcome
from vocab_srs.scheduling.memory_state import CardState, utc_now

logger = logging.getLogger(__name__)

__all__ = ["LearnerContext", "classify_answer", "record_outcome"]


def classify_answer(expected: str, given: Optional[str]) -> bool:
    """
    Compare a typed or picked answer with the expected one.

    Surrounding whitespace and letter case are ignored.
    """
    if given is None:
        return False
    given = given.strip()
    if not given:
        return False
    return given.casefold() == expected.strip().casefold()


def record_outcome(
    context: LearnerContext,
    word: Word,
    was_correct: bool,
    now: Optional[datetime] = None,
    session_id: Optional[str] = None,
    session_position: Optional[int] = None,
    presentation_mode: Optional[str] = None
) -> CardState:
    """
    Schedule ``word`` after an answer and persist the result.

    Args:
        context: Learner and store
        word: Word that was reviewed
        was_correct: Whether the answer was right
        now: Review timestamp (defaults to now)
        session_id, session_position, presentation_mode: Logged with the event

    Returns:
        The new CardState

    Raises:
        OutcomeNotSaved: the state was computed but could not be written;
            ``exc.state`` holds it
    """
    now = now or utc_now()

    try:
        current = context.store.load_card_state(context.learner_id, word.key)
    except StoreError as exc:
        # Read failure: schedule as a first review
        logger.warning("Could not load card %s/%s, treating as new: %s", context.learner_id, word.key, exc)
        current = None

    new_state = next_state(
        current,
        Outcome.from_bool(was_correct),
        now,
        learner_id=context.learner_id,
        word=word,
    )
    event = build_review_event(
        current,
        new_state,
        session_id=session_id,
        session_position=session_position,
        presentation_mode=presentation_mode,
    )

    try:
        context.store.save_review(new_state, event)
    except StoreError as exc:
        logger.warning("Could not save card %s/%s: %s", context.learner_id, word.key, exc)
        raise OutcomeNotSaved(new_state) from exc

    logger.debug(
        "Recorded %s for %s/%s: interval=%d ease=%.2f reps=%d",
        new_state.last_outcome.value, context.learner_id, word.key,
        new_state.interval_days, new_state.ease_factor, new_state.repetitions
    )
    return new_state
