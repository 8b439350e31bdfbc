"""
In-memory walk through one composed session.

Keeps the current position, the session score, and any card states that
could not be saved. Unsaved states are left for an external sync layer.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from vocab_srs.context import LearnerContext
from vocab_srs.errors import OutcomeNotSaved
from vocab_srs.outcome_recorder import classify_answer, record_outcome
from vocab_srs.scheduling.memory_state import CardState
from vocab_srs.session_builders.pool_types import PresentationMode, ReviewItem


@dataclass
class SessionTally:
    """Correct/wrong counts for one session."""
    correct: int = 0
    wrong: int = 0

    @property
    def total(self) -> int:
        return self.correct + self.wrong

    @property
    def accuracy_pct(self) -> int:
        """Whole-percent accuracy, 0 for an empty session."""
        if self.total == 0:
            return 0
        return int(self.correct * 100 / self.total + 0.5)

    def add(self, was_correct: bool) -> None:
        if was_correct:
            self.correct += 1
        else:
            self.wrong += 1


@dataclass
class AnswerResult:
    """What the caller needs after one answer."""
    item: ReviewItem
    was_correct: bool
    state: CardState
    saved: bool


@dataclass
class ReviewSession:
    """
    A session in progress.
    """
    context: LearnerContext
    items: Sequence[ReviewItem]
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    position: int = 0
    tally: SessionTally = field(default_factory=SessionTally)
    unsaved: list[CardState] = field(default_factory=list)
    _answered: bool = False

    @property
    def finished(self) -> bool:
        return self.position >= len(self.items)

    @property
    def current(self) -> Optional[ReviewItem]:
        if self.finished:
            return None
        return self.items[self.position]

    @property
    def answered(self) -> bool:
        return self._answered

    def answer(
        self,
        given: Optional[str] = None,
        was_correct: Optional[bool] = None,
        now: Optional[datetime] = None
    ) -> Optional[AnswerResult]:
        """
        Grade the current item and record the outcome.

        Pass ``was_correct`` for self-graded flashcards, or ``given`` for typed
        and picked answers. A second answer to the same item is ignored and
        returns None, as does answering a finished session.
        """
        item = self.current
        if item is None or self._answered:
            return None

        if was_correct is None:
            was_correct = classify_answer(_expected_answer(item), given)

        self._answered = True
        self.tally.add(was_correct)

        try:
            state = record_outcome(
                self.context,
                item.word,
                was_correct,
                now=now,
                session_id=self.session_id,
                session_position=self.position,
                presentation_mode=PresentationMode(item.mode).value,
            )
            saved = True
        except OutcomeNotSaved as exc:
            state = exc.state
            saved = False
            self.unsaved.append(state)

        return AnswerResult(item=item, was_correct=was_correct, state=state, saved=saved)

    def advance(self) -> Optional[ReviewItem]:
        """Move to the next item and return it (None once finished)."""
        if not self.finished:
            self.position += 1
        self._answered = False
        return self.current


def _expected_answer(item: ReviewItem) -> str:
    """Typing asks for the term; every other mode asks for the translation."""
    if PresentationMode(item.mode) is PresentationMode.TYPE:
        return item.word.term
    return item.word.translation
