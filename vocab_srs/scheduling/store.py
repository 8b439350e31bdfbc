"""
Card state store interface.

The scheduler never touches storage; everything that reads or writes card
state goes through an object implementing CardStateStore. Writes are
last-write-wins upserts keyed by (learner_id, word_key).
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional, Protocol

from vocab_srs.scheduling.memory_state import (
    CardState,
    ReviewEvent,
    WordHistory,
    ensure_utc,
)


class CardStateStore(Protocol):
    """Persistence boundary for scheduling records."""

    def load_card_state(self, learner_id: str, word_key: str) -> Optional[CardState]:
        ...

    def save_review(self, card: CardState, event: Optional[ReviewEvent] = None) -> None:
        ...

    def get_due_cards(
        self,
        learner_id: str,
        as_of: datetime,
        limit: Optional[int] = None
    ) -> list[CardState]:
        ...

    def get_all_cards(self, learner_id: str) -> list[CardState]:
        ...

    def get_review_events(self, learner_id: str) -> list[ReviewEvent]:
        ...

    def get_word_history(self, learner_id: str) -> dict[str, WordHistory]:
        ...


def history_from_events(events: Iterable[ReviewEvent]) -> dict[str, WordHistory]:
    """
    Fold review events into per-word answer counts.
    """
    history: dict[str, WordHistory] = {}
    for event in events:
        current = history.get(event.word_key) or WordHistory(word_key=event.word_key)
        last_seen = event.timestamp
        if current.last_seen is not None and current.last_seen > last_seen:
            last_seen = current.last_seen
        history[event.word_key] = replace(
            current,
            correct_count=current.correct_count + (1 if event.was_correct else 0),
            incorrect_count=current.incorrect_count + (0 if event.was_correct else 1),
            last_seen=last_seen,
        )
    return history


class InMemoryCardStateStore:
    """
    Dict-backed store for guests and tests.
    """

    def __init__(self):
        self._cards: dict[tuple[str, str], CardState] = {}
        self._events: list[ReviewEvent] = []

    def load_card_state(self, learner_id: str, word_key: str) -> Optional[CardState]:
        return self._cards.get((learner_id, word_key))

    def save_review(self, card: CardState, event: Optional[ReviewEvent] = None) -> None:
        self._cards[(card.learner_id, card.word_key)] = card
        if event is not None:
            self._events.append(event)

    def get_due_cards(
        self,
        learner_id: str,
        as_of: datetime,
        limit: Optional[int] = None
    ) -> list[CardState]:
        as_of = ensure_utc(as_of)
        due = [
            card for (owner, _), card in self._cards.items()
            if owner == learner_id and ensure_utc(card.next_review_at) <= as_of
        ]
        due.sort(key=lambda card: (ensure_utc(card.next_review_at), card.word_key))
        if limit is not None:
            due = due[:limit]
        return due

    def get_all_cards(self, learner_id: str) -> list[CardState]:
        return [card for (owner, _), card in self._cards.items() if owner == learner_id]

    def get_review_events(self, learner_id: str) -> list[ReviewEvent]:
        return [event for event in self._events if event.learner_id == learner_id]

    def get_word_history(self, learner_id: str) -> dict[str, WordHistory]:
        return history_from_events(self.get_review_events(learner_id))
