"""
Exception types raised by the review core.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vocab_srs.scheduling.memory_state import CardState


class VocabSrsError(Exception):
    """Base class for all review-core errors."""


class ConfigurationError(VocabSrsError):
    """A required environment setting is missing."""


class StoreError(VocabSrsError):
    """The card state store could not complete a read or write."""


class OutcomeNotSaved(VocabSrsError):
    """
    A review was scheduled but the new state could not be persisted.

    The computed state is still valid for the rest of the session and is
    available as ``state``.
    """

    def __init__(self, state: "CardState", message: str = "card state was not saved"):
        super().__init__(f"{message}: {state.learner_id}/{state.word_key}")
        self.state = state
