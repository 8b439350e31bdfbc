"""
Per-learner context passed explicitly through the review core.
"""

from __future__ import annotations

from dataclasses import dataclass

from vocab_srs.scheduling.store import CardStateStore


@dataclass(frozen=True)
class LearnerContext:
    """
    Who is practising and where their card state lives.

    Replaces a process-wide progress object, so several learners (or tests)
    can run side by side.
    """
    learner_id: str
    store: CardStateStore
