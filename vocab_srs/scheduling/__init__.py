"""
Scheduling - spaced-repetition state machine and card state storage.

Quick start:
    from vocab_srs import scheduling

    # Pure algorithm (no DB calls)
    card = scheduling.next_state(None, scheduling.Outcome.CORRECT, now, "anna", word)

    # Storage
    store = scheduling.SqlCardStateStore.from_env()
    store.init_db()
    due = store.get_due_cards("anna", as_of=now, limit=20)
"""

# Core scheduler API (algorithm logic)
from vocab_srs.scheduling.scheduler import build_review_event, next_state

# Storage API
from vocab_srs.scheduling.store import (
    CardStateStore,
    InMemoryCardStateStore,
    history_from_events,
)
from vocab_srs.scheduling.database import SqlCardStateStore, get_engine

# Constants and parameters
from vocab_srs.scheduling.constants import (
    Outcome,
    DEFAULT_EASE,
    MAX_INTERVAL_DAYS,
    MIN_EASE,
    EASE_BONUS,
    EASE_PENALTY,
    MASTERED_REPETITIONS,
)

# Memory state
from vocab_srs.scheduling.memory_state import (
    CardState,
    ReviewEvent,
    WordHistory,
    initialize_new_card,
    is_due,
    is_mastered,
    sanitize,
)


__all__ = [
    # Core algorithm
    "next_state",
    "build_review_event",

    # Storage
    "CardStateStore",
    "InMemoryCardStateStore",
    "SqlCardStateStore",
    "get_engine",
    "history_from_events",

    # Enums
    "Outcome",

    # Memory state
    "CardState",
    "ReviewEvent",
    "WordHistory",
    "initialize_new_card",
    "is_due",
    "is_mastered",
    "sanitize",

    # Parameters
    "DEFAULT_EASE",
    "MAX_INTERVAL_DAYS",
    "MIN_EASE",
    "EASE_BONUS",
    "EASE_PENALTY",
    "MASTERED_REPETITIONS",
]
