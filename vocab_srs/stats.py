"""
Progress summaries for a learner's review set.

Computed from card-state and review-event snapshots with pandas, so the
numbers can be rebuilt from any store without extra queries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

import pandas as pd

from vocab_srs.context import LearnerContext
from vocab_srs.scheduling.constants import MASTERED_REPETITIONS
from vocab_srs.scheduling.memory_state import CardState, ReviewEvent, ensure_utc, utc_now

CARD_COLUMNS = ["word_key", "repetitions", "interval_days", "ease_factor", "next_review_at"]
EVENT_COLUMNS = ["word_key", "timestamp", "was_correct"]


@dataclass(frozen=True)
class ProgressSummary:
    """Headline numbers for a learner."""
    words_learned: int
    words_mastered: int
    due_now: int
    reviews: int
    accuracy: float          # 0.0 - 1.0, 0.0 when nothing reviewed
    average_ease: float      # 0.0 when no cards


def cards_to_df(cards: Sequence[CardState]) -> pd.DataFrame:
    if not cards:
        return pd.DataFrame(columns=CARD_COLUMNS)
    df = pd.DataFrame([
        {
            "word_key": card.word_key,
            "repetitions": card.repetitions,
            "interval_days": card.interval_days,
            "ease_factor": card.ease_factor,
            "next_review_at": ensure_utc(card.next_review_at),
        }
        for card in cards
    ])
    df["next_review_at"] = pd.to_datetime(df["next_review_at"], utc=True)
    return df


def events_to_df(events: Sequence[ReviewEvent]) -> pd.DataFrame:
    if not events:
        return pd.DataFrame(columns=EVENT_COLUMNS)
    df = pd.DataFrame([
        {"word_key": e.word_key, "timestamp": ensure_utc(e.timestamp), "was_correct": e.was_correct}
        for e in events
    ])
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df.sort_values("timestamp").reset_index(drop=True)


def summarize_progress(
    cards: Sequence[CardState],
    events: Sequence[ReviewEvent],
    now: Optional[datetime] = None
) -> ProgressSummary:
    """
    Summarize card states and review history.
    """
    now = ensure_utc(now or utc_now())
    cards_df = cards_to_df(cards)
    events_df = events_to_df(events)

    if cards_df.empty:
        learned = mastered = due = 0
        average_ease = 0.0
    else:
        learned = int(cards_df["word_key"].nunique())
        mastered = int((cards_df["repetitions"] >= MASTERED_REPETITIONS).sum())
        due = int((cards_df["next_review_at"] <= pd.Timestamp(now)).sum())
        average_ease = round(float(cards_df["ease_factor"].mean()), 2)

    reviews = int(len(events_df))
    accuracy = float(events_df["was_correct"].astype(bool).mean()) if reviews else 0.0

    return ProgressSummary(
        words_learned=learned,
        words_mastered=mastered,
        due_now=due,
        reviews=reviews,
        accuracy=accuracy,
        average_ease=average_ease,
    )


def daily_review_counts(events: Sequence[ReviewEvent]) -> pd.Series:
    """
    Reviews per UTC day over a dense day index.
    """
    events_df = events_to_df(events)
    if events_df.empty:
        return pd.Series(dtype="int64")
    days = events_df["timestamp"].dt.floor("D")
    counts = days.value_counts().sort_index()
    index = pd.date_range(start=days.min(), end=days.max(), freq="D", tz="UTC")
    return counts.reindex(index, fill_value=0).astype("int64")


def learner_summary(context: LearnerContext, now: Optional[datetime] = None) -> ProgressSummary:
    """Load a learner's cards and events from the store and summarize them."""
    cards = context.store.get_all_cards(context.learner_id)
    events = context.store.get_review_events(context.learner_id)
    return summarize_progress(cards, events, now=now)
