"""
Database - Card State Database I/O

Handles all database operations for card state and review events.
Uses SQLAlchemy ORM; Postgres in production, SQLite works for local runs.

This module handles ONLY database I/O.
Algorithm logic is handled by the scheduler module.
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import create_engine, func, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from vocab_srs import config
from vocab_srs.errors import StoreError
from vocab_srs.scheduling.constants import Outcome
from vocab_srs.scheduling.memory_state import (
    CardState,
    ReviewEvent,
    WordHistory,
    ensure_utc,
)
from vocab_srs.scheduling.models import (
    Base,
    CardState as CardStateModel,
    ReviewEvent as ReviewEventModel,
)

logger = logging.getLogger(__name__)

REQUIRED_TABLES = ("card_state", "review_events")


def get_engine(db_url: Optional[str] = None) -> Engine:
    """
    Get SQLAlchemy engine for database connection.

    Args:
        db_url: Connection string; defaults to DATABASE_URL from the environment

    Returns:
        SQLAlchemy Engine instance
    """
    db_url = db_url or config.get_database_url()
    if db_url.startswith("sqlite"):
        return create_engine(db_url, echo=False)
    return create_engine(
        db_url,
        pool_size=5,           # Keep 5 connections open
        max_overflow=10,       # Allow up to 10 extra connections
        pool_pre_ping=True,    # Verify connections before use
        echo=False
    )


def _to_card_state(row: CardStateModel) -> CardState:
    return CardState(
        learner_id=row.learner_id,
        word_key=row.word_key,
        term=row.term,
        translation=row.translation,
        ease_factor=row.ease_factor,
        interval_days=row.interval_days,
        repetitions=row.repetitions,
        next_review_at=ensure_utc(row.next_review_at),
        last_outcome=Outcome(row.last_outcome) if row.last_outcome else None,
        last_review_at=ensure_utc(row.last_review_at) if row.last_review_at else None,
    )


def _to_review_event(row: ReviewEventModel) -> ReviewEvent:
    return ReviewEvent(
        learner_id=row.learner_id,
        word_key=row.word_key,
        timestamp=ensure_utc(row.timestamp),
        was_correct=bool(row.was_correct),
        ease_before=row.ease_before,
        interval_before=row.interval_before,
        ease_after=row.ease_after,
        interval_after=row.interval_after,
        session_id=row.session_id,
        session_position=row.session_position,
        presentation_mode=row.presentation_mode,
    )


class SqlCardStateStore:
    """
    CardStateStore backed by SQLAlchemy.

    All timestamps are written in UTC so ordering and due comparisons hold
    on backends without timezone support.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @classmethod
    def from_env(cls) -> "SqlCardStateStore":
        return cls(get_engine())

    def get_session(self) -> Session:
        return self._session_factory()

    # ---- Schema ----

    def init_db(self) -> None:
        """
        Create tables if they don't exist.

        Safe to call multiple times.
        """
        existing_tables = inspect(self.engine).get_table_names()
        if all(name in existing_tables for name in REQUIRED_TABLES):
            return
        Base.metadata.create_all(self.engine)
        logger.info("Created review tables on %s", self.engine.url.render_as_string(hide_password=True))

    def reset_db(self) -> None:
        """
        DANGEROUS: Delete all data and recreate tables.

        All review history will be lost!
        """
        Base.metadata.drop_all(self.engine)
        logger.warning("Dropped all review tables")
        self.init_db()

    # ---- Reads ----

    def load_card_state(self, learner_id: str, word_key: str) -> Optional[CardState]:
        """
        Load card state, or None for a word the learner has never reviewed.
        """
        session = self.get_session()
        try:
            row = session.query(CardStateModel).filter(
                CardStateModel.learner_id == learner_id,
                CardStateModel.word_key == word_key
            ).first()
            return _to_card_state(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreError(f"could not load card {learner_id}/{word_key}") from exc
        finally:
            session.close()

    def get_due_cards(
        self,
        learner_id: str,
        as_of: datetime,
        limit: Optional[int] = None
    ) -> list[CardState]:
        """
        Cards with next_review_at <= as_of, soonest due first.
        """
        session = self.get_session()
        try:
            query = session.query(CardStateModel).filter(
                CardStateModel.learner_id == learner_id,
                CardStateModel.next_review_at <= ensure_utc(as_of)
            ).order_by(CardStateModel.next_review_at.asc(), CardStateModel.word_key.asc())
            if limit is not None:
                query = query.limit(limit)
            return [_to_card_state(row) for row in query.all()]
        except SQLAlchemyError as exc:
            raise StoreError(f"could not load due cards for {learner_id}") from exc
        finally:
            session.close()

    def get_all_cards(self, learner_id: str) -> list[CardState]:
        session = self.get_session()
        try:
            rows = session.query(CardStateModel).filter(
                CardStateModel.learner_id == learner_id
            ).order_by(CardStateModel.next_review_at.asc()).all()
            return [_to_card_state(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StoreError(f"could not load cards for {learner_id}") from exc
        finally:
            session.close()

    def get_review_events(self, learner_id: str) -> list[ReviewEvent]:
        """
        All review events for a learner, oldest first.
        """
        session = self.get_session()
        try:
            rows = session.query(ReviewEventModel).filter(
                ReviewEventModel.learner_id == learner_id
            ).order_by(ReviewEventModel.timestamp.asc(), ReviewEventModel.id.asc()).all()
            return [_to_review_event(row) for row in rows]
        except SQLAlchemyError as exc:
            raise StoreError(f"could not load review events for {learner_id}") from exc
        finally:
            session.close()

    def get_word_history(self, learner_id: str) -> dict[str, WordHistory]:
        """
        Per-word correct/incorrect counts aggregated in the database.
        """
        session = self.get_session()
        try:
            rows = session.query(
                ReviewEventModel.word_key,
                ReviewEventModel.was_correct,
                func.count(ReviewEventModel.id),
                func.max(ReviewEventModel.timestamp)
            ).filter(
                ReviewEventModel.learner_id == learner_id
            ).group_by(ReviewEventModel.word_key, ReviewEventModel.was_correct).all()
        except SQLAlchemyError as exc:
            raise StoreError(f"could not load word history for {learner_id}") from exc
        finally:
            session.close()

        counts: dict[str, dict] = {}
        for word_key, was_correct, count, last_seen in rows:
            entry = counts.setdefault(word_key, {"correct": 0, "incorrect": 0, "last_seen": None})
            entry["correct" if was_correct else "incorrect"] += count
            if last_seen is not None:
                last_seen = ensure_utc(last_seen)
                if entry["last_seen"] is None or last_seen > entry["last_seen"]:
                    entry["last_seen"] = last_seen

        return {
            word_key: WordHistory(
                word_key=word_key,
                correct_count=entry["correct"],
                incorrect_count=entry["incorrect"],
                last_seen=entry["last_seen"],
            )
            for word_key, entry in counts.items()
        }

    # ---- Writes ----

    def save_review(self, card: CardState, event: Optional[ReviewEvent] = None) -> None:
        """
        Upsert the card and append its review event in one transaction.
        """
        session = self.get_session()
        try:
            db_card = session.get(CardStateModel, (card.learner_id, card.word_key))
            if db_card is None:
                db_card = CardStateModel(learner_id=card.learner_id, word_key=card.word_key)
                session.add(db_card)

            db_card.term = card.term
            db_card.translation = card.translation
            db_card.ease_factor = card.ease_factor
            db_card.interval_days = card.interval_days
            db_card.repetitions = card.repetitions
            db_card.next_review_at = ensure_utc(card.next_review_at)
            db_card.last_outcome = card.last_outcome.value if card.last_outcome else None
            db_card.last_review_at = ensure_utc(card.last_review_at) if card.last_review_at else None

            if event is not None:
                session.add(ReviewEventModel(
                    learner_id=event.learner_id,
                    word_key=event.word_key,
                    timestamp=ensure_utc(event.timestamp),
                    was_correct=event.was_correct,
                    ease_before=event.ease_before,
                    interval_before=event.interval_before,
                    ease_after=event.ease_after,
                    interval_after=event.interval_after,
                    session_id=event.session_id,
                    session_position=event.session_position,
                    presentation_mode=event.presentation_mode,
                ))

            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise StoreError(f"could not save card {card.learner_id}/{card.word_key}") from exc
        finally:
            session.close()
