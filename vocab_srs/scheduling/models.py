"""
SQLAlchemy ORM Models for the Review Database

Defines CardState and ReviewEvent tables.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CardState(Base):
    """
    Persistent scheduling state for a single (learner, word) card.
    """
    __tablename__ = 'card_state'

    # Primary key: composite of learner_id and word_key
    learner_id = Column(String(255), primary_key=True, nullable=False)
    word_key = Column(String(255), primary_key=True, nullable=False)

    # Both sides of the card, for readability and content-free lookups
    term = Column(String(255), nullable=False)
    translation = Column(String(255), nullable=False)

    # Scheduling parameters
    ease_factor = Column(Float, nullable=False)
    interval_days = Column(Integer, nullable=False)
    repetitions = Column(Integer, nullable=False, default=0)
    next_review_at = Column(DateTime(timezone=True), nullable=False)

    # Review tracking
    last_outcome = Column(String(20), nullable=True)  # "correct" / "incorrect"
    last_review_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_card_state_due", "learner_id", "next_review_at"),
    )

    def __repr__(self):
        return f"<CardState({self.learner_id}, {self.word_key}, next={self.next_review_at})>"


class ReviewEvent(Base):
    """
    Log entry for a single answered review item.
    """
    __tablename__ = 'review_events'

    # Primary key
    id = Column(Integer, primary_key=True, autoincrement=True)

    # Learner scope and card identifier
    learner_id = Column(String(255), nullable=False)
    word_key = Column(String(255), nullable=False)

    # Timing and outcome
    timestamp = Column(DateTime(timezone=True), nullable=False)
    was_correct = Column(Boolean, nullable=False)

    # State before review (null for a first review)
    ease_before = Column(Float, nullable=True)
    interval_before = Column(Integer, nullable=True)

    # State after review
    ease_after = Column(Float, nullable=False)
    interval_after = Column(Integer, nullable=False)

    # Session context (optional, for analytics)
    session_id = Column(String(255), nullable=True)
    session_position = Column(Integer, nullable=True)
    presentation_mode = Column(String(50), nullable=True)  # "flashcard", "listen", etc.

    __table_args__ = (
        Index("idx_review_events_card", "learner_id", "word_key"),
        Index("idx_review_events_timestamp", "timestamp"),
    )

    def __repr__(self):
        return f"<ReviewEvent(id={self.id}, {self.word_key}, correct={self.was_correct})>"
