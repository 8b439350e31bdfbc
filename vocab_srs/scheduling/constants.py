"""
Scheduling Constants and Parameters

All tunable values for the review scheduler in one place.
"""

from enum import Enum


# ---- Outcomes ----

class Outcome(str, Enum):
    """Result of one review attempt. Only a binary signal is available."""
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @classmethod
    def from_bool(cls, was_correct: bool) -> "Outcome":
        return cls.CORRECT if was_correct else cls.INCORRECT


# ---- Seed values for a never-reviewed word ----

DEFAULT_EASE = 2.5
DEFAULT_INTERVAL_DAYS = 1
DEFAULT_REPETITIONS = 0


# ---- Bounds ----

MIN_EASE = 1.3          # Floor keeps intervals growing for hard cards
MIN_INTERVAL_DAYS = 1
MAX_INTERVAL_DAYS = 36500  # ~100 years; keeps next_review_at inside datetime range
EASE_PRECISION = 2      # Decimal places kept on the ease factor


# ---- Adjustments ----

# Fixed bump on a correct answer (SM-2's q=4 adjustment, the only grade a
# binary signal can express)
EASE_BONUS = 0.05
EASE_PENALTY = 0.2      # Subtracted on an incorrect answer

# Interval ladder for the first consecutive correct answers
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 3


# ---- Progress thresholds ----

MASTERED_REPETITIONS = 5  # Consecutive correct answers for a "mastered" word
