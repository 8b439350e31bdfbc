"""
Review Session Creation

Builds a practice session from three pools:
1. Due pool: cards whose next_review_at has passed, soonest first
2. Priority pool: words the learner answers wrong more often than right
3. General pool: the rest of the vocabulary

Session Logic:
- Take all due cards up to the session size
- Top up from the priority pool, then the general pool (each shuffled)
- Shuffle the whole session so due and filler words interleave
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional, Sequence

from vocab_srs import config
from vocab_srs.content_repo import ContentProvider, first_available
from vocab_srs.context import LearnerContext
from vocab_srs.distractors import DEFAULT_DISTRACTOR_COUNT, build_options
from vocab_srs.errors import StoreError
from vocab_srs.random_source import RandomSource, shuffled, system_random
from vocab_srs.schemas import Word
from vocab_srs.scheduling.memory_state import utc_now
from vocab_srs.session_builders.pool_types import PresentationMode, ReviewItem, ReviewPools
from vocab_srs.session_builders.pool_utils import dedupe_by_key, fill_in_order, struggling_words

logger = logging.getLogger(__name__)

# ---- Session Configuration ----
SESSION_SIZE = config.DEFAULT_SESSION_SIZE   # Words per session
FILL_ORDER = ("due", "priority", "pool")


def build_review_pools(
    context: LearnerContext,
    providers: Sequence[ContentProvider],
    now: Optional[datetime] = None,
    limit: int = SESSION_SIZE
) -> ReviewPools:
    """
    Build launch-scoped pools for a learner.

    Store read failures degrade to "nothing due" / "no history" so the
    learner can still practise from the general pool.

    Args:
        context: Learner and store
        providers: Content providers, consulted in order
        now: Reference time for "due" (defaults to now)
        limit: Maximum number of due cards to load

    Returns:
        ReviewPools ready for compose_session
    """
    now = now or utc_now()
    vocabulary = first_available(providers)
    vocab_by_key = {word.key: word for word in vocabulary}

    try:
        due_cards = context.store.get_due_cards(context.learner_id, as_of=now, limit=limit)
    except StoreError as exc:
        logger.warning("Could not load due cards for %s, continuing without: %s", context.learner_id, exc)
        due_cards = []

    # Prefer the content record (it carries pronunciation) over the card copy
    due_words = [vocab_by_key.get(card.word_key) or card.to_word() for card in due_cards]

    try:
        history = context.store.get_word_history(context.learner_id)
    except StoreError as exc:
        logger.warning("Could not load word history for %s, continuing without: %s", context.learner_id, exc)
        history = {}

    return ReviewPools(
        due=due_words,
        pool=vocabulary,
        priority_pool=struggling_words(vocabulary, history),
    )


def compose_session(
    due: Sequence[Word],
    pool: Sequence[Word],
    priority_pool: Sequence[Word],
    target_size: int = SESSION_SIZE,
    rng: Optional[RandomSource] = None,
    mode: PresentationMode = PresentationMode.FLASHCARD,
    option_count: int = DEFAULT_DISTRACTOR_COUNT,
    option_candidates: Optional[Sequence[Word]] = None
) -> list[ReviewItem]:
    """
    Assemble one practice session.

    Args:
        due: Due words, soonest-due first
        pool: Full fallback vocabulary
        priority_pool: Struggling words, consulted before pool
        target_size: Desired session length
        rng: Random source (seeded for reproducible sessions)
        mode: Presentation mode for every item
        option_count: Distractors per item in choice-based modes
        option_candidates: Words to draw distractors from (defaults to all inputs)

    Returns:
        Shuffled ReviewItems; shorter than target_size when content runs out
    """
    rng = rng or system_random()
    mode = PresentationMode(mode)
    if target_size <= 0:
        return []

    due_words = dedupe_by_key(due)[:target_size]
    taken = {word.key for word in due_words}

    pools = {
        "due": due_words,
        "priority": shuffled(dedupe_by_key(priority_pool, exclude=taken), rng),
        "pool": shuffled(dedupe_by_key(pool, exclude=taken), rng),
    }
    picks = shuffled(fill_in_order(pools, FILL_ORDER, target_size), rng)

    if option_candidates is None:
        option_candidates = dedupe_by_key(list(due) + list(priority_pool) + list(pool))

    items = []
    for origin, word in picks:
        options = []
        if mode.uses_options:
            options = build_options(word, option_candidates, option_count, rng)
        items.append(ReviewItem(word=word, presentation_options=options, mode=mode, origin=origin))

    logger.info(
        "Composed session of %d/%d items (%d due)",
        len(items), target_size, sum(1 for item in items if item.origin == "due")
    )
    return items


def create_review_session(
    context: LearnerContext,
    providers: Sequence[ContentProvider],
    now: Optional[datetime] = None,
    target_size: Optional[int] = None,
    rng: Optional[RandomSource] = None,
    mode: PresentationMode = PresentationMode.FLASHCARD
) -> list[ReviewItem]:
    """
    Load pools for the learner and compose a session from them.

    An empty list means nothing is due and there is no fallback content.
    """
    if target_size is None:
        target_size = config.get_session_size()
    pools = build_review_pools(context, providers, now=now, limit=target_size)
    return compose_session(
        due=pools.due,
        pool=pools.pool,
        priority_pool=pools.priority_pool,
        target_size=target_size,
        rng=rng,
        mode=mode,
    )
