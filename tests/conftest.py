from datetime import datetime, timezone

import pytest

from vocab_srs.context import LearnerContext
from vocab_srs.schemas import Word
from vocab_srs.scheduling import InMemoryCardStateStore, SqlCardStateStore, get_engine


@pytest.fixture
def now():
    return datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def make_words():
    """Factory for distinct words: ord0/word 0, ord1/word 1, ..."""
    def _make(count, prefix="ord", start=0):
        return [
            Word(term=f"{prefix}{i}", translation=f"{prefix} word {i}")
            for i in range(start, start + count)
        ]
    return _make


@pytest.fixture
def hus():
    return Word(term="hus", translation="house", pronunciation="hoos")


@pytest.fixture
def memory_store():
    return InMemoryCardStateStore()


@pytest.fixture
def sql_store(tmp_path):
    store = SqlCardStateStore(get_engine(f"sqlite:///{tmp_path / 'reviews.db'}"))
    store.init_db()
    yield store
    store.engine.dispose()


@pytest.fixture
def context(memory_store):
    return LearnerContext(learner_id="anna", store=memory_store)
