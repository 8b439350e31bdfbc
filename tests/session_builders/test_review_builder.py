from collections import Counter
from datetime import timedelta

import pytest

from vocab_srs.content_repo import StaticVocabularyProvider
from vocab_srs.context import LearnerContext
from vocab_srs.errors import StoreError
from vocab_srs.outcome_recorder import record_outcome
from vocab_srs.random_source import seeded
from vocab_srs.schemas import Word
from vocab_srs.scheduling import InMemoryCardStateStore
from vocab_srs.session_builders import (
    PresentationMode,
    build_review_pools,
    compose_session,
    create_review_session,
)


def _keys(items):
    return [item.word.key for item in items]


def test_due_items_fill_first_then_priority_then_pool(make_words):
    due = make_words(5, prefix="due")
    pool = make_words(50, prefix="pool")
    priority = pool[:2]

    items = compose_session(due, pool, priority, target_size=20, rng=seeded("scenario"))

    keys = _keys(items)
    assert len(items) == 20
    assert len(set(keys)) == 20
    assert {w.key for w in due} <= set(keys)
    assert {w.key for w in priority} <= set(keys)

    origins = Counter(item.origin for item in items)
    assert origins == {"due": 5, "priority": 2, "pool": 13}


def test_length_matches_deduplicated_supply(make_words):
    due = make_words(3, prefix="due")
    pool = make_words(4, prefix="pool") + due[:2]
    priority = pool[:1]

    items = compose_session(due, pool, priority, target_size=20, rng=seeded("short"))

    # 3 due + 4 distinct pool words
    assert len(items) == 7
    assert len(set(_keys(items))) == 7


def test_due_is_capped_at_target_size(make_words):
    due = make_words(30, prefix="due")

    items = compose_session(due, make_words(10), [], target_size=20, rng=seeded("cap"))

    assert len(items) == 20
    assert set(_keys(items)) == {w.key for w in due[:20]}


def test_duplicates_removed_by_natural_key():
    due = [Word(term="hus", translation="house"), Word(term="Hus ", translation="house")]
    pool = [Word(term="HUS", translation="house"), Word(term="katt", translation="cat")]

    items = compose_session(due, pool, [], target_size=10, rng=seeded("dupes"))

    assert sorted(_keys(items)) == ["hus", "katt"]
    assert next(item for item in items if item.word.key == "hus").origin == "due"


def test_empty_inputs_give_empty_session():
    assert compose_session([], [], [], target_size=20) == []


def test_zero_target_size(make_words):
    assert compose_session(make_words(3), make_words(3, prefix="p"), [], target_size=0) == []


def test_seeded_sessions_are_reproducible(make_words):
    due = make_words(4, prefix="due")
    pool = make_words(30)
    priority = pool[5:8]

    first = compose_session(due, pool, priority, 20, rng=seeded("2026-10-17"), mode=PresentationMode.CHOICE)
    second = compose_session(due, pool, priority, 20, rng=seeded("2026-10-17"), mode=PresentationMode.CHOICE)

    assert [(i.word.key, i.presentation_options, i.origin) for i in first] == \
        [(i.word.key, i.presentation_options, i.origin) for i in second]


def test_choice_mode_attaches_options(make_words):
    items = compose_session([], make_words(12), [], target_size=6, rng=seeded("opts"), mode=PresentationMode.LISTEN)

    for item in items:
        assert item.mode is PresentationMode.LISTEN
        assert len(item.presentation_options) == 4
        assert len(set(item.presentation_options)) == 4
        assert item.word.translation in item.presentation_options


def test_flashcard_mode_has_no_options(make_words):
    items = compose_session([], make_words(5), [], target_size=5, rng=seeded("flash"))

    assert all(item.presentation_options == [] for item in items)


def _review(context, word, was_correct, when):
    return record_outcome(context, word, was_correct, now=when)


def test_build_review_pools_uses_store_and_history(context, now):
    katt = Word(term="katt", translation="cat")
    hund = Word(term="hund", translation="dog", pronunciation="hund")
    fisk = Word(term="fisk", translation="fish")

    # katt: two misses long ago -> due and struggling
    _review(context, katt, False, now - timedelta(days=5))
    _review(context, katt, False, now - timedelta(days=4))
    # hund: answered right today -> not due
    _review(context, hund, True, now)

    providers = [StaticVocabularyProvider([katt, hund, fisk])]
    pools = build_review_pools(context, providers, now=now)

    assert [w.key for w in pools.due] == ["katt"]
    assert [w.key for w in pools.priority_pool] == ["katt"]
    assert {w.key for w in pools.pool} == {"katt", "hund", "fisk"}


def test_due_words_prefer_content_record(context, now):
    hund = Word(term="hund", translation="dog", pronunciation="hoond")
    _review(context, hund, False, now - timedelta(days=3))

    pools = build_review_pools(context, [StaticVocabularyProvider([hund])], now=now)

    assert pools.due[0].pronunciation == "hoond"


class _BrokenStore(InMemoryCardStateStore):
    def get_due_cards(self, learner_id, as_of, limit=None):
        raise StoreError("database down")

    def get_word_history(self, learner_id):
        raise StoreError("database down")


def test_store_read_failure_falls_back_to_pool(make_words, now):
    context = LearnerContext(learner_id="anna", store=_BrokenStore())
    providers = [StaticVocabularyProvider(make_words(8))]

    items = create_review_session(context, providers, now=now, target_size=5, rng=seeded("down"))

    assert len(items) == 5
    assert all(item.origin == "pool" for item in items)


def test_create_review_session_nothing_available(context, now):
    items = create_review_session(context, [StaticVocabularyProvider([])], now=now, target_size=20)
    assert items == []


@pytest.mark.parametrize("target_size", [1, 7, 20])
def test_create_review_session_respects_size(context, make_words, now, target_size):
    providers = [StaticVocabularyProvider(make_words(12))]

    items = create_review_session(context, providers, now=now, target_size=target_size, rng=seeded("size"))

    assert len(items) == min(target_size, 12)


def test_due_items_are_interleaved_with_filler(make_words):
    due = make_words(5, prefix="due")
    pool = make_words(30)

    leading_due = []
    for seed in ["a", "b", "c", "d", "e"]:
        items = compose_session(due, pool, [], target_size=20, rng=seeded(seed))
        origins = [item.origin for item in items[:5]]
        leading_due.append(origins == ["due"] * 5)

    assert not all(leading_due)
