from datetime import timedelta

import pytest

from vocab_srs.errors import StoreError
from vocab_srs.schemas import Word
from vocab_srs.scheduling import Outcome, build_review_event, next_state
from vocab_srs.scheduling.models import Base


def _review(store, word, outcome, when, previous=None):
    card = next_state(previous, outcome, when, learner_id="anna", word=word)
    store.save_review(card, build_review_event(previous, card))
    return card


def test_init_db_is_idempotent(sql_store):
    sql_store.init_db()
    sql_store.init_db()
    assert sql_store.get_all_cards("anna") == []


def test_save_and_load_round_trip(sql_store, hus, now):
    card = _review(sql_store, hus, Outcome.CORRECT, now)

    loaded = sql_store.load_card_state("anna", "hus")

    assert loaded == card
    assert loaded.next_review_at.tzinfo is not None


def test_load_missing_card_returns_none(sql_store):
    assert sql_store.load_card_state("anna", "nothing") is None


def test_upsert_keeps_one_row_per_word(sql_store, hus, now):
    first = _review(sql_store, hus, Outcome.CORRECT, now)
    second = _review(sql_store, hus, Outcome.CORRECT, now + timedelta(days=1), previous=first)

    cards = sql_store.get_all_cards("anna")

    assert len(cards) == 1
    assert cards[0].repetitions == 2
    assert cards[0].interval_days == 3
    assert cards[0] == second


def test_due_cards_ordered_and_limited(sql_store, make_words, now):
    words = make_words(4)
    # ord0 due 3 days ago, ord1 due 1 day ago, ord2 due 2 days ago, ord3 due tomorrow
    for word, days_ago in zip(words, [4, 2, 3, 0]):
        _review(sql_store, word, Outcome.INCORRECT, now - timedelta(days=days_ago))

    due = sql_store.get_due_cards("anna", as_of=now)
    assert [card.word_key for card in due] == ["ord0", "ord2", "ord1"]

    limited = sql_store.get_due_cards("anna", as_of=now, limit=2)
    assert [card.word_key for card in limited] == ["ord0", "ord2"]


def test_due_cards_scoped_to_learner(sql_store, hus, now):
    card = next_state(None, Outcome.INCORRECT, now - timedelta(days=3), learner_id="erik", word=hus)
    sql_store.save_review(card)

    assert sql_store.get_due_cards("anna", as_of=now) == []
    assert len(sql_store.get_due_cards("erik", as_of=now)) == 1


def test_word_history_counts(sql_store, now):
    katt = Word(term="katt", translation="cat")
    hund = Word(term="hund", translation="dog")

    card = _review(sql_store, katt, Outcome.INCORRECT, now)
    card = _review(sql_store, katt, Outcome.INCORRECT, now + timedelta(days=1), previous=card)
    _review(sql_store, katt, Outcome.CORRECT, now + timedelta(days=2), previous=card)
    _review(sql_store, hund, Outcome.CORRECT, now)

    history = sql_store.get_word_history("anna")

    assert history["katt"].incorrect_count == 2
    assert history["katt"].correct_count == 1
    assert history["katt"].is_struggling
    assert history["katt"].last_seen == now + timedelta(days=2)
    assert not history["hund"].is_struggling


def test_review_events_logged_in_order(sql_store, hus, now):
    first = _review(sql_store, hus, Outcome.INCORRECT, now)
    _review(sql_store, hus, Outcome.CORRECT, now + timedelta(days=1), previous=first)

    events = sql_store.get_review_events("anna")

    assert [event.was_correct for event in events] == [False, True]
    assert events[0].ease_before is None
    assert events[1].ease_before == first.ease_factor


def test_missing_tables_raise_store_error(sql_store, hus, now):
    Base.metadata.drop_all(sql_store.engine)

    with pytest.raises(StoreError):
        sql_store.load_card_state("anna", "hus")

    card = next_state(None, Outcome.CORRECT, now, learner_id="anna", word=hus)
    with pytest.raises(StoreError):
        sql_store.save_review(card)


def test_reset_db_clears_history(sql_store, hus, now):
    _review(sql_store, hus, Outcome.CORRECT, now)

    sql_store.reset_db()

    assert sql_store.get_all_cards("anna") == []
    assert sql_store.get_review_events("anna") == []
