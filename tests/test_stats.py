from datetime import timedelta

import pytest

from vocab_srs.outcome_recorder import record_outcome
from vocab_srs.schemas import Word
from vocab_srs.stats import daily_review_counts, learner_summary, summarize_progress


def test_empty_summary(now):
    summary = summarize_progress([], [], now=now)

    assert summary.words_learned == 0
    assert summary.words_mastered == 0
    assert summary.due_now == 0
    assert summary.reviews == 0
    assert summary.accuracy == 0.0


def test_learner_summary(context, now):
    katt = Word(term="katt", translation="cat")
    hus = Word(term="hus", translation="house")

    start = now - timedelta(days=60)
    for step in range(5):
        record_outcome(context, hus, True, now=start + timedelta(days=step))
    record_outcome(context, katt, False, now=now - timedelta(days=2))

    summary = learner_summary(context, now=now)

    assert summary.words_learned == 2
    assert summary.words_mastered == 1
    assert summary.due_now == 2
    assert summary.reviews == 6
    assert summary.accuracy == pytest.approx(5 / 6)


def test_daily_review_counts(context, now):
    hus = Word(term="hus", translation="house")
    record_outcome(context, hus, True, now=now)
    record_outcome(context, hus, True, now=now + timedelta(hours=1))
    record_outcome(context, hus, False, now=now + timedelta(days=2))

    counts = daily_review_counts(context.store.get_review_events("anna"))

    assert counts.tolist() == [2, 0, 1]


def test_daily_review_counts_empty():
    assert daily_review_counts([]).empty
