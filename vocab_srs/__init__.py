"""
vocab_srs - spaced-repetition core for vocabulary practice.

Quick start:
    from vocab_srs import scheduling
    from vocab_srs.outcome_recorder import LearnerContext, record_outcome
    from vocab_srs.session_builders import create_review_session

    store = scheduling.SqlCardStateStore.from_env()
    store.init_db()
    context = LearnerContext(learner_id="anna", store=store)

    items = create_review_session(context, providers)
    record_outcome(context, items[0].word, was_correct=True)
"""

__version__ = "0.3.0"
