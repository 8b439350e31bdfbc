"""
Print a learner's review progress and what is due.

Usage:
    python -m scripts.show_progress [--learner ID] [--limit N]
"""

from __future__ import annotations

import argparse

from vocab_srs import config
from vocab_srs.context import LearnerContext
from vocab_srs.scheduling import SqlCardStateStore
from vocab_srs.scheduling.memory_state import utc_now
from vocab_srs.stats import learner_summary


def main():
    parser = argparse.ArgumentParser(description="Show review progress for a learner")
    parser.add_argument("--learner", default=config.get_default_learner_id(), help="Learner id")
    parser.add_argument("--limit", type=int, default=config.get_session_size(), help="Due cards to list")
    args = parser.parse_args()

    store = SqlCardStateStore.from_env()
    store.init_db()
    context = LearnerContext(learner_id=args.learner, store=store)
    now = utc_now()

    summary = learner_summary(context, now=now)
    print("=" * 60)
    print(f"Progress for {args.learner}")
    print("=" * 60)
    print(f"Words learned:  {summary.words_learned}")
    print(f"Words mastered: {summary.words_mastered}")
    print(f"Due now:        {summary.due_now}")
    print(f"Reviews:        {summary.reviews} ({summary.accuracy:.0%} correct)")
    print(f"Average ease:   {summary.average_ease:.2f}")

    due = store.get_due_cards(args.learner, as_of=now, limit=args.limit)
    if due:
        print(f"\nNext {len(due)} due:")
        for card in due:
            print(f"  {card.term:<24} {card.translation:<24} interval={card.interval_days}d ease={card.ease_factor:.2f}")


if __name__ == "__main__":
    main()
