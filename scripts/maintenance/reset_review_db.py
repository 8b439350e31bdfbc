"""
Reset the review database.

DANGEROUS: This deletes all review history!
Only use when you want to start fresh for testing.

Usage:
    python -m scripts.maintenance.reset_review_db
"""

from vocab_srs.scheduling import SqlCardStateStore


def main():
    print("=" * 60)
    print("WARNING: Reset Review Database")
    print("=" * 60)
    print()
    print("This will DELETE all review history:")
    print("  - All card states (ease factor, interval, next review)")
    print("  - All review events (logs of past answers)")
    print()

    response = input("Are you sure you want to reset? (type 'yes' to confirm): ")

    if response.lower() == "yes":
        print("\nResetting database...")
        SqlCardStateStore.from_env().reset_db()
        print("Database reset complete!")
        print("\nThe database now has empty tables ready for new reviews.")
    else:
        print("\nCancelled. No changes made.")


if __name__ == "__main__":
    main()
