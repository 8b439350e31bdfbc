from datetime import date

from vocab_srs.random_source import StdRandomSource, for_day, randbelow, sample, seeded, shuffled


class _Fixed:
    def __init__(self, value):
        self.value = value

    def next(self):
        return self.value


def test_seeded_sources_repeat():
    first = seeded("2026-10-17")
    second = seeded("2026-10-17")

    assert [first.next() for _ in range(5)] == [second.next() for _ in range(5)]


def test_for_day_matches_iso_seed():
    assert for_day(date(2026, 10, 17)).next() == seeded("2026-10-17").next()


def test_values_in_unit_interval():
    rng = StdRandomSource()
    assert all(0.0 <= rng.next() < 1.0 for _ in range(100))


def test_randbelow_guards_upper_edge():
    assert randbelow(_Fixed(1.0), 5) == 4
    assert randbelow(_Fixed(0.0), 5) == 0


def test_shuffled_is_permutation_and_leaves_input():
    items = list(range(20))

    result = shuffled(items, seeded("x"))

    assert sorted(result) == items
    assert items == list(range(20))


def test_sample_without_replacement():
    result = sample(list("abcdefgh"), 5, seeded("y"))

    assert len(result) == 5
    assert len(set(result)) == 5


def test_sample_more_than_available():
    assert sorted(sample([1, 2], 5, seeded("z"))) == [1, 2]
    assert sample([1, 2], 0, seeded("z")) == []
