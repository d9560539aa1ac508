"""Tests for participant sampling."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from twitch_bridge.sampler import sample, shuffle

POPULATION = ["ann", "ben", "cat", "dan", "eve"]


class TestSampleBounds:
    @pytest.mark.parametrize("count", [0, -1, -100])
    def test_non_positive_count_is_empty(self, count):
        assert sample(POPULATION, count) == []

    def test_empty_population(self):
        assert sample([], 3) == []

    @pytest.mark.parametrize("count", [5, 6, 1000])
    def test_large_count_returns_permutation(self, count):
        result = sample(POPULATION, count)
        assert sorted(result) == sorted(POPULATION)

    @pytest.mark.parametrize("count", [1, 2, 4])
    def test_partial_count_returns_distinct_members(self, count):
        result = sample(POPULATION, count)
        assert len(result) == count
        assert len(set(result)) == count
        assert set(result) <= set(POPULATION)

    def test_input_not_mutated(self):
        original = list(POPULATION)
        sample(original, 3, random.Random(7))
        assert original == POPULATION

    def test_seeded_rng_is_reproducible(self):
        assert sample(POPULATION, 3, random.Random(42)) == sample(
            POPULATION, 3, random.Random(42)
        )


class TestUniformity:
    def test_each_member_picked_equally_often(self):
        rng = random.Random(1234)
        trials = 10_000
        counts = Counter()
        for _ in range(trials):
            counts.update(sample(POPULATION, 2, rng))
        expected = trials * 2 / len(POPULATION)  # 4000
        for name in POPULATION:
            assert abs(counts[name] - expected) < expected * 0.08

    def test_all_permutations_reachable(self):
        rng = random.Random(99)
        seen = set()
        for _ in range(2000):
            items = ["a", "b", "c"]
            shuffle(items, rng)
            seen.add(tuple(items))
        assert len(seen) == 6


def test_shuffle_single_item_untouched():
    items = ["solo"]
    shuffle(items, random.Random(0))
    assert items == ["solo"]
