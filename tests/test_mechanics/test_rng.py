"""Tests for src/narrative_engine/mechanics/rng.py."""
from __future__ import annotations

import random

import pytest

from narrative_engine.mechanics.rng import chance, choice, default_source, randint


class TestDefaultSource:
    def test_unseeded_is_system_random(self):
        assert isinstance(default_source(), random.SystemRandom)

    def test_seeded_is_reproducible(self):
        a, b = default_source(3), default_source(3)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]


class TestRandint:
    @pytest.mark.parametrize("value, expected", [(0.0, 7), (0.2499, 7), (0.25, 8), (0.9999, 10)])
    def test_inclusive_bounds(self, value, expected, fixed_rng):
        assert randint(fixed_rng([value]), 7, 10) == expected

    def test_swapped_bounds(self, fixed_rng):
        assert randint(fixed_rng([0.0]), 10, 7) == 7

    def test_within_range(self, seeded_rng):
        assert all(1 <= randint(seeded_rng, 1, 6) <= 6 for _ in range(200))


class TestChance:
    def test_below_probability(self, fixed_rng):
        assert chance(fixed_rng([0.49]), 0.5) is True

    def test_at_probability(self, fixed_rng):
        assert chance(fixed_rng([0.5]), 0.5) is False

    def test_zero_never(self, seeded_rng):
        assert not any(chance(seeded_rng, 0.0) for _ in range(50))


class TestChoice:
    def test_picks_by_position(self, fixed_rng):
        assert choice(fixed_rng([0.0]), ["a", "b", "c"]) == "a"
        assert choice(fixed_rng([0.5]), ["a", "b", "c"]) == "b"
        assert choice(fixed_rng([0.99]), ["a", "b", "c"]) == "c"

    def test_empty_raises(self, seeded_rng):
        with pytest.raises(IndexError):
            choice(seeded_rng, [])
