"""Tests for the Alea PRNG and the shared random utilities."""

import pytest

from plasma_terrain.core.alea_prng import AleaPRNG
from plasma_terrain.utils import random as terrain_random


class TestAleaPRNG:
    """Test reproducibility of the random source."""

    def test_same_seed_same_sequence(self):
        first = AleaPRNG("terrain")
        second = AleaPRNG("terrain")

        assert [first.random() for _ in range(50)] == [second.random() for _ in range(50)]

    def test_different_seeds_differ(self):
        first = AleaPRNG("seed1")
        second = AleaPRNG("seed2")

        assert [first.random() for _ in range(10)] != [second.random() for _ in range(10)]

    def test_values_in_unit_interval(self):
        prng = AleaPRNG(12345)
        for _ in range(1000):
            value = prng.random()
            assert 0.0 <= value < 1.0

    def test_iterable_seed(self):
        assert AleaPRNG(["a", "b"]).random() == AleaPRNG(["a", "b"]).random()
        assert AleaPRNG(["a", "b"]).random() != AleaPRNG(["b", "a"]).random()

    def test_call_count(self):
        prng = AleaPRNG("count")
        for _ in range(7):
            prng.random()

        assert prng.call_count == 7


class TestRandomUtilities:
    """Test the process-wide PRNG helpers."""

    def test_set_random_seed_resets_global(self):
        first = terrain_random.set_random_seed("global")
        values = [first.random() for _ in range(5)]

        second = terrain_random.set_random_seed("global")

        assert terrain_random.get_prng() is second
        assert [second.random() for _ in range(5)] == values

    def test_get_prng_creates_default(self, monkeypatch):
        monkeypatch.setattr(terrain_random, "_prng", None)

        prng = terrain_random.get_prng()

        assert prng.seed == "default"
        assert terrain_random.get_prng() is prng

    def test_uniform_range(self):
        prng = AleaPRNG("uniform")
        for _ in range(200):
            value = terrain_random.uniform(prng, 2.0, 3.5)
            assert 2.0 <= value < 3.5

    def test_uniform_with_stdlib_random(self):
        import random

        value = terrain_random.uniform(random.Random(4), -1.0, 1.0)
        assert -1.0 <= value < 1.0
        assert value == pytest.approx(random.Random(4).random() * 2.0 - 1.0)
