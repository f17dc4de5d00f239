"""Tests for the random stream and height sampler."""

import numpy as np
import pytest

from heightfield.diamond_square import DiamondSquareField
from heightfield.exceptions import FieldNotGeneratedError
from heightfield.noise import ValueNoiseField
from heightfield.random_source import RandomSource
from heightfield.sampler import HeightSampler
from heightfield.types import Method


class TestRandomSource:
    """Tests for seeded draws."""

    def test_same_seed_same_sequence(self) -> None:
        """Two streams with one seed agree draw for draw."""
        a, b = RandomSource(5), RandomSource(5)
        assert [a.next_uniform() for _ in range(10)] == [b.next_uniform() for _ in range(10)]
        assert a.next_int(0, 500) == b.next_int(0, 500)

    def test_set_seed_restarts(self, random_source: RandomSource) -> None:
        """Reseeding replays the sequence from the start."""
        first = [random_source.next_uniform() for _ in range(3)]
        random_source.set_seed(42)
        assert [random_source.next_uniform() for _ in range(3)] == first
        assert random_source.seed == 42

    def test_ranges(self, random_source: RandomSource) -> None:
        """Uniforms lie in [0, 1), ints in [low, high)."""
        for _ in range(200):
            assert 0.0 <= random_source.next_uniform() < 1.0
            assert 500 <= random_source.next_int(500, 1000) < 1000

    def test_uniform_array(self, random_source: RandomSource) -> None:
        """Array draws have the requested shape and range."""
        values = random_source.uniform_array((4, 6))
        assert values.shape == (4, 6)
        assert values.min() >= 0.0
        assert values.max() < 1.0

    def test_unseeded_has_no_seed(self) -> None:
        """Entropy-seeded streams report None."""
        assert RandomSource().seed is None


class TestHeightSampler:
    """Tests for method dispatch."""

    def test_dispatch_follows_method(self, random_source: RandomSource) -> None:
        """The active method picks the field."""
        sampler = HeightSampler(
            Method.VALUE_NOISE, ValueNoiseField(), DiamondSquareField()
        )
        assert isinstance(sampler.field, ValueNoiseField)
        sampler.method = Method.DIAMOND_SQUARE
        sampler.rebuild(8, random_source)
        assert isinstance(sampler.field, DiamondSquareField)
        assert sampler.height_at(0.0, 0.0) == sampler.diamond_square.grid[0, 0]

    def test_value_noise_rebuild_draws_nothing(self) -> None:
        """Rebuilding value noise leaves the random stream alone."""
        source = RandomSource(3)
        sampler = HeightSampler("value_noise", ValueNoiseField(), DiamondSquareField())
        sampler.rebuild(8, source)
        assert source.next_uniform() == RandomSource(3).next_uniform()
        assert sampler.diamond_square.dim == 0

    def test_diamond_square_without_grid_raises(self) -> None:
        """Querying diamond-square before a build raises."""
        sampler = HeightSampler(
            Method.DIAMOND_SQUARE, ValueNoiseField(), DiamondSquareField()
        )
        with pytest.raises(FieldNotGeneratedError):
            sampler.height_at(1.0, 1.0)
        with pytest.raises(FieldNotGeneratedError):
            sampler.sample(np.zeros(3), np.zeros(3))
