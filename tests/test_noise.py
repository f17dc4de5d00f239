"""Tests for value noise functions."""

import math

import numpy as np
import pytest

from heightfield.exceptions import InvalidConfigurationError
from heightfield.noise import ValueNoiseField, base_noise, interpolate, noise


def _reference_hash(ix: int, iy: int) -> float:
    """Lattice hash computed with Python ints and explicit 32-bit masks."""
    n = (ix + 57 * iy) & 0xFFFFFFFF
    n = ((n << 13) ^ n) & 0xFFFFFFFF
    nn = (n * (n * n * 60493 + 19990303) + 1376312589) & 0x7FFFFFFF
    return 1.0 - nn / 1073741824.0


class TestBaseNoise:
    """Tests for the integer lattice hash."""

    def test_origin_value(self) -> None:
        """Hash at the origin reduces to the additive constant."""
        assert float(base_noise(0, 0)) == 1.0 - 1376312589 / 1073741824.0

    def test_matches_reference_including_negatives(self) -> None:
        """Vectorized hash matches 32-bit wrapping arithmetic."""
        coords = [
            (0, 0), (1, 0), (0, 1), (-1, 0), (-7, -3), (123456, -98765), (2**20, 2**20)
        ]
        xs = np.array([c[0] for c in coords])
        ys = np.array([c[1] for c in coords])
        expected = [_reference_hash(x, y) for x, y in coords]
        np.testing.assert_array_equal(base_noise(xs, ys), expected)

    def test_scalar_matches_array(self) -> None:
        """Scalar and array calls agree bit for bit."""
        arr = base_noise(np.array([5, -5]), np.array([-9, 9]))
        assert float(base_noise(5, -9)) == arr[0]
        assert float(base_noise(-5, 9)) == arr[1]

    def test_range(self) -> None:
        """Values lie in (-1, 1]."""
        xs, ys = np.meshgrid(np.arange(-200, 200), np.arange(-50, 50))
        values = base_noise(xs, ys)
        assert values.min() > -1.0
        assert values.max() <= 1.0

    def test_deterministic(self) -> None:
        """Repeated calls return identical values."""
        xs = np.arange(-100, 100)
        np.testing.assert_array_equal(base_noise(xs, xs * 3), base_noise(xs, xs * 3))


class TestInterpolate:
    """Tests for cosine interpolation."""

    def test_endpoints(self) -> None:
        """t=0 gives a, t=1 gives b."""
        assert interpolate(2.0, 5.0, 0.0) == 2.0
        assert interpolate(2.0, 5.0, 1.0) == pytest.approx(5.0)

    def test_midpoint_is_mean(self) -> None:
        """t=0.5 gives the average."""
        assert interpolate(-1.0, 3.0, 0.5) == pytest.approx(1.0)

    def test_flat_at_endpoints(self) -> None:
        """Slope vanishes at both ends, unlike linear interpolation."""
        eps = 1e-4
        slope_start = (interpolate(0.0, 1.0, eps) - interpolate(0.0, 1.0, 0.0)) / eps
        slope_end = (interpolate(0.0, 1.0, 1.0) - interpolate(0.0, 1.0, 1.0 - eps)) / eps
        assert abs(slope_start) < 1e-3
        assert abs(slope_end) < 1e-3

    def test_kernel_shape(self) -> None:
        """Quarter point follows (1 - cos(pi/4)) / 2."""
        expected = (1 - math.cos(math.pi / 4)) / 2
        assert interpolate(0.0, 1.0, 0.25) == pytest.approx(expected)


class TestNoise:
    """Tests for interpolated 2D noise."""

    def test_lattice_points_equal_hash(self) -> None:
        """At integer coordinates noise is the lattice hash itself."""
        for x, y in [(3, 7), (0, 0), (-2, -3), (-1, 4)]:
            assert float(noise(float(x), float(y))) == float(base_noise(x, y))

    def test_negative_coordinates_floor(self) -> None:
        """Negative coordinates blend the lattice cell below, not toward zero."""
        expected = interpolate(float(base_noise(-1, 0)), float(base_noise(0, 0)), 0.5)
        assert float(noise(-0.5, 0.0)) == pytest.approx(expected)

    def test_continuity(self) -> None:
        """Differences shrink to zero as the step shrinks."""
        x, y = 2.3, 5.7
        base = float(noise(x, y))
        diffs = [abs(float(noise(x + eps, y)) - base) for eps in (1e-3, 1e-5, 1e-7)]
        assert diffs[0] < 1e-2
        assert diffs[1] < 1e-4
        assert diffs[2] < 1e-6

    def test_continuous_across_cell_boundary(self) -> None:
        """Values on either side of a lattice line agree."""
        left = float(noise(3.0 - 1e-9, 1.4))
        right = float(noise(3.0 + 1e-9, 1.4))
        assert left == pytest.approx(right, abs=1e-6)

    def test_range(self) -> None:
        """Noise stays in [-1, 1]."""
        xs, ys = np.meshgrid(np.linspace(-20, 20, 200), np.linspace(-20, 20, 200))
        values = noise(xs, ys)
        assert values.min() >= -1.0
        assert values.max() <= 1.0


class TestValueNoiseField:
    """Tests for the fBm value-noise field."""

    def test_output_range(self) -> None:
        """Heights are normalized to [0, 1]."""
        field = ValueNoiseField(octaves=4)
        xs, ys = np.meshgrid(np.linspace(-500, 1500, 150), np.linspace(-500, 1500, 150))
        heights = field.sample(xs, ys)
        assert heights.min() >= 0.0
        assert heights.max() <= 1.0

    def test_output_shape(self) -> None:
        """Output broadcasts to the input shape."""
        field = ValueNoiseField()
        xs = np.zeros((5, 7))
        assert field.sample(xs, xs).shape == (5, 7)

    def test_deterministic(self) -> None:
        """Fresh fields with equal parameters give identical heights."""
        xs = np.linspace(500, 700, 300)
        np.testing.assert_array_equal(
            ValueNoiseField(3).sample(xs, xs[::-1]),
            ValueNoiseField(3).sample(xs, xs[::-1]),
        )

    def test_height_at_matches_sample(self) -> None:
        """Scalar queries agree with the vectorized path."""
        field = ValueNoiseField()
        xs = np.array([512.25, -33.5, 1000.0])
        ys = np.array([640.75, 12.0, -0.125])
        heights = field.sample(xs, ys)
        for x, y, h in zip(xs, ys, heights):
            assert field.height_at(float(x), float(y)) == pytest.approx(h, abs=1e-12)

    def test_single_octave_is_remapped_noise(self) -> None:
        """One octave is plain noise shifted into [0, 1]."""
        field = ValueNoiseField(octaves=1, scale=20.0)
        expected = (1.0 + float(noise(123.4 / 20.0, 56.7 / 20.0))) / 2.0
        assert field.height_at(123.4, 56.7) == pytest.approx(expected)

    def test_octaves_change_output(self) -> None:
        """Adding octaves adds detail."""
        xs = np.linspace(600, 610, 500)
        low = ValueNoiseField(octaves=1).sample(xs, xs)
        high = ValueNoiseField(octaves=6).sample(xs, xs)
        assert not np.allclose(low, high)
        assert np.abs(np.diff(high)).mean() > np.abs(np.diff(low)).mean()

    @pytest.mark.parametrize("octaves", [0, -1])
    def test_non_positive_octaves_rejected(self, octaves: int) -> None:
        """Octave count must be positive."""
        with pytest.raises(InvalidConfigurationError):
            ValueNoiseField(octaves=octaves)

    def test_octave_setter_validates(self) -> None:
        """Changing octaves later is validated too."""
        field = ValueNoiseField()
        field.octaves = 5
        assert field.octaves == 5
        with pytest.raises(InvalidConfigurationError):
            field.octaves = 0

    def test_non_positive_scale_rejected(self) -> None:
        """Scale must be positive."""
        with pytest.raises(InvalidConfigurationError):
            ValueNoiseField(scale=0.0)
