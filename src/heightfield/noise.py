"""Value noise functions for heightfield generation.

Provides an integer lattice hash, cosine interpolation between lattice
values, and an fBm (fractal Brownian motion) field summing octaves of the
interpolated noise. This is value noise: each lattice point carries a hashed
scalar, not a gradient.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import InvalidConfigurationError

_MASK_32 = np.uint64(0xFFFFFFFF)
_MASK_31 = np.uint64(0x7FFFFFFF)


def base_noise(ix: ArrayLike, iy: ArrayLike) -> NDArray[np.float64]:
    """Hash integer lattice coordinates to a value in (-1, 1].

    Arithmetic wraps at 32 bits so the result is bit-reproducible for any
    integer input, negative coordinates included.

    Args:
        ix: Integer x lattice coordinates.
        iy: Integer y lattice coordinates.

    Returns:
        Array of hashed values broadcast to the shape of the inputs.
    """
    ix = np.asarray(ix, dtype=np.int64)
    iy = np.asarray(iy, dtype=np.int64)

    n = ((ix + np.int64(57) * iy) & np.int64(0xFFFFFFFF)).astype(np.uint64)
    with np.errstate(over="ignore"):
        n = ((n << np.uint64(13)) ^ n) & _MASK_32
        nn = (
            n * (n * n * np.uint64(60493) + np.uint64(19990303))
            + np.uint64(1376312589)
        ) & _MASK_31

    return 1.0 - nn.astype(np.float64) / 1073741824.0


def interpolate(a, b, t):
    """Cosine interpolation between a and b.

    The easing curve has zero slope at t=0 and t=1, so lattice crossings
    stay smooth.

    Args:
        a: Value at t=0.
        b: Value at t=1.
        t: Blend position in [0, 1].

    Returns:
        Interpolated value (array if any input is an array).
    """
    f = (1.0 - np.cos(t * np.pi)) * 0.5
    return a * (1.0 - f) + b * f


def noise(x: ArrayLike, y: ArrayLike) -> NDArray[np.float64]:
    """Smooth 2D value noise in [-1, 1].

    Blends the four lattice values around each point, first along x and
    then along y. Coordinates are floored toward negative infinity.

    Args:
        x: Continuous x coordinates.
        y: Continuous y coordinates.

    Returns:
        Noise values broadcast to the shape of the inputs.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    floor_x = np.floor(x)
    floor_y = np.floor(y)
    ix = floor_x.astype(np.int64)
    iy = floor_y.astype(np.int64)

    s = base_noise(ix, iy)
    t = base_noise(ix + 1, iy)
    u = base_noise(ix, iy + 1)
    v = base_noise(ix + 1, iy + 1)

    top = interpolate(s, t, x - floor_x)
    bottom = interpolate(u, v, x - floor_x)
    return interpolate(top, bottom, y - floor_y)


class ValueNoiseField:
    """Infinite, stateless fBm heightfield built from value noise.

    Each octave doubles the frequency and halves the weight of the last.
    The weighted sum is divided by the total weight, clamped to [-1, 1]
    and remapped to [0, 1].
    """

    def __init__(self, octaves: int = 3, scale: float = 20.0):
        if scale <= 0:
            raise InvalidConfigurationError(f"scale must be positive, got {scale}")
        self.scale = scale
        self.octaves = octaves

    @property
    def octaves(self) -> int:
        return self._octaves

    @octaves.setter
    def octaves(self, count: int) -> None:
        if count <= 0:
            raise InvalidConfigurationError(
                f"octaves must be a positive integer, got {count}"
            )
        self._octaves = int(count)

    def sample(self, xs: ArrayLike, ys: ArrayLike) -> NDArray[np.float64]:
        """Evaluate heights for arrays of world coordinates.

        Args:
            xs: World x coordinates.
            ys: World y coordinates.

        Returns:
            Heights in [0, 1] broadcast to the shape of the inputs.
        """
        x = np.asarray(xs, dtype=np.float64) / self.scale
        y = np.asarray(ys, dtype=np.float64) / self.scale

        total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
        frequency = 1
        for _ in range(self._octaves):
            total += noise(x * frequency, y * frequency) / frequency
            frequency *= 2

        # Sum of weights 1 + 1/2 + ... over the contributed octaves
        total /= 2.0 - 2.0 / frequency
        np.clip(total, -1.0, 1.0, out=total)
        return (1.0 + total) / 2.0

    def height_at(self, x: float, y: float) -> float:
        """Height in [0, 1] at a single world coordinate."""
        return float(self.sample(np.array([x]), np.array([y]))[0])
