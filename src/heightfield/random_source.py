"""Seedable uniform random stream shared by the generators."""

import numpy as np
from numpy.typing import NDArray


class RandomSource:
    """Deterministic random stream backed by a numpy Generator.

    The same seed followed by the same sequence of calls reproduces the
    same values. A seed of None draws fresh entropy from the OS.
    """

    def __init__(self, seed: int | None = None):
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> int | None:
        """Seed the stream was last reset with."""
        return self._seed

    def set_seed(self, seed: int | None) -> None:
        """Reset the stream to the start of the sequence for seed."""
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    def next_uniform(self) -> float:
        """Return a float in [0, 1)."""
        return float(self._rng.random())

    def next_int(self, low: int, high: int) -> int:
        """Return an int in [low, high)."""
        return int(self._rng.integers(low, high))

    def uniform_array(self, shape: tuple[int, ...]) -> NDArray[np.float64]:
        """Return an array of floats in [0, 1), filled in C order."""
        return self._rng.random(shape)
