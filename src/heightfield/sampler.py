"""Height sampling facade over the two synthesis methods."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .diamond_square import DiamondSquareField
from .noise import ValueNoiseField
from .random_source import RandomSource
from .types import Method
from .viewport import Viewport, tile_grid_coordinates


class HeightSampler:
    """Answers height queries from whichever field the method selects."""

    def __init__(
        self,
        method: Method,
        value_noise: ValueNoiseField,
        diamond_square: DiamondSquareField,
    ):
        self.method = Method(method)
        self.value_noise = value_noise
        self.diamond_square = diamond_square

    @property
    def field(self) -> ValueNoiseField | DiamondSquareField:
        """The field for the active method."""
        if self.method == Method.DIAMOND_SQUARE:
            return self.diamond_square
        return self.value_noise

    def rebuild(self, dim: int, random_source: RandomSource) -> None:
        """Regenerate method-specific state. Value noise has none."""
        if self.method == Method.DIAMOND_SQUARE:
            self.diamond_square.generate(dim, random_source)

    def height_at(self, x: float, y: float) -> float:
        return self.field.height_at(x, y)

    def sample(self, xs: ArrayLike, ys: ArrayLike) -> NDArray[np.float64]:
        return self.field.sample(xs, ys)

    def sample_viewport(self, viewport: Viewport) -> NDArray[np.float64]:
        """Heights of every visible tile, indexed [row, col]."""
        xs, ys = tile_grid_coordinates(viewport)
        return self.field.sample(xs, ys)
