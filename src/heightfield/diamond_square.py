"""Diamond-square midpoint displacement on a toroidal grid.

The grid is square with a power-of-two side. Every neighbour lookup wraps
modulo the side, so the generated field tiles seamlessly in both axes.
"""

import numpy as np
import structlog
from numpy.typing import ArrayLike, NDArray

from .exceptions import FieldNotGeneratedError, InvalidConfigurationError
from .random_source import RandomSource

logger = structlog.get_logger()


def resolve_dimension(viewport_size: int, tile_size: int) -> int:
    """Grid side needed to cover a viewport.

    Args:
        viewport_size: Viewport side in pixels.
        tile_size: Tile side in pixels.

    Returns:
        Smallest power of two >= (9 * tiles) / 4, and never below 2.

    Raises:
        InvalidConfigurationError: If either size is not positive.
    """
    if viewport_size <= 0 or tile_size <= 0:
        raise InvalidConfigurationError(
            f"viewport and tile sizes must be positive, got "
            f"{viewport_size} and {tile_size}"
        )
    map_size = (9 * viewport_size // tile_size) // 4
    dim = 2
    while dim < map_size:
        dim *= 2
    return dim


def _check_dimension(dim: int) -> None:
    if dim < 2 or dim & (dim - 1):
        raise InvalidConfigurationError(
            f"grid dimension must be a power of two >= 2, got {dim}"
        )


class DiamondSquareField:
    """Heightfield backed by a diamond-square grid.

    Sampling is piecewise constant: world coordinates are doubled and
    floored to grid indices, then wrapped.

    Args:
        roughness: Multiplier on displacement magnitude.
        bias: Subtracted from each uniform draw, skewing displacement down.
    """

    def __init__(self, roughness: float = np.e, bias: float = 0.45):
        self.roughness = roughness
        self.bias = bias
        self._grid: NDArray[np.float64] | None = None

    @property
    def dim(self) -> int:
        """Side of the current grid (0 before generation)."""
        return 0 if self._grid is None else self._grid.shape[0]

    @property
    def grid(self) -> NDArray[np.float64]:
        """The published grid. Treat as read-only."""
        if self._grid is None:
            raise FieldNotGeneratedError("diamond-square grid has not been generated")
        return self._grid

    def generate(self, dim: int, random_source: RandomSource) -> NDArray[np.float64]:
        """Build a new grid and publish it.

        The grid is filled in a private buffer and only assigned once
        complete, so concurrent readers never see a partial grid.

        Args:
            dim: Grid side, a power of two >= 2.
            random_source: Source of displacement draws.

        Returns:
            The new grid.
        """
        _check_dimension(dim)

        grid = np.zeros((dim, dim), dtype=np.float64)
        grid[0, 0] = random_source.next_uniform()

        step = dim
        while step > 1:
            half = step // 2

            # Diamond pass: centers take the mean of their diagonal corners
            centers = np.arange(half, dim, step)
            x, y = np.meshgrid(centers, centers, indexing="ij")
            x1, y1 = x - half, y - half
            x2, y2 = (x + half) % dim, (y + half) % dim
            average = (grid[x1, y1] + grid[x1, y2] + grid[x2, y1] + grid[x2, y2]) / 4
            grid[x, y] = self._displace(average, step, dim, random_source)

            # Square pass: edge midpoints take the mean of their axis neighbours
            rows = np.arange(0, dim, half)
            starts = np.where((rows // half) % 2 == 0, half, 0)
            x = np.broadcast_to(rows[:, None], (rows.size, dim // step))
            y = starts[:, None] + np.arange(0, dim, step)[None, :]
            x1, y1 = (x - half + dim) % dim, (y - half + dim) % dim
            x2, y2 = (x + half) % dim, (y + half) % dim
            average = (grid[x1, y] + grid[x2, y] + grid[x, y1] + grid[x, y2]) / 4
            grid[x, y] = self._displace(average, step, dim, random_source)

            step = half

        self._grid = grid
        logger.debug("grid_generated", dim=dim, mean=float(grid.mean()))
        return grid

    def _displace(
        self,
        average: NDArray[np.float64],
        step: int,
        dim: int,
        random_source: RandomSource,
    ) -> NDArray[np.float64]:
        magnitude = self.roughness * step / dim
        draws = random_source.uniform_array(average.shape)
        return np.clip(average + (draws - self.bias) * magnitude, 0.0, 1.0)

    def grid_indices(
        self, xs: ArrayLike, ys: ArrayLike
    ) -> tuple[NDArray[np.int64], NDArray[np.int64]]:
        """Wrapped grid indices for world coordinates."""
        return _wrapped_indices(xs, ys, self.grid.shape[0])

    def sample(self, xs: ArrayLike, ys: ArrayLike) -> NDArray[np.float64]:
        """Heights in [0, 1] for arrays of world coordinates."""
        grid = self.grid
        ix, iy = _wrapped_indices(xs, ys, grid.shape[0])
        return grid[ix, iy]

    def height_at(self, x: float, y: float) -> float:
        """Height in [0, 1] at a single world coordinate."""
        return float(self.sample(np.array([x]), np.array([y]))[0])


def _wrapped_indices(
    xs: ArrayLike, ys: ArrayLike, dim: int
) -> tuple[NDArray[np.int64], NDArray[np.int64]]:
    # Doubling gives half-unit cells; flooring keeps the wrap periodic below zero
    ix = np.floor(np.asarray(xs, dtype=np.float64) * 2).astype(np.int64)
    iy = np.floor(np.asarray(ys, dtype=np.float64) * 2).astype(np.int64)
    return ((ix % dim) + dim) % dim, ((iy % dim) + dim) % dim
