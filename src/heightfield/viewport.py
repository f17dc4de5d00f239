"""Viewport state and the tile-to-world coordinate mapping.

Rendering, click classification and threshold calibration all map tiles
through ``world_coordinates``. Keep them on this one function, or a tile
can be drawn as land and clicked as water.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .exceptions import InvalidConfigurationError


@dataclass
class Viewport:
    """Visible square window onto the world.

    Pan offsets are in tile units; zoom divides tile positions to reach
    world coordinates, so a higher zoom shows a smaller area.
    """

    size: int = 512
    tile_size: int = 2
    zoom: float = 0.5
    pan_x: int = 0
    pan_y: int = 0
    min_zoom: float = 0.5
    max_zoom: float = 250.0
    zoom_step: float = 1.5

    def __post_init__(self) -> None:
        if self.size <= 0 or self.tile_size <= 0:
            raise InvalidConfigurationError(
                f"viewport and tile sizes must be positive, got "
                f"{self.size} and {self.tile_size}"
            )
        if self.min_zoom <= 0 or self.min_zoom > self.max_zoom:
            raise InvalidConfigurationError(
                f"invalid zoom limits [{self.min_zoom}, {self.max_zoom}]"
            )
        if self.zoom_step <= 1:
            raise InvalidConfigurationError(
                f"zoom_step must be greater than 1, got {self.zoom_step}"
            )
        self.set_zoom(self.zoom)

    @property
    def tiles_per_side(self) -> int:
        """Number of tile rows (and columns) visible."""
        return self.size // self.tile_size

    @property
    def tile_count(self) -> int:
        return self.tiles_per_side**2

    def set_zoom(self, zoom: float) -> None:
        """Set the zoom factor, clamped to the zoom limits."""
        self.zoom = min(max(zoom, self.min_zoom), self.max_zoom)

    def pan_by_pixels(self, dx: int, dy: int) -> None:
        """Follow a drag of (dx, dy) pixels.

        Content moves with the pointer, so the offset moves the other way.
        Partial tiles are truncated toward zero.
        """
        self.pan_x += int(-dx / self.tile_size)
        self.pan_y += int(-dy / self.tile_size)

    def zoom_at(self, tile_col: int, tile_row: int, steps: int) -> None:
        """Zoom one step in (steps > 0) or out (steps < 0) about a tile.

        The pan offset is re-anchored so the world point under the given
        tile stays put, up to integer truncation of the offset.
        """
        if steps == 0:
            return
        old_zoom = self.zoom
        if steps > 0:
            self.set_zoom(old_zoom * self.zoom_step)
        else:
            self.set_zoom(old_zoom / self.zoom_step)
        self.pan_x = int(self.zoom * (tile_col + self.pan_x) / old_zoom - tile_col)
        self.pan_y = int(self.zoom * (tile_row + self.pan_y) / old_zoom - tile_row)


def world_coordinates(row, col, viewport: Viewport):
    """Map tile indices to world coordinates.

    Works element-wise on numpy arrays with the same arithmetic as on
    scalars.

    Args:
        row: Tile row (vertical index).
        col: Tile column (horizontal index).
        viewport: Current viewport state.

    Returns:
        (x, y) world coordinates.
    """
    x = (col + viewport.pan_x) / viewport.zoom
    y = (row + viewport.pan_y) / viewport.zoom
    return x, y


def tile_grid_coordinates(
    viewport: Viewport,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """World coordinates of every visible tile, indexed [row, col]."""
    indices = np.arange(viewport.tiles_per_side)
    rows, cols = np.meshgrid(indices, indices, indexing="ij")
    return world_coordinates(rows, cols, viewport)


def pixel_to_tile(px: float, py: float, viewport: Viewport) -> tuple[int, int]:
    """Tile (row, col) containing a viewport pixel."""
    return int(py // viewport.tile_size), int(px // viewport.tile_size)
