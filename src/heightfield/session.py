"""Terrain session: method, viewport, regeneration and the water threshold."""

import threading
from typing import Iterator

import numpy as np
import structlog
from numpy.typing import NDArray

from .calibration import ThresholdCalibrator, check_ratio
from .config import TerrainConfig
from .diamond_square import DiamondSquareField, resolve_dimension
from .exceptions import InvalidConfigurationError
from .noise import ValueNoiseField
from .random_source import RandomSource
from .sampler import HeightSampler
from .types import IDEAL_LAND_RATIO, Method
from .viewport import Viewport, pixel_to_tile, world_coordinates

logger = structlog.get_logger()


class SharedThreshold:
    """Water threshold shared between calibration, rendering and animation.

    Readers always get the most recently written value.
    """

    def __init__(self, value: float = 0.5):
        self._lock = threading.Lock()
        self._value = value

    def get(self) -> float:
        with self._lock:
            return self._value

    def set(self, value: float) -> None:
        with self._lock:
            self._value = value


def threshold_sweep(start: float = 0.0) -> Iterator[float]:
    """Yield thresholds bouncing between 0 and 1 in steps of 0.01.

    Begins at start rounded to the nearest whole percent and rises first.
    Pacing is left to the caller.
    """
    percent = min(max(round(start * 100), 0), 100)
    step = 1
    while True:
        yield percent / 100
        if not 0 <= percent + step <= 100:
            step = -step
        percent += step


class TerrainSession:
    """Orchestrates height synthesis for an interactive terrain view.

    Holds the active method, viewport and land ratio target, and keeps the
    published threshold consistent with them. Every state change re-derives
    its dependents (grid, threshold) rather than patching them.

    Args:
        config: Session configuration (defaults if omitted).
        random_source: Random stream; built from config.seed if omitted.
    """

    def __init__(
        self,
        config: TerrainConfig | None = None,
        random_source: RandomSource | None = None,
    ):
        self.config = config or TerrainConfig()
        cfg = self.config

        if cfg.pan_span <= 0:
            raise InvalidConfigurationError(
                f"pan_span must be positive, got {cfg.pan_span}"
            )

        self.random_source = random_source or RandomSource(cfg.seed)
        self.land_ratio = check_ratio(cfg.calibration.land_ratio)

        self.viewport = Viewport(
            size=cfg.viewport.size,
            tile_size=cfg.viewport.tile_size,
            zoom=cfg.viewport.zoom,
            min_zoom=cfg.viewport.min_zoom,
            max_zoom=cfg.viewport.max_zoom,
            zoom_step=cfg.viewport.zoom_step,
        )
        self.sampler = HeightSampler(
            cfg.method,
            ValueNoiseField(cfg.value_noise.octaves, cfg.value_noise.scale),
            DiamondSquareField(cfg.diamond_square.roughness, cfg.diamond_square.bias),
        )
        self.calibrator = ThresholdCalibrator(
            self.sampler, self.viewport, cfg.calibration.tolerance
        )
        self._threshold = SharedThreshold()

        self.regenerate()

    @property
    def method(self) -> Method:
        return self.sampler.method

    @property
    def seed(self) -> int | None:
        return self.random_source.seed

    @property
    def threshold(self) -> float:
        """Current water threshold."""
        return self._threshold.get()

    def set_threshold(self, value: float) -> None:
        """Publish a threshold directly, clamped to [0, 1]."""
        self._threshold.set(min(max(float(value), 0.0), 1.0))

    @property
    def grid_dimension(self) -> int:
        """Diamond-square grid side for the current viewport."""
        override = self.config.diamond_square.dim
        if override is not None:
            return override
        return resolve_dimension(self.viewport.size, self.viewport.tile_size)

    def set_method(self, method: Method | str) -> None:
        """Switch synthesis method and re-derive grid and threshold."""
        self.sampler.method = Method(method)
        logger.info("method_changed", method=self.sampler.method.value)
        self._rebuild()
        self._recalibrate()

    def set_octaves(self, count: int) -> None:
        """Set the value-noise octave count."""
        self.sampler.value_noise.octaves = count
        if self.method == Method.VALUE_NOISE:
            self._recalibrate()

    def set_seed(self, value: int | None) -> None:
        """Reseed the random stream. Takes effect on the next regeneration."""
        self.random_source.set_seed(value)

    def regenerate(self) -> None:
        """Pick a new place in the world and recalibrate.

        Draws a fresh pan offset on each axis and, for diamond-square,
        rebuilds the grid.
        """
        cfg = self.config
        self.viewport.pan_x = cfg.pan_min + self.random_source.next_int(0, cfg.pan_span)
        self.viewport.pan_y = cfg.pan_min + self.random_source.next_int(0, cfg.pan_span)
        self._rebuild()
        self._recalibrate()
        logger.info(
            "terrain_regenerated",
            method=self.method.value,
            seed=self.seed,
            pan_x=self.viewport.pan_x,
            pan_y=self.viewport.pan_y,
            threshold=self.threshold,
        )

    def calibrate_threshold(self, target_land_ratio: float) -> float:
        """Adopt a new land ratio target and publish its threshold."""
        self.land_ratio = check_ratio(target_land_ratio)
        return self._recalibrate()

    def calibrate_ideal(self) -> float:
        """Publish the threshold for IDEAL_LAND_RATIO.

        The stored land ratio target is left unchanged, so the next
        regeneration calibrates back to it.
        """
        threshold = self.calibrator.threshold_for_ratio(IDEAL_LAND_RATIO)
        self.set_threshold(threshold)
        return threshold

    def _rebuild(self) -> None:
        self.sampler.rebuild(self.grid_dimension, self.random_source)

    def _recalibrate(self) -> float:
        threshold = self.calibrator.threshold_for_ratio(self.land_ratio)
        self.set_threshold(threshold)
        logger.debug(
            "threshold_calibrated", target=self.land_ratio, threshold=threshold
        )
        return threshold

    def height_at(self, x: float, y: float) -> float:
        """Height in [0, 1] at a world coordinate."""
        return self.sampler.height_at(x, y)

    def is_land(self, x: float, y: float, threshold: float | None = None) -> bool:
        """Whether a world coordinate lies above the water threshold."""
        if threshold is None:
            threshold = self.threshold
        return self.height_at(x, y) > threshold

    def tile_world_coordinates(self, row: int, col: int) -> tuple[float, float]:
        return world_coordinates(row, col, self.viewport)

    def sample_tiles(self) -> NDArray[np.float64]:
        """Heights of every visible tile, indexed [row, col]."""
        return self.sampler.sample_viewport(self.viewport)

    def classify_tiles(self, threshold: float | None = None) -> NDArray[np.bool_]:
        """Land mask of every visible tile, indexed [row, col]."""
        if threshold is None:
            threshold = self.threshold
        return self.sample_tiles() > threshold

    def is_land_at_tile(self, row: int, col: int) -> bool:
        return self.is_land(*self.tile_world_coordinates(row, col))

    def is_land_at_pixel(self, px: float, py: float) -> bool:
        """Classify the tile under a viewport pixel, as a click would."""
        return self.is_land_at_tile(*pixel_to_tile(px, py, self.viewport))

    def land_tile_ratio(self, threshold: float | None = None) -> float:
        """Fraction of visible tiles above threshold (default: current)."""
        if threshold is None:
            threshold = self.threshold
        return self.calibrator.land_tile_ratio(threshold)

    def pan_by_pixels(self, dx: int, dy: int) -> None:
        self.viewport.pan_by_pixels(dx, dy)

    def zoom_at(self, tile_col: int, tile_row: int, steps: int) -> None:
        self.viewport.zoom_at(tile_col, tile_row, steps)
