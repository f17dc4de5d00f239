"""Terrain heightfields with land/water threshold calibration.

Two interchangeable synthesis methods (value-noise fBm and diamond-square
midpoint displacement) sampled through a pan/zoom viewport, with the water
level calibrated to a target share of visible land.
"""

from .calibration import ThresholdCalibrator, bisect_threshold, land_ratio
from .config import (
    CalibrationConfig,
    DiamondSquareConfig,
    TerrainConfig,
    ValueNoiseConfig,
    ViewportConfig,
    find_config,
    load_config,
)
from .diamond_square import DiamondSquareField, resolve_dimension
from .exceptions import (
    FieldNotGeneratedError,
    HeightfieldError,
    InvalidConfigurationError,
)
from .noise import ValueNoiseField, base_noise, interpolate, noise
from .random_source import RandomSource
from .sampler import HeightSampler
from .session import SharedThreshold, TerrainSession, threshold_sweep
from .types import IDEAL_LAND_RATIO, Method
from .viewport import Viewport, pixel_to_tile, tile_grid_coordinates, world_coordinates

__all__ = [
    # Types
    "Method",
    "IDEAL_LAND_RATIO",
    # Config
    "TerrainConfig",
    "ValueNoiseConfig",
    "DiamondSquareConfig",
    "ViewportConfig",
    "CalibrationConfig",
    "load_config",
    "find_config",
    # Fields
    "RandomSource",
    "ValueNoiseField",
    "DiamondSquareField",
    "HeightSampler",
    "base_noise",
    "interpolate",
    "noise",
    "resolve_dimension",
    # Viewport
    "Viewport",
    "world_coordinates",
    "tile_grid_coordinates",
    "pixel_to_tile",
    # Calibration
    "ThresholdCalibrator",
    "bisect_threshold",
    "land_ratio",
    # Session
    "TerrainSession",
    "SharedThreshold",
    "threshold_sweep",
    # Exceptions
    "HeightfieldError",
    "InvalidConfigurationError",
    "FieldNotGeneratedError",
]
