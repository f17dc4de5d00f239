"""Shared test fixtures for heightfield tests."""

import pytest

from heightfield.config import (
    CalibrationConfig,
    DiamondSquareConfig,
    TerrainConfig,
    ViewportConfig,
)
from heightfield.random_source import RandomSource
from heightfield.session import TerrainSession
from heightfield.types import Method


@pytest.fixture
def random_source() -> RandomSource:
    """Random stream seeded with 42."""
    return RandomSource(42)


@pytest.fixture
def small_config() -> TerrainConfig:
    """64x64 tiles of value noise at zoom 1, seed 42."""
    return TerrainConfig(
        seed=42,
        viewport=ViewportConfig(size=64, tile_size=1, zoom=1.0),
    )


@pytest.fixture
def diamond_config() -> TerrainConfig:
    """Diamond-square over 32x32 tiles at zoom 2, seed 42."""
    return TerrainConfig(
        seed=42,
        method=Method.DIAMOND_SQUARE,
        viewport=ViewportConfig(size=64, tile_size=2, zoom=2.0),
    )


@pytest.fixture
def scenario_config() -> TerrainConfig:
    """Seed 42 diamond-square on an 8x8 grid, one tile per grid cell.

    At zoom 2 eight consecutive tile columns land on eight consecutive
    half-unit cells, so the 8x8 tile window covers the whole grid once.
    """
    return TerrainConfig(
        seed=42,
        method=Method.DIAMOND_SQUARE,
        diamond_square=DiamondSquareConfig(dim=8),
        viewport=ViewportConfig(size=8, tile_size=1, zoom=2.0),
        calibration=CalibrationConfig(land_ratio=0.5, tolerance=1e-4),
    )


@pytest.fixture
def session(small_config: TerrainConfig) -> TerrainSession:
    """Value-noise session over 64x64 tiles."""
    return TerrainSession(small_config)


@pytest.fixture
def diamond_session(diamond_config: TerrainConfig) -> TerrainSession:
    """Diamond-square session over 32x32 tiles."""
    return TerrainSession(diamond_config)
