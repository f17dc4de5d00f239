"""Heightfield configuration models and TOML loading."""

import math
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from .types import Method


class ValueNoiseConfig(BaseModel):
    """Value-noise fBm parameters."""

    octaves: int = Field(default=3, description="Number of octaves to sum")
    scale: float = Field(
        default=20.0, description="World units per noise lattice cell"
    )


class DiamondSquareConfig(BaseModel):
    """Diamond-square displacement parameters."""

    roughness: float = Field(
        default=math.e, description="Multiplier on displacement magnitude"
    )
    bias: float = Field(
        default=0.45, description="Subtracted from each uniform draw before scaling"
    )
    dim: int | None = Field(
        default=None,
        description="Grid side override (None = resolved from the viewport)",
    )


class ViewportConfig(BaseModel):
    """Visible window and zoom limits."""

    size: int = Field(default=512, description="Viewport side length in pixels")
    tile_size: int = Field(default=2, description="Tile side length in pixels")
    zoom: float = Field(default=0.5, description="Initial zoom factor")
    min_zoom: float = Field(default=0.5, description="Lowest allowed zoom")
    max_zoom: float = Field(default=250.0, description="Highest allowed zoom")
    zoom_step: float = Field(
        default=1.5, description="Zoom multiplier per wheel step"
    )


class CalibrationConfig(BaseModel):
    """Land/water threshold calibration parameters."""

    land_ratio: float = Field(
        default=0.5, description="Target fraction of visible tiles that are land"
    )
    tolerance: float = Field(
        default=1e-4, description="Bisection stops when the bracket is this narrow"
    )


class TerrainConfig(BaseModel):
    """Complete heightfield session configuration."""

    seed: int | None = Field(
        default=None, description="Random seed (None = seeded from entropy)"
    )
    method: Method = Field(
        default=Method.VALUE_NOISE, description="Active height synthesis method"
    )
    pan_min: int = Field(
        default=500, description="Smallest pan offset drawn on regeneration"
    )
    pan_span: int = Field(
        default=500, description="Width of the pan offset range drawn on regeneration"
    )

    value_noise: ValueNoiseConfig = Field(default_factory=ValueNoiseConfig)
    diamond_square: DiamondSquareConfig = Field(default_factory=DiamondSquareConfig)
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    calibration: CalibrationConfig = Field(default_factory=CalibrationConfig)


def load_config(config_path: Path) -> TerrainConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed TerrainConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return TerrainConfig.model_validate(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml
    3. configs/{name}

    Args:
        name: Config name or path.

    Returns:
        Path to the config file.

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return [p.stem for p in configs_dir.glob("*.toml")]
