"""Core types for heightfield generation."""

from enum import Enum


class Method(str, Enum):
    """Height synthesis algorithm answering height queries."""

    VALUE_NOISE = "value_noise"
    DIAMOND_SQUARE = "diamond_square"


# 1 - 1/phi, the land share the "best" calibration aims for
IDEAL_LAND_RATIO = 0.38196601125
