"""Water-level calibration by bisection on the visible land ratio."""

from typing import Callable

import numpy as np
import structlog
from numpy.typing import NDArray

from .exceptions import InvalidConfigurationError
from .sampler import HeightSampler
from .viewport import Viewport

logger = structlog.get_logger()


def check_ratio(ratio: float) -> float:
    """Validate a land ratio, returning it as a float."""
    if not 0.0 <= ratio <= 1.0:
        raise InvalidConfigurationError(f"land ratio must be in [0, 1], got {ratio}")
    return float(ratio)


def land_ratio(heights: NDArray[np.float64], threshold: float) -> float:
    """Fraction of heights strictly above threshold.

    Raises:
        InvalidConfigurationError: If heights is empty.
    """
    if heights.size == 0:
        raise InvalidConfigurationError("cannot compute a land ratio over zero tiles")
    return int(np.count_nonzero(heights > threshold)) / heights.size


def bisect_threshold(
    target: float,
    ratio_at: Callable[[float], float],
    tolerance: float = 1e-4,
) -> float:
    """Find the threshold whose land ratio meets target.

    ratio_at must be non-increasing in its argument. The bracket [0, 1]
    is halved until narrower than tolerance. The final midpoint is
    returned unless a bracket end gives a ratio strictly closer to target,
    which happens when the ratio steps across target inside the bracket.

    Args:
        target: Desired land ratio in [0, 1].
        ratio_at: Land ratio as a function of threshold.
        tolerance: Final bracket width.

    Returns:
        Threshold in [0, 1].
    """
    check_ratio(target)
    if tolerance <= 0:
        raise InvalidConfigurationError(f"tolerance must be positive, got {tolerance}")

    low, high = 0.0, 1.0
    mid = (low + high) / 2
    ratio = ratio_at(mid)
    while high - low > tolerance:
        if ratio < target:
            high = mid
        else:
            low = mid
        mid = (low + high) / 2
        ratio = ratio_at(mid)

    best, best_error = mid, abs(ratio - target)
    for end in (low, high):
        error = abs(ratio_at(end) - target)
        if error < best_error:
            best, best_error = end, error
    return best


class ThresholdCalibrator:
    """Calibrates the water threshold over the tiles a viewport shows.

    Args:
        sampler: Height source for the active method.
        viewport: Visible window; read on every call.
        tolerance: Default bisection bracket width.
    """

    def __init__(
        self,
        sampler: HeightSampler,
        viewport: Viewport,
        tolerance: float = 1e-4,
    ):
        self.sampler = sampler
        self.viewport = viewport
        self.tolerance = tolerance

    def visible_heights(self) -> NDArray[np.float64]:
        if self.viewport.tile_count == 0:
            raise InvalidConfigurationError(
                f"viewport of {self.viewport.size}px holds no "
                f"{self.viewport.tile_size}px tiles"
            )
        return self.sampler.sample_viewport(self.viewport)

    def land_tile_ratio(self, threshold: float) -> float:
        """Fraction of visible tiles higher than threshold."""
        return land_ratio(self.visible_heights(), threshold)

    def threshold_for_ratio(
        self, target: float, tolerance: float | None = None
    ) -> float:
        """Threshold leaving the target fraction of visible tiles as land."""
        heights = self.visible_heights()
        threshold = bisect_threshold(
            target,
            lambda t: land_ratio(heights, t),
            self.tolerance if tolerance is None else tolerance,
        )
        logger.debug(
            "threshold_bisected",
            target=target,
            threshold=threshold,
            achieved=land_ratio(heights, threshold),
        )
        return threshold
