"""Render decimation sizing."""

import math

from roe_monitor.core.constants import MAX_DECIMATION_SAMPLES, MIN_DECIMATION_SAMPLES


def decimation_target(width: float, samples_per_pixel: float = 1.0) -> int:
    """
    Number of points the renderer should draw for a given width.

    Advisory only: resampled data is never dropped here, the renderer uses
    the target for its own point reduction.
    """
    if width is None or not math.isfinite(width) or width < 0:
        width = 0
    target = math.floor(width * samples_per_pixel)
    return max(MIN_DECIMATION_SAMPLES, min(MAX_DECIMATION_SAMPLES, target))
