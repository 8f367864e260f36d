"""Windowed mean statistics over series points and resampled samples."""

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import numpy as np

from roe_monitor.core.channels import CHANNELS, SUMMARY_CHANNELS
from roe_monitor.core.constants import TRAILING_30D_MS, TRAILING_7D_MS
from roe_monitor.core.models import ChartDataset, SeriesPoint, StatsSummary, TimeWindow, utc_now_ms

logger = logging.getLogger(__name__)


def _mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return float(np.mean(values))


class WindowedStatsCalculator:
    """
    Means per summary channel over trailing periods and the view window.

    Reward channels are chart-only and never summarized.
    """

    def __init__(
        self,
        channels: Optional[List[str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.channels = channels or list(SUMMARY_CHANNELS)
        self._clock = clock or utc_now_ms

    def trailing(
        self,
        points: Sequence[SeriesPoint],
        period_ms: int,
        name: str,
        now_ms: Optional[int] = None,
    ) -> StatsSummary:
        """
        Mean over points with effective timestamp in [now - period, now].

        Args:
            points: Stored points (unanchored points are ignored)
            period_ms: Trailing period length
            name: Summary name
            now_ms: Reference time (defaults to the clock)

        Returns:
            StatsSummary, all zeros when no point is in range
        """
        now = self._clock() if now_ms is None else now_ms
        start = now - period_ms
        selected = [
            p for p in points
            if p.effective_ms is not None and start <= p.effective_ms <= now
        ]
        means = {
            key: _mean([CHANNELS[key].extract(p) for p in selected])
            for key in self.channels
        }
        return StatsSummary(name=name, means=means, count=len(selected))

    def trailing_7d(self, points: Sequence[SeriesPoint], now_ms: Optional[int] = None) -> StatsSummary:
        return self.trailing(points, TRAILING_7D_MS, "7d", now_ms)

    def trailing_30d(self, points: Sequence[SeriesPoint], now_ms: Optional[int] = None) -> StatsSummary:
        return self.trailing(points, TRAILING_30D_MS, "30d", now_ms)

    def visible(
        self,
        datasets: Mapping[str, ChartDataset],
        window: Optional[TimeWindow],
        bucket_width_ms: int = 0,
    ) -> StatsSummary:
        """
        Mean of resampled values falling inside the active window.

        A sample is in range when its bucket [x, x + bucket_width_ms) overlaps
        the window. When the window is not known yet every available sample
        counts.
        """
        means: Dict[str, float] = {}
        count = 0
        for key in self.channels:
            dataset = datasets.get(key)
            samples = dataset.samples if dataset else []
            if window is not None:
                samples = [
                    s for s in samples
                    if s.x <= window.max_ms
                    and (s.x >= window.min_ms or s.x + bucket_width_ms > window.min_ms)
                ]
            means[key] = _mean([s.y for s in samples])
            count = max(count, len(samples))
        return StatsSummary(name="visible", means=means, count=count)
