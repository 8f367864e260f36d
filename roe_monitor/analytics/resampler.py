"""Bucketed resampling of series points into per-channel chart samples."""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from roe_monitor.core.channels import CHANNELS, Channel
from roe_monitor.core.constants import MS_PER_HOUR
from roe_monitor.core.models import AggregationMode, BucketPlan, Sample, SeriesPoint

logger = logging.getLogger(__name__)


def bucket_key(ts_ms: int, bucket_width_ms: int) -> int:
    """Start of the bucket containing ts_ms."""
    return (ts_ms // bucket_width_ms) * bucket_width_ms


class Resampler:
    """
    Group points into fixed-width time buckets and aggregate each channel.

    In LAST mode a bucket takes the values of its most recent point (on an
    exact timestamp tie the later-iterated point wins). In AVERAGE mode every
    channel is the unweighted mean over the bucket; missing values were
    already defaulted to 0 at ingestion and count as zero.

    Empty buckets are not emitted, so a connected line draws straight across
    gaps.
    """

    def __init__(self, channels: Optional[Dict[str, Channel]] = None):
        self.channels = channels or CHANNELS

    def resample(
        self,
        points: Sequence[SeriesPoint],
        plan: BucketPlan,
    ) -> Dict[str, List[Sample]]:
        """
        Resample anchored points using a bucket plan.

        Args:
            points: Points restricted to the window being rendered
            plan: Bucket width and aggregation mode

        Returns:
            Dict mapping channel key to samples sorted by bucket start
        """
        result: Dict[str, List[Sample]] = {key: [] for key in self.channels}
        if not points:
            return result

        width_ms = plan.bucket_hours * MS_PER_HOUR
        buckets: Dict[int, List[SeriesPoint]] = {}
        for point in points:
            ts = point.effective_ms
            if ts is None:
                continue
            buckets.setdefault(bucket_key(ts, width_ms), []).append(point)

        for key in sorted(buckets):
            members = buckets[key]
            if plan.mode == AggregationMode.LAST:
                values = self._last_values(members)
            else:
                values = self._average_values(members)
            for channel_key, value in values.items():
                result[channel_key].append(Sample(x=key, y=value))

        logger.debug(
            f"Resampled {len(points)} points into {len(buckets)} buckets "
            f"({plan.bucket_hours}h, {plan.mode.value})"
        )
        return result

    def _last_values(self, members: List[SeriesPoint]) -> Dict[str, float]:
        latest = members[0]
        for point in members[1:]:
            if point.effective_ms >= latest.effective_ms:
                latest = point
        return {key: float(ch.extract(latest)) for key, ch in self.channels.items()}

    def _average_values(self, members: List[SeriesPoint]) -> Dict[str, float]:
        return {
            key: float(np.mean([ch.extract(p) for p in members]))
            for key, ch in self.channels.items()
        }
