"""In-memory point store keyed by effective timestamp."""

import bisect
import logging
from typing import Callable, Dict, Iterable, List, Optional

from roe_monitor.core.constants import DEFAULT_EXTENT_MS
from roe_monitor.core.exceptions import UnanchoredPointError
from roe_monitor.core.models import SeriesPoint, TimeWindow, utc_now_ms

logger = logging.getLogger(__name__)


class PointStore:
    """
    Time-ordered set of series points for one position configuration.

    At most one point exists per effective timestamp; upserting a point with
    a known timestamp replaces the stored one in place.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or utc_now_ms
        self._points: Dict[int, SeriesPoint] = {}
        self._keys: List[int] = []  # sorted effective timestamps

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self):
        return iter(self.all())

    def upsert(self, point: SeriesPoint) -> bool:
        """
        Insert or replace a point by effective timestamp.

        Args:
            point: Point to store

        Returns:
            True if an existing point was replaced, False if inserted

        Raises:
            UnanchoredPointError: If the point has no effective timestamp
        """
        ts = point.effective_ms
        if ts is None:
            raise UnanchoredPointError(point.note)

        replaced = ts in self._points
        self._points[ts] = point
        if not replaced:
            bisect.insort(self._keys, ts)
        return replaced

    def load(self, points: Iterable[SeriesPoint]) -> int:
        """
        Upsert many points, dropping unanchored ones.

        Returns:
            Number of points dropped
        """
        dropped = 0
        for point in points:
            try:
                self.upsert(point)
            except UnanchoredPointError as e:
                dropped += 1
                logger.debug(f"Dropping point: {e}")

        if dropped:
            logger.warning(f"Dropped {dropped} unanchored point(s) on load")
        return dropped

    def clear(self) -> None:
        self._points.clear()
        self._keys.clear()

    def all(self) -> List[SeriesPoint]:
        """Points ordered by effective timestamp ascending."""
        return [self._points[k] for k in self._keys]

    def between(self, min_ms: int, max_ms: int) -> List[SeriesPoint]:
        """Points whose effective timestamp lies in [min_ms, max_ms]."""
        lo = bisect.bisect_left(self._keys, min_ms)
        hi = bisect.bisect_right(self._keys, max_ms)
        return [self._points[k] for k in self._keys[lo:hi]]

    def latest(self) -> Optional[SeriesPoint]:
        """Most recent point, if any."""
        if not self._keys:
            return None
        return self._points[self._keys[-1]]

    def extent(self) -> TimeWindow:
        """
        Min/max effective timestamp over all stored points.

        Scans the store on every call; falls back to the 24h ending now
        when empty.
        """
        timestamps = [p.effective_ms for p in self._points.values()]
        if not timestamps:
            now = self._clock()
            return TimeWindow(min_ms=now - DEFAULT_EXTENT_MS, max_ms=now)
        return TimeWindow(min_ms=min(timestamps), max_ms=max(timestamps))
