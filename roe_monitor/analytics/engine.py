"""Series engine orchestrator.

Wires the point store, view window tracker, bucket planner, resampler,
statistics calculator and decimation sizer into one recompute chain that
produces a ChartFrame for the chart and stats surfaces.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from config.settings import Settings, get_settings
from roe_monitor.analytics.decimation import decimation_target
from roe_monitor.analytics.planner import plan_buckets
from roe_monitor.analytics.resampler import Resampler
from roe_monitor.analytics.stats import WindowedStatsCalculator
from roe_monitor.analytics.store import PointStore
from roe_monitor.analytics.table import to_table_rows
from roe_monitor.analytics.window import RenderedRangeProvider, ViewWindowTracker
from roe_monitor.core.channels import CHANNELS
from roe_monitor.core.constants import MIN_DECIMATION_SAMPLES, MS_PER_HOUR
from roe_monitor.core.exceptions import UnanchoredPointError
from roe_monitor.core.models import (
    ChartDataset,
    ChartFrame,
    SeriesPoint,
    StatsSummary,
    TableRow,
    TimeWindow,
    utc_now_ms,
)

logger = logging.getLogger(__name__)

FrameListener = Callable[[ChartFrame], None]


class SeriesEngine:
    """
    Recomputes chart datasets and statistics from the point store.

    Derived structures are rebuilt from scratch on every event; only the
    store itself is merged incrementally. Channel visibility flags survive
    rebuilds.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[PointStore] = None,
        rendered_range_provider: Optional[RenderedRangeProvider] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.settings = settings or get_settings()
        self._clock = clock or utc_now_ms
        self.store = store or PointStore(clock=self._clock)
        self.tracker = ViewWindowTracker(
            self.store,
            rendered_range_provider=rendered_range_provider,
            brush_step=self.settings.brush_step,
        )
        self.resampler = Resampler()
        self.stats = WindowedStatsCalculator(clock=self._clock)

        self._hidden: Dict[str, bool] = {
            key: ch.hidden_by_default for key, ch in CHANNELS.items()
        }
        self._width: float = 0
        self._listeners: List[FrameListener] = []
        self._trailing_7d = StatsSummary(name="7d")
        self._trailing_30d = StatsSummary(name="30d")
        self._frame = ChartFrame(
            window=None,
            plan=None,
            datasets=self._empty_datasets(),
            decimation_target=MIN_DECIMATION_SAMPLES,
            trailing_7d=self._trailing_7d,
            trailing_30d=self._trailing_30d,
            visible=StatsSummary(name="visible"),
        )

        self.tracker.add_listener(self._on_window_change)

    @property
    def frame(self) -> ChartFrame:
        """Latest computed frame."""
        return self._frame

    @property
    def window(self) -> Optional[TimeWindow]:
        return self.tracker.window

    def add_listener(self, listener: FrameListener) -> None:
        """Register a callback invoked after every recompute."""
        self._listeners.append(listener)

    # ========== INGESTION ==========

    def load_series(self, points: Iterable[SeriesPoint]) -> ChartFrame:
        """
        Replace the store contents with a bulk series and show the full extent.

        Args:
            points: Series from the backend, in any order

        Returns:
            The recomputed frame
        """
        self.store.clear()
        dropped = self.store.load(points)
        logger.info(f"Loaded {len(self.store)} points ({dropped} dropped)")
        self._recompute_trailing()
        self.tracker.set_full_extent()
        return self._frame

    def ingest_point(self, point: SeriesPoint) -> bool:
        """
        Merge one freshly polled point.

        Unanchored points are logged and discarded, leaving state unchanged.

        Returns:
            True if the point was stored
        """
        try:
            replaced = self.store.upsert(point)
        except UnanchoredPointError as e:
            logger.warning(f"Discarding polled point: {e}")
            return False

        logger.debug(f"{'Replaced' if replaced else 'Appended'} point at {point.effective_timestamp}")
        self._recompute_trailing()
        self.tracker.refresh()
        return True

    def reset(self) -> None:
        """Discard all points, e.g. when the position configuration changes."""
        self.store.clear()
        self.tracker.reset()
        self._trailing_7d = StatsSummary(name="7d")
        self._trailing_30d = StatsSummary(name="30d")
        self._frame = ChartFrame(
            window=None,
            plan=None,
            datasets=self._empty_datasets(),
            decimation_target=self._frame.decimation_target,
            trailing_7d=self._trailing_7d,
            trailing_30d=self._trailing_30d,
            visible=StatsSummary(name="visible"),
        )
        self._notify()

    # ========== VIEW ==========

    def set_available_width(self, width: float) -> int:
        """Update the renderer width and re-run the decimation sizer."""
        self._width = width
        self._frame.decimation_target = decimation_target(width, self.settings.samples_per_pixel)
        self._notify()
        return self._frame.decimation_target

    def toggle_channel(self, channel: str) -> bool:
        """
        Flip a channel's visibility.

        Returns:
            The new hidden flag

        Raises:
            ValueError: If the channel is unknown
        """
        if channel not in self._hidden:
            raise ValueError(f"Unknown channel: {channel}")
        self._hidden[channel] = not self._hidden[channel]
        if channel in self._frame.datasets:
            self._frame.datasets[channel].hidden = self._hidden[channel]
        self._notify()
        return self._hidden[channel]

    def table_rows(self) -> List[TableRow]:
        """Rows for the table surface, one per stored point."""
        return to_table_rows(self.store.all())

    # ========== RECOMPUTE CHAIN ==========

    def _on_window_change(self, window: TimeWindow) -> None:
        plan = plan_buckets(window.span_ms)
        points = self.store.between(window.min_ms, window.max_ms)
        samples = self.resampler.resample(points, plan)

        datasets = self._empty_datasets()
        for key, channel_samples in samples.items():
            datasets[key].samples = channel_samples

        visible = self.stats.visible(datasets, window, plan.bucket_hours * MS_PER_HOUR)

        self._frame = ChartFrame(
            window=window,
            plan=plan,
            datasets=datasets,
            decimation_target=decimation_target(self._width, self.settings.samples_per_pixel),
            trailing_7d=self._trailing_7d,
            trailing_30d=self._trailing_30d,
            visible=visible,
        )
        self._notify()

    def _recompute_trailing(self) -> None:
        points = self.store.all()
        now = self._clock()
        self._trailing_7d = self.stats.trailing_7d(points, now)
        self._trailing_30d = self.stats.trailing_30d(points, now)

    def _empty_datasets(self) -> Dict[str, ChartDataset]:
        return {
            key: ChartDataset(
                channel=key,
                label=ch.label,
                color=ch.color,
                hidden=self._hidden[key],
            )
            for key, ch in CHANNELS.items()
        }

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self._frame)
