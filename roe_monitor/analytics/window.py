"""View window tracking for zoom, pan and brush selection."""

import logging
import math
from typing import Callable, List, Optional, Tuple

from roe_monitor.analytics.store import PointStore
from roe_monitor.core.models import TimeWindow

logger = logging.getLogger(__name__)

RenderedRangeProvider = Callable[[], Optional[Tuple[float, float]]]
WindowListener = Callable[[TimeWindow], None]


def _is_number(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _clamp_fraction(value: float) -> float:
    if not _is_number(value):
        return 0.0
    return max(0.0, min(1.0, float(value)))


class ViewWindowTracker:
    """
    Maintains the currently visible time interval.

    Every setter replaces the window and notifies listeners, which re-run
    resampling, decimation sizing and visible-window statistics.

    The chart's rendered axis range is read through an injected provider so
    the tracker works without a mounted renderer.
    """

    def __init__(
        self,
        store: PointStore,
        rendered_range_provider: Optional[RenderedRangeProvider] = None,
        brush_step: float = 0.001,
    ):
        self.store = store
        self.rendered_range_provider = rendered_range_provider
        self.brush_step = brush_step
        self._window: Optional[TimeWindow] = None
        self._follow_extent = True
        self._listeners: List[WindowListener] = []

    @property
    def window(self) -> Optional[TimeWindow]:
        """Active window, None until one has been set."""
        return self._window

    @property
    def follows_extent(self) -> bool:
        """True while the window tracks the whole stored series."""
        return self._follow_extent

    def add_listener(self, listener: WindowListener) -> None:
        self._listeners.append(listener)

    def reset(self) -> None:
        """Forget the active window (e.g. on reconfiguration)."""
        self._window = None
        self._follow_extent = True

    def set_full_extent(self) -> TimeWindow:
        """Show the whole stored series."""
        self._follow_extent = True
        return self._apply(self.store.extent())

    def set_from_rendered_scale(
        self,
        min_ms: Optional[float] = None,
        max_ms: Optional[float] = None,
    ) -> TimeWindow:
        """
        Use the renderer's axis range after a zoom or pan.

        Without explicit values the rendered-range provider is queried. A
        missing or non-numeric range falls back to the full extent.
        """
        if min_ms is None and max_ms is None and self.rendered_range_provider:
            rendered = self.rendered_range_provider()
            if rendered is not None:
                min_ms, max_ms = rendered

        if not (_is_number(min_ms) and _is_number(max_ms)) or max_ms <= min_ms:
            logger.debug(f"No valid rendered range ({min_ms}, {max_ms}); using full extent")
            return self.set_full_extent()

        self._follow_extent = False
        return self._apply(TimeWindow(min_ms=int(math.floor(min_ms)), max_ms=int(math.ceil(max_ms))))

    def set_from_brush(
        self,
        fraction_start: float,
        fraction_end: float,
        unit: Optional[float] = None,
    ) -> TimeWindow:
        """
        Select a sub-window as fractions of the full extent.

        Both fractions are clamped to [0, 1]; if start >= end the start is
        pulled to end - unit (the slider step). The resulting window always
        satisfies min_ms < max_ms.
        """
        step = self.brush_step if unit is None else unit
        start = _clamp_fraction(fraction_start)
        end = _clamp_fraction(fraction_end)
        if start >= end:
            start = end - step

        extent = self.store.extent()
        span = extent.span_ms
        min_ms = extent.min_ms + int(math.floor(start * span))
        max_ms = extent.min_ms + int(math.ceil(end * span))
        if max_ms <= min_ms:
            min_ms = max_ms - 1

        self._follow_extent = start <= 0.0 and end >= 1.0
        return self._apply(TimeWindow(min_ms=min_ms, max_ms=max_ms))

    def zoom(self, factor: float) -> TimeWindow:
        """Zoom around the window centre; factor > 1 zooms in."""
        current = self._window or self.store.extent()
        if not _is_number(factor) or factor <= 0:
            raise ValueError(f"Zoom factor must be positive, got {factor}")

        centre = (current.min_ms + current.max_ms) / 2
        half = max(current.span_ms / factor, 2) / 2
        return self.set_from_rendered_scale(centre - half, centre + half)

    def pan(self, fraction: float) -> TimeWindow:
        """Shift the window by a fraction of its span, kept inside the extent."""
        current = self._window or self.store.extent()
        extent = self.store.extent()
        shift = int(current.span_ms * fraction)

        new_min = current.min_ms + shift
        new_max = current.max_ms + shift
        if current.span_ms <= extent.span_ms:
            if new_min < extent.min_ms:
                new_min, new_max = extent.min_ms, extent.min_ms + current.span_ms
            elif new_max > extent.max_ms:
                new_min, new_max = extent.max_ms - current.span_ms, extent.max_ms
        return self.set_from_rendered_scale(new_min, new_max)

    def fractions(self) -> Tuple[float, float]:
        """Current window expressed as brush fractions of the full extent."""
        extent = self.store.extent()
        if self._window is None or extent.span_ms <= 0:
            return 0.0, 1.0
        span = extent.span_ms
        start = _clamp_fraction((self._window.min_ms - extent.min_ms) / span)
        end = _clamp_fraction((self._window.max_ms - extent.min_ms) / span)
        return start, end

    def refresh(self) -> TimeWindow:
        """
        Re-run listeners after the store changed.

        A window following the full extent is re-derived from the store so
        newly ingested points come into view; a zoomed, panned or brushed
        window is kept as is.
        """
        if self._window is None or self._follow_extent:
            return self.set_full_extent()
        return self._apply(self._window)

    def _apply(self, window: TimeWindow) -> TimeWindow:
        self._window = window
        for listener in self._listeners:
            listener(window)
        return window
