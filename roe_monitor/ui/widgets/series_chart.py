"""ASCII line chart for resampled ROE/HF channels."""

from typing import List, Optional, Tuple

import asciichartpy as acp
from rich.text import Text
from textual.widgets import Static

from roe_monitor.core.models import ChartFrame

# asciichartpy colors keyed by channel color name
CHART_COLORS = {
    "blue": acp.blue,
    "red": acp.red,
    "green": acp.green,
    "magenta": acp.magenta,
    "yellow": acp.yellow,
}

# Columns used by the y-axis labels
AXIS_LABEL_WIDTH = 12


def reduce_points(values: List[float], target: int) -> List[float]:
    """Pick evenly spaced values so at most `target` points are drawn."""
    if target <= 0 or len(values) <= target:
        return values
    step = len(values) / target
    return [values[int(i * step)] for i in range(target)]


class SeriesChart(Static):
    """
    Multi-line chart of the visible channels.

    Draws at most min(decimation target, available columns) points per line.
    """

    def __init__(self, height: int = 14, **kwargs):
        super().__init__(**kwargs)
        self._chart_height = height
        self._frame: Optional[ChartFrame] = None

    @property
    def plot_columns(self) -> int:
        """Columns available for data points."""
        return max(self.size.width - AXIS_LABEL_WIDTH, 0)

    def rendered_range(self) -> Optional[Tuple[float, float]]:
        """Time range of the last drawn frame, None before the first draw."""
        if self._frame is None or self._frame.window is None:
            return None
        return self._frame.window.min_ms, self._frame.window.max_ms

    def update_frame(self, frame: ChartFrame) -> None:
        """Re-render from a new engine frame."""
        self._frame = frame
        self.update(self._build_chart())

    def on_resize(self) -> None:
        if self._frame is not None:
            self.update(self._build_chart())

    def _build_chart(self) -> Text:
        frame = self._frame
        visible = [ds for ds in frame.datasets.values() if not ds.hidden and ds.samples]
        if not visible:
            return Text("No data available", style="dim")

        target = frame.decimation_target
        if self.plot_columns:
            target = min(target, self.plot_columns)

        series = [reduce_points(ds.values, target) for ds in visible]
        config = {
            "height": self._chart_height,
            "colors": [CHART_COLORS.get(ds.color, acp.default) for ds in visible],
            "format": "{:8.2f}",
        }
        chart_str = acp.plot(series, config)

        output = Text()
        title = "APR (%)"
        if frame.window is not None:
            title = f"{title} - {frame.window.describe()}"
        if frame.plan is not None:
            title = f"{title} | {frame.plan.bucket_hours}h {frame.plan.mode.value}"
        output.append(f"  {title}\n", style="bold #ff8c00")
        output.append_text(Text.from_ansi(chart_str))
        output.append("\n  ")
        for ds in frame.datasets.values():
            style = "dim strike" if ds.hidden else f"bold {ds.color}"
            output.append(f"■ {ds.label}  ", style=style)
        return output
