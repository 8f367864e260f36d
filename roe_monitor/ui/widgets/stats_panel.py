"""Stats panel showing trailing and visible-window means."""

from typing import Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.widgets import Static

from roe_monitor.core.channels import CHANNELS, SUMMARY_CHANNELS
from roe_monitor.core.models import ChartFrame, StatsSummary


class StatsPanel(Static):
    """
    Average supply, borrow and ROE over 7d, 30d and the visible window.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._frame: Optional[ChartFrame] = None

    def on_mount(self) -> None:
        self.update(self._empty_panel())

    def update_frame(self, frame: ChartFrame) -> None:
        self._frame = frame
        self.update(self._build_content())

    def _empty_panel(self) -> Panel:
        return Panel(
            Text("Load a series to view averages", style="dim italic", justify="center"),
            title="[bold orange1]Averages[/]",
            border_style="dim",
        )

    def _build_content(self) -> Panel:
        frame = self._frame
        summaries = [frame.trailing_7d, frame.trailing_30d, frame.visible]

        table = Table(
            show_header=True,
            header_style="bold orange1",
            border_style="dim",
            expand=True,
            padding=(0, 1),
        )
        table.add_column("Channel", style="cyan")
        for summary in summaries:
            table.add_column(self._column_title(summary), justify="right")

        for key in SUMMARY_CHANNELS:
            table.add_row(
                CHANNELS[key].label,
                *[self._format_mean(s, key) for s in summaries],
            )

        return Panel(table, title="[bold orange1]Averages[/]", border_style="dim")

    def _column_title(self, summary: StatsSummary) -> str:
        title = "Visible" if summary.name == "visible" else summary.name
        return f"{title} ({summary.count})"

    def _format_mean(self, summary: StatsSummary, key: str) -> Text:
        if summary.is_empty:
            return Text("0.00%", style="dim")
        value = summary.mean(key)
        style = "green" if value > 0 else "red" if value < 0 else "dim"
        return Text(f"{value:.2f}%", style=style)
