"""Sortable DataTable of series rows."""

from typing import List, Optional

from rich.text import Text
from textual.widgets import DataTable

from roe_monitor.analytics.table import sort_rows
from roe_monitor.core.models import TableRow


class SeriesTable(DataTable):
    """
    One row per stored point; clicking a header sorts by that column.

    Clicking the same header again reverses the order.
    """

    COLUMNS = [
        ("timestamp", "Timestamp", 20),
        ("supply", "Supply APY", 12),
        ("supply_reward", "Supply Reward", 14),
        ("borrow", "Borrow APY", 12),
        ("borrow_reward", "Borrow Reward", 14),
        ("roe", "ROE", 10),
    ]

    def __init__(self, **kwargs):
        super().__init__(
            cursor_type="row",
            zebra_stripes=True,
            **kwargs,
        )
        self._rows: List[TableRow] = []
        self.sort_column: Optional[str] = "timestamp"
        self.sort_descending = True

    def on_mount(self) -> None:
        """Set up columns when widget is mounted."""
        for key, name, width in self.COLUMNS:
            self.add_column(name, width=width, key=key)

    def load_rows(self, rows: List[TableRow]) -> None:
        """Replace table contents, keeping the current sort."""
        self._rows = rows
        self._render_rows()

    def sort_by(self, column: str) -> None:
        """Sort by a column, toggling direction on repeated selection."""
        if column == self.sort_column:
            self.sort_descending = not self.sort_descending
        else:
            self.sort_column = column
            self.sort_descending = False
        self._render_rows()

    def on_data_table_header_selected(self, event: DataTable.HeaderSelected) -> None:
        """Handle header clicks."""
        self.sort_by(str(event.column_key.value))

    def _render_rows(self) -> None:
        rows = self._rows
        if self.sort_column:
            rows = sort_rows(rows, self.sort_column, self.sort_descending)

        self.clear()
        for row in rows:
            self.add_row(
                Text(row.timestamp.strftime("%Y-%m-%d %H:%M:%S"), style="white"),
                self._format_pct(row.supply, "green"),
                self._format_pct(row.supply_reward, "magenta"),
                self._format_pct(row.borrow, "red"),
                self._format_pct(row.borrow_reward, "yellow"),
                self._format_roe(row.roe),
            )

    def _format_pct(self, value: float, color: str) -> Text:
        if value == 0:
            return Text("--", style="dim")
        return Text(f"{value:.2f}%", style=color)

    def _format_roe(self, roe: float) -> Text:
        """ROE colored by sign."""
        style = "bold green" if roe > 0 else "bold red" if roe < 0 else "dim"
        return Text(f"{roe:.2f}%", style=style)
