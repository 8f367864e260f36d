"""Table projection of stored points."""

from typing import Iterable, List

from roe_monitor.core.channels import CHANNELS
from roe_monitor.core.models import SeriesPoint, TableRow, to_epoch_ms

TABLE_COLUMNS = ["timestamp", "supply", "supply_reward", "borrow", "borrow_reward", "roe"]


def to_table_rows(points: Iterable[SeriesPoint]) -> List[TableRow]:
    """Flatten anchored points into one row each."""
    rows = []
    for point in points:
        ts = point.effective_timestamp
        if ts is None:
            continue
        rows.append(
            TableRow(
                timestamp=ts,
                supply=CHANNELS["supply"].extract(point),
                supply_reward=CHANNELS["supply_reward"].extract(point),
                borrow=CHANNELS["borrow"].extract(point),
                borrow_reward=CHANNELS["borrow_reward"].extract(point),
                roe=CHANNELS["roe"].extract(point),
            )
        )
    return rows


def sort_rows(rows: List[TableRow], column: str, descending: bool = False) -> List[TableRow]:
    """
    Sort rows by a column: numerically for values, by epoch for timestamps.

    Raises:
        ValueError: If the column is unknown
    """
    if column not in TABLE_COLUMNS:
        raise ValueError(f"Unknown column: {column}. Available: {TABLE_COLUMNS}")

    if column == "timestamp":
        key = lambda row: to_epoch_ms(row.timestamp)
    else:
        key = lambda row: float(getattr(row, column) or 0.0)
    return sorted(rows, key=key, reverse=descending)
