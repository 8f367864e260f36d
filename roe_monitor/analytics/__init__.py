"""Resampling and windowed statistics for ROE/HF series."""

from .store import PointStore
from .planner import plan_buckets
from .resampler import Resampler, bucket_key
from .window import ViewWindowTracker
from .stats import WindowedStatsCalculator
from .decimation import decimation_target
from .table import TABLE_COLUMNS, to_table_rows, sort_rows
from .engine import SeriesEngine

__all__ = [
    "PointStore",
    "plan_buckets",
    "Resampler",
    "bucket_key",
    "ViewWindowTracker",
    "WindowedStatsCalculator",
    "decimation_target",
    "TABLE_COLUMNS",
    "to_table_rows",
    "sort_rows",
    "SeriesEngine",
]
