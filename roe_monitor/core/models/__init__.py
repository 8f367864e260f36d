"""Core data models for ROE/HF Monitor."""

from .point import SeriesPoint, parse_timestamp, to_epoch_ms, from_epoch_ms, utc_now_ms
from .window import TimeWindow
from .stats import StatsSummary
from .sample import AggregationMode, BucketPlan, Sample, ChartDataset, ChartFrame
from .asset import Asset
from .position import EDITABLE_FIELDS, PositionConfig
from .table import TableRow

__all__ = [
    "SeriesPoint",
    "parse_timestamp",
    "to_epoch_ms",
    "from_epoch_ms",
    "utc_now_ms",
    "TimeWindow",
    "StatsSummary",
    "AggregationMode",
    "BucketPlan",
    "Sample",
    "ChartDataset",
    "ChartFrame",
    "Asset",
    "PositionConfig",
    "EDITABLE_FIELDS",
    "TableRow",
]
