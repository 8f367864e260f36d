"""Core module - models, channels and constants."""

from .models import (
    SeriesPoint,
    TimeWindow,
    StatsSummary,
    AggregationMode,
    BucketPlan,
    Sample,
    ChartDataset,
    ChartFrame,
    Asset,
    PositionConfig,
    TableRow,
)
from .channels import CHANNELS, SUMMARY_CHANNELS, Channel
from .exceptions import UnanchoredPointError

__all__ = [
    "SeriesPoint",
    "TimeWindow",
    "StatsSummary",
    "AggregationMode",
    "BucketPlan",
    "Sample",
    "ChartDataset",
    "ChartFrame",
    "Asset",
    "PositionConfig",
    "TableRow",
    "CHANNELS",
    "SUMMARY_CHANNELS",
    "Channel",
    "UnanchoredPointError",
]
