"""UI widgets for ROE/HF Monitor."""

from .series_chart import SeriesChart
from .series_table import SeriesTable
from .stats_panel import StatsPanel
from .asset_picker import AssetPicker

__all__ = ["SeriesChart", "SeriesTable", "StatsPanel", "AssetPicker"]
