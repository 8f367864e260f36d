"""Data access for ROE/HF Monitor."""

from .client import RoeHfClient
from .assets import sort_assets, filter_assets, find_asset, display_asset
from .ranges import compute_range, to_iso
from .session import LiveSession

__all__ = [
    "RoeHfClient",
    "sort_assets",
    "filter_assets",
    "find_asset",
    "display_asset",
    "compute_range",
    "to_iso",
    "LiveSession",
]
