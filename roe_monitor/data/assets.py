"""Asset catalogue helpers for the vault pickers."""

from typing import List, Optional, Union

from roe_monitor.core.models import Asset


def sort_assets(assets: Optional[List[Asset]]) -> List[Asset]:
    """Sort assets by vault symbol, case-insensitive."""
    return sorted(assets or [], key=lambda a: (a.vault_symbol or "").lower())


def filter_assets(assets: List[Asset], query: Optional[str]) -> List[Asset]:
    """Autocomplete filter over address, symbol and name."""
    q = (query or "").lower().strip()
    if not q:
        return list(assets)
    return [
        a for a in assets
        if q in a.vault_address.lower()
        or q in (a.vault_symbol or "").lower()
        or q in (a.vault_name or "").lower()
    ]


def find_asset(address: str, assets: List[Asset]) -> Optional[Asset]:
    """Look up an asset by vault address (case-insensitive)."""
    addr = address.lower()
    return next((a for a in assets if a.vault_address.lower() == addr), None)


def display_asset(value: Union[str, Asset, None], assets: List[Asset]) -> str:
    """Picker label: "SYMBOL - 0x12345678" when known, else the raw address."""
    if not value:
        return ""
    addr = value if isinstance(value, str) else value.vault_address
    if not addr:
        return ""
    asset = find_asset(addr, assets)
    if asset is None:
        return addr
    return f"{asset.vault_symbol} - {addr[:10]}"
