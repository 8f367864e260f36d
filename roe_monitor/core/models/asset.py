"""Asset (vault) model returned by the backend catalogue."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Asset:
    """A lending vault and its underlying token."""

    vault_address: str
    vault_symbol: str = ""
    vault_name: str = ""
    underlying_address: str = ""
    underlying_symbol: str = ""
    underlying_name: str = ""
    underlying_decimals: int = 18

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            vault_address=data.get("vaultAddress") or "",
            vault_symbol=data.get("vaultSymbol") or "",
            vault_name=data.get("vaultName") or "",
            underlying_address=data.get("underlyingAddress") or "",
            underlying_symbol=data.get("underlyingSymbol") or "",
            underlying_name=data.get("underlyingName") or "",
            underlying_decimals=int(data.get("underlyingDecimals") or 18),
        )
