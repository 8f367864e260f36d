"""Position configuration used to request ROE/HF data."""

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

# Fields the user may edit from the terminal
EDITABLE_FIELDS = ("leverage", "collateral_rewards_apy_pct", "borrow_rewards_apy_pct")


@dataclass(frozen=True)
class PositionConfig:
    """Identifies a leveraged position: one Point Store exists per config."""

    network: str
    collateral_vault: str
    borrow_vault: str
    leverage: float
    collateral_rewards_apy_pct: float = 0.0
    borrow_rewards_apy_pct: float = 0.0
    liquidation_threshold_pct: Optional[float] = None
    price_collateral_usd: Optional[float] = None
    price_borrow_usd: Optional[float] = None

    @property
    def is_complete(self) -> bool:
        """Both vaults must be chosen before any request is made."""
        return bool(self.collateral_vault and self.borrow_vault)

    def with_value(self, field_name: str, raw: Any) -> "PositionConfig":
        """
        Copy with one editable field replaced by a user-entered value.

        Raises:
            ValueError: If the field is not editable, the value is not a
                finite number, or leverage is below 1
        """
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Field {field_name} is not editable")
        try:
            value = float(str(raw).strip())
        except ValueError:
            raise ValueError(f"{field_name} must be a number, got {raw!r}") from None
        if not math.isfinite(value):
            raise ValueError(f"{field_name} must be finite, got {raw!r}")
        if field_name == "leverage" and value < 1.0:
            raise ValueError(f"Leverage must be >= 1.0, got {value}")
        return replace(self, **{field_name: value})

    def point_request(self) -> Dict[str, Any]:
        """Body for the single-point endpoint."""
        body: Dict[str, Any] = {
            "network": self.network,
            "collateralVault": self.collateral_vault,
            "borrowVault": self.borrow_vault,
            "leverage": self.leverage,
            "collateralRewardsApyPct": self.collateral_rewards_apy_pct,
            "borrowRewardsApyPct": self.borrow_rewards_apy_pct,
        }
        if self.liquidation_threshold_pct is not None:
            body["liquidationThresholdPct"] = self.liquidation_threshold_pct
        if self.price_collateral_usd is not None:
            body["priceCollateralUSD"] = self.price_collateral_usd
        if self.price_borrow_usd is not None:
            body["priceBorrowUSD"] = self.price_borrow_usd
        return body

    def series_request(
        self,
        from_iso: str,
        to_iso: str,
        tick_tolerance_seconds: int = 60,
    ) -> Dict[str, Any]:
        """Body for the bulk series endpoint."""
        body = self.point_request()
        body.update(
            {
                "from": from_iso,
                "to": to_iso,
                "tickToleranceSeconds": tick_tolerance_seconds,
            }
        )
        return body
