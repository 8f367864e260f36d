"""Series point model for ROE/HF history data."""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Sub-second digits beyond microseconds (e.g. nanosecond Instants) are truncated
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string (or datetime) into a timezone-aware datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
        dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_epoch_ms(dt: datetime) -> int:
    """Convert an aware datetime to epoch milliseconds."""
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def utc_now_ms() -> int:
    """Current UTC time in epoch milliseconds."""
    return to_epoch_ms(datetime.now(timezone.utc))


def from_epoch_ms(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=ms)


def _as_float(value: Any) -> float:
    """Channel values default to 0 when absent."""
    if value is None:
        return 0.0
    return float(value)


def _as_optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    return float(value)


@dataclass
class SeriesPoint:
    """One ROE/HF observation for a leveraged position."""

    # Position context (echoed by the backend)
    network: str
    collateral_vault: str
    borrow_vault: str
    leverage: float

    # Snapshot timestamps actually used
    collateral_ts: Optional[datetime] = None
    borrow_ts: Optional[datetime] = None

    # Channels (% APR)
    collateral_supply_apy_pct: float = 0.0
    borrow_borrow_apy_pct: float = 0.0
    roe_pct: float = 0.0
    collateral_rewards_apy_pct: float = 0.0
    borrow_rewards_apy_pct: float = 0.0

    # Informational
    supply_total_pct: Optional[float] = None
    borrow_net_pct: Optional[float] = None
    collateral_util_pct: Optional[float] = None
    borrow_util_pct: Optional[float] = None
    price_collateral_usd: Optional[float] = None
    price_borrow_usd: Optional[float] = None
    liquidation_threshold_pct: Optional[float] = None
    hf: Optional[float] = None

    note: Optional[str] = None

    def __post_init__(self):
        self.collateral_ts = parse_timestamp(self.collateral_ts)
        self.borrow_ts = parse_timestamp(self.borrow_ts)

    @property
    def effective_timestamp(self) -> Optional[datetime]:
        """Collateral timestamp, falling back to the borrow timestamp."""
        return self.collateral_ts or self.borrow_ts

    @property
    def effective_ms(self) -> Optional[int]:
        """Effective timestamp in epoch milliseconds, None if unanchored."""
        ts = self.effective_timestamp
        return to_epoch_ms(ts) if ts is not None else None

    @property
    def is_anchored(self) -> bool:
        return self.effective_timestamp is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeriesPoint":
        """Build a point from the backend's camelCase JSON payload."""
        return cls(
            network=data.get("network") or "",
            collateral_vault=data.get("collateralVault") or "",
            borrow_vault=data.get("borrowVault") or "",
            leverage=_as_float(data.get("leverage")),
            collateral_ts=parse_timestamp(data.get("collateralTs")),
            borrow_ts=parse_timestamp(data.get("borrowTs")),
            collateral_supply_apy_pct=_as_float(data.get("collateralSupplyApyPct")),
            borrow_borrow_apy_pct=_as_float(data.get("borrowBorrowApyPct")),
            roe_pct=_as_float(data.get("roePct")),
            collateral_rewards_apy_pct=_as_float(data.get("collateralRewardsApyPct")),
            borrow_rewards_apy_pct=_as_float(data.get("borrowRewardsApyPct")),
            supply_total_pct=_as_optional_float(data.get("supplyTotalPct")),
            borrow_net_pct=_as_optional_float(data.get("borrowNetPct")),
            collateral_util_pct=_as_optional_float(data.get("collateralUtilPct")),
            borrow_util_pct=_as_optional_float(data.get("borrowUtilPct")),
            price_collateral_usd=_as_optional_float(data.get("priceCollateralUSD")),
            price_borrow_usd=_as_optional_float(data.get("priceBorrowUSD")),
            liquidation_threshold_pct=_as_optional_float(data.get("liquidationThresholdPct")),
            hf=_as_optional_float(data.get("hf")),
            note=data.get("note"),
        )

    def to_dict(self) -> dict:
        """Serialize to the backend's camelCase schema."""
        return {
            "network": self.network,
            "collateralVault": self.collateral_vault,
            "borrowVault": self.borrow_vault,
            "leverage": self.leverage,
            "collateralTs": self.collateral_ts.isoformat() if self.collateral_ts else None,
            "borrowTs": self.borrow_ts.isoformat() if self.borrow_ts else None,
            "collateralSupplyApyPct": self.collateral_supply_apy_pct,
            "borrowBorrowApyPct": self.borrow_borrow_apy_pct,
            "roePct": self.roe_pct,
            "collateralRewardsApyPct": self.collateral_rewards_apy_pct,
            "borrowRewardsApyPct": self.borrow_rewards_apy_pct,
            "supplyTotalPct": self.supply_total_pct,
            "borrowNetPct": self.borrow_net_pct,
            "collateralUtilPct": self.collateral_util_pct,
            "borrowUtilPct": self.borrow_util_pct,
            "priceCollateralUSD": self.price_collateral_usd,
            "priceBorrowUSD": self.price_borrow_usd,
            "liquidationThresholdPct": self.liquidation_threshold_pct,
            "hf": self.hf,
            "note": self.note,
        }
