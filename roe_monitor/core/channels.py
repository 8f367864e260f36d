"""Channel selectors shared by resampling, statistics and table projection."""

from dataclasses import dataclass
from typing import Callable, Dict, List

from .models.point import SeriesPoint

SUPPLY = "supply"
BORROW = "borrow"
ROE = "roe"
SUPPLY_REWARD = "supply_reward"
BORROW_REWARD = "borrow_reward"


@dataclass(frozen=True)
class Channel:
    """A numeric channel of the series and how to read it from a point."""

    key: str
    label: str
    color: str
    extract: Callable[[SeriesPoint], float]
    hidden_by_default: bool = False


CHANNELS: Dict[str, Channel] = {
    SUPPLY: Channel(
        key=SUPPLY,
        label="Collateral Supply APY (%)",
        color="blue",
        extract=lambda p: p.collateral_supply_apy_pct,
    ),
    BORROW: Channel(
        key=BORROW,
        label="Debt Borrow APY (%)",
        color="red",
        extract=lambda p: p.borrow_borrow_apy_pct,
    ),
    ROE: Channel(
        key=ROE,
        label="ROE (%)",
        color="green",
        extract=lambda p: p.roe_pct,
    ),
    SUPPLY_REWARD: Channel(
        key=SUPPLY_REWARD,
        label="Supply reward (%)",
        color="magenta",
        extract=lambda p: p.collateral_rewards_apy_pct,
        hidden_by_default=True,
    ),
    BORROW_REWARD: Channel(
        key=BORROW_REWARD,
        label="Borrow reward (%)",
        color="yellow",
        extract=lambda p: p.borrow_rewards_apy_pct,
        hidden_by_default=True,
    ),
}

# Reward channels are chart-only; summaries cover these three.
SUMMARY_CHANNELS: List[str] = [SUPPLY, BORROW, ROE]

