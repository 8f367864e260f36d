"""Flattened table row model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class TableRow:
    """One table row per stored point."""

    timestamp: datetime
    supply: float
    supply_reward: float
    borrow: float
    borrow_reward: float
    roe: float
