"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import Callable, Optional

import pytest

from config.settings import Settings
from roe_monitor.core.constants import MS_PER_HOUR
from roe_monitor.core.models import PositionConfig, SeriesPoint, from_epoch_ms, to_epoch_ms

# Fixed reference time: 2024-06-01 12:00:00 UTC
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
NOW_MS = to_epoch_ms(NOW)


def make_point(
    ts_ms: Optional[int],
    supply: float = 5.0,
    borrow: float = 3.0,
    roe: float = 10.0,
    supply_reward: float = 1.0,
    borrow_reward: float = 0.5,
    use_borrow_ts: bool = False,
    note: Optional[str] = None,
) -> SeriesPoint:
    """Create a test point anchored at ts_ms (None for unanchored)."""
    ts = from_epoch_ms(ts_ms) if ts_ms is not None else None
    return SeriesPoint(
        network="avalanche",
        collateral_vault="0xcoll",
        borrow_vault="0xborrow",
        leverage=3.0,
        collateral_ts=None if use_borrow_ts else ts,
        borrow_ts=ts if use_borrow_ts else None,
        collateral_supply_apy_pct=supply,
        borrow_borrow_apy_pct=borrow,
        roe_pct=roe,
        collateral_rewards_apy_pct=supply_reward,
        borrow_rewards_apy_pct=borrow_reward,
        note=note,
    )


@pytest.fixture
def now_ms() -> int:
    return NOW_MS


@pytest.fixture
def clock() -> Callable[[], int]:
    """Deterministic clock returning NOW_MS."""
    return lambda: NOW_MS


@pytest.fixture
def point_factory():
    return make_point


@pytest.fixture
def hourly_points() -> list[SeriesPoint]:
    """48 hourly points ending at NOW, roe increasing by 1 per hour."""
    return [
        make_point(NOW_MS - (47 - i) * MS_PER_HOUR, roe=float(i))
        for i in range(48)
    ]


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and .env files."""
    return Settings(
        _env_file=None,
        api_base_url="http://backend.test/api/v1",
        refresh_interval_seconds=60,
        samples_per_pixel=1.0,
        brush_step=0.001,
    )


@pytest.fixture
def position_config() -> PositionConfig:
    return PositionConfig(
        network="avalanche",
        collateral_vault="0xcoll",
        borrow_vault="0xborrow",
        leverage=3.0,
        collateral_rewards_apy_pct=1.87,
        borrow_rewards_apy_pct=0.0,
    )
