"""Live session: bulk load plus periodic latest-point polling."""

import asyncio
import logging
from datetime import datetime
from typing import Optional

import aiohttp

from config.settings import Settings, get_settings
from roe_monitor.analytics.engine import SeriesEngine
from roe_monitor.core.constants import DEFAULT_RANGE_KEY
from roe_monitor.core.models import PositionConfig, SeriesPoint
from roe_monitor.data.client import RoeHfClient
from roe_monitor.data.ranges import compute_range

logger = logging.getLogger(__name__)

# Errors that mean "no data received this cycle"
FETCH_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class LiveSession:
    """
    Feeds one position configuration's series into the engine.

    A single poll task runs per session; starting auto-refresh again cancels
    the previous task before installing the new one. Failed fetches leave
    the engine untouched.
    """

    def __init__(
        self,
        client: RoeHfClient,
        engine: SeriesEngine,
        config: PositionConfig,
        settings: Optional[Settings] = None,
    ):
        self.client = client
        self.engine = engine
        self.config = config
        self.settings = settings or get_settings()
        self.range_key = DEFAULT_RANGE_KEY
        self.latest: Optional[SeriesPoint] = None
        self._poll_task: Optional[asyncio.Task] = None

    @property
    def is_polling(self) -> bool:
        return self._poll_task is not None and not self._poll_task.done()

    async def load(self, range_key: Optional[str] = None, now: Optional[datetime] = None) -> bool:
        """
        Fetch the series for a range preset and start auto-refresh.

        Returns:
            True if a series was received and loaded
        """
        if not self.config.is_complete:
            logger.warning("Collateral and borrow vaults must both be selected")
            return False

        self.range_key = range_key or self.range_key
        from_iso, to_iso = compute_range(self.range_key, now)

        try:
            series = await self.client.get_series(self.config, from_iso, to_iso)
        except FETCH_ERRORS as e:
            logger.warning(f"Series fetch failed, keeping current data: {e}")
            return False

        self.engine.load_series(series)
        self.latest = self.engine.store.latest()
        self.start_auto_refresh()
        return True

    async def fetch_latest_point(self) -> bool:
        """
        Fetch the latest point and merge it into the engine.

        Returns:
            True if a point was merged
        """
        if not self.config.is_complete:
            return False

        try:
            point = await self.client.get_point(self.config)
        except FETCH_ERRORS as e:
            logger.warning(f"Latest point fetch failed: {e}")
            return False

        if point is None:
            return False

        self.latest = point
        return self.engine.ingest_point(point)

    def start_auto_refresh(self) -> asyncio.Task:
        """Replace any running poll loop with a fresh one."""
        self.stop()
        self._poll_task = asyncio.create_task(self._poll_loop())
        return self._poll_task

    async def _poll_loop(self) -> None:
        interval = self.settings.refresh_interval_seconds
        while True:
            await self.fetch_latest_point()
            await asyncio.sleep(interval)

    def stop(self) -> None:
        """Cancel the poll loop if one is running."""
        if self._poll_task is not None:
            self._poll_task.cancel()
            self._poll_task = None

    def reconfigure(self, config: PositionConfig) -> None:
        """Switch to another position: polling stops and the store is discarded."""
        self.stop()
        self.config = config
        self.latest = None
        self.engine.reset()
