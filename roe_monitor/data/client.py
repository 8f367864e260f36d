"""Async HTTP client for the ROE/HF backend."""

import logging
from typing import Any, List, Optional

import aiohttp
from aiolimiter import AsyncLimiter

from config.settings import Settings, get_settings
from roe_monitor.core.models import Asset, PositionConfig, SeriesPoint

logger = logging.getLogger(__name__)


class RoeHfClient:
    """Client for the asset catalogue, single-point and series endpoints."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.settings = settings or get_settings()
        self._session = session
        self._rate_limiter = AsyncLimiter(
            self.settings.api_rate_limit, self.settings.api_rate_window
        )

    @property
    def base_url(self) -> str:
        return self.settings.api_base_url

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout_seconds)
            )
        return self._session

    async def close(self) -> None:
        """Close the session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """Perform a rate-limited request and decode the JSON body."""
        url = f"{self.base_url}{path}"
        session = await self._get_session()
        async with self._rate_limiter:
            async with session.request(method, url, **kwargs) as response:
                response.raise_for_status()
                return await response.json()

    async def get_assets(self, network: Optional[str] = None) -> List[Asset]:
        """Fetch the vault catalogue for a network."""
        network = network or self.settings.network
        try:
            data = await self._request("GET", "/assets", params={"network": network})
        except aiohttp.ClientError as e:
            logger.error(f"Failed to fetch assets for {network}: {e}")
            raise
        return [Asset.from_dict(item) for item in data or []]

    async def get_series(
        self,
        config: PositionConfig,
        from_iso: str,
        to_iso: str,
        tick_tolerance_seconds: Optional[int] = None,
    ) -> List[SeriesPoint]:
        """
        Fetch the ROE/HF series for a position.

        Args:
            config: Position configuration
            from_iso: Range start (ISO-8601)
            to_iso: Range end (ISO-8601)
            tick_tolerance_seconds: Snapshot matching tolerance

        Returns:
            Points as returned by the backend (order not guaranteed)
        """
        tolerance = tick_tolerance_seconds or self.settings.tick_tolerance_seconds
        body = config.series_request(from_iso, to_iso, tolerance)
        try:
            data = await self._request("POST", "/roe-hf/series-eulerscan", json=body)
        except aiohttp.ClientError as e:
            logger.error(f"Failed to fetch series {from_iso} → {to_iso}: {e}")
            raise
        points = []
        for item in data or []:
            try:
                points.append(SeriesPoint.from_dict(item))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping unparseable series point: {e}")
        return points

    async def get_point(self, config: PositionConfig) -> Optional[SeriesPoint]:
        """Fetch the latest ROE/HF point for a position."""
        try:
            data = await self._request("POST", "/roe-hf", json=config.point_request())
        except aiohttp.ClientError as e:
            logger.error(f"Failed to fetch latest point: {e}")
            raise
        if not data:
            return None
        return SeriesPoint.from_dict(data)
