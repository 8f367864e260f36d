"""Integration tests for LiveSession against a mocked backend client."""

import asyncio
from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from roe_monitor.analytics.engine import SeriesEngine
from roe_monitor.core.constants import MS_PER_HOUR
from roe_monitor.data.session import LiveSession

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def client(hourly_points):
    client = MagicMock()
    client.get_series = AsyncMock(return_value=list(hourly_points))
    client.get_point = AsyncMock(return_value=None)
    return client


@pytest.fixture
def engine(settings, clock):
    return SeriesEngine(settings=settings, clock=clock)


@pytest.fixture
def session(client, engine, position_config, settings):
    live = LiveSession(client, engine, position_config, settings=settings)
    yield live
    live.stop()


class TestLoad:
    """Bulk series loading."""

    @pytest.mark.asyncio
    async def test_load_populates_engine(self, session, engine, client, now_ms):
        assert await session.load("30d", now=NOW)

        assert len(engine.store) == 48
        assert session.latest.effective_ms == now_ms
        assert session.range_key == "30d"
        assert session.is_polling
        from_iso, to_iso = client.get_series.call_args.args[1:]
        assert from_iso == "2024-05-02T12:00:00.000Z"
        assert to_iso == "2024-06-01T12:00:00.000Z"

    @pytest.mark.asyncio
    async def test_load_failure_keeps_state(self, session, engine, client):
        await session.load(now=NOW)
        frame = engine.frame
        client.get_series.side_effect = aiohttp.ClientError("down")

        assert await session.load("1d", now=NOW) is False
        assert engine.frame is frame
        assert len(engine.store) == 48

    @pytest.mark.asyncio
    async def test_load_timeout_is_handled(self, session, engine, client):
        client.get_series.side_effect = asyncio.TimeoutError()

        assert await session.load(now=NOW) is False
        assert len(engine.store) == 0
        assert not session.is_polling

    @pytest.mark.asyncio
    async def test_incomplete_config_skips_fetch(self, session, client, position_config):
        session.config = replace(position_config, borrow_vault="")

        assert await session.load(now=NOW) is False
        client.get_series.assert_not_called()


class TestPolling:
    """Latest-point polling."""

    @pytest.mark.asyncio
    async def test_fetch_latest_point_merges(self, session, engine, client, point_factory, now_ms):
        await session.load(now=NOW)
        point = point_factory(now_ms - MS_PER_HOUR // 2, roe=99.0)
        client.get_point.return_value = point

        assert await session.fetch_latest_point()
        assert session.latest is point
        assert len(engine.store) == 49

    @pytest.mark.asyncio
    async def test_fetch_failure_is_noop(self, session, engine, client):
        await session.load(now=NOW)
        frame = engine.frame
        client.get_point.side_effect = aiohttp.ClientError("down")

        assert await session.fetch_latest_point() is False
        assert engine.frame is frame

    @pytest.mark.asyncio
    async def test_empty_response_is_noop(self, session, engine):
        await session.load(now=NOW)

        assert await session.fetch_latest_point() is False
        assert len(engine.store) == 48

    @pytest.mark.asyncio
    async def test_unanchored_point_not_stored(self, session, engine, client, point_factory):
        await session.load(now=NOW)
        client.get_point.return_value = point_factory(None)

        assert await session.fetch_latest_point() is False
        assert len(engine.store) == 48

    @pytest.mark.asyncio
    async def test_single_poll_task(self, session):
        first = session.start_auto_refresh()
        second = session.start_auto_refresh()
        assert first is not second
        with pytest.raises(asyncio.CancelledError):
            await first
        assert session.is_polling

    @pytest.mark.asyncio
    async def test_poll_loop_fetches_immediately(self, session, client):
        session.start_auto_refresh()
        await asyncio.sleep(0)

        client.get_point.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop(self, session):
        session.start_auto_refresh()
        session.stop()

        assert not session.is_polling


class TestReconfigure:
    """Switching position configuration."""

    @pytest.mark.asyncio
    async def test_reconfigure_discards_store(self, session, engine, position_config):
        await session.load(now=NOW)

        session.reconfigure(replace(position_config, collateral_vault="0xother"))

        assert not session.is_polling
        assert session.latest is None
        assert len(engine.store) == 0
        assert engine.window is None
        assert session.config.collateral_vault == "0xother"
