import pytest
import asyncio
import aiohttp
from unittest.mock import AsyncMock, patch
from musicmead.core import config
from musicmead.services import keepalive_service


class TestKeepalive:

    def test_disabled_without_url(self, monkeypatch):
        monkeypatch.setattr(config, "HEALTH_PING_URL", "")

        assert keepalive_service.start_keepalive() is None

    @pytest.mark.asyncio
    async def test_start_creates_task(self, monkeypatch):
        monkeypatch.setattr(config, "HEALTH_PING_URL", "http://localhost:3000/healthz")
        monkeypatch.setattr(config, "HEALTH_PING_INTERVAL_SECONDS", 3600)

        task = keepalive_service.start_keepalive()
        assert task is not None
        assert not task.done()

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_loop_survives_ping_failures(self):
        ping = AsyncMock(side_effect=[aiohttp.ClientError("down"), 200, asyncio.CancelledError()])

        with patch.object(keepalive_service, "ping_health", ping):
            with pytest.raises(asyncio.CancelledError):
                await keepalive_service.keepalive_loop("http://example.invalid/healthz", 0)

        assert ping.call_count == 3
        ping.assert_called_with("http://example.invalid/healthz")

    @pytest.mark.asyncio
    async def test_loop_survives_unexpected_errors(self):
        ping = AsyncMock(side_effect=[RuntimeError("boom"), ValueError("bad url"), asyncio.CancelledError()])

        with patch.object(keepalive_service, "ping_health", ping):
            with pytest.raises(asyncio.CancelledError):
                await keepalive_service.keepalive_loop("http://example.invalid/healthz", 0)

        assert ping.call_count == 3
