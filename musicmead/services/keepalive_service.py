import asyncio
from typing import Optional
import logging

import aiohttp

from musicmead.core import config

logger = logging.getLogger(__name__)


async def ping_health(url: str) -> int:
    """GET the health URL once and return the status code"""
    timeout = aiohttp.ClientTimeout(total=30)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        async with session.get(url) as response:
            logger.info(f"[healthz] Ping success: {response.status}")
            return response.status


async def keepalive_loop(url: str, interval_seconds: int) -> None:
    """Ping url forever so the host does not idle the process out"""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await ping_health(url)
        except Exception as e:
            logger.error(f"[healthz] Ping failed: {str(e)}")


def start_keepalive() -> Optional[asyncio.Task]:
    if not config.HEALTH_PING_URL:
        logger.info("HEALTH_PING_URL not set - keep-alive pinger disabled")
        return None

    logger.info(f"Pinging {config.HEALTH_PING_URL} every {config.HEALTH_PING_INTERVAL_SECONDS}s")
    return asyncio.create_task(
        keepalive_loop(config.HEALTH_PING_URL, config.HEALTH_PING_INTERVAL_SECONDS)
    )
