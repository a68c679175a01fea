"""
Keep-alive job

Pings a URL on a fixed interval so free-tier hosts do not put the server to
sleep. Started from the app lifespan when KEEPALIVE_URL is set.
"""
import os
import asyncio
import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

KEEPALIVE_URL = os.getenv("KEEPALIVE_URL")
KEEPALIVE_INTERVAL_SECONDS = int(os.getenv("KEEPALIVE_INTERVAL_SECONDS", 14 * 60))


def ping(url: str) -> Optional[int]:
    try:
        resp = requests.get(url, timeout=10)
    except requests.RequestException as e:
        logger.warning("Keep-alive ping to %s failed: %s", url, e)
        return None
    logger.info("Keep-alive ping to %s returned %s", url, resp.status_code)
    return resp.status_code


async def run_keepalive(url: str, interval: float):
    while True:
        await asyncio.sleep(interval)
        await asyncio.to_thread(ping, url)


def start(url: Optional[str] = KEEPALIVE_URL, interval: float = KEEPALIVE_INTERVAL_SECONDS) -> Optional[asyncio.Task]:
    if not url:
        return None
    logger.info("Starting keep-alive job for %s every %ss", url, interval)
    return asyncio.create_task(run_keepalive(url, interval))


async def stop(task: Optional[asyncio.Task]):
    if task is None:
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
