"""Bounded retry around a single shortening call (core domain)."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from core.errors import RemoteError
from core.models import ShortenResult
from core.ports import ShortenerPort

LOGGER = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


async def shorten_with_retry(
    shortener: ShortenerPort,
    url: str,
    credential: str,
    alias: Optional[str] = None,
    max_retries: int = 3,
    delay: float = 1.0,
    sleep: Sleep = asyncio.sleep,
) -> ShortenResult:
    """Shorten ``url``, retrying remote failures with a fixed delay.

    At most ``max_retries + 1`` calls are made. When all of them fail the
    result is a fallback carrying the original URL; remote failures never
    escape. Errors outside ``RemoteError`` are not remote failures and are
    left to the caller.
    """

    attempts = max(max_retries, 0) + 1
    for attempt in range(1, attempts + 1):
        try:
            shortened = await shortener.shorten(url, credential, alias)
        except RemoteError as exc:
            retries_left = attempts - attempt
            if retries_left <= 0:
                LOGGER.error("Failed to shorten URL after %s attempts: %s (%s)", attempts, url, exc)
                break
            LOGGER.info("Retrying URL shortening (%s). Retries left: %s", exc, retries_left - 1)
            await sleep(delay)
            continue
        return ShortenResult.success(url, shortened)

    return ShortenResult.fallback(url)
