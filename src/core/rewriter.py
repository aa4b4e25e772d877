"""Message URL-rewriting pipeline (core domain).

One message is handled in a single linear pass:
1) Extract URL tokens with their spans
2) Skip links that already point at the shortening service or have no host
3) Shorten each remaining distinct URL, one at a time, in order of first appearance
4) Apply all replacements by span in one reverse-order pass

URLs are never shortened concurrently within a message; the remote service
rate-limits and the substitution order must stay deterministic.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from core.config import ShortenerConfig
from core.extractor import find_url_tokens, is_valid_url
from core.models import RewriteOutcome, UrlToken
from core.ports import ShortenerPort
from core.retry import Sleep, shorten_with_retry

LOGGER = logging.getLogger(__name__)


def apply_replacements(message: str, tokens: List[UrlToken], replacements: Dict[str, str]) -> str:
    """Replace every token whose text has a replacement, working from the end.

    Going right to left keeps the recorded spans of earlier tokens valid.
    """

    result = message
    for token in sorted(tokens, key=lambda item: item.start, reverse=True):
        replacement = replacements.get(token.text)
        if replacement is None:
            continue
        result = result[: token.start] + replacement + result[token.end :]
    return result


class MessageRewriter:
    """Replaces the URLs of a message with shortened links."""

    def __init__(
        self,
        shortener: ShortenerPort,
        config: Optional[ShortenerConfig] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._shortener = shortener
        self._config = config or ShortenerConfig()
        self._sleep = sleep

    def is_already_shortened(self, url: str) -> bool:
        marker = self._config.own_domain
        return bool(marker) and marker in url.lower()

    async def rewrite(self, message: str, credential: str) -> RewriteOutcome:
        """Return ``message`` with every eligible URL replaced."""

        if not isinstance(message, str):
            raise TypeError(f"message must be str, not {type(message).__name__}")

        tokens = find_url_tokens(message)
        if not tokens:
            return RewriteOutcome(original=message, text=message)

        LOGGER.info("Found %s URLs to process", len(tokens))

        replacements: Dict[str, str] = {}
        shortened: List[str] = []
        skipped: List[str] = []
        failed: List[str] = []
        seen: set[str] = set()

        for token in tokens:
            url = token.text
            # A repeated URL is resolved once; its replacement covers every span.
            if url in seen:
                continue
            seen.add(url)
            try:
                if self.is_already_shortened(url):
                    LOGGER.info("Skipping already shortened URL: %s", url)
                    skipped.append(url)
                    continue
                if not is_valid_url(url):
                    LOGGER.warning("Skipping URL without a host: %s", url)
                    failed.append(url)
                    continue

                result = await shorten_with_retry(
                    self._shortener,
                    url,
                    credential,
                    max_retries=self._config.max_retries,
                    delay=self._config.retry_delay,
                    sleep=self._sleep,
                )
            except Exception:
                LOGGER.exception("Error processing URL %s", url)
                failed.append(url)
                continue

            if not result.ok:
                LOGGER.warning("URL shortening failed for: %s", url)
                failed.append(url)
                continue

            shortened.append(url)
            if result.value != url:
                replacements[url] = result.value
                LOGGER.info("Replaced: %s -> %s", url, result.value)

        return RewriteOutcome(
            original=message,
            text=apply_replacements(message, tokens, replacements),
            shortened=tuple(shortened),
            skipped=tuple(skipped),
            failed=tuple(failed),
        )


async def rewrite_message(
    message: str,
    credential: str,
    shortener: ShortenerPort,
    config: Optional[ShortenerConfig] = None,
    sleep: Sleep = asyncio.sleep,
) -> RewriteOutcome:
    """Convenience wrapper around ``MessageRewriter.rewrite``."""

    return await MessageRewriter(shortener, config, sleep).rewrite(message, credential)
