"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

DEFAULT_API_BASE_URL = "https://linkara.xyz"


@dataclass(frozen=True)
class ShortenerConfig:
    """Shortening service settings for the rewrite pipeline."""

    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 10.0
    max_retries: int = 3
    retry_delay: float = 1.0
    skip_domain: Optional[str] = None

    @property
    def own_domain(self) -> str:
        """Domain marker identifying links that are already shortened."""

        if self.skip_domain:
            return self.skip_domain.lower()
        host = urlsplit(self.api_base_url).hostname or ""
        if host.startswith("www."):
            host = host[4:]
        return host.lower()
