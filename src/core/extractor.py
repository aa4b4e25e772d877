"""URL extraction helpers (core domain)."""

from __future__ import annotations

import re
from typing import List
from urllib.parse import urlsplit

from core.models import UrlToken

# Characters that terminate a URL in free text: whitespace and <>"{}|\^`[]
_URL_BODY = r"[^\s<>\"{}|\\^`\[\]]+"

URL_PATTERN = re.compile(
    rf"(https?://{_URL_BODY}|ftp://{_URL_BODY}|www\.{_URL_BODY})",
    re.IGNORECASE,
)

KNOWN_SCHEMES = ("http://", "https://", "ftp://")


def find_url_tokens(text: str) -> List[UrlToken]:
    """Return every URL in ``text`` with its span, in order of appearance.

    Duplicates are kept. Non-string or empty input yields an empty list.
    """

    if not text or not isinstance(text, str):
        return []
    return [
        UrlToken(text=match.group(0), start=match.start(), end=match.end())
        for match in URL_PATTERN.finditer(text)
    ]


def extract_urls(text: str) -> List[str]:
    """Return the URL substrings of ``text`` in order of appearance."""

    return [token.text for token in find_url_tokens(text)]


def has_scheme(url: str) -> bool:
    return url.lower().startswith(KNOWN_SCHEMES)


def normalize_url(url: str) -> str:
    """Prefix ``https://`` when the URL carries no recognized scheme."""

    if has_scheme(url):
        return url
    return f"https://{url}"


def is_valid_url(url: str) -> bool:
    """Check that the (normalized) URL parses with a scheme and a host."""

    try:
        parts = urlsplit(normalize_url(url))
        host = parts.hostname
    except ValueError:
        return False
    return bool(parts.scheme and host)
