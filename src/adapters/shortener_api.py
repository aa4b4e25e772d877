"""HTTP adapter for the shortening service.

Implements the core ShortenerPort. Each call issues exactly one request;
retries belong to the core retry wrapper.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from core.config import DEFAULT_API_BASE_URL
from core.errors import ApplicationError, MalformedResponse, RemoteTimeout, TransportError
from core.extractor import normalize_url
from core.models import BalanceReport, Balances, PeriodStats

LOGGER = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Telegram-URL-Shortener-Bot/1.0"


def _period(payload: dict[str, Any], key: str) -> PeriodStats:
    section = payload[key]
    return PeriodStats(views=int(section["views"]), earnings=float(section["earnings"]))


def parse_balance(payload: dict[str, Any]) -> BalanceReport:
    """Build a BalanceReport from the balance endpoint payload."""

    try:
        balances = payload["balances"]
        return BalanceReport(
            username=str(payload["username"]),
            currency=str(payload["currency"]),
            today=_period(payload, "today"),
            this_month=_period(payload, "this_month"),
            balances=Balances(
                publisher_earnings=float(balances["publisher_earnings"]),
                referral_earnings=float(balances["referral_earnings"]),
                advertiser_balance=float(balances["advertiser_balance"]),
                wallet_money=float(balances["wallet_money"]),
            ),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedResponse(f"Unexpected balance payload: {exc!r}") from exc


class ShortenerApiClient:
    """Async client for the ``/api`` and ``/api/user/balance`` endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        *,
        timeout_s: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base = base_url.rstrip("/")
        self._timeout_s = timeout_s
        self._headers = {"User-Agent": user_agent}
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout_s)
        self._owns_http_client = http_client is None

    async def close(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def _get_json(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        url = f"{self._base}{path}"
        try:
            resp = await self._http_client.get(
                url,
                params=params,
                headers=self._headers,
                timeout=self._timeout_s,
            )
        except httpx.TimeoutException as exc:
            raise RemoteTimeout(f"Request to {path} timed out after {self._timeout_s}s") from exc
        except httpx.HTTPError as exc:
            raise TransportError("Network error: Unable to reach URL shortening service") from exc

        if not resp.is_success:
            LOGGER.error("Shortener API %s returned HTTP %s: %s", path, resp.status_code, resp.text[:200])
            raise TransportError(
                f"API Error: {resp.status_code} - {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response from {path} is not JSON") from exc
        if not isinstance(payload, dict):
            raise MalformedResponse(f"Response from {path} is not a JSON object")
        return payload

    async def shorten(self, url: str, credential: str, alias: Optional[str] = None) -> str:
        """Return the shortened form of ``url`` or raise a RemoteError."""

        target = normalize_url(url)
        params = {"api": credential, "url": target}
        if alias:
            params["alias"] = alias

        LOGGER.info("Shortening URL: %s", target)
        payload = await self._get_json("/api", params)

        if payload.get("status") != "success":
            LOGGER.error("API returned unsuccessful status for %s: %s", target, payload.get("status"))
            raise ApplicationError(payload.get("message"))
        shortened = payload.get("shortenedUrl")
        if not isinstance(shortened, str) or not shortened:
            raise MalformedResponse("Response is missing shortenedUrl")

        LOGGER.info("Successfully shortened: %s -> %s", target, shortened)
        return shortened

    async def fetch_balance(self, credential: str) -> BalanceReport:
        """Return the account overview for ``credential``."""

        payload = await self._get_json("/api/user/balance", {"api": credential})
        if payload.get("status") == "error":
            raise ApplicationError(payload.get("message"))
        return parse_balance(payload)
