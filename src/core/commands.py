"""Bot command handling (core domain).

Commands and balance buttons are answered with ``Reply`` values; delivering
them is left to the transport adapter.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from core import texts
from core.balance import format_overview, format_view, overview_buttons, parse_callback_data
from core.errors import RemoteError
from core.models import BalanceReport, CallbackAnswer, CallbackQuery, IncomingMessage, Reply
from core.ports import CredentialStorePort, ShortenerPort

LOGGER = logging.getLogger(__name__)


def parse_command(text: str) -> Optional[Tuple[str, str]]:
    """Split ``/name[@bot] args`` into (name, args); None for non-commands."""

    if not text or not text.startswith("/"):
        return None
    head, _, args = text[1:].partition(" ")
    name = head.split("@", 1)[0].lower()
    if not name:
        return None
    return name, args.strip()


class CommandHandler:
    """Answers /start, /help, /api, /remove, /balance, /stats and balance buttons."""

    def __init__(self, storage: CredentialStorePort, shortener: ShortenerPort) -> None:
        self._storage = storage
        self._shortener = shortener

    async def handle(self, message: IncomingMessage) -> Optional[Reply]:
        """Return the reply for a command message, or None if it is not one we know."""

        parsed = parse_command(message.text)
        if parsed is None:
            return None
        name, args = parsed
        LOGGER.info("Command /%s received from user %s", name, message.user_id)

        if name == "start":
            return Reply(texts.WELCOME)
        if name == "help":
            return Reply(texts.HELP)
        if name == "api":
            return self._set_api_key(message.user_id, args)
        if name == "remove":
            return self._remove_api_key(message.user_id)
        if name == "stats":
            return self._stats(message.user_id)
        if name == "balance":
            return await self._balance(message.user_id)
        return None

    def _set_api_key(self, user_id: int, api_key: str) -> Reply:
        if not api_key:
            return Reply(texts.API_KEY_USAGE)
        try:
            self._storage.set_credential(user_id, api_key)
        except Exception:
            LOGGER.exception("Error storing API key for user %s", user_id)
            return Reply(texts.API_KEY_SAVE_FAILED)
        LOGGER.info("API key stored for user %s. Total users: %s", user_id, self._storage.count_users())
        return Reply(texts.API_KEY_SAVED)

    def _remove_api_key(self, user_id: int) -> Reply:
        if self._storage.remove_credential(user_id):
            return Reply(texts.API_KEY_REMOVED)
        return Reply(texts.API_KEY_NOT_SET)

    def _stats(self, user_id: int) -> Reply:
        stats = self._storage.get_stats(user_id)
        if stats is None or stats.total_urls_shortened == 0:
            return Reply(texts.STATS_EMPTY)
        lines = [
            "📊 Your Usage",
            "",
            f"🔗 URLs shortened: {stats.total_urls_shortened}",
        ]
        if stats.first_use:
            lines.append(f"📅 First use: {stats.first_use:%Y-%m-%d %H:%M}")
        if stats.last_use:
            lines.append(f"🕒 Last use: {stats.last_use:%Y-%m-%d %H:%M}")
        return Reply("\n".join(lines))

    async def _fetch_balance(self, user_id: int) -> Optional[BalanceReport]:
        credential = self._storage.get_credential(user_id)
        if not credential:
            return None
        return await self._shortener.fetch_balance(credential)

    async def _balance(self, user_id: int) -> Reply:
        if not self._storage.has_credential(user_id):
            return Reply(texts.MISSING_API_KEY)
        try:
            report = await self._fetch_balance(user_id)
        except RemoteError as exc:
            LOGGER.warning("Balance request failed for user %s: %s", user_id, exc)
            return Reply(texts.BALANCE_UNAVAILABLE)
        except Exception:
            LOGGER.exception("Error fetching balance for user %s", user_id)
            return Reply(texts.BALANCE_FAILED)
        if report is None:
            return Reply(texts.MISSING_API_KEY)
        return Reply(format_overview(report), overview_buttons(report, user_id))

    async def handle_callback(self, query: CallbackQuery) -> CallbackAnswer:
        """Answer a balance button press with the matching detail view."""

        LOGGER.info("Callback query received: %s from user %s", query.data, query.user_id)
        parsed = parse_callback_data(query.data)
        if parsed is None:
            return CallbackAnswer(notice=texts.CALLBACK_UNKNOWN)
        view, _ = parsed

        if not self._storage.has_credential(query.user_id):
            return CallbackAnswer(notice=texts.CALLBACK_MISSING_API_KEY)
        try:
            report = await self._fetch_balance(query.user_id)
        except RemoteError as exc:
            LOGGER.warning("Balance request failed for user %s: %s", query.user_id, exc)
            return CallbackAnswer(notice=texts.CALLBACK_BALANCE_FAILED)
        except Exception:
            LOGGER.exception("Error handling callback query for user %s", query.user_id)
            return CallbackAnswer(notice=texts.CALLBACK_FAILED)
        if report is None:
            return CallbackAnswer(notice=texts.CALLBACK_MISSING_API_KEY)
        return CallbackAnswer(reply=Reply(format_view(view, report)))
