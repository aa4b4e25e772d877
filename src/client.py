"""Telegram client factory for relink.

The bot runs on a Telethon session logged in with a Bot API token, so no
interactive phone or QR login is ever needed. API_ID/API_HASH identify the
application, BOT_TOKEN identifies the bot.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from telethon import TelegramClient

LOGGER = logging.getLogger(__name__)


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"{name} environment variable is required")
    return value


def build_client() -> TelegramClient:
    """Create the Telethon client from API_ID, API_HASH and SESSION_NAME."""

    load_dotenv()
    api_id = _require_env("API_ID")
    api_hash = _require_env("API_HASH")
    session_name = os.getenv("SESSION_NAME", "relink")
    return TelegramClient(session_name, int(api_id), api_hash)


def start_bot_client() -> TelegramClient:
    """Build the client and sign in as the bot identified by BOT_TOKEN.

    The session file caches the authorization, so later starts reuse it.
    """

    load_dotenv()
    token = _require_env("BOT_TOKEN")
    client = build_client()
    LOGGER.info("Signing in with bot token")
    client.start(bot_token=token)
    return client
