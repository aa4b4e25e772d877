"""Telegram delivery adapter.

Implements the core MessengerPort on top of a Telethon client.
"""

from __future__ import annotations

from typing import Optional

from telethon import Button

from core.models import Reply


def build_buttons(reply: Reply) -> Optional[list]:
    """Map core button rows to Telethon inline buttons."""

    if not reply.buttons:
        return None
    return [
        [Button.inline(label, data=data.encode("utf-8")) for label, data in row]
        for row in reply.buttons
    ]


class TelegramMessenger:
    """Messenger adapter that replies through the bot's Telethon client."""

    def __init__(self, client) -> None:
        self._client = client

    async def send(self, chat_id: int, reply: Reply) -> None:
        """Send plain text; Markdown parsing is off so URLs arrive untouched."""

        await self._client.send_message(
            chat_id,
            reply.text,
            buttons=build_buttons(reply),
            parse_mode=None,
            link_preview=False,
        )
