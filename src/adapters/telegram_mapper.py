"""Telegram-to-core event mapping adapter.

This keeps Telethon-specific details out of the core pipeline.
"""

from __future__ import annotations

from typing import Any

from core.models import CallbackQuery, IncomingMessage


def build_incoming_message(event: Any) -> IncomingMessage:
    """Build a core IncomingMessage from a Telethon NewMessage event."""

    message = event.message
    return IncomingMessage(
        chat_id=event.chat_id,
        user_id=event.sender_id,
        text=getattr(message, "raw_text", None) or "",
    )


def build_callback_query(event: Any) -> CallbackQuery:
    """Build a core CallbackQuery from a Telethon CallbackQuery event."""

    data = event.data or b""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    return CallbackQuery(
        query_id=str(event.id),
        chat_id=event.chat_id,
        user_id=event.sender_id,
        data=data,
    )
