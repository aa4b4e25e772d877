"""Core message processing pipeline.

This module is integration-agnostic. It only relies on ports for storage,
shortening, and delivery, enabling other transports without changes here.
"""

from __future__ import annotations

import logging

from core import texts
from core.extractor import find_url_tokens
from core.models import IncomingMessage, Reply
from core.ports import CredentialStorePort, MessengerPort
from core.rewriter import MessageRewriter

LOGGER = logging.getLogger(__name__)


class MessageProcessor:
    """Orchestrates credential lookup, URL rewriting, replies, and stats."""

    def __init__(
        self,
        rewriter: MessageRewriter,
        storage: CredentialStorePort,
        messenger: MessengerPort,
    ) -> None:
        self._rewriter = rewriter
        self._storage = storage
        self._messenger = messenger

    async def handle(self, message: IncomingMessage) -> None:
        """Process one plain (non-command) chat message."""

        text = message.text or ""
        # Commands are routed to the command handler by the transport.
        if not text.strip() or text.startswith("/"):
            return

        credential = self._storage.get_credential(message.user_id)
        LOGGER.info("Checking API key for user %s. Has key: %s", message.user_id, bool(credential))
        if not credential:
            await self._messenger.send(message.chat_id, Reply(texts.MISSING_API_KEY))
            return

        # Messages without links are ignored silently.
        if not find_url_tokens(text):
            return

        try:
            outcome = await self._rewriter.rewrite(text, credential)
        except Exception:
            LOGGER.exception("Error processing message from user %s", message.user_id)
            await self._messenger.send(message.chat_id, Reply(texts.PROCESSING_FAILED))
            return

        if not outcome.changed:
            await self._messenger.send(message.chat_id, Reply(texts.NOTHING_SHORTENED))
            return

        await self._messenger.send(message.chat_id, Reply(outcome.text))
        self._storage.update_stats(message.user_id, len(outcome.shortened))
        LOGGER.info(
            "Shortened %s URLs for user %s (skipped=%s, failed=%s)",
            len(outcome.shortened),
            message.user_id,
            len(outcome.skipped),
            len(outcome.failed),
        )
