"""Application entry point for the relink bot."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from telethon import events

import settings
from adapters.shortener_api import ShortenerApiClient
from adapters.sqlite_storage import SQLiteStorage
from adapters.telegram_mapper import build_callback_query, build_incoming_message
from adapters.telegram_messenger import TelegramMessenger
from client import start_bot_client
from core.commands import CommandHandler, parse_command
from core.config import ShortenerConfig
from core.processor import MessageProcessor
from core.rewriter import MessageRewriter

NAME = "RELINK"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/relink.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)
    # httpx logs full request URLs at INFO, and those carry the user's API key.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _shortener_config() -> ShortenerConfig:
    return ShortenerConfig(
        api_base_url=settings.API_BASE_URL,
        request_timeout=settings.REQUEST_TIMEOUT,
        max_retries=settings.MAX_RETRIES,
        retry_delay=settings.RETRY_DELAY,
        skip_domain=settings.SKIP_DOMAIN,
    )


def _open_storage() -> SQLiteStorage:
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    return storage


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting relink")

    storage = _open_storage()
    logger.info("%s users have an API key stored", storage.count_users())

    config = _shortener_config()
    shortener = ShortenerApiClient(
        config.api_base_url,
        timeout_s=config.request_timeout,
        user_agent=settings.USER_AGENT,
    )

    client = start_bot_client()

    messenger = TelegramMessenger(client)
    commands = CommandHandler(storage=storage, shortener=shortener)
    processor = MessageProcessor(
        rewriter=MessageRewriter(shortener, config),
        storage=storage,
        messenger=messenger,
    )

    # Commands and plain messages share one handler so routing stays in one place.
    @client.on(events.NewMessage(incoming=True))
    async def on_message(event) -> None:
        try:
            message = build_incoming_message(event)
            if parse_command(message.text) is not None:
                reply = await commands.handle(message)
                if reply is not None:
                    await messenger.send(message.chat_id, reply)
                return
            await processor.handle(message)
        except Exception:
            logger.exception("Error while processing message")

    @client.on(events.CallbackQuery())
    async def on_callback(event) -> None:
        try:
            query = build_callback_query(event)
            answer = await commands.handle_callback(query)
            if answer.reply is not None:
                await messenger.send(query.chat_id, answer.reply)
            await event.answer(answer.notice)
        except Exception:
            logger.exception("Error handling callback query")

    logger.info("Bot connected. Listening for incoming messages...")
    try:
        client.run_until_disconnected()
    finally:
        logger.info("Shutting down bot...")
        client.loop.run_until_complete(shortener.close())


def _users() -> None:
    storage = _open_storage()
    user_ids = storage.list_user_ids()
    print(f"Users with an API key: {storage.count_users()}")
    for user_id in user_ids:
        print(user_id)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="relink")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")
    subparsers.add_parser("users", help="List users with a stored API key")

    args = parser.parse_args(argv)
    if args.command == "users":
        _users()
        return
    _run()


if __name__ == "__main__":
    main()
