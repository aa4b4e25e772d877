from __future__ import annotations

import asyncio
from typing import Optional

from core import texts
from core.config import ShortenerConfig
from core.errors import ApplicationError
from core.models import IncomingMessage, Reply
from core.processor import MessageProcessor
from core.rewriter import MessageRewriter


class FakeStorage:
    def __init__(self, keys: Optional[dict[int, str]] = None) -> None:
        self.keys = dict(keys or {})
        self.stats: dict[int, int] = {}

    def get_credential(self, user_id: int) -> Optional[str]:
        return self.keys.get(user_id)

    def update_stats(self, user_id: int, url_count: int = 1) -> None:
        self.stats[user_id] = self.stats.get(user_id, 0) + url_count


class FakeShortener:
    def __init__(self, responses: dict[str, str]) -> None:
        self._responses = responses
        self.calls: list[tuple[str, str]] = []

    async def shorten(self, url: str, credential: str, alias: Optional[str] = None) -> str:
        self.calls.append((url, credential))
        if url not in self._responses:
            raise ApplicationError("Invalid URL")
        return self._responses[url]


class BrokenRewriter:
    async def rewrite(self, message: str, credential: str):
        raise RuntimeError("database exploded")


class FakeMessenger:
    def __init__(self) -> None:
        self.sent: list[tuple[int, Reply]] = []

    async def send(self, chat_id: int, reply: Reply) -> None:
        self.sent.append((chat_id, reply))


async def _no_sleep(delay: float) -> None:
    return None


def _processor(storage: FakeStorage, shortener: FakeShortener, messenger: FakeMessenger) -> MessageProcessor:
    rewriter = MessageRewriter(shortener, ShortenerConfig(max_retries=1), sleep=_no_sleep)
    return MessageProcessor(rewriter=rewriter, storage=storage, messenger=messenger)


def test_rewritten_message_is_sent_and_stats_updated() -> None:
    storage = FakeStorage({7: "secret"})
    shortener = FakeShortener({"http://a.com": "https://linkara.xyz/1", "www.b.com": "https://linkara.xyz/2"})
    messenger = FakeMessenger()

    message = IncomingMessage(chat_id=100, user_id=7, text="a http://a.com b www.b.com")
    asyncio.run(_processor(storage, shortener, messenger).handle(message))

    assert messenger.sent == [(100, Reply("a https://linkara.xyz/1 b https://linkara.xyz/2"))]
    assert [credential for _, credential in shortener.calls] == ["secret", "secret"]
    assert storage.stats == {7: 2}


def test_missing_api_key_prompts_user() -> None:
    storage = FakeStorage()
    shortener = FakeShortener({})
    messenger = FakeMessenger()

    asyncio.run(
        _processor(storage, shortener, messenger).handle(IncomingMessage(chat_id=1, user_id=2, text="http://a.com"))
    )

    assert messenger.sent == [(1, Reply(texts.MISSING_API_KEY))]
    assert shortener.calls == []


def test_commands_and_empty_text_are_ignored() -> None:
    storage = FakeStorage({2: "k"})
    shortener = FakeShortener({})
    messenger = FakeMessenger()
    processor = _processor(storage, shortener, messenger)

    asyncio.run(processor.handle(IncomingMessage(chat_id=1, user_id=2, text="/api http://a.com")))
    asyncio.run(processor.handle(IncomingMessage(chat_id=1, user_id=2, text="   ")))

    assert messenger.sent == []
    assert shortener.calls == []


def test_text_without_urls_gets_no_reply() -> None:
    storage = FakeStorage({2: "k"})
    shortener = FakeShortener({})
    messenger = FakeMessenger()

    asyncio.run(
        _processor(storage, shortener, messenger).handle(IncomingMessage(chat_id=1, user_id=2, text="hello there"))
    )

    assert messenger.sent == []
    assert shortener.calls == []


def test_nothing_shortened_is_reported() -> None:
    storage = FakeStorage({2: "k"})
    shortener = FakeShortener({})
    messenger = FakeMessenger()

    asyncio.run(
        _processor(storage, shortener, messenger).handle(IncomingMessage(chat_id=1, user_id=2, text="x http://a.com"))
    )

    assert messenger.sent == [(1, Reply(texts.NOTHING_SHORTENED))]
    assert len(shortener.calls) == 2
    assert storage.stats == {}


def test_only_already_shortened_links_is_reported_as_nothing_shortened() -> None:
    storage = FakeStorage({2: "k"})
    shortener = FakeShortener({})
    messenger = FakeMessenger()

    asyncio.run(
        _processor(storage, shortener, messenger).handle(
            IncomingMessage(chat_id=1, user_id=2, text="https://linkara.xyz/abc")
        )
    )

    assert messenger.sent == [(1, Reply(texts.NOTHING_SHORTENED))]
    assert shortener.calls == []


def test_unexpected_failure_replies_with_error() -> None:
    storage = FakeStorage({2: "k"})
    messenger = FakeMessenger()
    processor = MessageProcessor(rewriter=BrokenRewriter(), storage=storage, messenger=messenger)

    asyncio.run(processor.handle(IncomingMessage(chat_id=1, user_id=2, text="http://a.com")))

    assert messenger.sent == [(1, Reply(texts.PROCESSING_FAILED))]
