from __future__ import annotations

import asyncio

from adapters.telegram_mapper import build_callback_query, build_incoming_message
from adapters import telegram_messenger
from adapters.telegram_messenger import TelegramMessenger, build_buttons
from core.models import Reply


class DummyMessage:
    def __init__(self, raw_text: "str | None") -> None:
        self.raw_text = raw_text


class DummyMessageEvent:
    def __init__(self, *, chat_id: int, sender_id: int, text: "str | None") -> None:
        self.chat_id = chat_id
        self.sender_id = sender_id
        self.message = DummyMessage(text)


class DummyCallbackEvent:
    def __init__(self, *, query_id: int, chat_id: int, sender_id: int, data: bytes) -> None:
        self.id = query_id
        self.chat_id = chat_id
        self.sender_id = sender_id
        self.data = data


class DummyButton:
    @staticmethod
    def inline(text: str, data: bytes) -> tuple[str, bytes]:
        return text, data


class DummyClient:
    def __init__(self) -> None:
        self.sent: list[tuple[int, str, dict]] = []

    async def send_message(self, chat_id: int, text: str, **kwargs) -> None:
        self.sent.append((chat_id, text, kwargs))


def test_build_incoming_message() -> None:
    event = DummyMessageEvent(chat_id=-100, sender_id=42, text="see http://a.com")
    message = build_incoming_message(event)
    assert message.chat_id == -100
    assert message.user_id == 42
    assert message.text == "see http://a.com"


def test_build_incoming_message_without_text() -> None:
    event = DummyMessageEvent(chat_id=1, sender_id=2, text=None)
    assert build_incoming_message(event).text == ""


def test_build_callback_query_decodes_data() -> None:
    event = DummyCallbackEvent(query_id=777, chat_id=1, sender_id=2, data=b"today_cpm_2")
    query = build_callback_query(event)
    assert query.query_id == "777"
    assert query.user_id == 2
    assert query.data == "today_cpm_2"


def test_build_buttons(monkeypatch) -> None:
    monkeypatch.setattr(telegram_messenger, "Button", DummyButton)
    assert build_buttons(Reply("plain")) is None

    reply = Reply("x", buttons=((("A", "a_1"), ("B", "b_1")), (("C", "c_1"),)))
    rows = build_buttons(reply)
    assert rows == [
        [("A", b"a_1"), ("B", b"b_1")],
        [("C", b"c_1")],
    ]


def test_build_buttons_with_telethon_preserves_row_layout() -> None:
    reply = Reply("x", buttons=((("A", "a_1"), ("B", "b_1")), (("C", "c_1"),)))
    rows = build_buttons(reply)
    assert rows is not None
    assert [len(row) for row in rows] == [2, 1]


def test_messenger_sends_plain_text() -> None:
    client = DummyClient()
    asyncio.run(TelegramMessenger(client).send(5, Reply("http://a_b.com")))

    chat_id, text, kwargs = client.sent[0]
    assert chat_id == 5
    assert text == "http://a_b.com"
    assert kwargs["parse_mode"] is None
    assert kwargs["buttons"] is None
