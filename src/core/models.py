"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

# A button row is a tuple of (label, callback_data) pairs.
ButtonRow = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class IncomingMessage:
    """Minimal inbound chat message used by the core processing pipeline."""

    chat_id: int
    user_id: int
    text: str


@dataclass(frozen=True)
class CallbackQuery:
    """Inline button press forwarded by the transport."""

    query_id: str
    chat_id: int
    user_id: int
    data: str


@dataclass(frozen=True)
class Reply:
    """Outbound text with optional inline button rows."""

    text: str
    buttons: Tuple[ButtonRow, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CallbackAnswer:
    """Response to a button press: an optional toast and an optional message."""

    notice: Optional[str] = None
    reply: Optional[Reply] = None


@dataclass(frozen=True)
class UrlToken:
    """A URL found in a message, with its span in the original text."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of shortening one URL.

    ``ok`` is False when every attempt failed; ``value`` then equals
    ``original`` so callers can always use ``value`` in place of the URL.
    """

    ok: bool
    value: str
    original: str

    @classmethod
    def success(cls, original: str, shortened: str) -> "ShortenResult":
        return cls(ok=True, value=shortened, original=original)

    @classmethod
    def fallback(cls, original: str) -> "ShortenResult":
        return cls(ok=False, value=original, original=original)


@dataclass(frozen=True)
class RewriteOutcome:
    """Result of rewriting one message."""

    original: str
    text: str
    shortened: Tuple[str, ...] = ()
    skipped: Tuple[str, ...] = ()
    failed: Tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return self.text != self.original


@dataclass(frozen=True)
class UserStats:
    """Usage counters kept per user."""

    user_id: int
    total_urls_shortened: int
    first_use: Optional[datetime]
    last_use: Optional[datetime]


@dataclass(frozen=True)
class PeriodStats:
    views: int
    earnings: float


@dataclass(frozen=True)
class Balances:
    publisher_earnings: float
    referral_earnings: float
    advertiser_balance: float
    wallet_money: float

    @property
    def total(self) -> float:
        return (
            self.publisher_earnings
            + self.referral_earnings
            + self.advertiser_balance
            + self.wallet_money
        )


@dataclass(frozen=True)
class BalanceReport:
    """Account overview returned by the shortening service."""

    username: str
    currency: str
    today: PeriodStats
    this_month: PeriodStats
    balances: Balances
