"""Ports (interfaces) used by the core pipeline.

Ports define the minimal contracts for storage, the shortening service, and
message delivery so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from core.models import BalanceReport, Reply, UserStats


class ShortenerPort(Protocol):
    """Remote shortening service operations.

    Implementations raise ``core.errors.RemoteError`` subclasses on failure
    and never retry internally.
    """

    async def shorten(self, url: str, credential: str, alias: Optional[str] = None) -> str:
        ...

    async def fetch_balance(self, credential: str) -> BalanceReport:
        ...


class CredentialStorePort(Protocol):
    """Per-user credential and usage storage keyed by user id."""

    def get_credential(self, user_id: int) -> Optional[str]:
        ...

    def set_credential(self, user_id: int, credential: str) -> None:
        ...

    def has_credential(self, user_id: int) -> bool:
        ...

    def remove_credential(self, user_id: int) -> bool:
        ...

    def update_stats(self, user_id: int, url_count: int = 1) -> None:
        ...

    def get_stats(self, user_id: int) -> Optional[UserStats]:
        ...

    def count_users(self) -> int:
        ...

    def list_user_ids(self) -> List[int]:
        ...


class MessengerPort(Protocol):
    """Outbound delivery to a chat."""

    async def send(self, chat_id: int, reply: Reply) -> None:
        ...
