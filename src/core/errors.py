"""Remote failure taxonomy for the shortening service.

Every failure of a single remote call is a ``RemoteError`` subclass so the
retry layer can absorb them all while unexpected errors keep propagating.
"""

from __future__ import annotations

from typing import Optional


class RemoteError(Exception):
    """A single call to the shortening service failed."""


class TransportError(RemoteError):
    """No usable HTTP response was received."""

    def __init__(self, description: str, status_code: Optional[int] = None) -> None:
        super().__init__(description)
        self.status_code = status_code


class RemoteTimeout(TransportError):
    """The request exceeded the configured timeout."""


class ApplicationError(RemoteError):
    """The service answered with a non-success status."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(f"API Error: {message or 'Unknown error'}")
        self.message = message


class MalformedResponse(RemoteError):
    """The service answered, but not with the expected payload."""
