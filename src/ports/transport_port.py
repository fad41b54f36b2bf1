"""Transport port — abstract interface for delivering user chat messages.

The chat engine depends on this protocol, never on a specific provider.
When no transport is configured, delivery is simulated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.data.models import ChatMessage


class TransportError(Exception):
    """Raised when a transport fails to deliver a message."""


class MessageTransport(Protocol):
    """Abstract message transport used by the chat engine."""

    async def send(self, thread_id: str, message: ChatMessage) -> None: ...
