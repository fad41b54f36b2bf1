"""Adapter factory — wires the dashboard to the adapters selected in config."""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.config import settings
from src.ports.transport_port import MessageTransport

if TYPE_CHECKING:
    from src.core.dashboard import Dashboard
    from src.ports.storage_port import EntityStore


def create_transport() -> MessageTransport | None:
    """Return the transport matching the CHAT_TRANSPORT setting.

    ``None`` means delivery is simulated by the chat engine's timers.
    """
    provider = settings.CHAT_TRANSPORT.lower()

    if provider == "simulated":
        return None

    if provider == "telegram":
        from telegram import Bot

        from src.adapters.telegram_transport import TelegramTransport

        return TelegramTransport(
            Bot(token=settings.TELEGRAM_BOT_TOKEN),
            chat_id=settings.TELEGRAM_CHAT_ID,
        )

    raise ValueError(f"Unknown CHAT_TRANSPORT: {provider!r}")


def create_dashboard(store: EntityStore | None = None) -> Dashboard:
    """Build a Dashboard wired to asyncio timers and the configured transport.

    Intents that start timers must run inside an event loop.
    """
    from src.adapters.asyncio_timers import AsyncioTimers
    from src.core.dashboard import Dashboard

    return Dashboard(AsyncioTimers(), transport=create_transport(), store=store)
