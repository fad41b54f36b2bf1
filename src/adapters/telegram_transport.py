"""Telegram transport adapter — implements MessageTransport.

Relays each user chat message to a Telegram chat through a telegram.Bot
instance. Telegram failures surface as TransportError so the chat engine
can mark the message as errored.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from telegram import Bot
from telegram.error import TelegramError

from src.ports.transport_port import TransportError

if TYPE_CHECKING:
    from src.data.models import ChatMessage

logger = logging.getLogger(__name__)


class TelegramTransport:
    """Telegram implementation of MessageTransport."""

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self._bot = bot
        self._chat_id = chat_id

    async def send(self, thread_id: str, message: ChatMessage) -> None:
        try:
            await self._bot.send_message(chat_id=self._chat_id, text=message.content)
        except TelegramError as exc:
            raise TransportError(
                f"Telegram delivery failed for message {message.id}: {exc}"
            ) from exc
        logger.info("Message %s from thread %s relayed to Telegram", message.id, thread_id)
