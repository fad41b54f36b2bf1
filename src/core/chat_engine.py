"""
Productivity Dashboard — Chat engine.

Owns chat threads, their messages and the delivery lifecycle of user
messages:

    sending --(sent delay / transport ok)--> sent
    sending --(transport raised)-----------> error

Sending also marks the thread as "typing" and, after the reply delay,
appends a canned assistant reply. Regenerating an assistant reply removes
it and appends a fresh one at the bottom of the thread.

Chat timers are fire-and-forget: two sends in flight produce two
independent sets of timers, and whichever reply lands first clears the
typing flag. Every timer callback looks its thread and message up again
by id, so a thread deleted in the meantime turns the callback into a no-op.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from datetime import datetime
from typing import TYPE_CHECKING

from src.config import settings
from src.core.clock import Clock, local_now
from src.core.recency import group_threads
from src.data.models import Author, Bucket, ChatMessage, ChatThread, DeliveryStatus
from src.ports.transport_port import TransportError

if TYPE_CHECKING:
    from src.ports.timer_port import Timers
    from src.ports.transport_port import MessageTransport

logger = logging.getLogger(__name__)

DEFAULT_THREAD_TITLE = "New Conversation"

ASSISTANT_REPLY = (
    "This is a simulated AI response. In a real implementation, this would be "
    "replaced with actual AI-generated content based on the user's message."
)
REGENERATED_REPLY = (
    "This is a regenerated AI response with different content to demonstrate "
    "the regeneration feature."
)


def _new_id() -> str:
    return uuid.uuid4().hex


class ChatEngine:
    """Thread store plus the message delivery state machine."""

    def __init__(
        self,
        timers: Timers,
        clock: Clock = local_now,
        transport: MessageTransport | None = None,
        sent_delay: float | None = None,
        reply_delay: float | None = None,
        max_length: int | None = None,
    ) -> None:
        self._timers = timers
        self._clock = clock
        self._transport = transport
        self._sent_delay = (
            settings.MESSAGE_SENT_DELAY_SECONDS if sent_delay is None else sent_delay
        )
        self._reply_delay = (
            settings.ASSISTANT_REPLY_DELAY_SECONDS if reply_delay is None else reply_delay
        )
        self._max_length = settings.MAX_MESSAGE_LENGTH if max_length is None else max_length
        self._threads: list[ChatThread] = []
        self._active_id: str | None = None
        self._draft = ""

    # ------------------------------------------------------------------
    # Threads
    # ------------------------------------------------------------------

    @property
    def threads(self) -> list[ChatThread]:
        return list(self._threads)

    @property
    def active_thread(self) -> ChatThread | None:
        if self._active_id is None:
            return None
        return self.get_thread(self._active_id)

    def get_thread(self, thread_id: str) -> ChatThread | None:
        for thread in self._threads:
            if thread.id == thread_id:
                return thread
        return None

    def create_thread(
        self, title: str = "", updated_at: datetime | None = None,
    ) -> ChatThread:
        """Add a thread. The first thread created becomes active."""
        thread = ChatThread(
            id=_new_id(),
            title=title.strip() or DEFAULT_THREAD_TITLE,
            updated_at=updated_at or self._clock(),
        )
        self._threads.append(thread)
        if self._active_id is None:
            self._active_id = thread.id
        logger.info("Thread created: %s '%s'", thread.id, thread.title)
        return thread

    def select_thread(self, thread_id: str) -> bool:
        if self.get_thread(thread_id) is None:
            logger.debug("Select ignored, unknown thread %s", thread_id)
            return False
        self._active_id = thread_id
        return True

    def delete_thread(self, thread_id: str) -> bool:
        """Remove a thread; the active pointer moves to the first remaining one."""
        before = len(self._threads)
        self._threads = [t for t in self._threads if t.id != thread_id]
        if len(self._threads) == before:
            return False

        if self._active_id == thread_id:
            self._active_id = self._threads[0].id if self._threads else None
        logger.info("Thread deleted: %s", thread_id)
        return True

    def search_threads(self, query: str) -> list[ChatThread]:
        """Threads whose title or any message contains ``query`` (case-insensitive)."""
        needle = query.strip().lower()
        if not needle:
            return self.threads
        return [
            t for t in self._threads
            if needle in t.title.lower()
            or any(needle in m.content.lower() for m in t.messages)
        ]

    def group_threads(
        self, now: datetime | None = None, query: str = "",
    ) -> dict[Bucket, list[ChatThread]]:
        return group_threads(self.search_threads(query), now or self._clock())

    def export_thread(self, thread_id: str) -> dict | None:
        """JSON-ready snapshot of a thread, or None if it does not exist."""
        thread = self.get_thread(thread_id)
        if thread is None:
            return None

        def _message(message: ChatMessage) -> dict:
            data = asdict(message)
            data["author"] = message.author.value
            data["timestamp"] = message.timestamp.isoformat()
            data["status"] = message.status.value if message.status else None
            return data

        return {
            "id": thread.id,
            "title": thread.title,
            "updated_at": thread.updated_at.isoformat(),
            "messages": [_message(m) for m in thread.messages],
        }

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    @property
    def draft(self) -> str:
        """Text in the message input box."""
        return self._draft

    def set_draft(self, text: str) -> None:
        self._draft = text

    def can_send(self) -> bool:
        text = self._draft.strip()
        return bool(text) and len(text) <= self._max_length

    def _resolve(self, thread_id: str | None) -> ChatThread | None:
        if thread_id is None:
            return self.active_thread
        return self.get_thread(thread_id)

    def send_message(
        self, content: str | None = None, thread_id: str | None = None,
    ) -> ChatMessage | None:
        """Append a user message and start its delivery and reply timers.

        ``content`` defaults to the current draft, which is cleared on success.

        Returns None when there is no target thread, or when the trimmed
        content is empty or longer than the configured limit.
        """
        thread = self._resolve(thread_id)
        if thread is None:
            logger.debug("Send ignored, no thread %s", thread_id)
            return None

        text = (self._draft if content is None else content).strip()
        if not text:
            return None
        if len(text) > self._max_length:
            logger.warning(
                "Message rejected: %d characters exceeds limit of %d",
                len(text), self._max_length,
            )
            return None

        now = self._clock()
        message = ChatMessage(
            id=_new_id(),
            content=text,
            author=Author.USER,
            timestamp=now,
            status=DeliveryStatus.SENDING,
        )
        thread.messages.append(message)
        thread.updated_at = now
        self._draft = ""

        delay = 0 if self._transport is not None else self._sent_delay
        self._timers.schedule(
            ("deliver", message.id), delay,
            lambda: self._deliver(thread.id, message.id),
        )

        thread.typing = True
        reply_key = ("reply", _new_id())
        self._timers.schedule(
            reply_key, self._reply_delay,
            lambda: self._append_reply(thread.id, ASSISTANT_REPLY),
        )
        logger.info("Message %s queued in thread %s", message.id, thread.id)
        return message

    def regenerate(self, message_id: str, thread_id: str | None = None) -> bool:
        """Replace an assistant reply with a new one at the end of the thread."""
        thread = self._resolve(thread_id)
        if thread is None:
            return False
        message = thread.find_message(message_id)
        if message is None or message.author is not Author.ASSISTANT:
            logger.debug("Regenerate ignored for message %s", message_id)
            return False

        thread.typing = True
        self._timers.schedule(
            ("regenerate", _new_id()), self._reply_delay,
            lambda: self._replace_reply(thread.id, message_id),
        )
        return True

    def mark_status(
        self, thread_id: str, message_id: str, status: DeliveryStatus,
    ) -> bool:
        """Set the delivery status of a user message still in ``sending``.

        Used by the delivery timer and by external backends reporting
        failures. Statuses never move back to ``sending``.
        """
        thread = self.get_thread(thread_id)
        if thread is None:
            return False
        message = thread.find_message(message_id)
        if message is None or message.status is not DeliveryStatus.SENDING:
            return False
        if status is DeliveryStatus.SENDING:
            return False
        message.status = status
        return True

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    def _deliver(self, thread_id: str, message_id: str):
        if self._transport is None:
            if self.mark_status(thread_id, message_id, DeliveryStatus.SENT):
                logger.debug("Message %s sent", message_id)
            return None
        return self._deliver_via_transport(thread_id, message_id)

    async def _deliver_via_transport(self, thread_id: str, message_id: str) -> None:
        thread = self.get_thread(thread_id)
        message = thread.find_message(message_id) if thread else None
        if message is None:
            return

        try:
            await self._transport.send(thread_id, message)
        except TransportError as exc:
            logger.warning("Delivery failed for message %s: %s", message_id, exc)
            self.mark_status(thread_id, message_id, DeliveryStatus.ERROR)
            return
        self.mark_status(thread_id, message_id, DeliveryStatus.SENT)

    def _new_reply(self, content: str) -> ChatMessage:
        return ChatMessage(
            id=_new_id(),
            content=content,
            author=Author.ASSISTANT,
            timestamp=self._clock(),
        )

    def _append_reply(self, thread_id: str, content: str) -> None:
        thread = self.get_thread(thread_id)
        if thread is None:
            return
        reply = self._new_reply(content)
        thread.messages.append(reply)
        thread.updated_at = reply.timestamp
        thread.typing = False
        logger.info("Assistant replied in thread %s", thread_id)

    def _replace_reply(self, thread_id: str, message_id: str) -> None:
        thread = self.get_thread(thread_id)
        if thread is None:
            return
        if thread.find_message(message_id) is None:
            # Already replaced by an earlier regenerate of the same reply
            logger.debug("Regenerate dropped, message %s no longer exists", message_id)
            return
        reply = self._new_reply(REGENERATED_REPLY)
        thread.messages = [m for m in thread.messages if m.id != message_id]
        thread.messages.append(reply)
        thread.updated_at = reply.timestamp
        thread.typing = False
        logger.info("Assistant reply %s regenerated as %s", message_id, reply.id)
