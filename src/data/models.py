"""
Productivity Dashboard — Data Models.

Tasks, notes and chat threads are plain in-memory records owned exclusively
by their collection. Nothing here performs I/O; persistence and transport
are reached through the ports package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

UNTITLED_NOTE = "Untitled Note"


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class Author(Enum):
    USER = "user"
    ASSISTANT = "assistant"


class DeliveryStatus(Enum):
    SENDING = "sending"
    SENT = "sent"
    ERROR = "error"


class TaskView(Enum):
    ALL = "all"
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


class TaskSort(Enum):
    DATE = "date"
    PRIORITY = "priority"
    CREATED = "created"


class NoteSort(Enum):
    RECENT = "recent"
    ALPHABETICAL = "alphabetical"
    MODIFIED = "modified"


class Bucket(Enum):
    TODAY = "Today"
    YESTERDAY = "Yesterday"
    LAST_WEEK = "Last Week"
    OLDER = "Older"


@dataclass
class Task:
    """A to-do item. ``created_at`` never changes after creation."""

    id: str
    title: str
    created_at: datetime
    description: str = ""
    due_date: date | None = None       # date-only semantics
    priority: Priority = Priority.MEDIUM
    completed: bool = False


@dataclass
class Note:
    """A free-form note with an ordered, de-duplicated tag list.

    ``modified_at`` tracks title/content/tag changes only; toggling the
    favorite flag leaves it untouched.
    """

    id: str
    title: str
    content: str
    created_at: datetime
    modified_at: datetime
    tags: list[str] = field(default_factory=list)
    is_favorite: bool = False


@dataclass
class ChatMessage:
    id: str
    content: str
    author: Author
    timestamp: datetime
    status: DeliveryStatus | None = None  # only set on user messages

    @property
    def is_user(self) -> bool:
        return self.author is Author.USER


@dataclass
class ChatThread:
    """An ordered conversation. ``updated_at`` drives recency bucketing."""

    id: str
    title: str
    updated_at: datetime
    messages: list[ChatMessage] = field(default_factory=list)
    typing: bool = False  # assistant is composing a reply

    def find_message(self, message_id: str) -> ChatMessage | None:
        for message in self.messages:
            if message.id == message_id:
                return message
        return None
