"""Display helpers for task and note cards.

No I/O: turns model fields into short labels the presentation layer shows
next to each item.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from src.config import settings


class DueStatus(Enum):
    OVERDUE = "overdue"
    TODAY = "today"
    TOMORROW = "tomorrow"
    UPCOMING = "upcoming"


@dataclass
class DueLabel:
    status: DueStatus
    label: str     # e.g. "Due in 3 days"
    days: int      # negative when overdue


def due_label(due_date: date | None, today: date) -> DueLabel | None:
    """Describe how far away a due date is, or None for undated tasks."""
    if due_date is None:
        return None

    days = (due_date - today).days
    if days < 0:
        return DueLabel(DueStatus.OVERDUE, "Overdue", days)
    if days == 0:
        return DueLabel(DueStatus.TODAY, "Due today", days)
    if days == 1:
        return DueLabel(DueStatus.TOMORROW, "Due tomorrow", days)
    return DueLabel(DueStatus.UPCOMING, f"Due in {days} days", days)


def preview(content: str, max_length: int | None = None) -> str:
    """Truncate note content for a card, appending "..." when cut."""
    if max_length is None:
        max_length = settings.NOTE_PREVIEW_LENGTH
    if len(content) <= max_length:
        return content
    return content[:max_length] + "..."


def word_count(text: str) -> int:
    return len(text.split())


def format_relative(ts: datetime, now: datetime) -> str:
    """Short "last edited" label.

    Same elapsed day -> "HH:MM", one day -> "Yesterday", under a week ->
    "N days ago", otherwise the ISO date.
    """
    days = (now - ts).days
    if days <= 0:
        return ts.strftime("%H:%M")
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    return ts.date().isoformat()
