"""
Productivity Dashboard — View sorting.

Every function returns a new list and leaves its input untouched. Python's
sort is stable, so items that compare equal keep their input order.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable

from src.data.models import Note, NoteSort, Task, TaskSort


def sort_tasks(tasks: Iterable[Task], key: TaskSort) -> list[Task]:
    """Order tasks for display.

    - DATE: ascending due date, undated tasks last in input order.
    - PRIORITY: high, medium, low.
    - CREATED: newest first.
    """
    items = list(tasks)
    if key is TaskSort.DATE:
        dated = sorted((t for t in items if t.due_date is not None), key=lambda t: t.due_date)
        undated = [t for t in items if t.due_date is None]
        return dated + undated
    if key is TaskSort.PRIORITY:
        return sorted(items, key=lambda t: -t.priority.rank)
    if key is TaskSort.CREATED:
        return sorted(items, key=lambda t: t.created_at, reverse=True)
    raise ValueError(f"Unknown task sort key: {key!r}")


def _title_key(title: str) -> tuple[str, str]:
    # Accent- and case-insensitive first, then lowercase before uppercase.
    decomposed = unicodedata.normalize("NFKD", title)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), title.swapcase()


def sort_notes(notes: Iterable[Note], key: NoteSort) -> list[Note]:
    """Order notes for display (RECENT, ALPHABETICAL or MODIFIED)."""
    items = list(notes)
    if key is NoteSort.RECENT:
        return sorted(items, key=lambda n: n.created_at, reverse=True)
    if key is NoteSort.ALPHABETICAL:
        return sorted(items, key=lambda n: _title_key(n.title))
    if key is NoteSort.MODIFIED:
        return sorted(items, key=lambda n: n.modified_at, reverse=True)
    raise ValueError(f"Unknown note sort key: {key!r}")
