"""
Productivity Dashboard — View filters.

Pure predicates deciding whether a task or note is visible for the current
query parameters. Every facet (search text, view category, tag set,
favorites flag) must pass for an item to be shown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from src.data.models import Note, NoteSort, Task, TaskSort, TaskView


@dataclass
class TaskQuery:
    search: str = ""
    view: TaskView = TaskView.ALL
    sort: TaskSort = TaskSort.DATE


@dataclass
class NoteQuery:
    search: str = ""
    selected_tags: list[str] = field(default_factory=list)
    favorites_only: bool = False
    sort: NoteSort = NoteSort.RECENT


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def in_task_view(task: Task, view: TaskView, today: date) -> bool:
    """Category predicate; a task without a due date is never today/upcoming."""
    if view is TaskView.ALL:
        return True
    if view is TaskView.COMPLETED:
        return task.completed
    if task.due_date is None or task.completed:
        return False
    tomorrow = today + timedelta(days=1)
    if view is TaskView.TODAY:
        return today <= task.due_date < tomorrow
    if view is TaskView.UPCOMING:
        return task.due_date >= tomorrow
    raise ValueError(f"Unknown task view: {view!r}")


def task_matches(task: Task, query: TaskQuery, today: date) -> bool:
    """Return True if ``task`` passes both the search and the view facet."""
    needle = query.search.lower()
    if needle and not (
        _contains(task.title, needle) or _contains(task.description, needle)
    ):
        return False
    return in_task_view(task, query.view, today)


def note_matches(note: Note, query: NoteQuery) -> bool:
    """Return True if ``note`` passes search, tag and favorite facets.

    Selected tags use AND semantics: the note must carry every one of them.
    """
    needle = query.search.lower()
    if needle and not (
        _contains(note.title, needle)
        or _contains(note.content, needle)
        or any(_contains(tag, needle) for tag in note.tags)
    ):
        return False

    if query.selected_tags and not set(query.selected_tags).issubset(note.tags):
        return False

    return not query.favorites_only or note.is_favorite
