"""
Productivity Dashboard — UI-agnostic facade.

Composes the task, note and chat state containers around one clock and one
timer registry. The presentation layer calls intents on this object and
renders the view models it returns; it never touches collections directly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from src.core.autosave import AutoSaveScheduler, AutoSaveState, NoteEdit
from src.core.chat_engine import ChatEngine
from src.core.clock import Clock, local_now
from src.core.formatting import DueLabel, due_label, format_relative, preview, word_count
from src.core.note_collection import NoteCollection
from src.core.task_collection import TaskCollection, TaskCounts
from src.core.view_filter import NoteQuery, TaskQuery
from src.data.models import (
    Bucket, ChatMessage, ChatThread, Note, NoteSort, Task, TaskSort, TaskView,
)

if TYPE_CHECKING:
    from src.ports.storage_port import EntityStore
    from src.ports.timer_port import Timers
    from src.ports.transport_port import MessageTransport

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# View models
# ---------------------------------------------------------------------------


@dataclass
class TaskListView:
    tasks: list[Task]
    counts: TaskCounts
    due_labels: dict[str, DueLabel | None] = field(default_factory=dict)


@dataclass
class NoteListView:
    notes: list[Note]
    tags: list[str]
    previews: dict[str, str] = field(default_factory=dict)
    edited_labels: dict[str, str] = field(default_factory=dict)
    word_counts: dict[str, int] = field(default_factory=dict)
    editing_id: str | None = None
    autosave: AutoSaveState = AutoSaveState.IDLE


@dataclass
class ChatView:
    active_thread_id: str | None
    messages: list[ChatMessage]
    typing: bool
    buckets: dict[Bucket, list[ChatThread]]
    draft_length: int = 0
    can_send: bool = False


# ---------------------------------------------------------------------------
# Facade
# ---------------------------------------------------------------------------


class Dashboard:
    """Entry point for every user intent coming from the presentation layer."""

    def __init__(
        self,
        timers: Timers,
        clock: Clock = local_now,
        transport: MessageTransport | None = None,
        store: EntityStore | None = None,
    ) -> None:
        self._clock = clock
        self.tasks = TaskCollection(clock=clock)
        self.notes = NoteCollection(clock=clock)
        self.autosave = AutoSaveScheduler(self.notes, timers, store=store)
        self.chat = ChatEngine(timers, clock=clock, transport=transport)

        self.task_query = TaskQuery()
        self.note_query = NoteQuery()
        self.thread_search = ""
        self._editing_id: str | None = None

    # -- query parameters ---------------------------------------------------

    def set_task_query(self, **changes: object) -> TaskListView:
        """Update task query fields. ``view`` and ``sort`` take members or their values."""
        if "view" in changes:
            changes["view"] = TaskView(changes["view"])
        if "sort" in changes:
            changes["sort"] = TaskSort(changes["sort"])
        self.task_query = replace(self.task_query, **changes)
        return self.task_view()

    def set_note_query(self, **changes: object) -> NoteListView:
        if "sort" in changes:
            changes["sort"] = NoteSort(changes["sort"])
        self.note_query = replace(self.note_query, **changes)
        return self.note_view()

    def toggle_selected_tag(self, tag: str) -> NoteListView:
        selected = list(self.note_query.selected_tags)
        if tag in selected:
            selected.remove(tag)
        else:
            selected.append(tag)
        return self.set_note_query(selected_tags=selected)

    def search_threads(self, query: str) -> ChatView:
        self.thread_search = query
        return self.chat_view()

    # -- notes editor -------------------------------------------------------

    def open_note(self, note_id: str) -> bool:
        if self._editing_id is not None and self._editing_id != note_id:
            self.close_note()
        if not self.autosave.open(note_id):
            return False
        logger.debug("Editing note %s", note_id)
        self._editing_id = note_id
        return True

    def edit_note(self, title: str, content: str, tags: list[str]) -> bool:
        """Feed the open editor's contents to the auto-save countdown."""
        if self._editing_id is None:
            return False
        return self.autosave.schedule(self._editing_id, NoteEdit(title, content, list(tags)))

    def save_note(self) -> bool:
        if self._editing_id is None:
            return False
        return self.autosave.save_now(self._editing_id)

    def close_note(self) -> None:
        if self._editing_id is None:
            return
        self.autosave.close(self._editing_id)
        self._editing_id = None

    def delete_note(self, note_id: str) -> bool:
        """Delete a note, dropping any pending auto-save for it first."""
        if self._editing_id == note_id:
            self.close_note()
        else:
            self.autosave.close(note_id)
        return self.notes.delete(note_id)

    # -- view models --------------------------------------------------------

    def task_view(self) -> TaskListView:
        today = self._clock().date()
        tasks = self.tasks.view(self.task_query, today)
        return TaskListView(
            tasks=tasks,
            counts=self.tasks.counts(today),
            due_labels={t.id: due_label(t.due_date, today) for t in tasks},
        )

    def note_view(self) -> NoteListView:
        autosave = (
            self.autosave.state(self._editing_id)
            if self._editing_id is not None else AutoSaveState.IDLE
        )
        notes = self.notes.view(self.note_query)
        now = self._clock()
        return NoteListView(
            notes=notes,
            tags=self.notes.all_tags(),
            previews={n.id: preview(n.content) for n in notes},
            edited_labels={n.id: format_relative(n.modified_at, now) for n in notes},
            word_counts={n.id: word_count(n.content) for n in notes},
            editing_id=self._editing_id,
            autosave=autosave,
        )

    def chat_view(self) -> ChatView:
        thread = self.chat.active_thread
        return ChatView(
            active_thread_id=thread.id if thread else None,
            messages=list(thread.messages) if thread else [],
            typing=thread.typing if thread else False,
            buckets=self.chat.group_threads(self._clock(), query=self.thread_search),
            draft_length=len(self.chat.draft),
            can_send=self.chat.can_send(),
        )
