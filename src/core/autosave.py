"""
Productivity Dashboard — Note auto-save.

While a note is open in the editor, every edit restarts a countdown keyed
by the note id. Only the latest edit is kept; when the countdown expires
it is committed to the NoteCollection and, if configured, handed to an
EntityStore. Closing the editor or deleting the note drops the pending
commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from src.config import settings

if TYPE_CHECKING:
    from src.core.note_collection import NoteCollection
    from src.ports.storage_port import EntityStore
    from src.ports.timer_port import Timers

logger = logging.getLogger(__name__)


class AutoSaveState(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SAVED = "saved"


@dataclass
class NoteEdit:
    """Editor contents awaiting commit."""

    title: str
    content: str
    tags: list[str]


class AutoSaveScheduler:
    """Debounces editor changes into note commits."""

    def __init__(
        self,
        notes: NoteCollection,
        timers: Timers,
        store: EntityStore | None = None,
        delay: float | None = None,
    ) -> None:
        self._notes = notes
        self._timers = timers
        self._store = store
        self._delay = settings.AUTOSAVE_DELAY_SECONDS if delay is None else delay
        self._open: set[str] = set()
        self._pending: dict[str, NoteEdit] = {}
        self._saved: set[str] = set()

    @staticmethod
    def _key(note_id: str) -> tuple[str, str]:
        return ("autosave", note_id)

    def open(self, note_id: str) -> bool:
        """Start an editing session for an existing note."""
        if self._notes.get(note_id) is None:
            logger.debug("Open ignored, unknown note %s", note_id)
            return False
        self._open.add(note_id)
        self._saved.discard(note_id)
        return True

    def is_open(self, note_id: str) -> bool:
        return note_id in self._open

    def schedule(self, note_id: str, edit: NoteEdit) -> bool:
        """Record ``edit`` and restart the countdown. Ignored if not open."""
        if note_id not in self._open:
            logger.debug("Auto-save ignored, note %s not open", note_id)
            return False
        self._pending[note_id] = edit
        self._saved.discard(note_id)
        self._timers.schedule(self._key(note_id), self._delay, lambda: self._commit(note_id))
        return True

    def save_now(self, note_id: str) -> bool:
        """Commit the pending edit immediately."""
        if note_id not in self._pending:
            return False
        self._timers.cancel(self._key(note_id))
        return self._commit(note_id)

    def cancel(self, note_id: str) -> bool:
        """Drop any pending commit for ``note_id``."""
        self._pending.pop(note_id, None)
        return self._timers.cancel(self._key(note_id))

    def close(self, note_id: str) -> None:
        """End the editing session; an uncommitted edit is discarded."""
        self.cancel(note_id)
        self._open.discard(note_id)
        self._saved.discard(note_id)

    def state(self, note_id: str) -> AutoSaveState:
        if note_id in self._pending:
            return AutoSaveState.PENDING
        if note_id in self._saved:
            return AutoSaveState.SAVED
        return AutoSaveState.IDLE

    def _commit(self, note_id: str) -> bool:
        edit = self._pending.pop(note_id, None)
        if edit is None:
            return False
        updated = self._notes.update(
            note_id, title=edit.title, content=edit.content, tags=edit.tags,
        )
        if not updated:
            # Deleted while the countdown was running
            logger.debug("Auto-save dropped, note %s no longer exists", note_id)
            return False

        self._saved.add(note_id)
        logger.info("Note %s auto-saved", note_id)
        if self._store is not None:
            self._timers.schedule(("persist", note_id), 0, lambda: self._persist(note_id))
        return True

    async def _persist(self, note_id: str) -> None:
        note = self._notes.get(note_id)
        if note is None:
            return
        try:
            await self._store.save(note)
        except Exception as exc:
            logger.error("Failed to persist note %s: %s", note_id, exc)
