"""
Productivity Dashboard — Note collection.

Owns every Note, its tag list and its timestamps. ``modified_at`` moves on
title, content and tag changes only; the favorite flag is metadata and
never bumps it, whichever path toggles it.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Iterator

from pydantic import ValidationError

from src.core.clock import Clock, local_now
from src.core.inputs import NoteInput, clean_tag, clean_tags
from src.core.tag_index import all_tags
from src.core.view_filter import NoteQuery, note_matches
from src.core.view_sorter import sort_notes
from src.data.models import UNTITLED_NOTE, Note

logger = logging.getLogger(__name__)


class NoteCollection:
    """In-memory note store with tag operations and derived views."""

    def __init__(self, clock: Clock = local_now) -> None:
        self._clock = clock
        self._notes: list[Note] = []

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(list(self._notes))

    def get(self, note_id: str) -> Note | None:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    def create(
        self,
        title: str = "",
        content: str = "",
        tags: Iterable[str] = (),
        is_favorite: bool = False,
    ) -> Note | None:
        try:
            data = NoteInput(
                title=title, content=content, tags=list(tags), is_favorite=is_favorite,
            )
        except ValidationError as exc:
            logger.warning("Note rejected: %s", exc.errors()[0]["msg"])
            return None

        now = self._clock()
        note = Note(
            id=uuid.uuid4().hex,
            title=data.title,
            content=data.content,
            tags=data.tags,
            is_favorite=data.is_favorite,
            created_at=now,
            modified_at=now,
        )
        self._notes.append(note)
        logger.info("Note created: %s '%s'", note.id, note.title)
        return note

    def update(
        self,
        note_id: str,
        title: str | None = None,
        content: str | None = None,
        tags: Iterable[str] | None = None,
        is_favorite: bool | None = None,
    ) -> bool:
        """Apply the given fields to a note; ``None`` leaves a field alone.

        Returns False for an unknown id.
        """
        note = self.get(note_id)
        if note is None:
            logger.debug("Update ignored, unknown note %s", note_id)
            return False

        edited = False
        if title is not None:
            note.title = title.strip() or UNTITLED_NOTE
            edited = True
        if content is not None:
            note.content = content
            edited = True
        if tags is not None:
            note.tags = clean_tags(list(tags))
            edited = True
        if is_favorite is not None:
            note.is_favorite = is_favorite

        if edited:
            note.modified_at = self._clock()
        return True

    def set_favorite(self, note_id: str, value: bool) -> bool:
        note = self.get(note_id)
        if note is None:
            logger.debug("Favorite ignored, unknown note %s", note_id)
            return False
        note.is_favorite = value
        return True

    def toggle_favorite(self, note_id: str) -> bool:
        note = self.get(note_id)
        if note is None:
            logger.debug("Favorite ignored, unknown note %s", note_id)
            return False
        note.is_favorite = not note.is_favorite
        return True

    def add_tag(self, note_id: str, tag: str) -> bool:
        """Append ``tag`` to a note. Returns True only if the tag list changed."""
        note = self.get(note_id)
        if note is None:
            logger.debug("Tag ignored, unknown note %s", note_id)
            return False

        cleaned = clean_tag(tag)
        if cleaned is None:
            logger.info("Tag rejected for note %s: %r", note_id, tag)
            return False
        if cleaned in note.tags:
            return False

        note.tags.append(cleaned)
        note.modified_at = self._clock()
        return True

    def remove_tag(self, note_id: str, tag: str) -> bool:
        note = self.get(note_id)
        if note is None or tag not in note.tags:
            return False
        note.tags.remove(tag)
        note.modified_at = self._clock()
        return True

    def delete(self, note_id: str) -> bool:
        before = len(self._notes)
        self._notes = [n for n in self._notes if n.id != note_id]
        removed = len(self._notes) < before
        if removed:
            logger.info("Note deleted: %s", note_id)
        return removed

    # Views

    def all_tags(self) -> list[str]:
        return all_tags(self._notes)

    def view(self, query: NoteQuery) -> list[Note]:
        visible = [n for n in self._notes if note_matches(n, query)]
        return sort_notes(visible, query.sort)
