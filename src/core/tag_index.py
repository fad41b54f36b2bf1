"""Tag index — distinct tags across a set of notes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.data.models import Note


def all_tags(notes: Iterable[Note]) -> list[str]:
    """Return every tag used by ``notes``, de-duplicated and sorted.

    Ordering is plain code-point order, so "Work" sorts before "home".
    """
    tags: set[str] = set()
    for note in notes:
        tags.update(note.tags)
    return sorted(tags)
