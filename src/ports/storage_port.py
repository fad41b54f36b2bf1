"""Storage port — abstract sink for committed entities.

The core keeps everything in memory; a host application may pass an
implementation to receive each auto-saved note.
"""

from __future__ import annotations

from typing import Protocol


class EntityStore(Protocol):
    """Abstract persistence interface used by the auto-save scheduler."""

    async def save(self, entity: object) -> None: ...
