"""Timer port — abstract interface for delayed, cancellable callbacks.

Every delayed transition in the core (delivery status, assistant replies,
note auto-save) goes through this protocol, keyed by an entity-derived key.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Protocol


class Timers(Protocol):
    """Abstract fire-once timer registry used by core modules.

    Scheduling under a key that already has a pending timer replaces it.
    A callback may return an awaitable; implementations run it to completion.
    """

    def schedule(
        self, key: Hashable, delay: float, callback: Callable[[], object]
    ) -> None: ...

    def cancel(self, key: Hashable) -> bool: ...

    def pending(self, key: Hashable) -> bool: ...
