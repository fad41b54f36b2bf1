"""Asyncio timer adapter — implements the Timers port.

Each key maps to at most one ``loop.call_later`` handle. Callbacks that
return a coroutine are wrapped in a task so async work (transport sends,
store saves) runs on the same loop.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Hashable

logger = logging.getLogger(__name__)


class AsyncioTimers:
    """asyncio implementation of the Timers port."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handles: dict[Hashable, asyncio.TimerHandle] = {}
        self._tasks: set[asyncio.Task] = set()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(
        self, key: Hashable, delay: float, callback: Callable[[], object]
    ) -> None:
        self.cancel(key)
        loop = self._get_loop()
        self._handles[key] = loop.call_later(delay, self._fire, key, callback)
        logger.debug("Timer %r scheduled in %.2fs", key, delay)

    def cancel(self, key: Hashable) -> bool:
        handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.cancel()
        logger.debug("Timer %r cancelled", key)
        return True

    def pending(self, key: Hashable) -> bool:
        return key in self._handles

    async def drain(self) -> None:
        """Wait for async work spawned by fired callbacks to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _fire(self, key: Hashable, callback: Callable[[], object]) -> None:
        self._handles.pop(key, None)
        try:
            result = callback()
        except Exception as exc:
            logger.error("Timer %r callback failed: %s", key, exc)
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result, loop=self._get_loop())
            self._tasks.add(task)
            task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Timer task failed: %s", exc)
