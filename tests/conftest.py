"""Shared test fixtures and configuration.

Sets deterministic environment variables before any src import, and
provides a manual clock and timer registry so time-based behaviour can be
stepped through without sleeping.
"""

import os

# Patch env vars BEFORE any src imports
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("CHAT_TRANSPORT", "simulated")
os.environ.setdefault("MESSAGE_SENT_DELAY_SECONDS", "1.0")
os.environ.setdefault("ASSISTANT_REPLY_DELAY_SECONDS", "2.0")
os.environ.setdefault("AUTOSAVE_DELAY_SECONDS", "2.0")

from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class ManualTimers:
    """Timers port implementation driven by ``advance()``.

    Callbacks fire in due-time order (then scheduling order) and the clock,
    if given, is moved to each due time before firing.
    """

    def __init__(self, clock: FakeClock | None = None) -> None:
        self._clock = clock
        self._elapsed = 0.0
        self._seq = 0
        self._timers: dict = {}
        self.results: list = []

    def schedule(self, key, delay, callback) -> None:
        self._seq += 1
        self._timers[key] = (self._elapsed + delay, self._seq, callback)

    def cancel(self, key) -> bool:
        return self._timers.pop(key, None) is not None

    def pending(self, key) -> bool:
        return key in self._timers

    def __len__(self) -> int:
        return len(self._timers)

    def advance(self, seconds: float) -> None:
        target = self._elapsed + seconds
        while True:
            due = [
                (when, seq, key) for key, (when, seq, _) in self._timers.items()
                if when <= target
            ]
            if not due:
                break
            when, _, key = min(due)
            _, _, callback = self._timers.pop(key)
            if self._clock is not None:
                self._clock.advance(when - self._elapsed)
            self._elapsed = when
            self.results.append(callback())
        if self._clock is not None:
            self._clock.advance(target - self._elapsed)
        self._elapsed = target


@pytest.fixture
def clock():
    """A fake clock starting at 2024-01-14 10:00 UTC."""
    return FakeClock(datetime(2024, 1, 14, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def timers(clock):
    return ManualTimers(clock)


@pytest.fixture
def task_collection(clock):
    from src.core.task_collection import TaskCollection
    return TaskCollection(clock=clock)


@pytest.fixture
def note_collection(clock):
    from src.core.note_collection import NoteCollection
    return NoteCollection(clock=clock)


@pytest.fixture
def chat_engine(timers, clock):
    from src.core.chat_engine import ChatEngine
    return ChatEngine(timers, clock=clock, sent_delay=1.0, reply_delay=2.0)


@pytest.fixture
def dashboard(timers, clock):
    from src.core.dashboard import Dashboard
    return Dashboard(timers, clock=clock)
