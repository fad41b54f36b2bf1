"""Local wall clock shared by every collection."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from src.config import settings

Clock = Callable[[], datetime]


def local_now() -> datetime:
    """Current time, timezone-aware, in the configured local timezone."""
    return datetime.now(ZoneInfo(settings.TIMEZONE))
