"""Recency bucketing for chat threads — pure business logic.

"Today" and "Yesterday" compare calendar days in the local timezone of
``now``; "Last Week" is a rolling seven-day window. Buckets are computed on
every call and never stored on the thread.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from src.data.models import Bucket

if TYPE_CHECKING:
    from src.data.models import ChatThread


def _local(ts: datetime, now: datetime) -> datetime:
    if ts.tzinfo is not None and now.tzinfo is not None:
        return ts.astimezone(now.tzinfo)
    return ts


def bucket_for(timestamp: datetime, now: datetime) -> Bucket:
    """Classify ``timestamp`` relative to ``now``."""
    day = _local(timestamp, now).date()
    today = now.date()
    if day == today:
        return Bucket.TODAY
    if day == today - timedelta(days=1):
        return Bucket.YESTERDAY
    if timestamp > now - timedelta(days=7):
        return Bucket.LAST_WEEK
    return Bucket.OLDER


def group_threads(
    threads: Iterable[ChatThread], now: datetime,
) -> dict[Bucket, list[ChatThread]]:
    """Partition threads by the bucket of their ``updated_at``.

    Buckets appear in Today → Older order and empty ones are left out.
    Threads keep their source order inside a bucket.
    """
    groups: dict[Bucket, list[ChatThread]] = {bucket: [] for bucket in Bucket}
    for thread in threads:
        groups[bucket_for(thread.updated_at, now)].append(thread)
    return {bucket: items for bucket, items in groups.items() if items}
