"""Recent activity feed for staff screens."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from qryte.config import ACTIVITY_FEED_LIMIT
from qryte.constant import ACTIVITY_KINDS
from qryte.models import ActivityEvent


class ActivityFeed:
    """Newest-first list of events capped at ``limit`` entries."""

    def __init__(self, limit: int = ACTIVITY_FEED_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.limit = limit
        self._events: list[ActivityEvent] = []

    def add(self, message: str, kind: str) -> ActivityEvent:
        if kind not in ACTIVITY_KINDS:
            raise ValueError(f"unknown activity kind {kind!r}")
        event = ActivityEvent(
            event_id=f"EVT-{uuid4().hex[:12]}",
            message=message,
            timestamp=datetime.now(timezone.utc),
            kind=kind,
        )
        self._events.insert(0, event)
        del self._events[self.limit :]
        return event

    def events(self) -> tuple[ActivityEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)
