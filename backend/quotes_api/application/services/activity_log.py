"""Activity log — append-only, in-memory record of quote engagement events."""

import logging
from collections.abc import Callable
from datetime import datetime

from quotes_api.domain.entities import ActivityEvent, ActivityType

logger = logging.getLogger(__name__)

ActivityListener = Callable[[ActivityEvent], None]


class ActivityLog:
    """Ordered sequence of ActivityEvents; insertion order is chronological order.

    Events are never mutated or evicted. Each appended event is handed to the
    registered listeners, which is how subscriptions are fanned out.
    """

    def __init__(self) -> None:
        self._events: list[ActivityEvent] = []
        self._listeners: list[ActivityListener] = []

    def add_listener(self, listener: ActivityListener) -> None:
        self._listeners.append(listener)

    def append(self, event: ActivityEvent) -> ActivityEvent:
        self._events.append(event)
        logger.debug(
            "Activity %s quote=%s user=%s", event.type.value, event.quote_id, event.user_id
        )
        for listener in self._listeners:
            try:
                listener(event)
            except Exception:
                logger.exception("Activity listener failed for %s", event.type.value)
        return event

    def record(
        self,
        event_type: ActivityType,
        quote_id: str,
        user_id: str | None = None,
        details: str | None = None,
    ) -> ActivityEvent:
        """Build a timestamped event and append it."""
        return self.append(
            ActivityEvent(type=event_type, quote_id=quote_id, user_id=user_id, details=details)
        )

    def events(
        self,
        *,
        event_type: ActivityType | None = None,
        since: datetime | None = None,
        quote_id: str | None = None,
        user_id: str | None = None,
    ) -> list[ActivityEvent]:
        """Events matching every given criterion, oldest first. ``since`` is inclusive."""
        return [
            event
            for event in self._events
            if (event_type is None or event.type == event_type)
            and (since is None or event.timestamp >= since)
            and (quote_id is None or event.quote_id == quote_id)
            and (user_id is None or event.user_id == user_id)
        ]

    def recent(self, limit: int, *, since: datetime | None = None) -> list[ActivityEvent]:
        """The ``limit`` newest events, newest first."""
        if limit <= 0:
            return []
        return list(reversed(self.events(since=since)[-limit:]))

    def latest_for_quote(self, quote_id: str) -> ActivityEvent | None:
        for event in reversed(self._events):
            if event.quote_id == quote_id:
                return event
        return None

    def oldest_timestamp(self) -> datetime | None:
        return self._events[0].timestamp if self._events else None

    def __len__(self) -> int:
        return len(self._events)
