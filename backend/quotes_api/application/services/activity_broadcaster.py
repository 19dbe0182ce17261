"""Activity broadcaster — in-process, per-topic fan-out of activity events as SSE."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from quotes_api.domain.entities import ActivityEvent, ActivityType

logger = logging.getLogger(__name__)

NEW_QUOTE_TOPIC = "new_quote_added"
TRENDING_TOPIC = "trending_updated"

# Per-subscriber buffer; a subscriber that falls this far behind is dropped.
MAX_PENDING_EVENTS = 100


def quote_liked_topic(quote_id: str) -> str:
    return f"quote_liked:{quote_id}"


def user_activity_topic(user_id: str) -> str:
    return f"user_activity:{user_id}"


def event_to_dict(event: ActivityEvent) -> dict[str, Any]:
    return {
        "type": event.type.value,
        "quote_id": event.quote_id,
        "user_id": event.user_id,
        "timestamp": event.timestamp.isoformat(),
        "details": event.details,
    }


class ActivityBroadcaster:
    """Manages topic subscriptions and pushes activity events to subscribers.

    Each subscriber gets its own asyncio.Queue registered under one topic.
    Publishing pushes the formatted SSE message to every queue of that topic.
    Subscribers consume messages via an async generator.
    """

    def __init__(self) -> None:
        self._queues: dict[str, list[asyncio.Queue[str | None]]] = {}

    async def subscribe(self, topic: str) -> AsyncGenerator[str, None]:
        """Subscribe to a topic. Yields formatted SSE strings.

        The generator automatically unsubscribes when the client disconnects.
        """
        queue: asyncio.Queue[str | None] = asyncio.Queue(maxsize=MAX_PENDING_EVENTS)
        self._queues.setdefault(topic, []).append(queue)
        try:
            while True:
                message = await queue.get()
                if message is None:
                    break
                yield message
        finally:
            self._discard(topic, queue)

    def publish(self, topic: str, event_type: str, data: dict[str, Any]) -> None:
        """Push an SSE message to every subscriber of ``topic``."""
        queues = self._queues.get(topic)
        if not queues:
            return

        sse_message = f"event: {event_type}\ndata: {json.dumps(data)}\n\n"
        dead_queues: list[asyncio.Queue[str | None]] = []

        for queue in queues:
            try:
                queue.put_nowait(sse_message)
            except asyncio.QueueFull:
                dead_queues.append(queue)
                logger.warning("Subscriber queue full on %s — disconnecting", topic)

        for q in dead_queues:
            # Drain one slot so the close sentinel fits.
            q.get_nowait()
            q.put_nowait(None)
            self._discard(topic, q)

    def handle_activity(self, event: ActivityEvent) -> None:
        """ActivityLog listener: route an event to the topics interested in it."""
        payload = event_to_dict(event)
        if event.type == ActivityType.QUOTE_LIKED:
            self.publish(quote_liked_topic(event.quote_id), event.type.value, payload)
        elif event.type == ActivityType.NEW_QUOTE_ADDED:
            self.publish(NEW_QUOTE_TOPIC, event.type.value, payload)
        if event.user_id:
            self.publish(user_activity_topic(event.user_id), event.type.value, payload)

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for queues in self._queues.values():
            for queue in queues:
                if queue.full():
                    queue.get_nowait()
                queue.put_nowait(None)
        self._queues.clear()

    def subscriber_count(self, topic: str | None = None) -> int:
        if topic is not None:
            return len(self._queues.get(topic, []))
        return sum(len(queues) for queues in self._queues.values())

    def _discard(self, topic: str, queue: asyncio.Queue[str | None]) -> None:
        queues = self._queues.get(topic)
        if queues and queue in queues:
            queues.remove(queue)
            if not queues:
                del self._queues[topic]
