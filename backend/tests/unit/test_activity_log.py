"""Unit tests for the ActivityLog and ActivityBroadcaster."""

import asyncio
import json
from datetime import datetime, timedelta, timezone

import pytest

from quotes_api.application.services import ActivityBroadcaster, ActivityLog
from quotes_api.application.services.activity_broadcaster import (
    MAX_PENDING_EVENTS,
    NEW_QUOTE_TOPIC,
    quote_liked_topic,
    user_activity_topic,
)
from quotes_api.domain.entities import ActivityEvent, ActivityType


# ── ActivityLog ──


def test_events_filter_by_type_quote_and_user(activity_log: ActivityLog):
    activity_log.record(ActivityType.QUOTE_LIKED, "q1", "alice")
    activity_log.record(ActivityType.QUOTE_LIKED, "q2", "bob")
    activity_log.record(ActivityType.QUOTE_SHARED, "q1", "alice")

    assert len(activity_log.events(event_type=ActivityType.QUOTE_LIKED)) == 2
    assert [e.quote_id for e in activity_log.events(user_id="bob")] == ["q2"]
    assert len(activity_log.events(quote_id="q1")) == 2


def test_since_is_inclusive(activity_log: ActivityLog):
    cutoff = datetime(2026, 1, 1, tzinfo=timezone.utc)
    activity_log.append(ActivityEvent(ActivityType.QUOTE_LIKED, "old", timestamp=cutoff - timedelta(seconds=1)))
    activity_log.append(ActivityEvent(ActivityType.QUOTE_LIKED, "edge", timestamp=cutoff))

    assert [e.quote_id for e in activity_log.events(since=cutoff)] == ["edge"]


def test_recent_returns_newest_first(activity_log: ActivityLog):
    for quote_id in ("q1", "q2", "q3"):
        activity_log.record(ActivityType.NEW_QUOTE_ADDED, quote_id)

    assert [e.quote_id for e in activity_log.recent(2)] == ["q3", "q2"]
    assert activity_log.recent(0) == []


def test_latest_for_quote(activity_log: ActivityLog):
    activity_log.record(ActivityType.QUOTE_LIKED, "q1", "alice")
    activity_log.record(ActivityType.QUOTE_SHARED, "q1", "alice")

    assert activity_log.latest_for_quote("q1").type == ActivityType.QUOTE_SHARED
    assert activity_log.latest_for_quote("missing") is None


def test_failing_listener_does_not_block_append(activity_log: ActivityLog):
    received: list[ActivityEvent] = []

    def broken(event: ActivityEvent) -> None:
        raise RuntimeError("boom")

    activity_log.add_listener(broken)
    activity_log.add_listener(received.append)
    activity_log.record(ActivityType.QUOTE_LIKED, "q1", "alice")

    assert len(activity_log) == 1
    assert len(received) == 1


# ── ActivityBroadcaster ──


async def _start(stream):
    """Start consuming a subscription so its queue is registered."""

    async def next_message():
        return await stream.__anext__()

    task = asyncio.create_task(next_message())
    await asyncio.sleep(0)
    return task


@pytest.mark.asyncio
async def test_subscriber_receives_published_message():
    broadcaster = ActivityBroadcaster()
    stream = broadcaster.subscribe("topic")
    task = await _start(stream)

    broadcaster.publish("topic", "PING", {"value": 1})
    message = await asyncio.wait_for(task, timeout=1)

    assert message.startswith("event: PING\n")
    assert json.loads(message.split("data: ", 1)[1]) == {"value": 1}
    await stream.aclose()
    assert broadcaster.subscriber_count() == 0


@pytest.mark.asyncio
async def test_liked_event_routed_to_quote_and_user_topics(
    activity_log: ActivityLog, broadcaster: ActivityBroadcaster
):
    quote_stream = broadcaster.subscribe(quote_liked_topic("q1"))
    user_stream = broadcaster.subscribe(user_activity_topic("alice"))
    new_stream = broadcaster.subscribe(NEW_QUOTE_TOPIC)
    quote_task = await _start(quote_stream)
    user_task = await _start(user_stream)
    new_task = await _start(new_stream)

    activity_log.record(ActivityType.QUOTE_LIKED, "q1", "alice")

    assert "QUOTE_LIKED" in await asyncio.wait_for(quote_task, timeout=1)
    assert "alice" in await asyncio.wait_for(user_task, timeout=1)
    assert not new_task.done()

    await broadcaster.shutdown()
    with pytest.raises(StopAsyncIteration):
        await asyncio.wait_for(new_task, timeout=1)


@pytest.mark.asyncio
async def test_slow_subscriber_is_disconnected():
    broadcaster = ActivityBroadcaster()
    stream = broadcaster.subscribe("topic")
    first = await _start(stream)

    for i in range(MAX_PENDING_EVENTS + 2):
        broadcaster.publish("topic", "PING", {"i": i})

    assert broadcaster.subscriber_count("topic") == 0
    assert "PING" in await asyncio.wait_for(first, timeout=1)
