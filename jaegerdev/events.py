"""In-memory event ring buffer plus fan-out to live-reload subscribers."""

import asyncio
import threading
from collections import deque
from datetime import datetime, timezone

_buffer = deque(maxlen=200)
_lock = threading.Lock()
_subscribers: set[asyncio.Queue] = set()

_QUEUE_SIZE = 32


def push(event_type: str, **kwargs) -> dict:
    """Append an event to the ring buffer."""
    event = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "type": event_type,
        **kwargs,
    }
    with _lock:
        _buffer.append(event)
    return event


def snapshot(limit: int = 100, event_type: str | None = None) -> list[dict]:
    """Return recent events, newest first. Optionally filter by type."""
    with _lock:
        items = list(_buffer)
    if event_type:
        items = [e for e in items if e["type"] == event_type]
    return list(reversed(items[-limit:]))


def subscribe() -> asyncio.Queue:
    queue = asyncio.Queue(maxsize=_QUEUE_SIZE)
    with _lock:
        _subscribers.add(queue)
    return queue


def unsubscribe(queue: asyncio.Queue):
    with _lock:
        _subscribers.discard(queue)


def subscriber_count() -> int:
    with _lock:
        return len(_subscribers)


def broadcast(event_type: str, **kwargs) -> int:
    """Record an event and hand it to every subscriber. Must run on the event loop.

    Returns how many subscribers received it. A subscriber whose queue is full
    already has a pending refresh, so it is skipped.
    """
    event = push(event_type, **kwargs)
    with _lock:
        queues = list(_subscribers)
    delivered = 0
    for queue in queues:
        try:
            queue.put_nowait(event)
            delivered += 1
        except asyncio.QueueFull:
            pass
    return delivered


def reset():
    """Drop all events and subscribers."""
    with _lock:
        _buffer.clear()
        _subscribers.clear()
