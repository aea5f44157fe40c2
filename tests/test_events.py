import asyncio

from jaegerdev import events


def test_push_and_snapshot_newest_first():
    events.push("render", source="backend")
    events.push("full-reload", path="/tmp/jaeger-ui.config.json")

    snap = events.snapshot()
    assert [e["type"] for e in snap] == ["full-reload", "render"]
    assert snap[0]["path"] == "/tmp/jaeger-ui.config.json"
    assert "ts" in snap[0]


def test_snapshot_filters_by_type():
    events.push("render")
    events.push("full-reload")
    events.push("render")

    assert len(events.snapshot(event_type="render")) == 2
    assert len(events.snapshot(limit=1)) == 1


def test_broadcast_reaches_each_subscriber_once():
    async def run():
        a = events.subscribe()
        b = events.subscribe()
        delivered = events.broadcast("full-reload", path="x")
        return delivered, a.get_nowait(), b.get_nowait(), a.qsize(), b.qsize()

    delivered, ev_a, ev_b, left_a, left_b = asyncio.run(run())
    assert delivered == 2
    assert ev_a["type"] == ev_b["type"] == "full-reload"
    assert left_a == left_b == 0


def test_unsubscribed_queue_gets_nothing():
    async def run():
        queue = events.subscribe()
        events.unsubscribe(queue)
        return events.broadcast("full-reload"), queue.qsize()

    assert asyncio.run(run()) == (0, 0)
    assert events.subscriber_count() == 0


def test_full_queue_is_skipped():
    async def run():
        queue = events.subscribe()
        for _ in range(events._QUEUE_SIZE):
            events.broadcast("full-reload")
        return events.broadcast("full-reload"), queue.qsize()

    delivered, size = asyncio.run(run())
    assert delivered == 0
    assert size == events._QUEUE_SIZE
