from core import metrics
from core.eventbus import EventBus


def test_eventbus_basic_dispatch():
    bus = EventBus()
    got = []
    bus.subscribe("TestEvent", lambda p: got.append(p["value"]))
    bus.subscribe("TestEvent", lambda p: got.append(p["value"] * 2))
    assert bus.emit("TestEvent", {"value": 3}) == 0
    assert sorted(got) == [3, 6]
    snap = metrics.snapshot()["counters"]
    assert any("events_emitted_total" in k for k in snap)


def test_handler_isolation():
    bus = EventBus()
    got = []

    def bad(p):
        raise ValueError("boom")

    bus.subscribe("E", bad)
    bus.subscribe("E", lambda p: got.append(p["ts"]))
    assert bus.emit("E", {}) == 1
    assert len(got) == 1
    assert metrics.counter("handler_exceptions_total", {"event": "E"}) == 1


def test_buses_are_independent():
    a, b = EventBus(), EventBus()
    got = []
    a.subscribe("E", lambda p: got.append("a"))
    b.emit("E", {})
    assert got == []
