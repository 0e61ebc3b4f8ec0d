from gui.app.bootstrap import create_app
from gui.repositories import InMemoryKeyValueStore
from gui.services.event_bus import EventBus, GUIEvent


def test_event_bus_shared_with_viewmodel():
    ctx = create_app(headless=True, store=InMemoryKeyValueStore())
    assert isinstance(ctx.event_bus, EventBus)
    assert ctx.viewmodel.event_bus is ctx.event_bus


def test_subscribe_publish_basic():
    bus = EventBus()
    received = []

    def handler(evt):
        received.append((evt.name, evt.payload))

    bus.subscribe(GUIEvent.SORT_CHANGED, handler)
    bus.publish(GUIEvent.SORT_CHANGED, {"field": "name"})
    assert received == [(GUIEvent.SORT_CHANGED.value, {"field": "name"})]


def test_once_subscription():
    bus = EventBus()
    count = 0

    def incr(_):
        nonlocal count
        count += 1

    bus.subscribe(GUIEvent.RECORDS_LOADED, incr, once=True)
    bus.publish(GUIEvent.RECORDS_LOADED)
    bus.publish(GUIEvent.RECORDS_LOADED)
    assert count == 1
    assert bus.subscriber_count(GUIEvent.RECORDS_LOADED) == 0


def test_error_isolation():
    bus = EventBus()
    order = []

    def bad(_):
        order.append("bad")
        raise RuntimeError("boom")

    def good(_):
        order.append("good")

    bus.subscribe("custom", bad)
    bus.subscribe("custom", good)
    bus.publish("custom", 123)
    assert order == ["bad", "good"]
    assert len(bus.errors) == 1


def test_unsubscribe_and_cancel():
    bus = EventBus()
    hits = []
    sub = bus.subscribe("x", hits.append)
    other = bus.subscribe("x", hits.append)
    other.cancel()
    bus.publish("x")
    bus.unsubscribe(sub)
    bus.publish("x")
    assert len(hits) == 1
    assert bus.subscriber_count("x") == 1  # cancelled handle stays until unsubscribed
