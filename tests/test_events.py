import pytest

from vasetopia_core.events import (
    AxisPointPlaced,
    EventDispatcher,
    ModeToggled,
    PointPlaced,
    RebuildRequested,
)


def test_handlers_run_in_subscription_order():
    bus = EventDispatcher()
    calls = []
    bus.subscribe(RebuildRequested, lambda e: calls.append("first"))
    bus.subscribe(RebuildRequested, lambda e: calls.append("second"))
    bus.publish(RebuildRequested())
    assert calls == ["first", "second"]


def test_events_are_routed_by_type():
    bus = EventDispatcher()
    seen = []
    bus.subscribe(PointPlaced, lambda e: seen.append(("point", e.position)))
    bus.subscribe(AxisPointPlaced, lambda e: seen.append(("axis", e.position)))
    bus.publish(AxisPointPlaced((0.5, 0.25)))
    bus.publish(PointPlaced((1.0, 2.0)))
    assert seen == [("axis", (0.5, 0.25)), ("point", (1.0, 2.0))]


def test_nested_publish_is_queued_until_current_event_finishes():
    bus = EventDispatcher()
    calls = []

    def first(event):
        calls.append("place-1")
        bus.publish(RebuildRequested())

    bus.subscribe(PointPlaced, first)
    bus.subscribe(PointPlaced, lambda e: calls.append("place-2"))
    bus.subscribe(RebuildRequested, lambda e: calls.append("rebuild"))
    bus.publish(PointPlaced((0.0, 0.0)))
    assert calls == ["place-1", "place-2", "rebuild"]


def test_cancelled_subscription_is_skipped():
    bus = EventDispatcher()
    calls = []
    sub = bus.subscribe(ModeToggled, lambda e: calls.append(1))
    bus.publish(ModeToggled())
    sub.cancel()
    sub.cancel()
    bus.publish(ModeToggled())
    assert calls == [1]
    assert not sub.active


def test_subscription_as_context_manager():
    bus = EventDispatcher()
    calls = []
    with bus.subscribe(ModeToggled, lambda e: calls.append(1)):
        bus.publish(ModeToggled())
    bus.publish(ModeToggled())
    assert calls == [1]


def test_dispatchers_are_independent():
    a, b = EventDispatcher(), EventDispatcher()
    calls = []
    a.subscribe(ModeToggled, lambda e: calls.append("a"))
    b.publish(ModeToggled())
    assert calls == []


def test_handler_error_propagates_and_dispatcher_recovers():
    bus = EventDispatcher()
    calls = []

    def boom(event):
        raise RuntimeError("boom")

    sub = bus.subscribe(ModeToggled, boom)
    with pytest.raises(RuntimeError):
        bus.publish(ModeToggled())
    sub.cancel()
    bus.subscribe(ModeToggled, lambda e: calls.append(1))
    bus.publish(ModeToggled())
    assert calls == [1]


def test_rejects_non_events():
    bus = EventDispatcher()
    with pytest.raises(TypeError):
        bus.subscribe(int, print)
    with pytest.raises(TypeError):
        bus.publish("rebuild")


def test_events_are_immutable_values():
    event = PointPlaced((1.0, 2.0))
    assert event == PointPlaced((1.0, 2.0))
    with pytest.raises(AttributeError):
        event.position = (0.0, 0.0)
