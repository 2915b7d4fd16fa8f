from autoheight.core.events import EventBus


def test_event_bus_invokes_subscribers():
    bus = EventBus()
    received = []
    bus.subscribe("topic", lambda payload: received.append(payload))
    bus.emit("topic", 42)
    assert received == [42]


def test_subscribe_is_idempotent_and_unsubscribe_removes():
    bus = EventBus()
    received = []
    handler = received.append
    bus.subscribe("topic", handler)
    bus.subscribe("topic", handler)
    bus.emit("topic", 1)
    bus.unsubscribe("topic", handler)
    bus.emit("topic", 2)
    assert received == [1]


def test_failing_handler_does_not_stop_others():
    bus = EventBus()
    received = []

    def broken(payload):
        raise ValueError("boom")

    bus.subscribe("topic", broken)
    bus.subscribe("topic", received.append)
    bus.emit("topic", "ok")
    assert received == ["ok"]
