from __future__ import annotations

import logging
import threading
from datetime import datetime

import pytest

from pyquake.bus import EventBus, SubscriptionHandle
from pyquake.exceptions import SubscriberError
from pyquake.models.event import SeismicEvent


def _event(event_id: str = "evt-1") -> SeismicEvent:
    return SeismicEvent(
        id=event_id,
        occurred_at=datetime(2024, 1, 1, 12, 0, 0),
        epicenter_name="Tokyo",
        latitude=35.6,
        longitude=139.7,
        magnitude=5.2,
        depth_km=30,
        max_intensity_label="5+",
    )


def test_publish_reaches_every_subscriber_once() -> None:
    bus = EventBus()
    received: dict[str, list[str]] = {"a": [], "b": [], "c": []}
    for name in received:
        bus.subscribe(lambda event, name=name: received[name].append(event.id))

    delivered = bus.publish(_event())

    assert delivered == 3
    assert received == {"a": ["evt-1"], "b": ["evt-1"], "c": ["evt-1"]}


def test_failing_subscriber_is_isolated(caplog: pytest.LogCaptureFixture) -> None:
    bus = EventBus()
    calls: list[str] = []

    def boom(_event: SeismicEvent) -> None:
        calls.append("boom")
        raise RuntimeError("subscriber exploded")

    bus.subscribe(lambda e: calls.append("first"))
    failing = bus.subscribe(boom)
    bus.subscribe(lambda e: calls.append("last"))

    with caplog.at_level(logging.ERROR, logger="pyquake.bus"):
        delivered = bus.publish(_event())

    assert delivered == 2
    assert sorted(calls) == ["boom", "first", "last"]
    records = [r for r in caplog.records if r.name == "pyquake.bus"]
    assert len(records) == 1
    error = records[0].exc_info[1]
    assert isinstance(error, SubscriberError)
    assert error.handle == failing
    assert error.event_id == "evt-1"
    assert isinstance(error.__cause__, RuntimeError)


def test_unsubscribe_stops_delivery() -> None:
    bus = EventBus()
    received: list[str] = []
    handle = bus.subscribe(lambda e: received.append(e.id))

    bus.publish(_event("one"))
    assert bus.unsubscribe(handle) is True
    bus.publish(_event("two"))

    assert received == ["one"]
    assert len(bus) == 0


def test_unsubscribe_unknown_handle_returns_false() -> None:
    bus = EventBus()
    assert bus.unsubscribe(SubscriptionHandle(42)) is False


def test_same_callback_subscribed_twice_gets_two_handles() -> None:
    bus = EventBus()
    received: list[str] = []
    first = bus.subscribe(received.append)
    second = bus.subscribe(received.append)

    assert first != second
    bus.publish(_event())
    assert len(received) == 2


def test_subscribe_rejects_non_callable() -> None:
    with pytest.raises(TypeError):
        EventBus().subscribe("not-callable")  # type: ignore[arg-type]


def test_callback_may_unsubscribe_during_delivery() -> None:
    bus = EventBus()
    received: list[str] = []
    handles: list[SubscriptionHandle] = []

    def once(event: SeismicEvent) -> None:
        received.append(event.id)
        bus.unsubscribe(handles[0])

    handles.append(bus.subscribe(once))
    bus.publish(_event("one"))
    bus.publish(_event("two"))

    assert received == ["one"]


def test_concurrent_subscribe_and_publish() -> None:
    bus = EventBus()
    counter = {"n": 0}
    lock = threading.Lock()

    def count(_event: SeismicEvent) -> None:
        with lock:
            counter["n"] += 1

    stop = threading.Event()

    def churn() -> None:
        while not stop.is_set():
            handle = bus.subscribe(count)
            bus.unsubscribe(handle)

    workers = [threading.Thread(target=churn) for _ in range(4)]
    for worker in workers:
        worker.start()
    try:
        for _ in range(500):
            bus.publish(_event())
    finally:
        stop.set()
        for worker in workers:
            worker.join()

    assert len(bus) == 0


class TestMailbox:
    def test_drain_returns_events_in_order(self) -> None:
        bus = EventBus()
        mailbox = bus.mailbox()

        bus.publish(_event("one"))
        bus.publish(_event("two"))

        assert [e.id for e in mailbox.drain()] == ["one", "two"]
        assert mailbox.drain() == []

    def test_get_from_other_thread(self) -> None:
        bus = EventBus()
        mailbox = bus.mailbox()
        result: list[str] = []

        def consume() -> None:
            event = mailbox.get(timeout=2.0)
            if event is not None:
                result.append(event.id)

        consumer = threading.Thread(target=consume)
        consumer.start()
        bus.publish(_event("threaded"))
        consumer.join(timeout=5.0)

        assert result == ["threaded"]

    def test_get_times_out(self) -> None:
        mailbox = EventBus().mailbox()
        assert mailbox.get(timeout=0.01) is None

    def test_close_unsubscribes(self) -> None:
        bus = EventBus()
        with bus.mailbox() as mailbox:
            assert len(bus) == 1
        assert mailbox.closed
        assert len(bus) == 0
        bus.publish(_event())
        assert mailbox.get_nowait() is None

    def test_full_mailbox_drops_and_logs(self, caplog: pytest.LogCaptureFixture) -> None:
        bus = EventBus()
        mailbox = bus.mailbox(maxsize=1)

        with caplog.at_level(logging.WARNING, logger="pyquake.bus"):
            delivered_first = bus.publish(_event("one"))
            delivered_second = bus.publish(_event("two"))

        assert delivered_first == delivered_second == 1
        assert [e.id for e in mailbox.drain()] == ["one"]
        assert "dropping event two" in caplog.text
