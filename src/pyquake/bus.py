"""Fan-out of normalized events to decoupled subscribers.

The registry is the only structure touched from more than one thread: UI
code subscribes and unsubscribes from its own thread while the feed task
publishes from the event loop.  Delivery works on a snapshot taken under
the lock, so callbacks run without holding it and may themselves
(un)subscribe.
"""

from __future__ import annotations

import itertools
import logging
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pyquake.exceptions import SubscriberError
from pyquake.models.event import SeismicEvent

_logger = logging.getLogger(__name__)

EventCallback = Callable[[SeismicEvent], Any]


@dataclass(frozen=True, slots=True)
class SubscriptionHandle:
    """Opaque token returned by :meth:`EventBus.subscribe`."""

    id: int


class EventBus:
    """Thread-safe registry of subscriber callbacks."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._subscribers: dict[SubscriptionHandle, EventCallback] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self, callback: EventCallback) -> SubscriptionHandle:
        """Register *callback*; it is invoked once per published event."""
        if not callable(callback):
            raise TypeError("callback must be callable")
        with self._lock:
            handle = SubscriptionHandle(next(self._ids))
            self._subscribers[handle] = callback
        _logger.debug("Subscriber %s registered", handle.id)
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> bool:
        """Remove a subscription.  Returns ``False`` if it was not registered."""
        with self._lock:
            removed = self._subscribers.pop(handle, None) is not None
        if removed:
            _logger.debug("Subscriber %s removed", handle.id)
        return removed

    def mailbox(self, maxsize: int = 0) -> Mailbox:
        """Subscribe a thread-safe queue instead of a callback."""
        return Mailbox(self, maxsize=maxsize)

    def publish(self, event: SeismicEvent) -> int:
        """Deliver *event* to every current subscriber.

        A failing subscriber is logged as a :class:`SubscriberError` and
        does not affect the others.  Returns the number of successful
        deliveries.
        """
        with self._lock:
            snapshot = list(self._subscribers.items())

        delivered = 0
        for handle, callback in snapshot:
            try:
                callback(event)
            except Exception as exc:
                error = SubscriberError(
                    f"Subscriber {handle.id} failed for event {event.id}: {exc}",
                    handle=handle,
                    event_id=event.id,
                )
                error.__cause__ = exc
                _logger.error("%s", error, exc_info=error)
            else:
                delivered += 1
        return delivered


class Mailbox:
    """Queue-backed subscription for consumers living on another thread.

    Typical UI usage::

        mailbox = service.mailbox()
        ...
        for event in mailbox.drain():  # on the UI thread's timer
            table.add(event)
    """

    def __init__(self, bus: EventBus, *, maxsize: int = 0) -> None:
        self._bus = bus
        self._queue: queue.Queue[SeismicEvent] = queue.Queue(maxsize=maxsize)
        self._handle: SubscriptionHandle | None = bus.subscribe(self._put)

    def __enter__(self) -> Mailbox:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _put(self, event: SeismicEvent) -> None:
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            _logger.warning("Mailbox full, dropping event %s", event.id)

    def get(self, timeout: float | None = None) -> SeismicEvent | None:
        """Block up to *timeout* seconds for the next event (``None`` on timeout)."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def get_nowait(self) -> SeismicEvent | None:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None

    def drain(self) -> list[SeismicEvent]:
        """Return every queued event in arrival order without blocking."""
        events: list[SeismicEvent] = []
        while True:
            event = self.get_nowait()
            if event is None:
                return events
            events.append(event)

    def close(self) -> None:
        """Stop receiving events.  Already queued events stay readable."""
        handle = self._handle
        self._handle = None
        if handle is not None:
            self._bus.unsubscribe(handle)
