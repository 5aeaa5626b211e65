"""Custom exception hierarchy for pyquake."""

from __future__ import annotations

from typing import Any


class QuakeError(Exception):
    """Base exception for all pyquake errors."""


class QuakeConfigError(QuakeError):
    """Invalid or missing configuration."""


class MalformedEventError(QuakeError):
    """Upstream event payload could not be normalized.

    Raised when a required field is missing or has the wrong type, when an
    optional field is present with the wrong type, or when the event time
    does not match ``yyyy/MM/dd HH:mm:ss``.  The offending payload is kept
    on :attr:`payload` so callers can log it.
    """

    def __init__(self, message: str, *, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(message)


class TransportError(QuakeError):
    """HTTP or WebSocket failure (network, non-2xx, invalid or non-array JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class SubscriberError(QuakeError):
    """A subscriber callback raised while an event was being delivered.

    Always chained to the original exception via ``__cause__``.  Only
    ever logged by :class:`~pyquake.bus.EventBus`; never raised to the
    publisher.
    """

    def __init__(self, message: str, *, handle: Any = None, event_id: str = "") -> None:
        self.handle = handle
        self.event_id = event_id
        super().__init__(message)
