"""High-level façade composing the live feed, history queries and the event bus."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

import aiohttp

from pyquake._constants import ALL_PREFECTURES
from pyquake._transport import HttpTransport, Transport
from pyquake.bus import EventBus, EventCallback, Mailbox, SubscriptionHandle
from pyquake.config import QuakeConfig
from pyquake.exceptions import QuakeError
from pyquake.feed import FeedState, LiveFeedClient
from pyquake.history import HistoryQueryClient
from pyquake.models.event import SeismicEvent

_logger = logging.getLogger(__name__)


class IngestionService:
    """Entry point for UI collaborators.

    Usage::

        async with IngestionService() as service:
            handle = service.subscribe(print)
            await service.start()
            recent = await service.fetch_recent(20)

    The service owns its :class:`EventBus`; nothing is process-global.
    Query methods are coroutines and may run concurrently with each other
    and with the live feed; :meth:`stop` does not cancel them.
    """

    def __init__(
        self,
        config: QuakeConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        bus: EventBus | None = None,
        on_state_change: Callable[[FeedState], None] | None = None,
    ) -> None:
        self._config = config or QuakeConfig()
        self._external_session = session is not None
        self._http_session = session
        self._transport_override = transport
        self._bus = bus or EventBus()
        self._on_state_change = on_state_change
        self._feed: LiveFeedClient | None = None
        self._history: HistoryQueryClient | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> IngestionService:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(
                    total=self._config.read_timeout,
                    connect=self._config.connect_timeout,
                ),
            )
        transport = self._transport_override or HttpTransport(self._config, self._http_session)
        self._history = HistoryQueryClient(self._config, transport)
        self._feed = LiveFeedClient(
            self._config,
            self._bus,
            self._http_session,
            on_state_change=self._on_state_change,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._feed = None
        self._history = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_feed(self) -> LiveFeedClient:
        if self._feed is None:
            raise QuakeError("Service not initialized. Use 'async with IngestionService(...) as service:'")
        return self._feed

    def _require_history(self) -> HistoryQueryClient:
        if self._history is None:
            raise QuakeError("Service not initialized. Use 'async with IngestionService(...) as service:'")
        return self._history

    # ------------------------------------------------------------------
    # Live feed
    # ------------------------------------------------------------------

    @property
    def bus(self) -> EventBus:
        return self._bus

    @property
    def feed_state(self) -> FeedState:
        return self._feed.state if self._feed is not None else FeedState.DISCONNECTED

    async def start(self) -> None:
        """Open the realtime connection (reconnects automatically)."""
        _logger.info("Starting earthquake ingestion")
        await self._require_feed().start()

    async def stop(self) -> None:
        """Close the realtime connection.  Safe to call repeatedly."""
        if self._feed is not None:
            await self._feed.stop()

    def subscribe(self, callback: EventCallback) -> SubscriptionHandle:
        return self._bus.subscribe(callback)

    def unsubscribe(self, handle: SubscriptionHandle) -> bool:
        return self._bus.unsubscribe(handle)

    def mailbox(self, maxsize: int = 0) -> Mailbox:
        """Queue-backed subscription for consumers on another thread."""
        return self._bus.mailbox(maxsize)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def fetch_recent(self, limit: int | None = None) -> list[SeismicEvent]:
        """Latest earthquake notifications (``limit`` defaults to config)."""
        return await self._require_history().fetch_recent(limit)

    async def fetch_filtered(
        self,
        min_magnitude: float = 0.0,
        prefecture: str | None = ALL_PREFECTURES,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
    ) -> list[SeismicEvent]:
        """Filtered JMA archive query (fixed page size)."""
        return await self._require_history().fetch_filtered(min_magnitude, prefecture, start_date, end_date)
