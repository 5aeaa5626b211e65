"""Persistent WebSocket client for the P2PQuake realtime feed.

State machine::

    disconnected -> connecting -> connected -> reconnecting -> connecting -> ...
                                          \\-> disconnected   (stop())

A remote close always schedules a reconnect after ``reconnect_delay``.
A transport error (failed handshake, error frame) reconnects only when
``QuakeConfig.reconnect_on_error`` is set; otherwise the feed ends in
``disconnected``.  Frames are decoded and published inline, so events
reach the bus in the order the server sent them.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import json
import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pyquake._constants import EARTHQUAKE_CODE
from pyquake._preview import preview_for_log
from pyquake.bus import EventBus
from pyquake.config import QuakeConfig
from pyquake.exceptions import MalformedEventError, TransportError
from pyquake.ingestion.events import parse_realtime_event
from pyquake.models.event import SeismicEvent

_logger = logging.getLogger(__name__)


class FeedState(enum.StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    RECONNECTING = "reconnecting"


class _CloseReason(enum.Enum):
    REMOTE = "remote"
    ERROR = "error"


class LiveFeedClient:
    """Streams earthquake notifications from the realtime endpoint onto an :class:`EventBus`."""

    def __init__(
        self,
        config: QuakeConfig,
        bus: EventBus,
        http_session: aiohttp.ClientSession,
        *,
        on_state_change: Callable[[FeedState], None] | None = None,
    ) -> None:
        self._config = config
        self._bus = bus
        self._http = http_session
        self._on_state_change = on_state_change
        self._state = FeedState.DISCONNECTED
        self._task: asyncio.Task[None] | None = None
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._stopping = False

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether the connection task is alive (connected or retrying)."""
        return self._task is not None and not self._task.done()

    def _set_state(self, state: FeedState) -> None:
        if state == self._state:
            return
        _logger.debug("Live feed %s -> %s", self._state, state)
        self._state = state
        if self._on_state_change is not None:
            try:
                self._on_state_change(state)
            except Exception:
                _logger.warning("on_state_change callback failed", exc_info=True)

    async def start(self) -> None:
        """Open the feed in the background.  No-op while already running."""
        if self.is_running:
            return
        self._stopping = False
        self._set_state(FeedState.CONNECTING)
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pyquake-live-feed")

    async def stop(self) -> None:
        """Close the socket and cancel any pending reconnect.  Idempotent."""
        self._stopping = True
        task = self._task
        self._task = None
        if task is not None:
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            elif not task.cancelled() and task.exception() is not None:
                _logger.error("Live feed task had failed", exc_info=task.exception())
        ws = self._ws
        self._ws = None
        if ws is not None and not ws.closed:
            await ws.close()
        self._set_state(FeedState.DISCONNECTED)

    async def _run(self) -> None:
        try:
            while not self._stopping:
                reason = await self._connect_once()
                if self._stopping:
                    break
                if reason is _CloseReason.ERROR and not self._config.reconnect_on_error:
                    _logger.warning("Live feed stopped after transport error (reconnect_on_error disabled)")
                    break
                self._set_state(FeedState.RECONNECTING)
                _logger.info("Reconnecting live feed in %.1fs", self._config.reconnect_delay)
                await asyncio.sleep(self._config.reconnect_delay)
                self._set_state(FeedState.CONNECTING)
        finally:
            self._set_state(FeedState.DISCONNECTED)

    async def _connect_once(self) -> _CloseReason:
        url = self._config.websocket_url
        heartbeat = self._config.heartbeat if self._config.heartbeat > 0 else None
        try:
            async with self._http.ws_connect(url, heartbeat=heartbeat) as ws:
                self._ws = ws
                self._set_state(FeedState.CONNECTED)
                _logger.info("Live feed connected to %s", url)
                async for msg in ws:
                    if msg.type == aiohttp.WSMsgType.TEXT:
                        self._handle_frame(msg.data)
                    elif msg.type == aiohttp.WSMsgType.ERROR:
                        _logger.error("Live feed transport error: %r", ws.exception())
                        return _CloseReason.ERROR
                _logger.info("Live feed closed by remote: code=%s", ws.close_code)
                return _CloseReason.REMOTE
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            error = TransportError(f"Live feed connection to {url} failed: {exc!r}", endpoint=url)
            _logger.error("%s", error)
            return _CloseReason.ERROR
        except Exception:
            _logger.exception("Live feed read loop failed unexpectedly")
            return _CloseReason.ERROR
        finally:
            self._ws = None

    def _handle_frame(self, data: str) -> SeismicEvent | None:
        """Decode and publish one text frame.  Bad frames are logged and dropped."""
        try:
            message: Any = json.loads(data)
        except (ValueError, RecursionError) as exc:
            _logger.warning("Dropping undecodable frame (%s): %s", type(exc).__name__, preview_for_log(data))
            return None

        if not isinstance(message, dict) or message.get("code") != EARTHQUAKE_CODE:
            return None

        try:
            event = parse_realtime_event(message)
        except MalformedEventError as exc:
            _logger.warning(
                "Dropping malformed earthquake frame: %s payload=%s",
                exc,
                preview_for_log(exc.payload),
            )
            return None

        _logger.debug("Publishing event %s (%s M%s)", event.id, event.epicenter_name, event.magnitude)
        self._bus.publish(event)
        return event
