"""Historical and filtered earthquake queries."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from pyquake._constants import (
    ALL_PREFECTURES,
    EARTHQUAKE_CODE,
    HISTORY_ENDPOINT,
    JMA_QUAKE_ENDPOINT,
)
from pyquake._transport import QueryParams, Transport
from pyquake.config import QuakeConfig
from pyquake.exceptions import MalformedEventError, TransportError
from pyquake.ingestion.events import parse_historical_event, parse_realtime_event
from pyquake.models.event import SeismicEvent

_logger = logging.getLogger(__name__)


def _iso_date(value: date | datetime) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def build_filtered_params(
    min_magnitude: float,
    prefecture: str | None,
    start_date: date | datetime | None,
    end_date: date | datetime | None,
    *,
    page_size: int,
) -> dict[str, str | int]:
    """Build ``/jma/quake`` query parameters, omitting every default filter."""
    params: dict[str, str | int] = {}
    if min_magnitude > 0:
        params["minMagnitude"] = str(float(min_magnitude))
    if prefecture and prefecture != ALL_PREFECTURES:
        params["prefecture"] = prefecture
    if start_date is not None:
        params["sinceDate"] = _iso_date(start_date)
    if end_date is not None:
        params["untilDate"] = _iso_date(end_date)
    params["limit"] = page_size
    return params


class HistoryQueryClient:
    """Request/response queries against the REST API.

    Every call is all-or-nothing: a transport problem raises
    :class:`TransportError`, a single malformed entry raises
    :class:`MalformedEventError`, and no partial list is returned.
    """

    def __init__(self, config: QuakeConfig, transport: Transport) -> None:
        self._config = config
        self._transport = transport

    async def _fetch_array(self, endpoint: str, params: QueryParams) -> list[Any]:
        body = await self._transport.get_json(endpoint, params)
        if not isinstance(body, list):
            raise TransportError(
                f"Expected JSON array from {endpoint}, got {type(body).__name__}",
                endpoint=endpoint,
            )
        return body

    @staticmethod
    def _decode_all(
        nodes: list[Any],
        parse: Callable[[Any], SeismicEvent],
        endpoint: str,
    ) -> list[SeismicEvent]:
        try:
            return [parse(node) for node in nodes]
        except MalformedEventError:
            _logger.warning("Malformed entry in %s response, discarding %d entries", endpoint, len(nodes))
            raise

    async def fetch_recent(self, limit: int | None = None) -> list[SeismicEvent]:
        """Most recent earthquake notifications, newest first.

        ``/history`` entries share the realtime push shape.  Only objects whose
        ``code`` is 551 are decoded; objects with another code or no ``code``
        at all are skipped.  A non-object entry fails the call as malformed.
        """
        if limit is None:
            limit = self._config.default_recent_limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        nodes = await self._fetch_array(HISTORY_ENDPOINT, {"codes": EARTHQUAKE_CODE, "limit": limit})
        quakes = [
            node
            for node in nodes
            if not isinstance(node, dict) or node.get("code") == EARTHQUAKE_CODE
        ]
        if len(quakes) != len(nodes):
            _logger.debug("Skipped %d non-earthquake history entries", len(nodes) - len(quakes))
        return self._decode_all(quakes, parse_realtime_event, HISTORY_ENDPOINT)

    async def fetch_filtered(
        self,
        min_magnitude: float = 0.0,
        prefecture: str | None = ALL_PREFECTURES,
        start_date: date | datetime | None = None,
        end_date: date | datetime | None = None,
    ) -> list[SeismicEvent]:
        """Query the JMA earthquake archive.

        Parameters
        ----------
        min_magnitude : float
            Only sent when greater than zero.
        prefecture : str or None
            Only sent when not ``"All Prefectures"`` (or empty).
        start_date, end_date : date or None
            Inclusive calendar-date bounds, sent as ``YYYY-MM-DD``.
        """
        params = build_filtered_params(
            min_magnitude,
            prefecture,
            start_date,
            end_date,
            page_size=self._config.filtered_page_size,
        )
        nodes = await self._fetch_array(JMA_QUAKE_ENDPOINT, params)
        return self._decode_all(nodes, parse_historical_event, JMA_QUAKE_ENDPOINT)
