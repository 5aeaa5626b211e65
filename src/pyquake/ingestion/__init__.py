"""Ingestion layer.

Adapters that turn upstream earthquake payloads (push frames, history and
query responses) into normalized :class:`~pyquake.models.SeismicEvent`
objects.
"""

from pyquake.ingestion.events import (
    HISTORICAL_LAYOUT,
    REALTIME_LAYOUT,
    PayloadLayout,
    parse_historical_event,
    parse_realtime_event,
)

__all__ = [
    "HISTORICAL_LAYOUT",
    "PayloadLayout",
    "REALTIME_LAYOUT",
    "parse_historical_event",
    "parse_realtime_event",
]
