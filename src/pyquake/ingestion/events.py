"""Earthquake payload -> :class:`SeismicEvent` normalization.

Two upstream shapes exist: the realtime shape (WebSocket push frames and
``/history`` entries) and the historical shape returned by ``/jma/quake``.
Both are described by a :class:`PayloadLayout` and run through one
extraction routine, so optional-field handling can never diverge between
them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from pyquake.exceptions import MalformedEventError
from pyquake.ingestion.normalize import (
    MISSING,
    KeyPath,
    as_float,
    as_int,
    as_list,
    as_str,
    lookup,
    parse_event_time,
    require,
)
from pyquake.models.event import SeismicEvent
from pyquake.models.scale import UNKNOWN_LABEL, to_intensity_label


NO_TSUNAMI = "None"


@dataclass(frozen=True)
class PayloadLayout:
    """Where each logical field lives inside one upstream shape.

    Hypocenter fields (``name``, ``latitude``, ``longitude``,
    ``magnitude``, ``depth``) are read relative to :attr:`hypocenter`;
    point fields (``addr``, ``scale``) relative to each entry of
    :attr:`points`.
    """

    name: str
    id: KeyPath
    hypocenter: KeyPath
    time: KeyPath
    max_scale: KeyPath
    tsunami: KeyPath
    points: KeyPath


REALTIME_LAYOUT = PayloadLayout(
    name="realtime",
    id=("id",),
    hypocenter=("earthquake", "hypocenter"),
    time=("earthquake", "time"),
    max_scale=("earthquake", "maxScale"),
    tsunami=("earthquake", "domesticTsunami"),
    points=("points",),
)

# /jma/quake currently nests fields exactly like the push shape; it is kept
# as its own layout so the endpoints can drift independently.
HISTORICAL_LAYOUT = PayloadLayout(
    name="historical",
    id=("id",),
    hypocenter=("earthquake", "hypocenter"),
    time=("earthquake", "time"),
    max_scale=("earthquake", "maxScale"),
    tsunami=("earthquake", "domesticTsunami"),
    points=("points",),
)


def compose_intensity_label(label: str, tsunami: str | None) -> str:
    """Append the tsunami advisory to *label* unless it is absent or ``"None"``."""
    if tsunami is None or tsunami == NO_TSUNAMI:
        return label
    return f"{label} (Tsunami: {tsunami})"


def _max_intensity(payload: Any, layout: PayloadLayout) -> str:
    raw_scale = lookup(payload, layout.max_scale)
    if raw_scale is MISSING or raw_scale is None:
        label = UNKNOWN_LABEL
    else:
        label = to_intensity_label(as_int(raw_scale, layout.max_scale, payload))

    raw_tsunami = lookup(payload, layout.tsunami)
    tsunami = None if raw_tsunami is MISSING or raw_tsunami is None else as_str(raw_tsunami, layout.tsunami, payload)
    return compose_intensity_label(label, tsunami)


def _affected_areas(payload: Any, layout: PayloadLayout) -> tuple[str, ...]:
    raw_points = lookup(payload, layout.points)
    if raw_points is MISSING or raw_points is None:
        return ()

    areas: list[str] = []
    for index, point in enumerate(as_list(raw_points, layout.points, payload)):
        prefix = (*layout.points, str(index))
        if not isinstance(point, dict) or point.get("addr") is None or point.get("scale") is None:
            raise MalformedEventError(
                f"field '{'.'.join(prefix)}' must be an object with 'addr' and 'scale'",
                payload=payload,
            )
        addr = as_str(point["addr"], (*prefix, "addr"), payload)
        scale = as_int(point["scale"], (*prefix, "scale"), payload)
        areas.append(f"{addr}: {to_intensity_label(scale)}")
    return tuple(areas)


def normalize_event(payload: Any, layout: PayloadLayout) -> SeismicEvent:
    """Build a :class:`SeismicEvent` from *payload* laid out as *layout*.

    Raises
    ------
    MalformedEventError
        A required field is missing or mistyped, an optional field is
        mistyped, or the event time is not ``yyyy/MM/dd HH:mm:ss``.
    """
    if not isinstance(payload, dict):
        raise MalformedEventError(
            f"{layout.name} event must be a JSON object, got {type(payload).__name__}",
            payload=payload,
        )

    def _hypo(key: str) -> tuple[Any, KeyPath]:
        path = (*layout.hypocenter, key)
        return require(payload, path), path

    hypocenter = require(payload, layout.hypocenter)
    if not isinstance(hypocenter, dict):
        raise MalformedEventError(
            f"field '{'.'.join(layout.hypocenter)}' must be an object",
            payload=payload,
        )

    event_id = as_str(require(payload, layout.id), layout.id, payload)
    occurred_at = parse_event_time(require(payload, layout.time), layout.time, payload)

    try:
        return SeismicEvent(
            id=event_id,
            occurred_at=occurred_at,
            epicenter_name=as_str(*_hypo("name"), payload),
            latitude=as_float(*_hypo("latitude"), payload),
            longitude=as_float(*_hypo("longitude"), payload),
            magnitude=as_float(*_hypo("magnitude"), payload),
            depth_km=as_int(*_hypo("depth"), payload),
            max_intensity_label=_max_intensity(payload, layout),
            affected_areas=_affected_areas(payload, layout),
        )
    except ValidationError as exc:
        raise MalformedEventError(f"{layout.name} event failed validation: {exc}", payload=payload) from exc


def parse_realtime_event(payload: Any) -> SeismicEvent:
    """Normalize a push frame or ``/history`` entry."""
    return normalize_event(payload, REALTIME_LAYOUT)


def parse_historical_event(payload: Any) -> SeismicEvent:
    """Normalize a ``/jma/quake`` entry."""
    return normalize_event(payload, HISTORICAL_LAYOUT)
