"""Normalization helpers.

Strict accessors for walking upstream JSON.  Unlike display code, the
ingestion layer never coerces a missing or mistyped required value to a
default: every failure becomes a :class:`MalformedEventError` carrying the
full payload.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Final

from pyquake._constants import TIME_FORMAT
from pyquake.exceptions import MalformedEventError

KeyPath = tuple[str, ...]

MISSING: Final = object()
"""Returned by :func:`lookup` when a key along the path is absent."""

_TIME_PATTERN = re.compile(r"[0-9]{4}/[0-9]{2}/[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")


def _dotted(path: Sequence[str]) -> str:
    return ".".join(path)


def lookup(node: Any, path: KeyPath) -> Any:
    """Walk *path* through nested objects.

    Returns :data:`MISSING` when any key is absent.  A present value that is
    not an object where the path continues is a malformed payload, not an
    absent one.
    """
    current = node
    for depth, key in enumerate(path):
        if not isinstance(current, Mapping):
            raise MalformedEventError(
                f"expected object at '{_dotted(path[:depth]) or '<root>'}'",
                payload=node,
            )
        if key not in current:
            return MISSING
        current = current[key]
    return current


def require(node: Any, path: KeyPath) -> Any:
    """Like :func:`lookup` but absent or ``null`` values are malformed."""
    value = lookup(node, path)
    if value is MISSING or value is None:
        raise MalformedEventError(f"missing required field '{_dotted(path)}'", payload=node)
    return value


def as_str(value: Any, path: KeyPath, node: Any) -> str:
    if not isinstance(value, str):
        raise MalformedEventError(
            f"field '{_dotted(path)}' must be a string, got {type(value).__name__}",
            payload=node,
        )
    return value


def as_float(value: Any, path: KeyPath, node: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedEventError(
            f"field '{_dotted(path)}' must be a number, got {type(value).__name__}",
            payload=node,
        )
    return float(value)


def as_int(value: Any, path: KeyPath, node: Any) -> int:
    """Accept JSON integers, and floats with no fractional part."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedEventError(
            f"field '{_dotted(path)}' must be an integer, got {value!r}",
            payload=node,
        )
    return value


def as_list(value: Any, path: KeyPath, node: Any) -> list[Any]:
    if not isinstance(value, list):
        raise MalformedEventError(
            f"field '{_dotted(path)}' must be an array, got {type(value).__name__}",
            payload=node,
        )
    return value


def parse_event_time(value: Any, path: KeyPath, node: Any) -> datetime:
    """Parse the fixed ``yyyy/MM/dd HH:mm:ss`` upstream timestamp (naive)."""
    text = as_str(value, path, node)
    if not _TIME_PATTERN.fullmatch(text):
        raise MalformedEventError(
            f"field '{_dotted(path)}' does not match yyyy/MM/dd HH:mm:ss: {text!r}",
            payload=node,
        )
    try:
        return datetime.strptime(text, TIME_FORMAT)
    except ValueError as exc:
        raise MalformedEventError(f"field '{_dotted(path)}' is not a valid time: {text!r}", payload=node) from exc
