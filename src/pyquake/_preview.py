"""Helpers for bounded debug logging of upstream payloads.

Earthquake frames can carry hundreds of observation points.  Logging a
dropped frame verbatim would flood the log, so payloads are summarized
before they reach a log record.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def preview_for_log(
    value: Any,
    *,
    max_string: int = 256,
    max_items: int = 10,
    _depth: int = 0,
) -> Any:
    """Return a size-bounded copy of *value* suitable for log records."""
    if _depth > 10:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        preview: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                preview["…"] = f"<{len(value) - max_items} more keys>"
                break
            preview[str(k)] = preview_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
        return preview

    if isinstance(value, Sequence):
        items = [
            preview_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for v in list(value)[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more items>")
        return items

    return repr(value)
