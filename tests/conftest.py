from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

import pytest

_REALTIME_FRAME: dict[str, Any] = {
    "_id": "65921a0b9f1c2a0007a4b001",
    "code": 551,
    "id": "quake-20240101-1200",
    "time": "2024/01/01 12:00:05.123",
    "issue": {"source": "気象庁", "time": "2024/01/01 12:00:03", "type": "DetailScale"},
    "earthquake": {
        "time": "2024/01/01 12:00:00",
        "hypocenter": {
            "name": "Tokyo",
            "latitude": 35.6,
            "longitude": 139.7,
            "depth": 30,
            "magnitude": 5.2,
        },
        "maxScale": 50,
        "domesticTsunami": "None",
        "foreignTsunami": "Unknown",
    },
    "points": [
        {"pref": "東京都", "addr": "Chiyoda", "isArea": False, "scale": 50},
        {"pref": "神奈川県", "addr": "Yokohama", "isArea": False, "scale": 40},
    ],
}


@pytest.fixture
def quake_payload() -> Callable[..., dict[str, Any]]:
    """Factory for realtime-shape earthquake frames.

    Keyword arguments are merged into the ``earthquake`` object (or the
    ``hypocenter`` object when passed as ``hypocenter={...}``).  ``points``
    and ``id`` replace the top-level values; pass ``None`` to drop a key.
    """

    def _build(**overrides: Any) -> dict[str, Any]:
        payload = copy.deepcopy(_REALTIME_FRAME)
        for key in ("id", "points", "code"):
            if key in overrides:
                value = overrides.pop(key)
                if value is None:
                    payload.pop(key, None)
                else:
                    payload[key] = value
        hypocenter = overrides.pop("hypocenter", None)
        if hypocenter is not None:
            payload["earthquake"]["hypocenter"].update(hypocenter)
        for key, value in overrides.items():
            if value is None:
                payload["earthquake"].pop(key, None)
            else:
                payload["earthquake"][key] = value
        return payload

    return _build
