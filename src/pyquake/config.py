"""Client configuration for pyquake."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyquake._constants import (
    API_BASE_URL,
    DEFAULT_RECENT_LIMIT,
    FILTERED_PAGE_SIZE,
    RECONNECT_DELAY_SECONDS,
    WEBSOCKET_URL,
)
from pyquake.exceptions import QuakeConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise QuakeConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class QuakeConfig:
    """Client configuration.

    Parameters
    ----------
    api_base_url : str
        REST API base URL for history and filtered queries.
    websocket_url : str
        Realtime push endpoint.
    reconnect_delay : float
        Seconds to wait before reconnecting after the feed drops.
    reconnect_on_error : bool
        Also reconnect after a transport error (failed handshake, error
        frame).  When ``False`` only a remote close triggers a reconnect
        and a transport error leaves the feed disconnected.
    connect_timeout : float
        Seconds allowed for establishing an HTTP or WebSocket connection.
    read_timeout : float
        Seconds allowed for a full HTTP request.
    heartbeat : float
        WebSocket ping interval in seconds.  ``0`` disables pings.
    filtered_page_size : int
        ``limit`` sent with every filtered query.
    default_recent_limit : int
        Entries requested by ``fetch_recent`` when no limit is given.
    """

    api_base_url: str = API_BASE_URL
    websocket_url: str = WEBSOCKET_URL
    reconnect_delay: float = RECONNECT_DELAY_SECONDS
    reconnect_on_error: bool = True
    connect_timeout: float = 10.0
    read_timeout: float = 30.0
    heartbeat: float = 30.0
    filtered_page_size: int = FILTERED_PAGE_SIZE
    default_recent_limit: int = DEFAULT_RECENT_LIMIT

    @classmethod
    def from_env(cls, **overrides: Any) -> QuakeConfig:
        """Create configuration from ``QUAKE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        QuakeConfigError
            A numeric variable could not be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_STR_MAP = {
            "QUAKE_API_BASE_URL": "api_base_url",
            "QUAKE_WEBSOCKET_URL": "websocket_url",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.rstrip("/") if field_name == "api_base_url" else val

        _ENV_FLOAT_MAP = {
            "QUAKE_RECONNECT_DELAY": "reconnect_delay",
            "QUAKE_CONNECT_TIMEOUT": "connect_timeout",
            "QUAKE_READ_TIMEOUT": "read_timeout",
            "QUAKE_HEARTBEAT": "heartbeat",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "reconnect_on_error" not in overrides:
            config_kwargs["reconnect_on_error"] = _env_bool(env.get("QUAKE_RECONNECT_ON_ERROR"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
