from __future__ import annotations

import pytest

from pyquake.config import QuakeConfig
from pyquake.exceptions import QuakeConfigError


def test_defaults_match_upstream() -> None:
    config = QuakeConfig()

    assert config.api_base_url == "https://api.p2pquake.net/v2"
    assert config.websocket_url == "wss://api-realtime.p2pquake.net/v2/ws"
    assert config.reconnect_delay == 5.0
    assert config.reconnect_on_error is True
    assert config.filtered_page_size == 100


def test_from_env_reads_quake_variables(monkeypatch) -> None:
    monkeypatch.setenv("QUAKE_API_BASE_URL", "http://localhost:8080/v2/")
    monkeypatch.setenv("QUAKE_WEBSOCKET_URL", "ws://localhost:8080/ws")
    monkeypatch.setenv("QUAKE_RECONNECT_DELAY", "1.5")
    monkeypatch.setenv("QUAKE_RECONNECT_ON_ERROR", "no")
    monkeypatch.setenv("QUAKE_HEARTBEAT", "0")

    config = QuakeConfig.from_env()

    assert config.api_base_url == "http://localhost:8080/v2"
    assert config.websocket_url == "ws://localhost:8080/ws"
    assert config.reconnect_delay == 1.5
    assert config.reconnect_on_error is False
    assert config.heartbeat == 0.0


def test_from_env_overrides_win(monkeypatch) -> None:
    monkeypatch.setenv("QUAKE_RECONNECT_DELAY", "9")
    monkeypatch.setenv("QUAKE_RECONNECT_ON_ERROR", "false")

    config = QuakeConfig.from_env(reconnect_delay=0.5, reconnect_on_error=True)

    assert config.reconnect_delay == 0.5
    assert config.reconnect_on_error is True


def test_from_env_unknown_bool_keeps_default(monkeypatch) -> None:
    monkeypatch.setenv("QUAKE_RECONNECT_ON_ERROR", "maybe")
    assert QuakeConfig.from_env().reconnect_on_error is True


def test_from_env_rejects_bad_number(monkeypatch) -> None:
    monkeypatch.setenv("QUAKE_READ_TIMEOUT", "soon")
    with pytest.raises(QuakeConfigError, match="QUAKE_READ_TIMEOUT"):
        QuakeConfig.from_env()
