"""HTTP transport for the P2PQuake REST API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyquake._constants import USER_AGENT
from pyquake.config import QuakeConfig
from pyquake.exceptions import TransportError

_logger = logging.getLogger(__name__)

QueryParams = Mapping[str, str | int | float]


def _snippet(raw: bytes) -> str:
    return raw[:200].decode("utf-8", errors="replace")


class Transport(Protocol):
    """Structural transport interface used by the query client.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: QueryParams) -> Any:
        ...


class HttpTransport:
    """GET-only JSON transport over a shared ``aiohttp`` session."""

    def __init__(self, config: QuakeConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    async def get_json(self, endpoint: str, params: QueryParams) -> Any:
        """GET ``<api_base_url><endpoint>`` and return the decoded JSON body.

        Raises
        ------
        TransportError
            Connection failure, timeout, non-2xx status or a body that is
            not valid UTF-8 JSON.
        """
        url = f"{self._config.api_base_url}{endpoint}"
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("GET %s params=%s", url, dict(params))

        try:
            async with self._http.get(url, params=dict(params), headers=headers) as resp:
                raw = await resp.read()
                if not 200 <= resp.status < 300:
                    raise TransportError(
                        f"HTTP {resp.status} from {endpoint}: {_snippet(raw)}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except TransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise TransportError(
                f"Invalid JSON from {endpoint}: {_snippet(raw)}",
                status_code=resp.status,
                endpoint=endpoint,
            ) from exc
