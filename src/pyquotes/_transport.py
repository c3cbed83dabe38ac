"""JSON-over-HTTP transport for the remote quote endpoint."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyquotes._constants import USER_AGENT
from pyquotes.config import QuoteConfig
from pyquotes.exceptions import QuoteNetworkError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`HttpTransport`) concrete.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any: ...

    async def post_json(self, endpoint: str, payload: Mapping[str, Any]) -> Any: ...


class HttpTransport:
    """aiohttp-backed transport that maps every failure to :class:`QuoteNetworkError`."""

    def __init__(self, config: QuoteConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def get_json(self, endpoint: str, params: Mapping[str, str] | None = None) -> Any:
        return await self._request("GET", endpoint, params=params)

    async def post_json(self, endpoint: str, payload: Mapping[str, Any]) -> Any:
        return await self._request("POST", endpoint, body=json.dumps(payload))

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> Any:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if body is not None:
            headers["content-type"] = "application/json; charset=UTF-8"

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s params=%s", method, url, dict(params or {}))

        try:
            async with self._http.request(
                method,
                url,
                params=params,
                data=body,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise QuoteNetworkError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except QuoteNetworkError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise QuoteNetworkError(
                f"Request to {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        if not text.strip():
            return None

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise QuoteNetworkError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc
