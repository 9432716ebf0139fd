"""JSON-over-HTTP helper shared by the registry clients.

Translates every transport-level failure into a typed UpstreamError so
that the clients only need a single ``except UpstreamError`` to turn an
unreachable registry into "no results".
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from ...config import HttpConfig, get_config
from ...domain.errors import (
    MalformedPayloadError,
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)


@dataclass
class JsonHttpClient:
    """Fetches JSON documents with a client-side timeout.

    When ``client`` is given it is reused for every request (tests pass
    one built on ``httpx.MockTransport``). Otherwise a short-lived
    ``httpx.AsyncClient`` is opened per request, which keeps the helper
    usable from any event loop.

    Attributes:
        config: Outbound HTTP configuration
        client: Optional shared async client
    """

    config: HttpConfig = field(default_factory=lambda: get_config().http)
    client: Optional[httpx.AsyncClient] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept": "application/json",
        }

    async def get_json(
        self,
        url: str,
        params: Mapping[str, Any],
        *,
        upstream: str,
        timeout_seconds: float,
    ) -> Dict[str, Any]:
        """GET ``url`` and decode a JSON object body.

        Args:
            url: Endpoint URL without query string.
            params: Query parameters, URL-encoded by httpx.
            upstream: Short registry name used in errors and logs.
            timeout_seconds: Total time allowed for the request.

        Returns:
            The decoded JSON object.

        Raises:
            UpstreamTimeoutError: If the request did not finish in time.
            UpstreamStatusError: If the response status is not 2xx.
            MalformedPayloadError: If the body is not a JSON object.
            UpstreamError: For any other transport failure.
        """
        try:
            response = await asyncio.wait_for(
                self._get(url, params, timeout_seconds),
                timeout=timeout_seconds,
            )
            response.raise_for_status()
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeoutError(
                f"{upstream} request timed out",
                upstream=upstream,
                url=url,
                timeout_seconds=timeout_seconds,
                cause=e,
            )
        except httpx.HTTPStatusError as e:
            raise UpstreamStatusError(
                f"{upstream} responded with status {e.response.status_code}",
                upstream=upstream,
                url=url,
                status_code=e.response.status_code,
                cause=e,
            )
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"{upstream} request failed",
                upstream=upstream,
                url=url,
                cause=e,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedPayloadError(
                f"{upstream} returned invalid JSON",
                upstream=upstream,
                url=url,
                cause=e,
            )

        if not isinstance(payload, dict):
            raise MalformedPayloadError(
                f"{upstream} returned {type(payload).__name__}, expected an object",
                upstream=upstream,
                url=url,
            )

        self._logger.debug(
            "Upstream response",
            extra={"upstream": upstream, "status": response.status_code},
        )
        return payload

    async def _get(
        self, url: str, params: Mapping[str, Any], timeout_seconds: float
    ) -> httpx.Response:
        if self.client is not None:
            return await self.client.get(
                url, params=params, headers=self.headers, timeout=timeout_seconds
            )

        async with httpx.AsyncClient(
            headers=self.headers, timeout=timeout_seconds, follow_redirects=True
        ) as client:
            return await client.get(url, params=params)
