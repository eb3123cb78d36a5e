"""FetchClient: single-shot async GET with bounded redirect following."""

from __future__ import annotations

import asyncio
import logging

import httpx

from mdproxy.errors import FetchTimeoutError, NetworkError, TooManyRedirectsError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_REDIRECTS = 5
REDIRECT_STATUSES = frozenset({301, 302})


class FetchClient:
    """Issues one GET per call and returns the full response body as text.

    301/302 responses are followed manually, re-sending the same headers to
    the ``Location`` target, up to *max_redirects* hops. Every hop gets its
    own *timeout* measured from when the request starts. No retries and no
    caching.

    *transport* is passed to :class:`httpx.AsyncClient`; tests use it to
    plug in an :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._max_redirects = max_redirects
        self._transport = transport

    async def get(self, url: str, headers: dict[str, str]) -> str:
        """Fetch *url* and return the decoded body."""
        async with httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=False,
            timeout=httpx.Timeout(self._timeout),
        ) as client:
            current = url
            for _ in range(self._max_redirects + 1):
                response = await self._send(client, current, headers)
                location = response.headers.get("location")
                if response.status_code not in REDIRECT_STATUSES or not location:
                    return response.text
                next_url = str(response.url.join(location))
                logger.debug("Redirect %s: %s -> %s", response.status_code, current, next_url)
                current = next_url
        raise TooManyRedirectsError(url, self._max_redirects)

    async def _send(
        self, client: httpx.AsyncClient, url: str, headers: dict[str, str]
    ) -> httpx.Response:
        try:
            return await asyncio.wait_for(
                client.get(url, headers=headers), timeout=self._timeout
            )
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise FetchTimeoutError(self._timeout) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NetworkError(str(exc) or type(exc).__name__) from exc
