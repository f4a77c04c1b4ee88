"""Async HTTP client used by the fetch workers."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

logger = logging.getLogger(__name__)


class _QuietCloseStream(httpx.AsyncByteStream):
    """Response body stream whose close never raises."""

    def __init__(
        self, stream: httpx.AsyncByteStream, url: str, log: logging.Logger
    ) -> None:
        self._stream = stream
        self._url = url
        self._log = log

    async def __aiter__(self) -> AsyncIterator[bytes]:
        async for chunk in self._stream:
            yield chunk

    async def aclose(self) -> None:
        try:
            await self._stream.aclose()
        except (httpx.HTTPError, OSError) as exc:
            self._log.debug("Ignoring error closing response for %s: %s", self._url, exc)


class FetchClient:
    """Minimal async wrapper around :class:`httpx.AsyncClient` for plain GETs."""
    def __init__(
        self,
        request_timeout: float | None = None,
        max_connections: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Create a new client.

        Parameters
        ----------
        request_timeout:
            Timeout in seconds applied to connect, read and write. ``None``
            disables timeouts entirely, so a stalled server blocks the worker.
        max_connections:
            Maximum number of concurrent HTTP connections.
        transport:
            Optional transport handed to httpx; tests pass a
            :class:`httpx.MockTransport`.
        """
        self._timeout = httpx.Timeout(request_timeout)
        self._limits = httpx.Limits(
            max_connections=max_connections, max_keepalive_connections=max_connections
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "FetchClient":
        """Create the underlying HTTP client and return ``self``."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=self._limits,
                transport=self._transport,
                follow_redirects=True,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        """Close the HTTP client when leaving the context manager."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _require_client(self) -> httpx.AsyncClient:
        """Return the initialized HTTP client or raise ``RuntimeError``."""
        if self._client is None:
            raise RuntimeError(
                "Client not initialized; use 'async with FetchClient()'")
        return self._client

    @asynccontextmanager
    async def get(
        self, url: str, log: logging.Logger | None = None
    ) -> AsyncIterator[httpx.Response]:
        """Issue a streamed GET for ``url`` and yield the open response.

        The status code is not checked. Opening the request raises
        :class:`httpx.RequestError` on transport failure. The response is
        closed on exit. httpx also closes it as soon as the body is exhausted,
        so the stream is wrapped first and a failing close is logged to
        ``log`` and ignored wherever it happens.
        """
        client = self._require_client()
        resp = await client.send(client.build_request("GET", url), stream=True)
        resp.stream = _QuietCloseStream(resp.stream, url, log or logger)
        try:
            yield resp
        finally:
            await resp.aclose()
