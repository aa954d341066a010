"""httpx bindings of the transport capability.

``HttpxClient`` wraps ``httpx.Client`` for blocking use and
``AsyncHttpxClient`` wraps ``httpx.AsyncClient`` for asyncio. Both talk to
ArangoDB either over the network or over a Unix domain socket.

Retries are disabled and redirects are never followed: a transaction header
must not silently migrate to whatever host a redirect points at.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self

import httpx

from arangokit.client.base import AsyncClient, RawResponse, Request, SyncClient
from arangokit.errors import HttpClientError


@dataclass
class TransportSettings:
    """Connection-level knobs for the httpx bindings."""

    socket_path: str | None = None  # None = use network, str = use Unix socket
    http2: bool = True
    connect_timeout: float = 5.0
    read_timeout: float = 30.0
    write_timeout: float = 30.0
    pool_limits: httpx.Limits | None = None
    # Pre-built transport (proxies, test doubles); overrides socket_path/http2.
    transport: httpx.BaseTransport | httpx.AsyncBaseTransport | None = None

    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect_timeout,
            read=self.read_timeout,
            write=self.write_timeout,
            pool=self.connect_timeout,
        )

    def transport_kwargs(self) -> dict[str, Any]:
        # Note: UDS with http:// URLs stays on HTTP/1.1 (no TLS/ALPN for HTTP/2).
        kwargs: dict[str, Any] = {"retries": 0, "http2": self.http2}
        if self.socket_path:
            kwargs["uds"] = self.socket_path
        if self.pool_limits is not None:
            kwargs["limits"] = self.pool_limits
        return kwargs


def _to_raw(response: httpx.Response) -> RawResponse:
    return RawResponse(
        status_code=response.status_code,
        body=response.text,
        headers=dict(response.headers),
    )


def _content(request: Request) -> bytes | None:
    return request.body.encode("utf-8") if request.body else None


class HttpxClient(SyncClient):
    """Blocking capability backed by ``httpx.Client``.

    Clones produced by ``with_headers`` share the same ``httpx.Client`` (and
    therefore its connection pool); each clone owns its own header set.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        *,
        settings: TransportSettings | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        super().__init__(headers)
        self._settings = settings or TransportSettings()
        self._client = client if client is not None else self._build_client(self._settings)

    @staticmethod
    def _build_client(settings: TransportSettings) -> httpx.Client:
        transport = settings.transport
        if transport is None:
            transport = httpx.HTTPTransport(**settings.transport_kwargs())
        try:
            return httpx.Client(
                transport=transport,
                timeout=settings.timeout(),
                follow_redirects=False,
            )
        except (httpx.HTTPError, ValueError, TypeError) as exc:
            raise HttpClientError(repr(exc)) from exc

    @property
    def settings(self) -> TransportSettings:
        return self._settings

    def with_headers(self, headers: Mapping[str, str]) -> Self:
        return type(self)(
            {**self._headers, **headers},
            settings=self._settings,
            client=self._client,
        )

    def request(self, request: Request) -> RawResponse:
        try:
            response = self._client.request(
                request.method,
                request.url,
                content=_content(request),
                headers=self._request_headers(request),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise HttpClientError(repr(exc)) from exc
        return _to_raw(response)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - context helper
        self.close()


class AsyncHttpxClient(AsyncClient):
    """Asyncio capability backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        *,
        settings: TransportSettings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(headers)
        self._settings = settings or TransportSettings()
        self._client = client if client is not None else self._build_client(self._settings)

    @staticmethod
    def _build_client(settings: TransportSettings) -> httpx.AsyncClient:
        transport = settings.transport
        if transport is None:
            transport = httpx.AsyncHTTPTransport(**settings.transport_kwargs())
        try:
            return httpx.AsyncClient(
                transport=transport,
                timeout=settings.timeout(),
                follow_redirects=False,
            )
        except (httpx.HTTPError, ValueError, TypeError) as exc:
            raise HttpClientError(repr(exc)) from exc

    @property
    def settings(self) -> TransportSettings:
        return self._settings

    def with_headers(self, headers: Mapping[str, str]) -> Self:
        return type(self)(
            {**self._headers, **headers},
            settings=self._settings,
            client=self._client,
        )

    async def request(self, request: Request) -> RawResponse:
        try:
            response = await self._client.request(
                request.method,
                request.url,
                content=_content(request),
                headers=self._request_headers(request),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise HttpClientError(repr(exc)) from exc
        return _to_raw(response)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - context helper
        await self.close()


__all__ = [
    "AsyncHttpxClient",
    "HttpxClient",
    "TransportSettings",
]
