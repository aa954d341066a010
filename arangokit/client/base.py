"""Transport capability shared by every resource handle.

A capability can send one HTTP request and hand back the raw response. It
never interprets status codes; that is the job of ``arangokit.response``.

Operations are written once as *flows*: generators that yield ``Request``
descriptors, receive ``RawResponse`` values and finally return the decoded
result. ``SyncClient.run`` drives a flow with blocking calls while
``AsyncClient.run`` drives the same flow as a coroutine, so a resource handle
built on an async capability returns awaitables from the very same methods.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Generator, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Self, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSACTION_HEADER = "x-arango-trx-id"
JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Request:
    """A single HTTP exchange to perform.

    ``url`` already carries its query string. ``header`` is the optional
    per-request header (a precondition such as ``If-Match``).
    """

    method: str
    url: str
    body: str = ""
    header: tuple[str, str] | None = None


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Status, headers and undecoded text of a server response."""

    status_code: int
    body: str
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


Flow = Generator[Request, RawResponse, T]
Handler = Callable[[RawResponse], T]


def single(request: Request, handler: Handler[T]) -> Flow[T]:
    """Flow performing exactly one exchange and decoding it with ``handler``."""
    response = yield request
    return handler(response)


class ClientExt(ABC):
    """Capability to perform HTTP exchanges against ArangoDB.

    The header set is owned by value: ``with_headers`` and
    ``clone_with_transaction`` build a new capability that shares the
    underlying connection pool but never mutates ``self``.
    """

    is_async: ClassVar[bool] = False

    def __init__(self, headers: Mapping[str, str] | None = None) -> None:
        self._headers: dict[str, str] = dict(headers or {})

    @classmethod
    def new(cls, headers: Mapping[str, str] | None = None, **kwargs: Any) -> Self:
        """Construct a capability with a default header set."""
        return cls(headers, **kwargs)

    @property
    def headers(self) -> dict[str, str]:
        """Copy of the default headers sent with every request."""
        return dict(self._headers)

    @property
    def transaction_id(self) -> str | None:
        return self._headers.get(TRANSACTION_HEADER)

    @abstractmethod
    def with_headers(self, headers: Mapping[str, str]) -> Self:
        """Return a capability whose header set gains (or overwrites) ``headers``."""

    def clone_with_transaction(self, transaction_id: str) -> Self:
        """Return a capability that tags every request with ``transaction_id``."""
        return self.with_headers({TRANSACTION_HEADER: transaction_id})

    @abstractmethod
    def request(self, request: Request) -> Any:
        """Perform exactly one HTTP exchange."""

    @abstractmethod
    def run(self, flow: Flow[T]) -> Any:
        """Drive ``flow`` to completion and return (or resolve to) its value."""

    @abstractmethod
    def close(self) -> Any:
        """Release the underlying connection pool."""

    def execute(self, request: Request, handler: Handler[T]) -> Any:
        return self.run(single(request, handler))

    # ------------------------------------------------------------------
    # Fixed-method shortcuts
    # ------------------------------------------------------------------
    def get(self, url: str, body: str = "") -> Any:
        return self.request(Request("GET", url, body))

    def post(self, url: str, body: str = "") -> Any:
        return self.request(Request("POST", url, body))

    def put(self, url: str, body: str = "") -> Any:
        return self.request(Request("PUT", url, body))

    def patch(self, url: str, body: str = "") -> Any:
        return self.request(Request("PATCH", url, body))

    def delete(self, url: str, body: str = "") -> Any:
        return self.request(Request("DELETE", url, body))

    def head(self, url: str, body: str = "") -> Any:
        return self.request(Request("HEAD", url, body))

    def options(self, url: str, body: str = "") -> Any:
        return self.request(Request("OPTIONS", url, body))

    def trace(self, url: str, body: str = "") -> Any:
        return self.request(Request("TRACE", url, body))

    def connect(self, url: str, body: str = "") -> Any:
        return self.request(Request("CONNECT", url, body))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _request_headers(self, request: Request) -> dict[str, str]:
        headers = dict(self._headers)
        if request.body:
            headers.setdefault("Content-Type", JSON_CONTENT_TYPE)
        if request.header is not None:
            name, value = request.header
            headers[name] = value
        return headers


class SyncClient(ClientExt):
    """Blocking driver: ``run`` returns the flow's value directly."""

    is_async = False

    @abstractmethod
    def request(self, request: Request) -> RawResponse: ...

    def run(self, flow: Flow[T]) -> T:
        try:
            request = next(flow)
            while True:
                logger.debug("%s %s", request.method, request.url)
                response = self.request(request)
                request = flow.send(response)
        except StopIteration as stop:
            return stop.value


class AsyncClient(ClientExt):
    """Cooperative driver: ``run`` is a coroutine resolving to the flow's value."""

    is_async = True

    @abstractmethod
    async def request(self, request: Request) -> RawResponse: ...

    async def run(self, flow: Flow[T]) -> T:
        try:
            request = next(flow)
            while True:
                logger.debug("%s %s", request.method, request.url)
                response = await self.request(request)
                request = flow.send(response)
        except StopIteration as stop:
            return stop.value


__all__ = [
    "AsyncClient",
    "ClientExt",
    "Flow",
    "Handler",
    "JSON_CONTENT_TYPE",
    "RawResponse",
    "Request",
    "SyncClient",
    "TRANSACTION_HEADER",
    "single",
]
