"""Shared fixtures: scripted transport doubles that record every request."""

from collections import deque
from dataclasses import dataclass
from typing import Any

import orjson
import pytest

from arangokit.client.base import AsyncClient, RawResponse, Request, SyncClient


@dataclass
class Sent:
    """A request as it left the transport, with the headers it carried."""

    request: Request
    headers: dict[str, str]

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def body(self) -> str:
        return self.request.body

    def json(self) -> Any:
        return orjson.loads(self.request.body)


def reply(payload: Any = None, status: int = 200, headers: dict[str, str] | None = None, text: str | None = None) -> RawResponse:
    """Build a raw response from a JSON-able payload (or literal text)."""
    body = text if text is not None else orjson.dumps(payload).decode("utf-8")
    return RawResponse(status_code=status, body=body, headers=headers or {})


class RecordingClient(SyncClient):
    """Blocking transport double.

    Responses are served in order from a queue shared by every clone, and
    every request is appended to a log also shared by every clone.
    """

    def __init__(self, headers=None, *, responses=None, log=None):
        super().__init__(headers)
        self.responses: deque[RawResponse] = responses if responses is not None else deque()
        self.log: list[Sent] = log if log is not None else []
        self.closed = False

    def queue(self, *responses: RawResponse) -> "RecordingClient":
        self.responses.extend(responses)
        return self

    def with_headers(self, headers):
        return type(self)({**self._headers, **headers}, responses=self.responses, log=self.log)

    def request(self, request: Request) -> RawResponse:
        self.log.append(Sent(request, self._request_headers(request)))
        if not self.responses:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        return self.responses.popleft()

    def close(self) -> None:
        self.closed = True


class AsyncRecordingClient(AsyncClient):
    """asyncio flavour of ``RecordingClient``."""

    def __init__(self, headers=None, *, responses=None, log=None):
        super().__init__(headers)
        self.responses: deque[RawResponse] = responses if responses is not None else deque()
        self.log: list[Sent] = log if log is not None else []
        self.closed = False

    def queue(self, *responses: RawResponse) -> "AsyncRecordingClient":
        self.responses.extend(responses)
        return self

    def with_headers(self, headers):
        return type(self)({**self._headers, **headers}, responses=self.responses, log=self.log)

    async def request(self, request: Request) -> RawResponse:
        self.log.append(Sent(request, self._request_headers(request)))
        if not self.responses:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        return self.responses.popleft()

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def async_client() -> AsyncRecordingClient:
    return AsyncRecordingClient()


@pytest.fixture
def respond():
    """Factory fixture for raw responses (see ``reply``)."""
    return reply
