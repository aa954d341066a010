"""Unit tests for arangokit.client.base (transport capability and flow drivers)."""

import asyncio

import pytest

from arangokit.client.base import TRANSACTION_HEADER, RawResponse, Request, single
from arangokit.session import bind, bound_transaction

from conftest import AsyncRecordingClient, RecordingClient, reply


# =============================================================================
# Request / RawResponse
# =============================================================================


class TestRawResponse:
    """Tests for RawResponse helpers."""

    def test_header_lookup_is_case_insensitive(self) -> None:
        """header() should match names regardless of case."""
        response = RawResponse(200, "{}", {"server": "ArangoDB"})
        assert response.header("Server") == "ArangoDB"
        assert response.header("SERVER") == "ArangoDB"

    def test_missing_header_is_none(self) -> None:
        """header() should return None for absent headers."""
        assert RawResponse(200, "{}").header("Server") is None


class TestRequestHeaders:
    """Tests for the header set sent with each request."""

    def test_default_headers_are_sent(self, client: RecordingClient) -> None:
        """Default headers should accompany every request."""
        authed = client.with_headers({"Authorization": "Bearer t"})
        authed.queue(reply({}))
        authed.get("http://db/_api/version")
        assert client.log[0].headers["Authorization"] == "Bearer t"

    def test_content_type_only_with_body(self, client: RecordingClient) -> None:
        """Content-Type should be set only when a body is present."""
        client.queue(reply({}), reply({}))
        client.get("http://db/a")
        client.post("http://db/a", '{"x":1}')
        assert "Content-Type" not in client.log[0].headers
        assert client.log[1].headers["Content-Type"] == "application/json"

    def test_extra_header_is_added(self, client: RecordingClient) -> None:
        """A per-request header should be merged into the outgoing set."""
        client.queue(reply({}))
        client.request(Request("GET", "http://db/a", header=("If-Match", "r1")))
        assert client.log[0].headers["If-Match"] == "r1"

    @pytest.mark.parametrize(
        "method_name,verb",
        [
            ("get", "GET"),
            ("post", "POST"),
            ("put", "PUT"),
            ("patch", "PATCH"),
            ("delete", "DELETE"),
            ("head", "HEAD"),
            ("options", "OPTIONS"),
            ("trace", "TRACE"),
            ("connect", "CONNECT"),
        ],
    )
    def test_fixed_method_shortcuts(self, client: RecordingClient, method_name: str, verb: str) -> None:
        """Each shortcut should dispatch with its fixed HTTP method."""
        client.queue(reply({}))
        getattr(client, method_name)("http://db/a")
        assert client.log[0].method == verb


# =============================================================================
# Transaction binding
# =============================================================================


class TestCloneWithTransaction:
    """Tests for copy-on-write transaction binding."""

    def test_binding_isolation(self, client: RecordingClient) -> None:
        """Each clone should carry its own id and the original none."""
        first = client.clone_with_transaction("tx-1")
        second = client.clone_with_transaction("tx-2")
        client.queue(reply({}), reply({}), reply({}))

        first.get("http://db/a")
        second.get("http://db/a")
        client.get("http://db/a")

        assert client.log[0].headers[TRANSACTION_HEADER] == "tx-1"
        assert client.log[1].headers[TRANSACTION_HEADER] == "tx-2"
        assert TRANSACTION_HEADER not in client.log[2].headers

    def test_original_is_not_mutated(self, client: RecordingClient) -> None:
        """Binding should leave the source handle's headers untouched."""
        before = client.headers
        client.clone_with_transaction("tx-1")
        assert client.headers == before
        assert client.transaction_id is None

    def test_rebinding_overwrites_id(self, client: RecordingClient) -> None:
        """Binding a bound handle should replace, not duplicate, the id."""
        rebound = client.clone_with_transaction("tx-1").clone_with_transaction("tx-2")
        assert rebound.transaction_id == "tx-2"

    def test_bind_helper_delegates(self, client: RecordingClient) -> None:
        """session.bind should produce the same binding as the capability."""
        bound = bind(client, "tx-9")
        assert bound is not client
        assert bound_transaction(bound) == "tx-9"
        assert bound_transaction(client) is None


# =============================================================================
# Flow drivers
# =============================================================================


def _two_step_flow():
    first = yield Request("GET", "http://db/one")
    second = yield Request("GET", "http://db/two")
    return first.body + second.body


class TestSyncRun:
    """Tests for SyncClient.run / execute."""

    def test_run_drives_every_step(self, client: RecordingClient) -> None:
        """run() should feed each response back into the flow."""
        client.queue(reply(text="a"), reply(text="b"))
        assert client.run(_two_step_flow()) == "ab"
        assert [sent.url for sent in client.log] == ["http://db/one", "http://db/two"]

    def test_execute_applies_handler(self, client: RecordingClient) -> None:
        """execute() should run one exchange through the handler."""
        client.queue(reply(text="hello"))
        assert client.execute(Request("GET", "http://db/x"), lambda r: r.body.upper()) == "HELLO"

    def test_handler_error_propagates(self, client: RecordingClient) -> None:
        """Errors raised by a handler should reach the caller unchanged."""
        client.queue(reply({}))

        def fail(_response):
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            client.execute(Request("GET", "http://db/x"), fail)


class TestAsyncRun:
    """Tests for AsyncClient.run."""

    def test_run_is_awaitable(self, async_client: AsyncRecordingClient) -> None:
        """The same flow should resolve through the asyncio driver."""
        async_client.queue(reply(text="a"), reply(text="b"))
        assert asyncio.run(async_client.run(_two_step_flow())) == "ab"

    def test_single_flow(self, async_client: AsyncRecordingClient) -> None:
        """single() should perform exactly one exchange."""
        async_client.queue(reply(text="x"))
        flow = single(Request("DELETE", "http://db/x"), lambda r: r.status_code)
        assert asyncio.run(async_client.run(flow)) == 200
        assert len(async_client.log) == 1
