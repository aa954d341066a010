"""Tests for the httpx bindings using httpx.MockTransport."""

import asyncio

import httpx
import pytest

from arangokit.client.base import TRANSACTION_HEADER, Request
from arangokit.client.httpx_client import AsyncHttpxClient, HttpxClient, TransportSettings
from arangokit.errors import HttpClientError


def _echo(request: httpx.Request) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "method": request.method,
            "path": request.url.path,
            "trx": request.headers.get(TRANSACTION_HEADER),
            "body": request.content.decode("utf-8"),
        },
        headers={"Server": "ArangoDB"},
    )


class TestTransportSettings:
    """Tests for TransportSettings."""

    def test_defaults(self) -> None:
        """Defaults should match the documented timeouts."""
        settings = TransportSettings()
        timeout = settings.timeout()
        assert timeout.connect == 5.0
        assert timeout.read == 30.0
        assert timeout.write == 30.0

    def test_transport_kwargs_disable_retries(self) -> None:
        """Retries should always be disabled."""
        assert TransportSettings().transport_kwargs()["retries"] == 0

    def test_socket_path_enables_uds(self) -> None:
        """socket_path should be forwarded as uds."""
        kwargs = TransportSettings(socket_path="/run/arangodb.sock").transport_kwargs()
        assert kwargs["uds"] == "/run/arangodb.sock"

    def test_no_uds_without_socket(self) -> None:
        """Network transport should not set uds."""
        assert "uds" not in TransportSettings().transport_kwargs()


class TestHttpxClient:
    """Tests for the blocking httpx capability."""

    def test_request_returns_raw_response(self) -> None:
        """A response should come back with status, body and headers."""
        client = HttpxClient(settings=TransportSettings(transport=httpx.MockTransport(_echo)))
        response = client.request(Request("POST", "http://db:8529/_api/cursor", '{"q":1}'))
        assert response.status_code == 200
        assert response.header("server") == "ArangoDB"
        assert '"method":"POST"' in response.body.replace(" ", "")
        client.close()

    def test_error_status_is_not_raised(self) -> None:
        """Non-2xx statuses should be returned, not raised."""
        transport = httpx.MockTransport(lambda request: httpx.Response(404, json={"error": True}))
        client = HttpxClient(settings=TransportSettings(transport=transport))
        assert client.get("http://db:8529/_api/x").status_code == 404
        client.close()

    def test_redirects_are_not_followed(self) -> None:
        """A 3xx should be handed back as is."""
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request.url.host)
            return httpx.Response(307, headers={"Location": "http://elsewhere:8529/"})

        client = HttpxClient(settings=TransportSettings(transport=httpx.MockTransport(handler)))
        response = client.get("http://db:8529/_api/x")
        assert response.status_code == 307
        assert calls == ["db"]
        client.close()

    def test_transport_failure_becomes_http_client_error(self) -> None:
        """httpx errors should surface as HttpClientError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = HttpxClient(settings=TransportSettings(transport=httpx.MockTransport(handler)))
        with pytest.raises(HttpClientError, match="connection refused"):
            client.get("http://db:8529/_api/x")
        client.close()

    def test_clones_share_pool_but_not_headers(self) -> None:
        """with_headers should reuse the httpx.Client and keep headers apart."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get(TRANSACTION_HEADER))
            return httpx.Response(200, json={})

        base = HttpxClient(settings=TransportSettings(transport=httpx.MockTransport(handler)))
        bound = base.clone_with_transaction("tx-1")

        assert bound._client is base._client
        bound.get("http://db:8529/_api/x")
        base.get("http://db:8529/_api/x")
        assert seen == ["tx-1", None]
        base.close()


class TestAsyncHttpxClient:
    """Tests for the asyncio httpx capability."""

    def test_request_carries_transaction_header(self) -> None:
        """The bound header should be sent by the async binding too."""

        async def scenario():
            client = AsyncHttpxClient(settings=TransportSettings(transport=httpx.MockTransport(_echo)))
            bound = client.clone_with_transaction("tx-7")
            response = await bound.request(Request("GET", "http://db:8529/_api/version"))
            await client.close()
            return response

        response = asyncio.run(scenario())
        assert response.status_code == 200
        assert '"trx":"tx-7"' in response.body.replace(" ", "")

    def test_transport_failure_becomes_http_client_error(self) -> None:
        """Async transport errors should surface as HttpClientError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async def scenario():
            client = AsyncHttpxClient(settings=TransportSettings(transport=httpx.MockTransport(handler)))
            try:
                await client.get("http://db:8529/_api/x")
            finally:
                await client.close()

        with pytest.raises(HttpClientError):
            asyncio.run(scenario())
