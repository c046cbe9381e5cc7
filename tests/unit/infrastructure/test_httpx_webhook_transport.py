"""Unit tests for HttpxWebhookTransport using httpx.MockTransport."""

import httpx
import pytest

from src.infrastructure.adapters.http.httpx_webhook_transport import HttpxWebhookTransport

URL = "https://treasury.example/hooks"


class TestHttpxWebhookTransport:
    async def test_posts_body_and_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(202)

        transport = HttpxWebhookTransport(transport=httpx.MockTransport(handler))

        status = await transport.post(
            URL, b'{"eventType":"x"}', {"X-TML-Event": "x"}, timeout=5.0
        )

        assert status == 202
        (request,) = seen
        assert request.method == "POST"
        assert request.content == b'{"eventType":"x"}'
        assert request.headers["X-TML-Event"] == "x"

    async def test_error_status_is_returned_not_raised(self) -> None:
        transport = HttpxWebhookTransport(
            transport=httpx.MockTransport(lambda request: httpx.Response(503))
        )

        assert await transport.post(URL, b"{}", {}, timeout=1.0) == 503

    async def test_network_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = HttpxWebhookTransport(transport=httpx.MockTransport(handler))

        with pytest.raises(httpx.ConnectError):
            await transport.post(URL, b"{}", {}, timeout=1.0)

    async def test_shared_client(self) -> None:
        client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )
        transport = HttpxWebhookTransport(client=client)

        assert await transport.post(URL, b"{}", {}, timeout=1.0) == 200
        await transport.aclose()
        assert client.is_closed
