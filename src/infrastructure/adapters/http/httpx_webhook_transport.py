"""httpx transport for outbound webhook POSTs."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from src.application.ports.webhook_transport import WebhookTransportProtocol


class HttpxWebhookTransport(WebhookTransportProtocol):
    """Posts webhook bodies with ``httpx.AsyncClient``.

    A shared client may be injected so connections are pooled across
    deliveries; otherwise one short-lived client is opened per request.
    ``transport`` is forwarded to the per-request client, which lets tests
    plug in ``httpx.MockTransport``.

    Network errors and timeouts propagate as ``httpx.HTTPError``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = client
        self._transport = transport

    async def post(
        self,
        url: str,
        content: bytes,
        headers: Mapping[str, str],
        timeout: float,
    ) -> int:
        if self._client is not None:
            response = await self._client.post(
                url, content=content, headers=dict(headers), timeout=timeout
            )
            return response.status_code

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(
                url, content=content, headers=dict(headers), timeout=timeout
            )
            return response.status_code

    async def aclose(self) -> None:
        """Close the injected shared client, if any."""
        if self._client is not None:
            await self._client.aclose()
