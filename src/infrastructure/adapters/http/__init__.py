"""HTTP adapters."""

from src.infrastructure.adapters.http.httpx_webhook_transport import (
    HttpxWebhookTransport,
)

__all__: list[str] = ["HttpxWebhookTransport"]
