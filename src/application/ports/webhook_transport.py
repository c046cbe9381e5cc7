"""Outbound HTTP transport port for webhook delivery."""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Protocol


class WebhookTransportProtocol(Protocol):
    """Protocol for a single outbound webhook POST.

    Methods:
        post: Send one request and return the HTTP status code
    """

    @abstractmethod
    async def post(
        self,
        url: str,
        content: bytes,
        headers: Mapping[str, str],
        timeout: float,
    ) -> int:
        """POST ``content`` to ``url``.

        Args:
            url: Target endpoint.
            content: Exact request body; signatures are computed over it.
            headers: Request headers.
            timeout: Per-request timeout in seconds.

        Returns:
            HTTP status code of the response.

        Raises:
            Exception: Any network failure or timeout. Callers treat
                raised errors as retryable.
        """
        ...
