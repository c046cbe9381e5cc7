"""Webhook transport stub for development and testing.

Records every request and answers from a script of status codes or
exceptions instead of touching the network.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from src.application.ports.webhook_transport import WebhookTransportProtocol


@dataclass(frozen=True)
class RecordedRequest:
    """One POST seen by the stub."""

    url: str
    content: bytes
    headers: dict[str, str] = field(default_factory=dict)
    timeout: float = 0.0


class WebhookTransportStub(WebhookTransportProtocol):
    """Scripted transport.

    Responses are consumed per URL in order; once a URL's script is
    exhausted the default status is returned. A scripted exception
    instance is raised instead of returning a status.

    Example:
        transport = WebhookTransportStub(default_status=200)
        transport.script("https://a.example/hook", [500, 500, 204])
        transport.script("https://b.example/hook", [ConnectionError("down")])
    """

    def __init__(self, default_status: int = 200) -> None:
        self.default_status = default_status
        self._scripts: dict[str, deque[int | Exception]] = {}
        self.requests: list[RecordedRequest] = []

    async def post(
        self,
        url: str,
        content: bytes,
        headers: Mapping[str, str],
        timeout: float,
    ) -> int:
        self.requests.append(RecordedRequest(url, content, dict(headers), timeout))
        script = self._scripts.get(url)
        outcome: int | Exception = script.popleft() if script else self.default_status
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def script(self, url: str, outcomes: Iterable[int | Exception]) -> None:
        """Queue responses for a URL."""
        self._scripts.setdefault(url, deque()).extend(outcomes)

    def requests_to(self, url: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.url == url]

    def clear(self) -> None:
        self._scripts.clear()
        self.requests.clear()
