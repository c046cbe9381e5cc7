"""Recording event publisher for tests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from src.application.ports.event_publisher import EventPublisherProtocol
from src.domain.models.webhook import WebhookEventType


class EventPublisherStub(EventPublisherProtocol):
    """Captures dispatched events in order instead of delivering them."""

    def __init__(self) -> None:
        self.events: list[tuple[WebhookEventType, dict[str, Any]]] = []

    def dispatch(self, event_type: WebhookEventType, payload: Mapping[str, Any]) -> None:
        self.events.append((event_type, dict(payload)))

    def event_types(self) -> list[WebhookEventType]:
        return [event_type for event_type, _ in self.events]

    def clear(self) -> None:
        self.events.clear()
