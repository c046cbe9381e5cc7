"""In-memory webhook subscription repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.webhook_subscription_repository import (
    WebhookSubscriptionRepositoryProtocol,
)
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.webhook import WebhookEventType, WebhookSubscription


class WebhookSubscriptionRepositoryStub(WebhookSubscriptionRepositoryProtocol):
    """In-memory stub for WebhookSubscriptionRepositoryProtocol."""

    def __init__(self) -> None:
        self._subscriptions: dict[UUID, WebhookSubscription] = {}

    async def save(self, subscription: WebhookSubscription) -> None:
        self._subscriptions[subscription.id] = subscription

    async def get(self, subscription_id: UUID) -> WebhookSubscription | None:
        return self._subscriptions.get(subscription_id)

    async def update(self, subscription: WebhookSubscription) -> None:
        if subscription.id not in self._subscriptions:
            raise NotFoundError("WebhookSubscription", subscription.id)
        self._subscriptions[subscription.id] = subscription

    async def list_all(self, include_deleted: bool = False) -> list[WebhookSubscription]:
        return [
            s
            for s in self._subscriptions.values()
            if include_deleted or s.deleted_at is None
        ]

    async def list_for_event(
        self, event_type: WebhookEventType
    ) -> list[WebhookSubscription]:
        return [s for s in self._subscriptions.values() if s.accepts(event_type)]

    def clear(self) -> None:
        """Clear all subscriptions for test isolation."""
        self._subscriptions.clear()
