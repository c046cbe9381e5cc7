"""Webhook subscription repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.webhook import WebhookEventType, WebhookSubscription


class WebhookSubscriptionRepositoryProtocol(Protocol):
    """Protocol for webhook subscription storage."""

    async def save(self, subscription: WebhookSubscription) -> None:
        ...

    async def get(self, subscription_id: UUID) -> WebhookSubscription | None:
        ...

    async def update(self, subscription: WebhookSubscription) -> None:
        ...

    async def list_all(self, include_deleted: bool = False) -> list[WebhookSubscription]:
        ...

    async def list_for_event(
        self, event_type: WebhookEventType
    ) -> list[WebhookSubscription]:
        """List active, non-deleted subscriptions that include the event."""
        ...
