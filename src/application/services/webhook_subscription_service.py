"""Webhook subscription management."""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7

from src.application.dtos.webhook import (
    CreateWebhookSubscriptionInput,
    UpdateWebhookSubscriptionInput,
)
from src.application.ports.webhook_subscription_repository import (
    WebhookSubscriptionRepositoryProtocol,
)
from src.application.services.audit_log_service import AuditLogService
from src.application.services.base import LoggingMixin
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.audit_log import AuditAction
from src.domain.models.webhook import WebhookSubscription


class WebhookSubscriptionService(LoggingMixin):
    """CRUD over webhook subscriptions. Secrets never appear in logs."""

    def __init__(
        self,
        repository: WebhookSubscriptionRepositoryProtocol,
        audit_log: AuditLogService,
    ) -> None:
        self._repository = repository
        self._audit_log = audit_log
        self._init_logger(component="webhooks")

    async def create(
        self, data: CreateWebhookSubscriptionInput, actor_did: str
    ) -> WebhookSubscription:
        subscription = WebhookSubscription(
            id=uuid7(),
            url=data.url,
            event_types=frozenset(data.event_types),
            secret=data.secret,
        )
        await self._repository.save(subscription)
        self._audit_log.log(
            "WebhookSubscription",
            subscription.id,
            AuditAction.CREATE,
            actor_did,
            {
                "url": subscription.url,
                "eventTypes": sorted(e.value for e in subscription.event_types),
            },
        )
        self._log_operation("create", subscription_id=str(subscription.id)).info(
            "webhook_subscription_created", url=subscription.url
        )
        return subscription

    async def get(self, subscription_id: UUID) -> WebhookSubscription:
        """Return a subscription.

        Raises:
            NotFoundError: If it does not exist or was removed.
        """
        subscription = await self._repository.get(subscription_id)
        if subscription is None or subscription.deleted_at is not None:
            raise NotFoundError("WebhookSubscription", subscription_id)
        return subscription

    async def list_subscriptions(self) -> list[WebhookSubscription]:
        return await self._repository.list_all()

    async def update(
        self,
        subscription_id: UUID,
        data: UpdateWebhookSubscriptionInput,
        actor_did: str,
    ) -> WebhookSubscription:
        current = await self.get(subscription_id)
        updated = current.with_changes(
            url=data.url,
            event_types=None if data.event_types is None else frozenset(data.event_types),
            active=data.active,
        )
        await self._repository.update(updated)
        self._audit_log.log(
            "WebhookSubscription",
            subscription_id,
            AuditAction.UPDATE,
            actor_did,
            data.model_dump(mode="json", exclude_none=True),
        )
        return updated

    async def remove(self, subscription_id: UUID, actor_did: str) -> None:
        """Soft-delete a subscription; it stops receiving events at once."""
        current = await self.get(subscription_id)
        await self._repository.update(current.deleted())
        self._audit_log.log(
            "WebhookSubscription", subscription_id, AuditAction.DELETE, actor_did
        )
        self._log_operation("remove", subscription_id=str(subscription_id)).info(
            "webhook_subscription_removed"
        )
