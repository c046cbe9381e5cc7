"""Webhook subscription and delivery domain models."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID


class WebhookEventType(Enum):
    """Events published to external subscribers."""

    CERTIFICATE_ISSUED = "certificate_issued"
    CERTIFICATE_REVOKED = "certificate_revoked"
    MILESTONE_COMPLETED = "milestone_completed"
    DISPUTE_OPENED = "dispute_opened"
    DISPUTE_RESOLVED = "dispute_resolved"


class DeliveryStatus(Enum):
    """Final outcome of one subscription's delivery."""

    DELIVERED = "delivered"
    FAILED = "failed"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class WebhookSubscription:
    """An external endpoint subscribed to a set of events.

    Attributes:
        id: UUIDv7 unique identifier.
        url: HTTP(S) endpoint receiving POSTs.
        event_types: Events the endpoint wants.
        secret: Shared HMAC key. Never logged.
        active: Inactive subscriptions receive nothing.
        deleted_at: Soft-delete marker.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    url: str
    event_types: frozenset[WebhookEventType]
    secret: str = field(repr=False)
    active: bool = field(default=True)
    deleted_at: datetime | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    def accepts(self, event_type: WebhookEventType) -> bool:
        """True when the subscription should receive this event."""
        return self.active and self.deleted_at is None and event_type in self.event_types

    def with_changes(
        self,
        url: str | None = None,
        event_types: frozenset[WebhookEventType] | None = None,
        active: bool | None = None,
    ) -> WebhookSubscription:
        """Create a copy with the provided fields replaced."""
        return replace(
            self,
            url=self.url if url is None else url,
            event_types=self.event_types if event_types is None else event_types,
            active=self.active if active is None else active,
        )

    def deleted(self) -> WebhookSubscription:
        return replace(self, active=False, deleted_at=_utc_now())


@dataclass(frozen=True)
class DeadLetterEntry:
    """A delivery that failed every attempt.

    Attributes:
        subscription_id: Subscription that could not be reached.
        event_type: Event that was being delivered.
        body: Exact request body that was sent.
        attempts: Number of attempts made.
        last_error: Description of the final failure.
        failed_at: When the delivery was given up (UTC).
    """

    subscription_id: UUID
    event_type: WebhookEventType
    body: str
    attempts: int
    last_error: str
    failed_at: datetime = field(default_factory=_utc_now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "subscriptionId": str(self.subscription_id),
            "eventType": self.event_type.value,
            "body": self.body,
            "attempts": self.attempts,
            "lastError": self.last_error,
            "failedAt": self.failed_at.isoformat(),
        }
