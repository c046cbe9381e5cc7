"""Webhook dispatcher service.

Delivers events to subscribed endpoints at least once. Every subscription
is delivered independently: its attempts run sequentially with a backoff
sleep between them, while different subscriptions run concurrently and
cannot fail each other.

Delivery contract:
    POST <subscription.url>
    Content-Type: application/json
    X-TML-Event: <event type>
    X-TML-Signature: hex(HMAC-SHA256(secret, body))

    {"eventType": ..., "payload": {...}, "timestamp": "<ISO 8601>"}

A delivery that fails every attempt lands in the dead-letter sink, where
it stays until an operator clears it. Dead letters are never retried
automatically.
"""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import threading
from collections.abc import Awaitable, Callable, Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from src.application.ports.webhook_subscription_repository import (
    WebhookSubscriptionRepositoryProtocol,
)
from src.application.ports.webhook_transport import WebhookTransportProtocol
from src.application.services.audit_log_service import (
    SYSTEM_ACTOR_DID,
    AuditLogService,
)
from src.application.services.base import LoggingMixin
from src.domain.models.audit_log import AuditAction
from src.domain.models.webhook import (
    DeadLetterEntry,
    DeliveryStatus,
    WebhookEventType,
    WebhookSubscription,
)
from src.domain.services.hashing import canonical_json

SIGNATURE_HEADER = "X-TML-Signature"
EVENT_HEADER = "X-TML-Event"

DEFAULT_TIMEOUT_SECONDS = 5.0
DEFAULT_RETRY_DELAYS: tuple[float, ...] = (1.0, 5.0, 25.0)


def sign_body(secret: str, body: bytes) -> str:
    """Compute the hex HMAC-SHA256 signature of a request body."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()


class DeadLetterSink:
    """Thread-safe store of permanently failed deliveries."""

    def __init__(self) -> None:
        self._entries: list[DeadLetterEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: DeadLetterEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def snapshot(self) -> list[DeadLetterEntry]:
        """Return a copy of the current entries, oldest first."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> int:
        """Remove every entry and return how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
            return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class WebhookDispatcherService(LoggingMixin):
    """Fans events out to webhook subscriptions with retry and dead-lettering.

    Attributes:
        max_attempts: Attempts per delivery, one more than the retry delays.
    """

    def __init__(
        self,
        subscriptions: WebhookSubscriptionRepositoryProtocol,
        transport: WebhookTransportProtocol,
        audit_log: AuditLogService,
        dead_letters: DeadLetterSink | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        retry_delays: Sequence[float] = DEFAULT_RETRY_DELAYS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._subscriptions = subscriptions
        self._transport = transport
        self._audit_log = audit_log
        self._dead_letters = dead_letters or DeadLetterSink()
        self._timeout_seconds = timeout_seconds
        self._retry_delays = tuple(retry_delays)
        self._sleep = sleep
        self._pending: set[asyncio.Task[None]] = set()
        self._init_logger(component="webhooks")

    @property
    def max_attempts(self) -> int:
        return len(self._retry_delays) + 1

    def dispatch(self, event_type: WebhookEventType, payload: Mapping[str, Any]) -> None:
        """Schedule delivery of an event and return immediately.

        The body, including its timestamp, is fixed at dispatch time so
        every retry sends identical bytes. Must be called from a running
        event loop.
        """
        body = canonical_json(
            {
                "eventType": event_type.value,
                "payload": dict(payload),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        ).encode("utf-8")
        task = asyncio.get_running_loop().create_task(self._fan_out(event_type, body))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        self._log_operation("dispatch", event_type=event_type.value).debug(
            "webhook_dispatch_scheduled"
        )

    async def drain(self) -> None:
        """Wait for every scheduled delivery, retries included, to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def get_dead_letters(self) -> list[DeadLetterEntry]:
        return self._dead_letters.snapshot()

    def clear_dead_letters(self) -> int:
        """Drop every dead letter. Safe to call when there are none."""
        removed = self._dead_letters.clear()
        self._log_operation("clear_dead_letters").info(
            "dead_letters_cleared", removed=removed
        )
        return removed

    async def _fan_out(self, event_type: WebhookEventType, body: bytes) -> None:
        log = self._log_operation("fan_out", event_type=event_type.value)
        try:
            subscriptions = await self._subscriptions.list_for_event(event_type)
        except Exception:
            log.exception("webhook_subscription_lookup_failed")
            return

        results = await asyncio.gather(
            *(self._deliver(sub, event_type, body) for sub in subscriptions),
            return_exceptions=True,
        )
        for subscription, result in zip(subscriptions, results):
            if isinstance(result, BaseException):
                log.error(
                    "webhook_delivery_crashed",
                    subscription_id=str(subscription.id),
                    error=repr(result),
                )

    async def _deliver(
        self,
        subscription: WebhookSubscription,
        event_type: WebhookEventType,
        body: bytes,
    ) -> DeliveryStatus:
        log = self._log_operation(
            "deliver",
            subscription_id=str(subscription.id),
            event_type=event_type.value,
        )
        headers = {
            "Content-Type": "application/json",
            SIGNATURE_HEADER: sign_body(subscription.secret, body),
            EVENT_HEADER: event_type.value,
        }

        last_error = ""
        for attempt in range(1, self.max_attempts + 1):
            try:
                status_code = await self._transport.post(
                    subscription.url, body, headers, self._timeout_seconds
                )
            except Exception as exc:
                last_error = f"{type(exc).__name__}: {exc}"
                log.warning("webhook_delivery_error", attempt=attempt, error=last_error)
            else:
                if 200 <= status_code < 300:
                    log.info(
                        "webhook_delivered", attempt=attempt, status_code=status_code
                    )
                    self._audit_log.log(
                        "WebhookSubscription",
                        subscription.id,
                        AuditAction.SUBMIT,
                        SYSTEM_ACTOR_DID,
                        {
                            "eventType": event_type.value,
                            "status": DeliveryStatus.DELIVERED.value,
                            "attempt": attempt,
                        },
                    )
                    return DeliveryStatus.DELIVERED
                last_error = f"HTTP {status_code}"
                log.warning(
                    "webhook_delivery_rejected", attempt=attempt, status_code=status_code
                )

            if attempt < self.max_attempts:
                await self._sleep(self._retry_delays[attempt - 1])

        self._dead_letters.append(
            DeadLetterEntry(
                subscription_id=subscription.id,
                event_type=event_type,
                body=body.decode("utf-8"),
                attempts=self.max_attempts,
                last_error=last_error,
            )
        )
        log.error(
            "webhook_dead_lettered", attempts=self.max_attempts, last_error=last_error
        )
        self._audit_log.log(
            "WebhookSubscription",
            subscription.id,
            AuditAction.SUBMIT,
            SYSTEM_ACTOR_DID,
            {
                "eventType": event_type.value,
                "status": DeliveryStatus.FAILED.value,
                "attempts": self.max_attempts,
                "deadLettered": True,
            },
        )
        return DeliveryStatus.FAILED
