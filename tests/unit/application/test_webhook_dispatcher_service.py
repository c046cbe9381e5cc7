"""Unit tests for WebhookDispatcherService.

Delivery is at least once with three retries, signed with HMAC-SHA256,
and a failure on one subscription never affects another.
"""

import json
from collections.abc import AsyncIterator
from unittest.mock import AsyncMock

import pytest
from uuid6 import uuid7

from src.application.services.audit_log_service import AuditLogService
from src.application.services.webhook_dispatcher_service import (
    EVENT_HEADER,
    SIGNATURE_HEADER,
    DeadLetterSink,
    WebhookDispatcherService,
    sign_body,
)
from src.domain.models.webhook import WebhookEventType, WebhookSubscription
from src.infrastructure.stubs.audit_log_repository_stub import AuditLogRepositoryStub
from src.infrastructure.stubs.webhook_subscription_repository_stub import (
    WebhookSubscriptionRepositoryStub,
)
from src.infrastructure.stubs.webhook_transport_stub import WebhookTransportStub

PRIMARY_URL = "https://treasury.example/hooks"
SECONDARY_URL = "https://oversight.example/hooks"
SECRET = "0123456789abcdef-secret"


class SleepRecorder:
    """Records backoff delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def subscriptions() -> WebhookSubscriptionRepositoryStub:
    return WebhookSubscriptionRepositoryStub()


@pytest.fixture
def audit_repository() -> AuditLogRepositoryStub:
    return AuditLogRepositoryStub()


@pytest.fixture
async def audit_log(
    audit_repository: AuditLogRepositoryStub,
) -> AsyncIterator[AuditLogService]:
    service = AuditLogService(audit_repository)
    yield service
    await service.flush()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def dispatcher(
    subscriptions: WebhookSubscriptionRepositoryStub,
    transport: WebhookTransportStub,
    audit_log: AuditLogService,
    sleeper: SleepRecorder,
) -> WebhookDispatcherService:
    return WebhookDispatcherService(
        subscriptions,
        transport,
        audit_log,
        timeout_seconds=5.0,
        sleep=sleeper,
    )


async def _subscribe(
    subscriptions: WebhookSubscriptionRepositoryStub,
    url: str = PRIMARY_URL,
    event_types: frozenset[WebhookEventType] = frozenset(WebhookEventType),
    active: bool = True,
) -> WebhookSubscription:
    subscription = WebhookSubscription(
        id=uuid7(), url=url, event_types=event_types, secret=SECRET, active=active
    )
    await subscriptions.save(subscription)
    return subscription


class TestDelivery:
    async def test_signed_post_with_event_header(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(subscriptions)

        dispatcher.dispatch(WebhookEventType.CERTIFICATE_ISSUED, {"certificateId": "c-1"})
        await dispatcher.drain()

        (request,) = transport.requests
        assert request.url == PRIMARY_URL
        assert request.timeout == 5.0
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers[EVENT_HEADER] == "certificate_issued"
        assert request.headers[SIGNATURE_HEADER] == sign_body(SECRET, request.content)
        body = json.loads(request.content)
        assert body["eventType"] == "certificate_issued"
        assert body["payload"] == {"certificateId": "c-1"}
        assert "timestamp" in body

    async def test_only_matching_live_subscriptions_receive(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(
            subscriptions, event_types=frozenset({WebhookEventType.DISPUTE_OPENED})
        )
        await _subscribe(subscriptions, url=SECONDARY_URL, active=False)

        dispatcher.dispatch(WebhookEventType.CERTIFICATE_ISSUED, {})
        await dispatcher.drain()

        assert transport.requests == []

    async def test_dispatch_returns_before_delivery(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(subscriptions)

        dispatcher.dispatch(WebhookEventType.MILESTONE_COMPLETED, {})

        assert transport.requests == []
        await dispatcher.drain()
        assert len(transport.requests) == 1

    async def test_successful_delivery_is_audited(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        audit_log: AuditLogService,
        audit_repository: AuditLogRepositoryStub,
    ) -> None:
        subscription = await _subscribe(subscriptions)

        dispatcher.dispatch(WebhookEventType.MILESTONE_COMPLETED, {})
        await dispatcher.drain()
        await audit_log.flush()

        (entry,) = audit_repository.entries
        assert entry.entity_type == "WebhookSubscription"
        assert entry.entity_id == str(subscription.id)
        assert entry.actor_did == "system"


class TestRetries:
    async def test_recovers_after_transient_failures(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
        sleeper: SleepRecorder,
    ) -> None:
        await _subscribe(subscriptions)
        transport.script(PRIMARY_URL, [503, ConnectionError("reset"), 204])

        dispatcher.dispatch(WebhookEventType.CERTIFICATE_ISSUED, {})
        await dispatcher.drain()

        assert len(transport.requests) == 3
        assert sleeper.delays == [1.0, 5.0]
        assert dispatcher.get_dead_letters() == []

    async def test_every_attempt_sends_identical_bytes(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(subscriptions)
        transport.script(PRIMARY_URL, [500, 500, 200])

        dispatcher.dispatch(WebhookEventType.CERTIFICATE_ISSUED, {"n": 1})
        await dispatcher.drain()

        assert len({r.content for r in transport.requests}) == 1
        assert len({r.headers[SIGNATURE_HEADER] for r in transport.requests}) == 1

    async def test_four_failures_dead_letter(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
        sleeper: SleepRecorder,
    ) -> None:
        subscription = await _subscribe(subscriptions)
        transport.script(PRIMARY_URL, [500, 500, 500, 500])

        dispatcher.dispatch(WebhookEventType.CERTIFICATE_REVOKED, {"certificateId": "c-9"})
        await dispatcher.drain()

        assert len(transport.requests) == 4
        assert sleeper.delays == [1.0, 5.0, 25.0]
        (dead,) = dispatcher.get_dead_letters()
        assert dead.subscription_id == subscription.id
        assert dead.event_type is WebhookEventType.CERTIFICATE_REVOKED
        assert dead.attempts == 4
        assert dead.last_error == "HTTP 500"
        assert dead.body.encode("utf-8") == transport.requests[0].content

    async def test_transport_exception_is_recorded(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(subscriptions)
        transport.script(PRIMARY_URL, [TimeoutError("timed out")] * 4)

        dispatcher.dispatch(WebhookEventType.DISPUTE_OPENED, {})
        await dispatcher.drain()

        (dead,) = dispatcher.get_dead_letters()
        assert dead.last_error == "TimeoutError: timed out"

    async def test_failing_subscription_does_not_block_others(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(subscriptions)
        healthy = await _subscribe(subscriptions, url=SECONDARY_URL)
        transport.script(PRIMARY_URL, [ConnectionError("refused")] * 4)

        dispatcher.dispatch(WebhookEventType.MILESTONE_COMPLETED, {})
        await dispatcher.drain()

        assert len(transport.requests_to(SECONDARY_URL)) == 1
        assert len(transport.requests_to(PRIMARY_URL)) == 4
        (dead,) = dispatcher.get_dead_letters()
        assert dead.subscription_id != healthy.id

    async def test_custom_retry_schedule(
        self,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
        audit_repository: AuditLogRepositoryStub,
        sleeper: SleepRecorder,
    ) -> None:
        sink = DeadLetterSink()
        dispatcher = WebhookDispatcherService(
            subscriptions,
            transport,
            AuditLogService(audit_repository),
            dead_letters=sink,
            retry_delays=(0.5,),
            sleep=sleeper,
        )
        await _subscribe(subscriptions)
        transport.script(PRIMARY_URL, [500, 500])

        dispatcher.dispatch(WebhookEventType.MILESTONE_COMPLETED, {})
        await dispatcher.drain()

        assert dispatcher.max_attempts == 2
        assert sleeper.delays == [0.5]
        assert len(sink) == 1
        assert sink.snapshot()[0].attempts == 2


class TestDeadLetters:
    async def test_clear_is_idempotent(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(subscriptions)
        transport.script(PRIMARY_URL, [500] * 4)
        dispatcher.dispatch(WebhookEventType.MILESTONE_COMPLETED, {})
        await dispatcher.drain()

        assert dispatcher.clear_dead_letters() == 1
        assert dispatcher.clear_dead_letters() == 0
        assert dispatcher.get_dead_letters() == []

    async def test_dead_letters_are_never_retried(
        self,
        dispatcher: WebhookDispatcherService,
        subscriptions: WebhookSubscriptionRepositoryStub,
        transport: WebhookTransportStub,
    ) -> None:
        await _subscribe(subscriptions)
        transport.script(PRIMARY_URL, [500] * 4)
        dispatcher.dispatch(WebhookEventType.MILESTONE_COMPLETED, {})
        await dispatcher.drain()

        dispatcher.dispatch(WebhookEventType.DISPUTE_OPENED, {})
        await dispatcher.drain()

        events = [r.headers[EVENT_HEADER] for r in transport.requests]
        assert events.count("milestone_completed") == 4
        assert events.count("dispute_opened") == 1


class TestFailureContainment:
    async def test_subscription_lookup_failure_is_contained(
        self, transport: WebhookTransportStub, audit_repository: AuditLogRepositoryStub
    ) -> None:
        subscriptions = AsyncMock()
        subscriptions.list_for_event.side_effect = RuntimeError("database unavailable")
        dispatcher = WebhookDispatcherService(
            subscriptions, transport, AuditLogService(audit_repository)
        )

        dispatcher.dispatch(WebhookEventType.CERTIFICATE_ISSUED, {})
        await dispatcher.drain()

        assert transport.requests == []
