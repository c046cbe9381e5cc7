"""Unit tests for AuditLogService."""

import asyncio
import hashlib
import json

import pytest

from src.application.services.audit_log_service import AuditLogService
from src.domain.models.audit_log import AuditAction
from src.infrastructure.stubs.audit_log_repository_stub import AuditLogRepositoryStub


@pytest.fixture
def repository() -> AuditLogRepositoryStub:
    return AuditLogRepositoryStub()


@pytest.fixture
def service(repository: AuditLogRepositoryStub) -> AuditLogService:
    return AuditLogService(repository)


class TestLog:
    async def test_stores_payload_hash_only(
        self, service: AuditLogService, repository: AuditLogRepositoryStub
    ) -> None:
        service.log("Milestone", "m-1", AuditAction.UPDATE, "did:key:zA", {"b": 2, "a": 1})
        await service.flush()

        (entry,) = repository.entries
        expected = hashlib.sha256(
            json.dumps({"a": 1, "b": 2}, separators=(",", ":")).encode()
        ).hexdigest()
        assert entry.payload_hash == expected
        assert entry.entity_id == "m-1"
        assert entry.action is AuditAction.UPDATE

    async def test_missing_payload_hashes_empty_object(
        self, service: AuditLogService, repository: AuditLogRepositoryStub
    ) -> None:
        service.log("Dispute", "d-1", AuditAction.DELETE, "did:key:zA")
        await service.flush()

        assert repository.entries[0].payload_hash == hashlib.sha256(b"{}").hexdigest()

    async def test_log_does_not_wait_for_the_store(
        self, service: AuditLogService, repository: AuditLogRepositoryStub
    ) -> None:
        service.log("Milestone", "m-1", AuditAction.CREATE, "did:key:zA")

        assert repository.entries == []
        await service.flush()
        assert len(repository.entries) == 1

    async def test_write_failure_never_reaches_the_caller(
        self, service: AuditLogService, repository: AuditLogRepositoryStub
    ) -> None:
        repository.fail_writes = True

        service.log("Milestone", "m-1", AuditAction.CREATE, "did:key:zA")
        await service.flush()

        assert repository.entries == []

    async def test_flush_waits_for_concurrent_writes(
        self, service: AuditLogService, repository: AuditLogRepositoryStub
    ) -> None:
        for index in range(10):
            service.log("Milestone", f"m-{index}", AuditAction.CREATE, "did:key:zA")
        await asyncio.sleep(0)
        await service.flush()

        assert len(repository.entries) == 10


class TestQuery:
    async def test_filters_and_pages(
        self, service: AuditLogService, repository: AuditLogRepositoryStub
    ) -> None:
        for index in range(3):
            service.log("Milestone", "m-1", AuditAction.UPDATE, f"did:key:z{index}")
        service.log("Dispute", "d-1", AuditAction.CREATE, "did:key:z0")
        await service.flush()

        page, total = await service.query(entity_type="Milestone", limit=2)
        by_actor, actor_total = await service.query(actor_did="did:key:z0")

        assert total == 3
        assert len(page) == 2
        assert actor_total == 2
        assert {e.entity_type for e in by_actor} == {"Milestone", "Dispute"}
