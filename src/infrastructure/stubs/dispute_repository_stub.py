"""In-memory dispute repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.dispute_repository import DisputeRepositoryProtocol
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.dispute import Dispute, DisputeStatus


class DisputeRepositoryStub(DisputeRepositoryProtocol):
    """In-memory stub for DisputeRepositoryProtocol."""

    def __init__(self) -> None:
        self._disputes: dict[UUID, Dispute] = {}

    async def save(self, dispute: Dispute) -> None:
        self._disputes[dispute.id] = dispute

    async def get(self, dispute_id: UUID) -> Dispute | None:
        return self._disputes.get(dispute_id)

    async def update(self, dispute: Dispute) -> None:
        if dispute.id not in self._disputes:
            raise NotFoundError("Dispute", dispute.id)
        self._disputes[dispute.id] = dispute

    async def list_page(
        self,
        milestone_id: UUID | None = None,
        status: DisputeStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Dispute], int]:
        matching = [
            d
            for d in self._disputes.values()
            if (milestone_id is None or d.milestone_id == milestone_id)
            and (status is None or d.status is status)
        ]
        # Newest insertion wins ties on created_at
        matching.reverse()
        matching.sort(key=lambda d: d.created_at, reverse=True)
        return matching[offset : offset + limit], len(matching)

    def clear(self) -> None:
        """Clear all disputes for test isolation."""
        self._disputes.clear()
