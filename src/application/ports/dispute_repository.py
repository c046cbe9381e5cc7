"""Dispute repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.dispute import Dispute, DisputeStatus


class DisputeRepositoryProtocol(Protocol):
    """Protocol for dispute storage."""

    async def save(self, dispute: Dispute) -> None:
        ...

    async def get(self, dispute_id: UUID) -> Dispute | None:
        ...

    async def update(self, dispute: Dispute) -> None:
        ...

    async def list_page(
        self,
        milestone_id: UUID | None = None,
        status: DisputeStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Dispute], int]:
        """List disputes newest first, optionally filtered."""
        ...
