"""Attestation repository port.

Attestations are append-only per (milestone, actor, type). Implementations
must reject a second record for the same triple even when racing.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.attestation import Attestation, AttestationType


class AttestationRepositoryProtocol(Protocol):
    """Protocol for attestation storage."""

    async def save(self, attestation: Attestation) -> None:
        """Store a new attestation.

        Raises:
            DuplicateAttestationError: If the (milestone, actor, type)
                triple already has an attestation.
            DeviceReuseError: If a citizen approval with the same device
                token already exists on the milestone.
        """
        ...

    async def get(self, attestation_id: UUID) -> Attestation | None:
        ...

    async def update(self, attestation: Attestation) -> None:
        """Replace a stored attestation.

        Raises:
            NotFoundError: If the attestation does not exist.
        """
        ...

    async def find_by_milestone_actor_type(
        self,
        milestone_id: UUID,
        actor_id: UUID,
        attestation_type: AttestationType,
    ) -> Attestation | None:
        ...

    async def find_by_device_token(
        self,
        milestone_id: UUID,
        attestation_type: AttestationType,
        device_token: str,
    ) -> Attestation | None:
        ...

    async def list_by_milestone(
        self,
        milestone_id: UUID,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Attestation], int]:
        """List attestations of a milestone, oldest first.

        Returns:
            Tuple of (attestations page, total count).
        """
        ...

    async def list_active(
        self,
        milestone_id: UUID,
        attestation_type: AttestationType | None = None,
    ) -> list[Attestation]:
        """List submitted or verified attestations of a milestone."""
        ...

    async def list_actor_ids_for_project(
        self,
        project_id: UUID,
        attestation_type: AttestationType,
    ) -> set[UUID]:
        """Return actors with an attestation of the type on any project milestone."""
        ...
