"""In-memory attestation repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.attestation_repository import AttestationRepositoryProtocol
from src.domain.errors.attestation import DeviceReuseError, DuplicateAttestationError
from src.domain.errors.taxonomy import NotFoundError
from src.domain.models.attestation import Attestation, AttestationType
from src.infrastructure.stubs.milestone_repository_stub import MilestoneRepositoryStub


class AttestationRepositoryStub(AttestationRepositoryProtocol):
    """In-memory stub for AttestationRepositoryProtocol.

    Enforces the storage constraints: one attestation per
    (milestone, actor, type) and one citizen approval per device token
    on a milestone, regardless of status.

    Args:
        milestones: Milestone store used to resolve the project of each
            attestation, as a join would in storage.
    """

    def __init__(self, milestones: MilestoneRepositoryStub) -> None:
        self._attestations: dict[UUID, Attestation] = {}
        self._milestones = milestones

    async def save(self, attestation: Attestation) -> None:
        existing = await self.find_by_milestone_actor_type(
            attestation.milestone_id, attestation.actor_id, attestation.type
        )
        if existing is not None:
            raise DuplicateAttestationError(
                attestation.milestone_id, attestation.actor_id, attestation.type.value
            )
        if attestation.type is AttestationType.CITIZEN_APPROVAL:
            reused = await self.find_by_device_token(
                attestation.milestone_id,
                attestation.type,
                attestation.device_attestation_token,
            )
            if reused is not None:
                raise DeviceReuseError(
                    attestation.milestone_id, attestation.device_attestation_token
                )
        self._attestations[attestation.id] = attestation

    async def get(self, attestation_id: UUID) -> Attestation | None:
        return self._attestations.get(attestation_id)

    async def update(self, attestation: Attestation) -> None:
        if attestation.id not in self._attestations:
            raise NotFoundError("Attestation", attestation.id)
        self._attestations[attestation.id] = attestation

    async def find_by_milestone_actor_type(
        self,
        milestone_id: UUID,
        actor_id: UUID,
        attestation_type: AttestationType,
    ) -> Attestation | None:
        for a in self._attestations.values():
            if (
                a.milestone_id == milestone_id
                and a.actor_id == actor_id
                and a.type is attestation_type
            ):
                return a
        return None

    async def find_by_device_token(
        self,
        milestone_id: UUID,
        attestation_type: AttestationType,
        device_token: str,
    ) -> Attestation | None:
        for a in self._attestations.values():
            if (
                a.milestone_id == milestone_id
                and a.type is attestation_type
                and a.device_attestation_token == device_token
            ):
                return a
        return None

    async def list_by_milestone(
        self,
        milestone_id: UUID,
        limit: int = 100,
        offset: int = 0,
    ) -> tuple[list[Attestation], int]:
        matching = sorted(
            (a for a in self._attestations.values() if a.milestone_id == milestone_id),
            key=lambda a: a.submitted_at,
        )
        return matching[offset : offset + limit], len(matching)

    async def list_active(
        self,
        milestone_id: UUID,
        attestation_type: AttestationType | None = None,
    ) -> list[Attestation]:
        return sorted(
            (
                a
                for a in self._attestations.values()
                if a.milestone_id == milestone_id
                and a.is_active
                and (attestation_type is None or a.type is attestation_type)
            ),
            key=lambda a: a.submitted_at,
        )

    async def list_actor_ids_for_project(
        self,
        project_id: UUID,
        attestation_type: AttestationType,
    ) -> set[UUID]:
        return {
            a.actor_id
            for a in self._attestations.values()
            if a.type is attestation_type
            and self._milestones.project_of(a.milestone_id) == project_id
        }

    def clear(self) -> None:
        """Clear all attestations for test isolation."""
        self._attestations.clear()
