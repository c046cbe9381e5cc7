"""Builders and a wired harness for verification tests.

Usage:
    harness = VerificationHarness.create()
    project = await harness.add_project()
    milestone = await harness.add_milestone(project)
    inspector = await harness.add_actor(ActorRole.CONTRACTOR_ENGINEER)
    await harness.attest(milestone, inspector, AttestationType.INSPECTOR_VERIFICATION)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from uuid import UUID

from uuid6 import uuid7

from src.application.dtos.attestation import SubmitAttestationInput
from src.bootstrap.verification import (
    VerificationRepositories,
    VerificationServices,
    build_verification_services,
)
from src.config.verification_config import TEST_VERIFICATION_CONFIG, VerificationConfig
from src.domain.models.actor import Actor, ActorRole
from src.domain.models.attestation import Attestation, AttestationType
from src.domain.models.auditor_assignment import AssignmentStatus, AuditorAssignment
from src.domain.models.citizen_pool import (
    AssuranceTier,
    CitizenPoolEntry,
    PoolEntryStatus,
)
from src.domain.models.milestone import Milestone, MilestoneStatus
from src.domain.models.project import GeoPoint, Project
from src.domain.models.trusted_issuer import TrustedIssuer
from src.infrastructure.stubs.random_source_stub import SeededRandomSource
from src.infrastructure.stubs.signature_oracle_stub import SignatureOracleStub
from src.infrastructure.stubs.webhook_transport_stub import WebhookTransportStub

# Rectangle around a site in Nairobi; lat is x and lng is y for the geofence
SITE_BOUNDARY: tuple[GeoPoint, ...] = (
    GeoPoint(lat=-1.30, lng=36.80),
    GeoPoint(lat=-1.30, lng=36.90),
    GeoPoint(lat=-1.20, lng=36.90),
    GeoPoint(lat=-1.20, lng=36.80),
)
INSIDE_SITE = GeoPoint(lat=-1.25, lng=36.85)
FAR_FROM_SITE = GeoPoint(lat=40.71, lng=-74.00)

EVIDENCE_HASH = "ab" * 32
ADMIN_DID = "did:key:zAdmin"


def make_actor(
    role: ActorRole,
    organizations: Iterable[UUID] = (),
    did: str | None = None,
    extra_roles: Iterable[ActorRole] = (),
) -> Actor:
    actor_id = uuid7()
    return Actor(
        id=actor_id,
        did=did or f"did:key:z{actor_id.hex}",
        roles=frozenset({role, *extra_roles}),
        organization_ids=frozenset(organizations),
    )


def make_submission(
    milestone: Milestone,
    actor: Actor,
    attestation_type: AttestationType,
    *,
    gps: GeoPoint = INSIDE_SITE,
    device_token: str | None = None,
    evidence_hash: str = EVIDENCE_HASH,
) -> SubmitAttestationInput:
    return SubmitAttestationInput(
        milestone_id=milestone.id,
        actor_id=actor.id,
        type=attestation_type,
        evidence_hash=evidence_hash,
        gps_latitude=gps.lat,
        gps_longitude=gps.lng,
        device_attestation_token=device_token or f"device-{actor.id}",
        digital_signature=f"sig-{actor.id}-{attestation_type.value}",
    )


@dataclass
class VerificationHarness:
    """Services plus the stubs behind them."""

    services: VerificationServices
    oracle: SignatureOracleStub
    transport: WebhookTransportStub
    rng: SeededRandomSource

    @classmethod
    def create(
        cls,
        oracle: SignatureOracleStub | None = None,
        transport: WebhookTransportStub | None = None,
        rng: SeededRandomSource | None = None,
        config: VerificationConfig = TEST_VERIFICATION_CONFIG,
    ) -> VerificationHarness:
        oracle = oracle or SignatureOracleStub(warn_on_init=False)
        transport = transport or WebhookTransportStub()
        rng = rng or SeededRandomSource()
        services = build_verification_services(
            config, oracle=oracle, transport=transport, rng=rng
        )
        return cls(services=services, oracle=oracle, transport=transport, rng=rng)

    @property
    def repos(self) -> VerificationRepositories:
        return self.services.repositories

    async def add_actor(
        self,
        role: ActorRole,
        organizations: Iterable[UUID] = (),
        trusted: bool = False,
        extra_roles: Iterable[ActorRole] = (),
    ) -> Actor:
        actor = make_actor(role, organizations, extra_roles=extra_roles)
        await self.repos.actors.save(actor)
        if trusted:
            await self.repos.trusted_issuers.save(
                TrustedIssuer(id=uuid7(), issuer_did=actor.did)
            )
        return actor

    async def add_actors(self, role: ActorRole, count: int) -> list[Actor]:
        return [await self.add_actor(role) for _ in range(count)]

    async def add_project(
        self, boundary: tuple[GeoPoint, ...] | None = SITE_BOUNDARY
    ) -> Project:
        project = Project(id=uuid7(), name="Kibera water main", boundary=boundary)
        await self.repos.projects.save(project)
        return project

    async def add_milestone(
        self,
        project: Project,
        status: MilestoneStatus = MilestoneStatus.ATTESTATION_IN_PROGRESS,
        sequence_number: int | None = None,
        required_inspector_count: int = 1,
        required_auditor_count: int = 1,
        required_citizen_count: int = 3,
    ) -> Milestone:
        existing = await self.repos.milestones.list_by_project(project.id)
        milestone = Milestone(
            id=uuid7(),
            project_id=project.id,
            sequence_number=sequence_number or len(existing) + 1,
            description="Trench and lay pipe",
            status=status,
            required_inspector_count=required_inspector_count,
            required_auditor_count=required_auditor_count,
            required_citizen_count=required_citizen_count,
        )
        await self.repos.milestones.save(milestone)
        return milestone

    async def assign_auditor(
        self,
        milestone: Milestone,
        auditor: Actor | None = None,
        status: AssignmentStatus = AssignmentStatus.ACCEPTED,
        rotation_round: int = 1,
    ) -> Actor:
        auditor = auditor or await self.add_actor(ActorRole.INDEPENDENT_AUDITOR)
        await self.repos.assignments.save(
            AuditorAssignment(
                id=uuid7(),
                milestone_id=milestone.id,
                auditor_id=auditor.id,
                rotation_round=rotation_round,
                status=status,
            )
        )
        return auditor

    async def enroll_citizen(
        self,
        milestone: Milestone,
        tier: AssuranceTier = AssuranceTier.BIOMETRIC,
        citizen: Actor | None = None,
        status: PoolEntryStatus = PoolEntryStatus.ENROLLED,
    ) -> Actor:
        citizen = citizen or await self.add_actor(ActorRole.CITIZEN)
        await self.repos.citizen_pools.save(
            CitizenPoolEntry(
                id=uuid7(),
                milestone_id=milestone.id,
                citizen_id=citizen.id,
                proximity_proof_hash="cd" * 32,
                assurance_tier=tier,
                status=status,
            )
        )
        return citizen

    async def attest(
        self,
        milestone: Milestone,
        actor: Actor,
        attestation_type: AttestationType,
        *,
        gps: GeoPoint = INSIDE_SITE,
        device_token: str | None = None,
    ) -> Attestation:
        data = make_submission(
            milestone, actor, attestation_type, gps=gps, device_token=device_token
        )
        return await self.services.attestations.submit(data, actor.did)

    async def attest_through_auditor(self, milestone: Milestone) -> tuple[Actor, Actor]:
        """Submit one inspector verification and one auditor review."""
        inspector = await self.add_actor(ActorRole.CONTRACTOR_ENGINEER)
        await self.attest(milestone, inspector, AttestationType.INSPECTOR_VERIFICATION)
        auditor = await self.assign_auditor(milestone)
        await self.attest(milestone, auditor, AttestationType.AUDITOR_REVIEW)
        return inspector, auditor

    async def milestone(self, milestone_id: UUID) -> Milestone:
        milestone = await self.repos.milestones.get(milestone_id)
        assert milestone is not None
        return milestone

    async def drain(self) -> None:
        await self.services.drain()
