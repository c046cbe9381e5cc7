"""Citizen pool service: random citizen selection and enrollment.

Eligible citizens are those not yet enrolled on the milestone and holding
fewer than ``sim_cap`` enrolled or attested entries across all
milestones. Selection is stratified by assurance tier: each round draws
one random citizen from every non-empty tier bucket, strongest tier
first, so no tier dominates the draw unless the pool itself is skewed.
"""

from __future__ import annotations

from uuid import UUID

from uuid6 import uuid7

from src.application.dtos.citizen_pool import EnrollCitizenInput
from src.application.ports.actor_repository import ActorRepositoryProtocol
from src.application.ports.citizen_pool_repository import CitizenPoolRepositoryProtocol
from src.application.ports.milestone_lock import MilestoneLockProtocol
from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.application.services.audit_log_service import AuditLogService
from src.application.services.base import LoggingMixin
from src.domain.errors.assignment import DuplicateAssignmentError, InsufficientPoolError
from src.domain.errors.taxonomy import ConflictError, NotFoundError, ValidationError
from src.domain.models.actor import Actor, ActorRole
from src.domain.models.audit_log import AuditAction
from src.domain.models.citizen_pool import (
    DEFAULT_SIM_CAP,
    DEFAULT_TIER,
    AssuranceTier,
    CitizenPoolEntry,
    PoolEntryStatus,
)
from src.domain.models.milestone import Milestone
from src.domain.ports.random_source import RandomSourceProtocol
from src.domain.services.hashing import canonical_json, sha256_hex
from src.domain.services.random_selection import stratified_sample

# Bucket visiting order for stratified sampling
TIER_ORDER: tuple[AssuranceTier, ...] = (
    AssuranceTier.BIOMETRIC,
    AssuranceTier.USSD,
    AssuranceTier.CSO_MEDIATED,
)

# Statuses an operator may set directly
MANUAL_STATUSES: frozenset[PoolEntryStatus] = frozenset(
    {PoolEntryStatus.WITHDRAWN, PoolEntryStatus.EXCLUDED}
)

PROXIMITY_NONCE_BYTES = 16


class CitizenPoolService(LoggingMixin):
    """Selects and enrolls citizens who will attest a milestone."""

    def __init__(
        self,
        pools: CitizenPoolRepositoryProtocol,
        actors: ActorRepositoryProtocol,
        milestones: MilestoneRepositoryProtocol,
        rng: RandomSourceProtocol,
        audit_log: AuditLogService,
        lock: MilestoneLockProtocol,
        sim_cap: int = DEFAULT_SIM_CAP,
    ) -> None:
        if sim_cap < 1:
            raise ValueError("sim_cap must be at least 1")
        self._pools = pools
        self._actors = actors
        self._milestones = milestones
        self._rng = rng
        self._audit_log = audit_log
        self._lock = lock
        self._sim_cap = sim_cap
        self._init_logger(component="assignments")

    async def select_citizens(
        self, milestone_id: UUID, count: int, actor_did: str
    ) -> list[CitizenPoolEntry]:
        """Enroll ``count`` randomly selected citizens on a milestone.

        Raises:
            ValidationError: If count is not positive.
            NotFoundError: If the milestone does not exist.
            InsufficientPoolError: If fewer than ``count`` citizens are eligible.
        """
        if count < 1:
            raise ValidationError("count must be at least 1", {"count": count})
        async with self._lock.hold(milestone_id):
            milestone = await self._load_milestone(milestone_id)
            return await self._select(milestone, count, actor_did)

    async def _select(
        self, milestone: Milestone, count: int, actor_did: str
    ) -> list[CitizenPoolEntry]:
        log = self._log_operation(
            "select_citizens", milestone_id=str(milestone.id), count=count
        )
        citizens = await self._actors.list_by_role(ActorRole.CITIZEN)
        enrolled = {e.citizen_id for e in await self._pools.list_by_milestone(milestone.id)}

        at_cap: set[UUID] = set()
        for citizen in citizens:
            if citizen.id not in enrolled and await self._at_sim_cap(citizen.id):
                at_cap.add(citizen.id)

        eligible = [c for c in citizens if c.id not in enrolled and c.id not in at_cap]
        exclusions = {
            "alreadyEnrolled": len(enrolled & {c.id for c in citizens}),
            "simCap": len(at_cap),
        }
        if len(eligible) < count:
            log.warning(
                "citizen_pool_insufficient",
                pool_size=len(citizens),
                available=len(eligible),
                exclusions=exclusions,
            )
            raise InsufficientPoolError("citizens", len(eligible), count, exclusions)

        buckets: dict[AssuranceTier, list[Actor]] = {tier: [] for tier in TIER_ORDER}
        for citizen in eligible:
            buckets[await self._observed_tier(citizen.id)].append(citizen)

        created: list[CitizenPoolEntry] = []
        for tier, citizen in stratified_sample(buckets, count, self._rng, TIER_ORDER):
            entry = CitizenPoolEntry(
                id=uuid7(),
                milestone_id=milestone.id,
                citizen_id=citizen.id,
                proximity_proof_hash=self._proximity_proof(milestone.id, citizen.id),
                assurance_tier=tier,
            )
            await self._pools.save(entry)
            created.append(entry)

        distribution = {tier.value: 0 for tier in TIER_ORDER}
        for entry in created:
            distribution[entry.assurance_tier.value] += 1
        rationale = {
            "milestoneId": str(milestone.id),
            "count": count,
            "citizenIds": [str(e.citizen_id) for e in created],
            "poolSize": len(citizens),
            "eligible": len(eligible),
            "exclusions": exclusions,
            "tierDistribution": distribution,
        }
        self._audit_log.log(
            "CitizenPool", milestone.id, AuditAction.ASSIGN, actor_did, rationale
        )
        log.info("citizen_selection_completed", **rationale)
        return created

    async def enroll(self, data: EnrollCitizenInput, actor_did: str) -> CitizenPoolEntry:
        """Manually enroll a citizen with a supplied proximity proof.

        Raises:
            NotFoundError: If the milestone or citizen does not exist.
            ValidationError: If the actor is not a citizen.
            DuplicateAssignmentError: If the citizen is already enrolled.
            ConflictError: If the citizen reached the SIM cap.
        """
        async with self._lock.hold(data.milestone_id):
            milestone = await self._load_milestone(data.milestone_id)
            citizen = await self._actors.get(data.citizen_id)
            if citizen is None or citizen.is_deleted:
                raise NotFoundError("Actor", data.citizen_id)
            if not citizen.has_role(ActorRole.CITIZEN):
                raise ValidationError(
                    "Actor must have the citizen role to be enrolled",
                    {"actorId": str(citizen.id), "roles": citizen.role_values},
                )
            if await self._pools.find(milestone.id, citizen.id) is not None:
                raise DuplicateAssignmentError("CitizenPool entry", milestone.id, citizen.id)
            active = await self._pools.count_capped(citizen.id)
            if active >= self._sim_cap:
                raise ConflictError(
                    "Citizen has reached the maximum number of concurrent enrollments",
                    {
                        "citizenId": str(citizen.id),
                        "activeEnrollments": active,
                        "simCap": self._sim_cap,
                    },
                )

            entry = CitizenPoolEntry(
                id=uuid7(),
                milestone_id=milestone.id,
                citizen_id=citizen.id,
                proximity_proof_hash=data.proximity_proof_hash.lower(),
                assurance_tier=data.assurance_tier,
            )
            await self._pools.save(entry)

        self._audit_log.log(
            "CitizenPool",
            entry.id,
            AuditAction.CREATE,
            actor_did,
            {
                "milestoneId": str(milestone.id),
                "citizenId": str(citizen.id),
                "assuranceTier": entry.assurance_tier.value,
            },
        )
        return entry

    async def update_status(
        self, entry_id: UUID, target: PoolEntryStatus, actor_did: str
    ) -> CitizenPoolEntry:
        """Withdraw or exclude a pool entry.

        Raises:
            NotFoundError: If the entry does not exist.
            ValidationError: If the target is not withdrawn or excluded.
            InvalidStatusTransitionError: If the entry cannot move there.
        """
        if target not in MANUAL_STATUSES:
            raise ValidationError(
                "Pool entries can only be withdrawn or excluded",
                {"targetStatus": target.value},
            )
        current = await self.get(entry_id)
        async with self._lock.hold(current.milestone_id):
            current = await self.get(entry_id)
            updated = current.with_status(target)
            await self._pools.update(updated)

        self._audit_log.log(
            "CitizenPool",
            entry_id,
            AuditAction.UPDATE,
            actor_did,
            {"previousStatus": current.status.value, "status": target.value},
        )
        return updated

    async def get(self, entry_id: UUID) -> CitizenPoolEntry:
        entry = await self._pools.get(entry_id)
        if entry is None:
            raise NotFoundError("CitizenPool", entry_id)
        return entry

    async def list_for_milestone(self, milestone_id: UUID) -> list[CitizenPoolEntry]:
        return await self._pools.list_by_milestone(milestone_id)

    async def _at_sim_cap(self, citizen_id: UUID) -> bool:
        return await self._pools.count_capped(citizen_id) >= self._sim_cap

    async def _observed_tier(self, citizen_id: UUID) -> AssuranceTier:
        latest = await self._pools.latest_for_citizen(citizen_id)
        return latest.assurance_tier if latest is not None else DEFAULT_TIER

    def _proximity_proof(self, milestone_id: UUID, citizen_id: UUID) -> str:
        nonce = self._rng.token_bytes(PROXIMITY_NONCE_BYTES).hex()
        return sha256_hex(
            canonical_json(
                {
                    "milestoneId": str(milestone_id),
                    "citizenId": str(citizen_id),
                    "nonce": nonce,
                }
            )
        )

    async def _load_milestone(self, milestone_id: UUID) -> Milestone:
        milestone = await self._milestones.get(milestone_id)
        if milestone is None or milestone.is_deleted:
            raise NotFoundError("Milestone", milestone_id)
        return milestone
