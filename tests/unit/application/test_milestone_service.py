"""Unit tests for MilestoneService."""

from uuid import uuid4

import pytest

from src.application.dtos.milestone import CreateMilestoneInput
from src.domain.errors import ConflictError, InvalidStatusTransitionError, NotFoundError
from src.domain.models.milestone import MilestoneStatus
from tests.helpers.verification import ADMIN_DID, VerificationHarness


class TestCreate:
    async def test_creates_pending_milestone(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()

        milestone = await harness.services.milestones.create(
            CreateMilestoneInput(
                project_id=project.id,
                sequence_number=1,
                description="Foundation poured",
                required_citizen_count=5,
            ),
            ADMIN_DID,
        )

        assert milestone.status is MilestoneStatus.PENDING
        assert milestone.required_citizen_count == 5
        assert await harness.services.milestones.list_for_project(project.id) == [milestone]

    async def test_sequence_number_is_unique_per_project(
        self, harness: VerificationHarness
    ) -> None:
        project = await harness.add_project()
        data = CreateMilestoneInput(project_id=project.id, sequence_number=1)
        await harness.services.milestones.create(data, ADMIN_DID)

        with pytest.raises(ConflictError):
            await harness.services.milestones.create(data, ADMIN_DID)

    async def test_unknown_project(self, harness: VerificationHarness) -> None:
        with pytest.raises(NotFoundError):
            await harness.services.milestones.create(
                CreateMilestoneInput(project_id=uuid4(), sequence_number=1), ADMIN_DID
            )


class TestTransition:
    async def test_walks_to_attestation(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project, status=MilestoneStatus.PENDING)

        await harness.services.milestones.transition(
            milestone.id, MilestoneStatus.IN_PROGRESS, ADMIN_DID
        )
        updated = await harness.services.milestones.transition(
            milestone.id, MilestoneStatus.ATTESTATION_IN_PROGRESS, ADMIN_DID
        )

        assert updated.status is MilestoneStatus.ATTESTATION_IN_PROGRESS

    async def test_failed_milestone_restarts(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)

        await harness.services.milestones.transition(
            milestone.id, MilestoneStatus.FAILED, ADMIN_DID
        )
        restarted = await harness.services.milestones.transition(
            milestone.id, MilestoneStatus.IN_PROGRESS, ADMIN_DID
        )

        assert restarted.status is MilestoneStatus.IN_PROGRESS

    async def test_completion_is_reserved(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)

        with pytest.raises(InvalidStatusTransitionError):
            await harness.services.milestones.transition(
                milestone.id, MilestoneStatus.COMPLETED, ADMIN_DID
            )

    async def test_reopening_is_reserved(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project, status=MilestoneStatus.COMPLETED)

        with pytest.raises(InvalidStatusTransitionError):
            await harness.services.milestones.transition(
                milestone.id, MilestoneStatus.ATTESTATION_IN_PROGRESS, ADMIN_DID
            )

    async def test_transition_is_audited(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project, status=MilestoneStatus.PENDING)

        await harness.services.milestones.transition(
            milestone.id, MilestoneStatus.IN_PROGRESS, ADMIN_DID
        )
        await harness.drain()

        entries, total = await harness.services.audit_log.query(entity_id=milestone.id)
        assert total == 1
        assert entries[0].entity_type == "Milestone"
