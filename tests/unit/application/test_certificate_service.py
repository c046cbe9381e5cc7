"""Unit tests for CertificateService."""

from uuid import uuid4

import pytest

from src.domain.errors import (
    CertificateAlreadyIssuedError,
    CertificateIssuanceError,
    ConflictError,
    NotFoundError,
)
from src.domain.models.attestation import AttestationType
from src.domain.models.certificate import CertificateStatus
from tests.helpers.verification import ADMIN_DID, VerificationHarness


class TestIssue:
    async def test_embeds_active_attestations(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)
        inspector, auditor = await harness.attest_through_auditor(milestone)

        certificate = await harness.services.certificates.issue(milestone, ADMIN_DID)

        assert certificate.status is CertificateStatus.ISSUED
        (call,) = harness.oracle.mint_calls
        assert call.milestone_id == milestone.id
        assert call.project_id == project.id
        assert {a.actor_did for a in call.attestations} == {inspector.did, auditor.did}
        assert {a.type for a in call.attestations} == {
            AttestationType.INSPECTOR_VERIFICATION,
            AttestationType.AUDITOR_REVIEW,
        }

    async def test_mint_failure_is_wrapped(self, harness: VerificationHarness) -> None:
        harness.oracle.set_mint_failure(True)
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)

        with pytest.raises(CertificateIssuanceError) as exc_info:
            await harness.services.certificates.issue(milestone, ADMIN_DID)

        assert exc_info.value.milestone_id == milestone.id
        assert harness.repos.certificates.get_certificate_count() == 0

    async def test_one_live_certificate_per_milestone(
        self, harness: VerificationHarness
    ) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)
        await harness.services.certificates.issue(milestone, ADMIN_DID)

        with pytest.raises(CertificateAlreadyIssuedError):
            await harness.services.certificates.issue(milestone, ADMIN_DID)


class TestVerifyByHash:
    async def test_valid_signature(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)
        certificate = await harness.services.certificates.issue(milestone, ADMIN_DID)

        result = await harness.services.certificates.verify_by_hash(
            certificate.certificate_hash
        )

        assert result.valid is True
        assert result.certificate == certificate

    async def test_bad_signature(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)
        certificate = await harness.services.certificates.issue(milestone, ADMIN_DID)
        harness.oracle.set_certificate_signatures_valid(False)

        result = await harness.services.certificates.verify_by_hash(
            certificate.certificate_hash
        )

        assert result.valid is False

    async def test_oracle_error_reports_invalid(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)
        certificate = await harness.services.certificates.issue(milestone, ADMIN_DID)
        harness.oracle.set_verify_failure(True)

        result = await harness.services.certificates.verify_by_hash(
            certificate.certificate_hash
        )

        assert result.valid is False

    async def test_unknown_hash(self, harness: VerificationHarness) -> None:
        with pytest.raises(NotFoundError):
            await harness.services.certificates.verify_by_hash("00" * 32)


class TestRevoke:
    async def test_revoke_once(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)
        certificate = await harness.services.certificates.issue(milestone, ADMIN_DID)

        revoked = await harness.services.certificates.revoke(
            certificate.id, "Evidence forged", ADMIN_DID
        )

        assert revoked.status is CertificateStatus.REVOKED
        assert revoked.revocation_reason == "Evidence forged"
        with pytest.raises(ConflictError):
            await harness.services.certificates.revoke(certificate.id, "again", ADMIN_DID)

    async def test_revoked_certificate_frees_the_milestone(
        self, harness: VerificationHarness
    ) -> None:
        project = await harness.add_project()
        milestone = await harness.add_milestone(project)
        first = await harness.services.certificates.issue(milestone, ADMIN_DID)
        await harness.services.certificates.revoke(first.id, "Reissue", ADMIN_DID)

        second = await harness.services.certificates.issue(milestone, ADMIN_DID)

        assert second.id != first.id
        assert second.certificate_hash != first.certificate_hash

    async def test_revoke_current_without_certificate(
        self, harness: VerificationHarness
    ) -> None:
        assert (
            await harness.services.certificates.revoke_current(uuid4(), "none", ADMIN_DID)
            is None
        )

    async def test_list_by_status(self, harness: VerificationHarness) -> None:
        project = await harness.add_project()
        for _ in range(2):
            milestone = await harness.add_milestone(project)
            await harness.services.certificates.issue(milestone, ADMIN_DID)

        certificates, total = await harness.services.certificates.list_certificates(
            status=CertificateStatus.ISSUED
        )

        assert total == 2
        assert len(certificates) == 2

    async def test_get_unknown(self, harness: VerificationHarness) -> None:
        with pytest.raises(NotFoundError):
            await harness.services.certificates.get(uuid4())
