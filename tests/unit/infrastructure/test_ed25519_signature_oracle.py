"""Unit tests for Ed25519SignatureOracle using real keys."""

from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from uuid6 import uuid7

from src.domain.errors import SignatureOracleError
from src.domain.models.attestation import AttestationType
from src.domain.models.certificate import CertificateAttestation
from src.domain.services.hashing import canonical_json, sha256_hex
from src.infrastructure.adapters.security.did_key import base58_encode, create_did
from src.infrastructure.adapters.security.ed25519_signature_oracle import (
    CERTIFICATE_VERSION,
    Ed25519SignatureOracle,
    attestation_chain_hash,
    count_quorum,
)

SYSTEM_KEY_HEX = "9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60"


def _signer() -> tuple[Ed25519PrivateKey, str]:
    key = Ed25519PrivateKey.generate()
    public = key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw, format=serialization.PublicFormat.Raw
    )
    return key, create_did(public)


def _embedded(actor_did: str, attestation_type: AttestationType) -> CertificateAttestation:
    return CertificateAttestation(
        attestation_id=uuid7(),
        actor_did=actor_did,
        type=attestation_type,
        evidence_hash="ab" * 32,
        digital_signature=f"sig-{actor_did}",
        submitted_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def oracle() -> Ed25519SignatureOracle:
    return Ed25519SignatureOracle(SYSTEM_KEY_HEX)


class TestAttestationSignatures:
    async def test_valid_client_signature(self, oracle: Ed25519SignatureOracle) -> None:
        key, did = _signer()
        payload = {"milestoneId": "m-1", "type": "citizen_approval"}
        digest = sha256_hex(canonical_json(payload))
        signature = base58_encode(key.sign(digest.encode("utf-8")))

        assert await oracle.verify_attestation_signature(payload, signature, did) is True

    async def test_tampered_payload(self, oracle: Ed25519SignatureOracle) -> None:
        key, did = _signer()
        digest = sha256_hex(canonical_json({"milestoneId": "m-1"}))
        signature = base58_encode(key.sign(digest.encode("utf-8")))

        assert (
            await oracle.verify_attestation_signature({"milestoneId": "m-2"}, signature, did)
            is False
        )

    async def test_garbage_signature(self, oracle: Ed25519SignatureOracle) -> None:
        _, did = _signer()

        assert await oracle.verify_attestation_signature({}, "not-base58-0OIl", did) is False

    async def test_malformed_did(self, oracle: Ed25519SignatureOracle) -> None:
        assert (
            await oracle.verify_attestation_signature({}, "abc", "did:web:example.com")
            is False
        )

    async def test_works_without_system_key(self) -> None:
        key, did = _signer()
        digest = sha256_hex(canonical_json({}))
        signature = base58_encode(key.sign(digest.encode("utf-8")))

        assert await Ed25519SignatureOracle().verify_attestation_signature(
            {}, signature, did
        )


class TestCertificates:
    async def test_mint_then_verify(self, oracle: Ed25519SignatureOracle) -> None:
        milestone_id, project_id = uuid7(), uuid7()
        attestations = [
            _embedded("did:key:zInspector", AttestationType.INSPECTOR_VERIFICATION),
            _embedded("did:key:zAuditor", AttestationType.AUDITOR_REVIEW),
            _embedded("did:key:zCitizen", AttestationType.CITIZEN_APPROVAL),
        ]

        minted = await oracle.mint_certificate(milestone_id, project_id, attestations)

        assert minted.body["version"] == CERTIFICATE_VERSION
        assert minted.body["quorum"] == {"inspectors": 1, "auditors": 1, "citizens": 1}
        assert minted.certificate_hash == sha256_hex(canonical_json(minted.body))
        assert await oracle.verify_certificate_signature(
            minted.certificate_hash, minted.digital_signature, oracle.system_public_key()
        )

    async def test_signature_does_not_cover_other_hash(
        self, oracle: Ed25519SignatureOracle
    ) -> None:
        minted = await oracle.mint_certificate(uuid7(), uuid7(), [])

        assert not await oracle.verify_certificate_signature(
            "00" * 32, minted.digital_signature, oracle.system_public_key()
        )

    async def test_other_key_does_not_verify(self, oracle: Ed25519SignatureOracle) -> None:
        minted = await oracle.mint_certificate(uuid7(), uuid7(), [])
        other = Ed25519SignatureOracle.with_ephemeral_key()

        assert not await oracle.verify_certificate_signature(
            minted.certificate_hash, minted.digital_signature, other.system_public_key()
        )

    async def test_mint_requires_system_key(self) -> None:
        with pytest.raises(SignatureOracleError):
            await Ed25519SignatureOracle().mint_certificate(uuid7(), uuid7(), [])

    def test_invalid_key_hex(self) -> None:
        with pytest.raises(SignatureOracleError):
            Ed25519SignatureOracle("abcd")

    def test_chain_hash_ignores_input_order(self) -> None:
        milestone_id = uuid7()
        first = _embedded("did:key:zA", AttestationType.CITIZEN_APPROVAL)
        second = _embedded("did:key:zB", AttestationType.INSPECTOR_VERIFICATION)

        assert attestation_chain_hash(milestone_id, [first, second]) == (
            attestation_chain_hash(milestone_id, [second, first])
        )

    def test_count_quorum_defaults_to_zero(self) -> None:
        assert count_quorum([]) == {"inspectors": 0, "auditors": 0, "citizens": 0}
