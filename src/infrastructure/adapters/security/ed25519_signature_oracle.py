"""Ed25519 signature oracle.

Signatures are base58 encoded and always computed over the UTF-8 bytes of
a SHA-256 hex digest of canonical JSON, never over the JSON itself.

Certificate body:
    version, milestoneId, projectId, attestationChainHash, attestations,
    quorum {inspectors, auditors, citizens}, issuedAt

The attestation chain hash is the SHA-256 of the concatenated
evidenceHash + digitalSignature of every attestation, ordered by
(milestoneId, actorDid, type).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

import structlog
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from src.application.ports.signature_oracle import SignatureOracleProtocol
from src.domain.errors.certificate import SignatureOracleError
from src.domain.models.attestation import AttestationType
from src.domain.models.certificate import CertificateAttestation, MintedCertificate
from src.domain.services.hashing import canonical_json, sha256_hex
from src.infrastructure.adapters.security.did_key import (
    MalformedDIDError,
    base58_decode,
    base58_encode,
    extract_public_key,
)

logger = structlog.get_logger()

CERTIFICATE_VERSION = "1.0"

_QUORUM_KEYS: dict[AttestationType, str] = {
    AttestationType.INSPECTOR_VERIFICATION: "inspectors",
    AttestationType.AUDITOR_REVIEW: "auditors",
    AttestationType.CITIZEN_APPROVAL: "citizens",
}


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


def attestation_chain_hash(
    milestone_id: UUID, attestations: Sequence[CertificateAttestation]
) -> str:
    """Hash the evidence and signatures of a certificate's attestations."""
    ordered = sorted(
        attestations, key=lambda a: (str(milestone_id), a.actor_did, a.type.value)
    )
    return sha256_hex("".join(a.evidence_hash + a.digital_signature for a in ordered))


def count_quorum(attestations: Sequence[CertificateAttestation]) -> dict[str, int]:
    """Count embedded attestations per attester group."""
    quorum = dict.fromkeys(_QUORUM_KEYS.values(), 0)
    for attestation in attestations:
        quorum[_QUORUM_KEYS[attestation.type]] += 1
    return quorum


def _verify(public_key: bytes, signature: str, message: bytes) -> bool:
    try:
        Ed25519PublicKey.from_public_bytes(public_key).verify(
            base58_decode(signature), message
        )
    except (InvalidSignature, ValueError):
        return False
    return True


class Ed25519SignatureOracle(SignatureOracleProtocol):
    """Signature oracle backed by the ``cryptography`` Ed25519 primitives.

    Args:
        system_signing_key_hex: 32 byte Ed25519 private key seed as hex.
            Without it, minting and public key lookup raise
            SignatureOracleError while attestation verification still works.
    """

    def __init__(self, system_signing_key_hex: str | None = None) -> None:
        self._private_key: Ed25519PrivateKey | None = None
        if system_signing_key_hex:
            try:
                self._private_key = Ed25519PrivateKey.from_private_bytes(
                    bytes.fromhex(system_signing_key_hex)
                )
            except ValueError as e:
                raise SignatureOracleError(
                    "Invalid system signing key", {"reason": str(e)}
                ) from e

    @classmethod
    def with_ephemeral_key(cls) -> Ed25519SignatureOracle:
        """Create an oracle with a freshly generated, unpersisted signing key.

        Certificates it signs cannot be verified after the process exits.
        """
        seed = Ed25519PrivateKey.generate().private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )
        return cls(seed.hex())

    async def verify_attestation_signature(
        self,
        payload: Mapping[str, str],
        signature: str,
        signer_did: str,
    ) -> bool:
        try:
            public_key = extract_public_key(signer_did)
        except MalformedDIDError as e:
            logger.debug("attestation_signer_did_malformed", reason=str(e))
            return False
        digest = sha256_hex(canonical_json(dict(payload)))
        return _verify(public_key, signature, digest.encode("utf-8"))

    async def mint_certificate(
        self,
        milestone_id: UUID,
        project_id: UUID,
        attestations: Sequence[CertificateAttestation],
    ) -> MintedCertificate:
        private_key = self._require_key()
        body: dict[str, Any] = {
            "version": CERTIFICATE_VERSION,
            "milestoneId": str(milestone_id),
            "projectId": str(project_id),
            "attestationChainHash": attestation_chain_hash(milestone_id, attestations),
            "attestations": [a.to_payload() for a in attestations],
            "quorum": count_quorum(attestations),
            "issuedAt": _utc_now().isoformat(),
        }
        certificate_hash = sha256_hex(canonical_json(body))
        signature = base58_encode(private_key.sign(certificate_hash.encode("utf-8")))
        return MintedCertificate(
            certificate_hash=certificate_hash,
            digital_signature=signature,
            body=body,
        )

    async def verify_certificate_signature(
        self,
        certificate_hash: str,
        signature: str,
        public_key: bytes,
    ) -> bool:
        return _verify(public_key, signature, certificate_hash.encode("utf-8"))

    def system_public_key(self) -> bytes:
        return (
            self._require_key()
            .public_key()
            .public_bytes(
                encoding=serialization.Encoding.Raw,
                format=serialization.PublicFormat.Raw,
            )
        )

    def _require_key(self) -> Ed25519PrivateKey:
        if self._private_key is None:
            raise SignatureOracleError("System signing key is not configured")
        return self._private_key
