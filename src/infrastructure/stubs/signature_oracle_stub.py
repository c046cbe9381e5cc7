"""Signature oracle stub for development and testing.

WARNING: This stub is NOT for production use. It produces deterministic
pseudo-signatures (SHA-256 based) and accepts or rejects signatures
according to its configuration rather than any key material.
"""

from __future__ import annotations

import warnings
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from uuid import UUID

from src.application.ports.signature_oracle import SignatureOracleProtocol
from src.domain.errors.certificate import SignatureOracleError
from src.domain.models.certificate import CertificateAttestation, MintedCertificate
from src.domain.services.hashing import canonical_json, sha256_hex

DEV_MODE_WARNING = "[DEV MODE] SignatureOracleStub in use - NOT FOR PRODUCTION"

STUB_PUBLIC_KEY = b"\x00" * 32


@dataclass(frozen=True)
class MintCall:
    """Arguments of one ``mint_certificate`` call (for test assertions)."""

    milestone_id: UUID
    project_id: UUID
    attestations: tuple[CertificateAttestation, ...]


class SignatureOracleStub(SignatureOracleProtocol):
    """Configurable stub implementation of SignatureOracleProtocol.

    Example:
        oracle = SignatureOracleStub(warn_on_init=False)
        oracle.set_attestation_signatures_valid(False)
        oracle.set_mint_failure(True)  # mint_certificate raises
    """

    def __init__(self, warn_on_init: bool = True) -> None:
        if warn_on_init:
            warnings.warn(DEV_MODE_WARNING, UserWarning, stacklevel=2)
        self._attestation_signatures_valid = True
        self._certificate_signatures_valid = True
        self._mint_failure = False
        self._verify_failure = False
        self.mint_calls: list[MintCall] = []

    async def verify_attestation_signature(
        self,
        payload: Mapping[str, str],
        signature: str,
        signer_did: str,
    ) -> bool:
        return self._attestation_signatures_valid

    async def mint_certificate(
        self,
        milestone_id: UUID,
        project_id: UUID,
        attestations: Sequence[CertificateAttestation],
    ) -> MintedCertificate:
        if self._mint_failure:
            raise SignatureOracleError("Simulated certificate signing failure")
        self.mint_calls.append(MintCall(milestone_id, project_id, tuple(attestations)))
        body = {
            "milestoneId": str(milestone_id),
            "projectId": str(project_id),
            "attestations": [a.to_payload() for a in attestations],
            "mintSequence": len(self.mint_calls),
        }
        certificate_hash = sha256_hex(canonical_json(body))
        return MintedCertificate(
            certificate_hash=certificate_hash,
            digital_signature=f"stub-{certificate_hash[:32]}",
            body=body,
        )

    async def verify_certificate_signature(
        self,
        certificate_hash: str,
        signature: str,
        public_key: bytes,
    ) -> bool:
        if self._verify_failure:
            raise SignatureOracleError("Simulated verification failure")
        return self._certificate_signatures_valid and signature == (
            f"stub-{certificate_hash[:32]}"
        )

    def system_public_key(self) -> bytes:
        return STUB_PUBLIC_KEY

    # Test control methods

    def set_attestation_signatures_valid(self, valid: bool) -> None:
        self._attestation_signatures_valid = valid

    def set_certificate_signatures_valid(self, valid: bool) -> None:
        self._certificate_signatures_valid = valid

    def set_mint_failure(self, should_fail: bool) -> None:
        self._mint_failure = should_fail

    def set_verify_failure(self, should_fail: bool) -> None:
        self._verify_failure = should_fail
