"""Signature oracle port.

The oracle owns every signing primitive: attestation signature checks,
certificate minting with the system key, and certificate verification.
"""

from abc import abstractmethod
from collections.abc import Mapping, Sequence
from typing import Protocol
from uuid import UUID

from src.domain.models.certificate import CertificateAttestation, MintedCertificate


class SignatureOracleProtocol(Protocol):
    """Protocol for signing and signature verification."""

    @abstractmethod
    async def verify_attestation_signature(
        self,
        payload: Mapping[str, str],
        signature: str,
        signer_did: str,
    ) -> bool:
        """Verify an attestation signature against the signer's DID key.

        Returns:
            True if the signature is valid. Malformed DIDs or signatures
            yield False rather than raising.
        """
        ...

    @abstractmethod
    async def mint_certificate(
        self,
        milestone_id: UUID,
        project_id: UUID,
        attestations: Sequence[CertificateAttestation],
    ) -> MintedCertificate:
        """Build, hash and sign a certificate with the system key.

        Raises:
            SignatureOracleError: If signing fails or no key is configured.
        """
        ...

    @abstractmethod
    async def verify_certificate_signature(
        self,
        certificate_hash: str,
        signature: str,
        public_key: bytes,
    ) -> bool:
        """Verify a certificate signature over its hash."""
        ...

    @abstractmethod
    def system_public_key(self) -> bytes:
        """Raw public key matching the system signing key.

        Raises:
            SignatureOracleError: If no signing key is configured.
        """
        ...
