"""Security adapters: Ed25519 signing, did:key handling and secure randomness."""

from src.infrastructure.adapters.security.did_key import (
    MalformedDIDError,
    base58_decode,
    base58_encode,
    create_did,
    extract_public_key,
)
from src.infrastructure.adapters.security.ed25519_signature_oracle import (
    CERTIFICATE_VERSION,
    Ed25519SignatureOracle,
    attestation_chain_hash,
    count_quorum,
)
from src.infrastructure.adapters.security.secure_random_source import SecureRandomSource

__all__: list[str] = [
    "CERTIFICATE_VERSION",
    "Ed25519SignatureOracle",
    "MalformedDIDError",
    "SecureRandomSource",
    "attestation_chain_hash",
    "base58_decode",
    "base58_encode",
    "count_quorum",
    "create_did",
    "extract_public_key",
]
