"""did:key identifiers for Ed25519 public keys.

A did:key is ``did:key:z`` followed by the base58btc encoding of the
multicodec prefix 0xed01 and the 32 byte raw public key.
"""

from __future__ import annotations

DID_KEY_PREFIX = "did:key:"

# Multibase prefix for base58btc encoding
MULTIBASE_BASE58BTC = "z"

# Multicodec prefix for Ed25519 public key (0xed01)
MULTICODEC_ED25519_PUB = bytes([0xED, 0x01])

ED25519_PUBLIC_KEY_LENGTH = 32

BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


class MalformedDIDError(ValueError):
    """Raised when a DID cannot be decoded into an Ed25519 key."""


def base58_encode(data: bytes) -> str:
    """Encode bytes to base58 string."""
    num = int.from_bytes(data, "big")
    result = ""
    while num > 0:
        num, remainder = divmod(num, 58)
        result = BASE58_ALPHABET[remainder] + result

    # Leading zero bytes map to leading '1's
    for byte in data:
        if byte != 0:
            break
        result = BASE58_ALPHABET[0] + result
    return result


def base58_decode(text: str) -> bytes:
    """Decode a base58 string to bytes.

    Raises:
        ValueError: If the text contains characters outside the alphabet.
    """
    num = 0
    for char in text:
        index = BASE58_ALPHABET.find(char)
        if index < 0:
            raise ValueError(f"Invalid base58 character: {char!r}")
        num = num * 58 + index

    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    leading = len(text) - len(text.lstrip(BASE58_ALPHABET[0]))
    return b"\x00" * leading + body


def create_did(public_key: bytes) -> str:
    """Build the did:key identifier of a raw Ed25519 public key."""
    if len(public_key) != ED25519_PUBLIC_KEY_LENGTH:
        raise MalformedDIDError(
            f"Invalid public key length: expected {ED25519_PUBLIC_KEY_LENGTH} bytes, "
            f"got {len(public_key)}"
        )
    encoded = base58_encode(MULTICODEC_ED25519_PUB + public_key)
    return f"{DID_KEY_PREFIX}{MULTIBASE_BASE58BTC}{encoded}"


def extract_public_key(did: str) -> bytes:
    """Extract the raw Ed25519 public key from a did:key identifier.

    Raises:
        MalformedDIDError: If the DID is not an Ed25519 did:key.
    """
    if not did.startswith(DID_KEY_PREFIX):
        raise MalformedDIDError(f"DID must start with '{DID_KEY_PREFIX}'")

    multibase = did[len(DID_KEY_PREFIX):]
    if not multibase.startswith(MULTIBASE_BASE58BTC):
        raise MalformedDIDError("DID multibase value must start with 'z' (base58btc)")

    try:
        decoded = base58_decode(multibase[1:])
    except ValueError as e:
        raise MalformedDIDError(f"Failed to decode base58 value from DID: {e}") from e

    if decoded[:2] != MULTICODEC_ED25519_PUB:
        raise MalformedDIDError("DID is not an Ed25519 public key")
    public_key = decoded[2:]
    if len(public_key) != ED25519_PUBLIC_KEY_LENGTH:
        raise MalformedDIDError(
            f"Invalid public key length: expected {ED25519_PUBLIC_KEY_LENGTH} bytes, "
            f"got {len(public_key)}"
        )
    return public_key
