"""
Infrastructure layer - External adapters for milestone verification.

This layer contains:
- Ed25519 signature oracle and did:key handling (cryptography)
- httpx webhook transport
- In-process milestone locks
- In-memory stubs for development and tests
- structlog configuration and correlation IDs

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""

from src.infrastructure.adapters import (
    Ed25519SignatureOracle,
    HttpxWebhookTransport,
    InProcessMilestoneLock,
    SecureRandomSource,
)

__all__: list[str] = [
    "Ed25519SignatureOracle",
    "HttpxWebhookTransport",
    "InProcessMilestoneLock",
    "SecureRandomSource",
]
