"""Infrastructure adapters.

Adapters implement the ports defined in the application layer,
providing concrete implementations for external services.
"""

from src.infrastructure.adapters.http import HttpxWebhookTransport
from src.infrastructure.adapters.locking import InProcessMilestoneLock
from src.infrastructure.adapters.security import (
    Ed25519SignatureOracle,
    SecureRandomSource,
)

__all__: list[str] = [
    "Ed25519SignatureOracle",
    "HttpxWebhookTransport",
    "InProcessMilestoneLock",
    "SecureRandomSource",
]
