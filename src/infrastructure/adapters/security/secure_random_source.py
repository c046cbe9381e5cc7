"""Cryptographically secure random source backed by ``secrets``."""

import secrets

from src.domain.ports.random_source import RandomSourceProtocol


class SecureRandomSource(RandomSourceProtocol):
    """Random source for production selection and proof nonces."""

    def randbelow(self, upper: int) -> int:
        return secrets.randbelow(upper)

    def token_bytes(self, length: int) -> bytes:
        return secrets.token_bytes(length)
