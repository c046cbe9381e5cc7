"""Seeded random source for deterministic tests.

WARNING: This stub is NOT for production use. Its output is fully
predictable from the seed.
"""

from __future__ import annotations

import random

from src.domain.ports.random_source import RandomSourceProtocol


class SeededRandomSource(RandomSourceProtocol):
    """Random source driven by ``random.Random`` with a fixed seed."""

    def __init__(self, seed: int = 72) -> None:
        self._seed = seed
        self._random = random.Random(seed)
        self.draws = 0

    def randbelow(self, upper: int) -> int:
        if upper <= 0:
            raise ValueError("upper must be positive")
        self.draws += 1
        return self._random.randrange(upper)

    def token_bytes(self, length: int) -> bytes:
        return self._random.randbytes(length)

    def reset(self) -> None:
        """Restart the sequence from the original seed."""
        self._random = random.Random(self._seed)
        self.draws = 0
