"""Random source port.

Selection algorithms draw through this interface so production can use a
cryptographically secure source while tests use a seeded one.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSourceProtocol(Protocol):
    """Source of uniform random integers and bytes."""

    def randbelow(self, upper: int) -> int:
        """Return a uniformly distributed integer in ``[0, upper)``.

        Implementations must not introduce modulo bias.

        Raises:
            ValueError: If ``upper`` is not positive.
        """
        ...

    def token_bytes(self, length: int) -> bytes:
        """Return ``length`` random bytes."""
        ...
