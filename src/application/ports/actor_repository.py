"""Actor repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.actor import Actor, ActorRole


class ActorRepositoryProtocol(Protocol):
    """Protocol for actor storage.

    Soft-deleted actors are returned; callers decide how to treat them.
    """

    async def save(self, actor: Actor) -> None:
        """Store a new actor.

        Raises:
            ConflictError: If an actor with the same id or DID exists.
        """
        ...

    async def get(self, actor_id: UUID) -> Actor | None:
        ...

    async def get_by_did(self, did: str) -> Actor | None:
        ...

    async def list_by_role(self, role: ActorRole) -> list[Actor]:
        """List every non-deleted actor holding the role."""
        ...
