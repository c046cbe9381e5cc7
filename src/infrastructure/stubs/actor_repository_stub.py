"""In-memory actor repository for development and testing."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.actor_repository import ActorRepositoryProtocol
from src.domain.errors.taxonomy import ConflictError
from src.domain.models.actor import Actor, ActorRole


class ActorRepositoryStub(ActorRepositoryProtocol):
    """In-memory stub for ActorRepositoryProtocol.

    Example:
        stub = ActorRepositoryStub()
        await stub.save(actor)
        assert await stub.get_by_did(actor.did) == actor
        stub.clear()
    """

    def __init__(self) -> None:
        self._actors: dict[UUID, Actor] = {}

    async def save(self, actor: Actor) -> None:
        if actor.id in self._actors:
            raise ConflictError("Actor already exists", {"id": str(actor.id)})
        if any(a.did == actor.did for a in self._actors.values()):
            raise ConflictError("Actor DID already registered", {"did": actor.did})
        self._actors[actor.id] = actor

    async def get(self, actor_id: UUID) -> Actor | None:
        return self._actors.get(actor_id)

    async def get_by_did(self, did: str) -> Actor | None:
        for actor in self._actors.values():
            if actor.did == did:
                return actor
        return None

    async def list_by_role(self, role: ActorRole) -> list[Actor]:
        return [
            a for a in self._actors.values() if a.has_role(role) and not a.is_deleted
        ]

    def clear(self) -> None:
        """Clear all actors for test isolation."""
        self._actors.clear()
