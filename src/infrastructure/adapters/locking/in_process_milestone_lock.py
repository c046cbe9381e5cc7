"""In-process milestone lock for single-process deployments."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from src.application.ports.milestone_lock import MilestoneLockProtocol


class InProcessMilestoneLock(MilestoneLockProtocol):
    """One ``asyncio.Lock`` per milestone, created on first use.

    Locks are never evicted; the map grows with the number of distinct
    milestones touched by the process.
    """

    def __init__(self) -> None:
        self._locks: dict[UUID, asyncio.Lock] = {}

    @asynccontextmanager
    async def hold(self, milestone_id: UUID) -> AsyncIterator[None]:
        lock = self._locks.setdefault(milestone_id, asyncio.Lock())
        async with lock:
            yield

    def is_held(self, milestone_id: UUID) -> bool:
        """Return True while some task holds the milestone's lock."""
        lock = self._locks.get(milestone_id)
        return lock is not None and lock.locked()
