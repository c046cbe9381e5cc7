"""Milestone lock port.

Submissions, quorum finalization, selection and dispute side effects run
under a per-milestone mutual exclusion lock so that check-then-act
sequences (no certificate yet, current rotation round) cannot interleave.

Production Implementation:
- A database advisory lock or row lock on the milestone
- Single-process deployments use in-process asyncio locks
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from uuid import UUID


class MilestoneLockProtocol(ABC):
    """Abstract interface for per-milestone locking."""

    @abstractmethod
    def hold(self, milestone_id: UUID) -> AbstractAsyncContextManager[None]:
        """Return a context manager holding the milestone's lock.

        Usage:
            async with lock.hold(milestone_id):
                ...

        The lock is not reentrant: code holding it must not try to
        acquire it again for the same milestone.
        """
        ...
