"""Locking adapters."""

from src.infrastructure.adapters.locking.in_process_milestone_lock import (
    InProcessMilestoneLock,
)

__all__: list[str] = ["InProcessMilestoneLock"]
