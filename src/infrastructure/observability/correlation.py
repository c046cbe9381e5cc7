"""Correlation ID propagation for log tracing.

A correlation ID ties together every log line produced while handling one
caller operation, including webhook deliveries it spawns. IDs live in a
context variable so they follow ``asyncio`` tasks created from the
operation.

Usage:
    with correlation_scope():
        await ledger.submit(data, actor_did)
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

from uuid6 import uuid7

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """Return a new time-ordered correlation ID."""
    return str(uuid7())


def get_correlation_id() -> str:
    """Return the current correlation ID, or an empty string when unset."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    _correlation_id.set(correlation_id)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of a block.

    Args:
        correlation_id: ID to bind. A new one is generated when omitted.

    Yields:
        The bound correlation ID.
    """
    token = _correlation_id.set(correlation_id or generate_correlation_id())
    try:
        yield _correlation_id.get()
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the current correlation ID to each entry."""
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
