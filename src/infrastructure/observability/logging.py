"""Structured logging configuration with structlog.

Production emits one JSON object per line; development uses the colored
console renderer. Both share the same processor chain:

    {
        "timestamp": "2026-01-01T00:00:00.000000Z",
        "level": "info",
        "event": "attestation_submitted",
        "correlation_id": "...",
        "service": "AttestationLedgerService",
        ...
    }

Values under keys that carry key material (``secret``, ``signing_key``)
are masked before rendering.
"""

import logging
import os
from typing import Any, cast

import structlog
from structlog.typing import Processor

from src.infrastructure.observability.correlation import correlation_id_processor

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"

REDACTED = "***"
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {"secret", "signing_key", "signing_key_hex", "private_key"}
)


def _resolve_log_level(level_name: str | None = None) -> int:
    """Map a level name (or LOG_LEVEL) to a logging constant, INFO if unknown."""
    name = (level_name or os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def redact_sensitive_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor masking values of sensitive keys."""
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def configure_structlog(
    environment: str = "production",
    log_level: str | None = None,
) -> None:
    """Configure structlog once at startup.

    Args:
        environment: ``"production"`` for JSON output, anything else for
            console output.
        log_level: Level name overriding LOG_LEVEL.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        cast(Processor, correlation_id_processor),
        cast(Processor, redact_sensitive_processor),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if environment == "production":
        final_processor: Processor = structlog.processors.JSONRenderer()
    else:
        final_processor = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=[*shared_processors, final_processor],
        wrapper_class=structlog.make_filtering_bound_logger(
            _resolve_log_level(log_level)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
