"""Observability: structured logging and correlation IDs.

Usage:
    from src.infrastructure.observability import (
        configure_structlog,
        correlation_scope,
    )

    configure_structlog(environment="development")
    with correlation_scope():
        ...
"""

from src.infrastructure.observability.correlation import (
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from src.infrastructure.observability.logging import (
    configure_structlog,
    redact_sensitive_processor,
)

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "redact_sensitive_processor",
    "set_correlation_id",
]
