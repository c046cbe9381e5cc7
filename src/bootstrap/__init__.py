"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so the application
layer can depend on ports without importing infrastructure directly.
"""

from src.bootstrap.logging import configure_structlog
from src.bootstrap.verification import (
    VerificationRepositories,
    VerificationServices,
    build_verification_services,
    create_in_memory_repositories,
    get_verification_services,
    reset_verification_services,
)

__all__ = [
    "VerificationRepositories",
    "VerificationServices",
    "build_verification_services",
    "configure_structlog",
    "create_in_memory_repositories",
    "get_verification_services",
    "reset_verification_services",
]
