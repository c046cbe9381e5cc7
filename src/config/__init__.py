"""Configuration for the milestone verification core.

Available Configurations:
- VerificationConfig: webhook delivery, selection limits and signing key
"""

from src.config.verification_config import (
    DEFAULT_VERIFICATION_CONFIG,
    TEST_VERIFICATION_CONFIG,
    VerificationConfig,
)

__all__ = [
    "DEFAULT_VERIFICATION_CONFIG",
    "TEST_VERIFICATION_CONFIG",
    "VerificationConfig",
]
