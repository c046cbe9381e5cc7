"""Milestone verification configuration.

Tunable values for webhook delivery, assignment selection and signing,
with environment variable overrides. Out-of-range timeouts are clamped;
other invalid values fall back to their defaults.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

# =============================================================================
# Webhook delivery
# =============================================================================

DEFAULT_WEBHOOK_TIMEOUT_SECONDS = 5.0
MIN_WEBHOOK_TIMEOUT_SECONDS = 1.0
MAX_WEBHOOK_TIMEOUT_SECONDS = 30.0

# Three retries after the first attempt: 4 attempts in total
DEFAULT_WEBHOOK_RETRY_DELAYS: tuple[float, ...] = (1.0, 5.0, 25.0)

# =============================================================================
# Assignment selection
# =============================================================================

DEFAULT_CITIZEN_SIM_CAP = 5
DEFAULT_AUDITOR_ROTATION_WINDOW = 3

# =============================================================================
# Signing
# =============================================================================

# Ed25519 private key seed: 32 bytes, hex encoded
_SIGNING_KEY_PATTERN = re.compile(r"^[0-9a-fA-F]{64}$")

VALID_ENVIRONMENTS: frozenset[str] = frozenset({"production", "development", "test"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable, falling back to default if unset or invalid."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_delays_env(key: str, default: tuple[float, ...]) -> tuple[float, ...]:
    """Parse a comma separated list of non-negative seconds."""
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    try:
        delays = tuple(float(part) for part in value.split(","))
    except ValueError:
        return default
    if any(delay < 0 for delay in delays):
        return default
    return delays


@dataclass(frozen=True, eq=True)
class VerificationConfig:
    """Configuration for the verification core.

    Attributes:
        environment: ``production``, ``development`` or ``test``.
        webhook_timeout_seconds: Per-request timeout for webhook POSTs.
        webhook_retry_delays: Sleep before each retry; its length is the
            number of retries.
        citizen_sim_cap: Maximum enrolled/attested pool entries per citizen.
        auditor_rotation_window: Rounds during which a project's auditors
            are not reselected.
        system_signing_key_hex: Ed25519 seed used to sign certificates.
    """

    environment: str = "development"
    webhook_timeout_seconds: float = DEFAULT_WEBHOOK_TIMEOUT_SECONDS
    webhook_retry_delays: tuple[float, ...] = DEFAULT_WEBHOOK_RETRY_DELAYS
    citizen_sim_cap: int = DEFAULT_CITIZEN_SIM_CAP
    auditor_rotation_window: int = DEFAULT_AUDITOR_ROTATION_WINDOW
    system_signing_key_hex: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.environment not in VALID_ENVIRONMENTS:
            raise ValueError(
                f"environment must be one of {sorted(VALID_ENVIRONMENTS)}, "
                f"got {self.environment!r}"
            )
        if not (
            MIN_WEBHOOK_TIMEOUT_SECONDS
            <= self.webhook_timeout_seconds
            <= MAX_WEBHOOK_TIMEOUT_SECONDS
        ):
            raise ValueError(
                f"webhook_timeout_seconds must be between {MIN_WEBHOOK_TIMEOUT_SECONDS} "
                f"and {MAX_WEBHOOK_TIMEOUT_SECONDS}, got {self.webhook_timeout_seconds}"
            )
        if any(delay < 0 for delay in self.webhook_retry_delays):
            raise ValueError("webhook_retry_delays must not be negative")
        if self.citizen_sim_cap < 1:
            raise ValueError(f"citizen_sim_cap must be >= 1, got {self.citizen_sim_cap}")
        if self.auditor_rotation_window < 1:
            raise ValueError(
                f"auditor_rotation_window must be >= 1, got {self.auditor_rotation_window}"
            )
        if self.system_signing_key_hex is not None and not _SIGNING_KEY_PATTERN.match(
            self.system_signing_key_hex
        ):
            raise ValueError("system_signing_key_hex must be 64 hex characters")
        if self.environment == "production" and self.system_signing_key_hex is None:
            raise ValueError("SYSTEM_SIGNING_KEY_HEX is required in production")

    @property
    def webhook_max_attempts(self) -> int:
        """Total delivery attempts per subscription."""
        return len(self.webhook_retry_delays) + 1

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_environment(cls) -> VerificationConfig:
        """Create config from environment variables with defaults.

        Environment Variables:
            ENVIRONMENT: production | development | test (default: development)
            WEBHOOK_TIMEOUT_SECONDS: Request timeout, clamped to 1..30 (default: 5)
            WEBHOOK_RETRY_DELAYS: Comma separated seconds (default: 1,5,25)
            CITIZEN_SIM_CAP: Concurrent enrollments per citizen (default: 5)
            AUDITOR_ROTATION_WINDOW: Rotation rounds (default: 3)
            SYSTEM_SIGNING_KEY_HEX: Ed25519 seed in hex (required in production)

        Returns:
            VerificationConfig with values from environment or defaults.
        """
        timeout = _get_float_env(
            "WEBHOOK_TIMEOUT_SECONDS", DEFAULT_WEBHOOK_TIMEOUT_SECONDS
        )
        # Clamp to valid range
        timeout = max(
            MIN_WEBHOOK_TIMEOUT_SECONDS, min(timeout, MAX_WEBHOOK_TIMEOUT_SECONDS)
        )

        sim_cap = _get_int_env("CITIZEN_SIM_CAP", DEFAULT_CITIZEN_SIM_CAP)
        if sim_cap < 1:
            sim_cap = DEFAULT_CITIZEN_SIM_CAP

        window = _get_int_env(
            "AUDITOR_ROTATION_WINDOW", DEFAULT_AUDITOR_ROTATION_WINDOW
        )
        if window < 1:
            window = DEFAULT_AUDITOR_ROTATION_WINDOW

        return cls(
            environment=os.environ.get("ENVIRONMENT", "development").strip().lower(),
            webhook_timeout_seconds=timeout,
            webhook_retry_delays=_get_delays_env(
                "WEBHOOK_RETRY_DELAYS", DEFAULT_WEBHOOK_RETRY_DELAYS
            ),
            citizen_sim_cap=sim_cap,
            auditor_rotation_window=window,
            system_signing_key_hex=os.environ.get("SYSTEM_SIGNING_KEY_HEX") or None,
        )


DEFAULT_VERIFICATION_CONFIG = VerificationConfig()

# Zero delays keep retry tests fast
TEST_VERIFICATION_CONFIG = VerificationConfig(
    environment="test",
    webhook_timeout_seconds=MIN_WEBHOOK_TIMEOUT_SECONDS,
    webhook_retry_delays=(0.0, 0.0, 0.0),
)
