"""
Pytest configuration and shared fixtures for milestone verification tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from collections.abc import AsyncIterator

import pytest

from src.infrastructure.stubs.random_source_stub import SeededRandomSource
from src.infrastructure.stubs.signature_oracle_stub import SignatureOracleStub
from src.infrastructure.stubs.webhook_transport_stub import WebhookTransportStub
from tests.helpers.verification import VerificationHarness


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def oracle() -> SignatureOracleStub:
    """Signature oracle stub accepting every attestation signature."""
    return SignatureOracleStub(warn_on_init=False)


@pytest.fixture
def transport() -> WebhookTransportStub:
    """Webhook transport answering 200 unless scripted otherwise."""
    return WebhookTransportStub()


@pytest.fixture
def rng() -> SeededRandomSource:
    """Deterministic random source."""
    return SeededRandomSource(seed=72)


@pytest.fixture
async def harness(
    oracle: SignatureOracleStub,
    transport: WebhookTransportStub,
    rng: SeededRandomSource,
) -> AsyncIterator[VerificationHarness]:
    """Fully wired services over in-memory repositories.

    Pending audit writes and webhook deliveries are drained on teardown.
    """
    harness = VerificationHarness.create(oracle=oracle, transport=transport, rng=rng)
    yield harness
    await harness.drain()
