"""
Application layer - Use cases and orchestration for milestone verification.

This layer contains:
- Application services (ledger, quorum, assignments, disputes, webhooks)
- Port definitions (abstract interfaces for infrastructure)
- Command DTOs validated with pydantic

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, bootstrap
"""

from src.application.ports import SignatureOracleProtocol, WebhookTransportProtocol

__all__: list[str] = ["SignatureOracleProtocol", "WebhookTransportProtocol"]
