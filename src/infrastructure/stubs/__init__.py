"""In-memory and scripted stubs for development and testing.

WARNING: Stubs are NOT for production use. Repositories keep state in
process memory; the oracle and random source are deterministic.
"""

from src.infrastructure.stubs.actor_repository_stub import ActorRepositoryStub
from src.infrastructure.stubs.attestation_repository_stub import (
    AttestationRepositoryStub,
)
from src.infrastructure.stubs.audit_log_repository_stub import AuditLogRepositoryStub
from src.infrastructure.stubs.auditor_assignment_repository_stub import (
    AuditorAssignmentRepositoryStub,
)
from src.infrastructure.stubs.certificate_repository_stub import (
    CertificateRepositoryStub,
)
from src.infrastructure.stubs.citizen_pool_repository_stub import (
    CitizenPoolRepositoryStub,
)
from src.infrastructure.stubs.dispute_repository_stub import DisputeRepositoryStub
from src.infrastructure.stubs.event_publisher_stub import EventPublisherStub
from src.infrastructure.stubs.milestone_repository_stub import MilestoneRepositoryStub
from src.infrastructure.stubs.project_repository_stub import ProjectRepositoryStub
from src.infrastructure.stubs.random_source_stub import SeededRandomSource
from src.infrastructure.stubs.signature_oracle_stub import SignatureOracleStub
from src.infrastructure.stubs.trusted_issuer_repository_stub import (
    TrustedIssuerRepositoryStub,
)
from src.infrastructure.stubs.webhook_subscription_repository_stub import (
    WebhookSubscriptionRepositoryStub,
)
from src.infrastructure.stubs.webhook_transport_stub import (
    RecordedRequest,
    WebhookTransportStub,
)

__all__: list[str] = [
    "ActorRepositoryStub",
    "AttestationRepositoryStub",
    "AuditLogRepositoryStub",
    "AuditorAssignmentRepositoryStub",
    "CertificateRepositoryStub",
    "CitizenPoolRepositoryStub",
    "DisputeRepositoryStub",
    "EventPublisherStub",
    "MilestoneRepositoryStub",
    "ProjectRepositoryStub",
    "RecordedRequest",
    "SeededRandomSource",
    "SignatureOracleStub",
    "TrustedIssuerRepositoryStub",
    "WebhookSubscriptionRepositoryStub",
    "WebhookTransportStub",
]
