"""Application ports (interfaces) for milestone verification.

Ports define the contracts that infrastructure adapters implement:
repositories per entity, the signature oracle, the webhook transport,
the per-milestone lock and the event publisher.
"""

from src.application.ports.actor_repository import ActorRepositoryProtocol
from src.application.ports.attestation_repository import AttestationRepositoryProtocol
from src.application.ports.audit_log_repository import AuditLogRepositoryProtocol
from src.application.ports.auditor_assignment_repository import (
    AuditorAssignmentRepositoryProtocol,
)
from src.application.ports.certificate_repository import CertificateRepositoryProtocol
from src.application.ports.citizen_pool_repository import CitizenPoolRepositoryProtocol
from src.application.ports.dispute_repository import DisputeRepositoryProtocol
from src.application.ports.event_publisher import EventPublisherProtocol
from src.application.ports.milestone_lock import MilestoneLockProtocol
from src.application.ports.milestone_repository import MilestoneRepositoryProtocol
from src.application.ports.project_repository import ProjectRepositoryProtocol
from src.application.ports.signature_oracle import SignatureOracleProtocol
from src.application.ports.trusted_issuer_repository import (
    TrustedIssuerRepositoryProtocol,
)
from src.application.ports.webhook_subscription_repository import (
    WebhookSubscriptionRepositoryProtocol,
)
from src.application.ports.webhook_transport import WebhookTransportProtocol

__all__: list[str] = [
    "ActorRepositoryProtocol",
    "AttestationRepositoryProtocol",
    "AuditLogRepositoryProtocol",
    "AuditorAssignmentRepositoryProtocol",
    "CertificateRepositoryProtocol",
    "CitizenPoolRepositoryProtocol",
    "DisputeRepositoryProtocol",
    "EventPublisherProtocol",
    "MilestoneLockProtocol",
    "MilestoneRepositoryProtocol",
    "ProjectRepositoryProtocol",
    "SignatureOracleProtocol",
    "TrustedIssuerRepositoryProtocol",
    "WebhookSubscriptionRepositoryProtocol",
    "WebhookTransportProtocol",
]
