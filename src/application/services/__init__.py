"""Application services - Use case orchestration.

Available services:
- AttestationLedgerService: Attestation submission pipeline and review
- QuorumResolverService: Quorum evaluation and milestone finalization
- CertificateService: Certificate issuance, verification and revocation
- AuditorAssignmentService: Auditor selection, lifecycle and fraud revocation
- CitizenPoolService: Citizen selection and enrollment
- DisputeCoordinatorService: Dispute filing, review and resolution
- MilestoneService: Milestone creation and external transitions
- WebhookDispatcherService: Signed webhook delivery with retry and dead letters
- WebhookSubscriptionService: Webhook subscription management
- AuditLogService: Fire-and-forget audit trail
"""

from src.application.services.attestation_ledger_service import AttestationLedgerService
from src.application.services.audit_log_service import SYSTEM_ACTOR_DID, AuditLogService
from src.application.services.auditor_assignment_service import (
    DEFAULT_ROTATION_WINDOW,
    AuditorAssignmentService,
)
from src.application.services.base import LoggingMixin
from src.application.services.certificate_service import (
    CertificateService,
    CertificateVerification,
)
from src.application.services.citizen_pool_service import CitizenPoolService
from src.application.services.dispute_coordinator_service import (
    DisputeCoordinatorService,
)
from src.application.services.milestone_service import MilestoneService
from src.application.services.quorum_resolver_service import QuorumResolverService
from src.application.services.webhook_dispatcher_service import (
    EVENT_HEADER,
    SIGNATURE_HEADER,
    DeadLetterSink,
    WebhookDispatcherService,
    sign_body,
)
from src.application.services.webhook_subscription_service import (
    WebhookSubscriptionService,
)

__all__: list[str] = [
    "DEFAULT_ROTATION_WINDOW",
    "EVENT_HEADER",
    "SIGNATURE_HEADER",
    "SYSTEM_ACTOR_DID",
    "AttestationLedgerService",
    "AuditLogService",
    "AuditorAssignmentService",
    "CertificateService",
    "CertificateVerification",
    "CitizenPoolService",
    "DeadLetterSink",
    "DisputeCoordinatorService",
    "LoggingMixin",
    "MilestoneService",
    "QuorumResolverService",
    "WebhookDispatcherService",
    "WebhookSubscriptionService",
    "sign_body",
]
