"""Domain models for milestone verification."""

from src.domain.models.actor import Actor, ActorRole
from src.domain.models.attestation import (
    ACTIVE_STATUSES,
    Attestation,
    AttestationStatus,
    AttestationType,
)
from src.domain.models.audit_log import AuditAction, AuditLogEntry
from src.domain.models.auditor_assignment import AssignmentStatus, AuditorAssignment
from src.domain.models.certificate import (
    Certificate,
    CertificateAttestation,
    CertificateStatus,
    MintedCertificate,
)
from src.domain.models.citizen_pool import (
    DEFAULT_SIM_CAP,
    DEFAULT_TIER,
    TIER_WEIGHTS,
    AssuranceTier,
    CitizenPoolEntry,
    PoolEntryStatus,
)
from src.domain.models.dispute import Dispute, DisputeStatus
from src.domain.models.milestone import (
    EXTERNAL_TRANSITIONS,
    Milestone,
    MilestoneStatus,
)
from src.domain.models.project import GeoPoint, Project
from src.domain.models.quorum import CountQuorum, QuorumBreakdown, WeightedQuorum
from src.domain.models.trusted_issuer import TrustedIssuer
from src.domain.models.webhook import (
    DeadLetterEntry,
    DeliveryStatus,
    WebhookEventType,
    WebhookSubscription,
)

__all__: list[str] = [
    "ACTIVE_STATUSES",
    "Actor",
    "ActorRole",
    "AssignmentStatus",
    "AssuranceTier",
    "Attestation",
    "AttestationStatus",
    "AttestationType",
    "AuditAction",
    "AuditLogEntry",
    "AuditorAssignment",
    "Certificate",
    "CertificateAttestation",
    "CertificateStatus",
    "CitizenPoolEntry",
    "CountQuorum",
    "DEFAULT_SIM_CAP",
    "DEFAULT_TIER",
    "DeadLetterEntry",
    "DeliveryStatus",
    "Dispute",
    "DisputeStatus",
    "EXTERNAL_TRANSITIONS",
    "GeoPoint",
    "Milestone",
    "MilestoneStatus",
    "MintedCertificate",
    "PoolEntryStatus",
    "Project",
    "QuorumBreakdown",
    "TIER_WEIGHTS",
    "TrustedIssuer",
    "WebhookEventType",
    "WebhookSubscription",
    "WeightedQuorum",
]
