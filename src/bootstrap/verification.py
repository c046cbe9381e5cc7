"""Bootstrap wiring for the milestone verification services.

Repositories are in-memory stores; the signature oracle, transport and
random source are the production adapters unless overridden.
"""

from __future__ import annotations

from dataclasses import dataclass

from dotenv import load_dotenv
from structlog import get_logger

from src.application.ports.milestone_lock import MilestoneLockProtocol
from src.application.ports.signature_oracle import SignatureOracleProtocol
from src.application.ports.webhook_transport import WebhookTransportProtocol
from src.application.services.attestation_ledger_service import AttestationLedgerService
from src.application.services.audit_log_service import AuditLogService
from src.application.services.auditor_assignment_service import (
    AuditorAssignmentService,
)
from src.application.services.certificate_service import CertificateService
from src.application.services.citizen_pool_service import CitizenPoolService
from src.application.services.dispute_coordinator_service import (
    DisputeCoordinatorService,
)
from src.application.services.milestone_service import MilestoneService
from src.application.services.quorum_resolver_service import QuorumResolverService
from src.application.services.webhook_dispatcher_service import (
    DeadLetterSink,
    WebhookDispatcherService,
)
from src.application.services.webhook_subscription_service import (
    WebhookSubscriptionService,
)
from src.bootstrap.logging import configure_structlog
from src.config.verification_config import VerificationConfig
from src.domain.ports.random_source import RandomSourceProtocol
from src.infrastructure.adapters.http.httpx_webhook_transport import (
    HttpxWebhookTransport,
)
from src.infrastructure.adapters.locking.in_process_milestone_lock import (
    InProcessMilestoneLock,
)
from src.infrastructure.adapters.security.ed25519_signature_oracle import (
    Ed25519SignatureOracle,
)
from src.infrastructure.adapters.security.secure_random_source import SecureRandomSource
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
from src.infrastructure.stubs.milestone_repository_stub import MilestoneRepositoryStub
from src.infrastructure.stubs.project_repository_stub import ProjectRepositoryStub
from src.infrastructure.stubs.trusted_issuer_repository_stub import (
    TrustedIssuerRepositoryStub,
)
from src.infrastructure.stubs.webhook_subscription_repository_stub import (
    WebhookSubscriptionRepositoryStub,
)

logger = get_logger()


@dataclass(frozen=True)
class VerificationRepositories:
    """The storage behind one service container."""

    actors: ActorRepositoryStub
    projects: ProjectRepositoryStub
    milestones: MilestoneRepositoryStub
    attestations: AttestationRepositoryStub
    assignments: AuditorAssignmentRepositoryStub
    citizen_pools: CitizenPoolRepositoryStub
    certificates: CertificateRepositoryStub
    disputes: DisputeRepositoryStub
    trusted_issuers: TrustedIssuerRepositoryStub
    subscriptions: WebhookSubscriptionRepositoryStub
    audit_log: AuditLogRepositoryStub


def create_in_memory_repositories() -> VerificationRepositories:
    """Create an empty, consistent set of in-memory repositories."""
    milestones = MilestoneRepositoryStub()
    return VerificationRepositories(
        actors=ActorRepositoryStub(),
        projects=ProjectRepositoryStub(),
        milestones=milestones,
        attestations=AttestationRepositoryStub(milestones),
        assignments=AuditorAssignmentRepositoryStub(milestones),
        citizen_pools=CitizenPoolRepositoryStub(),
        certificates=CertificateRepositoryStub(),
        disputes=DisputeRepositoryStub(),
        trusted_issuers=TrustedIssuerRepositoryStub(),
        subscriptions=WebhookSubscriptionRepositoryStub(),
        audit_log=AuditLogRepositoryStub(),
    )


@dataclass(frozen=True)
class VerificationServices:
    """Fully wired service container."""

    config: VerificationConfig
    repositories: VerificationRepositories
    audit_log: AuditLogService
    webhooks: WebhookDispatcherService
    subscriptions: WebhookSubscriptionService
    certificates: CertificateService
    quorum: QuorumResolverService
    attestations: AttestationLedgerService
    milestones: MilestoneService
    auditors: AuditorAssignmentService
    citizens: CitizenPoolService
    disputes: DisputeCoordinatorService

    async def drain(self) -> None:
        """Wait for queued webhook deliveries and audit writes."""
        await self.webhooks.drain()
        await self.audit_log.flush()


def _default_oracle(config: VerificationConfig) -> SignatureOracleProtocol:
    if config.system_signing_key_hex:
        return Ed25519SignatureOracle(config.system_signing_key_hex)
    logger.warning(
        "signature_oracle_ephemeral_key",
        environment=config.environment,
        message="SYSTEM_SIGNING_KEY_HEX not set, certificates are signed "
        "with a key that is lost on restart",
    )
    return Ed25519SignatureOracle.with_ephemeral_key()


def build_verification_services(
    config: VerificationConfig,
    *,
    repositories: VerificationRepositories | None = None,
    oracle: SignatureOracleProtocol | None = None,
    transport: WebhookTransportProtocol | None = None,
    rng: RandomSourceProtocol | None = None,
    lock: MilestoneLockProtocol | None = None,
    dead_letters: DeadLetterSink | None = None,
) -> VerificationServices:
    """Wire every verification service from configuration.

    Any collaborator may be overridden, which is how tests substitute
    stubs for the oracle, transport and random source.
    """
    repos = repositories or create_in_memory_repositories()
    oracle = oracle or _default_oracle(config)
    transport = transport or HttpxWebhookTransport()
    rng = rng or SecureRandomSource()
    lock = lock or InProcessMilestoneLock()

    audit_log = AuditLogService(repos.audit_log)
    webhooks = WebhookDispatcherService(
        repos.subscriptions,
        transport,
        audit_log,
        dead_letters=dead_letters,
        timeout_seconds=config.webhook_timeout_seconds,
        retry_delays=config.webhook_retry_delays,
    )
    certificates = CertificateService(
        repos.certificates, repos.attestations, repos.actors, oracle, audit_log, webhooks
    )
    quorum = QuorumResolverService(
        repos.milestones,
        repos.attestations,
        repos.citizen_pools,
        certificates,
        audit_log,
        webhooks,
    )
    auditors = AuditorAssignmentService(
        repos.assignments,
        repos.actors,
        repos.milestones,
        repos.attestations,
        repos.trusted_issuers,
        rng,
        audit_log,
        lock,
        rotation_window=config.auditor_rotation_window,
    )
    services = VerificationServices(
        config=config,
        repositories=repos,
        audit_log=audit_log,
        webhooks=webhooks,
        subscriptions=WebhookSubscriptionService(repos.subscriptions, audit_log),
        certificates=certificates,
        quorum=quorum,
        attestations=AttestationLedgerService(
            repos.attestations,
            repos.milestones,
            repos.projects,
            repos.actors,
            repos.assignments,
            repos.citizen_pools,
            oracle,
            quorum,
            audit_log,
            lock,
        ),
        milestones=MilestoneService(repos.milestones, repos.projects, audit_log, lock),
        auditors=auditors,
        citizens=CitizenPoolService(
            repos.citizen_pools,
            repos.actors,
            repos.milestones,
            rng,
            audit_log,
            lock,
            sim_cap=config.citizen_sim_cap,
        ),
        disputes=DisputeCoordinatorService(
            repos.disputes,
            repos.milestones,
            repos.actors,
            certificates,
            auditors,
            audit_log,
            webhooks,
            lock,
        ),
    )
    logger.info(
        "verification_services_initialized",
        environment=config.environment,
        repository_type="in_memory",
        oracle=type(oracle).__name__,
        transport=type(transport).__name__,
    )
    return services


_services: VerificationServices | None = None


def get_verification_services() -> VerificationServices:
    """Get the process-wide service container, building it on first use.

    Loads ``.env`` before reading configuration from the environment and
    configures structlog for that environment.
    """
    global _services
    if _services is None:
        load_dotenv()
        config = VerificationConfig.from_environment()
        configure_structlog(config.environment)
        _services = build_verification_services(config)
    return _services


def reset_verification_services() -> None:
    """Drop the process-wide container (for testing)."""
    global _services
    _services = None
