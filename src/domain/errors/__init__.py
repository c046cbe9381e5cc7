"""Domain errors for milestone verification.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from TMLError.
"""

from src.domain.errors.assignment import DuplicateAssignmentError, InsufficientPoolError
from src.domain.errors.attestation import (
    DeviceReuseError,
    DuplicateAttestationError,
    GeofenceViolationError,
    MilestoneNotAcceptingAttestationsError,
    MissingPredecessorError,
)
from src.domain.errors.certificate import (
    CertificateAlreadyIssuedError,
    CertificateIssuanceError,
    SignatureOracleError,
)
from src.domain.errors.taxonomy import (
    AuthorizationError,
    ConflictError,
    InvalidStatusTransitionError,
    NotFoundError,
    ValidationError,
)

__all__: list[str] = [
    "AuthorizationError",
    "CertificateAlreadyIssuedError",
    "CertificateIssuanceError",
    "ConflictError",
    "DeviceReuseError",
    "DuplicateAssignmentError",
    "DuplicateAttestationError",
    "GeofenceViolationError",
    "InsufficientPoolError",
    "InvalidStatusTransitionError",
    "MilestoneNotAcceptingAttestationsError",
    "MissingPredecessorError",
    "NotFoundError",
    "SignatureOracleError",
    "ValidationError",
]
