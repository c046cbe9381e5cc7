"""Per-type attestation rules.

Every attestation type maps to one rule record. The submission pipeline
looks the rule up instead of branching on the type.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.domain.models.actor import ActorRole
from src.domain.models.attestation import AttestationType


@dataclass(frozen=True)
class AttestationRule:
    """Constraints that apply to one attestation type.

    Attributes:
        allowed_roles: Roles permitted to submit this type.
        predecessor: Type that must already have an active attestation on
            the milestone, or None.
        requires_accepted_assignment: Submitter needs an accepted auditor
            assignment on the milestone.
        requires_enrollment: Submitter needs an enrolled citizen pool entry.
        device_capped: Only one attestation of this type per device token
            on a milestone.
    """

    allowed_roles: frozenset[ActorRole]
    predecessor: AttestationType | None = None
    requires_accepted_assignment: bool = False
    requires_enrollment: bool = False
    device_capped: bool = False


ATTESTATION_RULES: dict[AttestationType, AttestationRule] = {
    AttestationType.INSPECTOR_VERIFICATION: AttestationRule(
        allowed_roles=frozenset({ActorRole.CONTRACTOR_ENGINEER, ActorRole.ADMIN}),
    ),
    AttestationType.AUDITOR_REVIEW: AttestationRule(
        allowed_roles=frozenset({ActorRole.INDEPENDENT_AUDITOR, ActorRole.ADMIN}),
        predecessor=AttestationType.INSPECTOR_VERIFICATION,
        requires_accepted_assignment=True,
    ),
    AttestationType.CITIZEN_APPROVAL: AttestationRule(
        allowed_roles=frozenset({ActorRole.CITIZEN, ActorRole.ADMIN}),
        predecessor=AttestationType.AUDITOR_REVIEW,
        requires_enrollment=True,
        device_capped=True,
    ),
}


def rule_for(attestation_type: AttestationType) -> AttestationRule:
    """Return the rule record for an attestation type."""
    return ATTESTATION_RULES[attestation_type]
