"""
TML Milestone Verification - multi-party attestation for infrastructure milestones

A backend core that coordinates contractor inspectors, rotating independent
auditors and randomly selected citizens. Each party attests on-site before a
milestone is certified, and certificates can be revoked again through disputes.

Guarantees:
- Attestations are ordered: inspector before auditor before citizen
- A milestone completes only with a signed compliance certificate
- Auditor and citizen selection is random, rotated and conflict-free
- External systems learn about state changes through signed webhooks
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
