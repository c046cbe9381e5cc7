"""Test helpers for milestone verification tests.

Helpers:
    VerificationHarness: Fully wired services over in-memory repositories
    make_actor, make_submission: Entity and input builders

Usage:
    from tests.helpers import VerificationHarness
"""

from tests.helpers.verification import (
    ADMIN_DID,
    EVIDENCE_HASH,
    FAR_FROM_SITE,
    INSIDE_SITE,
    SITE_BOUNDARY,
    VerificationHarness,
    make_actor,
    make_submission,
)

__all__ = [
    "ADMIN_DID",
    "EVIDENCE_HASH",
    "FAR_FROM_SITE",
    "INSIDE_SITE",
    "SITE_BOUNDARY",
    "VerificationHarness",
    "make_actor",
    "make_submission",
]
