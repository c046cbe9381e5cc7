"""Domain services for milestone verification.

Domain services hold rules that do not belong to a single entity. They do
no I/O; randomness is injected through RandomSourceProtocol.

Available services:
- is_within_boundary: geofence check against a project boundary
- evaluate_citizen_quorum: tier-weighted citizen quorum
- rule_for: per-type attestation rules
- canonical_json, sha256_hex: deterministic hashing
- draw_without_replacement, stratified_sample: random selection
"""

from src.domain.services.attestation_rules import (
    ATTESTATION_RULES,
    AttestationRule,
    rule_for,
)
from src.domain.services.geofence import is_point_in_polygon, is_within_boundary
from src.domain.services.hashing import canonical_json, sha256_hex
from src.domain.services.quorum_weights import evaluate_citizen_quorum, weighted_score
from src.domain.services.random_selection import (
    draw_without_replacement,
    stratified_sample,
)

__all__: list[str] = [
    "ATTESTATION_RULES",
    "AttestationRule",
    "canonical_json",
    "draw_without_replacement",
    "evaluate_citizen_quorum",
    "is_point_in_polygon",
    "is_within_boundary",
    "rule_for",
    "sha256_hex",
    "stratified_sample",
    "weighted_score",
]
