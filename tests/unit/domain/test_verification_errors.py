"""Unit tests for the verification error taxonomy."""

from uuid import uuid4

from src.domain.errors import (
    AuthorizationError,
    ConflictError,
    DeviceReuseError,
    DuplicateAttestationError,
    GeofenceViolationError,
    InsufficientPoolError,
    MissingPredecessorError,
    NotFoundError,
    ValidationError,
)
from src.domain.exceptions import TMLError


class TestErrorFamilies:
    def test_codes(self) -> None:
        assert NotFoundError("Milestone", uuid4()).code == "NOT_FOUND"
        assert ValidationError("bad").code == "VALIDATION_ERROR"
        assert AuthorizationError().code == "AUTHORIZATION_ERROR"
        assert ConflictError("dup").code == "CONFLICT"

    def test_specific_errors_belong_to_their_family(self) -> None:
        milestone_id, actor_id = uuid4(), uuid4()

        assert isinstance(
            DuplicateAttestationError(milestone_id, actor_id, "auditor_review"),
            ConflictError,
        )
        assert isinstance(DeviceReuseError(milestone_id, "device-1"), ConflictError)
        assert isinstance(InsufficientPoolError("auditors", 1, 2), ConflictError)
        assert isinstance(
            MissingPredecessorError(milestone_id, "auditor_review", "inspector_verification"),
            ValidationError,
        )
        assert isinstance(GeofenceViolationError(uuid4(), 1.0, 2.0), ValidationError)

    def test_geofence_message(self) -> None:
        error = GeofenceViolationError(uuid4(), 40.7, -74.0)

        assert "geofence" in str(error)


class TestToDict:
    def test_insufficient_pool_details(self) -> None:
        error = InsufficientPoolError(
            "auditors", available=1, requested=3, exclusions={"rotation": 2}
        )

        payload = error.to_dict()

        assert payload["code"] == "CONFLICT"
        assert payload["details"] == {
            "available": 1,
            "requested": 3,
            "exclusions": {"rotation": 2},
        }

    def test_omits_empty_details(self) -> None:
        assert TMLError("boom").to_dict() == {"code": "INTERNAL_ERROR", "message": "boom"}
