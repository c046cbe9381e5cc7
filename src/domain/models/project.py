"""Project domain model and geographic boundary types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID


@dataclass(frozen=True, eq=True)
class GeoPoint:
    """A WGS84 coordinate pair.

    Attributes:
        lat: Latitude in decimal degrees (-90..90).
        lng: Longitude in decimal degrees (-180..180).
    """

    lat: float
    lng: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lng}")


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class Project:
    """An infrastructure project whose milestones are verified.

    Attributes:
        id: UUIDv7 unique identifier.
        name: Display name.
        boundary: Geofence polygon vertices, or None when no boundary is set.
            Fewer than three points means the geofence check is skipped.
        deleted_at: Soft-delete marker.
        created_at: Creation timestamp (UTC).
    """

    id: UUID
    name: str
    boundary: tuple[GeoPoint, ...] | None = field(default=None)
    deleted_at: datetime | None = field(default=None)
    created_at: datetime = field(default_factory=_utc_now)

    @property
    def is_deleted(self) -> bool:
        """True when the project has been soft-deleted."""
        return self.deleted_at is not None
