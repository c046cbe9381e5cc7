"""Geofence checks for attestation coordinates.

Uses the even-odd ray casting rule. Latitude is treated as the x axis and
longitude as the y axis; points exactly on an edge may fall either way.
"""

from __future__ import annotations

from collections.abc import Sequence

from src.domain.models.project import GeoPoint

# Boundaries with fewer vertices than this do not enclose an area
MIN_BOUNDARY_POINTS = 3


def is_point_in_polygon(point: GeoPoint, polygon: Sequence[GeoPoint]) -> bool:
    """Test whether a point lies inside a polygon.

    Args:
        point: Coordinate to test.
        polygon: Polygon vertices in order; the ring is closed implicitly.

    Returns:
        True if the point is inside.
    """
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i].lat, polygon[i].lng
        xj, yj = polygon[j].lat, polygon[j].lng
        if (yi > point.lng) != (yj > point.lng):
            crossing = (xj - xi) * (point.lng - yi) / (yj - yi) + xi
            if point.lat < crossing:
                inside = not inside
        j = i
    return inside


def is_within_boundary(
    point: GeoPoint,
    boundary: Sequence[GeoPoint] | None,
) -> bool:
    """Check a point against an optional project boundary.

    A missing boundary, or one with fewer than three points, accepts any
    point.
    """
    if boundary is None or len(boundary) < MIN_BOUNDARY_POINTS:
        return True
    return is_point_in_polygon(point, boundary)
