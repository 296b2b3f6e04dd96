"""Great-circle distance calculations."""

import math
from typing import Sequence

from .models import GeoPoint

# Mean Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


def distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Calculate the haversine distance between two points.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in kilometers
    """
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    delta_lat = math.radians(b.lat - a.lat)
    delta_lon = math.radians(b.lon - a.lon)

    h = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1) * math.cos(lat2) * math.sin(delta_lon / 2) ** 2
    )
    # Rounding can push h a hair outside [0, 1]
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_KM * c


def path_distance_km(points: Sequence[GeoPoint]) -> float:
    """Sum the distances between consecutive points, in order."""
    if len(points) < 2:
        return 0.0
    return sum(distance_km(a, b) for a, b in zip(points, points[1:]))
