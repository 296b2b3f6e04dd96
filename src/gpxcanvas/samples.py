"""Demo track used when no GPX data is available."""

import math
import random

from .models import GeoPoint, Track

SAMPLE_CENTER = (37.7749, -122.4194)
SAMPLE_POINT_COUNT = 100


def sample_track(seed: int = 0) -> Track:
    """Build a jittered loop around San Francisco.

    The same seed always produces the same track.
    """
    rng = random.Random(seed)
    center_lat, center_lon = SAMPLE_CENTER

    points = []
    for i in range(SAMPLE_POINT_COUNT):
        angle = (i / SAMPLE_POINT_COUNT) * math.pi * 2
        radius = 0.01 + rng.random() * 0.005
        points.append(GeoPoint(center_lat + math.sin(angle) * radius,
                               center_lon + math.cos(angle) * radius))

    return Track(
        points=points,
        name="Morning Run",
        date="2023-05-15",
        total_distance_km=5.2,
        total_duration="00:45:30",
    )
