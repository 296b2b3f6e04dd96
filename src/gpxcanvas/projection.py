"""Projection of geographic tracks onto a 2D canvas.

Latitude and longitude are treated as plain planar coordinates (an
equirectangular projection) and scaled uniformly so the whole track fits
inside the padded canvas. North maps to the top of the canvas.
"""

import logging
import math
from typing import List, Sequence, Tuple

import numpy as np

from .models import BoundingBox, GeoPoint, ProjectedPoint, Track

logger = logging.getLogger(__name__)

# Used when the track has no spread on either axis (a single location)
DEGENERATE_SCALE = 1.0


def compute_bounds(points: Sequence[GeoPoint]) -> BoundingBox:
    """Get the bounding box of the points.

    Raises:
        ValueError: If there are no points
    """
    return BoundingBox.from_points(points)


def compute_scale(bounds: BoundingBox, canvas_width: float, canvas_height: float,
                  padding_px: float) -> float:
    """Calculate the uniform scale (pixels per degree) that fits ``bounds`` on the canvas.

    An axis without geographic spread places no constraint on the scale, so
    only the other axis decides it. When neither axis has spread the scale
    falls back to ``DEGENERATE_SCALE``.

    Args:
        bounds: Bounding box of the track
        canvas_width: Width of the canvas in pixels
        canvas_height: Height of the canvas in pixels
        padding_px: Margin kept free on every side

    Returns:
        A finite, non-negative scale factor
    """
    available_width = max(0.0, canvas_width - 2 * padding_px)
    available_height = max(0.0, canvas_height - 2 * padding_px)

    candidates = []
    if bounds.lat_range > 0:
        candidates.append(available_height / bounds.lat_range)
    if bounds.lon_range > 0:
        candidates.append(available_width / bounds.lon_range)

    candidates = [c for c in candidates if math.isfinite(c)]
    if not candidates:
        logger.debug("Track has no geographic extent, using default scale")
        return DEGENERATE_SCALE

    return min(candidates)


def project(track: Track, canvas_width: float, canvas_height: float,
            padding_px: float) -> List[ProjectedPoint]:
    """Map every track point to canvas coordinates.

    Args:
        track: Parsed track
        canvas_width: Width of the canvas in pixels
        canvas_height: Height of the canvas in pixels
        padding_px: Margin kept free on every side

    Returns:
        One projected point per track point, in order (empty for an empty track)
    """
    if not track.points:
        return []

    bounds = compute_bounds(track.points)
    scale = compute_scale(bounds, canvas_width, canvas_height, padding_px)

    coords = np.array([(p.lon, p.lat) for p in track.points], dtype=np.float64)
    xs = padding_px + (coords[:, 0] - bounds.min_lon) * scale
    # Latitude grows northward while canvas y grows downward
    ys = canvas_height - padding_px - (coords[:, 1] - bounds.min_lat) * scale

    return [ProjectedPoint(float(x), float(y)) for x, y in zip(xs, ys)]


def rotate_points(points: Sequence[Tuple[float, float]], degrees: float,
                  center: Tuple[float, float]) -> List[Tuple[float, float]]:
    """Rotate points about ``center``.

    Positive angles turn clockwise on screen, since y points down.
    A rotation that is a multiple of 360 degrees returns the points unchanged.
    """
    if not points:
        return []

    degrees = degrees % 360.0
    if degrees == 0:
        return [(float(x), float(y)) for x, y in points]

    theta = math.radians(degrees)
    rotation = np.array([[math.cos(theta), -math.sin(theta)],
                         [math.sin(theta), math.cos(theta)]])
    origin = np.asarray(center, dtype=np.float64)
    coords = np.asarray(points, dtype=np.float64) - origin
    rotated = coords @ rotation.T + origin

    return [(float(x), float(y)) for x, y in rotated]
