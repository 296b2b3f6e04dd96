"""Data representation classes for the gpxcanvas package.

This module contains the value types that flow through the rendering pipeline:
geographic points and parsed tracks, the derived bounding box and projected
canvas points, and the style configuration for a single render.
"""

import dataclasses
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional, Tuple

from PIL import ImageColor

TRANSPARENT = "transparent"

DEFAULT_TRACK_NAME = "My Run"
ZERO_DURATION = "00:00:00"

START_MARKER_COLOR = "#4CAF50"
END_MARKER_COLOR = "#F44336"


@dataclass(frozen=True)
class GeoPoint:
    """A geographic position in degrees, with an optional timestamp."""
    lat: float
    lon: float
    time: Optional[datetime] = field(default=None, compare=False)

    def __repr__(self) -> str:
        return f"GeoPoint(lat={self.lat}, lon={self.lon}, time={self.time})"


@dataclass(frozen=True)
class Track:
    """A parsed GPX track.

    ``points`` may be empty; every consumer has to cope with that.
    """
    points: Tuple[GeoPoint, ...] = ()
    name: str = DEFAULT_TRACK_NAME
    date: str = ""
    total_distance_km: float = 0.0
    total_duration: str = ZERO_DURATION

    def __post_init__(self):
        # Accept any iterable but always store a tuple so the track stays immutable
        object.__setattr__(self, "points", tuple(self.points))

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class BoundingBox:
    """Geographic extent of a set of points."""
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @classmethod
    def from_points(cls, points: Iterable[GeoPoint]) -> "BoundingBox":
        points = list(points)
        if not points:
            raise ValueError("Cannot compute a bounding box without points")

        return cls(
            min_lat=min(p.lat for p in points),
            max_lat=max(p.lat for p in points),
            min_lon=min(p.lon for p in points),
            max_lon=max(p.lon for p in points),
        )

    @property
    def lat_range(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def lon_range(self) -> float:
        return self.max_lon - self.min_lon


@dataclass(frozen=True)
class ProjectedPoint:
    """A point in canvas pixel space (y grows downward)."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y


def is_valid_color(color: str) -> bool:
    """Return True if Pillow can interpret ``color`` (hex or CSS name)."""
    try:
        ImageColor.getrgb(color)
    except (ValueError, AttributeError):
        return False
    return True


@dataclass(frozen=True)
class StyleConfig:
    """Configuration for a single render of a track.

    Defaults mirror the initial state of the customizer: a red track on white,
    3px line, 20px padding, title at the top centre in 24px Inter.
    """
    track_color: str = "#FF5353"
    background_color: str = "#FFFFFF"
    line_width_px: float = 3.0
    padding_px: float = 20.0
    rotation_degrees: float = 0.0
    show_start_end_markers: bool = True
    show_title: bool = True
    title_text: str = ""
    font_family: str = "Inter"
    font_size_px: float = 24.0
    font_color: str = "#000000"
    title_position_percent_x: float = 50.0
    title_position_percent_y: float = 5.0

    def __post_init__(self):
        for name in ("track_color", "font_color"):
            value = getattr(self, name)
            if not is_valid_color(value):
                raise ValueError(f"{name} is not a valid color: {value!r}")

        if self.background_color != TRANSPARENT and not is_valid_color(self.background_color):
            raise ValueError(f"background_color is not a valid color: {self.background_color!r}")

        for name in ("line_width_px", "font_size_px", "padding_px", "rotation_degrees"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be a finite number")

        if not self.line_width_px > 0:
            raise ValueError("line_width_px must be greater than 0")
        if not self.font_size_px > 0:
            raise ValueError("font_size_px must be greater than 0")
        if not self.padding_px >= 0:
            raise ValueError("padding_px must not be negative")

        for name in ("title_position_percent_x", "title_position_percent_y"):
            if not 0 <= getattr(self, name) <= 100:
                raise ValueError(f"{name} must be between 0 and 100")

    @property
    def wrapped_rotation(self) -> float:
        """Rotation normalised into [0, 360)."""
        return self.rotation_degrees % 360.0

    @property
    def has_transparent_background(self) -> bool:
        return self.background_color == TRANSPARENT

    def replace(self, **changes) -> "StyleConfig":
        return dataclasses.replace(self, **changes)
