"""Shared pytest fixtures for the gpxcanvas test suite."""

import pytest

from gpxcanvas.models import GeoPoint, StyleConfig, Track

# ---------------------------------------------------------------------------
# GPX documents
# ---------------------------------------------------------------------------

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="tests" xmlns="http://www.topografix.com/GPX/1/1">\n'
)


def make_gpx(body: str) -> str:
    """Wrap ``body`` in a GPX 1.1 root element."""
    return f"{GPX_HEADER}{body}\n</gpx>\n"


@pytest.fixture()
def right_angle_gpx() -> str:
    """Three points forming a right angle, 75.5 minutes apart end to end."""
    return make_gpx("""
  <trk>
    <name>Lunch Run</name>
    <trkseg>
      <trkpt lat="0" lon="0"><time>2023-01-01T00:00:00Z</time></trkpt>
      <trkpt lat="0" lon="1"><time>2023-01-01T00:40:00Z</time></trkpt>
      <trkpt lat="1" lon="1"><time>2023-01-01T01:15:30Z</time></trkpt>
    </trkseg>
  </trk>""")


@pytest.fixture()
def no_time_gpx() -> str:
    """Unnamed track without timestamps."""
    return make_gpx("""
  <trk>
    <trkseg>
      <trkpt lat="47.5" lon="19.0"></trkpt>
      <trkpt lat="47.51" lon="19.01"></trkpt>
    </trkseg>
  </trk>""")


@pytest.fixture()
def empty_track_gpx() -> str:
    return make_gpx("<trk><name>Nothing</name><trkseg></trkseg></trk>")


@pytest.fixture()
def broken_points_gpx() -> str:
    """Well-formed GPX where some points lack usable coordinates."""
    return make_gpx("""
  <trk>
    <name>Patchy</name>
    <trkseg>
      <trkpt lat="10.0" lon="20.0"><time>2023-06-01T08:00:00Z</time></trkpt>
      <trkpt lon="20.5"><time>2023-06-01T08:05:00Z</time></trkpt>
      <trkpt lat="abc" lon="20.6"></trkpt>
      <trkpt lat="10.1" lon="20.1"><time>2023-06-01T08:10:00Z</time></trkpt>
    </trkseg>
  </trk>""")


# ---------------------------------------------------------------------------
# Tracks and styles
# ---------------------------------------------------------------------------


@pytest.fixture()
def right_angle_track() -> Track:
    return Track(
        points=(GeoPoint(0, 0), GeoPoint(0, 1), GeoPoint(1, 1)),
        name="Right Angle",
        date="2023-01-01",
        total_distance_km=222.39,
        total_duration="01:15:30",
    )


@pytest.fixture()
def single_point_track() -> Track:
    return Track(points=(GeoPoint(47.5, 19.0),), name="Standing Still")


@pytest.fixture()
def style() -> StyleConfig:
    return StyleConfig(title_text="Lunch Run", font_family="DejaVu Sans")
