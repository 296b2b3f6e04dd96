"""GPX parsing module for extracting a normalized track.

Parsing is lenient by contract: only input that is not well-formed XML raises
``ParseError``. Missing names and timestamps become defaults, and points with
a missing or non-numeric latitude/longitude are skipped.
"""

import logging
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Tuple, Union

import gpxpy
import gpxpy.gpx
from gpxpy.gpxfield import parse_time
from lxml import etree

from .geo import path_distance_km
from .models import DEFAULT_TRACK_NAME, ZERO_DURATION, GeoPoint, Track

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when GPX input cannot be read as XML at all."""


def format_duration(seconds: float) -> str:
    """Format a number of seconds as HH:MM:SS.

    Hours are not wrapped at 24; negative values are clamped to zero.
    """
    total = max(0, int(math.floor(seconds)))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def _to_coordinate(value) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _track_date(time: Optional[datetime]) -> str:
    if time is None:
        return ""
    if time.tzinfo is not None:
        time = time.astimezone(timezone.utc)
    return time.date().isoformat()


def _track_duration(start: Optional[datetime], end: Optional[datetime]) -> str:
    if start is None or end is None:
        return ZERO_DURATION
    try:
        elapsed = (end - start).total_seconds()
    except TypeError:
        # One timestamp carries a zone and the other doesn't
        logger.warning("Cannot compare timestamps %s and %s", start, end)
        return ZERO_DURATION
    return format_duration(elapsed)


class GPXParser:
    """Parser that turns GPX text into a ``Track``."""

    def __init__(self, gpx_text: str):
        """Initialize with the GPX document text.

        Args:
            gpx_text: Contents of a GPX file
        """
        self.gpx_text = gpx_text
        self.track: Optional[Track] = None

    @classmethod
    def from_file(cls, gpx_file_path: Union[str, Path]) -> "GPXParser":
        """Read a GPX file and create a parser for its contents.

        Raises:
            FileNotFoundError: If the GPX file doesn't exist
        """
        path = Path(gpx_file_path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.error(f"GPX file not found: {path}")
            raise
        return cls(text)

    def parse(self) -> Track:
        """Parse the GPX text into a track.

        Returns:
            Track, possibly with no points

        Raises:
            ParseError: If the text is empty or not well-formed XML
        """
        if self.track is not None:
            return self.track

        if not self.gpx_text or not self.gpx_text.strip():
            raise ParseError("GPX document is empty")

        try:
            gpx = gpxpy.parse(self.gpx_text)
        except gpxpy.gpx.GPXXMLSyntaxException as e:
            logger.error(f"Error parsing GPX file: {e}")
            raise ParseError(f"Invalid GPX document: {e}") from e
        except gpxpy.gpx.GPXException as e:
            # Well-formed XML that gpxpy refuses, usually one bad trkpt
            logger.warning(f"Strict GPX parsing failed ({e}), reading points leniently")
            self.track = self._parse_lenient()
        else:
            self.track = self._extract(gpx)

        logger.info(f"Parsed {len(self.track.points)} track points ({self.track.name})")
        return self.track

    def get_time_bounds(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Get the timestamps of the first and last track points.

        Returns:
            Tuple of (start_time, end_time), both can be None if no time data
        """
        track = self.parse()
        if not track.points:
            return None, None
        return track.points[0].time, track.points[-1].time

    def _extract(self, gpx: gpxpy.gpx.GPX) -> Track:
        name = None
        points: List[GeoPoint] = []
        try:
            for gpx_track in gpx.tracks:
                if not name and gpx_track.name:
                    name = gpx_track.name.strip()
                for segment in gpx_track.segments:
                    for point in segment.points:
                        lat = _to_coordinate(point.latitude)
                        lon = _to_coordinate(point.longitude)
                        if lat is None or lon is None:
                            logger.debug(f"Skipping track point without usable coordinates: {point}")
                            continue
                        points.append(GeoPoint(lat, lon, point.time))
        except Exception as e:
            logger.error(f"Error extracting track points: {e}")

        return self._build_track(name, points)

    def _parse_lenient(self) -> Track:
        # The text is re-encoded as UTF-8, whatever its XML declaration says
        parser = etree.XMLParser(encoding="utf-8", resolve_entities=False, no_network=True,
                                 huge_tree=False)
        try:
            root = etree.fromstring(self.gpx_text.encode("utf-8"), parser=parser)
        except etree.XMLSyntaxError as e:
            raise ParseError(f"Invalid GPX document: {e}") from e

        name = None
        points: List[GeoPoint] = []
        skipped = 0
        try:
            for trk in root.iter("{*}trk"):
                if not name:
                    name = (trk.findtext("{*}name") or "").strip()
                for trkpt in trk.iterfind("{*}trkseg/{*}trkpt"):
                    lat = _to_coordinate(trkpt.get("lat"))
                    lon = _to_coordinate(trkpt.get("lon"))
                    if lat is None or lon is None:
                        skipped += 1
                        continue
                    points.append(GeoPoint(lat, lon, self._point_time(trkpt)))
        except Exception as e:
            logger.error(f"Error extracting track points: {e}")

        if skipped:
            logger.warning(f"Skipped {skipped} track points with missing or invalid coordinates")

        return self._build_track(name, points)

    @staticmethod
    def _point_time(trkpt) -> Optional[datetime]:
        text = trkpt.findtext("{*}time")
        if not text:
            return None
        try:
            return parse_time(text.strip())
        except Exception as e:
            logger.debug(f"Ignoring unreadable timestamp {text!r}: {e}")
            return None

    @staticmethod
    def _build_track(name: Optional[str], points: List[GeoPoint]) -> Track:
        name = name or DEFAULT_TRACK_NAME
        if not points:
            return Track(points=(), name=name)

        try:
            start, end = points[0].time, points[-1].time
            return Track(
                points=points,
                name=name,
                date=_track_date(start),
                total_distance_km=path_distance_km(points),
                total_duration=_track_duration(start, end),
            )
        except Exception as e:
            logger.error(f"Error computing track statistics: {e}")
            return Track(points=points, name=name)


def parse_gpx(gpx_text: str) -> Track:
    """Parse GPX text into a ``Track``.

    Raises:
        ParseError: If the text is empty or not well-formed XML
    """
    return GPXParser(gpx_text).parse()
