"""Track rendering module for composing the stylized route picture.

The renderer draws a projected track onto any ``DrawingSurface``. Preview and
export renders share every geometric step and differ only in how the
background is painted, so a downloaded image matches the preview.
"""

import logging
from typing import Sequence

from PIL import Image

from .models import END_MARKER_COLOR, START_MARKER_COLOR, ProjectedPoint, StyleConfig, Track
from .projection import project
from .surfaces import DrawingSurface, RasterSurface, SvgSurface

logger = logging.getLogger(__name__)

DEFAULT_CANVAS_SIZE = 600

# Stats line font size and offset, relative to the title font size
SUBTITLE_SCALE = 0.6
SUBTITLE_OFFSET = 0.8


class TrackRenderer:
    """Draws a projected track, markers and title text onto a surface."""

    def render(self, surface: DrawingSurface, width: float, height: float, track: Track,
               projected_points: Sequence[ProjectedPoint], style: StyleConfig,
               transparent_background: bool = False) -> None:
        """Render the track onto ``surface``.

        Args:
            surface: Drawing target; previous content is always discarded
            width: Canvas width in pixels
            height: Canvas height in pixels
            track: The parsed track (used for the stats line)
            projected_points: Output of ``project`` for this track and canvas
            style: Style configuration for this render
            transparent_background: Export mode, leaves the background transparent
        """
        if not track.points:
            surface.clear()
            return

        self._draw_background(surface, style, transparent_background)

        points = [p.as_tuple() for p in projected_points]
        rotation = style.wrapped_rotation
        if rotation:
            with surface.rotated(rotation, (width / 2, height / 2)):
                self._draw_route(surface, points, style)
        else:
            self._draw_route(surface, points, style)

        if style.show_title and style.title_text:
            self._draw_title(surface, width, height, track, style)

    @staticmethod
    def _draw_background(surface: DrawingSurface, style: StyleConfig,
                         transparent_background: bool) -> None:
        if transparent_background or style.has_transparent_background:
            surface.clear()
        else:
            surface.fill(style.background_color)

    @staticmethod
    def _draw_route(surface: DrawingSurface, points, style: StyleConfig) -> None:
        surface.stroke_polyline(points, style.track_color, style.line_width_px)

        if style.show_start_end_markers and points:
            radius = style.line_width_px * 2
            surface.fill_circle(points[0], radius, START_MARKER_COLOR)
            surface.fill_circle(points[-1], radius, END_MARKER_COLOR)

    @staticmethod
    def _draw_title(surface: DrawingSurface, width: float, height: float, track: Track,
                    style: StyleConfig) -> None:
        x = width * (style.title_position_percent_x / 100)
        y = height * (style.title_position_percent_y / 100) + style.font_size_px

        surface.draw_text(style.title_text, (x, y), style.font_family, style.font_size_px,
                          style.font_color)

        if track.total_distance_km and track.total_duration:
            stats = f"{track.total_distance_km:.2f} km · {track.total_duration}"
            surface.draw_text(stats, (x, y + style.font_size_px * SUBTITLE_OFFSET),
                              style.font_family, style.font_size_px * SUBTITLE_SCALE,
                              style.font_color)


def default_style_for(track: Track, **overrides) -> StyleConfig:
    """Create a style whose title is the track name."""
    overrides.setdefault("title_text", track.name)
    return StyleConfig(**overrides)


def render_to_surface(surface: DrawingSurface, track: Track, style: StyleConfig,
                      transparent_background: bool = False) -> DrawingSurface:
    """Project ``track`` for the surface's size and render it."""
    projected = project(track, surface.width, surface.height, style.padding_px)
    TrackRenderer().render(surface, surface.width, surface.height, track, projected, style,
                           transparent_background)
    return surface


def render_track(track: Track, style: StyleConfig, width: int = DEFAULT_CANVAS_SIZE,
                 height: int = DEFAULT_CANVAS_SIZE,
                 transparent_background: bool = False) -> Image.Image:
    """Render a track to a new RGBA image.

    Returns:
        PIL Image of the rendered track
    """
    surface = RasterSurface(width, height)
    render_to_surface(surface, track, style, transparent_background)
    return surface.to_image()


def export_png(track: Track, style: StyleConfig, width: int = DEFAULT_CANVAS_SIZE,
               height: int = DEFAULT_CANVAS_SIZE) -> bytes:
    """Render a track with a transparent background and encode it as PNG."""
    surface = RasterSurface(width, height)
    render_to_surface(surface, track, style, transparent_background=True)
    logger.info(f"Exported {width}x{height} PNG for {track.name!r}")
    return surface.to_png_bytes()


def export_svg(track: Track, style: StyleConfig, width: int = DEFAULT_CANVAS_SIZE,
               height: int = DEFAULT_CANVAS_SIZE) -> str:
    """Render a track with a transparent background as an SVG document."""
    surface = SvgSurface(width, height)
    render_to_surface(surface, track, style, transparent_background=True)
    logger.info(f"Exported {width}x{height} SVG for {track.name!r}")
    return surface.to_svg()
