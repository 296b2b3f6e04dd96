"""Tests for the render composer.

Most tests draw onto a RecordingSurface so the exact drawing commands can be
checked; a few render real pixels to confirm preview/export parity.
"""

import io

import numpy as np
import pytest
from PIL import Image, ImageColor

from gpxcanvas.models import END_MARKER_COLOR, START_MARKER_COLOR, StyleConfig, Track
from gpxcanvas.projection import project
from gpxcanvas.samples import sample_track
from gpxcanvas.surfaces import RecordingSurface
from gpxcanvas.track_renderer import (
    TrackRenderer,
    default_style_for,
    export_png,
    render_to_surface,
    render_track,
)


def record(track: Track, style: StyleConfig, transparent_background: bool = False,
           width: int = 600, height: int = 600) -> RecordingSurface:
    surface = RecordingSurface(width, height)
    render_to_surface(surface, track, style, transparent_background)
    return surface


class TestRenderSteps:
    """Order and content of the drawing steps."""

    def test_step_order(self, right_angle_track: Track, style: StyleConfig) -> None:
        surface = record(right_angle_track, style)

        assert surface.ops() == [
            "fill", "stroke_polyline", "fill_circle", "fill_circle", "draw_text", "draw_text",
        ]
        assert surface.commands[0].args == ("#FFFFFF",)

    def test_empty_track_only_clears(self, style: StyleConfig) -> None:
        surface = RecordingSurface(600, 600)
        surface.fill("#000000")
        TrackRenderer().render(surface, 600, 600, Track(), [], style)

        assert surface.ops() == ["clear"]

    def test_stroke_uses_projected_points(self, right_angle_track: Track,
                                          style: StyleConfig) -> None:
        surface = record(right_angle_track, style)
        stroke = surface.geometry()[0]

        points, color, width = stroke.args
        assert points == (pytest.approx((20, 580)), pytest.approx((580, 580)),
                          pytest.approx((580, 20)))
        assert color == style.track_color
        assert width == style.line_width_px

    def test_markers(self, right_angle_track: Track, style: StyleConfig) -> None:
        start, end = [c for c in record(right_angle_track, style).commands
                      if c.op == "fill_circle"]

        assert start.args == (pytest.approx((20, 580)), 6.0, START_MARKER_COLOR)
        assert end.args == (pytest.approx((580, 20)), 6.0, END_MARKER_COLOR)

    def test_markers_disabled(self, right_angle_track: Track, style: StyleConfig) -> None:
        surface = record(right_angle_track, style.replace(show_start_end_markers=False))
        assert "fill_circle" not in surface.ops()

    def test_single_point_draws_stacked_markers(self, single_point_track: Track,
                                                style: StyleConfig) -> None:
        surface = record(single_point_track, style.replace(show_title=False))

        assert surface.ops() == ["fill", "fill_circle", "fill_circle"]
        start, end = surface.geometry()
        assert start.args[0] == end.args[0]
        assert start.args[2] == START_MARKER_COLOR
        assert end.args[2] == END_MARKER_COLOR


class TestBackground:

    def test_transparent_export_clears(self, right_angle_track: Track,
                                       style: StyleConfig) -> None:
        assert record(right_angle_track, style, transparent_background=True).ops()[0] == "clear"

    def test_transparent_background_color(self, right_angle_track: Track,
                                          style: StyleConfig) -> None:
        surface = record(right_angle_track, style.replace(background_color="transparent"))
        assert surface.ops()[0] == "clear"

    def test_rerender_does_not_accumulate(self, right_angle_track: Track,
                                          style: StyleConfig) -> None:
        surface = record(right_angle_track, style)
        first = list(surface.commands)
        render_to_surface(surface, right_angle_track, style)

        assert surface.commands == first


class TestTitle:
    """Title and stats line placement."""

    def test_title_and_stats(self, right_angle_track: Track, style: StyleConfig) -> None:
        title, stats = [c for c in record(right_angle_track, style).commands
                        if c.op == "draw_text"]

        assert title.args == ("Lunch Run", pytest.approx((300, 54)), "DejaVu Sans", 24.0,
                              "#000000")
        text, anchor, family, size, color = stats.args
        assert text == "222.39 km · 01:15:30"
        assert anchor == pytest.approx((300, 54 + 24 * 0.8))
        assert size == pytest.approx(14.4)

    def test_title_position_percent(self, right_angle_track: Track, style: StyleConfig) -> None:
        style = style.replace(title_position_percent_x=25, title_position_percent_y=50,
                              font_size_px=30)
        title = record(right_angle_track, style, width=800, height=400).geometry()[-2]

        assert title.args[1] == pytest.approx((200, 230))

    def test_hidden_title(self, right_angle_track: Track, style: StyleConfig) -> None:
        surface = record(right_angle_track, style.replace(show_title=False))
        assert "draw_text" not in surface.ops()

    def test_empty_title_text(self, right_angle_track: Track, style: StyleConfig) -> None:
        surface = record(right_angle_track, style.replace(title_text=""))
        assert "draw_text" not in surface.ops()

    def test_no_stats_without_distance(self, single_point_track: Track,
                                       style: StyleConfig) -> None:
        texts = [c for c in record(single_point_track, style).commands if c.op == "draw_text"]
        assert len(texts) == 1

    def test_title_is_not_rotated(self, right_angle_track: Track, style: StyleConfig) -> None:
        upright = record(right_angle_track, style)
        rotated = record(right_angle_track, style.replace(rotation_degrees=135))

        def texts(surface):
            return [c for c in surface.commands if c.op == "draw_text"]

        assert texts(upright) == texts(rotated)


class TestRotation:

    def test_full_turn_is_identical(self, right_angle_track: Track, style: StyleConfig) -> None:
        assert (record(right_angle_track, style.replace(rotation_degrees=0)).commands
                == record(right_angle_track, style.replace(rotation_degrees=360)).commands)

    def test_quarter_turn_about_centre(self, right_angle_track: Track,
                                       style: StyleConfig) -> None:
        surface = record(right_angle_track, style.replace(rotation_degrees=90))
        points = surface.geometry()[0].args[0]

        # (20, 580) is (-280, 280) from the centre; a clockwise quarter turn gives (-280, -280)
        assert points[0] == pytest.approx((20, 20))
        assert points[2] == pytest.approx((580, 580))

    def test_negative_rotation_wraps(self, right_angle_track: Track, style: StyleConfig) -> None:
        assert (record(right_angle_track, style.replace(rotation_degrees=-90)).commands
                == record(right_angle_track, style.replace(rotation_degrees=270)).commands)

    def test_transform_is_released(self, right_angle_track: Track, style: StyleConfig) -> None:
        surface = record(right_angle_track, style.replace(rotation_degrees=30))
        assert surface.transform_depth == 0


class TestExportParity:
    """Preview and export differ only in the background."""

    def test_same_geometry(self, right_angle_track: Track, style: StyleConfig) -> None:
        style = style.replace(rotation_degrees=33)
        preview = record(right_angle_track, style)
        export = record(right_angle_track, style, transparent_background=True)

        assert preview.geometry() == export.geometry()

    def test_same_pixels_where_drawn(self, style: StyleConfig) -> None:
        style = style.replace(show_title=False, rotation_degrees=60, line_width_px=4)
        track = sample_track()

        preview = np.asarray(render_track(track, style, 300, 200))
        export = np.asarray(render_track(track, style, 300, 200, transparent_background=True))

        drawn = export[:, :, 3] == 255
        assert drawn.any()
        assert np.array_equal(preview[drawn], export[drawn])
        assert (export[~drawn][:, 3] == 0).all()
        assert (preview[~drawn] == [255, 255, 255, 255]).all()


class TestRasterOutput:
    """Pixels produced by the Pillow surface."""

    def test_preview_background(self, right_angle_track: Track, style: StyleConfig) -> None:
        image = render_track(right_angle_track, style.replace(background_color="#102030"))

        assert image.mode == "RGBA"
        assert image.size == (600, 600)
        assert image.getpixel((0, 0)) == (16, 32, 48, 255)

    def test_track_color_is_drawn(self, right_angle_track: Track, style: StyleConfig) -> None:
        image = render_track(right_angle_track, style.replace(show_start_end_markers=False))
        # Midpoint of the bottom leg
        assert image.getpixel((300, 580)) == ImageColor.getcolor(style.track_color, "RGBA")

    def test_rotation_full_turn_pixels(self, style: StyleConfig) -> None:
        track = sample_track()
        a = render_track(track, style.replace(rotation_degrees=0))
        b = render_track(track, style.replace(rotation_degrees=360))

        assert a.tobytes() == b.tobytes()

    def test_export_png(self, right_angle_track: Track, style: StyleConfig) -> None:
        data = export_png(right_angle_track, style, 320, 240)

        assert data.startswith(b"\x89PNG")
        image = Image.open(io.BytesIO(data))
        assert image.size == (320, 240)
        assert image.mode == "RGBA"
        assert image.getpixel((0, 0))[3] == 0

    def test_empty_track_is_blank(self, style: StyleConfig) -> None:
        image = render_track(Track(), style)
        assert image.getbbox() is None


class TestSubPixelFonts:
    """Tiny but valid font sizes still render."""

    @pytest.mark.parametrize("font_size", [0.3, 0.6, 0.8, 1.0])
    def test_render_with_small_title(self, right_angle_track: Track, font_size: float) -> None:
        style = StyleConfig(title_text="hi", font_size_px=font_size)
        image = render_track(right_angle_track, style, 200, 200)

        assert image.size == (200, 200)


class TestDefaults:

    def test_default_style_uses_track_name(self, right_angle_track: Track) -> None:
        assert default_style_for(right_angle_track).title_text == "Right Angle"

    def test_default_style_overrides(self, right_angle_track: Track) -> None:
        style = default_style_for(right_angle_track, title_text="Custom", rotation_degrees=45)
        assert (style.title_text, style.rotation_degrees) == ("Custom", 45)

    def test_sample_track_is_deterministic(self) -> None:
        assert sample_track(3).points == sample_track(3).points
        assert sample_track(3).points != sample_track(4).points
        assert len(sample_track().points) == 100

    def test_project_matches_render(self, right_angle_track: Track, style: StyleConfig) -> None:
        projected = project(right_angle_track, 600, 600, style.padding_px)
        surface = RecordingSurface(600, 600)
        TrackRenderer().render(surface, 600, 600, right_angle_track, projected, style)

        assert surface.commands == record(right_angle_track, style).commands
