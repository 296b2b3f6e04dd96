"""Utility functions for the CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import typer

from ..gpx_parser import GPXParser
from ..models import TRANSPARENT, StyleConfig, Track, is_valid_color
from ..surfaces import SvgSurface
from ..track_renderer import export_png, export_svg, render_to_surface, render_track

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("png", "svg")


def parse_hex_color(color_str: str, allow_transparent: bool = False) -> str:
    """Validate a color given on the command line.

    Args:
        color_str: Color as '#RRGGBB' (or any form Pillow understands)
        allow_transparent: Whether the literal 'transparent' is accepted

    Returns:
        The color string, unchanged

    Raises:
        typer.BadParameter: If the color string is invalid
    """
    if allow_transparent and color_str == TRANSPARENT:
        return color_str
    if not is_valid_color(color_str):
        logger.error(f"Invalid color format: {color_str}")
        raise typer.BadParameter("Color must be a hex value such as '#FF5353'")
    return color_str


def parse_output_format(output_format: str) -> str:
    output_format = output_format.lower()
    if output_format not in OUTPUT_FORMATS:
        logger.error(f"Invalid output format: {output_format}")
        raise typer.BadParameter("Output format must be one of: png, svg")
    return output_format


def create_style_config(
    track: Track,
    track_color: str = "#FF5353",
    background_color: str = "#FFFFFF",
    line_width: float = 3.0,
    padding: float = 20.0,
    rotation: float = 0.0,
    show_markers: bool = True,
    title_text: Optional[str] = None,
    no_title: bool = False,
    font_family: str = "Inter",
    font_size: float = 24.0,
    font_color: str = "#000000",
    title_x: float = 50.0,
    title_y: float = 5.0,
) -> StyleConfig:
    """Create a StyleConfig object from the given parameters.

    Args:
        track: The parsed track; its name is the default title
        track_color: Color of the route line
        background_color: Background color, or 'transparent'
        line_width: Width of the route line in pixels
        padding: Margin around the route in pixels
        rotation: Rotation of the route in degrees
        show_markers: Whether to draw start/end markers
        title_text: Title text; defaults to the track name
        no_title: Whether to hide the title
        font_family: Font family for the title
        font_size: Title font size in pixels
        font_color: Title color
        title_x: Horizontal title position in percent of the width
        title_y: Vertical title position in percent of the height

    Returns:
        StyleConfig object
    """
    try:
        return StyleConfig(
            track_color=parse_hex_color(track_color),
            background_color=parse_hex_color(background_color, allow_transparent=True),
            line_width_px=line_width,
            padding_px=padding,
            rotation_degrees=rotation,
            show_start_end_markers=show_markers,
            show_title=not no_title,
            title_text=track.name if title_text is None else title_text,
            font_family=font_family,
            font_size_px=font_size,
            font_color=parse_hex_color(font_color),
            title_position_percent_x=title_x,
            title_position_percent_y=title_y,
        )
    except ValueError as e:
        logger.error(f"Invalid style option: {e}")
        raise typer.BadParameter(str(e))


def load_track(gpx_file: Path) -> Track:
    """Parse a GPX file, aborting when it holds no track points."""
    logger.info(f"Parsing GPX file: {gpx_file}")
    track = GPXParser.from_file(gpx_file).parse()

    if not track.points:
        logger.error("No track points found in the GPX file")
        raise typer.Abort()

    return track


def write_image(
        track: Track,
        style: StyleConfig,
        output_file: Path,
        width: int,
        height: int,
        output_format: str = "png",
        preview: bool = False
) -> Path:
    """Render a track and write it to disk.

    Args:
        track: The track to draw
        style: Style configuration
        output_file: Destination path
        width: Image width in pixels
        height: Image height in pixels
        output_format: 'png' or 'svg'
        preview: Keep the background color instead of exporting with transparency

    Returns:
        Path to the written file
    """
    if output_format == "svg":
        if preview:
            surface = render_to_surface(SvgSurface(width, height), track, style)
            content = surface.to_svg()
        else:
            content = export_svg(track, style, width, height)
        output_file.write_text(content, encoding="utf-8")
    elif preview:
        render_track(track, style, width, height).save(output_file, format="PNG")
    else:
        output_file.write_bytes(export_png(track, style, width, height))

    logger.info(f"Image written: {output_file}")
    return output_file
