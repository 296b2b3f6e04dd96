"""Command for rendering GPX tracks to images."""

import logging
from pathlib import Path
from typing import Optional

import typer

from .utils import create_style_config, load_track, parse_output_format, write_image
from . import app

logger = logging.getLogger(__name__)

@app.command()
def render(
    gpx_file: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Path to the input GPX file"
    ),
    output_file: Path = typer.Option(
        None,
        "--output", "-o",
        help="Path to the output image (default: input filename with the format's extension)"
    ),
    output_format: str = typer.Option(
        "png",
        "--format",
        help="Output format (png, svg)"
    ),
    preview: bool = typer.Option(
        False,
        "--preview",
        help="Keep the background color instead of exporting with a transparent background"
    ),
    width: int = typer.Option(
        600,
        "--width", "-w",
        min=16,
        help="Width of the image in pixels"
    ),
    height: int = typer.Option(
        600,
        "--height", "-h",
        min=16,
        help="Height of the image in pixels"
    ),
    track_color: str = typer.Option(
        "#FF5353",
        "--track-color", "-c",
        help="Color of the route line (e.g. '#FF5353')"
    ),
    background_color: str = typer.Option(
        "#FFFFFF",
        "--background-color", "-b",
        help="Background color for previews, or 'transparent'"
    ),
    line_width: float = typer.Option(
        3.0,
        "--line-width", "-l",
        min=0.5,
        help="Width of the route line in pixels"
    ),
    padding: float = typer.Option(
        20.0,
        "--padding", "-p",
        min=0.0,
        help="Margin around the route in pixels"
    ),
    rotation: float = typer.Option(
        0.0,
        "--rotation", "-r",
        help="Rotation of the route in degrees (clockwise)"
    ),
    show_markers: bool = typer.Option(
        True,
        "--markers/--no-markers",
        help="Draw start (green) and end (red) markers"
    ),
    # Text rendering options
    title_text: Optional[str] = typer.Option(
        None,
        "--title",
        help="Title text (default: the track name)"
    ),
    no_title: bool = typer.Option(
        False,
        "--no-title",
        help="Do not draw the title and stats line"
    ),
    font_family: str = typer.Option(
        "Inter",
        "--font-family", "-ff",
        help="Font family name or path to a TrueType font file"
    ),
    font_size: float = typer.Option(
        24.0,
        "--font-size", "-fs",
        min=1.0,
        help="Title font size in pixels"
    ),
    font_color: str = typer.Option(
        "#000000",
        "--font-color",
        help="Title color (e.g. '#000000')"
    ),
    title_x: float = typer.Option(
        50.0,
        "--title-x",
        min=0.0,
        max=100.0,
        help="Horizontal title position in percent of the width"
    ),
    title_y: float = typer.Option(
        5.0,
        "--title-y",
        min=0.0,
        max=100.0,
        help="Vertical title position in percent of the height"
    ),
):
    """Render a GPX track to an image.

    By default the image is exported with a transparent background; use
    --preview to keep the background color.
    """
    try:
        output_format = parse_output_format(output_format)

        track = load_track(gpx_file)

        style = create_style_config(
            track,
            track_color=track_color,
            background_color=background_color,
            line_width=line_width,
            padding=padding,
            rotation=rotation,
            show_markers=show_markers,
            title_text=title_text,
            no_title=no_title,
            font_family=font_family,
            font_size=font_size,
            font_color=font_color,
            title_x=title_x,
            title_y=title_y,
        )

        # Set default output file if not provided
        if output_file is None:
            output_file = gpx_file.with_suffix(f".{output_format}")

        # Create output directory if it doesn't exist
        output_dir = output_file.parent
        if not output_dir.exists():
            output_dir.mkdir(parents=True)

        output_path = write_image(track, style, output_file, width, height,
                                  output_format=output_format, preview=preview)

        typer.echo(f"Image written: {output_path}")

    except (typer.BadParameter, typer.Abort):
        raise
    except Exception as e:
        logger.error(f"Error rendering image: {e}")
        raise typer.Abort()
