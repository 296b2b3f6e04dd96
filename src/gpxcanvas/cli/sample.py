"""Command for rendering the built-in demo track."""

import logging
from pathlib import Path

import typer

from ..samples import sample_track
from ..track_renderer import default_style_for
from .utils import write_image
from . import app

logger = logging.getLogger(__name__)

@app.command()
def sample(
    output_file: Path = typer.Option(
        Path("sample.png"),
        "--output", "-o",
        help="Path to the output PNG file"
    ),
    seed: int = typer.Option(
        0,
        "--seed",
        help="Seed for the generated route"
    ),
    preview: bool = typer.Option(
        False,
        "--preview",
        help="Keep the white background instead of exporting with transparency"
    ),
):
    """Render a demo track, useful for trying out styles without a GPX file."""
    try:
        track = sample_track(seed)
        write_image(track, default_style_for(track), output_file, 600, 600, preview=preview)
        typer.echo(f"Image written: {output_file}")
    except Exception as e:
        logger.error(f"Error rendering sample: {e}")
        raise typer.Abort()
