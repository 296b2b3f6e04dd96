"""Command for displaying information about GPX files."""

import logging
from pathlib import Path

import typer

from ..gpx_parser import GPXParser
from ..projection import compute_bounds
from . import app

logger = logging.getLogger(__name__)

@app.command()
def info(
        gpx_file: Path = typer.Argument(
            ...,
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to the GPX file"
        )
):
    """Display information about a GPX file."""
    try:
        # Parse GPX file
        logger.info(f"Parsing GPX file: {gpx_file}")
        parser = GPXParser.from_file(gpx_file)
        track = parser.parse()

        typer.echo(f"GPX File: {gpx_file}")
        typer.echo(f"Name: {track.name}")
        typer.echo(f"Date: {track.date or 'unknown'}")
        typer.echo(f"Number of track points: {len(track.points)}")
        typer.echo(f"Distance: {track.total_distance_km:.2f} km")
        typer.echo(f"Duration: {track.total_duration}")

        start_time, end_time = parser.get_time_bounds()
        if start_time and end_time:
            typer.echo(f"Time range: {start_time} to {end_time}")
        else:
            typer.echo("No time data available")

        if track.points:
            bounds = compute_bounds(track.points)
            typer.echo(f"Coordinate bounds: {bounds.min_lat:.6f},{bounds.min_lon:.6f} "
                       f"to {bounds.max_lat:.6f},{bounds.max_lon:.6f}")
        else:
            typer.echo("No track points found")

    except Exception as e:
        logger.error(f"Error reading GPX file: {e}")
        raise typer.Abort()
