"""GPX track poster renderer - draws stylized images of GPX routes."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("gpxcanvas")
except PackageNotFoundError:
    __version__ = "0.1.0"  # Default version if package is not installed
