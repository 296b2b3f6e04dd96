"""Font management module for text rendering on raster surfaces.

This module provides the FontManager class which resolves a font family name
(as chosen in the style configuration) to a Pillow font and measures text.
"""

import functools
import logging
import os
from typing import Dict, List, Tuple, Union

from PIL import ImageFont

logger = logging.getLogger(__name__)

PillowFont = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Candidate font files per family, tried in order. Pillow searches the
# platform font directories for bare file names.
FONT_FILE_ALIASES: Dict[str, List[str]] = {
    "inter": ["Inter-Regular.ttf", "Inter.ttf", "InterVariable.ttf"],
    "arial": ["arial.ttf", "Arial.ttf", "LiberationSans-Regular.ttf"],
    "helvetica": ["Helvetica.ttc", "helvetica.ttf", "LiberationSans-Regular.ttf"],
    "georgia": ["georgia.ttf", "Georgia.ttf", "DejaVuSerif.ttf"],
    "courier new": ["cour.ttf", "Courier New.ttf", "LiberationMono-Regular.ttf"],
    "impact": ["impact.ttf", "Impact.ttf"],
    "dejavu sans": ["DejaVuSans.ttf"],
}

# Last resort before Pillow's built-in font
GENERIC_FALLBACKS = ["DejaVuSans.ttf", "LiberationSans-Regular.ttf"]

MIN_FONT_SIZE = 1.0


def _candidate_files(font_family: str) -> List[str]:
    if font_family.lower().endswith((".ttf", ".otf", ".ttc")):
        return [font_family]

    key = font_family.strip().lower()
    candidates = list(FONT_FILE_ALIASES.get(key, []))
    compact = font_family.replace(" ", "")
    candidates.extend([f"{compact}.ttf", f"{compact}-Regular.ttf", f"{key.replace(' ', '')}.ttf"])
    candidates.extend(GENERIC_FALLBACKS)
    return candidates


@functools.lru_cache(maxsize=64)
def load_font(font_family: str, font_size: float) -> PillowFont:
    """Load the best available font for a family at the given pixel size.

    Falls back to Pillow's bundled font when nothing on the system matches.
    """
    # FreeType rejects sizes below one pixel
    font_size = max(MIN_FONT_SIZE, font_size)

    for candidate in _candidate_files(font_family):
        if os.path.isabs(candidate) and not os.path.exists(candidate):
            continue
        try:
            font = ImageFont.truetype(candidate, font_size)
        except OSError:
            continue
        logger.debug(f"Resolved font family {font_family!r} to {candidate}")
        return font

    logger.info(f"No TrueType font found for {font_family!r}, using Pillow default font")
    return ImageFont.load_default(size=font_size)


class FontManager:
    """Resolves fonts and measures text for a single family and size."""

    def __init__(self, font_family: str, font_size: float):
        """Initialize the font manager.

        Args:
            font_family: Family name (e.g. "Inter") or path to a TrueType file
            font_size: Font size in pixels
        """
        self.font_family = font_family
        self.font_size = font_size
        self.font = load_font(font_family, font_size)

    @property
    def supports_anchors(self) -> bool:
        """Whether Pillow can position text by anchor with this font."""
        return isinstance(self.font, ImageFont.FreeTypeFont)

    def get_text_size(self, text: str) -> Tuple[int, int]:
        """Get the size of text when rendered.

        Args:
            text: The text to measure

        Returns:
            (width, height) tuple in pixels
        """
        left, top, right, bottom = self.font.getbbox(text)
        return right - left, bottom - top
