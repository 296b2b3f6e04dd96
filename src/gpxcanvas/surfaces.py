"""Drawing surfaces the track renderer draws onto.

A surface offers a handful of immediate-mode primitives plus a scoped rotation
frame. ``rotated()`` is a context manager, so the transform is undone on every
exit path and the same drawing code can target a raster image, an SVG
document or a plain command list.
"""

import contextlib
import io
import logging
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from lxml import etree
from PIL import Image, ImageColor, ImageDraw

from .font_manager import FontManager
from .projection import rotate_points

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Rotation = Tuple[float, Point]

SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class DrawingSurface:
    """Base class for drawing targets.

    Subclasses implement the primitives; the rotation stack is shared.
    Geometry passed to the primitives is in canvas pixels before rotation.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._rotations: List[Rotation] = []

    @contextlib.contextmanager
    def rotated(self, degrees: float, center: Point) -> Iterator["DrawingSurface"]:
        """Rotate everything drawn inside the block by ``degrees`` about ``center``."""
        self._push_rotation(degrees, center)
        try:
            yield self
        finally:
            self._pop_rotation()

    @property
    def transform_depth(self) -> int:
        return len(self._rotations)

    def _push_rotation(self, degrees: float, center: Point) -> None:
        self._rotations.append((degrees, center))

    def _pop_rotation(self) -> None:
        self._rotations.pop()

    def transform_points(self, points: Sequence[Point]) -> List[Point]:
        """Apply the active rotations to ``points``, innermost first."""
        result = [(float(x), float(y)) for x, y in points]
        for degrees, center in reversed(self._rotations):
            result = rotate_points(result, degrees, center)
        return result

    def clear(self) -> None:
        """Discard everything drawn so far, leaving a fully transparent surface."""
        raise NotImplementedError

    def fill(self, color: str) -> None:
        """Discard everything drawn so far and paint the whole surface."""
        raise NotImplementedError

    def stroke_polyline(self, points: Sequence[Point], color: str, width: float) -> None:
        """Stroke one continuous path with round caps and joins."""
        raise NotImplementedError

    def fill_circle(self, center: Point, radius: float, color: str) -> None:
        raise NotImplementedError

    def draw_text(self, text: str, anchor: Point, font_family: str, font_size: float,
                  color: str) -> None:
        """Draw upright text centred on ``anchor.x`` with its baseline at ``anchor.y``."""
        raise NotImplementedError


class RasterSurface(DrawingSurface):
    """Pillow-backed RGBA surface."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self.image)

    @staticmethod
    def _rgba(color: str) -> Tuple[int, int, int, int]:
        return ImageColor.getcolor(color, "RGBA")

    def clear(self) -> None:
        self.image.paste((0, 0, 0, 0), (0, 0, self.width, self.height))

    def fill(self, color: str) -> None:
        self.image.paste(self._rgba(color), (0, 0, self.width, self.height))

    def stroke_polyline(self, points: Sequence[Point], color: str, width: float) -> None:
        if len(points) < 2:
            return

        ink = self._rgba(color)
        line_width = max(1, int(round(width)))
        path = self.transform_points(points)
        self._draw.line(path, fill=ink, width=line_width, joint="curve")

        # ImageDraw has no line caps, so round the two ends off by hand
        radius = line_width / 2
        for x, y in (path[0], path[-1]):
            self._draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=ink)

    def fill_circle(self, center: Point, radius: float, color: str) -> None:
        (x, y), = self.transform_points([center])
        self._draw.ellipse((x - radius, y - radius, x + radius, y + radius),
                           fill=self._rgba(color))

    def draw_text(self, text: str, anchor: Point, font_family: str, font_size: float,
                  color: str) -> None:
        (x, y), = self.transform_points([anchor])
        font_manager = FontManager(font_family, font_size)
        ink = self._rgba(color)

        if font_manager.supports_anchors:
            self._draw.text((x, y), text, fill=ink, font=font_manager.font, anchor="ms")
        else:
            width, height = font_manager.get_text_size(text)
            self._draw.text((x - width / 2, y - height), text, fill=ink, font=font_manager.font)

    def to_image(self) -> Image.Image:
        return self.image.copy()

    def to_png_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        return buffer.getvalue()


def _fmt(value: float) -> str:
    return f"{value:.2f}"


class SvgSurface(DrawingSurface):
    """Vector surface that builds an SVG document.

    Rotations become nested ``<g transform="rotate(...)">`` groups instead of
    being applied to the coordinates.
    """

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self._reset()

    def _reset(self) -> None:
        self.root = etree.Element(
            f"{{{SVG_NAMESPACE}}}svg",
            nsmap={None: SVG_NAMESPACE},
            width=str(self.width),
            height=str(self.height),
            viewBox=f"0 0 {self.width} {self.height}",
        )
        self._groups = [self.root]

    def _element(self, tag: str, **attributes) -> etree._Element:
        return etree.SubElement(self._groups[-1], f"{{{SVG_NAMESPACE}}}{tag}",
                                {k.replace("_", "-"): v for k, v in attributes.items()})

    def _push_rotation(self, degrees: float, center: Point) -> None:
        super()._push_rotation(degrees, center)
        cx, cy = center
        group = self._element("g", transform=f"rotate({_fmt(degrees)} {_fmt(cx)} {_fmt(cy)})")
        self._groups.append(group)

    def _pop_rotation(self) -> None:
        super()._pop_rotation()
        if len(self._groups) > 1:
            self._groups.pop()

    def transform_points(self, points: Sequence[Point]) -> List[Point]:
        # The enclosing <g> elements carry the rotation
        return [(float(x), float(y)) for x, y in points]

    def clear(self) -> None:
        if self.transform_depth:
            logger.warning("Clearing an SVG surface inside a rotated frame")
        self._reset()

    def fill(self, color: str) -> None:
        self.clear()
        self._element("rect", x="0", y="0", width=str(self.width), height=str(self.height),
                      fill=color)

    def stroke_polyline(self, points: Sequence[Point], color: str, width: float) -> None:
        if len(points) < 2:
            return
        self._element(
            "polyline",
            points=" ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points),
            fill="none",
            stroke=color,
            stroke_width=_fmt(width),
            stroke_linecap="round",
            stroke_linejoin="round",
        )

    def fill_circle(self, center: Point, radius: float, color: str) -> None:
        cx, cy = center
        self._element("circle", cx=_fmt(cx), cy=_fmt(cy), r=_fmt(radius), fill=color)

    def draw_text(self, text: str, anchor: Point, font_family: str, font_size: float,
                  color: str) -> None:
        x, y = anchor
        element = self._element("text", x=_fmt(x), y=_fmt(y), text_anchor="middle",
                                font_family=font_family, font_size=_fmt(font_size), fill=color)
        element.text = text

    def to_svg(self) -> str:
        return etree.tostring(self.root, pretty_print=True, xml_declaration=True,
                              encoding="UTF-8").decode("utf-8")


@dataclass(frozen=True)
class DrawCommand:
    """One recorded drawing operation, with rotations already applied."""
    op: str
    args: tuple


class RecordingSurface(DrawingSurface):
    """Surface that records drawing commands instead of drawing."""

    BACKGROUND_OPS = ("clear", "fill")

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.commands: List[DrawCommand] = []

    def clear(self) -> None:
        self.commands = [DrawCommand("clear", ())]

    def fill(self, color: str) -> None:
        self.commands = [DrawCommand("fill", (color,))]

    def stroke_polyline(self, points: Sequence[Point], color: str, width: float) -> None:
        if len(points) < 2:
            return
        self.commands.append(
            DrawCommand("stroke_polyline", (tuple(self.transform_points(points)), color, width)))

    def fill_circle(self, center: Point, radius: float, color: str) -> None:
        (point,) = self.transform_points([center])
        self.commands.append(DrawCommand("fill_circle", (point, radius, color)))

    def draw_text(self, text: str, anchor: Point, font_family: str, font_size: float,
                  color: str) -> None:
        (point,) = self.transform_points([anchor])
        self.commands.append(DrawCommand("draw_text", (text, point, font_family, font_size, color)))

    def geometry(self) -> List[DrawCommand]:
        """The recorded commands without the background operation."""
        return [c for c in self.commands if c.op not in self.BACKGROUND_OPS]

    def ops(self) -> List[str]:
        return [c.op for c in self.commands]
