from __future__ import annotations

from dataclasses import dataclass, replace


RGBA = tuple[int, int, int, int]

DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0

WHITE: RGBA = (255, 255, 255, 255)
BLACK: RGBA = (0, 0, 0, 255)
RED: RGBA = (255, 0, 0, 255)
GREEN: RGBA = (0, 255, 0, 255)
BLUE: RGBA = (0, 0, 255, 255)
YELLOW: RGBA = (255, 255, 0, 255)
CYAN: RGBA = (0, 255, 255, 255)
MAGENTA: RGBA = (255, 0, 255, 255)
TRANSPARENT: RGBA = (0, 0, 0, 0)

# Tableau-like series palette.
PALETTE: tuple[RGBA, ...] = (
    (31, 119, 180, 255),
    (255, 127, 14, 255),
    (44, 160, 44, 255),
    (214, 39, 40, 255),
    (148, 103, 189, 255),
    (140, 86, 75, 255),
    (227, 119, 194, 255),
    (127, 127, 127, 255),
    (188, 189, 34, 255),
    (23, 190, 207, 255),
)


def to_rgba(color: tuple[int, int, int] | tuple[int, int, int, int]) -> RGBA:
    if len(color) == 3:
        r, g, b = color
        return (int(r), int(g), int(b), 255)
    if len(color) == 4:
        r, g, b, a = color
        return (int(r), int(g), int(b), int(a))
    raise ValueError(f"color must have 3 or 4 channels, got {len(color)}")


def mix(color: tuple[int, int, int] | tuple[int, int, int, int], alpha: float) -> RGBA:
    """Scale the alpha channel of ``color`` by ``alpha`` (clamped to [0, 1])."""
    r, g, b, a = to_rgba(color)
    out_a = int(max(0.0, min(1.0, alpha)) * a)
    return (r, g, b, out_a)


def palette(index: int) -> RGBA:
    return PALETTE[index % len(PALETTE)]


@dataclass(frozen=True)
class ShapeStyle:
    color: RGBA = BLACK
    filled: bool = False
    stroke_width: int = 1

    def fill(self) -> "ShapeStyle":
        return replace(self, filled=True)

    def with_stroke_width(self, width: int) -> "ShapeStyle":
        if width <= 0:
            raise ValueError("stroke width must be > 0")
        return replace(self, stroke_width=int(width))


@dataclass(frozen=True)
class TextStyle:
    font_family: str = DEFAULT_FONT_FAMILY
    size_px: float = DEFAULT_FONT_SIZE_PX
    color: RGBA = BLACK
    # Quarter turns only, matching the raster text renderer.
    rotate_deg: int = 0

    def with_color(self, color: tuple[int, int, int] | tuple[int, int, int, int]) -> "TextStyle":
        return replace(self, color=to_rgba(color))

    def with_size(self, size_px: float) -> "TextStyle":
        if size_px <= 0:
            raise ValueError("font size must be > 0")
        return replace(self, size_px=float(size_px))


def as_shape_style(style: ShapeStyle | tuple[int, ...]) -> ShapeStyle:
    if isinstance(style, ShapeStyle):
        return style
    return ShapeStyle(color=to_rgba(style))  # type: ignore[arg-type]
