from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from tipplot.backend import BackendCoord, DrawingBackend, DrawingBackendError
from tipplot.raster import (
    draw_circle,
    draw_pixel,
    draw_polyline,
    draw_rect_outline,
    draw_text,
    fill_polygon,
    fill_rect,
    new_canvas,
    text_size,
)
from tipplot.style import RGBA, WHITE, ShapeStyle, TextStyle


LOGGER = logging.getLogger(__name__)


class RasterBackend(DrawingBackend):
    """RGBA numpy canvas; ``present`` writes a PNG (or any Pillow format) when a path is set."""

    def __init__(
        self,
        width: int,
        height: int,
        path: str | Path | None = None,
        *,
        background: RGBA = WHITE,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.path = Path(path) if path is not None else None
        self._canvas = new_canvas(max(0, self.width), max(0, self.height), color=background)
        self.presented = False

    def get_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas)

    def present(self) -> None:
        self.presented = True
        if self.path is None:
            return
        try:
            self.to_image().save(self.path)
        except ValueError as exc:
            raise DrawingBackendError(f"cannot encode {self.path}: {exc}") from exc
        LOGGER.debug("wrote %dx%d raster to %s", self.width, self.height, self.path)

    def draw_pixel(self, point: BackendCoord, color: RGBA) -> None:
        draw_pixel(self._canvas, int(point[0]), int(point[1]), color)

    def draw_line(self, start: BackendCoord, end: BackendCoord, style: ShapeStyle) -> None:
        draw_polyline(self._canvas, [start, end], style.color, width=style.stroke_width)

    def draw_rect(self, upper_left: BackendCoord, bottom_right: BackendCoord, style: ShapeStyle, fill: bool) -> None:
        (x0, y0), (x1, y1) = upper_left, bottom_right
        if fill:
            fill_rect(self._canvas, x0, y0, x1, y1, style.color)
        else:
            draw_rect_outline(self._canvas, x0, y0, x1, y1, style.color)

    def draw_path(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        if len(points) == 1:
            self.draw_pixel(points[0], style.color)
            return
        draw_polyline(self._canvas, list(points), style.color, width=style.stroke_width)

    def draw_circle(self, center: BackendCoord, radius: int, style: ShapeStyle, fill: bool) -> None:
        draw_circle(self._canvas, int(center[0]), int(center[1]), int(radius), style.color, filled=fill)

    def fill_polygon(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        fill_polygon(self._canvas, list(points), style.color)

    def draw_text(self, text: str, style: TextStyle, pos: BackendCoord) -> None:
        draw_text(
            self._canvas,
            int(pos[0]),
            int(pos[1]),
            text,
            style.color,
            font_family=style.font_family,
            font_size_px=style.size_px,
            rotate_deg=style.rotate_deg,
        )

    def estimate_text_size(self, text: str, style: TextStyle) -> tuple[int, int]:
        return text_size(
            text,
            font_family=style.font_family,
            font_size_px=style.size_px,
            rotate_deg=style.rotate_deg,
        )
