from __future__ import annotations

import logging
from typing import Any

from tipplot.chart.context import ChartContext
from tipplot.coord.cartesian import Cartesian2d
from tipplot.drawing.area import DrawingArea
from tipplot.errors import LayoutError
from tipplot.style import TextStyle


LOGGER = logging.getLogger(__name__)

DEFAULT_CAPTION_SIZE_PX = 20.0

_TOP, _BOTTOM, _LEFT, _RIGHT = range(4)


class ChartBuilder:
    """Lays out caption, margins and label areas, then builds a chart on the remaining rectangle."""

    def __init__(self, root: DrawingArea) -> None:
        self._root = root
        self._margin = [0, 0, 0, 0]
        self._label_area_size = [0, 0, 0, 0]
        self._title: tuple[str, TextStyle] | None = None

    @classmethod
    def on(cls, root: DrawingArea) -> "ChartBuilder":
        return cls(root)

    def caption(self, text: str, style: TextStyle | float | None = None) -> "ChartBuilder":
        if style is None:
            style = TextStyle(size_px=DEFAULT_CAPTION_SIZE_PX)
        elif not isinstance(style, TextStyle):
            style = TextStyle(size_px=float(style))
        self._title = (text, style)
        return self

    @staticmethod
    def _checked(size: int, name: str) -> int:
        if size < 0:
            raise ValueError(f"{name} must be >= 0")
        return int(size)

    def margin(self, size: int) -> "ChartBuilder":
        self._margin = [self._checked(size, "margin")] * 4
        return self

    def margin_top(self, size: int) -> "ChartBuilder":
        self._margin[_TOP] = self._checked(size, "margin")
        return self

    def margin_bottom(self, size: int) -> "ChartBuilder":
        self._margin[_BOTTOM] = self._checked(size, "margin")
        return self

    def margin_left(self, size: int) -> "ChartBuilder":
        self._margin[_LEFT] = self._checked(size, "margin")
        return self

    def margin_right(self, size: int) -> "ChartBuilder":
        self._margin[_RIGHT] = self._checked(size, "margin")
        return self

    def x_label_area_size(self, size: int) -> "ChartBuilder":
        self._label_area_size[_BOTTOM] = self._checked(size, "label area size")
        return self

    def top_x_label_area_size(self, size: int) -> "ChartBuilder":
        self._label_area_size[_TOP] = self._checked(size, "label area size")
        return self

    def y_label_area_size(self, size: int) -> "ChartBuilder":
        self._label_area_size[_LEFT] = self._checked(size, "label area size")
        return self

    def right_y_label_area_size(self, size: int) -> "ChartBuilder":
        self._label_area_size[_RIGHT] = self._checked(size, "label area size")
        return self

    def set_all_label_area_size(self, size: int) -> "ChartBuilder":
        self._label_area_size = [self._checked(size, "label area size")] * 4
        return self

    def build_cartesian_2d(self, x_spec: Any, y_spec: Any) -> ChartContext:
        top, bottom, left, right = self._margin
        area = self._root.margin(top, bottom, left, right)
        if self._title is not None:
            text, style = self._title
            area = area.titled(text, style)

        w, h = area.dim_in_pixel()
        t, b, l, r = self._label_area_size
        # 3x3 grid, row-major: label areas around the plotting area in the middle cell.
        cells = area.split_by_breakpoints([l, w - r], [t, h - b])
        plot = cells[4]
        if plot.rect.is_empty():
            raise LayoutError(f"no room left for the plotting area in {area.rect!r}")

        coord = Cartesian2d(x_spec, y_spec, plot.get_pixel_range())
        LOGGER.debug("built cartesian chart %r on %r", coord, plot.rect)
        return ChartContext(
            plot.apply_coord_spec(coord),
            x_label_area=cells[7],
            y_label_area=cells[3],
            top_label_area=cells[1],
            right_label_area=cells[5],
        )
