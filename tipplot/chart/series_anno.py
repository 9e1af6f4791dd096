from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Literal

from tipplot.element import Drawable, PathElement, Rectangle
from tipplot.style import BLACK, RGBA, WHITE, ShapeStyle, TextStyle, as_shape_style, mix, to_rgba

if TYPE_CHECKING:
    from tipplot.chart.context import ChartContext


LegendFn = Callable[[tuple[int, int]], Drawable]

SeriesLabelPosition = Literal[
    "upper_left",
    "upper_middle",
    "upper_right",
    "middle_left",
    "middle_middle",
    "middle_right",
    "lower_left",
    "lower_middle",
    "lower_right",
]

DEFAULT_LEGEND_AREA_SIZE = 24
DEFAULT_LEGEND_MARGIN = 10


class SeriesAnno:
    """Legend entry of one drawn series; configured through chained setters."""

    def __init__(self, series_id: int | None = None, color: RGBA | None = None) -> None:
        self.series_id = series_id
        self.color = color
        self._label: str | None = None
        self._draw_func: LegendFn | None = None

    def __repr__(self) -> str:
        return f"SeriesAnno(series_id={self.series_id!r}, label={self._label!r})"

    def label(self, text: str) -> "SeriesAnno":
        self._label = str(text)
        return self

    def legend(self, func: LegendFn) -> "SeriesAnno":
        self._draw_func = func
        return self

    @property
    def label_text(self) -> str | None:
        return self._label

    @property
    def draw_func(self) -> LegendFn | None:
        return self._draw_func


@dataclass(frozen=True)
class LegendLayout:
    entries: tuple[SeriesAnno, ...]
    text_sizes: tuple[tuple[int, int], ...]
    swatch_w: int
    item_gap: int
    pad: int
    item_h: int
    box_w: int
    box_h: int


class SeriesLabelStyle:
    """Legend box listing every labelled series of a chart."""

    def __init__(self, chart: "ChartContext") -> None:
        self._chart = chart
        self._position: SeriesLabelPosition | tuple[int, int] = "middle_right"
        self._margin = DEFAULT_LEGEND_MARGIN
        self._legend_area_size = DEFAULT_LEGEND_AREA_SIZE
        self._border_style: ShapeStyle | None = ShapeStyle(color=BLACK)
        self._background: RGBA | None = mix(WHITE, 0.8)
        self._label_font = TextStyle()

    def position(self, pos: SeriesLabelPosition | tuple[int, int]) -> "SeriesLabelStyle":
        self._position = pos
        return self

    def margin(self, margin: int) -> "SeriesLabelStyle":
        if margin < 0:
            raise ValueError("legend margin must be >= 0")
        self._margin = int(margin)
        return self

    def legend_area_size(self, size: int) -> "SeriesLabelStyle":
        if size <= 0:
            raise ValueError("legend area size must be > 0")
        self._legend_area_size = int(size)
        return self

    def border_style(self, style: ShapeStyle | tuple[int, ...] | None) -> "SeriesLabelStyle":
        self._border_style = None if style is None else as_shape_style(style)
        return self

    def background_style(self, color: tuple[int, ...] | None) -> "SeriesLabelStyle":
        self._background = None if color is None else to_rgba(color)  # type: ignore[arg-type]
        return self

    def label_font(self, font: TextStyle) -> "SeriesLabelStyle":
        self._label_font = font
        return self

    def _layout(self) -> LegendLayout | None:
        entries = tuple(anno for anno in self._chart.series_anno if anno.label_text)
        if not entries:
            return None
        area = self._chart.plotting_area()
        font_px = self._label_font.size_px
        text_sizes = tuple(area.estimate_text_size(anno.label_text or "", self._label_font) for anno in entries)
        swatch_w = self._legend_area_size
        item_gap = int(max(3, font_px * 0.5))
        pad = int(max(5, font_px * 0.55))
        text_w = max((w for w, _ in text_sizes), default=0)
        item_h = max(int(round(font_px)), max((h for _, h in text_sizes), default=0))
        box_w = pad * 2 + swatch_w + 6 + text_w
        box_h = pad * 2 + len(entries) * item_h + (len(entries) - 1) * item_gap
        return LegendLayout(
            entries=entries,
            text_sizes=text_sizes,
            swatch_w=swatch_w,
            item_gap=item_gap,
            pad=pad,
            item_h=item_h,
            box_w=box_w,
            box_h=box_h,
        )

    def _origin(self, layout: LegendLayout, area_w: int, area_h: int) -> tuple[int, int]:
        if isinstance(self._position, tuple):
            return (int(self._position[0]), int(self._position[1]))
        vertical, horizontal = self._position.split("_")
        m = self._margin
        x = {"left": m, "middle": (area_w - layout.box_w) // 2, "right": area_w - layout.box_w - m}[horizontal]
        y = {"upper": m, "middle": (area_h - layout.box_h) // 2, "lower": area_h - layout.box_h - m}[vertical]
        return (x, y)

    def bounds(self) -> tuple[int, int, int, int] | None:
        """Legend box as ``(x, y, w, h)`` relative to the plotting area, or None without labels."""
        layout = self._layout()
        if layout is None:
            return None
        w, h = self._chart.plotting_area().dim_in_pixel()
        x, y = self._origin(layout, w, h)
        return (x, y, layout.box_w, layout.box_h)

    def draw(self) -> None:
        layout = self._layout()
        if layout is None:
            return
        area = self._chart.plotting_area().strip_coord_spec()
        area_w, area_h = area.dim_in_pixel()
        x, y = self._origin(layout, area_w, area_h)
        corners = ((x, y), (x + layout.box_w - 1, y + layout.box_h - 1))
        if self._background is not None:
            area.draw(Rectangle(corners, ShapeStyle(color=self._background, filled=True)))
        if self._border_style is not None:
            area.draw(Rectangle(corners, self._border_style))

        for i, anno in enumerate(layout.entries):
            row_y = y + layout.pad + i * (layout.item_h + layout.item_gap) + layout.item_h // 2
            sw_x0 = x + layout.pad
            area.draw(self._glyph(anno, (sw_x0, row_y), layout.swatch_w))
            _, text_h = layout.text_sizes[i]
            area.draw_text(
                anno.label_text or "",
                self._label_font,
                (sw_x0 + layout.swatch_w + 6, row_y - text_h // 2),
            )

    @staticmethod
    def _glyph(anno: SeriesAnno, anchor: tuple[int, int], swatch_w: int) -> Any:
        if anno.draw_func is not None:
            return anno.draw_func(anchor)
        color = anno.color if anno.color is not None else BLACK
        x, y = anchor
        return PathElement([(x, y), (x + swatch_w - 1, y)], ShapeStyle(color=color))
