from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from tipplot.element import PathElement
from tipplot.style import BLACK, ShapeStyle, TextStyle, as_shape_style

if TYPE_CHECKING:
    from tipplot.chart.context import ChartContext
    from tipplot.drawing.area import DrawingArea


DEFAULT_KEY_POINTS = 10
DEFAULT_TICK_MARK_LEN = 5
DEFAULT_LIGHT_LINE_COLOR = (0, 0, 0, 40)

Formatter = Callable[[Any], str]


class MeshStyle:
    """Grid lines at the axis key points plus tick labels in the chart's label areas.

    The secondary variant (``secondary=True``) labels the right/top label areas
    and draws no grid lines by default.
    """

    def __init__(self, chart: "ChartContext", *, secondary: bool = False) -> None:
        self._chart = chart
        self._secondary = secondary
        self._n_x_labels = DEFAULT_KEY_POINTS
        self._n_y_labels = DEFAULT_KEY_POINTS
        self._draw_x_mesh = not secondary
        self._draw_y_mesh = not secondary
        self._x_desc: str | None = None
        self._y_desc: str | None = None
        self._axis_style = ShapeStyle(color=BLACK)
        self._light_line_style = ShapeStyle(color=DEFAULT_LIGHT_LINE_COLOR)
        self._label_style = TextStyle()
        self._x_formatter: Formatter | None = None
        self._y_formatter: Formatter | None = None

    def x_labels(self, count: int) -> "MeshStyle":
        if count < 0:
            raise ValueError("x label count must be >= 0")
        self._n_x_labels = int(count)
        return self

    def y_labels(self, count: int) -> "MeshStyle":
        if count < 0:
            raise ValueError("y label count must be >= 0")
        self._n_y_labels = int(count)
        return self

    def x_desc(self, text: str) -> "MeshStyle":
        self._x_desc = text
        return self

    def y_desc(self, text: str) -> "MeshStyle":
        self._y_desc = text
        return self

    def disable_mesh(self) -> "MeshStyle":
        self._draw_x_mesh = False
        self._draw_y_mesh = False
        return self

    def disable_x_mesh(self) -> "MeshStyle":
        self._draw_x_mesh = False
        return self

    def disable_y_mesh(self) -> "MeshStyle":
        self._draw_y_mesh = False
        return self

    def axis_style(self, style: ShapeStyle | tuple[int, ...]) -> "MeshStyle":
        self._axis_style = as_shape_style(style)
        return self

    def light_line_style(self, style: ShapeStyle | tuple[int, ...]) -> "MeshStyle":
        self._light_line_style = as_shape_style(style)
        return self

    def label_style(self, style: TextStyle) -> "MeshStyle":
        self._label_style = style
        return self

    def x_label_formatter(self, fmt: Formatter) -> "MeshStyle":
        self._x_formatter = fmt
        return self

    def y_label_formatter(self, fmt: Formatter) -> "MeshStyle":
        self._y_formatter = fmt
        return self

    def _label_areas(self) -> tuple["DrawingArea | None", "DrawingArea | None"]:
        chart = self._chart
        return chart.x_label_area, chart.y_label_area

    def tick_positions(self) -> tuple[list[tuple[Any, int]], list[tuple[Any, int]]]:
        """Key points with their absolute pixel offset along each axis."""
        coord = self._chart.as_coord_spec()
        xs = [(v, coord.x_spec.map(v, coord.back_x)) for v in coord.x_spec.key_points(self._n_x_labels)]
        ys = [(v, coord.y_spec.map(v, coord.back_y)) for v in coord.y_spec.key_points(self._n_y_labels)]
        return xs, ys

    def draw(self) -> None:
        plot = self._chart.plotting_area()
        coord = plot.as_coord_spec()
        grid = plot.strip_coord_spec()
        x0, y0 = plot.get_base_pixel()
        w, h = plot.dim_in_pixel()
        x_ticks, y_ticks = self.tick_positions()

        if self._draw_x_mesh:
            for _, px in x_ticks:
                grid.draw(PathElement([(px - x0, 0), (px - x0, h - 1)], self._light_line_style))
        if self._draw_y_mesh:
            for _, py in y_ticks:
                grid.draw(PathElement([(0, py - y0), (w - 1, py - y0)], self._light_line_style))

        x_area, y_area = self._label_areas()
        x_fmt = self._x_formatter or coord.x_spec.format_ext
        y_fmt = self._y_formatter or coord.y_spec.format_ext
        if x_area is not None and not x_area.rect.is_empty():
            self._draw_x_axis(x_area, x_ticks, x_fmt)
        if y_area is not None and not y_area.rect.is_empty():
            self._draw_y_axis(y_area, y_ticks, y_fmt)

    def _draw_x_axis(self, area: "DrawingArea", ticks: list[tuple[Any, int]], fmt: Formatter) -> None:
        ax0, _ = area.get_base_pixel()
        aw, ah = area.dim_in_pixel()
        on_top = self._secondary
        edge = ah - 1 if on_top else 0
        direction = -1 if on_top else 1
        area.draw(PathElement([(0, edge), (aw - 1, edge)], self._axis_style))
        for value, px in ticks:
            rx = px - ax0
            area.draw(PathElement([(rx, edge), (rx, edge + direction * DEFAULT_TICK_MARK_LEN)], self._axis_style))
            label = fmt(value)
            tw, th = area.estimate_text_size(label, self._label_style)
            ty = edge + direction * (DEFAULT_TICK_MARK_LEN + 2)
            if on_top:
                ty -= th
            area.draw_text(label, self._label_style, (rx - tw // 2, ty))
        if self._x_desc:
            dw, dh = area.estimate_text_size(self._x_desc, self._label_style)
            dy = ah - dh - 1 if not on_top else 0
            area.draw_text(self._x_desc, self._label_style, ((aw - dw) // 2, max(0, dy)))

    def _draw_y_axis(self, area: "DrawingArea", ticks: list[tuple[Any, int]], fmt: Formatter) -> None:
        _, ay0 = area.get_base_pixel()
        aw, ah = area.dim_in_pixel()
        on_right = self._secondary
        edge = 0 if on_right else aw - 1
        direction = 1 if on_right else -1
        area.draw(PathElement([(edge, 0), (edge, ah - 1)], self._axis_style))
        for value, py in ticks:
            ry = py - ay0
            area.draw(PathElement([(edge, ry), (edge + direction * DEFAULT_TICK_MARK_LEN, ry)], self._axis_style))
            label = fmt(value)
            tw, th = area.estimate_text_size(label, self._label_style)
            if on_right:
                tx = edge + DEFAULT_TICK_MARK_LEN + 2
            else:
                tx = edge - DEFAULT_TICK_MARK_LEN - 2 - tw
            area.draw_text(label, self._label_style, (tx, ry - th // 2))
        if self._y_desc:
            style = TextStyle(
                font_family=self._label_style.font_family,
                size_px=self._label_style.size_px,
                color=self._label_style.color,
                rotate_deg=270 if on_right else 90,
            )
            dw, dh = area.estimate_text_size(self._y_desc, style)
            dx = aw - dw - 1 if on_right else 0
            area.draw_text(self._y_desc, style, (max(0, dx), (ah - dh) // 2))


class SecondaryMeshStyle(MeshStyle):
    """Axis labels for the secondary coordinate of a dual chart; no grid lines by default."""

    def __init__(self, chart: "ChartContext") -> None:
        super().__init__(chart, secondary=True)
