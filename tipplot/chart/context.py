from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Sequence

from tipplot.backend import BackendCoord, DataLine, DataPoint, DataSeries, Discrete, ElementContext
from tipplot.chart.mesh import MeshStyle
from tipplot.chart.series_anno import SeriesAnno, SeriesLabelStyle
from tipplot.coord.cartesian import Cartesian2d
from tipplot.drawing.area import DrawingArea
from tipplot.element import Drawable
from tipplot.style import RGBA, ShapeStyle, to_rgba

if TYPE_CHECKING:
    from tipplot.chart.dual import DualCoordChartContext


LOGGER = logging.getLogger(__name__)

MappedPoint = tuple[BackendCoord, str, str]


def _element_context(mapped: Sequence[MappedPoint], series_id: int) -> ElementContext | None:
    if not mapped:
        return None
    if len(mapped) == 1:
        coord, x_label, y_label = mapped[0]
        return DataPoint(coord=coord, x_label=x_label, y_label=y_label, series_id=series_id)
    return DataLine(
        x_interpolation=Discrete(points=tuple((coord[0], x_label) for coord, x_label, _ in mapped)),
        y_interpolation=Discrete(points=tuple((coord[1], y_label) for coord, _, y_label in mapped)),
        series_id=series_id,
    )


class ChartContext:
    """A cartesian chart bound to its plotting area and label areas."""

    def __init__(
        self,
        drawing_area: DrawingArea,
        *,
        x_label_area: DrawingArea | None = None,
        y_label_area: DrawingArea | None = None,
        top_label_area: DrawingArea | None = None,
        right_label_area: DrawingArea | None = None,
        series_anno: list[SeriesAnno] | None = None,
        series_ids: Iterator[int] | None = None,
    ) -> None:
        if not isinstance(drawing_area.as_coord_spec(), Cartesian2d):
            raise TypeError("chart drawing area must carry a Cartesian2d coordinate spec")
        self.drawing_area = drawing_area
        self.x_label_area = x_label_area
        self.y_label_area = y_label_area
        self.top_label_area = top_label_area
        self.right_label_area = right_label_area
        self.series_anno: list[SeriesAnno] = series_anno if series_anno is not None else []
        self._series_ids: Iterator[int] = series_ids if series_ids is not None else itertools.count()

    def plotting_area(self) -> DrawingArea:
        return self.drawing_area

    def as_coord_spec(self) -> Cartesian2d[Any, Any]:
        return self.drawing_area.as_coord_spec()

    def x_range(self) -> tuple[Any, Any]:
        return self.drawing_area.get_x_range()

    def y_range(self) -> tuple[Any, Any]:
        return self.drawing_area.get_y_range()

    def backend_coord(self, coord: tuple[Any, Any]) -> BackendCoord:
        """Map a guest coordinate to backend pixels, e.g. for hit-testing in interactive charts."""
        return self.drawing_area.map_coordinate(coord)

    def into_coord_trans(self) -> Callable[[BackendCoord], tuple[Any, Any] | None]:
        coord = self.as_coord_spec()
        return coord.reverse_translate

    def is_overlapping_drawing_area(self, area: DrawingArea | None) -> bool:
        if area is None:
            return False
        x0, y0 = area.get_base_pixel()
        w, h = area.dim_in_pixel()
        x1, y1 = x0 + w, y0 + h
        dx0, dy0 = self.drawing_area.get_base_pixel()
        dw, dh = self.drawing_area.dim_in_pixel()
        dx1, dy1 = dx0 + dw, dy0 + dh
        ox0, ox1 = max(x0, dx0), min(x1, dx1)
        oy0, oy1 = max(y0, dy0), min(y1, dy1)
        return ox1 > ox0 and oy1 > oy0

    def configure_mesh(self) -> MeshStyle:
        return MeshStyle(self)

    def configure_series_labels(self) -> SeriesLabelStyle:
        return SeriesLabelStyle(self)

    def alloc_series_anno(self, *, series_id: int | None = None, color: RGBA | None = None) -> SeriesAnno:
        anno = SeriesAnno(series_id=series_id, color=color)
        self.series_anno.append(anno)
        return anno

    def draw_series(self, series: Iterable[Drawable]) -> SeriesAnno:
        for element in series:
            self.drawing_area.draw(element)
        return self.alloc_series_anno()

    def draw_series_with_tooltips(
        self,
        series: Iterable[Drawable],
        series_color: ShapeStyle | tuple[int, ...],
        series_label: str,
    ) -> SeriesAnno:
        """Draw a series wrapped in semantic contexts for interactive backends.

        The whole series sits in a ``DataSeries`` context. Inside it, every
        element with exactly one point gets a ``DataPoint`` context and every
        element with two or more points gets a ``DataLine`` context whose
        discrete interpolations list each vertex's pixel offset and formatted
        label. Elements without points are drawn with no nested context.
        Coordinates and labels are computed here so backends need no
        knowledge of coordinate specs or formatting.
        """
        series_id = next(self._series_ids)
        if isinstance(series_color, ShapeStyle):
            color = series_color.color
        else:
            color = to_rgba(series_color)  # type: ignore[arg-type]

        area = self.drawing_area
        coord = self.as_coord_spec()
        x_spec = coord.x_spec
        y_spec = coord.y_spec

        with area.context(DataSeries(id=series_id, color=color, label=series_label)):
            for element in series:
                mapped = [
                    (area.map_coordinate(guest), x_spec.format_ext(guest[0]), y_spec.format_ext(guest[1]))
                    for guest in element.points()
                ]
                nested = _element_context(mapped, series_id)
                if nested is None:
                    area.draw(element)
                    continue
                with area.context(nested):
                    area.draw(element)

        LOGGER.debug("drew series %d (%s) with tooltips", series_id, series_label)
        return self.alloc_series_anno(series_id=series_id, color=color)

    def set_secondary_coord(self, x_coord: Any, y_coord: Any) -> "DualCoordChartContext":
        """Attach an independent coordinate system over the same plotting rectangle."""
        from tipplot.chart.dual import DualCoordChartContext

        secondary = Cartesian2d(x_coord, y_coord, self.drawing_area.get_pixel_range())
        return DualCoordChartContext(self, secondary)
