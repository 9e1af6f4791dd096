from __future__ import annotations

from typing import Any, Iterable

from tipplot.backend import BackendCoord
from tipplot.chart.context import ChartContext
from tipplot.chart.mesh import MeshStyle, SecondaryMeshStyle
from tipplot.chart.series_anno import SeriesAnno, SeriesLabelStyle
from tipplot.coord.cartesian import Cartesian2d
from tipplot.element import Drawable
from tipplot.style import ShapeStyle


class DualCoordChartContext:
    """Primary and secondary charts over one plotting rectangle.

    Both charts share the legend list and the series id allocator; each keeps
    its own coordinate spec, so drawing through one never changes the other's
    mapping. Calls are routed to the chart the caller names.
    """

    def __init__(self, primary: ChartContext, secondary_coord: Cartesian2d[Any, Any]) -> None:
        self.primary = primary
        self.secondary = ChartContext(
            primary.drawing_area.apply_coord_spec(secondary_coord),
            x_label_area=primary.top_label_area,
            y_label_area=primary.right_label_area,
            series_anno=primary.series_anno,
            series_ids=primary._series_ids,
        )

    def draw_series(self, series: Iterable[Drawable]) -> SeriesAnno:
        return self.primary.draw_series(series)

    def draw_series_with_tooltips(
        self,
        series: Iterable[Drawable],
        series_color: ShapeStyle | tuple[int, ...],
        series_label: str,
    ) -> SeriesAnno:
        return self.primary.draw_series_with_tooltips(series, series_color, series_label)

    def draw_secondary_series(self, series: Iterable[Drawable]) -> SeriesAnno:
        return self.secondary.draw_series(series)

    def draw_secondary_series_with_tooltips(
        self,
        series: Iterable[Drawable],
        series_color: ShapeStyle | tuple[int, ...],
        series_label: str,
    ) -> SeriesAnno:
        return self.secondary.draw_series_with_tooltips(series, series_color, series_label)

    def backend_coord(self, coord: tuple[Any, Any]) -> BackendCoord:
        return self.primary.backend_coord(coord)

    def secondary_backend_coord(self, coord: tuple[Any, Any]) -> BackendCoord:
        return self.secondary.backend_coord(coord)

    def configure_mesh(self) -> MeshStyle:
        return self.primary.configure_mesh()

    def configure_secondary_axes(self) -> SecondaryMeshStyle:
        return SecondaryMeshStyle(self.secondary)

    def configure_series_labels(self) -> SeriesLabelStyle:
        return self.primary.configure_series_labels()
