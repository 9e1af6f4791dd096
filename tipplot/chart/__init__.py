from tipplot.chart.builder import ChartBuilder
from tipplot.chart.context import ChartContext
from tipplot.chart.dual import DualCoordChartContext
from tipplot.chart.mesh import MeshStyle, SecondaryMeshStyle
from tipplot.chart.series_anno import SeriesAnno, SeriesLabelPosition, SeriesLabelStyle

__all__ = [
    "ChartBuilder",
    "ChartContext",
    "DualCoordChartContext",
    "MeshStyle",
    "SecondaryMeshStyle",
    "SeriesAnno",
    "SeriesLabelPosition",
    "SeriesLabelStyle",
]
