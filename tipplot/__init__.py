from tipplot.backend import (
    DataLine,
    DataPoint,
    DataSeries,
    Discrete,
    DrawingBackend,
    DrawingBackendError,
    context_to_dict,
)
from tipplot.backends import RasterBackend, RecordingBackend
from tipplot.chart import ChartBuilder, ChartContext, DualCoordChartContext, SeriesAnno
from tipplot.coord import Cartesian2d, CategoryRange, IntRange, LinearRange, LogRange, format_ext
from tipplot.drawing import DrawingArea, Rect, into_drawing_area
from tipplot.errors import (
    BackendError,
    CoordSpecError,
    CoreError,
    DrawingAreaError,
    LayoutError,
    SeriesDataError,
    UnbalancedContextError,
)
from tipplot.series import LineSeries, PointSeries
from tipplot.style import ShapeStyle, TextStyle

__all__ = [
    "BackendError",
    "Cartesian2d",
    "CategoryRange",
    "ChartBuilder",
    "ChartContext",
    "CoordSpecError",
    "CoreError",
    "DataLine",
    "DataPoint",
    "DataSeries",
    "Discrete",
    "DrawingArea",
    "DrawingAreaError",
    "DrawingBackend",
    "DrawingBackendError",
    "DualCoordChartContext",
    "IntRange",
    "LayoutError",
    "LineSeries",
    "LinearRange",
    "LogRange",
    "PointSeries",
    "RasterBackend",
    "Rect",
    "RecordingBackend",
    "SeriesAnno",
    "SeriesDataError",
    "ShapeStyle",
    "TextStyle",
    "UnbalancedContextError",
    "context_to_dict",
    "format_ext",
    "into_drawing_area",
]
