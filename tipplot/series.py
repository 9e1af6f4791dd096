from __future__ import annotations

from typing import Any, Iterator, Literal

from tipplot.adapters import normalize_points
from tipplot.element import Circle, Cross, Drawable, PathElement, TriangleMarker
from tipplot.style import ShapeStyle, as_shape_style


MarkerKind = Literal["circle", "cross", "triangle"]


class LineSeries:
    """Optional filled circle per point, then one polyline through the points."""

    def __init__(
        self,
        data: Any = None,
        style: ShapeStyle | tuple[int, ...] = ShapeStyle(),
        *,
        x: Any = None,
        y: Any = None,
        frame: Any = None,
        point_size: int = 0,
    ) -> None:
        if point_size < 0:
            raise ValueError("point_size must be >= 0")
        self.data = normalize_points(data, x=x, y=y, frame=frame)
        self.style = as_shape_style(style)
        self.point_size = int(point_size)

    def with_point_size(self, size: int) -> "LineSeries":
        if size < 0:
            raise ValueError("point_size must be >= 0")
        self.point_size = int(size)
        return self

    def __iter__(self) -> Iterator[Drawable]:
        if self.point_size > 0:
            marker_style = self.style.fill()
            for point in self.data:
                yield Circle(point, self.point_size, marker_style)
        yield PathElement(self.data, self.style)


class PointSeries:
    """One marker element per point."""

    def __init__(
        self,
        data: Any = None,
        size: int = 3,
        style: ShapeStyle | tuple[int, ...] = ShapeStyle(),
        *,
        marker: MarkerKind = "circle",
        x: Any = None,
        y: Any = None,
        frame: Any = None,
    ) -> None:
        if size < 0:
            raise ValueError("marker size must be >= 0")
        if marker not in {"circle", "cross", "triangle"}:
            raise ValueError(f"unsupported marker: {marker}")
        self.data = normalize_points(data, x=x, y=y, frame=frame)
        self.size = int(size)
        self.style = as_shape_style(style)
        self.marker = marker

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Drawable]:
        for point in self.data:
            if self.marker == "cross":
                yield Cross(point, self.size, self.style)
            elif self.marker == "triangle":
                yield TriangleMarker(point, self.size, self.style)
            else:
                yield Circle(point, self.size, self.style)
