from __future__ import annotations

from typing import Any, Sequence

from tipplot.backend import BackendCoord
from tipplot.element.base import Drawable
from tipplot.style import ShapeStyle, TextStyle, as_shape_style, to_rgba


class EmptyElement(Drawable):
    """Invisible anchor: one point, nothing drawn."""

    def __init__(self, pos: Any) -> None:
        self.pos = pos

    def points(self) -> list[Any]:
        return [self.pos]

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        return None


class Pixel(Drawable):
    def __init__(self, pos: Any, color: tuple[int, ...]) -> None:
        self.pos = pos
        self.color = to_rgba(color)  # type: ignore[arg-type]

    def points(self) -> list[Any]:
        return [self.pos]

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        for point in points:
            backend.draw_pixel(point, self.color)


class Circle(Drawable):
    def __init__(self, center: Any, size: int, style: ShapeStyle | tuple[int, ...]) -> None:
        if size < 0:
            raise ValueError("circle size must be >= 0")
        self.center = center
        self.size = int(size)
        self.style = as_shape_style(style)

    def points(self) -> list[Any]:
        return [self.center]

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        for point in points:
            backend.draw_circle(point, self.size, self.style, self.style.filled)


class Cross(Drawable):
    def __init__(self, center: Any, size: int, style: ShapeStyle | tuple[int, ...]) -> None:
        if size < 0:
            raise ValueError("cross size must be >= 0")
        self.center = center
        self.size = int(size)
        self.style = as_shape_style(style)

    def points(self) -> list[Any]:
        return [self.center]

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        s = self.size
        for x, y in points:
            backend.draw_line((x - s, y - s), (x + s, y + s), self.style)
            backend.draw_line((x - s, y + s), (x + s, y - s), self.style)


class TriangleMarker(Drawable):
    def __init__(self, center: Any, size: int, style: ShapeStyle | tuple[int, ...]) -> None:
        if size < 0:
            raise ValueError("triangle size must be >= 0")
        self.center = center
        self.size = int(size)
        self.style = as_shape_style(style)

    def points(self) -> list[Any]:
        return [self.center]

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        s = self.size
        for x, y in points:
            corners = [(x, y - s), (x - s, y + s), (x + s, y + s)]
            if self.style.filled:
                backend.fill_polygon(corners, self.style)
            else:
                backend.draw_path(corners + [corners[0]], self.style)


class Rectangle(Drawable):
    def __init__(self, corners: tuple[Any, Any], style: ShapeStyle | tuple[int, ...]) -> None:
        self.corners = corners
        self.style = as_shape_style(style)

    def points(self) -> list[Any]:
        return list(self.corners)

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        if len(points) != 2:
            return
        backend.draw_rect(points[0], points[1], self.style, self.style.filled)


class PathElement(Drawable):
    def __init__(self, points: Sequence[Any], style: ShapeStyle | tuple[int, ...]) -> None:
        self._points = list(points)
        self.style = as_shape_style(style)

    def points(self) -> list[Any]:
        return list(self._points)

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        if points:
            backend.draw_path(list(points), self.style)


class Polygon(Drawable):
    def __init__(self, points: Sequence[Any], style: ShapeStyle | tuple[int, ...]) -> None:
        self._points = list(points)
        self.style = as_shape_style(style)

    def points(self) -> list[Any]:
        return list(self._points)

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        if len(points) >= 3:
            backend.fill_polygon(list(points), self.style)


class Text(Drawable):
    def __init__(self, text: str, pos: Any, style: TextStyle) -> None:
        self.text = text
        self.pos = pos
        self.style = style

    def points(self) -> list[Any]:
        return [self.pos]

    def draw(self, points: Sequence[BackendCoord], backend: Any, parent_dim: tuple[int, int]) -> None:
        for point in points:
            backend.draw_text(self.text, self.style, point)
