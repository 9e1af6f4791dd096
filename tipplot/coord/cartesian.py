from __future__ import annotations

from typing import Any, Generic, TypeVar

from tipplot.coord.ranged import PixelRange, Ranged, as_ranged_coord


X = TypeVar("X")
Y = TypeVar("Y")

BackendCoord = tuple[int, int]


class Shift:
    """Coordinate spec of a plain drawing area: relative pixels offset by the area's base pixel."""

    def __init__(self, base: BackendCoord) -> None:
        self.base = (int(base[0]), int(base[1]))

    def __repr__(self) -> str:
        return f"Shift({self.base!r})"

    def translate(self, coord: tuple[int, int]) -> BackendCoord:
        return (int(coord[0]) + self.base[0], int(coord[1]) + self.base[1])

    def reverse_translate(self, coord: BackendCoord) -> tuple[int, int] | None:
        return (coord[0] - self.base[0], coord[1] - self.base[1])


class Cartesian2d(Generic[X, Y]):
    """Two independent axis specs mapped onto one pixel rectangle.

    ``pixel_range`` is ``((x0, x1), (y0, y1))`` in backend pixels with exclusive
    ends. The Y extent is stored top-down reversed here so that increasing data
    values move up the screen; ``translate`` never flips again.
    """

    def __init__(self, x_spec: Any, y_spec: Any, pixel_range: tuple[PixelRange, PixelRange]) -> None:
        (x0, x1), (y0, y1) = pixel_range
        self.logic_x: Ranged[X] = as_ranged_coord(x_spec)
        self.logic_y: Ranged[Y] = as_ranged_coord(y_spec)
        self.back_x: PixelRange = (int(x0), int(x1) - 1)
        self.back_y: PixelRange = (int(y1) - 1, int(y0))

    def __repr__(self) -> str:
        return f"Cartesian2d({self.logic_x!r}, {self.logic_y!r}, back_x={self.back_x}, back_y={self.back_y})"

    @property
    def x_spec(self) -> Ranged[X]:
        return self.logic_x

    @property
    def y_spec(self) -> Ranged[Y]:
        return self.logic_y

    def translate(self, coord: tuple[X, Y]) -> BackendCoord:
        return (
            self.logic_x.map(coord[0], self.back_x),
            self.logic_y.map(coord[1], self.back_y),
        )

    def reverse_translate(self, coord: BackendCoord) -> tuple[X, Y] | None:
        x = self.logic_x.unmap(coord[0], self.back_x)
        y = self.logic_y.unmap(coord[1], self.back_y)
        if x is None or y is None:
            return None
        return (x, y)

    def get_x_range(self) -> tuple[X, X]:
        return self.logic_x.range()

    def get_y_range(self) -> tuple[Y, Y]:
        return self.logic_y.range()

    def get_x_axis_pixel_range(self) -> PixelRange:
        return self.logic_x.axis_pixel_range(self.back_x)

    def get_y_axis_pixel_range(self) -> PixelRange:
        return self.logic_y.axis_pixel_range(self.back_y)
