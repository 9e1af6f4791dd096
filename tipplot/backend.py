from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence, TypeAlias

from tipplot.style import RGBA, ShapeStyle, TextStyle


BackendCoord: TypeAlias = tuple[int, int]


class DrawingBackendError(Exception):
    """Raised by backends for I/O, encoding or drawing failures."""


@dataclass(frozen=True)
class Discrete:
    """Per-vertex interpolation: one ``(pixel_offset, label)`` entry per vertex, in draw order."""

    points: tuple[tuple[int, str], ...]


Interpolation: TypeAlias = Discrete


@dataclass(frozen=True)
class DataSeries:
    id: int
    color: RGBA
    label: str


@dataclass(frozen=True)
class DataPoint:
    coord: BackendCoord
    x_label: str
    y_label: str
    series_id: int


@dataclass(frozen=True)
class DataLine:
    x_interpolation: Interpolation
    y_interpolation: Interpolation
    series_id: int


ElementContext: TypeAlias = DataSeries | DataPoint | DataLine


def context_to_dict(ctx: ElementContext) -> dict[str, Any]:
    if isinstance(ctx, DataSeries):
        return {"kind": "series", "id": ctx.id, "color": list(ctx.color), "label": ctx.label}
    if isinstance(ctx, DataPoint):
        return {
            "kind": "point",
            "coord": list(ctx.coord),
            "x_label": ctx.x_label,
            "y_label": ctx.y_label,
            "series_id": ctx.series_id,
        }
    if isinstance(ctx, DataLine):
        return {
            "kind": "line",
            "x": [[offset, label] for offset, label in ctx.x_interpolation.points],
            "y": [[offset, label] for offset, label in ctx.y_interpolation.points],
            "series_id": ctx.series_id,
        }
    raise TypeError(f"unsupported element context: {type(ctx)!r}")


class DrawingBackend(ABC):
    """Pixel sink consumed by drawing areas.

    Coordinates are absolute backend pixels. Implementations raise
    ``DrawingBackendError`` on failure. ``begin_context``/``end_context`` are
    notifications that non-interactive backends may ignore.
    """

    @abstractmethod
    def get_size(self) -> tuple[int, int]:
        ...

    def ensure_prepared(self) -> None:
        return None

    @abstractmethod
    def present(self) -> None:
        ...

    @abstractmethod
    def draw_pixel(self, point: BackendCoord, color: RGBA) -> None:
        ...

    def draw_line(self, start: BackendCoord, end: BackendCoord, style: ShapeStyle) -> None:
        self.draw_path([start, end], style)

    @abstractmethod
    def draw_rect(
        self,
        upper_left: BackendCoord,
        bottom_right: BackendCoord,
        style: ShapeStyle,
        fill: bool,
    ) -> None:
        ...

    @abstractmethod
    def draw_path(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        ...

    @abstractmethod
    def draw_circle(self, center: BackendCoord, radius: int, style: ShapeStyle, fill: bool) -> None:
        ...

    def fill_polygon(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        if len(points) < 2:
            return
        self.draw_path(list(points) + [points[0]], style)

    @abstractmethod
    def draw_text(self, text: str, style: TextStyle, pos: BackendCoord) -> None:
        ...

    def estimate_text_size(self, text: str, style: TextStyle) -> tuple[int, int]:
        # Rough monospace estimate for backends without font metrics.
        size = max(1, int(round(style.size_px)))
        w, h = (int(len(text) * size * 0.6), size)
        if (style.rotate_deg // 90) % 2 == 1:
            return (h, w)
        return (w, h)

    def begin_context(self, ctx: ElementContext) -> None:
        return None

    def end_context(self) -> None:
        return None
