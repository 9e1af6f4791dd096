from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
import logging
from typing import Any, Callable, Iterator, Sequence, TypeVar

from tipplot.backend import BackendCoord, DrawingBackend, DrawingBackendError, ElementContext
from tipplot.coord.cartesian import Cartesian2d, Shift
from tipplot.errors import BackendError, CoordSpecError, LayoutError, UnbalancedContextError
from tipplot.raster.draw_markers import circle_outline, circle_spans
from tipplot.style import RGBA, ShapeStyle, TextStyle, to_rgba


LOGGER = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass(frozen=True)
class Rect:
    """Absolute backend pixel rectangle; ``x1``/``y1`` are exclusive."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return max(0, self.x1 - self.x0)

    @property
    def height(self) -> int:
        return max(0, self.y1 - self.y0)

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, point: BackendCoord) -> bool:
        x, y = point
        return self.x0 <= x < self.x1 and self.y0 <= y < self.y1

    def truncate(self, point: BackendCoord) -> BackendCoord:
        x = max(self.x0, min(self.x1 - 1, int(point[0])))
        y = max(self.y0, min(self.y1 - 1, int(point[1])))
        return (x, y)

    def intersect(self, other: "Rect") -> "Rect | None":
        x0 = max(self.x0, other.x0)
        y0 = max(self.y0, other.y0)
        x1 = min(self.x1, other.x1)
        y1 = min(self.y1, other.y1)
        if x1 <= x0 or y1 <= y0:
            return None
        return Rect(x0, y0, x1, y1)

    def split_by_breakpoints(self, xs: Sequence[int], ys: Sequence[int]) -> list["Rect"]:
        """Tile the rectangle at absolute breakpoints; result is row-major."""
        x_edges = [self.x0] + sorted(max(self.x0, min(self.x1, int(x))) for x in xs) + [self.x1]
        y_edges = [self.y0] + sorted(max(self.y0, min(self.y1, int(y))) for y in ys) + [self.y1]
        out: list[Rect] = []
        for top, bottom in zip(y_edges, y_edges[1:]):
            for left, right in zip(x_edges, x_edges[1:]):
                out.append(Rect(left, top, right, bottom))
        return out

    def split_evenly(self, rows: int, cols: int) -> list["Rect"]:
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be > 0")
        xs = [self.x0 + self.width * i // cols for i in range(1, cols)]
        ys = [self.y0 + self.height * i // rows for i in range(1, rows)]
        return self.split_by_breakpoints(xs, ys)


def _clip_segment(p0: BackendCoord, p1: BackendCoord, rect: Rect) -> tuple[BackendCoord, BackendCoord] | None:
    # Liang-Barsky against the inclusive pixel bounds of ``rect``.
    x0, y0 = float(p0[0]), float(p0[1])
    dx = float(p1[0]) - x0
    dy = float(p1[1]) - y0
    t0, t1 = 0.0, 1.0
    for p, q in (
        (-dx, x0 - rect.x0),
        (dx, (rect.x1 - 1) - x0),
        (-dy, y0 - rect.y0),
        (dy, (rect.y1 - 1) - y0),
    ):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            if r > t1:
                return None
            t0 = max(t0, r)
        else:
            if r < t0:
                return None
            t1 = min(t1, r)
    start = (int(round(x0 + t0 * dx)), int(round(y0 + t0 * dy)))
    end = (int(round(x0 + t1 * dx)), int(round(y0 + t1 * dy)))
    return start, end


def _clip_polygon(points: Sequence[BackendCoord], rect: Rect) -> list[tuple[float, float]]:
    # Sutherland-Hodgman against the continuous extent of ``rect``; pixel
    # centres sit at half offsets, so this keeps exactly the covered pixels.
    out: list[tuple[float, float]] = [(float(x), float(y)) for x, y in points]
    for axis, bound, keep_below in (
        (0, float(rect.x0), False),
        (0, float(rect.x1), True),
        (1, float(rect.y0), False),
        (1, float(rect.y1), True),
    ):
        if not out:
            break
        inside = (lambda p: p[axis] <= bound) if keep_below else (lambda p: p[axis] >= bound)
        src, out = out, []
        for cur, prev in zip(src, [src[-1]] + src[:-1]):
            if inside(cur) != inside(prev):
                t = (bound - prev[axis]) / (cur[axis] - prev[axis])
                cross = (prev[0] + t * (cur[0] - prev[0]), prev[1] + t * (cur[1] - prev[1]))
                out.append(cross)
            if inside(cur):
                out.append(cur)
    return out


class _SharedBackend:
    """Backend sink plus the semantic context stack, shared by every area of one tree."""

    def __init__(self, backend: DrawingBackend) -> None:
        self.backend = backend
        self.contexts: list[ElementContext] = []

    def call(self, fn: Callable[..., R], *args: Any) -> R:
        try:
            return fn(*args)
        except DrawingBackendError as exc:
            raise BackendError(exc) from exc


class _ClipView:
    """Primitive drawing API restricted to one area's rectangle."""

    def __init__(self, backend: DrawingBackend, rect: Rect) -> None:
        self._backend = backend
        self._rect = rect

    def draw_pixel(self, point: BackendCoord, color: RGBA) -> None:
        if self._rect.contains(point):
            self._backend.draw_pixel(point, color)

    def draw_line(self, start: BackendCoord, end: BackendCoord, style: ShapeStyle) -> None:
        clipped = _clip_segment(start, end, self._rect)
        if clipped is not None:
            self._backend.draw_line(clipped[0], clipped[1], style)

    def draw_path(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        if len(points) == 1:
            self.draw_pixel(points[0], style.color)
            return
        run: list[BackendCoord] = []
        for a, b in zip(points, points[1:]):
            clipped = _clip_segment(a, b, self._rect)
            if clipped is None:
                self._flush_run(run, style)
                run = []
                continue
            start, end = clipped
            if run and run[-1] != start:
                self._flush_run(run, style)
                run = []
            if not run:
                run.append(start)
            run.append(end)
        self._flush_run(run, style)

    def _flush_run(self, run: list[BackendCoord], style: ShapeStyle) -> None:
        if len(run) >= 2:
            self._backend.draw_path(run, style)

    def draw_rect(self, upper_left: BackendCoord, bottom_right: BackendCoord, style: ShapeStyle, fill: bool) -> None:
        x0, x1 = sorted((int(upper_left[0]), int(bottom_right[0])))
        y0, y1 = sorted((int(upper_left[1]), int(bottom_right[1])))
        visible = Rect(x0, y0, x1 + 1, y1 + 1).intersect(self._rect)
        if visible is not None:
            self._backend.draw_rect((visible.x0, visible.y0), (visible.x1 - 1, visible.y1 - 1), style, fill)

    def draw_circle(self, center: BackendCoord, radius: int, style: ShapeStyle, fill: bool) -> None:
        cx, cy, radius = int(center[0]), int(center[1]), int(radius)
        if radius <= 0:
            self.draw_pixel((cx, cy), style.color)
            return
        bbox = Rect(cx - radius, cy - radius, cx + radius + 1, cy + radius + 1)
        visible = bbox.intersect(self._rect)
        if visible is None:
            return
        if visible == bbox:
            self._backend.draw_circle(center, radius, style, fill)
        elif fill:
            # Partially visible: emit the rows that survive the clip.
            for x0, x1, y in circle_spans(cx, cy, radius):
                self.draw_rect((x0, y), (x1, y), style, True)
        else:
            for point in circle_outline(cx, cy, radius):
                self.draw_pixel(point, style.color)

    def fill_polygon(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        if not points:
            return
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        bbox = Rect(int(min(xs)), int(min(ys)), int(max(xs)) + 1, int(max(ys)) + 1)
        visible = bbox.intersect(self._rect)
        if visible is None:
            return
        if visible == bbox:
            self._backend.fill_polygon(points, style)
            return
        clipped = _clip_polygon(points, self._rect)
        if len(clipped) >= 3:
            self._backend.fill_polygon(clipped, style)

    def draw_text(self, text: str, style: TextStyle, pos: BackendCoord) -> None:
        self._backend.draw_text(text, style, pos)

    def estimate_text_size(self, text: str, style: TextStyle) -> tuple[int, int]:
        return self._backend.estimate_text_size(text, style)


class DrawingArea:
    """A node in the tree of nested pixel regions sharing one backend.

    Children created by ``margin``/``split_*``/``shrink`` always lie inside the
    parent. Every area maps guest coordinates through its coordinate spec
    (``Shift`` for plain areas, ``Cartesian2d`` for chart plotting areas).
    """

    def __init__(self, shared: _SharedBackend, rect: Rect, coord: Any = None) -> None:
        self._shared = shared
        self.rect = rect
        self.coord = coord if coord is not None else Shift((rect.x0, rect.y0))

    @classmethod
    def from_backend(cls, backend: DrawingBackend) -> "DrawingArea":
        width, height = backend.get_size()
        if width <= 0 or height <= 0:
            raise LayoutError(f"backend size must be > 0, got {width}x{height}")
        shared = _SharedBackend(backend)
        shared.call(backend.ensure_prepared)
        return cls(shared, Rect(0, 0, int(width), int(height)))

    def __repr__(self) -> str:
        return f"DrawingArea(rect={self.rect!r}, coord={self.coord!r})"

    @property
    def backend(self) -> DrawingBackend:
        return self._shared.backend

    def dim_in_pixel(self) -> tuple[int, int]:
        return (self.rect.width, self.rect.height)

    def get_base_pixel(self) -> BackendCoord:
        return (self.rect.x0, self.rect.y0)

    def get_pixel_range(self) -> tuple[tuple[int, int], tuple[int, int]]:
        return ((self.rect.x0, self.rect.x1), (self.rect.y0, self.rect.y1))

    def as_coord_spec(self) -> Any:
        return self.coord

    def map_coordinate(self, coord: Any) -> BackendCoord:
        return self.coord.translate(coord)

    def _cartesian(self) -> Cartesian2d[Any, Any]:
        if not isinstance(self.coord, Cartesian2d):
            raise CoordSpecError(f"drawing area has no cartesian coordinate spec: {self.coord!r}")
        return self.coord

    def get_x_range(self) -> tuple[Any, Any]:
        return self._cartesian().get_x_range()

    def get_y_range(self) -> tuple[Any, Any]:
        return self._cartesian().get_y_range()

    # -- tree -------------------------------------------------------------

    def _child(self, rect: Rect, coord: Any = None) -> "DrawingArea":
        return DrawingArea(self._shared, rect, coord)

    def apply_coord_spec(self, coord: Any) -> "DrawingArea":
        return self._child(self.rect, coord)

    def strip_coord_spec(self) -> "DrawingArea":
        return self._child(self.rect)

    def margin(self, top: int, bottom: int, left: int, right: int) -> "DrawingArea":
        r = self.rect
        x0 = min(r.x1, r.x0 + max(0, int(left)))
        y0 = min(r.y1, r.y0 + max(0, int(top)))
        x1 = max(x0, r.x1 - max(0, int(right)))
        y1 = max(y0, r.y1 - max(0, int(bottom)))
        return self._child(Rect(x0, y0, x1, y1))

    def shrink(self, offset: tuple[int, int], size: tuple[int, int]) -> "DrawingArea":
        r = self.rect
        x0 = max(r.x0, min(r.x1, r.x0 + int(offset[0])))
        y0 = max(r.y0, min(r.y1, r.y0 + int(offset[1])))
        x1 = max(x0, min(r.x1, x0 + int(size[0])))
        y1 = max(y0, min(r.y1, y0 + int(size[1])))
        return self._child(Rect(x0, y0, x1, y1))

    def split_by_breakpoints(self, xs: Sequence[int], ys: Sequence[int]) -> list["DrawingArea"]:
        """Split at breakpoints relative to this area; children are row-major."""
        r = self.rect
        rects = r.split_by_breakpoints([r.x0 + int(x) for x in xs], [r.y0 + int(y) for y in ys])
        LOGGER.debug("split %r into %d areas", r, len(rects))
        return [self._child(rect) for rect in rects]

    def split_evenly(self, grid: tuple[int, int]) -> list["DrawingArea"]:
        rows, cols = grid
        return [self._child(rect) for rect in self.rect.split_evenly(rows, cols)]

    def split_vertically(self, y: int) -> tuple["DrawingArea", "DrawingArea"]:
        upper, lower = self.split_by_breakpoints([], [y])
        return upper, lower

    def split_horizontally(self, x: int) -> tuple["DrawingArea", "DrawingArea"]:
        left, right = self.split_by_breakpoints([x], [])
        return left, right

    def titled(self, title: str, style: TextStyle) -> "DrawingArea":
        """Draw ``title`` centred at the top and return the area below it."""
        text_w, text_h = self.estimate_text_size(title, style)
        pad = max(2, text_h // 4)
        self.draw_text(title, style, ((self.rect.width - text_w) // 2, pad))
        _, body = self.split_vertically(text_h + 2 * pad)
        return body

    # -- drawing ----------------------------------------------------------

    def fill(self, color: tuple[int, ...]) -> None:
        rgba = to_rgba(color)  # type: ignore[arg-type]
        if self.rect.is_empty():
            return
        r = self.rect
        self._shared.call(
            self.backend.draw_rect,
            (r.x0, r.y0),
            (r.x1 - 1, r.y1 - 1),
            ShapeStyle(color=rgba, filled=True),
            True,
        )

    def draw_pixel(self, coord: Any, color: tuple[int, ...]) -> None:
        point = self.map_coordinate(coord)
        view = _ClipView(self.backend, self.rect)
        self._shared.call(view.draw_pixel, point, to_rgba(color))  # type: ignore[arg-type]

    def draw(self, element: Any) -> None:
        """Map the element's guest points and let it render into this area."""
        mapped = [self.map_coordinate(p) for p in element.points()]
        view = _ClipView(self.backend, self.rect)
        self._shared.call(element.draw, mapped, view, self.dim_in_pixel())

    def draw_text(self, text: str, style: TextStyle, pos: tuple[int, int]) -> None:
        """Draw text at ``pos`` relative to this area's upper-left pixel."""
        absolute = (self.rect.x0 + int(pos[0]), self.rect.y0 + int(pos[1]))
        self._shared.call(self.backend.draw_text, text, style, absolute)

    def estimate_text_size(self, text: str, style: TextStyle) -> tuple[int, int]:
        return self._shared.call(self.backend.estimate_text_size, text, style)

    def present(self) -> None:
        LOGGER.debug("presenting drawing area %r", self.rect)
        try:
            self._shared.call(self.backend.present)
        except OSError as exc:
            raise BackendError(exc) from exc

    # -- semantic contexts ------------------------------------------------

    @property
    def context_depth(self) -> int:
        return len(self._shared.contexts)

    def open_contexts(self) -> tuple[ElementContext, ...]:
        return tuple(self._shared.contexts)

    def begin_context(self, ctx: ElementContext) -> None:
        self._shared.call(self.backend.begin_context, ctx)
        self._shared.contexts.append(ctx)

    def end_context(self) -> None:
        if not self._shared.contexts:
            raise UnbalancedContextError("end_context called with no open context")
        self._shared.contexts.pop()
        self._shared.call(self.backend.end_context)

    @contextmanager
    def context(self, ctx: ElementContext) -> Iterator["DrawingArea"]:
        """Bracket a block of draw calls with ``ctx``; the context is closed on every exit path."""
        self.begin_context(ctx)
        try:
            yield self
        except BaseException:
            self._unwind_context()
            raise
        else:
            self.end_context()

    def _unwind_context(self) -> None:
        if not self._shared.contexts:
            return
        self._shared.contexts.pop()
        try:
            self.backend.end_context()
        except DrawingBackendError as exc:
            LOGGER.warning("backend failed to close context while unwinding: %s", exc)


def into_drawing_area(backend: DrawingBackend) -> DrawingArea:
    return DrawingArea.from_backend(backend)
