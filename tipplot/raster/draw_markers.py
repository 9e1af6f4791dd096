from __future__ import annotations

from typing import Iterator, Sequence

import numpy as np

from tipplot.raster.canvas import draw_hline, draw_pixel
from tipplot.style import RGBA


def circle_spans(cx: int, cy: int, radius: int) -> Iterator[tuple[int, int, int]]:
    """Yield ``(x_left, x_right, y)`` rows covering a filled circle."""
    r2 = radius * radius
    for dy in range(-radius, radius + 1):
        half = int(np.sqrt(max(0, r2 - dy * dy)))
        yield cx - half, cx + half, cy + dy


def circle_outline(cx: int, cy: int, radius: int) -> Iterator[tuple[int, int]]:
    """Midpoint circle outline, each pixel once."""
    x, y, err = radius, 0, 1 - radius
    plotted: set[tuple[int, int]] = set()
    while x >= y:
        for px, py in (
            (cx + x, cy + y), (cx + y, cy + x), (cx - y, cy + x), (cx - x, cy + y),
            (cx - x, cy - y), (cx - y, cy - x), (cx + y, cy - x), (cx + x, cy - y),
        ):
            if (px, py) not in plotted:
                plotted.add((px, py))
                yield px, py
        y += 1
        if err < 0:
            err += 2 * y + 1
        else:
            x -= 1
            err += 2 * (y - x) + 1


def draw_circle(dst: np.ndarray, cx: int, cy: int, radius: int, color: RGBA, *, filled: bool) -> None:
    if radius <= 0:
        draw_pixel(dst, cx, cy, color)
        return
    if filled:
        for x0, x1, y in circle_spans(cx, cy, radius):
            draw_hline(dst, x0, x1, y, color)
        return
    for px, py in circle_outline(cx, cy, radius):
        draw_pixel(dst, px, py, color)


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    """Even-odd scanline fill; pixel ``(x, y)`` is sampled at its centre."""
    if len(points) < 3:
        return
    ys = [p[1] for p in points]
    top = max(0, int(np.floor(min(ys))))
    bottom = min(dst.shape[0] - 1, int(np.ceil(max(ys))))
    edges = list(zip(points, list(points[1:]) + [points[0]]))
    for y in range(top, bottom + 1):
        scan = y + 0.5
        xs: list[float] = []
        for (x0, y0), (x1, y1) in edges:
            if (y0 <= scan < y1) or (y1 <= scan < y0):
                xs.append(x0 + (scan - y0) * (x1 - x0) / (y1 - y0))
        xs.sort()
        for left, right in zip(xs[0::2], xs[1::2]):
            draw_hline(dst, int(np.ceil(left - 0.5)), int(np.floor(right - 0.5)), y, color)
