from __future__ import annotations

import numpy as np

from tipplot.style import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend(patch: np.ndarray, color: RGBA, coverage: np.ndarray | float = 1.0) -> None:
    """Composite ``color`` over an RGBA ``patch`` in place.

    ``coverage`` scales the source alpha per pixel (0..1), e.g. an
    antialiased glyph mask.
    """
    if patch.size == 0:
        return
    src_a = np.broadcast_to(np.asarray(coverage, dtype=np.float32) * (color[3] / 255.0), patch.shape[:2])
    dst_a = patch[..., 3].astype(np.float32) / 255.0
    keep = dst_a * (1.0 - src_a)
    out_a = src_a + keep
    num = np.asarray(color[:3], dtype=np.float32) * src_a[..., None] + patch[..., :3].astype(np.float32) * keep[..., None]
    out_a_safe = np.where(out_a > 1e-6, out_a, 1.0)
    patch[..., :3] = np.clip(num / out_a_safe[..., None], 0, 255).astype(np.uint8)
    patch[..., 3] = np.clip(out_a * 255.0, 0, 255).astype(np.uint8)


def _clamped_span(lo: int, hi: int, size: int) -> tuple[int, int] | None:
    a = max(0, min(lo, hi))
    b = min(size - 1, max(lo, hi))
    if a > b:
        return None
    return a, b


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if 0 <= y < dst.shape[0] and 0 <= x < dst.shape[1]:
        blend(dst[y : y + 1, x : x + 1], color)


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if not 0 <= y < dst.shape[0]:
        return
    span = _clamped_span(x0, x1, dst.shape[1])
    if span is not None:
        blend(dst[y : y + 1, span[0] : span[1] + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if not 0 <= x < dst.shape[1]:
        return
    span = _clamped_span(y0, y1, dst.shape[0])
    if span is not None:
        blend(dst[span[0] : span[1] + 1, x : x + 1], color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the inclusive rectangle ``(x0, y0)..(x1, y1)``."""
    xs = _clamped_span(x0, x1, dst.shape[1])
    ys = _clamped_span(y0, y1, dst.shape[0])
    if xs is None or ys is None:
        return
    blend(dst[ys[0] : ys[1] + 1, xs[0] : xs[1] + 1], color)


def draw_rect_outline(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    top, bottom = min(y0, y1), max(y0, y1)
    draw_hline(dst, x0, x1, top, color)
    if bottom != top:
        draw_hline(dst, x0, x1, bottom, color)
    if bottom - top > 1:
        draw_vline(dst, x0, top + 1, bottom - 1, color)
        if x1 != x0:
            draw_vline(dst, x1, top + 1, bottom - 1, color)
