from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from tipplot.backend import BackendCoord, DrawingBackend, ElementContext, context_to_dict
from tipplot.style import RGBA, ShapeStyle, TextStyle


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackendEvent:
    """One backend call: ``kind`` is the method name, ``args`` its positional arguments."""

    kind: str
    args: tuple[Any, ...] = ()


class RecordingBackend(DrawingBackend):
    """Records every primitive and context notification in call order.

    With ``inner`` set, each call is forwarded after being recorded, so the
    recorder can sit in front of a real backend and capture the context stream
    an interactive renderer would consume.
    """

    def __init__(self, width: int, height: int, inner: DrawingBackend | None = None) -> None:
        self.width = int(width)
        self.height = int(height)
        self.inner = inner
        self.events: list[BackendEvent] = []
        self.presented = False

    def _record(self, kind: str, *args: Any) -> None:
        self.events.append(BackendEvent(kind=kind, args=args))

    def get_size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def ensure_prepared(self) -> None:
        if self.inner is not None:
            self.inner.ensure_prepared()

    def present(self) -> None:
        self._record("present")
        self.presented = True
        if self.inner is not None:
            self.inner.present()

    def draw_pixel(self, point: BackendCoord, color: RGBA) -> None:
        self._record("draw_pixel", point, color)
        if self.inner is not None:
            self.inner.draw_pixel(point, color)

    def draw_line(self, start: BackendCoord, end: BackendCoord, style: ShapeStyle) -> None:
        self._record("draw_line", start, end, style)
        if self.inner is not None:
            self.inner.draw_line(start, end, style)

    def draw_rect(self, upper_left: BackendCoord, bottom_right: BackendCoord, style: ShapeStyle, fill: bool) -> None:
        self._record("draw_rect", upper_left, bottom_right, style, fill)
        if self.inner is not None:
            self.inner.draw_rect(upper_left, bottom_right, style, fill)

    def draw_path(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        self._record("draw_path", tuple(points), style)
        if self.inner is not None:
            self.inner.draw_path(points, style)

    def draw_circle(self, center: BackendCoord, radius: int, style: ShapeStyle, fill: bool) -> None:
        self._record("draw_circle", center, radius, style, fill)
        if self.inner is not None:
            self.inner.draw_circle(center, radius, style, fill)

    def fill_polygon(self, points: Sequence[BackendCoord], style: ShapeStyle) -> None:
        self._record("fill_polygon", tuple(points), style)
        if self.inner is not None:
            self.inner.fill_polygon(points, style)

    def draw_text(self, text: str, style: TextStyle, pos: BackendCoord) -> None:
        self._record("draw_text", text, style, pos)
        if self.inner is not None:
            self.inner.draw_text(text, style, pos)

    def estimate_text_size(self, text: str, style: TextStyle) -> tuple[int, int]:
        if self.inner is not None:
            return self.inner.estimate_text_size(text, style)
        return super().estimate_text_size(text, style)

    def begin_context(self, ctx: ElementContext) -> None:
        self._record("begin_context", ctx)
        if self.inner is not None:
            self.inner.begin_context(ctx)

    def end_context(self) -> None:
        self._record("end_context")
        if self.inner is not None:
            self.inner.end_context()

    # -- inspection -------------------------------------------------------

    def calls(self, kind: str) -> list[BackendEvent]:
        return [event for event in self.events if event.kind == kind]

    def context_events(self) -> list[BackendEvent]:
        return [event for event in self.events if event.kind in {"begin_context", "end_context"}]

    def opened_contexts(self) -> list[ElementContext]:
        return [event.args[0] for event in self.events if event.kind == "begin_context"]

    def context_stream(self) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        for event in self.context_events():
            if event.kind == "begin_context":
                out.append({"event": "begin", **context_to_dict(event.args[0])})
            else:
                out.append({"event": "end"})
        return out

    def dump_contexts(self, path: str | Path) -> Path:
        target = Path(path)
        target.write_text(json.dumps(self.context_stream(), indent=2), encoding="utf-8")
        LOGGER.debug("wrote %d context events to %s", len(self.context_events()), target)
        return target
