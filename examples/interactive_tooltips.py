"""Render a two-series chart with tooltip contexts.

Writes a PNG plus a JSON sidecar holding the semantic context stream
(series, points and lines with per-vertex labels) that an interactive
viewer can use to show a tooltip on hover.
"""

from __future__ import annotations

import argparse
import logging
import math
from pathlib import Path
import sys

from tipplot import (
    ChartBuilder,
    ChartContext,
    DrawingAreaError,
    LineSeries,
    RasterBackend,
    RecordingBackend,
    TextStyle,
    into_drawing_area,
)
from tipplot.element import PathElement
from tipplot.style import BLACK, BLUE, RED, WHITE, mix


LOGGER = logging.getLogger("interactive_tooltips")

WIDTH, HEIGHT = 720, 460
DEFAULT_OUTPUT = Path("tipplot-doc-data") / "interactive_tooltips.png"


def sample(fn, n: int = 60) -> list[tuple[float, float]]:
    return [(i / 10.0, fn(i / 10.0)) for i in range(n + 1)]


def render(backend: RecordingBackend) -> ChartContext:
    root = into_drawing_area(backend)
    root.fill(WHITE)

    chart = (
        ChartBuilder.on(root)
        .caption("Interactive Tooltips Demo", TextStyle(size_px=28.0))
        .margin(10)
        .x_label_area_size(40)
        .y_label_area_size(50)
        .build_cartesian_2d((0.0, 6.5), (-1.2, 1.2))
    )
    chart.configure_mesh().x_desc("X").y_desc("Y").draw()

    chart.draw_series_with_tooltips(LineSeries(sample(math.sin), RED), RED, "sin(x)").label("sin(x)").legend(
        lambda pos: PathElement([pos, (pos[0] + 20, pos[1])], RED)
    )
    chart.draw_series_with_tooltips(
        LineSeries(sample(math.cos), BLUE, point_size=3), BLUE, "cos(x)"
    ).label("cos(x)").legend(lambda pos: PathElement([pos, (pos[0] + 20, pos[1])], BLUE))

    (
        chart.configure_series_labels()
        .border_style(BLACK)
        .background_style(mix(WHITE, 0.8))
        .position("upper_right")
        .draw()
    )
    root.present()
    return chart


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="interactive_tooltips", description=__doc__.splitlines()[0])
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="PNG file to write")
    parser.add_argument(
        "--contexts",
        type=Path,
        default=None,
        help="JSON sidecar for the context stream (default: next to --output)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    contexts_path = args.contexts if args.contexts is not None else args.output.with_suffix(".json")

    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        recorder = RecordingBackend(WIDTH, HEIGHT, inner=RasterBackend(WIDTH, HEIGHT, args.output))
        render(recorder)
        recorder.dump_contexts(contexts_path)
    except (DrawingAreaError, OSError) as exc:
        LOGGER.error("rendering failed: %s", exc)
        return 1

    print(f"Chart saved to {args.output}")
    print(f"Tooltip contexts saved to {contexts_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
