from __future__ import annotations

import importlib.util
import json
from pathlib import Path
import sys
import tempfile
import unittest
from unittest import mock

from PIL import Image

from tipplot.backend import DataLine, DataPoint, DataSeries
from tipplot.backends import RecordingBackend
from tipplot.coord import format_ext

MODULE_PATH = Path(__file__).resolve().parents[1] / "examples" / "interactive_tooltips.py"
SPEC = importlib.util.spec_from_file_location("interactive_tooltips_example", MODULE_PATH)
if SPEC is None or SPEC.loader is None:
    raise RuntimeError(f"failed to load module spec for {MODULE_PATH}")
MODULE = importlib.util.module_from_spec(SPEC)
sys.modules[SPEC.name] = MODULE
SPEC.loader.exec_module(MODULE)


class InteractiveTooltipsExampleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = RecordingBackend(MODULE.WIDTH, MODULE.HEIGHT)
        self.chart = MODULE.render(self.backend)

    def test_two_series_with_61_vertex_lines(self) -> None:
        contexts = self.backend.opened_contexts()
        series = [c for c in contexts if isinstance(c, DataSeries)]
        lines = [c for c in contexts if isinstance(c, DataLine)]
        self.assertEqual([s.label for s in series], ["sin(x)", "cos(x)"])
        self.assertEqual([s.id for s in series], [0, 1])
        self.assertEqual(len(lines), 2)
        for line in lines:
            self.assertEqual(len(line.x_interpolation.points), 61)
            self.assertEqual(len(line.y_interpolation.points), 61)

        x_spec = self.chart.as_coord_spec().x_spec
        first_offset, first_label = lines[0].x_interpolation.points[0]
        self.assertEqual(first_label, format_ext(x_spec, 0.0))
        self.assertEqual(lines[0].x_interpolation.points[-1][1], "6.0")

        plot = self.chart.plotting_area().rect
        last_x = lines[0].x_interpolation.points[-1][0]
        last_y = lines[0].y_interpolation.points[-1][0]
        self.assertTrue(plot.contains((last_x, last_y)))
        self.assertEqual(first_offset, plot.x0)

    def test_cos_markers_get_point_contexts(self) -> None:
        points = [c for c in self.backend.opened_contexts() if isinstance(c, DataPoint)]
        self.assertEqual(len(points), 61)
        self.assertTrue(all(p.series_id == 1 for p in points))
        self.assertEqual(points[0].y_label, "1.0")

    def test_context_stream_is_balanced(self) -> None:
        depth = 0
        for event in self.backend.context_events():
            depth += 1 if event.kind == "begin_context" else -1
            self.assertGreaterEqual(depth, 0)
        self.assertEqual(depth, 0)
        self.assertEqual(self.chart.plotting_area().context_depth, 0)
        self.assertTrue(self.backend.presented)

    def test_legend_lists_both_series(self) -> None:
        self.assertEqual([a.label_text for a in self.chart.series_anno], ["sin(x)", "cos(x)"])
        texts = [e.args[0] for e in self.backend.calls("draw_text")]
        self.assertIn("Interactive Tooltips Demo", texts)
        self.assertIn("sin(x)", texts)

    def test_cli_writes_png_and_context_sidecar(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "nested" / "chart.png"
            with mock.patch("builtins.print"):
                code = MODULE.main(["--output", str(out)])
            self.assertEqual(code, 0)
            with Image.open(out) as img:
                self.assertEqual(img.size, (720, 460))
            stream = json.loads(out.with_suffix(".json").read_text(encoding="utf-8"))
        begins = [e for e in stream if e["event"] == "begin"]
        self.assertEqual(len(begins), len(stream) - len(begins))
        self.assertEqual(begins[0]["kind"], "series")
        self.assertEqual(begins[0]["label"], "sin(x)")
        self.assertEqual(begins[1]["kind"], "line")
        self.assertEqual(len(begins[1]["x"]), 61)

    def test_cli_reports_backend_failure_with_non_zero_status(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "chart.unknown-format"
            with self.assertLogs("interactive_tooltips", level="ERROR"):
                code = MODULE.main(["--output", str(out), "--contexts", str(Path(tmp) / "ctx.json")])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
