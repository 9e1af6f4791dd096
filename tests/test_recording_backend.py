from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

from tipplot.backend import DataLine, DataPoint, DataSeries, Discrete, context_to_dict
from tipplot.backends import RasterBackend, RecordingBackend
from tipplot.drawing import into_drawing_area
from tipplot.element import PathElement
from tipplot.style import BLACK, RED, TextStyle


class RecordingBackendTests(unittest.TestCase):
    def test_forwards_to_inner_backend(self) -> None:
        inner = RasterBackend(20, 20)
        recorder = RecordingBackend(20, 20, inner=inner)
        into_drawing_area(recorder).draw(PathElement([(0, 5), (19, 5)], BLACK))
        self.assertEqual(len(recorder.calls("draw_path")), 1)
        self.assertEqual(tuple(inner.to_rgba()[5, 10]), BLACK)

    def test_text_size_comes_from_inner_backend(self) -> None:
        inner = RasterBackend(20, 20)
        recorder = RecordingBackend(20, 20, inner=inner)
        style = TextStyle(size_px=14.0)
        self.assertEqual(recorder.estimate_text_size("abc", style), inner.estimate_text_size("abc", style))

    def test_dump_contexts_writes_begin_end_stream(self) -> None:
        recorder = RecordingBackend(20, 20)
        area = into_drawing_area(recorder)
        with area.context(DataSeries(id=3, color=RED, label="s")):
            with area.context(DataPoint(coord=(1, 2), x_label="a", y_label="b", series_id=3)):
                pass
        with tempfile.TemporaryDirectory() as tmp:
            path = recorder.dump_contexts(Path(tmp) / "ctx.json")
            stream = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(
            stream,
            [
                {"event": "begin", "kind": "series", "id": 3, "color": list(RED), "label": "s"},
                {"event": "begin", "kind": "point", "coord": [1, 2], "x_label": "a", "y_label": "b", "series_id": 3},
                {"event": "end"},
                {"event": "end"},
            ],
        )

    def test_context_to_dict_for_lines(self) -> None:
        line = DataLine(
            x_interpolation=Discrete(points=((10, "0.0"), (20, "1.0"))),
            y_interpolation=Discrete(points=((50, "0.5"), (40, "0.6"))),
            series_id=1,
        )
        self.assertEqual(
            context_to_dict(line),
            {"kind": "line", "x": [[10, "0.0"], [20, "1.0"]], "y": [[50, "0.5"], [40, "0.6"]], "series_id": 1},
        )
        with self.assertRaises(TypeError):
            context_to_dict("not a context")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
