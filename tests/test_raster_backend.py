from __future__ import annotations

from pathlib import Path
import tempfile
import unittest
from unittest import mock

import numpy as np
from PIL import Image

from tipplot.backend import DrawingBackendError
from tipplot.backends import RasterBackend
from tipplot.drawing import into_drawing_area
from tipplot.element import Circle, PathElement, Polygon, Rectangle, TriangleMarker
from tipplot.errors import BackendError
from tipplot.raster import draw_polyline, new_canvas
from tipplot.raster.draw_text import draw_text as raster_draw_text
from tipplot.raster.draw_text import text_size as raster_text_size
from tipplot.style import BLACK, RED, WHITE, ShapeStyle, TextStyle, mix


class RasterPrimitiveTests(unittest.TestCase):
    def test_polyline_covers_both_endpoints(self) -> None:
        canvas = new_canvas(10, 10, color=WHITE)
        draw_polyline(canvas, [(1, 1), (8, 1), (8, 8)], BLACK)
        self.assertEqual(tuple(canvas[1, 1]), BLACK)
        self.assertEqual(tuple(canvas[8, 8]), BLACK)
        self.assertEqual(tuple(canvas[5, 5]), WHITE)

    def test_translucent_joints_are_not_blended_twice(self) -> None:
        canvas = new_canvas(10, 10, color=WHITE)
        draw_polyline(canvas, [(1, 5), (5, 5), (9, 5)], mix(BLACK, 0.5))
        self.assertEqual(int(canvas[5, 5, 0]), int(canvas[5, 3, 0]))

    def test_text_renderer_uses_antialias_coverage(self) -> None:
        canvas = new_canvas(220, 80, color=(0, 0, 0, 0))
        raster_draw_text(canvas, 10, 20, "Tooltips", (255, 255, 255, 255), font_size_px=24.0)
        chan = canvas[:, :, 0]
        self.assertTrue(np.any(chan > 0))
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_rotated_text_size_swaps_dimensions(self) -> None:
        w0, h0 = raster_text_size("value", font_size_px=18.0, rotate_deg=0)
        w1, h1 = raster_text_size("value", font_size_px=18.0, rotate_deg=270)
        self.assertEqual((w0, h0), (h1, w1))


class RasterBackendTests(unittest.TestCase):
    def test_fill_and_shapes_land_in_the_canvas(self) -> None:
        backend = RasterBackend(40, 30)
        root = into_drawing_area(backend)
        root.fill(RED)
        root.draw(Rectangle(((2, 2), (10, 10)), ShapeStyle(color=BLACK, filled=True)))
        rgba = backend.to_rgba()
        self.assertEqual(rgba.shape, (30, 40, 4))
        self.assertEqual(tuple(rgba[5, 5]), BLACK)
        self.assertEqual(tuple(rgba[20, 30]), RED)

    def test_child_area_clips_strokes(self) -> None:
        backend = RasterBackend(40, 30)
        root = into_drawing_area(backend)
        left, _ = root.split_horizontally(20)
        left.draw(PathElement([(0, 10), (39, 10)], BLACK))
        rgba = backend.to_rgba()
        self.assertEqual(tuple(rgba[10, 19]), BLACK)
        self.assertEqual(tuple(rgba[10, 20]), WHITE)

    def test_markers_and_polygons(self) -> None:
        backend = RasterBackend(40, 40)
        root = into_drawing_area(backend)
        root.draw(Circle((10, 10), 4, ShapeStyle(color=RED, filled=True)))
        root.draw(Polygon([(20, 20), (35, 20), (35, 35), (20, 35)], BLACK))
        rgba = backend.to_rgba()
        self.assertEqual(tuple(rgba[10, 10]), RED)
        self.assertEqual(tuple(rgba[27, 27]), BLACK)

    def test_markers_at_the_edge_stay_inside_the_area(self) -> None:
        shapes = [
            lambda o: Circle((o, 40 + o), 8, ShapeStyle(color=RED, filled=True)),
            lambda o: Circle((40 + o, 79 + o), 6, ShapeStyle(color=BLACK)),
            lambda o: TriangleMarker((79 + o, o), 8, ShapeStyle(color=BLACK, filled=True)),
            lambda o: Polygon([(30 + o, -20 + o), (100 + o, 20 + o), (60 + o, 95 + o)], mix(RED, 0.5)),
        ]
        clipped = RasterBackend(100, 100)
        inner = into_drawing_area(clipped).margin(10, 10, 10, 10)
        unclipped = RasterBackend(100, 100)
        root = into_drawing_area(unclipped)
        for shape in shapes:
            inner.draw(shape(0))
            root.draw(shape(10))
        rgba = clipped.to_rgba()
        outside = np.ones((100, 100), dtype=bool)
        outside[10:90, 10:90] = False
        self.assertTrue(np.all(rgba[outside] == np.array(WHITE, dtype=rgba.dtype)))
        np.testing.assert_array_equal(rgba[10:90, 10:90], unclipped.to_rgba()[10:90, 10:90])
        self.assertEqual(tuple(rgba[50, 12]), RED)
        self.assertEqual(tuple(rgba[15, 88]), BLACK)

    def test_text_draws_something(self) -> None:
        backend = RasterBackend(120, 40)
        root = into_drawing_area(backend)
        root.draw_text("hello", TextStyle(size_px=20.0), (5, 5))
        self.assertTrue(np.any(backend.to_rgba()[:, :, 0] < 255))
        w, h = root.estimate_text_size("hello", TextStyle(size_px=20.0))
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)

    def test_present_writes_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out.png"
            backend = RasterBackend(16, 8, path)
            into_drawing_area(backend).present()
            self.assertTrue(backend.presented)
            with Image.open(path) as img:
                self.assertEqual(img.size, (16, 8))

    def test_present_without_path_only_marks_presented(self) -> None:
        backend = RasterBackend(4, 4)
        backend.present()
        self.assertTrue(backend.presented)

    def test_unknown_extension_is_a_backend_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            backend = RasterBackend(4, 4, Path(tmp) / "out.unknown-format")
            with self.assertRaises(BackendError) as caught:
                into_drawing_area(backend).present()
            self.assertIsInstance(caught.exception.cause, DrawingBackendError)

    def test_write_failure_is_a_backend_error(self) -> None:
        backend = RasterBackend(4, 4, "unused.png")
        with mock.patch.object(Image.Image, "save", side_effect=OSError("disk full")):
            with self.assertRaises(BackendError):
                into_drawing_area(backend).present()


if __name__ == "__main__":
    unittest.main()
