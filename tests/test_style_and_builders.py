from __future__ import annotations

import unittest

from tipplot.backends import RecordingBackend
from tipplot.chart import ChartBuilder
from tipplot.drawing import Rect, into_drawing_area
from tipplot.element import Circle
from tipplot.series import LineSeries
from tipplot.style import BLACK, BLUE, PALETTE, RED, ShapeStyle, TextStyle, as_shape_style, mix, palette, to_rgba


class StyleTests(unittest.TestCase):
    def test_to_rgba(self) -> None:
        self.assertEqual(to_rgba((1, 2, 3)), (1, 2, 3, 255))
        with self.assertRaises(ValueError):
            to_rgba((1, 2))  # type: ignore[arg-type]

    def test_mix_scales_alpha(self) -> None:
        self.assertEqual(mix(RED, 0.5), (255, 0, 0, 127))
        self.assertEqual(mix(RED, 2.0), RED)

    def test_palette_wraps(self) -> None:
        self.assertEqual(palette(len(PALETTE)), PALETTE[0])

    def test_style_copies(self) -> None:
        style = ShapeStyle(color=RED)
        self.assertTrue(style.fill().filled)
        self.assertFalse(style.filled)
        self.assertEqual(style.with_stroke_width(3).stroke_width, 3)
        with self.assertRaises(ValueError):
            style.with_stroke_width(0)
        self.assertEqual(as_shape_style(BLUE), ShapeStyle(color=BLUE))

        text = TextStyle().with_color((1, 2, 3)).with_size(20)
        self.assertEqual(text.color, (1, 2, 3, 255))
        self.assertEqual(text.size_px, 20.0)
        with self.assertRaises(ValueError):
            TextStyle().with_size(0)

    def test_rect_truncate_clamps_into_rect(self) -> None:
        rect = Rect(10, 10, 20, 20)
        self.assertEqual(rect.truncate((0, 25)), (10, 19))
        self.assertEqual(rect.truncate((15, 15)), (15, 15))


class ChartBuilderSetterTests(unittest.TestCase):
    def test_per_side_margins_and_label_areas(self) -> None:
        root = into_drawing_area(RecordingBackend(200, 100))
        chart = (
            ChartBuilder.on(root)
            .margin_top(1)
            .margin_bottom(2)
            .margin_left(3)
            .margin_right(4)
            .set_all_label_area_size(10)
            .top_x_label_area_size(5)
            .build_cartesian_2d((0.0, 1.0), (0.0, 1.0))
        )
        self.assertEqual(chart.plotting_area().rect, Rect(13, 6, 186, 88))
        self.assertEqual(chart.top_label_area.rect, Rect(13, 1, 186, 6))
        self.assertEqual(chart.right_label_area.rect, Rect(186, 6, 196, 88))


class MeshAndLegendSetterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = RecordingBackend(300, 200)
        self.chart = (
            ChartBuilder.on(into_drawing_area(self.backend))
            .x_label_area_size(20)
            .y_label_area_size(30)
            .build_cartesian_2d((0.0, 1.0), (0, 10))
        )

    def test_mesh_styles_are_applied(self) -> None:
        axis = ShapeStyle(color=BLUE)
        light = ShapeStyle(color=RED)
        label = TextStyle(size_px=9.0)
        (
            self.chart.configure_mesh()
            .axis_style(axis)
            .light_line_style(light)
            .label_style(label)
            .disable_x_mesh()
            .y_label_formatter(lambda v: f"{v}%")
            .draw()
        )
        paths = self.backend.calls("draw_path")
        self.assertTrue(any(e.args[1] == axis for e in paths))
        # Only horizontal grid lines remain.
        grid = [e.args[0] for e in paths if e.args[1] == light]
        self.assertTrue(grid)
        self.assertTrue(all(p[0][1] == p[-1][1] for p in grid))
        texts = self.backend.calls("draw_text")
        self.assertTrue(all(e.args[1] == label for e in texts))
        self.assertIn("10%", [e.args[0] for e in texts])

    def test_disable_y_mesh_leaves_vertical_lines(self) -> None:
        light = ShapeStyle(color=RED)
        self.chart.configure_mesh().light_line_style(light).disable_y_mesh().draw()
        grid = [e.args[0] for e in self.backend.calls("draw_path") if e.args[1] == light]
        self.assertTrue(grid)
        self.assertTrue(all(p[0][0] == p[-1][0] for p in grid))

    def test_legend_font(self) -> None:
        font = TextStyle(size_px=16.0, color=BLACK)
        self.chart.draw_series(LineSeries([(0.0, 1), (1.0, 2)], RED).with_point_size(2)).label("line")
        self.chart.configure_series_labels().label_font(font).draw()
        (text,) = self.backend.calls("draw_text")
        self.assertEqual(text.args[:2], ("line", font))


class DualSeriesRoutingTests(unittest.TestCase):
    def test_plain_secondary_series(self) -> None:
        backend = RecordingBackend(200, 100)
        chart = ChartBuilder.on(into_drawing_area(backend)).build_cartesian_2d((0.0, 1.0), (0.0, 1.0))
        dual = chart.set_secondary_coord((0.0, 1.0), (0.0, 100.0))
        dual.draw_secondary_series([Circle((0.5, 50.0), 2, RED)])
        (event,) = backend.calls("draw_circle")
        self.assertEqual(event.args[0], dual.secondary_backend_coord((0.5, 50.0)))
        self.assertEqual(backend.context_events(), [])


if __name__ == "__main__":
    unittest.main()
