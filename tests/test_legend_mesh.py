from __future__ import annotations

import unittest

from tipplot.backends import RecordingBackend
from tipplot.chart import ChartBuilder, ChartContext
from tipplot.drawing import into_drawing_area
from tipplot.element import Circle, PathElement
from tipplot.style import BLACK, BLUE, RED, WHITE, mix


def _chart(backend: RecordingBackend) -> ChartContext:
    return (
        ChartBuilder.on(into_drawing_area(backend))
        .margin(10)
        .x_label_area_size(40)
        .y_label_area_size(50)
        .build_cartesian_2d((0.0, 6.5), (-1.2, 1.2))
    )


class MeshStyleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = RecordingBackend(720, 460)
        self.chart = _chart(self.backend)

    def test_tick_positions_follow_key_points(self) -> None:
        xs, ys = self.chart.configure_mesh().x_labels(5).y_labels(5).tick_positions()
        self.assertLessEqual(len(xs), 5)
        self.assertLessEqual(len(ys), 5)
        for value, px in xs:
            self.assertEqual(px, self.chart.backend_coord((value, 0.0))[0])
        for value, py in ys:
            self.assertEqual(py, self.chart.backend_coord((0.0, value))[1])

    def test_draw_labels_every_tick_with_the_axis_formatter(self) -> None:
        mesh = self.chart.configure_mesh()
        xs, ys = mesh.tick_positions()
        mesh.draw()
        texts = [e.args[0] for e in self.backend.calls("draw_text")]
        for value, _ in xs:
            self.assertIn(self.chart.as_coord_spec().x_spec.format_ext(value), texts)
        self.assertEqual(len(texts), len(xs) + len(ys))
        self.assertEqual(self.backend.context_events(), [])

    def test_grid_lines_stay_in_the_plot(self) -> None:
        self.chart.configure_mesh().draw()
        plot = self.chart.plotting_area().rect
        grid = [e for e in self.backend.calls("draw_path") if e.args[1].color == (0, 0, 0, 40)]
        self.assertTrue(grid)
        for event in grid:
            for point in event.args[0]:
                self.assertTrue(plot.contains(point))

    def test_disable_mesh_and_custom_formatter(self) -> None:
        self.chart.configure_mesh().disable_mesh().x_label_formatter(lambda v: f"<{v:g}>").draw()
        self.assertEqual([e for e in self.backend.calls("draw_path") if e.args[1].color == (0, 0, 0, 40)], [])
        texts = [e.args[0] for e in self.backend.calls("draw_text")]
        self.assertIn("<0>", texts)

    def test_descriptions_are_drawn_and_y_is_rotated(self) -> None:
        self.chart.configure_mesh().x_labels(0).y_labels(0).x_desc("X").y_desc("Y").draw()
        texts = {e.args[0]: e.args[1] for e in self.backend.calls("draw_text")}
        self.assertEqual(set(texts), {"X", "Y"})
        self.assertEqual(texts["Y"].rotate_deg, 90)

    def test_negative_label_count_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.chart.configure_mesh().x_labels(-1)


class SeriesLabelStyleTests(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = RecordingBackend(720, 460)
        self.chart = _chart(self.backend)

    def test_nothing_drawn_without_labels(self) -> None:
        self.chart.draw_series_with_tooltips([], RED, "unlabelled")
        legend = self.chart.configure_series_labels()
        self.assertIsNone(legend.bounds())
        legend.draw()
        self.assertEqual(self.backend.calls("draw_rect"), [])

    def test_upper_right_box_lists_labels_in_draw_order(self) -> None:
        self.chart.draw_series_with_tooltips([], RED, "sin").label("sin(x)")
        self.chart.draw_series_with_tooltips([], BLUE, "cos").label("cos(x)").legend(
            lambda pos: Circle(pos, 3, BLUE)
        )
        legend = (
            self.chart.configure_series_labels()
            .border_style(BLACK)
            .background_style(mix(WHITE, 0.8))
            .position("upper_right")
        )
        x, y, w, h = legend.bounds()
        pw, _ = self.chart.plotting_area().dim_in_pixel()
        self.assertEqual(x + w, pw - 10)
        self.assertEqual(y, 10)

        legend.draw()
        self.assertEqual([e.args[0] for e in self.backend.calls("draw_text")], ["sin(x)", "cos(x)"])
        fill, border = self.backend.calls("draw_rect")
        self.assertTrue(fill.args[3])
        self.assertEqual(fill.args[2].color, mix(WHITE, 0.8))
        self.assertFalse(border.args[3])
        self.assertEqual(len(self.backend.calls("draw_circle")), 1)
        # The default glyph is a short stroke in the series colour.
        glyphs = [e for e in self.backend.calls("draw_path") if e.args[1].color == RED]
        self.assertEqual(len(glyphs), 1)

    def test_absolute_position(self) -> None:
        self.chart.draw_series_with_tooltips([], RED, "s").label("s")
        legend = self.chart.configure_series_labels().position((5, 7))
        self.assertEqual(legend.bounds()[:2], (5, 7))

    def test_legend_fn_gets_coordinates_relative_to_the_plot(self) -> None:
        seen = []

        def glyph(pos):
            seen.append(pos)
            return PathElement([pos, (pos[0] + 20, pos[1])], RED)

        self.chart.draw_series_with_tooltips([], RED, "s").label("s").legend(glyph)
        legend = self.chart.configure_series_labels().position("upper_left")
        x, y, _, _ = legend.bounds()
        legend.draw()
        (pos,) = seen
        self.assertGreater(pos[0], x)
        self.assertGreater(pos[1], y)
        pw, ph = self.chart.plotting_area().dim_in_pixel()
        self.assertLess(pos[0], pw)
        self.assertLess(pos[1], ph)

    def test_invalid_settings_are_rejected(self) -> None:
        legend = self.chart.configure_series_labels()
        with self.assertRaises(ValueError):
            legend.margin(-1)
        with self.assertRaises(ValueError):
            legend.legend_area_size(0)


if __name__ == "__main__":
    unittest.main()
