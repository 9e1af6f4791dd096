from .canvas import draw_hline, draw_pixel, draw_rect_outline, draw_vline, fill_rect, new_canvas
from .draw_lines import draw_polyline
from .draw_markers import circle_outline, circle_spans, draw_circle, fill_polygon
from .draw_text import draw_text, text_size

__all__ = [
    "circle_outline",
    "circle_spans",
    "draw_circle",
    "draw_hline",
    "draw_pixel",
    "draw_polyline",
    "draw_rect_outline",
    "draw_text",
    "draw_vline",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "text_size",
]
