from tipplot.drawing.area import DrawingArea, Rect, into_drawing_area

__all__ = ["DrawingArea", "Rect", "into_drawing_area"]
