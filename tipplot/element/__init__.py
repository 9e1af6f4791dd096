from tipplot.element.base import Drawable
from tipplot.element.basic import (
    Circle,
    Cross,
    EmptyElement,
    PathElement,
    Pixel,
    Polygon,
    Rectangle,
    Text,
    TriangleMarker,
)

__all__ = [
    "Circle",
    "Cross",
    "Drawable",
    "EmptyElement",
    "PathElement",
    "Pixel",
    "Polygon",
    "Rectangle",
    "Text",
    "TriangleMarker",
]
