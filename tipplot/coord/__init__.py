from tipplot.coord.cartesian import Cartesian2d, Shift
from tipplot.coord.ranged import (
    CategoryRange,
    IntRange,
    LinearRange,
    LogRange,
    Ranged,
    as_ranged_coord,
    format_ext,
    format_float,
    nice_ticks,
)

__all__ = [
    "Cartesian2d",
    "CategoryRange",
    "IntRange",
    "LinearRange",
    "LogRange",
    "Ranged",
    "Shift",
    "as_ranged_coord",
    "format_ext",
    "format_float",
    "nice_ticks",
]
