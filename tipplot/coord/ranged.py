from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation
import math
import numbers
from typing import Any, Generic, Hashable, Sequence, TypeVar

import numpy as np

from tipplot.errors import CoordSpecError


T = TypeVar("T")

PixelRange = tuple[int, int]

# Guards floor() against values that land a hair below an exact pixel.
_MAP_EPSILON = 1e-3


class Ranged(ABC, Generic[T]):
    """One axis: maps guest values into a pixel interval and formats them."""

    @abstractmethod
    def map(self, value: T, limit: PixelRange) -> int:
        ...

    @abstractmethod
    def key_points(self, max_points: int) -> list[T]:
        ...

    @abstractmethod
    def range(self) -> tuple[T, T]:
        ...

    def axis_pixel_range(self, limit: PixelRange) -> PixelRange:
        return limit

    def unmap(self, pixel: int, limit: PixelRange) -> T | None:
        return None

    def format_ext(self, value: T) -> str:
        return str(value)


def format_ext(spec: Ranged[T], value: T) -> str:
    return spec.format_ext(value)


def _linear_map(t: float, limit: PixelRange) -> int:
    span = limit[1] - limit[0]
    if span == 0:
        return limit[0]
    if math.isnan(t):
        return limit[0]
    scaled = span * t
    if math.isinf(scaled):
        # Far outside the range, or inf itself: saturate at the matching end.
        return limit[1] if t > 0 else limit[0]
    return limit[0] + int(math.floor(scaled + _MAP_EPSILON))


def _linear_unmap(pixel: int, limit: PixelRange) -> float | None:
    span = limit[1] - limit[0]
    if span == 0:
        return None
    return (pixel - limit[0]) / span


def _midpoint(limit: PixelRange) -> int:
    return (limit[0] + limit[1]) // 2


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def nice_ticks(vmin: float, vmax: float, max_points: int, *, min_step: float | None = None) -> np.ndarray:
    """Round-number ticks inside ``[vmin, vmax]``, never more than ``max_points``."""
    if max_points <= 0:
        return np.empty(0, dtype=np.float64)
    lo = float(min(vmin, vmax))
    hi = float(max(vmin, vmax))
    if lo == hi:
        return np.asarray([lo], dtype=np.float64)

    span = _nice_number(hi - lo, round_result=False)
    for target in range(max_points, 0, -1):
        step = _nice_number(span / max(target - 1, 1), round_result=True)
        if min_step is not None:
            step = max(step, min_step)
        first = math.ceil(lo / step - 1e-9)
        last = math.floor(hi / step + 1e-9)
        if last < first:
            continue
        ticks = np.arange(first, last + 1, dtype=np.float64) * step
        # Normalize floating-point drift so values like -4.44e-16 become 0.
        ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
        if ticks.size <= max_points:
            return ticks
    return np.asarray([lo], dtype=np.float64)


def format_float(value: float, *, min_decimal: int = 1, max_decimal: int = 5) -> str:
    value = float(value)
    if not math.isfinite(value):
        return str(value)
    d = Decimal(repr(value))
    try:
        q = d.quantize(Decimal("1").scaleb(-max_decimal))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    int_part, _, frac = out.partition(".")
    frac = frac.ljust(min_decimal, "0")
    out = f"{int_part}.{frac}" if frac else int_part
    if out.startswith("-") and float(out) == 0.0:
        out = out[1:]
    return out


class LinearRange(Ranged[float]):
    """Continuous float axis between ``start`` and ``end`` (``start > end`` inverts it)."""

    def __init__(self, start: float, end: float) -> None:
        self.start = float(start)
        self.end = float(end)
        if not (math.isfinite(self.start) and math.isfinite(self.end)):
            raise CoordSpecError(f"range bounds must be finite: {start!r}..{end!r}")

    def __repr__(self) -> str:
        return f"LinearRange({self.start!r}, {self.end!r})"

    def map(self, value: float, limit: PixelRange) -> int:
        if self.start == self.end:
            return _midpoint(limit)
        t = (float(value) - self.start) / (self.end - self.start)
        return _linear_map(t, limit)

    def unmap(self, pixel: int, limit: PixelRange) -> float | None:
        t = _linear_unmap(pixel, limit)
        if t is None:
            return None
        return self.start + t * (self.end - self.start)

    def key_points(self, max_points: int) -> list[float]:
        return [float(v) for v in nice_ticks(self.start, self.end, max_points).tolist()]

    def range(self) -> tuple[float, float]:
        return (self.start, self.end)

    def format_ext(self, value: float) -> str:
        return format_float(value)


class IntRange(Ranged[int]):
    """Integer axis covering ``start..end`` inclusive."""

    def __init__(self, start: int, end: int) -> None:
        self.start = int(start)
        self.end = int(end)

    def __repr__(self) -> str:
        return f"IntRange({self.start!r}, {self.end!r})"

    def map(self, value: int, limit: PixelRange) -> int:
        if self.start == self.end:
            return _midpoint(limit)
        t = (float(value) - self.start) / (self.end - self.start)
        return _linear_map(t, limit)

    def unmap(self, pixel: int, limit: PixelRange) -> int | None:
        t = _linear_unmap(pixel, limit)
        if t is None:
            return None
        return int(round(self.start + t * (self.end - self.start)))

    def key_points(self, max_points: int) -> list[int]:
        ticks = nice_ticks(self.start, self.end, max_points, min_step=1.0)
        return [int(round(v)) for v in ticks.tolist()]

    def range(self) -> tuple[int, int]:
        return (self.start, self.end)

    def format_ext(self, value: int) -> str:
        if isinstance(value, numbers.Integral) or float(value).is_integer():
            return str(int(value))
        return format_float(value)


class LogRange(Ranged[float]):
    """Logarithmic axis; both bounds must be positive."""

    def __init__(self, start: float, end: float) -> None:
        if start <= 0 or end <= 0:
            raise CoordSpecError(f"log range bounds must be > 0: {start!r}..{end!r}")
        self.start = float(start)
        self.end = float(end)
        self._log_start = math.log10(self.start)
        self._log_end = math.log10(self.end)

    def __repr__(self) -> str:
        return f"LogRange({self.start!r}, {self.end!r})"

    def map(self, value: float, limit: PixelRange) -> int:
        if self._log_start == self._log_end:
            return _midpoint(limit)
        value = float(value)
        log_v = math.log10(value) if value > 0 else -math.inf
        t = (log_v - self._log_start) / (self._log_end - self._log_start)
        return _linear_map(t, limit)

    def unmap(self, pixel: int, limit: PixelRange) -> float | None:
        t = _linear_unmap(pixel, limit)
        if t is None:
            return None
        return 10 ** (self._log_start + t * (self._log_end - self._log_start))

    def key_points(self, max_points: int) -> list[float]:
        if max_points <= 0:
            return []
        lo = min(self.start, self.end)
        hi = max(self.start, self.end)
        first_exp = math.ceil(math.log10(lo) - 1e-9)
        last_exp = math.floor(math.log10(hi) + 1e-9)
        if last_exp - first_exp >= 1:
            decades = [10.0**e for e in range(first_exp, last_exp + 1)]
            stride = max(1, math.ceil(len(decades) / max_points))
            return decades[::stride]
        candidates = [
            m * 10.0**e
            for e in range(math.floor(math.log10(lo)), math.ceil(math.log10(hi)) + 1)
            for m in (1.0, 2.0, 5.0)
        ]
        inside = [v for v in candidates if lo - 1e-12 <= v <= hi + 1e-12]
        if 2 <= len(inside) <= max_points:
            return inside
        return [float(v) for v in nice_ticks(lo, hi, max_points).tolist()]

    def range(self) -> tuple[float, float]:
        return (self.start, self.end)

    def format_ext(self, value: float) -> str:
        return format_float(value)


class CategoryRange(Ranged[Any]):
    """Discrete axis enumerating ``values``; each value owns one equal-width segment."""

    def __init__(self, values: Sequence[Any]) -> None:
        self.values = tuple(values)
        if not self.values:
            raise CoordSpecError("category range must contain at least one value")
        self._index: dict[Hashable, int] = {}
        for i, v in enumerate(self.values):
            if isinstance(v, Hashable):
                self._index.setdefault(v, i)

    def __repr__(self) -> str:
        return f"CategoryRange({list(self.values)!r})"

    def index_of(self, value: Any) -> int:
        if isinstance(value, Hashable) and value in self._index:
            return self._index[value]
        try:
            return self.values.index(value)
        except ValueError as exc:
            raise CoordSpecError(f"value not in category range: {value!r}") from exc

    def map(self, value: Any, limit: PixelRange) -> int:
        n = len(self.values)
        t = (2 * self.index_of(value) + 1) / (2 * n)
        return _linear_map(t, limit)

    def key_points(self, max_points: int) -> list[Any]:
        if max_points <= 0:
            return []
        stride = max(1, math.ceil(len(self.values) / max_points))
        return list(self.values[::stride])

    def range(self) -> tuple[Any, Any]:
        return (self.values[0], self.values[-1])


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def as_ranged_coord(obj: Any) -> Ranged[Any]:
    """Build an axis spec from a ``Ranged``, a ``range``, a 2-tuple of numbers or a list of categories."""
    if isinstance(obj, Ranged):
        return obj
    if isinstance(obj, range):
        if len(obj) == 0:
            raise CoordSpecError(f"empty range: {obj!r}")
        return IntRange(obj[0], obj[-1])
    if isinstance(obj, (list, tuple)):
        if len(obj) == 2 and all(_is_number(v) for v in obj):
            if all(_is_int(v) for v in obj):
                return IntRange(obj[0], obj[1])
            return LinearRange(obj[0], obj[1])
        return CategoryRange(obj)
    raise CoordSpecError(f"cannot build a coordinate spec from {type(obj)!r}")
