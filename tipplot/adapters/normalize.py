from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
import math
from numbers import Real
from typing import Any

import numpy as np

from tipplot.errors import SeriesDataError


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


def normalize_points(
    data: Any = None,
    *,
    x: Any = None,
    y: Any = None,
    frame: Any = None,
) -> list[tuple[Any, Any]]:
    """Turn series input into a list of guest ``(x, y)`` points.

    ``data`` is an iterable of pairs or an ``(N, 2)`` array. Pair values are
    kept as given so that category coordinates survive, but pairs with a
    ``None`` or non-finite number are dropped. Otherwise ``y`` (and optionally
    ``x``) are 1-D numeric inputs, or column names when ``frame`` is a pandas
    DataFrame; rows with a non-finite value are dropped.
    """
    if data is not None:
        if x is not None or y is not None:
            raise SeriesDataError("pass either point pairs or x/y arrays, not both")
        return _pairs(data)

    y_values = _resolve_column(y, frame=frame, label="y")
    if y_values is None:
        raise SeriesDataError("y input is required")
    y_arr = _coerce_1d_numeric(y_values, label="y")

    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _coerce_1d_numeric(_resolve_column(x, frame=frame, label="x"), label="x")

    if x_arr.shape != y_arr.shape:
        raise SeriesDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    return [(float(xv), float(yv)) for xv, yv in zip(x_arr[mask].tolist(), y_arr[mask].tolist())]


def _pairs(data: Any) -> list[tuple[Any, Any]]:
    if isinstance(data, np.ndarray):
        if data.ndim != 2 or data.shape[1] != 2:
            raise SeriesDataError(f"point array must have shape (N, 2), got {data.shape}")
        if data.dtype.kind in {"i", "u", "f", "b"}:
            arr = data.astype(np.float64, copy=False)
            mask = np.isfinite(arr).all(axis=1)
            return [(float(a), float(b)) for a, b in arr[mask].tolist()]
        data = data.tolist()
    if not isinstance(data, Iterable) or isinstance(data, (str, bytes, bytearray)):
        raise SeriesDataError(f"unsupported point input type: {type(data)!r}")
    out: list[tuple[Any, Any]] = []
    for i, item in enumerate(data):
        try:
            a, b = item
        except (TypeError, ValueError) as exc:
            raise SeriesDataError(f"point {i} is not an (x, y) pair: {item!r}") from exc
        if _is_missing(a) or _is_missing(b):
            continue
        out.append((a, b))
    return out


def _is_missing(value: Any) -> bool:
    # Category values (strings and other non-numbers) are never missing.
    if value is None:
        return True
    if isinstance(value, Decimal):
        return not value.is_finite()
    if isinstance(value, Real) and not isinstance(value, bool):
        return not math.isfinite(value)
    return False


def _resolve_column(value: Any, *, frame: Any, label: str) -> Any:
    if frame is None:
        return value
    if pd is None:
        raise SeriesDataError("pandas is required when using `frame=`")
    if not isinstance(frame, pd.DataFrame):
        raise SeriesDataError("`frame` must be a pandas DataFrame")
    if isinstance(value, str):
        if value not in frame.columns:
            raise SeriesDataError(f"column not found: {value}")
        return frame[value]
    if value is None and label == "y":
        numeric_cols = [c for c in frame.columns if pd.api.types.is_numeric_dtype(frame[c])]
        if len(numeric_cols) != 1:
            raise SeriesDataError("when y is omitted, frame must have exactly one numeric column")
        return frame[numeric_cols[0]]
    return value


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise SeriesDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise SeriesDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise SeriesDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise SeriesDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
