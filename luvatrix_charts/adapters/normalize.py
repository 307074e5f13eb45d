from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from luvatrix_charts.errors import InvalidData
from luvatrix_charts.series import FillBetween, PointSeries, StepSeries


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def point_series(x: Any, y: Any, *, data: Any = None, owned: bool = False) -> PointSeries:
    x_arr = coerce_1d(_resolve_input(x, data=data), label="x", owned=owned)
    y_arr = coerce_1d(_resolve_input(y, data=data), label="y", owned=owned)
    if x_arr.shape != y_arr.shape:
        raise InvalidData(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    _require_points(x_arr, label="x")
    return PointSeries(x=x_arr, y=y_arr)


def step_series(edges: Any, values: Any, *, data: Any = None, owned: bool = False) -> StepSeries:
    edge_arr = coerce_1d(_resolve_input(edges, data=data), label="edges", owned=owned)
    value_arr = coerce_1d(_resolve_input(values, data=data), label="values", owned=owned)
    if edge_arr.size != value_arr.size + 1:
        raise InvalidData(
            f"step data needs one more edge than values: {edge_arr.size} edges for {value_arr.size} values"
        )
    _require_points(value_arr, label="values")
    return StepSeries(edges=edge_arr, values=value_arr)


def fill_between(x: Any, y1: Any, y2: Any, *, data: Any = None, owned: bool = False) -> FillBetween:
    x_arr = coerce_1d(_resolve_input(x, data=data), label="x", owned=owned)
    y1_arr = coerce_1d(_resolve_input(y1, data=data), label="y1", owned=owned)
    y2_arr = coerce_1d(_resolve_input(y2, data=data), label="y2", owned=owned)
    if not (x_arr.shape == y1_arr.shape == y2_arr.shape):
        raise InvalidData(f"fill length mismatch: x={x_arr.size} y1={y1_arr.size} y2={y2_arr.size}")
    _require_points(x_arr, label="x")
    return FillBetween(x=x_arr, y1=y1_arr, y2=y2_arr)


def coerce_1d(value: Any, *, label: str, owned: bool = False) -> np.ndarray:
    """Convert caller data to a finite 1-D float64 array.

    Float64 numpy input is borrowed as-is unless ``owned`` asks for a copy.
    """
    if value is None:
        raise InvalidData(f"{label} input is required")
    arr = _coerce_any(value, label=label)
    if owned:
        arr = arr.copy()
    if np.isnan(arr).any():
        raise InvalidData(f"{label} contains NaN")
    if np.isinf(arr).any():
        raise InvalidData(f"{label} contains infinite values")
    return arr


def _coerce_any(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise InvalidData(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidData(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise InvalidData(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise InvalidData(f"{label} must be 1-D")
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
            raise InvalidData(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out


def _resolve_input(value: Any, *, data: Any) -> Any:
    if data is None:
        return value
    if pd is None:
        raise InvalidData("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise InvalidData("`data` must be a pandas DataFrame")
    if isinstance(value, str):
        if value not in data.columns:
            raise InvalidData(f"column not found: {value}")
        return data[value]
    return value


def _require_points(arr: np.ndarray, *, label: str) -> None:
    if arr.size == 0:
        raise InvalidData(f"{label} is empty")
