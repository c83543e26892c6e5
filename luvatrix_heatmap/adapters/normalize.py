from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from luvatrix_heatmap.errors import HeatmapConfigError, HeatmapDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_matrix(series: Any) -> np.ndarray:
    """Coerce a series matrix into a read-only `(series_count, points)` float64 array.

    Accepts nested sequences, 2-D numpy arrays, 2-D torch tensors and pandas
    DataFrames (one row per series).
    """

    if torch is not None and isinstance(series, torch.Tensor):
        tensor = series.detach()
        if tensor.ndim != 2:
            raise HeatmapConfigError("series tensor must be 2-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        arr = tensor.to(torch.float64).numpy()
    elif pd is not None and isinstance(series, pd.DataFrame):
        arr = _coerce_rows([row for row in series.to_numpy(dtype=object)])
    elif isinstance(series, np.ndarray):
        if series.ndim != 2:
            raise HeatmapConfigError("series array must be 2-D")
        arr = _coerce_ndarray(series)
    elif isinstance(series, Sequence) and not isinstance(series, (str, bytes, bytearray)):
        arr = _coerce_rows(list(series))
    else:
        raise HeatmapDataError(f"unsupported series input type: {type(series)!r}")

    if arr.shape[0] == 0:
        raise HeatmapConfigError("heatmap requires at least one series")
    if arr.shape[1] == 0:
        raise HeatmapConfigError("heatmap series must contain at least one point")
    if not np.all(np.isfinite(arr)):
        bad = np.argwhere(~np.isfinite(arr))[0]
        raise HeatmapDataError(f"series {int(bad[0])} point {int(bad[1])} is not finite")

    out = np.array(arr, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


def _coerce_rows(rows: list[Any]) -> np.ndarray:
    if not rows:
        return np.zeros((0, 0), dtype=np.float64)
    coerced: list[np.ndarray] = []
    for idx, row in enumerate(rows):
        if isinstance(row, (str, bytes, bytearray)) or not isinstance(row, (Sequence, np.ndarray)):
            raise HeatmapDataError(f"series {idx} must be a sequence of numbers")
        coerced.append(_coerce_1d(np.asarray(list(row), dtype=object), series_index=idx))
    width = coerced[0].size
    for idx, row in enumerate(coerced):
        if row.size != width:
            raise HeatmapConfigError(
                f"series matrix is not rectangular: series {idx} has {row.size} points, expected {width}"
            )
    return np.vstack(coerced) if width else np.zeros((len(coerced), 0), dtype=np.float64)


def _coerce_ndarray(arr: np.ndarray) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)
    return np.vstack([_coerce_1d(row, series_index=i) for i, row in enumerate(arr)])


def _coerce_1d(arr: np.ndarray, *, series_index: int) -> np.ndarray:
    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None or isinstance(raw, (str, bytes)):
            raise HeatmapDataError(f"series {series_index} contains non-numeric value at index {i}: {raw!r}")
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError, OverflowError) as exc:
            raise HeatmapDataError(
                f"series {series_index} contains non-numeric value at index {i}: {raw!r}"
            ) from exc
    return out
