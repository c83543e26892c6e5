from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from .options import ColorScale


@dataclass(frozen=True)
class HeatColor:
    color: str
    percent: float
    min_value: float
    max_value: float
    degenerate: bool = False


def series_bounds(matrix: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Per-series (min, max) vectors, computed once per draw."""

    return matrix.min(axis=1), matrix.max(axis=1)


def intensity_percent(value: float, min_value: float, max_value: float) -> tuple[float, bool]:
    total = abs(max_value) + abs(min_value)
    if total == 0:
        return 0.0, True
    percent = (100.0 * value) / total
    if not math.isfinite(percent):
        return 0.0, True
    return percent, False


def resolve_heat_color(
    series_index: int,
    point_index: int,
    matrix: np.ndarray,
    base_colors: Sequence[str],
    color_scale: ColorScale,
    *,
    bounds: tuple[np.ndarray, np.ndarray] | None = None,
) -> HeatColor:
    """Resolve the color and signed intensity percent of one cell.

    Auto mode uses the series color and the series min/max. Every range that
    contains the value overwrites the result in declaration order, so the
    last matching range wins. Values matching no range keep the auto result.
    """

    value = float(matrix[series_index, point_index])
    if bounds is None:
        row = matrix[series_index]
        min_value = float(np.min(row))
        max_value = float(np.max(row))
    else:
        min_value = float(bounds[0][series_index])
        max_value = float(bounds[1][series_index])
    color = base_colors[series_index]
    percent, degenerate = intensity_percent(value, min_value, max_value)

    for color_range in color_scale.ranges:
        if color_range.matches(value):
            color = color_range.color
            min_value = float(color_range.from_value)
            max_value = float(color_range.to_value)
            percent, degenerate = intensity_percent(value, min_value, max_value)

    return HeatColor(
        color=color,
        percent=percent,
        min_value=min_value,
        max_value=max_value,
        degenerate=degenerate,
    )
