from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Mapping

from .errors import HeatmapConfigError
from .layout import CellGeometry
from .options import DataLabelsOptions

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class LabelContext:
    """Second argument handed to data-label formatters."""

    series_index: int
    data_point_index: int
    globals: Mapping[str, Any]


def parse_font_size(font_size: float | str) -> int:
    """Integer part of a font size given as a number or a CSS length such as `12px`."""

    if isinstance(font_size, bool):
        raise HeatmapConfigError(f"invalid data label font size: {font_size!r}")
    if isinstance(font_size, (int, float)):
        return int(font_size)
    match = _LEADING_INT.match(str(font_size))
    if match is None:
        raise HeatmapConfigError(f"invalid data label font size: {font_size!r}")
    return int(match.group(1))


def label_anchor(geometry: CellGeometry, labels: DataLabelsOptions) -> tuple[float, float]:
    # A third of the font size drops the baseline so text sits centered in the cell.
    x = geometry.x + geometry.width / 2 + labels.offset_x
    y = geometry.y + geometry.height / 2 + parse_font_size(labels.font_size) / 3 + labels.offset_y
    return x, y


def default_label_formatter(value: float, context: LabelContext) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_label(value: float, context: LabelContext, labels: DataLabelsOptions) -> str:
    formatter = labels.formatter or default_label_formatter
    return str(formatter(value, context))
