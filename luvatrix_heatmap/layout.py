from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import HeatmapConfigError


@dataclass(frozen=True)
class GridLayout:
    cell_width: float
    cell_height: float
    points_per_series: int
    series_count: int


@dataclass(frozen=True)
class CellGeometry:
    x: float
    y: float
    width: float
    height: float

    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def collapsed(self) -> "CellGeometry":
        cx, cy = self.center()
        return CellGeometry(x=cx, y=cy, width=0.0, height=0.0)


@dataclass(frozen=True)
class PlacedCell:
    series_index: int
    point_index: int
    geometry: CellGeometry


def compute_grid_layout(grid_width: float, grid_height: float, points_per_series: int, series_count: int) -> GridLayout:
    if grid_width < 0 or grid_height < 0:
        raise HeatmapConfigError("grid width/height must be >= 0")
    if points_per_series <= 0:
        raise HeatmapConfigError("points_per_series must be > 0")
    if series_count <= 0:
        raise HeatmapConfigError("series_count must be > 0")
    return GridLayout(
        cell_width=grid_width / points_per_series,
        cell_height=grid_height / series_count,
        points_per_series=points_per_series,
        series_count=series_count,
    )


def cell_origin(series_draw_order: int, point_index: int, cell_width: float, cell_height: float) -> tuple[float, float]:
    """Origin of one cell, accumulated by repeated addition like a full grid pass.

    `series_draw_order` 0 is the top row, which holds the last series.
    """

    x = 0.0
    for _ in range(point_index):
        x = x + cell_width
    y = 0.0
    for _ in range(series_draw_order):
        y = y + cell_height
    return x, y


def iter_cells(layout: GridLayout) -> Iterator[PlacedCell]:
    """Cells in draw order: series last-to-first (top to bottom), points left to right."""

    y = 0.0
    for series_index in range(layout.series_count - 1, -1, -1):
        x = 0.0
        for point_index in range(layout.points_per_series):
            yield PlacedCell(
                series_index=series_index,
                point_index=point_index,
                geometry=CellGeometry(x=x, y=y, width=layout.cell_width, height=layout.cell_height),
            )
            x = x + layout.cell_width
        y = y + layout.cell_height
