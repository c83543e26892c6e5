from __future__ import annotations

import unittest

from luvatrix_heatmap.errors import HeatmapConfigError
from luvatrix_heatmap.layout import CellGeometry, cell_origin, compute_grid_layout, iter_cells


class GridLayoutTests(unittest.TestCase):
    def test_divisions_reconstruct_grid_size(self) -> None:
        layout = compute_grid_layout(100.0, 70.0, 3, 7)
        self.assertAlmostEqual(sum([layout.cell_width] * 3), 100.0, places=9)
        self.assertAlmostEqual(sum([layout.cell_height] * 7), 70.0, places=9)

    def test_rows_run_from_last_series_to_first(self) -> None:
        layout = compute_grid_layout(90.0, 30.0, 3, 3)
        cells = list(iter_cells(layout))
        self.assertEqual(len(cells), 9)
        self.assertEqual(cells[0].series_index, 2)
        self.assertEqual(cells[0].geometry.y, 0.0)
        self.assertEqual(cells[-1].series_index, 0)
        self.assertEqual(cells[-1].geometry.y, 20.0)
        self.assertEqual([c.point_index for c in cells[:3]], [0, 1, 2])

    def test_cell_origin_matches_accumulated_grid(self) -> None:
        layout = compute_grid_layout(100.0, 100.0, 7, 3)
        for draw_order, series_index in enumerate(range(2, -1, -1)):
            row = [c for c in iter_cells(layout) if c.series_index == series_index]
            for cell in row:
                x, y = cell_origin(draw_order, cell.point_index, layout.cell_width, layout.cell_height)
                self.assertEqual((x, y), (cell.geometry.x, cell.geometry.y))

    def test_collapsed_geometry_sits_at_center(self) -> None:
        geom = CellGeometry(x=10.0, y=20.0, width=30.0, height=8.0)
        self.assertEqual(geom.collapsed(), CellGeometry(x=25.0, y=24.0, width=0.0, height=0.0))

    def test_rejects_empty_shape_and_negative_size(self) -> None:
        with self.assertRaises(HeatmapConfigError):
            compute_grid_layout(100.0, 100.0, 0, 3)
        with self.assertRaises(HeatmapConfigError):
            compute_grid_layout(100.0, 100.0, 3, 0)
        with self.assertRaises(HeatmapConfigError):
            compute_grid_layout(-1.0, 100.0, 3, 3)


if __name__ == "__main__":
    unittest.main()
