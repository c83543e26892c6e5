from __future__ import annotations

import importlib.util
import json
from pathlib import Path
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np
from PIL import Image
import torch

from luvatrix_heatmap.adapters.normalize import normalize_matrix
from luvatrix_heatmap.chart import HeatmapChart
from luvatrix_heatmap.cli import main
from luvatrix_heatmap.errors import HeatmapConfigError, HeatmapDataError
from luvatrix_heatmap.export.svg import SVG_NS, render_svg
from luvatrix_heatmap.options import AnimationOptions, DropShadowOptions, HeatmapOptions
from luvatrix_heatmap.raster import frame_to_tensor, rasterize_scene, write_png
from luvatrix_heatmap.raster.canvas import rounded_rect_mask
from luvatrix_heatmap.scene import RecordingAnimator


def _tag(name: str) -> str:
    return f"{{{SVG_NS}}}{name}"


class NormalizeMatrixTests(unittest.TestCase):
    def test_accepts_lists_arrays_and_tensors(self) -> None:
        expected = np.asarray([[1.0, 2.0], [3.0, 4.0]])
        for source in ([[1, 2], [3, 4]], expected.astype(np.int32), torch.tensor([[1, 2], [3, 4]])):
            out = normalize_matrix(source)
            np.testing.assert_array_equal(out, expected)
            self.assertEqual(out.dtype, np.float64)
            self.assertFalse(out.flags.writeable)

    @unittest.skipIf(importlib.util.find_spec("pandas") is None, "pandas not installed")
    def test_accepts_dataframe_rows_as_series(self) -> None:
        import pandas as pd

        frame = pd.DataFrame([[1, 2, 3], [4, 5, 6]], columns=["a", "b", "c"])
        np.testing.assert_array_equal(normalize_matrix(frame), frame.to_numpy(dtype=np.float64))

    def test_rejects_malformed_input(self) -> None:
        with self.assertRaises(HeatmapConfigError):
            normalize_matrix([[1, 2], [3]])
        with self.assertRaises(HeatmapConfigError):
            normalize_matrix([])
        with self.assertRaises(HeatmapConfigError):
            normalize_matrix([[], []])
        with self.assertRaises(HeatmapConfigError):
            normalize_matrix(np.zeros(4))
        with self.assertRaises(HeatmapDataError):
            normalize_matrix([[1, None]])
        with self.assertRaises(HeatmapDataError):
            normalize_matrix([[1, float("inf")]])
        with self.assertRaises(HeatmapDataError):
            normalize_matrix("1,2,3")
        with self.assertRaises(HeatmapDataError):
            normalize_matrix([[10**400, 2]])


class SvgExportTests(unittest.TestCase):
    def test_svg_contains_cells_clip_path_and_animations(self) -> None:
        animator = RecordingAnimator()
        chart = HeatmapChart(HeatmapOptions(drop_shadow=DropShadowOptions(enabled=True)), chart_id="svg1", animator=animator)
        result = chart.draw([[1, 2, 3], [4, 5, 6]], ["#008FFB"], 120, 40)
        root = ET.fromstring(render_svg(result.root, 120, 40, animations=animator.records))

        rects = [r for r in root.iter(_tag("rect")) if "heatmap-rect" in r.get("class", "")]
        self.assertEqual(len(rects), 6)
        clip = root.find(f"{_tag('defs')}/{_tag('clipPath')}")
        assert clip is not None
        self.assertEqual(clip.get("id"), "gridRectMasksvg1")
        self.assertIsNotNone(root.find(f"{_tag('defs')}/{_tag('filter')}"))
        animates = list(root.iter(_tag("animate")))
        self.assertEqual(len(animates), 6 * 4)
        self.assertEqual(animates[0].get("dur"), "800ms")
        groups = [g for g in root.iter(_tag("g")) if g.get("class") == "heatmap-series"]
        self.assertEqual([g.get("data-realIndex") for g in groups], ["1", "0"])


class RasterExportTests(unittest.TestCase):
    def _flat_chart(self) -> HeatmapChart:
        options = HeatmapOptions(radius=0.0, stroke_width=0.0, enable_shades=False, animations=AnimationOptions(enabled=False))
        return HeatmapChart(options)

    def test_cells_paint_their_colors(self) -> None:
        result = self._flat_chart().draw([[1, 2]], ["#FF0000"], 40, 20)
        frame = rasterize_scene(result.root, 40, 20)
        self.assertEqual(frame.shape, (20, 40, 4))
        self.assertEqual(tuple(int(v) for v in frame[10, 5]), (255, 0, 0, 255))
        self.assertEqual(tuple(int(v) for v in frame[10, 35]), (255, 0, 0, 255))

    def test_rounded_corners_leave_corner_pixels_empty(self) -> None:
        mask = rounded_rect_mask(20, 20, x=0.0, y=0.0, rect_w=20.0, rect_h=20.0, radius=8.0)
        self.assertFalse(mask[0, 0])
        self.assertTrue(mask[10, 10])
        self.assertTrue(mask[0, 10])

    def test_frame_tensor_and_png(self) -> None:
        result = self._flat_chart().draw([[1, 2]], ["#00FF00"], 16, 8)
        frame = rasterize_scene(result.root, 16, 8)
        tensor = frame_to_tensor(frame)
        self.assertEqual(tensor.dtype, torch.uint8)
        self.assertEqual(tuple(tensor.shape), (8, 16, 4))
        with tempfile.TemporaryDirectory() as tmp:
            path = write_png(frame, Path(tmp) / "heatmap.png")
            with Image.open(path) as image:
                self.assertEqual(image.size, (16, 8))
        with self.assertRaises(ValueError):
            frame_to_tensor(frame.astype(np.float32))


class CliTests(unittest.TestCase):
    def test_cli_writes_svg_and_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp)
            matrix = base / "matrix.json"
            matrix.write_text(json.dumps({"series": [[1, -2], [3, 4]], "colors": ["#008FFB"]}), encoding="utf-8")
            options = base / "options.json"
            options.write_text(json.dumps({"data_labels": {"enabled": True}}), encoding="utf-8")
            code = main([str(matrix), "--options", str(options), "--width", "60", "--height", "30",
                         "--svg", str(base / "out.svg"), "--png", str(base / "out.png")])
            self.assertEqual(code, 0)
            self.assertTrue((base / "out.svg").read_text(encoding="utf-8").startswith("<svg"))
            with Image.open(base / "out.png") as image:
                self.assertEqual(image.size, (60, 30))

    def test_cli_reports_bad_matrix(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            matrix = Path(tmp) / "matrix.json"
            matrix.write_text(json.dumps({"series": [[1, 2], [3]], "colors": ["#000000"]}), encoding="utf-8")
            self.assertEqual(main([str(matrix), "--svg", str(Path(tmp) / "out.svg")]), 2)
            self.assertFalse((Path(tmp) / "out.svg").exists())

    def test_cli_reports_unusable_input_values(self) -> None:
        payloads = (
            {"series": [[1, 2]], "colors": 5},
            {"series": [[1, 2]], "colors": None},
            {"series": [[10**400, 2]], "colors": ["#000000"]},
        )
        with tempfile.TemporaryDirectory() as tmp:
            matrix = Path(tmp) / "matrix.json"
            for payload in payloads:
                matrix.write_text(json.dumps(payload), encoding="utf-8")
                self.assertEqual(main([str(matrix), "--svg", str(Path(tmp) / "out.svg")]), 2)


if __name__ == "__main__":
    unittest.main()
