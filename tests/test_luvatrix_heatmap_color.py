from __future__ import annotations

import unittest

import numpy as np

from luvatrix_heatmap.colors import hex_to_rgba, parse_rgba_tuple, rgb_to_hex, shade_color
from luvatrix_heatmap.options import ColorRange, ColorScale
from luvatrix_heatmap.resolve import resolve_heat_color
from luvatrix_heatmap.shading import apply_shade, shade_intensity_for


class ColorHelperTests(unittest.TestCase):
    def test_parse_supports_hex_and_rgb_forms(self) -> None:
        self.assertEqual(parse_rgba_tuple("#fff"), (255, 255, 255, 255))
        self.assertEqual(parse_rgba_tuple("#10203040"), (16, 32, 48, 64))
        self.assertEqual(parse_rgba_tuple("rgba(1, 2, 3, 0.5)"), (1, 2, 3, 128))
        self.assertEqual(parse_rgba_tuple("rgb(9,8,7)"), (9, 8, 7, 255))
        with self.assertRaises(ValueError):
            parse_rgba_tuple("red")

    def test_shade_rounds_halves_toward_positive_infinity(self) -> None:
        self.assertEqual(shade_color(0.5, "#000000"), "#808080")
        self.assertEqual(shade_color(-0.5, "#ffffff"), "#808080")
        self.assertEqual(shade_color(0.0, "#123456"), "#123456")
        self.assertEqual(shade_color(1.0, "#123456"), "#ffffff")

    def test_shade_keeps_rgb_notation(self) -> None:
        self.assertEqual(shade_color(-1.0, "rgb(10,20,30)"), "rgb(0,0,0)")

    def test_rgba_and_hex_conversion(self) -> None:
        self.assertEqual(hex_to_rgba("#808080", 1.0), "rgba(128,128,128,1)")
        self.assertEqual(hex_to_rgba("#808080", 0.5), "rgba(128,128,128,0.5)")
        self.assertEqual(rgb_to_hex("rgba(128,128,128,0.5)"), "#808080")
        self.assertEqual(rgb_to_hex("#ABCDEF"), "#abcdef")


class ColorResolverTests(unittest.TestCase):
    def setUp(self) -> None:
        self.matrix = np.asarray([[10.0, -5.0], [2.0, 8.0]])
        self.colors = ("#008FFB", "#00E396")

    def test_auto_mode_uses_series_color_and_bounds(self) -> None:
        heat = resolve_heat_color(0, 0, self.matrix, self.colors, ColorScale())
        self.assertEqual(heat.color, "#008FFB")
        self.assertAlmostEqual(heat.percent, 200.0 / 3.0, places=9)
        self.assertEqual((heat.min_value, heat.max_value), (-5.0, 10.0))
        self.assertFalse(heat.degenerate)

    def test_percent_sign_follows_value_sign(self) -> None:
        matrix = np.asarray([[-3.0, 0.0, 4.0, 9.0]])
        signs = [np.sign(resolve_heat_color(0, j, matrix, ("#000000",), ColorScale()).percent) for j in range(4)]
        self.assertEqual(signs, [-1.0, 0.0, 1.0, 1.0])

    def test_zero_span_series_resolves_to_neutral_percent(self) -> None:
        matrix = np.zeros((1, 3))
        heat = resolve_heat_color(0, 1, matrix, ("#000000",), ColorScale())
        self.assertEqual(heat.percent, 0.0)
        self.assertTrue(heat.degenerate)

    def test_last_matching_range_wins(self) -> None:
        scale = ColorScale(
            ranges=(
                ColorRange(0, 5, "#FF0000"),
                ColorRange(3, 10, "#0000FF"),
            )
        )
        matrix = np.asarray([[4.0, 1.0]])
        heat = resolve_heat_color(0, 0, matrix, ("#00FF00",), scale)
        self.assertEqual(heat.color, "#0000FF")
        self.assertAlmostEqual(heat.percent, 400.0 / 13.0, places=9)
        first_only = resolve_heat_color(0, 1, matrix, ("#00FF00",), scale)
        self.assertEqual(first_only.color, "#FF0000")
        self.assertAlmostEqual(first_only.percent, 20.0, places=9)

    def test_unmatched_value_keeps_auto_result(self) -> None:
        scale = ColorScale(ranges=(ColorRange(100, 200, "#FF0000"),))
        heat = resolve_heat_color(1, 1, self.matrix, self.colors, scale)
        self.assertEqual(heat.color, "#00E396")
        self.assertAlmostEqual(heat.percent, 80.0, places=9)

    def test_precomputed_bounds_match_row_scan(self) -> None:
        bounds = (self.matrix.min(axis=1), self.matrix.max(axis=1))
        for i in range(2):
            for j in range(2):
                self.assertEqual(
                    resolve_heat_color(i, j, self.matrix, self.colors, ColorScale(), bounds=bounds),
                    resolve_heat_color(i, j, self.matrix, self.colors, ColorScale()),
                )


class ShadeCalculatorTests(unittest.TestCase):
    def test_negative_dataset_shading_is_asymmetric(self) -> None:
        low = shade_intensity_for(-50.0, True, 0.5)
        high = shade_intensity_for(50.0, True, 0.5)
        self.assertAlmostEqual(low, 0.75, places=9)
        self.assertAlmostEqual(high, 0.25, places=9)
        self.assertNotEqual(low, high)

    def test_shade_intensity_is_ignored_without_negative_values(self) -> None:
        # Pinned behavior: the intensity knob only applies when the data has negatives.
        self.assertEqual(shade_intensity_for(50.0, False, 0.1), 0.5)
        self.assertEqual(shade_intensity_for(50.0, False, 0.9), 0.5)

    def test_reference_example_cells(self) -> None:
        matrix = np.asarray([[10.0, -5.0], [2.0, 8.0]])
        first = resolve_heat_color(0, 0, matrix, ("#008FFB", "#00E396"), ColorScale())
        second = resolve_heat_color(0, 1, matrix, ("#008FFB", "#00E396"), ColorScale())
        self.assertAlmostEqual(shade_intensity_for(first.percent, True, 1.0), 1.0 / 3.0, places=9)
        self.assertAlmostEqual(second.percent, -100.0 / 3.0, places=9)
        self.assertAlmostEqual(shade_intensity_for(second.percent, True, 1.0), 1.0 / 3.0, places=9)

    def test_apply_shade_disabled_returns_color_untouched(self) -> None:
        self.assertEqual(apply_shade(0.7, "#123456", False, 0.2), "#123456")

    def test_apply_shade_blends_and_applies_opacity(self) -> None:
        self.assertEqual(apply_shade(0.5, "#000000", True, 0.8), "rgba(128,128,128,0.8)")


if __name__ == "__main__":
    unittest.main()
