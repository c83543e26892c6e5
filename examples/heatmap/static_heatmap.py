from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from luvatrix_heatmap import ColorRange, ColorScale, DataLabelsOptions, HeatmapChart, HeatmapOptions, RecordingAnimator
from luvatrix_heatmap.export import render_svg
from luvatrix_heatmap.raster import rasterize_scene, write_png


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render a demo heatmap as SVG and PNG.")
    p.add_argument("--out-dir", default=".")
    p.add_argument("--ranges", action="store_true", help="color cells by value bands instead of shading")
    return p.parse_args()


def main() -> int:
    args = parse_args()
    out_dir = Path(args.out_dir)
    rng = np.random.default_rng(7)
    series = np.round(rng.normal(0.0, 25.0, size=(6, 12)))

    scale = ColorScale()
    if args.ranges:
        scale = ColorScale(
            ranges=(
                ColorRange(-100, -1, "#DC2626"),
                ColorRange(0, 20, "#F59E0B"),
                ColorRange(21, 100, "#16A34A"),
            )
        )
    options = HeatmapOptions(color_scale=scale, data_labels=DataLabelsOptions(enabled=True, font_size="11px"))
    animator = RecordingAnimator()
    chart = HeatmapChart(options, animator=animator)
    result = chart.draw(series, ["#2563EB", "#0EA5E9", "#8B5CF6"], 720, 360)

    (out_dir / "heatmap.svg").write_text(render_svg(result.root, 720, 360, animations=animator.records), encoding="utf-8")
    animator.settle()
    write_png(rasterize_scene(result.root, 720, 360), out_dir / "heatmap.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
