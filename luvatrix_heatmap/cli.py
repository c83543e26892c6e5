from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Sequence

from .chart import HeatmapChart
from .errors import HeatmapConfigError, HeatmapDataError
from .export import render_svg
from .options import DEFAULT_OPTIONS, load_heatmap_options
from .raster import rasterize_scene, write_png
from .scene import RecordingAnimator

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="luvatrix-heatmap", description="Render a heatmap from a JSON series matrix.")
    p.add_argument("matrix", help='JSON file: {"series": [[...], ...], "colors": ["#RRGGBB", ...]}')
    p.add_argument("--options", help="JSON file with heatmap options")
    p.add_argument("--width", type=int, default=640)
    p.add_argument("--height", type=int, default=360)
    p.add_argument("--svg", help="write animated SVG markup here")
    p.add_argument("--png", help="write the settled frame as PNG here")
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        payload = json.loads(Path(args.matrix).read_text(encoding="utf-8"))
        if not isinstance(payload, dict) or "series" not in payload or "colors" not in payload:
            raise HeatmapConfigError("matrix file must hold an object with `series` and `colors`")
        options = load_heatmap_options(args.options) if args.options else DEFAULT_OPTIONS
        animator = RecordingAnimator()
        chart = HeatmapChart(options, animator=animator)
        result = chart.draw(payload["series"], payload["colors"], args.width, args.height)
    except (HeatmapConfigError, HeatmapDataError, json.JSONDecodeError, OSError) as exc:
        print(f"luvatrix-heatmap: {exc}", file=sys.stderr)
        return 2

    if args.svg:
        markup = render_svg(result.root, args.width, args.height, animations=animator.records)
        Path(args.svg).write_text(markup, encoding="utf-8")
        LOGGER.info("wrote %s", args.svg)
    if args.png:
        animator.settle()
        write_png(rasterize_scene(result.root, args.width, args.height), args.png)
        LOGGER.info("wrote %s", args.png)
    if not args.svg and not args.png:
        print(render_svg(result.root, args.width, args.height, animations=animator.records))
    return 0
