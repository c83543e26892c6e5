from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image
import torch

from luvatrix_heatmap.colors import parse_rgba_tuple
from luvatrix_heatmap.raster.canvas import RGBA, blend_mask, new_canvas, rounded_rect_mask
from luvatrix_heatmap.raster.draw_text import draw_text_centered
from luvatrix_heatmap.scene import SceneNode


def rasterize_scene(
    root: SceneNode,
    width: int,
    height: int,
    *,
    background: RGBA = (255, 255, 255, 255),
) -> np.ndarray:
    """Paint a heatmap scene into an `(height, width, 4)` uint8 RGBA frame."""

    canvas = new_canvas(width, height, color=background)
    for node in root.walk():
        if node.kind == "rect":
            _paint_rect(canvas, node)
        elif node.kind == "text":
            _paint_text(canvas, node)
    return canvas


def frame_to_tensor(frame: np.ndarray) -> torch.Tensor:
    if frame.dtype != np.uint8:
        raise ValueError("frame must be uint8")
    if frame.ndim != 3 or frame.shape[2] != 4:
        raise ValueError("frame must have shape (H, W, 4)")
    return torch.from_numpy(np.ascontiguousarray(frame))


def write_png(frame: np.ndarray, path: str | Path) -> Path:
    out = Path(path)
    Image.fromarray(np.ascontiguousarray(frame)).save(out, format="PNG")
    return out


def _paint_rect(canvas: np.ndarray, node: SceneNode) -> None:
    h, w = canvas.shape[:2]
    x = float(node.get("x", 0.0))
    y = float(node.get("y", 0.0))
    rw = float(node.get("width", 0.0))
    rh = float(node.get("height", 0.0))
    radius = float(node.get("rx", 0.0))
    fill = node.get("fill")
    if fill:
        blend_mask(canvas, rounded_rect_mask(h, w, x=x, y=y, rect_w=rw, rect_h=rh, radius=radius), parse_rgba_tuple(fill))
    stroke = node.get("stroke")
    stroke_width = float(node.get("stroke-width", 0.0))
    if stroke and stroke_width > 0:
        half = stroke_width / 2
        outer = rounded_rect_mask(h, w, x=x - half, y=y - half, rect_w=rw + stroke_width, rect_h=rh + stroke_width, radius=radius + half)
        inner = rounded_rect_mask(
            h, w, x=x + half, y=y + half, rect_w=rw - stroke_width, rect_h=rh - stroke_width, radius=max(0.0, radius - half)
        )
        blend_mask(canvas, outer & ~inner, parse_rgba_tuple(stroke))


def _paint_text(canvas: np.ndarray, node: SceneNode) -> None:
    draw_text_centered(
        canvas,
        float(node.get("x", 0.0)),
        float(node.get("y", 0.0)),
        node.text,
        parse_rgba_tuple(str(node.get("fill", "#000000"))),
        font_family=str(node.get("font-family", "")),
        font_size_px=float(node.get("font-size", 12)),
    )
