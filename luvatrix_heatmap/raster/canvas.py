from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA) -> None:
    """Source-over blend `color` into `dst` wherever `mask` (same H, W) is set.

    `mask` may be boolean or float coverage in [0, 1].
    """

    cov = mask.astype(np.float32)
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return
    dst_rgb = dst[:, :, :3].astype(np.float32)
    dst_alpha = dst[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    dst[:, :, :3] = np.clip(out_rgb_num / safe_alpha[:, :, None], 0, 255).astype(np.uint8)
    dst[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


def rounded_rect_mask(
    height: int,
    width: int,
    *,
    x: float,
    y: float,
    rect_w: float,
    rect_h: float,
    radius: float,
) -> np.ndarray:
    """Boolean mask of pixels whose centers fall inside a rounded rectangle."""

    if rect_w <= 0 or rect_h <= 0:
        return np.zeros((height, width), dtype=bool)
    r = max(0.0, min(radius, rect_w / 2, rect_h / 2))
    py, px = np.mgrid[0:height, 0:width].astype(np.float32) + 0.5
    inside = (px >= x) & (px <= x + rect_w) & (py >= y) & (py <= y + rect_h)
    if r <= 0:
        return inside
    # Distance from the inner rectangle shrunk by r; corners are arcs of radius r.
    qx = np.clip(px, x + r, x + rect_w - r)
    qy = np.clip(py, y + r, y + rect_h - r)
    within_arc = (px - qx) ** 2 + (py - qy) ** 2 <= r * r
    return inside & within_arc
