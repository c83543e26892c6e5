from .canvas import blend_mask, new_canvas, rounded_rect_mask
from .draw_text import draw_text_centered
from .rasterize import frame_to_tensor, rasterize_scene, write_png

__all__ = [
    "blend_mask",
    "draw_text_centered",
    "frame_to_tensor",
    "new_canvas",
    "rasterize_scene",
    "rounded_rect_mask",
    "write_png",
]
