from luvatrix_heatmap.chart import HeatmapChart
from luvatrix_heatmap.errors import DegenerateRangeWarning, HeatmapConfigError, HeatmapDataError
from luvatrix_heatmap.layout import CellGeometry, GridLayout, cell_origin, compute_grid_layout
from luvatrix_heatmap.options import (
    AnimationOptions,
    ColorRange,
    ColorScale,
    DataLabelsOptions,
    DropShadowOptions,
    DynamicAnimationOptions,
    HeatmapOptions,
    RenderFlags,
    load_heatmap_options,
    options_from_dict,
)
from luvatrix_heatmap.renderer import CellDrawable, HeatmapDrawResult, HeatmapRenderer
from luvatrix_heatmap.resolve import HeatColor, resolve_heat_color
from luvatrix_heatmap.scene import RecordingAnimator, SceneNode, SceneSurface
from luvatrix_heatmap.shading import apply_shade, shade_intensity_for
from luvatrix_heatmap.transitions import (
    ColorTransition,
    EntranceTransition,
    PreviousRenderState,
    RenderMode,
    resolve_render_mode,
)

__all__ = [
    "AnimationOptions",
    "CellDrawable",
    "CellGeometry",
    "ColorRange",
    "ColorScale",
    "ColorTransition",
    "DataLabelsOptions",
    "DegenerateRangeWarning",
    "DropShadowOptions",
    "DynamicAnimationOptions",
    "EntranceTransition",
    "GridLayout",
    "HeatColor",
    "HeatmapChart",
    "HeatmapConfigError",
    "HeatmapDataError",
    "HeatmapDrawResult",
    "HeatmapOptions",
    "HeatmapRenderer",
    "PreviousRenderState",
    "RecordingAnimator",
    "RenderFlags",
    "RenderMode",
    "SceneNode",
    "SceneSurface",
    "apply_shade",
    "cell_origin",
    "compute_grid_layout",
    "load_heatmap_options",
    "options_from_dict",
    "resolve_heat_color",
    "resolve_render_mode",
    "shade_intensity_for",
]
