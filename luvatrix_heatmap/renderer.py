from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import itertools
import logging
from types import MappingProxyType
from typing import Any

import numpy as np

from .adapters import normalize_matrix
from .colors import is_color
from .errors import DegenerateRangeWarning, HeatmapConfigError
from .labels import LabelContext, format_label, label_anchor
from .layout import CellGeometry, GridLayout, compute_grid_layout, iter_cells
from .options import DEFAULT_OPTIONS, HeatmapOptions, RenderFlags
from .ports import AnimationPort, DrawingSurface, FilterPort, LabelPort
from .resolve import resolve_heat_color, series_bounds
from .shading import apply_shade, shade_intensity_for
from .transitions import (
    EMPTY_RENDER_STATE,
    CellTransition,
    ColorTransition,
    EntranceTransition,
    PreviousRenderState,
    RenderPlan,
    plan_cell_transition,
    resolve_render_mode,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CellDrawable:
    series_index: int
    point_index: int
    value: float
    percent: float
    shade_percent: float
    color: str
    geometry: CellGeometry
    transition: CellTransition
    element: Any
    label: str | None = None


@dataclass(frozen=True)
class HeatmapDrawResult:
    root: Any
    series_groups: tuple[Any, ...]
    cells: tuple[CellDrawable, ...]
    layout: GridLayout
    plan: RenderPlan
    has_negative_values: bool
    next_state: PreviousRenderState
    warnings: tuple[DegenerateRangeWarning, ...] = ()
    _by_position: dict[tuple[int, int], CellDrawable] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_position", {(c.series_index, c.point_index): c for c in self.cells})

    def cell(self, series_index: int, point_index: int) -> CellDrawable:
        return self._by_position[(series_index, point_index)]


class HeatmapRenderer:
    """Turns a series matrix into rounded cells, labels and transition requests."""

    def __init__(
        self,
        surface: DrawingSurface,
        options: HeatmapOptions = DEFAULT_OPTIONS,
        *,
        animator: AnimationPort | None = None,
        labels: LabelPort | None = None,
        filters: FilterPort | None = None,
        chart_id: str = "heatmap",
    ) -> None:
        self.surface = surface
        self.options = options
        self.animator = animator
        self.labels = labels
        self.filters = filters
        self.chart_id = chart_id

    def draw(
        self,
        series: Any,
        colors: Sequence[str],
        grid_width: float,
        grid_height: float,
        *,
        flags: RenderFlags = RenderFlags(),
        previous: PreviousRenderState = EMPTY_RENDER_STATE,
    ) -> HeatmapDrawResult:
        opts = self.options
        matrix = normalize_matrix(series)
        series_count, points = matrix.shape
        layout = compute_grid_layout(grid_width, grid_height, points, series_count)
        base_colors = _series_colors(colors, series_count)
        if opts.data_labels.enabled and self.labels is None:
            raise HeatmapConfigError("data labels are enabled but no label port was supplied")
        if opts.drop_shadow.enabled and self.filters is None:
            raise HeatmapConfigError("drop shadow is enabled but no filter port was supplied")

        has_negs = flags.has_negative_values
        if has_negs is None:
            has_negs = bool(np.any(matrix < 0))
        plan = resolve_render_mode(opts.animations, flags)
        bounds = series_bounds(matrix)
        label_globals = MappingProxyType(
            {
                "series": matrix,
                "colors": base_colors,
                "grid_width": grid_width,
                "grid_height": grid_height,
                "has_negative_values": has_negs,
                "series_min": bounds[0],
                "series_max": bounds[1],
            }
        )
        LOGGER.debug(
            "heatmap draw chart=%s mode=%s duration=%s shape=%dx%d",
            self.chart_id,
            plan.mode.value,
            plan.duration,
            series_count,
            points,
        )

        surface = self.surface
        root = surface.create_group({"class": "heatmap"})
        surface.apply_attributes(root, {"clip-path": f"url(#gridRectMask{self.chart_id})"})

        groups: list[Any] = []
        cells: list[CellDrawable] = []
        warnings: list[DegenerateRangeWarning] = []
        for series_index, placed in itertools.groupby(iter_cells(layout), key=lambda c: c.series_index):
            group = surface.create_group(
                {"class": "heatmap-series", "rel": series_index + 1, "data:realIndex": series_index}
            )
            if opts.drop_shadow.enabled:
                assert self.filters is not None
                self.filters.apply_drop_shadow(group, opts.drop_shadow)

            for cell in placed:
                j = cell.point_index
                geom = cell.geometry
                value = float(matrix[series_index, j])
                heat = resolve_heat_color(series_index, j, matrix, base_colors, opts.color_scale, bounds=bounds)
                if heat.degenerate:
                    warnings.append(
                        DegenerateRangeWarning(
                            series_index=series_index,
                            point_index=j,
                            total=abs(heat.max_value) + abs(heat.min_value),
                        )
                    )
                shade_percent = shade_intensity_for(heat.percent, has_negs, opts.shade_intensity)
                color = apply_shade(shade_percent, heat.color, opts.enable_shades, opts.fill_opacity)

                rect = surface.create_rounded_rect(geom.x, geom.y, geom.width, geom.height, opts.radius)
                surface.apply_attributes(rect, {"cx": geom.x, "cy": geom.y, "class": "heatmap-rect"})
                surface.add_child(group, rect)
                surface.apply_attributes(
                    rect,
                    {
                        "fill": color,
                        "i": series_index,
                        "j": j,
                        "val": value,
                        "stroke-width": opts.stroke_width,
                        "stroke": opts.stroke_color,
                        "color": color,
                    },
                )

                transition = plan_cell_transition(plan, series_index, j, geom, color, previous)
                self._dispatch(rect, transition)

                text = None
                if opts.data_labels.enabled:
                    text = self._attach_label(group, geom, value, series_index, j, label_globals)

                cells.append(
                    CellDrawable(
                        series_index=series_index,
                        point_index=j,
                        value=value,
                        percent=heat.percent,
                        shade_percent=shade_percent,
                        color=color,
                        geometry=geom,
                        transition=transition,
                        element=rect,
                        label=text,
                    )
                )
            surface.add_child(root, group)
            groups.append(group)

        if warnings:
            LOGGER.warning(
                "heatmap chart=%s shaded %d cell(s) as neutral: color bounds span zero",
                self.chart_id,
                len(warnings),
            )

        next_state = PreviousRenderState({(c.series_index, c.point_index): c.color for c in cells})
        return HeatmapDrawResult(
            root=root,
            series_groups=tuple(groups),
            cells=tuple(cells),
            layout=layout,
            plan=plan,
            has_negative_values=has_negs,
            next_state=next_state,
            warnings=tuple(warnings),
        )

    def _dispatch(self, element: Any, transition: CellTransition) -> None:
        if self.animator is None or transition is None:
            return
        if isinstance(transition, EntranceTransition):
            self.animator.animate_rect_geometry(element, transition.start, transition.end, transition.duration)
        elif isinstance(transition, ColorTransition):
            self.animator.animate_color(element, transition.start, transition.end, transition.duration)

    def _attach_label(
        self,
        group: Any,
        geometry: CellGeometry,
        value: float,
        series_index: int,
        point_index: int,
        label_globals: Any,
    ) -> str:
        assert self.labels is not None
        labels = self.options.data_labels
        wrap = self.surface.create_group({"class": "data-labels"})
        x, y = label_anchor(geometry, labels)
        context = LabelContext(series_index=series_index, data_point_index=point_index, globals=label_globals)
        text = format_label(value, context, labels)
        self.labels.place_label_text(x, y, text, series_index, point_index, wrap, labels)
        self.surface.add_child(group, wrap)
        return text


def _series_colors(colors: Sequence[str], series_count: int) -> tuple[str, ...]:
    if isinstance(colors, str) or not isinstance(colors, Sequence) or not colors:
        raise HeatmapConfigError("heatmap requires a non-empty list of series colors")
    for color in colors:
        if not is_color(color):
            raise HeatmapConfigError(f"invalid series color: {color!r}")
    # Shorter palettes repeat, as chart-level color lists do.
    return tuple(colors[i % len(colors)] for i in range(series_count))
