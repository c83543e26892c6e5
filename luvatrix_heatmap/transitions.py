from __future__ import annotations

from dataclasses import dataclass
import enum
from types import MappingProxyType
from typing import Mapping, Union

from .colors import rgb_to_hex
from .layout import CellGeometry
from .options import AnimationOptions, RenderFlags

# Duration used when a transition should complete effectively at once.
INSTANT_DURATION = 1.0


class RenderMode(enum.Enum):
    ENTRANCE = "entrance"
    UPDATE = "update"
    STATIC = "static"


@dataclass(frozen=True)
class RenderPlan:
    mode: RenderMode
    duration: float


@dataclass(frozen=True)
class EntranceTransition:
    start: CellGeometry
    end: CellGeometry
    duration: float


@dataclass(frozen=True)
class ColorTransition:
    start: str
    end: str
    duration: float


CellTransition = Union[EntranceTransition, ColorTransition, None]


class PreviousRenderState:
    """Colors used by the last completed draw, keyed by (series_index, point_index).

    Instances are immutable; a draw produces a fresh state instead of editing one.
    """

    __slots__ = ("_colors",)

    def __init__(self, colors: Mapping[tuple[int, int], str] | None = None) -> None:
        self._colors = MappingProxyType(dict(colors or {}))

    @property
    def colors(self) -> Mapping[tuple[int, int], str]:
        return self._colors

    def color_at(self, series_index: int, point_index: int) -> str | None:
        return self._colors.get((series_index, point_index))

    def __len__(self) -> int:
        return len(self._colors)

    def __bool__(self) -> bool:
        return bool(self._colors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreviousRenderState):
            return NotImplemented
        return dict(self._colors) == dict(other._colors)

    def __repr__(self) -> str:
        return f"PreviousRenderState(cells={len(self._colors)})"


EMPTY_RENDER_STATE = PreviousRenderState()


def resolve_render_mode(animations: AnimationOptions, flags: RenderFlags) -> RenderPlan:
    """Pick the single render mode and duration used for every cell of one draw."""

    if flags.data_changed:
        dynamic = animations.dynamic_animation
        return RenderPlan(RenderMode.UPDATE, dynamic.speed if dynamic.enabled else INSTANT_DURATION)
    if animations.enabled:
        return RenderPlan(RenderMode.ENTRANCE, INSTANT_DURATION if flags.resized else animations.speed)
    return RenderPlan(RenderMode.STATIC, 0.0)


def plan_cell_transition(
    plan: RenderPlan,
    series_index: int,
    point_index: int,
    geometry: CellGeometry,
    color: str,
    previous: PreviousRenderState,
) -> CellTransition:
    if plan.mode is RenderMode.ENTRANCE:
        return EntranceTransition(start=geometry.collapsed(), end=geometry, duration=plan.duration)
    if plan.mode is RenderMode.UPDATE:
        # Cells without a previous color (grid grew) fade from their own color.
        start = previous.color_at(series_index, point_index) or color
        return ColorTransition(start=rgb_to_hex(start), end=rgb_to_hex(color), duration=plan.duration)
    return None
