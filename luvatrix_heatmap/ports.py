from __future__ import annotations

from typing import Any, Mapping, Protocol

from .layout import CellGeometry
from .options import DataLabelsOptions, DropShadowOptions


class DrawingSurface(Protocol):
    """Scene-graph primitives the heatmap draws into."""

    def create_group(self, attributes: Mapping[str, Any]) -> Any:
        ...

    def create_rounded_rect(self, x: float, y: float, width: float, height: float, radius: float) -> Any:
        ...

    def apply_attributes(self, element: Any, attributes: Mapping[str, Any]) -> None:
        ...

    def add_child(self, group: Any, element: Any) -> None:
        ...


class AnimationPort(Protocol):
    """Time-based engine that interpolates the transitions a draw requests."""

    def animate_rect_geometry(self, element: Any, start: CellGeometry, end: CellGeometry, duration: float) -> None:
        ...

    def animate_color(self, element: Any, start: str, end: str, duration: float) -> None:
        ...


class LabelPort(Protocol):
    def place_label_text(
        self,
        x: float,
        y: float,
        text: str,
        series_index: int,
        point_index: int,
        group: Any,
        labels: DataLabelsOptions,
    ) -> Any:
        ...


class FilterPort(Protocol):
    def apply_drop_shadow(self, group: Any, shadow: DropShadowOptions) -> None:
        ...
