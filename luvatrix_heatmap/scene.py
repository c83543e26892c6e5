from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Literal, Mapping

from .layout import CellGeometry
from .options import DataLabelsOptions, DropShadowOptions
from .labels import parse_font_size


@dataclass(eq=False)
class SceneNode:
    kind: Literal["group", "rect", "text"]
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list["SceneNode"] = field(default_factory=list)
    text: str = ""
    shadow: DropShadowOptions | None = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    def classes(self) -> tuple[str, ...]:
        return tuple(str(self.attributes.get("class", "")).split())

    def walk(self) -> Iterator["SceneNode"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, css_class: str) -> list["SceneNode"]:
        return [node for node in self.walk() if css_class in node.classes()]


class SceneSurface:
    """In-memory drawing, label and filter backend for heatmap draws."""

    def create_group(self, attributes: Mapping[str, Any]) -> SceneNode:
        return SceneNode(kind="group", attributes=dict(attributes))

    def create_rounded_rect(self, x: float, y: float, width: float, height: float, radius: float) -> SceneNode:
        return SceneNode(
            kind="rect",
            attributes={"x": x, "y": y, "width": width, "height": height, "rx": radius, "ry": radius},
        )

    def apply_attributes(self, element: SceneNode, attributes: Mapping[str, Any]) -> None:
        element.attributes.update(attributes)

    def add_child(self, group: SceneNode, element: SceneNode) -> None:
        if group.kind != "group":
            raise ValueError(f"cannot add children to a `{group.kind}` node")
        group.children.append(element)

    def place_label_text(
        self,
        x: float,
        y: float,
        text: str,
        series_index: int,
        point_index: int,
        group: SceneNode,
        labels: DataLabelsOptions,
    ) -> SceneNode:
        node = SceneNode(
            kind="text",
            attributes={
                "x": x,
                "y": y,
                "class": "data-label",
                "text-anchor": "middle",
                "font-size": parse_font_size(labels.font_size),
                "font-family": labels.font_family,
                "fill": labels.color,
                "i": series_index,
                "j": point_index,
            },
            text=text,
        )
        self.add_child(group, node)
        return node

    def apply_drop_shadow(self, group: SceneNode, shadow: DropShadowOptions) -> None:
        group.shadow = shadow
        group.attributes["filter"] = "url(#dropShadow)"


@dataclass(frozen=True)
class AnimationRecord:
    element: SceneNode
    attribute_names: tuple[str, ...]
    start: tuple[Any, ...]
    end: tuple[Any, ...]
    duration: float


class RecordingAnimator:
    """Animation port that records requested transitions for a later engine.

    Elements are left in their start state; `settle()` jumps every recorded
    transition to its end state.
    """

    _GEOMETRY = ("x", "y", "width", "height")

    def __init__(self) -> None:
        self.records: list[AnimationRecord] = []

    def animate_rect_geometry(self, element: SceneNode, start: CellGeometry, end: CellGeometry, duration: float) -> None:
        start_values = (start.x, start.y, start.width, start.height)
        end_values = (end.x, end.y, end.width, end.height)
        element.attributes.update(dict(zip(self._GEOMETRY, start_values)))
        self.records.append(AnimationRecord(element, self._GEOMETRY, start_values, end_values, duration))

    def animate_color(self, element: SceneNode, start: str, end: str, duration: float) -> None:
        element.attributes["fill"] = start
        self.records.append(AnimationRecord(element, ("fill",), (start,), (end,), duration))

    def records_for(self, element: SceneNode) -> list[AnimationRecord]:
        return [record for record in self.records if record.element is element]

    def settle(self) -> None:
        for record in self.records:
            record.element.attributes.update(dict(zip(record.attribute_names, record.end)))

    def clear(self) -> None:
        self.records.clear()
