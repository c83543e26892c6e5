from __future__ import annotations

import re
from typing import Any, Sequence
import xml.etree.ElementTree as ET

from luvatrix_heatmap.scene import AnimationRecord, SceneNode

SVG_NS = "http://www.w3.org/2000/svg"
_CLIP_REF = re.compile(r"^url\(#([^)]+)\)$")


def render_svg(
    root: SceneNode,
    width: float,
    height: float,
    *,
    animations: Sequence[AnimationRecord] = (),
) -> str:
    """Serialize a heatmap scene as standalone SVG markup.

    Recorded transitions become SMIL `<animate>` elements frozen at their end values.
    """

    svg = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": _fmt(width),
            "height": _fmt(height),
            "viewBox": f"0 0 {_fmt(width)} {_fmt(height)}",
        },
    )
    defs = ET.SubElement(svg, "defs")
    by_node: dict[int, list[AnimationRecord]] = {}
    for record in animations:
        by_node.setdefault(id(record.element), []).append(record)

    shadow_nodes = [node for node in root.walk() if node.shadow is not None]
    if shadow_nodes:
        shadow = shadow_nodes[0].shadow
        assert shadow is not None
        flt = ET.SubElement(defs, "filter", {"id": "dropShadow", "x": "-50%", "y": "-50%", "width": "200%", "height": "200%"})
        ET.SubElement(
            flt,
            "feDropShadow",
            {
                "dx": _fmt(shadow.left),
                "dy": _fmt(shadow.top),
                "stdDeviation": _fmt(shadow.blur),
                "flood-color": shadow.color,
                "flood-opacity": _fmt(shadow.opacity),
            },
        )

    clip = _CLIP_REF.match(str(root.get("clip-path", "")))
    if clip is not None:
        clip_path = ET.SubElement(defs, "clipPath", {"id": clip.group(1)})
        ET.SubElement(clip_path, "rect", {"x": "0", "y": "0", "width": _fmt(width), "height": _fmt(height)})

    _append_node(svg, root, by_node)
    return ET.tostring(svg, encoding="unicode")


def _append_node(parent: ET.Element, node: SceneNode, by_node: dict[int, list[AnimationRecord]]) -> None:
    tag = {"group": "g", "rect": "rect", "text": "text"}[node.kind]
    elem = ET.SubElement(parent, tag, {_attr_name(k): _attr_value(v) for k, v in node.attributes.items()})
    if node.kind == "text":
        elem.text = node.text
    for record in by_node.get(id(node), ()):
        for name, start, end in zip(record.attribute_names, record.start, record.end):
            ET.SubElement(
                elem,
                "animate",
                {
                    "attributeName": name,
                    "from": _attr_value(start),
                    "to": _attr_value(end),
                    "dur": f"{_fmt(record.duration)}ms",
                    "fill": "freeze",
                },
            )
    for child in node.children:
        _append_node(elem, child, by_node)


def _attr_name(name: str) -> str:
    return name.replace(":", "-")


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _fmt(value)
    return str(value)


def _fmt(value: float) -> str:
    out = f"{float(value):.4f}".rstrip("0").rstrip(".")
    return "0" if out in ("", "-0") else out
