from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
import json
import math
from pathlib import Path
from typing import Any, Callable, Mapping

from .colors import is_color
from .errors import HeatmapConfigError

LabelFormatter = Callable[[float, Any], str]


def _require_color(owner: str, value: object) -> None:
    if not is_color(value):
        raise HeatmapConfigError(f"{owner} must be a color (#RRGGBB, #RRGGBBAA or rgb()/rgba())")


def _require_finite(owner: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(float(value)):
        raise HeatmapConfigError(f"{owner} must be a finite number")


@dataclass(frozen=True)
class ColorRange:
    from_value: float
    to_value: float
    color: str

    def __post_init__(self) -> None:
        _require_finite("ColorRange.from", self.from_value)
        _require_finite("ColorRange.to", self.to_value)
        _require_color("ColorRange.color", self.color)

    def matches(self, value: float) -> bool:
        return self.from_value <= value <= self.to_value


@dataclass(frozen=True)
class ColorScale:
    # Declaration order matters: later matches override earlier ones.
    ranges: tuple[ColorRange, ...] = ()


@dataclass(frozen=True)
class DataLabelsOptions:
    enabled: bool = False
    offset_x: float = 0.0
    offset_y: float = 0.0
    font_size: float | str = "12px"
    font_family: str = "Comic Mono"
    color: str = "#FFFFFF"
    formatter: LabelFormatter | None = None

    def __post_init__(self) -> None:
        _require_finite("data_labels.offset_x", self.offset_x)
        _require_finite("data_labels.offset_y", self.offset_y)
        _require_color("data_labels.color", self.color)
        if self.formatter is not None and not callable(self.formatter):
            raise HeatmapConfigError("data_labels.formatter must be callable")


@dataclass(frozen=True)
class DynamicAnimationOptions:
    enabled: bool = True
    speed: float = 350.0

    def __post_init__(self) -> None:
        _require_finite("animations.dynamic_animation.speed", self.speed)
        if self.speed < 0:
            raise HeatmapConfigError("animations.dynamic_animation.speed must be >= 0")


@dataclass(frozen=True)
class AnimationOptions:
    enabled: bool = True
    speed: float = 800.0
    dynamic_animation: DynamicAnimationOptions = field(default_factory=DynamicAnimationOptions)

    def __post_init__(self) -> None:
        _require_finite("animations.speed", self.speed)
        if self.speed < 0:
            raise HeatmapConfigError("animations.speed must be >= 0")


@dataclass(frozen=True)
class DropShadowOptions:
    enabled: bool = False
    top: float = 2.0
    left: float = 2.0
    blur: float = 4.0
    opacity: float = 0.35
    color: str = "#000000"

    def __post_init__(self) -> None:
        _require_color("drop_shadow.color", self.color)
        if self.blur < 0:
            raise HeatmapConfigError("drop_shadow.blur must be >= 0")
        if self.opacity < 0.0 or self.opacity > 1.0:
            raise HeatmapConfigError("drop_shadow.opacity must be in [0, 1]")


@dataclass(frozen=True)
class HeatmapOptions:
    """Recognized heatmap configuration, fixed for the duration of one draw."""

    radius: float = 2.0
    stroke_width: float = 2.0
    stroke_colors: tuple[str, ...] = ("#FFFFFF",)
    color_scale: ColorScale = field(default_factory=ColorScale)
    shade_intensity: float = 0.5
    enable_shades: bool = True
    fill_opacity: float = 1.0
    data_labels: DataLabelsOptions = field(default_factory=DataLabelsOptions)
    animations: AnimationOptions = field(default_factory=AnimationOptions)
    drop_shadow: DropShadowOptions = field(default_factory=DropShadowOptions)

    def __post_init__(self) -> None:
        _require_finite("radius", self.radius)
        _require_finite("stroke_width", self.stroke_width)
        _require_finite("shade_intensity", self.shade_intensity)
        _require_finite("fill_opacity", self.fill_opacity)
        if self.radius < 0:
            raise HeatmapConfigError("radius must be >= 0")
        if self.stroke_width < 0:
            raise HeatmapConfigError("stroke_width must be >= 0")
        if self.fill_opacity < 0.0 or self.fill_opacity > 1.0:
            raise HeatmapConfigError("fill_opacity must be in [0, 1]")
        if not self.stroke_colors:
            raise HeatmapConfigError("stroke_colors must not be empty")
        for color in self.stroke_colors:
            _require_color("stroke_colors[]", color)

    @property
    def stroke_color(self) -> str:
        return self.stroke_colors[0]


@dataclass(frozen=True)
class RenderFlags:
    """Per-draw flags supplied by the chart around the heatmap core."""

    data_changed: bool = False
    resized: bool = False
    has_negative_values: bool | None = None


DEFAULT_OPTIONS = HeatmapOptions()

_NESTED: dict[str, type] = {
    "data_labels": DataLabelsOptions,
    "animations": AnimationOptions,
    "dynamic_animation": DynamicAnimationOptions,
    "drop_shadow": DropShadowOptions,
}


def options_from_dict(payload: Mapping[str, Any] | None = None) -> HeatmapOptions:
    """Merge a nested snake_case mapping over the defaults.

    Unknown keys are rejected so typos in option files fail loudly.
    """

    return _build(HeatmapOptions, payload or {}, prefix="")


def load_heatmap_options(path: str | Path) -> HeatmapOptions:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise HeatmapConfigError("heatmap options file must contain a JSON object")
    return options_from_dict(raw)


def _build(cls: type, payload: Mapping[str, Any], *, prefix: str) -> Any:
    if not isinstance(payload, Mapping):
        raise HeatmapConfigError(f"`{prefix.rstrip('.') or 'options'}` must be a mapping")
    known = {f.name: f for f in dataclasses.fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in payload.items():
        if key not in known:
            raise HeatmapConfigError(f"Unknown heatmap option: {prefix}{key}")
        if key in _NESTED:
            kwargs[key] = _build(_NESTED[key], value, prefix=f"{prefix}{key}.")
        elif key == "color_scale":
            kwargs[key] = _color_scale_from_dict(value)
        elif key == "stroke_colors":
            if isinstance(value, str):
                value = [value]
            kwargs[key] = tuple(value)
        else:
            kwargs[key] = value
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise HeatmapConfigError(f"invalid heatmap option under `{prefix or 'options'}`: {exc}") from exc


def _color_scale_from_dict(payload: Any) -> ColorScale:
    if not isinstance(payload, Mapping):
        raise HeatmapConfigError("`color_scale` must be a mapping")
    unknown = set(payload) - {"ranges"}
    if unknown:
        raise HeatmapConfigError(f"Unknown heatmap option: color_scale.{sorted(unknown)[0]}")
    ranges: list[ColorRange] = []
    for idx, item in enumerate(payload.get("ranges", ())):
        if not isinstance(item, Mapping):
            raise HeatmapConfigError(f"color_scale.ranges[{idx}] must be a mapping")
        missing = [k for k in ("from", "to", "color") if k not in item]
        if missing:
            raise HeatmapConfigError(f"color_scale.ranges[{idx}] missing `{missing[0]}`")
        ranges.append(ColorRange(from_value=item["from"], to_value=item["to"], color=item["color"]))
    return ColorScale(ranges=tuple(ranges))

