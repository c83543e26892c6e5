from __future__ import annotations

from .colors import hex_to_rgba, shade_color


def shade_intensity_for(percent: float, has_negative_values: bool, shade_intensity: float) -> float:
    """Lighten/darken factor for a cell's intensity percent.

    With negative values anywhere in the dataset the factor is asymmetric
    around zero and scaled by `shade_intensity`. Without them the intensity
    knob is not applied.
    """

    if has_negative_values:
        if percent < 0:
            return 1 - (1 + percent / 100) * shade_intensity
        return (1 - percent / 100) * shade_intensity
    return 1 - percent / 100


def apply_shade(color_shade_percent: float, color: str, enable_shades: bool, fill_opacity: float) -> str:
    if not enable_shades:
        return color
    return hex_to_rgba(shade_color(color_shade_percent, color), fill_opacity)
