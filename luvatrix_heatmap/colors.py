from __future__ import annotations

import math
import re

RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_RGB_COLOR = re.compile(
    r"^rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$",
    re.IGNORECASE,
)


def is_color(value: object) -> bool:
    if not isinstance(value, str):
        return False
    text = value.strip()
    return bool(_HEX_COLOR.match(text) or _RGB_COLOR.match(text))


def parse_rgba_tuple(color: str) -> RGBA:
    """Parse `#RGB`, `#RRGGBB`, `#RRGGBBAA`, `rgb()` or `rgba()` into 0-255 channels."""

    text = color.strip()
    if _HEX_COLOR.match(text):
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        r = int(digits[0:2], 16)
        g = int(digits[2:4], 16)
        b = int(digits[4:6], 16)
        a = int(digits[6:8], 16) if len(digits) == 8 else 255
        return (r, g, b, a)
    match = _RGB_COLOR.match(text)
    if match is None:
        raise ValueError(f"unsupported color: {color!r}")
    r, g, b = (_clamp_channel(int(match.group(k))) for k in (1, 2, 3))
    alpha = match.group(4)
    a = 255 if alpha is None else _clamp_channel(int(round(float(alpha) * 255)))
    return (r, g, b, a)


def shade_color(percent: float, color: str) -> str:
    """Blend `color` toward white (percent > 0) or black (percent < 0).

    `abs(percent)` is the blend fraction. Hex input yields `#rrggbb`, rgb(a)
    input yields `rgb(r,g,b)`.
    """

    r, g, b, _ = parse_rgba_tuple(color)
    target = 0 if percent < 0 else 255
    p = -percent if percent < 0 else percent
    shaded = tuple(_clamp_channel(int(_round_half_up((target - c) * p)) + c) for c in (r, g, b))
    if color.strip().startswith("#"):
        return "#{:02x}{:02x}{:02x}".format(*shaded)
    return "rgb({},{},{})".format(*shaded)


def hex_to_rgba(color: str, opacity: float) -> str:
    r, g, b, _ = parse_rgba_tuple(color)
    return f"rgba({r},{g},{b},{_format_opacity(opacity)})"


def rgb_to_hex(color: str) -> str:
    """Return `#rrggbb` for any supported color, dropping its alpha."""

    r, g, b, _ = parse_rgba_tuple(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def _round_half_up(value: float) -> float:
    # Halves round toward +inf, as browser colour math does.
    return float(math.floor(value + 0.5))


def _clamp_channel(value: int) -> int:
    return max(0, min(255, value))


def _format_opacity(opacity: float) -> str:
    out = f"{float(opacity):.6f}".rstrip("0").rstrip(".")
    return out or "0"
