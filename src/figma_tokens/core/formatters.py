"""
Name and value formatters.

Pure functions turning Figma node attributes into SCSS literals:
token slugs, colors, pixel lengths, box shadows and font properties.
"""

from __future__ import annotations

import math
import re
from typing import Any

from .ir import MixinProperty

TEXT_CASE_MAPPING: dict[str, str] = {
    "UPPER": "uppercase",
    "LOWER": "lowercase",
    "TITLE": "capitalize",
}

TEXT_DECORATION_MAPPING: dict[str, str] = {
    "UNDERLINE": "underline",
    "STRIKETHROUGH": "line-through",
}

_DISALLOWED_NAME_CHARS = re.compile(r"[^\w\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")


# =============================================================================
# Numbers
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def format_number(value: Any) -> str:
    """Coerce to a plain number and render it without a trailing `.0`."""
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


# =============================================================================
# Names
# =============================================================================


def format_name(raw: str) -> str:
    """
    Turn a Figma node name into a token slug.

    "Color / Primary (Dark)" -> "color-primary-dark"
    """
    joined = " ".join(part.strip() for part in raw.split("/"))
    cleaned = _DISALLOWED_NAME_CHARS.sub("", joined.lower())
    return _WHITESPACE_RUN.sub("-", cleaned)


# =============================================================================
# Colors
# =============================================================================


def _channel(value: float) -> int:
    return round_half_up(255 * value)


def format_rgba(color: dict[str, float]) -> str:
    """Render a normalized color as `rgba(r, g, b, a)`."""
    alpha = round_half_up(100 * color.get("a", 1)) / 100
    return (
        f"rgba({_channel(color['r'])}, {_channel(color['g'])}, {_channel(color['b'])}, "
        f"{format_number(alpha)})"
    )


def format_hex(color: dict[str, float]) -> str:
    """Render a normalized color as `#rrggbb`, ignoring alpha."""
    return "#" + "".join(f"{_channel(color[c]):02x}" for c in ("r", "g", "b"))


def format_color(fill: dict[str, Any]) -> str:
    """
    Format a Figma paint as an SCSS color literal.

    A fill opacity below 1 replaces the color's own alpha. Translucent
    colors render as rgba(), opaque ones as 6-digit hex.
    """
    color = dict(fill["color"])
    opacity = fill.get("opacity")
    if opacity and opacity < 1:
        color["a"] = opacity
    if color.get("a", 1) < 1:
        return format_rgba(color)
    return format_hex(color)


# =============================================================================
# Lengths and effects
# =============================================================================


def format_length(value: Any) -> str:
    return f"{format_number(value)}px"


def format_shadow(effect: dict[str, Any]) -> str:
    """Format a drop/inner shadow effect as `x y blur color`."""
    offset = effect["offset"]
    return (
        f"{format_length(offset['x'])} {format_length(offset['y'])} "
        f"{format_length(effect['radius'])} {format_rgba(effect['color'])}"
    )


# =============================================================================
# Fonts
# =============================================================================


def font_shorthand(weight: Any, size: str, line_height: str, family: str) -> str:
    return f"{weight} {size}/{line_height} {family}"


def font_size(style: dict[str, Any]) -> str:
    return f"{round_half_up(float(style['fontSize']))}px"


def font_line_height(style: dict[str, Any]) -> str:
    return f"{round_half_up(float(style['lineHeightPx']))}px"


def font_weight(style: dict[str, Any]) -> str:
    return format_number(style["fontWeight"])


def font_extra_properties(style: dict[str, Any]) -> list[MixinProperty]:
    """Letter spacing, text transform and decoration, when set and mappable."""
    properties: list[MixinProperty] = []
    if style.get("letterSpacing"):
        properties.append(
            MixinProperty(name="letter-spacing", value=format_length(style["letterSpacing"]))
        )
    text_case = TEXT_CASE_MAPPING.get(style.get("textCase", ""))
    if text_case:
        properties.append(MixinProperty(name="text-transform", value=text_case))
    decoration = TEXT_DECORATION_MAPPING.get(style.get("textDecoration", ""))
    if decoration:
        properties.append(MixinProperty(name="text-decoration", value=decoration))
    return properties


def font_properties(style: dict[str, Any]) -> list[MixinProperty]:
    """Mixin body for a text style with literal values."""
    shorthand = font_shorthand(
        font_weight(style),
        font_size(style),
        font_line_height(style),
        style["fontFamily"],
    )
    return [MixinProperty(name="font", value=shorthand), *font_extra_properties(style)]
