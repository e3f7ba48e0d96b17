"""Color model for glasskit UI."""

from .color import BLACK, TRANSPARENT, WHITE, Color, adjust_brightness, lerp, lerp_color, parse_color

__all__ = [
    "BLACK",
    "Color",
    "TRANSPARENT",
    "WHITE",
    "adjust_brightness",
    "lerp",
    "lerp_color",
    "parse_color",
]
