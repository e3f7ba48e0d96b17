"""Text measurement contracts for glasskit UI."""

from .renderer import (
    FontSpec,
    TextLayoutMetrics,
    TextMeasureRequest,
    TextMeasurer,
    TextShadow,
)

__all__ = [
    "FontSpec",
    "TextLayoutMetrics",
    "TextMeasureRequest",
    "TextMeasurer",
    "TextShadow",
]
