"""First-party glass button core: colors, geometry, animation and renderers."""

from .animation import AnimatedFrame, AnimatedProperties, AnimatedValue, MotionSpec, SpringSpec, TweenSpec
from .controls import (
    DrawBatch,
    DrawSurface,
    GlassButtonConfig,
    GlassButtonController,
    InteractionState,
    PressEvent,
    PressStatus,
    SecondaryGlassButtonConfig,
    config_from_overrides,
    parse_press_event,
    render_button,
    render_glass_button,
    render_secondary_glass_button,
    tick,
)
from .errors import ConfigurationError
from .geometry import RoundRect, angle_to_point, arc_segments, faded_stroke_width
from .style.color import Color, adjust_brightness, lerp_color
from .text.renderer import FontSpec, TextLayoutMetrics, TextMeasureRequest, TextMeasurer, TextShadow

__all__ = [
    "AnimatedFrame",
    "AnimatedProperties",
    "AnimatedValue",
    "Color",
    "ConfigurationError",
    "DrawBatch",
    "DrawSurface",
    "FontSpec",
    "GlassButtonConfig",
    "GlassButtonController",
    "InteractionState",
    "MotionSpec",
    "PressEvent",
    "PressStatus",
    "RoundRect",
    "SecondaryGlassButtonConfig",
    "SpringSpec",
    "TextLayoutMetrics",
    "TextMeasureRequest",
    "TextMeasurer",
    "TextShadow",
    "TweenSpec",
    "adjust_brightness",
    "angle_to_point",
    "arc_segments",
    "config_from_overrides",
    "faded_stroke_width",
    "lerp_color",
    "parse_press_event",
    "render_button",
    "render_glass_button",
    "render_secondary_glass_button",
    "tick",
]
