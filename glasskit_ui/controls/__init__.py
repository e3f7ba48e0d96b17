"""Glass button controls: state machine, renderers and controller."""

from .button import InteractionState, PressStatus, TransitionResult, transition, transition_for_press
from .config import (
    ButtonConfig,
    ButtonVariant,
    GlassButtonConfig,
    SecondaryGlassButtonConfig,
    config_from_overrides,
)
from .draw_commands import (
    BlurredRoundRect,
    ClipPop,
    ClipPush,
    DrawBatch,
    DrawCommand,
    DrawSurface,
    GradientStop,
    LineCommand,
    RenderFrame,
    RoundRectFill,
    RoundRectGradient,
    RoundRectStroke,
    TextCommand,
)
from .glass_button import GlassButtonController, tick
from .interaction import PressEvent, PressPhase, parse_press_event
from .surface import render_button, render_glass_button, render_secondary_glass_button, resolve_button_size
from .variants import animation_targets, resting_frame

__all__ = [
    "BlurredRoundRect",
    "ButtonConfig",
    "ButtonVariant",
    "ClipPop",
    "ClipPush",
    "DrawBatch",
    "DrawCommand",
    "DrawSurface",
    "GlassButtonConfig",
    "GlassButtonController",
    "GradientStop",
    "InteractionState",
    "LineCommand",
    "PressEvent",
    "PressPhase",
    "PressStatus",
    "RenderFrame",
    "RoundRectFill",
    "RoundRectGradient",
    "RoundRectStroke",
    "SecondaryGlassButtonConfig",
    "TextCommand",
    "TransitionResult",
    "animation_targets",
    "config_from_overrides",
    "parse_press_event",
    "render_button",
    "render_glass_button",
    "render_secondary_glass_button",
    "resolve_button_size",
    "resting_frame",
    "tick",
    "transition",
    "transition_for_press",
]
