from __future__ import annotations

from glasskit_ui.animation import AnimatedFrame, AnimatedProperties

from .button import InteractionState, PressStatus
from .config import ButtonConfig, GlassButtonConfig, SecondaryGlassButtonConfig


GLASS_PROPERTIES = ("depth", "y_offset", "shadow_horizontal", "shadow_vertical")
SECONDARY_PROPERTIES = (
    "shadow_alpha",
    "y_offset",
    "gradient_top_alpha",
    "gradient_bottom_alpha",
    "border_alpha",
    "border_color_blend",
    "background_color_blend",
)


def glass_targets(config: GlassButtonConfig, status: PressStatus) -> dict[str, float]:
    pressed = status.pressed_and_enabled
    return {
        "depth": 0.0 if status.pressed_or_disabled else config.depth,
        "y_offset": config.depth if pressed else 0.0,
        "shadow_horizontal": config.shadow_pressed_expansion if pressed else config.shadow_horizontal_expansion,
        "shadow_vertical": config.shadow_pressed_expansion if pressed else config.shadow_vertical_expansion,
    }


def secondary_targets(config: SecondaryGlassButtonConfig, status: PressStatus) -> dict[str, float]:
    # Disabled rests on the idle column.
    pressed = status.state is InteractionState.PRESSED
    top, bottom = config.pressed_gradient_alphas if pressed else config.normal_gradient_alphas
    return {
        "shadow_alpha": 0.0 if pressed else 1.0,
        "y_offset": config.press_offset if pressed else 0.0,
        "gradient_top_alpha": top,
        "gradient_bottom_alpha": bottom,
        "border_alpha": config.pressed_border_alpha if pressed else config.normal_border_alpha,
        "border_color_blend": 1.0 if pressed else 0.0,
        "background_color_blend": 1.0 if pressed else 0.0,
    }


def animation_targets(config: ButtonConfig, status: PressStatus) -> dict[str, float]:
    if isinstance(config, GlassButtonConfig):
        return glass_targets(config, status)
    return secondary_targets(config, status)


def resting_frame(config: ButtonConfig, status: PressStatus) -> AnimatedFrame:
    """Frame the animation converges to for `status`."""

    return AnimatedFrame(animation_targets(config, status))


def build_properties(config: ButtonConfig, status: PressStatus) -> AnimatedProperties:
    initial = animation_targets(config, status)
    return AnimatedProperties(initial, {name: config.motion for name in initial})
