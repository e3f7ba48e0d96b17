from __future__ import annotations

from glasskit_ui.geometry import RoundRect
from glasskit_ui.style.color import Color

from .draw_commands import BlurredRoundRect, DrawCommand, RoundRectFill


SOFT_SHADOW_LAYERS = 5
SOFT_SHADOW_LAYER_ALPHA = 0.15
# Blurred shadow peaks at 64/255 opacity, quantized like an 8-bit paint alpha.
SOFT_SHADOW_BLUR_ALPHA_U8 = 64
SHADOW_VISIBILITY_THRESHOLD = 0.01


def depth_shadow_commands(
    body: RoundRect,
    color: Color,
    horizontal_expansion: float,
    vertical_expansion: float,
    depth: float,
) -> list[DrawCommand]:
    """Hard extrusion shadow: widened by `horizontal_expansion` each side, dropped by depth."""

    rect = RoundRect(
        x=body.x - horizontal_expansion,
        y=body.y - horizontal_expansion,
        width=body.width + horizontal_expansion * 2.0,
        height=body.height + horizontal_expansion + vertical_expansion + depth,
        radius=body.radius,
    )
    return [RoundRectFill(rect, color)]


def soft_shadow_commands(
    body: RoundRect,
    color: Color,
    base_alpha: float,
    elevation: float,
    *,
    supports_blur: bool,
    layers: int = SOFT_SHADOW_LAYERS,
) -> list[DrawCommand]:
    if base_alpha <= SHADOW_VISIBILITY_THRESHOLD:
        return []
    if supports_blur:
        alpha = int(base_alpha * SOFT_SHADOW_BLUR_ALPHA_U8) / 255.0
        return [
            BlurredRoundRect(
                rect=body.offset(dy=elevation),
                color=color.copy(alpha=color.alpha * alpha),
                blur_radius=elevation,
            )
        ]
    return layered_shadow_commands(body, color, base_alpha, elevation, layers=layers)


def layered_shadow_commands(
    body: RoundRect,
    color: Color,
    base_alpha: float,
    elevation: float,
    *,
    layers: int = SOFT_SHADOW_LAYERS,
) -> list[DrawCommand]:
    """Blur stand-in: `layers` copies stepping down to `elevation`, each fainter than the last."""

    if layers <= 0:
        raise ValueError("layers must be > 0")
    out: list[DrawCommand] = []
    for i in range(layers):
        layer_offset = elevation * (i + 1) / layers
        layer_alpha = base_alpha * (1.0 - i / layers) * SOFT_SHADOW_LAYER_ALPHA
        out.append(RoundRectFill(body.offset(dy=layer_offset), color.copy(alpha=color.alpha * layer_alpha)))
    return out
