from __future__ import annotations

from typing import Literal

from glasskit_ui.animation import AnimatedFrame
from glasskit_ui.geometry import RoundRect, arc_segments, faded_stroke_width
from glasskit_ui.style.color import Color, adjust_brightness, lerp_color
from glasskit_ui.text.renderer import FontSpec, TextLayoutMetrics, TextShadow

from .button import InteractionState
from .config import (
    MIN_TOUCH_TARGET_DP,
    ButtonConfig,
    GlassButtonConfig,
    SecondaryGlassButtonConfig,
)
from .draw_commands import (
    ClipPop,
    ClipPush,
    DrawBatch,
    DrawCommand,
    GradientStop,
    LineCommand,
    RenderFrame,
    RoundRectGradient,
    RoundRectStroke,
    TextCommand,
)
from .shadow import depth_shadow_commands, soft_shadow_commands


ButtonStyle = Literal["glass", "secondary"]

# (offset, brightness) pairs: lighter rims around a base-colored middle.
GLASS_GRADIENT_STOPS = ((0.0, 0.15), (0.25, 0.08), (0.5, 0.0), (0.75, 0.15), (1.0, 0.30))
DISABLED_DARKEN_FACTOR = -0.18
DISABLED_ALPHA = 0.8
PRESSED_DARKEN_FACTOR = -0.06
DISABLED_TEXT_ALPHA = 0.6

# Start angles of the four highlight corner arcs (sweep is +90 degrees).
TOP_LEFT_ARC = 180.0
TOP_RIGHT_ARC = 270.0
BOTTOM_LEFT_ARC = 90.0
BOTTOM_RIGHT_ARC = 0.0


def resolve_button_size(
    text_width: float,
    text_height: float,
    horizontal_padding: float,
    vertical_padding: float,
    min_width: float,
    min_height: float,
) -> tuple[float, float]:
    """Text box plus padding on both sides, never below the minimum, per axis."""

    return (
        max(text_width + horizontal_padding * 2.0, min_width),
        max(text_height + vertical_padding * 2.0, min_height),
    )


def centered_origin(outer: RoundRect, inner_width: float, inner_height: float) -> tuple[float, float]:
    return (
        outer.x + (outer.width - inner_width) / 2.0,
        outer.y + (outer.height - inner_height) / 2.0,
    )


def glass_body_stops(base: Color, state: InteractionState) -> tuple[GradientStop, ...]:
    if state is InteractionState.DISABLED:
        flat = adjust_brightness(base, DISABLED_DARKEN_FACTOR).copy(alpha=DISABLED_ALPHA)
        return (GradientStop(0.0, flat), GradientStop(1.0, flat))
    if state is InteractionState.PRESSED:
        return (GradientStop(0.0, base), GradientStop(1.0, adjust_brightness(base, PRESSED_DARKEN_FACTOR)))
    return tuple(GradientStop(offset, adjust_brightness(base, amount)) for offset, amount in GLASS_GRADIENT_STOPS)


def faded_arc_commands(
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    color: Color,
    max_width: float,
    *,
    fade_in: bool,
) -> list[LineCommand]:
    return [
        LineCommand(
            start=segment.start,
            end=segment.end,
            color=color,
            width=faded_stroke_width(segment.progress, segment.next_progress, max_width, fade_in=fade_in),
        )
        for segment in arc_segments(cx, cy, radius, start_angle)
    ]


def edge_commands(body: RoundRect, color: Color, stroke_width: float, *, is_top: bool) -> list[LineCommand]:
    """Left corner arc, straight run, right corner arc along one horizontal edge.

    The top edge fades in at the left corner and out at the right; the bottom
    edge does the opposite, so light appears to enter top-left and leave
    bottom-right.
    """

    radius = body.effective_radius()
    y = body.y if is_top else body.bottom
    center_y = y + radius if is_top else y - radius
    left_angle, right_angle = (TOP_LEFT_ARC, TOP_RIGHT_ARC) if is_top else (BOTTOM_LEFT_ARC, BOTTOM_RIGHT_ARC)
    out = faded_arc_commands(body.x + radius, center_y, radius, left_angle, color, stroke_width, fade_in=is_top)
    out.append(LineCommand(start=(body.x + radius, y), end=(body.right - radius, y), color=color, width=stroke_width))
    out.extend(faded_arc_commands(body.right - radius, center_y, radius, right_angle, color, stroke_width, fade_in=not is_top))
    return out


def edge_highlight_commands(
    body: RoundRect,
    color: Color,
    *,
    top_opacity: float,
    bottom_opacity: float,
    stroke_width: float,
) -> list[LineCommand]:
    return edge_commands(body, color.copy(alpha=top_opacity), stroke_width, is_top=True) + edge_commands(
        body, color.copy(alpha=bottom_opacity), stroke_width, is_top=False
    )


def text_command(
    text: str,
    body: RoundRect,
    measured: TextLayoutMetrics | None,
    *,
    color: Color,
    font: FontSpec,
    font_size: float,
    density: float,
    shadow: TextShadow | None = None,
) -> list[DrawCommand]:
    if not text or measured is None:
        return []
    text_w = measured.width_px * density
    text_h = measured.height_px * density
    x, y = centered_origin(body, text_w, text_h)
    return [TextCommand(text=text, x=x, y=y, color=color, font=font, font_size_px=font_size * density, shadow=shadow)]


def render_glass_button(
    config: GlassButtonConfig,
    state: InteractionState,
    frame: AnimatedFrame,
    measured_text: TextLayoutMetrics | None = None,
    *,
    density: float = 1.0,
    supports_blur: bool = True,
    component_id: str = "glass_button",
) -> DrawBatch:
    """Draw commands for the primary glass button.

    `measured_text` is in device-independent units; omit it to get the fixed
    default size with no label, since unmeasured text cannot be centered.
    `supports_blur` is accepted for a uniform signature; the depth shadow is
    always hard-edged.
    """

    _require_density(density)
    text_w = measured_text.width_px if measured_text else 0.0
    text_h = measured_text.height_px if measured_text else 0.0
    width, height = resolve_button_size(
        text_w,
        text_h,
        config.content_padding,
        config.content_padding,
        max(config.min_width, MIN_TOUCH_TARGET_DP),
        max(config.min_height, MIN_TOUCH_TARGET_DP),
    )
    y_offset = frame["y_offset"] * density
    body = RoundRect(0.0, y_offset, width * density, height * density, config.corner_radius * density)

    commands: list[DrawCommand] = []
    commands.extend(
        depth_shadow_commands(
            body,
            config.resolved_shadow_color,
            frame["shadow_horizontal"] * density,
            frame["shadow_vertical"] * density,
            frame["depth"] * density,
        )
    )
    commands.append(ClipPush(body))
    commands.append(RoundRectGradient(body, glass_body_stops(config.background_color, state)))
    commands.extend(
        edge_highlight_commands(
            body,
            config.edge_highlight_color,
            top_opacity=config.top_edge_highlight_opacity,
            bottom_opacity=config.bottom_edge_highlight_opacity,
            stroke_width=config.edge_highlight_stroke_width * density,
        )
    )
    commands.append(ClipPop())
    text_color = config.text_color
    if state is InteractionState.DISABLED:
        text_color = text_color.copy(alpha=DISABLED_TEXT_ALPHA)
    commands.extend(
        text_command(
            config.text,
            body,
            measured_text,
            color=text_color,
            font=config.font,
            font_size=config.font_size,
            density=density,
            shadow=config.text_shadow,
        )
    )
    return DrawBatch(
        component_id=component_id,
        frame=RenderFrame(body.width, body.height, body.radius, y_offset, density),
        commands=tuple(commands),
    )


def render_secondary_glass_button(
    config: SecondaryGlassButtonConfig,
    state: InteractionState,
    frame: AnimatedFrame,
    measured_text: TextLayoutMetrics | None,
    *,
    density: float = 1.0,
    supports_blur: bool = True,
    component_id: str = "secondary_glass_button",
) -> DrawBatch:
    """Draw commands for the text-sized secondary glass button."""

    _require_density(density)
    text_w = measured_text.width_px if measured_text else 0.0
    text_h = measured_text.height_px if measured_text else 0.0
    width, height = resolve_button_size(
        text_w,
        text_h,
        config.horizontal_padding,
        config.vertical_padding,
        config.min_width,
        config.min_height,
    )
    # Press offset snaps to whole device pixels.
    y_offset = float(round(frame["y_offset"] * density))
    body = RoundRect(0.0, y_offset, width * density, height * density, config.corner_radius * density)
    stroke_width = config.border_width * density

    commands: list[DrawCommand] = []
    commands.extend(
        soft_shadow_commands(
            body,
            config.shadow_color,
            _unit(frame["shadow_alpha"]),
            config.shadow_elevation * density,
            supports_blur=supports_blur,
        )
    )
    base = lerp_color(config.base_color, config.pressed_background_color, _unit(frame["background_color_blend"]))
    commands.append(
        RoundRectGradient(
            body,
            (
                GradientStop(0.0, base.copy(alpha=_unit(frame["gradient_top_alpha"]))),
                GradientStop(1.0, base.copy(alpha=_unit(frame["gradient_bottom_alpha"]))),
            ),
        )
    )
    if stroke_width > 0:
        border = lerp_color(config.normal_border_color, config.pressed_border_color, _unit(frame["border_color_blend"]))
        commands.append(RoundRectStroke(body.inset(stroke_width / 2.0), border.copy(alpha=_unit(frame["border_alpha"])), stroke_width))
    text_color = config.text_color
    if state is InteractionState.DISABLED:
        text_color = text_color.copy(alpha=DISABLED_TEXT_ALPHA)
    commands.extend(
        text_command(
            config.text,
            body,
            measured_text,
            color=text_color,
            font=config.font,
            font_size=config.font_size,
            density=density,
        )
    )
    return DrawBatch(
        component_id=component_id,
        frame=RenderFrame(body.width, body.height, body.radius, y_offset, density),
        commands=tuple(commands),
    )


def render_button(
    config: ButtonConfig,
    state: InteractionState,
    frame: AnimatedFrame,
    measured_text: TextLayoutMetrics | None = None,
    *,
    density: float = 1.0,
    supports_blur: bool = True,
    component_id: str | None = None,
) -> DrawBatch:
    style: ButtonStyle = config.variant
    if style == "glass":
        assert isinstance(config, GlassButtonConfig)
        return render_glass_button(
            config,
            state,
            frame,
            measured_text,
            density=density,
            supports_blur=supports_blur,
            component_id=component_id or "glass_button",
        )
    assert isinstance(config, SecondaryGlassButtonConfig)
    return render_secondary_glass_button(
        config,
        state,
        frame,
        measured_text,
        density=density,
        supports_blur=supports_blur,
        component_id=component_id or "secondary_glass_button",
    )


def _require_density(density: float) -> None:
    if density <= 0:
        raise ValueError("density must be > 0")


def _unit(value: float) -> float:
    return max(0.0, min(1.0, value))
