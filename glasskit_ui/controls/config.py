from __future__ import annotations

from dataclasses import dataclass, field, fields
import math
from typing import Any, ClassVar, Literal, Mapping, Union

from glasskit_ui.animation import MotionSpec, SpringSpec, TweenSpec
from glasskit_ui.errors import ConfigurationError
from glasskit_ui.style.color import BLACK, WHITE, Color, adjust_brightness, parse_color
from glasskit_ui.text.renderer import FontSpec, TextShadow


ButtonVariant = Literal["glass", "secondary"]

MIN_TOUCH_TARGET_DP = 48.0


@dataclass(frozen=True)
class GlassButtonConfig:
    """Primary glass button: 3D depth shadow, 5-stop body, faded edge highlights.

    All spatial values are device-independent and scaled by the surface density.
    `min_width`/`min_height` act as the button's default size; long text grows it.
    """

    variant: ClassVar[ButtonVariant] = "glass"

    text: str = "Start"
    background_color: Color = Color.from_hex("#50B58D")
    text_color: Color = WHITE
    corner_radius: float = 19.0
    depth: float = 12.0
    shadow_horizontal_expansion: float = 2.0
    shadow_vertical_expansion: float = 12.0
    shadow_pressed_expansion: float = 1.0
    shadow_color: Color | None = None
    shadow_darken_amount: float = 0.28
    edge_highlight_color: Color = WHITE
    top_edge_highlight_opacity: float = 0.15
    bottom_edge_highlight_opacity: float = 0.35
    edge_highlight_stroke_width: float = 4.0
    font: FontSpec = field(default_factory=lambda: FontSpec(family="PT Sans", weight=500))
    font_size: float = 48.0
    text_shadow: TextShadow | None = field(default_factory=TextShadow)
    content_padding: float = 48.0
    min_width: float = 224.0
    min_height: float = 236.0
    motion: MotionSpec = field(default_factory=lambda: TweenSpec(duration_ms=150.0))

    def __post_init__(self) -> None:
        _require_non_negative(
            self,
            (
                "corner_radius",
                "depth",
                "shadow_horizontal_expansion",
                "shadow_vertical_expansion",
                "shadow_pressed_expansion",
                "edge_highlight_stroke_width",
                "content_padding",
                "min_width",
                "min_height",
            ),
        )
        _require_unit(self, ("shadow_darken_amount", "top_edge_highlight_opacity", "bottom_edge_highlight_opacity"))
        _require_colors(self, ("background_color", "text_color", "shadow_color", "edge_highlight_color"))
        _require_positive(self, ("font_size",))
        _require_motion(self.motion)

    @property
    def resolved_shadow_color(self) -> Color:
        if self.shadow_color is not None:
            return self.shadow_color
        return adjust_brightness(self.background_color, -self.shadow_darken_amount)


@dataclass(frozen=True)
class SecondaryGlassButtonConfig:
    """Secondary glass button: translucent 2-stop body, animated border, soft shadow."""

    variant: ClassVar[ButtonVariant] = "secondary"

    text: str = "Cancel"
    base_color: Color = Color.from_hex("#6883A9")
    pressed_background_color: Color = Color.from_hex("#6883A9")
    normal_gradient_alphas: tuple[float, float] = (0.35, 0.25)
    pressed_gradient_alphas: tuple[float, float] = (0.2, 0.15)
    normal_border_color: Color = WHITE
    pressed_border_color: Color = BLACK
    normal_border_alpha: float = 0.05
    pressed_border_alpha: float = 0.7
    border_width: float = 1.0
    corner_radius: float = 16.0
    min_width: float = 150.0
    min_height: float = 52.0
    horizontal_padding: float = 24.0
    vertical_padding: float = 14.0
    shadow_elevation: float = 4.0
    shadow_color: Color = BLACK
    press_offset: float = 2.0
    font: FontSpec = field(default_factory=lambda: FontSpec(family="Inter", weight=600))
    font_size: float = 18.0
    text_color: Color = WHITE
    motion: MotionSpec = field(default_factory=SpringSpec)

    def __post_init__(self) -> None:
        _require_non_negative(
            self,
            (
                "border_width",
                "corner_radius",
                "min_width",
                "min_height",
                "horizontal_padding",
                "vertical_padding",
                "shadow_elevation",
                "press_offset",
            ),
        )
        _require_unit(self, ("normal_border_alpha", "pressed_border_alpha"))
        for name in ("normal_gradient_alphas", "pressed_gradient_alphas"):
            pair = getattr(self, name)
            if len(pair) != 2:
                raise ConfigurationError(f"`{name}` must be a (top, bottom) pair")
            for value in pair:
                _check_unit(name, value)
        _require_colors(
            self,
            ("base_color", "pressed_background_color", "normal_border_color", "pressed_border_color", "shadow_color", "text_color"),
        )
        _require_positive(self, ("font_size",))
        _require_motion(self.motion)


ButtonConfig = Union[GlassButtonConfig, SecondaryGlassButtonConfig]

_CONFIG_TYPES: dict[str, type] = {
    "glass": GlassButtonConfig,
    "secondary": SecondaryGlassButtonConfig,
}


def config_from_overrides(variant: ButtonVariant, overrides: Mapping[str, Any] | None = None) -> ButtonConfig:
    """Merge plain-data overrides (e.g. a TOML table) over the variant defaults.

    Colors are hex strings, pairs are 2-item lists, `font` and `text_shadow`
    and `motion` are nested tables. Unknown keys are rejected.
    """

    config_type = _CONFIG_TYPES.get(variant)
    if config_type is None:
        raise ConfigurationError(f"Unknown button variant: {variant}")
    known = {f.name: f for f in fields(config_type)}
    for key in overrides or {}:
        if key not in known:
            raise ConfigurationError(f"Unknown {variant} button option: {key}")
    try:
        kwargs = {key: _coerce_option(key, value) for key, value in (overrides or {}).items()}
        return config_type(**kwargs)
    except ConfigurationError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(str(exc)) from exc


def _coerce_option(key: str, value: Any) -> Any:
    if key.endswith("color"):
        if value is None and key == "shadow_color":
            return None
        return parse_color(value, field_name=key)
    if key.endswith("_alphas"):
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"`{key}` must be a (top, bottom) pair")
        return tuple(float(v) for v in value)
    if key == "font":
        if not isinstance(value, Mapping):
            raise ConfigurationError("`font` must be a table")
        return FontSpec(**dict(value))
    if key == "text_shadow":
        if value is None or value is False:
            return None
        if not isinstance(value, Mapping):
            raise ConfigurationError("`text_shadow` must be a table")
        raw = dict(value)
        if "color" in raw:
            raw["color"] = parse_color(raw["color"], field_name="text_shadow.color")
        return TextShadow(**raw)
    if key == "motion":
        return _coerce_motion(value)
    if key == "text":
        return str(value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"`{key}` must be a number")
    return float(value)


def _coerce_motion(value: Any) -> MotionSpec:
    if isinstance(value, (TweenSpec, SpringSpec)):
        return value
    if not isinstance(value, Mapping):
        raise ConfigurationError("`motion` must be a table")
    raw = dict(value)
    kind = raw.pop("kind", "tween" if "duration_ms" in raw else "spring")
    if kind == "tween":
        return TweenSpec(**{k: float(v) for k, v in raw.items()})
    if kind == "spring":
        return SpringSpec(**{k: float(v) for k, v in raw.items()})
    raise ConfigurationError(f"Unknown motion kind: {kind}")


def _require_non_negative(config: object, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(config, name)
        if not math.isfinite(value) or value < 0:
            raise ConfigurationError(f"`{name}` must be >= 0, got {value}")


def _require_positive(config: object, names: tuple[str, ...]) -> None:
    for name in names:
        value = getattr(config, name)
        if not math.isfinite(value) or value <= 0:
            raise ConfigurationError(f"`{name}` must be > 0, got {value}")


def _require_unit(config: object, names: tuple[str, ...]) -> None:
    for name in names:
        _check_unit(name, getattr(config, name))


def _check_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"`{name}` must be in [0, 1], got {value}")


def _require_colors(config: object, names: tuple[str, ...]) -> None:
    for name in names:
        color = getattr(config, name)
        if color is None:
            continue
        if not isinstance(color, Color) or not color.is_normalized():
            raise ConfigurationError(f"`{name}` must be a Color with channels in [0, 1]")


def _require_motion(motion: object) -> None:
    if not isinstance(motion, (TweenSpec, SpringSpec)):
        raise ConfigurationError("`motion` must be a TweenSpec or SpringSpec")
