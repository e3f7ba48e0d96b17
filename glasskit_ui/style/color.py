from __future__ import annotations

from dataclasses import dataclass
import re

from glasskit_ui.errors import ConfigurationError

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


@dataclass(frozen=True)
class Color:
    """Straight-alpha RGBA color with float channels in [0, 1]."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        raw = value.strip()
        if not _HEX_COLOR.match(raw):
            raise ConfigurationError(f"color must be #RRGGBB or #RRGGBBAA, got `{value}`")
        r = int(raw[1:3], 16)
        g = int(raw[3:5], 16)
        b = int(raw[5:7], 16)
        a = int(raw[7:9], 16) if len(raw) == 9 else 255
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def copy(self, alpha: float | None = None) -> "Color":
        if alpha is None:
            return self
        return Color(self.red, self.green, self.blue, alpha)

    def channels(self) -> tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.alpha)

    def is_normalized(self) -> bool:
        return all(0.0 <= c <= 1.0 for c in self.channels())

    def to_rgba_u8(self) -> tuple[int, int, int, int]:
        r, g, b, a = (int(round(_clamp_unit(c) * 255.0)) for c in self.channels())
        return (r, g, b, a)

    def to_hex(self) -> str:
        r, g, b, a = self.to_rgba_u8()
        return f"#{r:02X}{g:02X}{b:02X}{a:02X}"


WHITE = Color(1.0, 1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0, 1.0)
TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)


def adjust_brightness(color: Color, factor: float) -> Color:
    """Lighten (factor >= 0) toward white or darken (factor < 0) toward black.

    Lightening moves each channel `factor` of the way to 1.0; darkening scales
    each channel by `1 - |factor|`. The two are not inverses of each other.
    Alpha is left untouched.
    """

    if factor >= 0:
        return Color(
            red=_clamp_unit(color.red + (1.0 - color.red) * factor),
            green=_clamp_unit(color.green + (1.0 - color.green) * factor),
            blue=_clamp_unit(color.blue + (1.0 - color.blue) * factor),
            alpha=color.alpha,
        )
    amount = -factor
    return Color(
        red=_clamp_unit(color.red * (1.0 - amount)),
        green=_clamp_unit(color.green * (1.0 - amount)),
        blue=_clamp_unit(color.blue * (1.0 - amount)),
        alpha=color.alpha,
    )


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_color(a: Color, b: Color, t: float) -> Color:
    """Per-channel interpolation. `t` is the caller's responsibility; output is clamped."""

    return Color(
        red=_clamp_unit(lerp(a.red, b.red, t)),
        green=_clamp_unit(lerp(a.green, b.green, t)),
        blue=_clamp_unit(lerp(a.blue, b.blue, t)),
        alpha=_clamp_unit(lerp(a.alpha, b.alpha, t)),
    )


def parse_color(value: object, *, field_name: str = "color") -> Color:
    if isinstance(value, Color):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(f"`{field_name}` must be a hex color (#RRGGBB or #RRGGBBAA)")
    try:
        return Color.from_hex(value)
    except ConfigurationError as exc:
        raise ConfigurationError(f"`{field_name}`: {exc}") from exc


def _clamp_unit(value: float) -> float:
    return max(0.0, min(1.0, value))
