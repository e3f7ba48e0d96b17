from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from glasskit_ui.geometry import Point, RoundRect
from glasskit_ui.style.color import Color
from glasskit_ui.text.renderer import FontSpec, TextShadow


@dataclass(frozen=True)
class GradientStop:
    offset: float
    color: Color

    def __post_init__(self) -> None:
        if self.offset < 0.0 or self.offset > 1.0:
            raise ValueError("GradientStop offset must be in [0, 1]")


@dataclass(frozen=True)
class RoundRectFill:
    rect: RoundRect
    color: Color


@dataclass(frozen=True)
class RoundRectStroke:
    """Stroke centered on the rect outline."""

    rect: RoundRect
    color: Color
    stroke_width: float


@dataclass(frozen=True)
class RoundRectGradient:
    """Vertical gradient spanning the rect's top (offset 0) to bottom (offset 1)."""

    rect: RoundRect
    stops: tuple[GradientStop, ...]


@dataclass(frozen=True)
class BlurredRoundRect:
    """Optional capability; only emitted when the surface reports `supports_blur`."""

    rect: RoundRect
    color: Color
    blur_radius: float


@dataclass(frozen=True)
class LineCommand:
    start: Point
    end: Point
    color: Color
    width: float


@dataclass(frozen=True)
class ClipPush:
    rect: RoundRect


@dataclass(frozen=True)
class ClipPop:
    pass


@dataclass(frozen=True)
class TextCommand:
    text: str
    x: float
    y: float
    color: Color
    font: FontSpec
    font_size_px: float
    shadow: TextShadow | None = None


DrawCommand = Union[
    RoundRectFill,
    RoundRectStroke,
    RoundRectGradient,
    BlurredRoundRect,
    LineCommand,
    ClipPush,
    ClipPop,
    TextCommand,
]


@dataclass(frozen=True)
class RenderFrame:
    """Resolved per-tick geometry in device pixels. Discarded after the draw."""

    width: float
    height: float
    corner_radius: float
    y_offset: float
    density: float


@dataclass(frozen=True)
class DrawBatch:
    component_id: str
    frame: RenderFrame
    commands: tuple[DrawCommand, ...]

    def of_type(self, kind: type) -> list:
        return [c for c in self.commands if isinstance(c, kind)]


class DrawSurface(Protocol):
    """Backend-agnostic drawing surface consuming one batch per button per frame."""

    density: float
    supports_blur: bool

    def draw_batch(self, batch: DrawBatch) -> None:
        ...
