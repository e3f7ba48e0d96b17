from __future__ import annotations

from dataclasses import dataclass
import math


ARC_SWEEP_DEGREES = 90.0
ARC_SEGMENTS = 50
FADE_CURVE_POWER = 1.5
MIN_STROKE_WIDTH = 0.1

Point = tuple[float, float]


def angle_to_point(cx: float, cy: float, radius: float, angle_degrees: float) -> Point:
    """Polar to Cartesian with screen axes (0 deg = right, 90 deg = down)."""

    theta = math.radians(angle_degrees)
    return (cx + radius * math.cos(theta), cy + radius * math.sin(theta))


@dataclass(frozen=True)
class RoundRect:
    x: float
    y: float
    width: float
    height: float
    radius: float = 0.0

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("RoundRect width/height must be >= 0")
        if self.radius < 0:
            raise ValueError("RoundRect radius must be >= 0")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def offset(self, dx: float = 0.0, dy: float = 0.0) -> "RoundRect":
        return RoundRect(self.x + dx, self.y + dy, self.width, self.height, self.radius)

    def inset(self, amount: float) -> "RoundRect":
        """Shrink every side by `amount`; corner radius is kept."""

        width = max(0.0, self.width - 2.0 * amount)
        height = max(0.0, self.height - 2.0 * amount)
        return RoundRect(self.x + amount, self.y + amount, width, height, self.radius)

    def effective_radius(self) -> float:
        return min(self.radius, self.width / 2.0, self.height / 2.0)


@dataclass(frozen=True)
class ArcSegment:
    start: Point
    end: Point
    progress: float
    next_progress: float


def arc_segments(
    cx: float,
    cy: float,
    radius: float,
    start_angle: float,
    *,
    sweep: float = ARC_SWEEP_DEGREES,
    segments: int = ARC_SEGMENTS,
) -> list[ArcSegment]:
    """Approximate a circular arc with `segments` straight pieces."""

    if segments <= 0:
        raise ValueError("segments must be > 0")
    out: list[ArcSegment] = []
    for i in range(segments):
        progress = i / segments
        next_progress = (i + 1) / segments
        out.append(
            ArcSegment(
                start=angle_to_point(cx, cy, radius, start_angle + sweep * progress),
                end=angle_to_point(cx, cy, radius, start_angle + sweep * next_progress),
                progress=progress,
                next_progress=next_progress,
            )
        )
    return out


def fade_factor(progress: float, *, fade_in: bool, power: float = FADE_CURVE_POWER) -> float:
    if fade_in:
        return progress**power
    return (1.0 - progress) ** power


def faded_stroke_width(
    progress: float,
    next_progress: float,
    max_width: float,
    *,
    fade_in: bool,
    power: float = FADE_CURVE_POWER,
    min_width: float = MIN_STROKE_WIDTH,
) -> float:
    """Width of one arc segment: average of the curve at both ends, floored at `min_width`."""

    factor = fade_factor(progress, fade_in=fade_in, power=power)
    next_factor = fade_factor(next_progress, fade_in=fade_in, power=power)
    return max((factor + next_factor) / 2.0 * max_width, min_width)
