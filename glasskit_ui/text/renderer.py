from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from glasskit_ui.style.color import BLACK, Color


@dataclass(frozen=True)
class FontSpec:
    """Button label font. A `file_path` wins over the `family` lookup."""

    family: str = "Inter"
    file_path: str | None = None
    weight: int = 400

    def __post_init__(self) -> None:
        if self.file_path is None and not self.family.strip():
            raise ValueError("label font needs a family name or a file path")
        if self.file_path is not None and not str(self.file_path).strip():
            raise ValueError("label font file path is blank")
        if not 1 <= self.weight <= 1000:
            raise ValueError(f"label font weight {self.weight} outside [1, 1000]")

    @property
    def source_kind(self) -> Literal["system", "file"]:
        return "system" if self.file_path is None else "file"

    @property
    def normalized_file_path(self) -> Path | None:
        return None if self.file_path is None else Path(self.file_path).expanduser()


@dataclass(frozen=True)
class TextShadow:
    """Drop shadow under text. Offsets and blur are device pixels, not scaled by density."""

    color: Color = BLACK.copy(alpha=0.35)
    offset_x: float = 0.0
    offset_y: float = 1.25
    blur_radius: float = 2.5

    def __post_init__(self) -> None:
        if self.blur_radius < 0:
            raise ValueError("TextShadow blur_radius must be >= 0")


@dataclass(frozen=True)
class TextMeasureRequest:
    text: str
    font: FontSpec
    font_size_px: float


@dataclass(frozen=True)
class TextLayoutMetrics:
    """Measured glyph box in the units of the request."""

    width_px: float
    height_px: float
    baseline_px: float = 0.0

    def __post_init__(self) -> None:
        if self.width_px < 0 or self.height_px < 0:
            raise ValueError("TextLayoutMetrics width/height must be >= 0")


class TextMeasurer(Protocol):
    """Host text layout service; results must be a pure function of the request."""

    def measure_text(self, request: TextMeasureRequest) -> TextLayoutMetrics:
        ...
