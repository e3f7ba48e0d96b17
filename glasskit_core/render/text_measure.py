from __future__ import annotations

from dataclasses import dataclass, field

from glasskit_ui.text.renderer import TextLayoutMetrics, TextMeasureRequest

from .fonts import load_font, resolve_font_path, text_bbox


@dataclass
class PillowTextMeasurer:
    """Glyph-box text measurement backed by Pillow fonts, cached per request."""

    _cache: dict[TextMeasureRequest, TextLayoutMetrics] = field(default_factory=dict, repr=False)

    def measure_text(self, request: TextMeasureRequest) -> TextLayoutMetrics:
        if request.font_size_px <= 0:
            raise ValueError("font size must be > 0")
        cached = self._cache.get(request)
        if cached is not None:
            return cached
        font = load_font(resolve_font_path(request.font), request.font_size_px)
        ascent, _descent = _font_metrics(font, request.font_size_px)
        if not request.text:
            metrics = TextLayoutMetrics(width_px=0.0, height_px=float(ascent), baseline_px=float(ascent))
        else:
            left, top, right, bottom = text_bbox(font, request.text)
            metrics = TextLayoutMetrics(
                width_px=float(max(0, right - left)),
                height_px=float(max(1, bottom - top)),
                baseline_px=float(ascent - top),
            )
        self._cache[request] = metrics
        return metrics


def _font_metrics(font, size_px: float) -> tuple[int, int]:
    try:
        ascent, descent = font.getmetrics()
        return int(max(1, ascent)), int(max(0, descent))
    except AttributeError:
        return int(max(1, size_px * 0.8)), int(max(0, size_px * 0.2))
