from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

from PIL import ImageFont

from glasskit_ui.text.renderer import FontSpec

LOGGER = logging.getLogger(__name__)

FALLBACK_FAMILIES = (
    "inter",
    "ptsans",
    "dejavusans",
    "liberationsans",
    "helvetica",
    "arial",
)
FONT_DIRS = (
    Path.home() / "Library/Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

LoadedFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


def weight_suffixes(weight: int) -> tuple[str, ...]:
    if weight >= 700:
        return ("bold",)
    if weight >= 600:
        return ("semibold", "demibold", "bold")
    if weight >= 500:
        return ("medium", "regular")
    return ("regular", "")


def resolve_font_path(font: FontSpec) -> str:
    if font.source_kind == "file":
        path = font.normalized_file_path
        assert path is not None
        return str(path.resolve())
    return _resolve_system_font_path(font.family, font.weight)


@lru_cache(maxsize=64)
def _resolve_system_font_path(family: str, weight: int) -> str:
    wanted = family.strip().lower().replace(" ", "")
    families = (wanted,) + tuple(f for f in FALLBACK_FAMILIES if f != wanted)
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))
    stems = [(path, path.stem.lower().replace(" ", "").replace("-", "").replace("_", "")) for path in candidates]
    for name in families:
        for suffix in weight_suffixes(weight):
            for path, stem in stems:
                if stem == f"{name}{suffix}":
                    return str(path)
        for path, stem in stems:
            if stem.startswith(name):
                return str(path)
    if candidates:
        return str(candidates[0])
    return ""


@lru_cache(maxsize=64)
def load_font(font_path: str, size_px: float) -> LoadedFont:
    size = max(1, int(round(size_px)))
    if not font_path:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(font_path, size=size)
    except OSError as exc:
        LOGGER.warning("font %s could not be loaded, using default: %s", font_path, exc)
        return ImageFont.load_default(size=size)


def text_bbox(font: LoadedFont, text: str) -> tuple[int, int, int, int]:
    left, top, right, bottom = font.getbbox(text)
    return int(left), int(top), int(right), int(bottom)
