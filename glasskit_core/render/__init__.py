from .fonts import load_font, resolve_font_path
from .matrix_surface import MatrixDrawSurface
from .text_measure import PillowTextMeasurer

__all__ = ["MatrixDrawSurface", "PillowTextMeasurer", "load_font", "resolve_font_path"]
