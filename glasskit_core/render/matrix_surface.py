from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math

import numpy as np
import torch
from PIL import Image, ImageDraw, ImageFilter

from glasskit_ui.controls.draw_commands import (
    BlurredRoundRect,
    ClipPop,
    ClipPush,
    DrawBatch,
    GradientStop,
    LineCommand,
    RoundRectFill,
    RoundRectGradient,
    RoundRectStroke,
    TextCommand,
)
from glasskit_ui.geometry import RoundRect
from glasskit_ui.style.color import TRANSPARENT, Color

from .fonts import load_font, resolve_font_path, text_bbox

LOGGER = logging.getLogger(__name__)

_Window = tuple[int, int, int, int]


@dataclass
class MatrixDrawSurface:
    """Torch-first rasterizer executing glass button draw batches into an RGBA matrix.

    Coverage is computed from signed distances at pixel centers, giving one
    pixel of antialiasing. Blur and text go through Pillow.
    """

    density: float = 1.0
    supports_blur: bool = True
    batches: list[DrawBatch] = field(default_factory=list, repr=False)
    _frame: torch.Tensor | None = field(default=None, init=False, repr=False)
    _grid_x: torch.Tensor | None = field(default=None, init=False, repr=False)
    _grid_y: torch.Tensor | None = field(default=None, init=False, repr=False)
    _clip_stack: list[torch.Tensor] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.density <= 0:
            raise ValueError("density must be > 0")

    def begin_frame(
        self,
        width: int,
        height: int,
        *,
        origin: tuple[float, float] = (0.0, 0.0),
        clear_color: Color = TRANSPARENT,
    ) -> None:
        """Start a frame. `origin` is where logical (0, 0) lands in the matrix."""

        if width <= 0 or height <= 0:
            raise ValueError("frame dimensions must be > 0")
        self._frame = torch.zeros((height, width, 4), dtype=torch.float32)
        self._frame[:, :] = torch.tensor(clear_color.channels(), dtype=torch.float32)
        ox, oy = origin
        self._grid_x = (torch.arange(width, dtype=torch.float32) + 0.5 - ox).unsqueeze(0).expand(height, width)
        self._grid_y = (torch.arange(height, dtype=torch.float32) + 0.5 - oy).unsqueeze(1).expand(height, width)
        self._clip_stack = []
        self.batches = []

    def draw_batch(self, batch: DrawBatch) -> None:
        if self._frame is None:
            raise RuntimeError("begin_frame must be called before draw_batch")
        self.batches.append(batch)
        for command in batch.commands:
            if isinstance(command, RoundRectFill):
                self._fill_round_rect(command.rect, command.color)
            elif isinstance(command, RoundRectGradient):
                self._fill_gradient(command.rect, command.stops)
            elif isinstance(command, RoundRectStroke):
                self._stroke_round_rect(command.rect, command.color, command.stroke_width)
            elif isinstance(command, BlurredRoundRect):
                if self.supports_blur:
                    self._fill_blurred(command.rect, command.color, command.blur_radius)
                else:
                    LOGGER.warning("%s: blur requested on a surface without blur; drawing sharp", batch.component_id)
                    self._fill_round_rect(command.rect, command.color)
            elif isinstance(command, LineCommand):
                self._draw_line(command)
            elif isinstance(command, ClipPush):
                self._push_clip(command.rect)
            elif isinstance(command, ClipPop):
                if not self._clip_stack:
                    raise RuntimeError("ClipPop without matching ClipPush")
                self._clip_stack.pop()
            elif isinstance(command, TextCommand):
                self._draw_text(command)
            else:
                raise ValueError(f"unsupported draw command: {type(command).__name__}")

    def end_frame(self) -> torch.Tensor:
        if self._frame is None:
            raise RuntimeError("begin_frame must be called before end_frame")
        if self._clip_stack:
            LOGGER.warning("frame ended with %d unbalanced clip(s)", len(self._clip_stack))
        out = torch.clamp(self._frame * 255.0 + 0.5, 0, 255).to(torch.uint8)
        self._frame = None
        self._grid_x = None
        self._grid_y = None
        self._clip_stack = []
        return out

    def _window(self, left: float, top: float, right: float, bottom: float, pad: float = 1.0) -> _Window | None:
        assert self._frame is not None and self._grid_x is not None and self._grid_y is not None
        h, w = self._frame.shape[:2]
        ox, oy = self._origin()
        x0 = max(0, int(math.floor(left + ox - pad)))
        y0 = max(0, int(math.floor(top + oy - pad)))
        x1 = min(w, int(math.ceil(right + ox + pad)))
        y1 = min(h, int(math.ceil(bottom + oy + pad)))
        if x1 <= x0 or y1 <= y0:
            return None
        return (y0, y1, x0, x1)

    def _grids(self, win: _Window) -> tuple[torch.Tensor, torch.Tensor]:
        assert self._grid_x is not None and self._grid_y is not None
        y0, y1, x0, x1 = win
        return self._grid_x[y0:y1, x0:x1], self._grid_y[y0:y1, x0:x1]

    def _round_rect_sdf(self, rect: RoundRect, win: _Window) -> torch.Tensor:
        gx, gy = self._grids(win)
        radius = rect.effective_radius()
        cx, cy = rect.center
        qx = torch.abs(gx - cx) - (rect.width / 2.0 - radius)
        qy = torch.abs(gy - cy) - (rect.height / 2.0 - radius)
        outside = torch.sqrt(torch.clamp(qx, min=0.0) ** 2 + torch.clamp(qy, min=0.0) ** 2)
        inside = torch.clamp(torch.maximum(qx, qy), max=0.0)
        return outside + inside - radius

    def _composite(self, coverage: torch.Tensor, color: torch.Tensor, win: _Window) -> None:
        """Source-over blend of `color` ([4] or [h, w, 4]) weighted by `coverage`."""

        assert self._frame is not None
        y0, y1, x0, x1 = win
        if color.dim() == 1:
            color = color.view(1, 1, 4)
        src_a = coverage * color[..., 3]
        if self._clip_stack:
            src_a = src_a * self._clip_stack[-1][y0:y1, x0:x1]
        if not bool((src_a > 0).any()):
            return
        patch = self._frame[y0:y1, x0:x1]
        dst_rgb = patch[..., :3]
        dst_a = patch[..., 3]
        out_a = src_a + dst_a * (1.0 - src_a)
        num = color[..., :3] * src_a.unsqueeze(-1) + dst_rgb * (dst_a * (1.0 - src_a)).unsqueeze(-1)
        safe = torch.where(out_a > 1e-6, out_a, torch.ones_like(out_a))
        patch[..., :3] = num / safe.unsqueeze(-1)
        patch[..., 3] = out_a

    def _fill_round_rect(self, rect: RoundRect, color: Color) -> None:
        win = self._window(rect.x, rect.y, rect.right, rect.bottom)
        if win is None or color.alpha <= 0:
            return
        coverage = torch.clamp(0.5 - self._round_rect_sdf(rect, win), 0.0, 1.0)
        self._composite(coverage, _color_tensor(color), win)

    def _stroke_round_rect(self, rect: RoundRect, color: Color, stroke_width: float) -> None:
        half = stroke_width / 2.0
        win = self._window(rect.x - half, rect.y - half, rect.right + half, rect.bottom + half)
        if win is None or stroke_width <= 0 or color.alpha <= 0:
            return
        edge_dist = torch.abs(self._round_rect_sdf(rect, win))
        if stroke_width >= 1.0:
            coverage = torch.clamp(0.5 - (edge_dist - half), 0.0, 1.0)
        else:
            coverage = torch.clamp(1.0 - edge_dist, 0.0, 1.0) * stroke_width
        self._composite(coverage, _color_tensor(color), win)

    def _fill_gradient(self, rect: RoundRect, stops: tuple[GradientStop, ...]) -> None:
        win = self._window(rect.x, rect.y, rect.right, rect.bottom)
        if win is None or not stops:
            return
        _, gy = self._grids(win)
        span = rect.height if rect.height > 0 else 1.0
        t = torch.clamp((gy - rect.y) / span, 0.0, 1.0)
        colors = _gradient_colors(stops, t)
        coverage = torch.clamp(0.5 - self._round_rect_sdf(rect, win), 0.0, 1.0)
        self._composite(coverage, colors, win)

    def _fill_blurred(self, rect: RoundRect, color: Color, blur_radius: float) -> None:
        if blur_radius <= 0:
            self._fill_round_rect(rect, color)
            return
        reach = blur_radius * 3.0
        win = self._window(rect.x - reach, rect.y - reach, rect.right + reach, rect.bottom + reach)
        if win is None or color.alpha <= 0:
            return
        coverage = torch.clamp(0.5 - self._round_rect_sdf(rect, win), 0.0, 1.0)
        blurred = _gaussian_blur(coverage, blur_radius)
        self._composite(blurred, _color_tensor(color), win)

    def _draw_line(self, command: LineCommand) -> None:
        (ax, ay), (bx, by) = command.start, command.end
        half = command.width / 2.0
        win = self._window(min(ax, bx) - half, min(ay, by) - half, max(ax, bx) + half, max(ay, by) + half)
        if win is None or command.width <= 0 or command.color.alpha <= 0:
            return
        gx, gy = self._grids(win)
        dx = bx - ax
        dy = by - ay
        length_sq = dx * dx + dy * dy
        if length_sq <= 1e-12:
            t = torch.zeros_like(gx)
        else:
            t = torch.clamp(((gx - ax) * dx + (gy - ay) * dy) / length_sq, 0.0, 1.0)
        dist = torch.sqrt((gx - (ax + t * dx)) ** 2 + (gy - (ay + t * dy)) ** 2)
        if command.width >= 1.0:
            coverage = torch.clamp(0.5 - (dist - half), 0.0, 1.0)
        else:
            # Sub-pixel hairline: one-pixel footprint scaled by the width.
            coverage = torch.clamp(1.0 - dist, 0.0, 1.0) * command.width
        self._composite(coverage, _color_tensor(command.color), win)

    def _push_clip(self, rect: RoundRect) -> None:
        assert self._frame is not None
        h, w = self._frame.shape[:2]
        mask = torch.zeros((h, w), dtype=torch.float32)
        win = self._window(rect.x, rect.y, rect.right, rect.bottom)
        if win is not None:
            y0, y1, x0, x1 = win
            mask[y0:y1, x0:x1] = torch.clamp(0.5 - self._round_rect_sdf(rect, win), 0.0, 1.0)
        if self._clip_stack:
            mask = mask * self._clip_stack[-1]
        self._clip_stack.append(mask)

    def _draw_text(self, command: TextCommand) -> None:
        if not command.text or command.font_size_px <= 0:
            return
        font = load_font(resolve_font_path(command.font), command.font_size_px)
        mask = _render_text_mask(command.text, font)
        if command.shadow is not None and command.shadow.color.alpha > 0:
            shadow = command.shadow
            pad = int(math.ceil(shadow.blur_radius * 2.0))
            padded = np.pad(mask, pad)
            shadow_cov = torch.from_numpy(padded.astype(np.float32) / 255.0)
            if shadow.blur_radius > 0:
                shadow_cov = _gaussian_blur(shadow_cov, shadow.blur_radius)
            self._blend_mask(shadow_cov, command.x + shadow.offset_x - pad, command.y + shadow.offset_y - pad, shadow.color)
        self._blend_mask(torch.from_numpy(mask.astype(np.float32) / 255.0), command.x, command.y, command.color)

    def _blend_mask(self, coverage: torch.Tensor, x: float, y: float, color: Color) -> None:
        assert self._frame is not None
        h, w = self._frame.shape[:2]
        mh, mw = coverage.shape
        origin_x, origin_y = self._origin()
        px = int(round(x + origin_x))
        py = int(round(y + origin_y))
        x0 = max(0, px)
        y0 = max(0, py)
        x1 = min(w, px + mw)
        y1 = min(h, py + mh)
        if x1 <= x0 or y1 <= y0:
            return
        self._composite(coverage[y0 - py : y1 - py, x0 - px : x1 - px], _color_tensor(color), (y0, y1, x0, x1))

    def _origin(self) -> tuple[float, float]:
        assert self._grid_x is not None and self._grid_y is not None
        return (0.5 - float(self._grid_x[0, 0]), 0.5 - float(self._grid_y[0, 0]))


def _color_tensor(color: Color) -> torch.Tensor:
    return torch.tensor(color.channels(), dtype=torch.float32)


def _gradient_colors(stops: tuple[GradientStop, ...], t: torch.Tensor) -> torch.Tensor:
    ordered = sorted(stops, key=lambda s: s.offset)
    out = _color_tensor(ordered[0].color).view(1, 1, 4).expand(*t.shape, 4).clone()
    for lo, hi in zip(ordered, ordered[1:]):
        span = hi.offset - lo.offset
        if span <= 0:
            continue
        frac = torch.clamp((t - lo.offset) / span, 0.0, 1.0).unsqueeze(-1)
        c0 = _color_tensor(lo.color).view(1, 1, 4)
        c1 = _color_tensor(hi.color).view(1, 1, 4)
        seg = c0 + (c1 - c0) * frac
        out = torch.where((t >= lo.offset).unsqueeze(-1), seg, out)
    return out


def _gaussian_blur(coverage: torch.Tensor, radius: float) -> torch.Tensor:
    raw = np.clip(coverage.numpy() * 255.0 + 0.5, 0, 255).astype(np.uint8)
    image = Image.fromarray(raw).filter(ImageFilter.GaussianBlur(radius=radius))
    return torch.from_numpy(np.asarray(image, dtype=np.float32) / 255.0)


def _render_text_mask(text: str, font) -> np.ndarray:
    left, top, right, bottom = text_bbox(font, text)
    width = max(1, right - left)
    height = max(1, bottom - top)
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)
