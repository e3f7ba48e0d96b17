from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
import math
from pathlib import Path
import tomllib

from PIL import Image

from glasskit_core.core import ButtonAnimationRuntime, FrameClock, RuntimeTick
from glasskit_core.render import MatrixDrawSurface, PillowTextMeasurer
from glasskit_ui.controls import (
    BlurredRoundRect,
    ButtonConfig,
    ClipPush,
    DrawBatch,
    GlassButtonController,
    LineCommand,
    RoundRectFill,
    RoundRectGradient,
    RoundRectStroke,
    config_from_overrides,
)
from glasskit_ui.errors import ConfigurationError

LOGGER = logging.getLogger("glasskit")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="glasskit")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render one settled button state to a PNG.")
    _add_button_args(render)
    render.add_argument("--state", choices=["idle", "pressed", "disabled"], default="idle")
    render.add_argument("--out", type=Path, required=True)

    animate = sub.add_parser("animate", help="Render a press/release sequence to numbered PNG frames.")
    _add_button_args(animate)
    animate.add_argument("--fps", type=int, default=60)
    animate.add_argument("--max-ticks", type=int, default=240, help="Per phase tick cap.")
    animate.add_argument("--out-dir", type=Path, required=True)

    commands = sub.add_parser("commands", help="Print the draw commands of one settled state as JSON.")
    _add_button_args(commands)
    commands.add_argument("--state", choices=["idle", "pressed", "disabled"], default="idle")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    config = _load_config(args.variant, args.config, args.text)
    measurer = PillowTextMeasurer()
    supports_blur = not args.no_blur

    if args.command == "render":
        controller = _settled_controller(config, args.state)
        batch = controller.draw_batch(measurer, density=args.density, supports_blur=supports_blur)
        image = _rasterize(batch, _batch_bounds([batch]), density=args.density, supports_blur=supports_blur)
        args.out.parent.mkdir(parents=True, exist_ok=True)
        image.save(args.out)
        print(f"rendered {config.variant} ({args.state}) {image.width}x{image.height} -> {args.out}")
        return

    if args.command == "animate":
        batches = _press_release_batches(
            config,
            measurer,
            fps=args.fps,
            max_ticks=args.max_ticks,
            density=args.density,
            supports_blur=supports_blur,
        )
        bounds = _batch_bounds(batches)
        args.out_dir.mkdir(parents=True, exist_ok=True)
        for index, batch in enumerate(batches):
            image = _rasterize(batch, bounds, density=args.density, supports_blur=supports_blur)
            image.save(args.out_dir / f"frame_{index:04d}.png")
        print(f"animated {config.variant}: frames={len(batches)} -> {args.out_dir}")
        return

    if args.command == "commands":
        controller = _settled_controller(config, args.state)
        batch = controller.draw_batch(measurer, density=args.density, supports_blur=supports_blur)
        print(json.dumps(_batch_to_json(batch), indent=2))
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_button_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--variant", choices=["glass", "secondary"], default="glass")
    parser.add_argument("--text", default=None, help="Override the button label.")
    parser.add_argument("--config", type=Path, default=None, help="TOML file with [glass]/[secondary] tables.")
    parser.add_argument("--density", type=float, default=1.0)
    parser.add_argument("--no-blur", action="store_true", help="Render as a surface without blur support.")


def _load_config(variant: str, path: Path | None, text: str | None) -> ButtonConfig:
    overrides: dict[str, object] = {}
    if path is not None:
        with path.open("rb") as fh:
            document = tomllib.load(fh)
        table = document.get(variant, {})
        if not isinstance(table, dict):
            raise ConfigurationError(f"[{variant}] in {path} must be a table")
        overrides.update(table)
    if text is not None:
        overrides["text"] = text
    return config_from_overrides(variant, overrides)  # type: ignore[arg-type]


def _settled_controller(config: ButtonConfig, state: str) -> GlassButtonController:
    controller = GlassButtonController(config, enabled=state != "disabled")
    if state == "pressed":
        controller.press_start()
    runtime = ButtonAnimationRuntime()
    runtime.register(controller)
    runtime.run_until_settled()
    return controller


def _press_release_batches(
    config: ButtonConfig,
    measurer: PillowTextMeasurer,
    *,
    fps: int,
    max_ticks: int,
    density: float,
    supports_blur: bool,
) -> list[DrawBatch]:
    controller = GlassButtonController(config, on_click=lambda: LOGGER.info("click"))
    batches = [controller.draw_batch(measurer, density=density, supports_blur=supports_blur)]

    def capture(_tick: RuntimeTick) -> None:
        batches.append(controller.draw_batch(measurer, density=density, supports_blur=supports_blur))

    runtime = ButtonAnimationRuntime(FrameClock(target_fps=fps), on_tick=capture)
    runtime.register(controller)
    controller.press_start()
    runtime.run_until_settled(max_ticks=max_ticks)
    controller.press_end()
    runtime.run_until_settled(max_ticks=max_ticks)
    return batches


def _batch_bounds(batches: list[DrawBatch]) -> tuple[float, float, float, float]:
    """Union of everything drawn across `batches` as (left, top, right, bottom)."""

    left = top = math.inf
    right = bottom = -math.inf
    for batch in batches:
        for command in batch.commands:
            if isinstance(command, (RoundRectFill, RoundRectGradient, ClipPush)):
                rect, pad = command.rect, 0.0
            elif isinstance(command, RoundRectStroke):
                rect, pad = command.rect, command.stroke_width / 2.0
            elif isinstance(command, BlurredRoundRect):
                rect, pad = command.rect, command.blur_radius * 3.0
            elif isinstance(command, LineCommand):
                (ax, ay), (bx, by) = command.start, command.end
                half = command.width / 2.0
                left, top = min(left, ax - half, bx - half), min(top, ay - half, by - half)
                right, bottom = max(right, ax + half, bx + half), max(bottom, ay + half, by + half)
                continue
            else:
                continue
            left, top = min(left, rect.x - pad), min(top, rect.y - pad)
            right, bottom = max(right, rect.right + pad), max(bottom, rect.bottom + pad)
        left, top = min(left, 0.0), min(top, 0.0)
        right, bottom = max(right, batch.frame.width), max(bottom, batch.frame.height + batch.frame.y_offset)
    return (math.floor(left) - 1, math.floor(top) - 1, math.ceil(right) + 1, math.ceil(bottom) + 1)


def _rasterize(
    batch: DrawBatch,
    bounds: tuple[float, float, float, float],
    *,
    density: float,
    supports_blur: bool,
) -> Image.Image:
    left, top, right, bottom = bounds
    surface = MatrixDrawSurface(density=density, supports_blur=supports_blur)
    surface.begin_frame(int(right - left), int(bottom - top), origin=(-left, -top))
    surface.draw_batch(batch)
    return Image.fromarray(surface.end_frame().numpy())


def _batch_to_json(batch: DrawBatch) -> dict[str, object]:
    return {
        "component_id": batch.component_id,
        "frame": asdict(batch.frame),
        "commands": [{"type": type(c).__name__, **asdict(c)} for c in batch.commands],
    }


if __name__ == "__main__":
    main()
