from __future__ import annotations

import logging
from typing import Callable

from glasskit_ui.animation import AnimatedFrame, AnimatedProperties
from glasskit_ui.text.renderer import TextLayoutMetrics, TextMeasureRequest, TextMeasurer

from .button import (
    ControlEvent,
    InteractionState,
    PressStatus,
    TransitionResult,
    transition,
    transition_for_press,
)
from .config import ButtonConfig
from .draw_commands import DrawBatch, DrawSurface
from .interaction import PressEvent
from .surface import render_button
from .variants import animation_targets, build_properties

LOGGER = logging.getLogger(__name__)


class GlassButtonController:
    """Binds press/enable signals to the animated property set of one button.

    The controller is the only mutator of its animation state. Hosts call
    `advance` once per display refresh while `settled` is False, then `render`.
    """

    def __init__(
        self,
        config: ButtonConfig,
        *,
        on_click: Callable[[], None] | None = None,
        on_press_change: Callable[[bool], None] | None = None,
        enabled: bool = True,
        component_id: str | None = None,
    ) -> None:
        self._config = config
        self._on_click = on_click
        self._on_press_change = on_press_change
        self._status = PressStatus(pressed=False, enabled=enabled)
        self._properties: AnimatedProperties = build_properties(config, self._status)
        self._component_id = component_id or f"{config.variant}_button"
        self._measure_key: tuple[object, ...] | None = None
        self._measured: TextLayoutMetrics | None = None

    @property
    def config(self) -> ButtonConfig:
        return self._config

    @property
    def component_id(self) -> str:
        return self._component_id

    @property
    def status(self) -> PressStatus:
        return self._status

    @property
    def state(self) -> InteractionState:
        return self._status.state

    @property
    def settled(self) -> bool:
        return self._properties.settled

    @property
    def properties(self) -> AnimatedProperties:
        return self._properties

    def frame(self) -> AnimatedFrame:
        return self._properties.snapshot()

    def press_start(self) -> InteractionState:
        return self._apply("down")

    def press_end(self, *, inside_bounds: bool = True) -> InteractionState:
        return self._apply("up", inside_bounds=inside_bounds)

    def press_cancel(self) -> InteractionState:
        return self._apply("cancel")

    def set_enabled(self, enabled: bool) -> InteractionState:
        return self._apply("enable" if enabled else "disable")

    def handle_press_event(self, press: PressEvent) -> InteractionState:
        return self._commit(transition_for_press(self._status, press), press.phase)

    def advance(self, dt_ms: float) -> bool:
        return self._properties.advance(dt_ms)

    def measure(self, measurer: TextMeasurer) -> TextLayoutMetrics:
        config = self._config
        key = (config.text, config.font, config.font_size)
        if self._measured is None or key != self._measure_key:
            self._measured = measurer.measure_text(
                TextMeasureRequest(text=config.text, font=config.font, font_size_px=config.font_size)
            )
            self._measure_key = key
        return self._measured

    def draw_batch(self, measurer: TextMeasurer | None = None, *, density: float = 1.0, supports_blur: bool = True) -> DrawBatch:
        measured = self.measure(measurer) if measurer is not None and self._config.text else None
        return render_button(
            self._config,
            self.state,
            self.frame(),
            measured,
            density=density,
            supports_blur=supports_blur,
            component_id=self._component_id,
        )

    def render(self, surface: DrawSurface, measurer: TextMeasurer | None = None) -> DrawBatch:
        batch = self.draw_batch(measurer, density=surface.density, supports_blur=surface.supports_blur)
        surface.draw_batch(batch)
        return batch

    def _apply(self, event: ControlEvent, *, inside_bounds: bool = True) -> InteractionState:
        return self._commit(transition(self._status, event, inside_bounds=inside_bounds), event)

    def _commit(self, result: TransitionResult, event: ControlEvent) -> InteractionState:
        previous = self._status
        self._status = result.status
        if result.status != previous:
            LOGGER.debug("%s: %s -> %s on %s", self._component_id, previous.state.value, result.state.value, event)
            self._properties.retarget(animation_targets(self._config, result.status))
        if result.press_changed is not None and self._on_press_change is not None:
            self._on_press_change(result.press_changed)
        if result.clicked and self._on_click is not None:
            self._on_click()
        return result.state


def tick(controller: GlassButtonController, delta_ms: float) -> tuple[AnimatedFrame, bool]:
    """Advance one frame; returns the sampled values and whether everything has settled."""

    settled = controller.advance(delta_ms)
    return controller.frame(), settled
