from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import time
from typing import Callable

from glasskit_ui.animation import AnimatedFrame
from glasskit_ui.controls.glass_button import GlassButtonController, tick

LOGGER = logging.getLogger(__name__)


@dataclass
class FrameClock:
    """Animation tick rate plus an optional, slower present rate.

    Ticks advance button animations; presents are the subset of ticks a host
    actually pushes to screen. Times passed in are seconds, durations out are
    milliseconds for ticks and seconds for sleeps.
    """

    target_fps: int = 60
    present_fps: int | None = None
    _present_due: float | None = None

    def __post_init__(self) -> None:
        if self.target_fps <= 0:
            raise ValueError(f"tick rate must be positive, got {self.target_fps}")
        if self.present_fps is None:
            return
        if self.present_fps <= 0:
            raise ValueError(f"present rate must be positive, got {self.present_fps}")
        self.present_fps = min(self.present_fps, self.target_fps)

    @property
    def target_dt_ms(self) -> float:
        return 1000.0 / float(self.target_fps)

    @property
    def present_interval_s(self) -> float:
        return 1.0 / float(self.present_fps or self.target_fps)

    def should_present(self, now: float) -> bool:
        """True when a present is due; slots missed during a stall are dropped, not replayed."""

        if self._present_due is not None and now < self._present_due:
            return False
        start = now if self._present_due is None else self._present_due
        interval = self.present_interval_s
        missed = math.floor((now - start) / interval)
        self._present_due = start + (missed + 1) * interval
        return True

    def compute_sleep(self, tick_started_at: float, tick_finished_at: float) -> float:
        busy = max(0.0, tick_finished_at - tick_started_at)
        return max(0.0, self.target_dt_ms / 1000.0 - busy)


@dataclass(frozen=True)
class RuntimeTick:
    index: int
    elapsed_ms: float
    frames: dict[str, AnimatedFrame]
    settled: bool
    present: bool = True


class ButtonAnimationRuntime:
    """Single-threaded frame loop for a set of button controllers.

    A tick only happens while some controller is still animating; once every
    property has converged the runtime is idle until a controller is retargeted.
    """

    def __init__(
        self,
        clock: FrameClock | None = None,
        *,
        on_tick: Callable[[RuntimeTick], None] | None = None,
    ) -> None:
        self._clock = clock or FrameClock()
        self._on_tick = on_tick
        self._controllers: dict[str, GlassButtonController] = {}
        self._tick_index = 0
        self._elapsed_ms = 0.0

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def idle(self) -> bool:
        return all(c.settled for c in self._controllers.values())

    def register(self, controller: GlassButtonController) -> None:
        if controller.component_id in self._controllers:
            raise ValueError(f"controller `{controller.component_id}` already registered")
        self._controllers[controller.component_id] = controller

    def controller(self, component_id: str) -> GlassButtonController:
        return self._controllers[component_id]

    def step(self, dt_ms: float | None = None, *, present: bool = True) -> RuntimeTick | None:
        """Advance all controllers by one frame; returns None when idle.

        `present` is passed through so `on_tick` hooks can skip drawing frames
        the clock will not show.
        """

        if self.idle:
            return None
        dt = self._clock.target_dt_ms if dt_ms is None else dt_ms
        if dt < 0:
            raise ValueError("dt_ms must be >= 0")
        frames: dict[str, AnimatedFrame] = {}
        for component_id, controller in self._controllers.items():
            frame, _ = tick(controller, dt)
            frames[component_id] = frame
        self._tick_index += 1
        self._elapsed_ms += dt
        result = RuntimeTick(index=self._tick_index, elapsed_ms=self._elapsed_ms, frames=frames, settled=self.idle, present=present)
        if result.settled:
            LOGGER.debug("runtime settled after %d ticks (%.1f ms)", result.index, result.elapsed_ms)
        if self._on_tick is not None:
            self._on_tick(result)
        return result

    def run_until_settled(self, max_ticks: int = 600, dt_ms: float | None = None) -> list[RuntimeTick]:
        if max_ticks <= 0:
            raise ValueError("max_ticks must be > 0")
        ticks: list[RuntimeTick] = []
        for _ in range(max_ticks):
            result = self.step(dt_ms)
            if result is None:
                break
            ticks.append(result)
        else:
            if not self.idle:
                LOGGER.warning("animation still running after %d ticks", max_ticks)
        return ticks

    def run_realtime(
        self,
        max_ticks: int = 600,
        *,
        time_fn: Callable[[], float] = time.monotonic,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> list[RuntimeTick]:
        """Like `run_until_settled` but paced to wall-clock time by the frame clock."""

        ticks: list[RuntimeTick] = []
        last = time_fn()
        for _ in range(max_ticks):
            started = time_fn()
            dt_ms = max(0.0, (started - last) * 1000.0) or self._clock.target_dt_ms
            result = self.step(dt_ms, present=self._clock.should_present(started))
            last = started
            if result is None:
                break
            ticks.append(result)
            sleep_fn(self._clock.compute_sleep(started, time_fn()))
        return ticks
