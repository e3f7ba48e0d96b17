from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Literal

from .interaction import PressEvent


class InteractionState(Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DISABLED = "disabled"


ControlEvent = Literal["down", "up", "cancel", "enable", "disable"]


@dataclass(frozen=True)
class PressStatus:
    """Raw pointer contact plus the externally supplied `enabled` flag.

    `state` folds both into the three-way interaction state; disabled always wins.
    """

    pressed: bool = False
    enabled: bool = True

    @property
    def state(self) -> InteractionState:
        if not self.enabled:
            return InteractionState.DISABLED
        if self.pressed:
            return InteractionState.PRESSED
        return InteractionState.IDLE

    @property
    def pressed_and_enabled(self) -> bool:
        return self.pressed and self.enabled

    @property
    def pressed_or_disabled(self) -> bool:
        return self.pressed or not self.enabled


@dataclass(frozen=True)
class TransitionResult:
    status: PressStatus
    press_changed: bool | None = None
    clicked: bool = False

    @property
    def state(self) -> InteractionState:
        return self.status.state


def transition(status: PressStatus, event: ControlEvent, *, inside_bounds: bool = True) -> TransitionResult:
    """Pure press/enable transition.

    `press_changed` carries the new pressed flag when it flipped, else None.
    A click resolves only from `up` inside the bounds of an active press.
    """

    if event == "down":
        if not status.enabled or status.pressed:
            return TransitionResult(status)
        return TransitionResult(replace(status, pressed=True), press_changed=True)
    if event in ("up", "cancel"):
        if not status.pressed:
            return TransitionResult(status)
        clicked = event == "up" and inside_bounds and status.enabled
        return TransitionResult(replace(status, pressed=False), press_changed=False, clicked=clicked)
    if event == "enable":
        return TransitionResult(replace(status, enabled=True))
    if event == "disable":
        if status.pressed:
            return TransitionResult(PressStatus(pressed=False, enabled=False), press_changed=False)
        return TransitionResult(replace(status, enabled=False))
    raise ValueError(f"unknown control event: {event}")


def transition_for_press(status: PressStatus, press: PressEvent) -> TransitionResult:
    return transition(status, press.phase, inside_bounds=press.inside_bounds)
