from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping


PressPhase = Literal["down", "up", "cancel"]


@dataclass(frozen=True)
class PressEvent:
    """Minimal press event contract delivered by the host gesture service.

    `inside_bounds` is only meaningful for `up`: a release outside the button
    resolves the gesture as a cancel.
    """

    phase: PressPhase
    inside_bounds: bool = True


def parse_press_event(event_type: str, payload: object) -> PressEvent | None:
    """Parse a normalized host `press` event into a typed press event.

    Unknown phases and non-press events are ignored rather than rejected so
    hosts can forward their whole pointer stream.
    """

    if event_type != "press" or not isinstance(payload, Mapping):
        return None
    phase = payload.get("phase")
    if phase not in {"down", "up", "cancel"}:
        return None
    inside = payload.get("inside_bounds", True)
    return PressEvent(phase=phase, inside_bounds=bool(inside))
