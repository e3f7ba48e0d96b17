from __future__ import annotations

from dataclasses import dataclass
import math
from types import MappingProxyType
from typing import Iterator, Mapping, Union

from glasskit_ui.errors import ConfigurationError


MAX_SPRING_STEP_S = 1.0 / 240.0


@dataclass(frozen=True)
class TweenSpec:
    """Linear, duration-bounded interpolation."""

    duration_ms: float = 150.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.duration_ms) or self.duration_ms < 0:
            raise ConfigurationError("TweenSpec duration_ms must be >= 0")


@dataclass(frozen=True)
class SpringSpec:
    """Damped 1D mass-spring. `damping_ratio` 1.0 is critical damping."""

    damping_ratio: float = 1.0
    stiffness: float = 1500.0
    epsilon: float = 0.001

    def __post_init__(self) -> None:
        if not math.isfinite(self.damping_ratio) or self.damping_ratio <= 0:
            raise ConfigurationError("SpringSpec damping_ratio must be > 0")
        if not math.isfinite(self.stiffness) or self.stiffness <= 0:
            raise ConfigurationError("SpringSpec stiffness must be > 0")
        if self.epsilon <= 0:
            raise ConfigurationError("SpringSpec epsilon must be > 0")


MotionSpec = Union[TweenSpec, SpringSpec]


def tween_value(start: float, target: float, elapsed_ms: float, duration_ms: float) -> float:
    if duration_ms <= 0 or elapsed_ms >= duration_ms:
        return target
    fraction = max(0.0, min(1.0, elapsed_ms / duration_ms))
    return start + (target - start) * fraction


def spring_step(value: float, velocity: float, target: float, spec: SpringSpec, dt_s: float) -> tuple[float, float]:
    """One semi-implicit Euler step; velocity is updated before position."""

    acceleration = spec.stiffness * (target - value) - 2.0 * spec.damping_ratio * math.sqrt(spec.stiffness) * velocity
    velocity += acceleration * dt_s
    value += velocity * dt_s
    return value, velocity


def spring_step_limit(spec: SpringSpec) -> float:
    """Largest sub-step that keeps the Euler update stable for this stiffness and damping."""

    return min(MAX_SPRING_STEP_S, 0.5 / (math.sqrt(spec.stiffness) * (1.0 + 2.0 * spec.damping_ratio)))


class AnimatedValue:
    """A scalar that chases its target over time using a tween or spring policy."""

    def __init__(self, initial: float, spec: MotionSpec) -> None:
        self._spec = spec
        self._value = float(initial)
        self._target = float(initial)
        self._start = float(initial)
        self._velocity = 0.0
        self._elapsed_ms = 0.0
        self._settled = True

    @property
    def spec(self) -> MotionSpec:
        return self._spec

    @property
    def value(self) -> float:
        return self._value

    @property
    def target(self) -> float:
        return self._target

    @property
    def velocity(self) -> float:
        return self._velocity

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def settled(self) -> bool:
        return self._settled

    def set_target(self, target: float) -> None:
        """Retarget from wherever the value currently is; velocity carries over for springs."""

        target = float(target)
        if target == self._target:
            return
        self._target = target
        self._start = self._value
        self._elapsed_ms = 0.0
        self._settled = False

    def snap_to(self, value: float) -> None:
        self._value = float(value)
        self._target = float(value)
        self._start = float(value)
        self._velocity = 0.0
        self._elapsed_ms = 0.0
        self._settled = True

    def advance(self, dt_ms: float) -> bool:
        if dt_ms < 0:
            raise ValueError("dt_ms must be >= 0")
        if self._settled:
            return True
        if isinstance(self._spec, TweenSpec):
            self._advance_tween(dt_ms)
        else:
            self._advance_spring(dt_ms)
        return self._settled

    def _advance_tween(self, dt_ms: float) -> None:
        spec = self._spec
        assert isinstance(spec, TweenSpec)
        self._elapsed_ms += dt_ms
        self._value = tween_value(self._start, self._target, self._elapsed_ms, spec.duration_ms)
        if self._elapsed_ms >= spec.duration_ms:
            self._value = self._target
            self._settled = True

    def _advance_spring(self, dt_ms: float) -> None:
        spec = self._spec
        assert isinstance(spec, SpringSpec)
        self._elapsed_ms += dt_ms
        remaining = dt_ms / 1000.0
        limit = spring_step_limit(spec)
        while remaining > 0:
            step = min(remaining, limit)
            self._value, self._velocity = spring_step(self._value, self._velocity, self._target, spec, step)
            remaining -= step
            if abs(self._value - self._target) < spec.epsilon and abs(self._velocity) < spec.epsilon:
                self._value = self._target
                self._velocity = 0.0
                self._settled = True
                return


@dataclass(frozen=True)
class AnimatedFrame:
    """Immutable sample of every animated property at one tick."""

    values: Mapping[str, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def get(self, name: str, default: float = 0.0) -> float:
        return self.values.get(name, default)

    def as_dict(self) -> dict[str, float]:
        return dict(self.values)


class AnimatedProperties:
    """Independent animated values sharing one tick source."""

    def __init__(self, initial: Mapping[str, float], specs: Mapping[str, MotionSpec]) -> None:
        missing = set(initial) - set(specs)
        if missing:
            raise ValueError(f"missing motion spec for: {sorted(missing)}")
        self._values = {name: AnimatedValue(value, specs[name]) for name, value in initial.items()}

    def __getitem__(self, name: str) -> AnimatedValue:
        return self._values[name]

    def names(self) -> tuple[str, ...]:
        return tuple(self._values)

    @property
    def settled(self) -> bool:
        return all(v.settled for v in self._values.values())

    def retarget(self, targets: Mapping[str, float]) -> None:
        for name, target in targets.items():
            self._values[name].set_target(target)

    def advance(self, dt_ms: float) -> bool:
        settled = True
        for value in self._values.values():
            if not value.advance(dt_ms):
                settled = False
        return settled

    def snapshot(self) -> AnimatedFrame:
        return AnimatedFrame({name: v.value for name, v in self._values.items()})
