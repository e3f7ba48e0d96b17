from __future__ import annotations

import math
import unittest

from glasskit_ui.animation import (
    MAX_SPRING_STEP_S,
    AnimatedFrame,
    AnimatedProperties,
    AnimatedValue,
    SpringSpec,
    TweenSpec,
    spring_step,
    spring_step_limit,
    tween_value,
)
from glasskit_ui.errors import ConfigurationError


class TweenTests(unittest.TestCase):
    def test_tween_endpoints(self) -> None:
        self.assertEqual(tween_value(0.0, 12.0, 0.0, 150.0), 0.0)
        self.assertEqual(tween_value(0.0, 12.0, 150.0, 150.0), 12.0)
        self.assertEqual(tween_value(0.0, 12.0, 400.0, 150.0), 12.0)
        self.assertEqual(tween_value(3.0, 7.0, 0.0, 0.0), 7.0)

    def test_tween_reaches_target_exactly_and_settles(self) -> None:
        value = AnimatedValue(0.0, TweenSpec(duration_ms=150.0))
        value.set_target(12.0)
        self.assertFalse(value.advance(75.0))
        self.assertAlmostEqual(value.value, 6.0)
        self.assertTrue(value.advance(75.0))
        self.assertEqual(value.value, 12.0)
        self.assertTrue(value.settled)

    def test_tween_is_monotonic(self) -> None:
        value = AnimatedValue(12.0, TweenSpec(duration_ms=150.0))
        value.set_target(0.0)
        samples = [value.value]
        while not value.advance(16.0):
            samples.append(value.value)
        samples.append(value.value)
        self.assertEqual(samples, sorted(samples, reverse=True))
        self.assertEqual(samples[-1], 0.0)

    def test_retarget_restarts_from_current_value(self) -> None:
        value = AnimatedValue(0.0, TweenSpec(duration_ms=100.0))
        value.set_target(10.0)
        value.advance(50.0)
        value.set_target(0.0)
        self.assertEqual(value.elapsed_ms, 0.0)
        value.advance(50.0)
        self.assertAlmostEqual(value.value, 2.5)

    def test_same_target_does_not_restart(self) -> None:
        value = AnimatedValue(0.0, TweenSpec(duration_ms=100.0))
        value.set_target(10.0)
        value.advance(50.0)
        value.set_target(10.0)
        self.assertEqual(value.elapsed_ms, 50.0)

    def test_snap_to_settles_immediately(self) -> None:
        value = AnimatedValue(0.0, TweenSpec())
        value.set_target(10.0)
        value.advance(20.0)
        value.snap_to(3.0)
        self.assertTrue(value.settled)
        self.assertEqual((value.value, value.target, value.velocity), (3.0, 3.0, 0.0))

    def test_negative_dt_is_rejected(self) -> None:
        value = AnimatedValue(0.0, TweenSpec())
        with self.assertRaises(ValueError):
            value.advance(-1.0)

    def test_invalid_tween_spec(self) -> None:
        with self.assertRaises(ConfigurationError):
            TweenSpec(duration_ms=-5.0)


class SpringTests(unittest.TestCase):
    def test_target_with_zero_velocity_is_a_fixed_point(self) -> None:
        spec = SpringSpec()
        self.assertEqual(spring_step(5.0, 0.0, 5.0, spec, 1.0 / 240.0), (5.0, 0.0))
        value = AnimatedValue(5.0, spec)
        value.set_target(5.0)
        self.assertTrue(value.advance(16.0))
        self.assertEqual(value.value, 5.0)

    def test_spring_converges_and_snaps_to_target(self) -> None:
        value = AnimatedValue(0.0, SpringSpec())
        value.set_target(1.0)
        for _ in range(200):
            if value.advance(16.0):
                break
        self.assertTrue(value.settled)
        self.assertEqual(value.value, 1.0)
        self.assertEqual(value.velocity, 0.0)

    def test_large_frame_is_sub_stepped(self) -> None:
        coarse = AnimatedValue(0.0, SpringSpec())
        fine = AnimatedValue(0.0, SpringSpec())
        coarse.set_target(2.0)
        fine.set_target(2.0)
        coarse.advance(50.0)
        for _ in range(10):
            fine.advance(5.0)
        self.assertAlmostEqual(coarse.value, fine.value, delta=0.1)
        self.assertLess(abs(coarse.value), 3.0)

    def _settle(self, value: AnimatedValue, frame_ms: float, max_frames: int) -> None:
        for _ in range(max_frames):
            if value.advance(frame_ms):
                break
            self.assertTrue(math.isfinite(value.value))
            self.assertTrue(math.isfinite(value.velocity))

    def test_heavily_overdamped_spring_settles_to_target(self) -> None:
        value = AnimatedValue(0.0, SpringSpec(damping_ratio=50.0))
        value.set_target(1.0)
        self._settle(value, 100.0, 1000)
        self.assertTrue(value.settled)
        self.assertEqual(value.value, 1.0)
        self.assertEqual(value.velocity, 0.0)

    def test_very_stiff_spring_settles_to_target(self) -> None:
        value = AnimatedValue(0.0, SpringSpec(stiffness=1_000_000.0))
        value.set_target(4.0)
        self._settle(value, 16.0, 100)
        self.assertTrue(value.settled)
        self.assertEqual(value.value, 4.0)
        self.assertEqual(value.velocity, 0.0)

    def test_step_limit_shrinks_with_stiffness_and_damping(self) -> None:
        default = spring_step_limit(SpringSpec())
        self.assertEqual(default, MAX_SPRING_STEP_S)
        self.assertLess(spring_step_limit(SpringSpec(stiffness=1_000_000.0)), default)
        self.assertLess(spring_step_limit(SpringSpec(damping_ratio=50.0)), default)

    def test_retarget_mid_flight_keeps_value_and_velocity(self) -> None:
        value = AnimatedValue(0.0, SpringSpec())
        value.set_target(1.0)
        value.advance(30.0)
        before, velocity = value.value, value.velocity
        self.assertGreater(before, 0.0)
        self.assertGreater(velocity, 0.0)
        value.set_target(-1.0)
        self.assertEqual((value.value, value.velocity), (before, velocity))
        self.assertFalse(value.settled)
        value.advance(1.0)
        self.assertLess(abs(value.value - before), 0.1)
        # Still moving toward the old target for a moment.
        self.assertGreater(value.value, before)

    def test_invalid_spring_spec(self) -> None:
        with self.assertRaises(ConfigurationError):
            SpringSpec(stiffness=0.0)
        with self.assertRaises(ConfigurationError):
            SpringSpec(damping_ratio=-1.0)


class AnimatedPropertiesTests(unittest.TestCase):
    def test_requires_spec_for_every_property(self) -> None:
        with self.assertRaises(ValueError):
            AnimatedProperties({"depth": 1.0}, {})

    def test_snapshot_is_immutable(self) -> None:
        props = AnimatedProperties({"depth": 12.0}, {"depth": TweenSpec()})
        frame = props.snapshot()
        self.assertEqual(frame["depth"], 12.0)
        with self.assertRaises(TypeError):
            frame.values["depth"] = 0.0  # type: ignore[index]

    def test_settled_only_when_all_values_settled(self) -> None:
        props = AnimatedProperties(
            {"a": 0.0, "b": 0.0},
            {"a": TweenSpec(duration_ms=50.0), "b": TweenSpec(duration_ms=100.0)},
        )
        props.retarget({"a": 1.0, "b": 1.0})
        self.assertFalse(props.advance(50.0))
        self.assertTrue(props["a"].settled)
        self.assertTrue(props.advance(50.0))

    def test_frame_helpers(self) -> None:
        frame = AnimatedFrame({"y_offset": 2.0})
        self.assertIn("y_offset", frame)
        self.assertEqual(frame.get("missing"), 0.0)
        self.assertEqual(list(frame), ["y_offset"])
        self.assertEqual(frame.as_dict(), {"y_offset": 2.0})


if __name__ == "__main__":
    unittest.main()
