from __future__ import annotations

import unittest

from glasskit_core.core.animation_runtime import ButtonAnimationRuntime, FrameClock, RuntimeTick
from glasskit_ui.animation import SpringSpec
from glasskit_ui.controls.config import GlassButtonConfig, SecondaryGlassButtonConfig
from glasskit_ui.controls.glass_button import GlassButtonController


class FrameClockTests(unittest.TestCase):
    def test_rejects_invalid_fps(self) -> None:
        with self.assertRaises(ValueError):
            FrameClock(target_fps=0)
        with self.assertRaises(ValueError):
            FrameClock(target_fps=60, present_fps=0)

    def test_present_fps_is_clamped_to_target(self) -> None:
        self.assertEqual(FrameClock(target_fps=60, present_fps=240).present_fps, 60)

    def test_should_present_tracks_cadence(self) -> None:
        clock = FrameClock(target_fps=120, present_fps=30)
        now = 0.0
        presented = 0
        for _ in range(120):
            if clock.should_present(now):
                presented += 1
            now += 1.0 / 120.0
        self.assertEqual(presented, 30)

    def test_compute_sleep(self) -> None:
        clock = FrameClock(target_fps=100)
        self.assertAlmostEqual(clock.target_dt_ms, 10.0)
        self.assertAlmostEqual(clock.compute_sleep(10.0, 10.004), 0.006, places=6)
        self.assertEqual(clock.compute_sleep(0.0, 1.0), 0.0)


class ButtonAnimationRuntimeTests(unittest.TestCase):
    def test_idle_runtime_does_not_tick(self) -> None:
        runtime = ButtonAnimationRuntime()
        runtime.register(GlassButtonController(GlassButtonConfig()))
        self.assertTrue(runtime.idle)
        self.assertIsNone(runtime.step())
        self.assertEqual(runtime.run_until_settled(), [])

    def test_rejects_duplicate_registration(self) -> None:
        runtime = ButtonAnimationRuntime()
        runtime.register(GlassButtonController(GlassButtonConfig(), component_id="start"))
        with self.assertRaises(ValueError):
            runtime.register(GlassButtonController(GlassButtonConfig(), component_id="start"))

    def test_ticks_until_press_settles(self) -> None:
        seen: list[RuntimeTick] = []
        runtime = ButtonAnimationRuntime(FrameClock(target_fps=60), on_tick=seen.append)
        start = GlassButtonController(GlassButtonConfig(), component_id="start")
        cancel = GlassButtonController(SecondaryGlassButtonConfig(), component_id="cancel")
        runtime.register(start)
        runtime.register(cancel)
        start.press_start()
        ticks = runtime.run_until_settled()
        self.assertIn(len(ticks), (9, 10))
        self.assertEqual(seen, ticks)
        self.assertTrue(ticks[-1].settled)
        self.assertFalse(any(t.settled for t in ticks[:-1]))
        self.assertEqual(ticks[-1].frames["start"]["y_offset"], 12.0)
        self.assertEqual(ticks[-1].frames["cancel"]["y_offset"], 0.0)
        self.assertIs(runtime.controller("start"), start)

    def test_tick_cap_stops_a_runaway_animation(self) -> None:
        runtime = ButtonAnimationRuntime()
        controller = GlassButtonController(SecondaryGlassButtonConfig(motion=SpringSpec()))
        runtime.register(controller)
        controller.press_start()
        with self.assertLogs("glasskit_core.core.animation_runtime", level="WARNING"):
            ticks = runtime.run_until_settled(max_ticks=3, dt_ms=0.0)
        self.assertEqual(len(ticks), 3)
        self.assertFalse(runtime.idle)
        with self.assertRaises(ValueError):
            runtime.run_until_settled(max_ticks=0)

    def test_realtime_loop_sleeps_between_frames(self) -> None:
        times = iter(i * 0.004 for i in range(10_000))
        sleeps: list[float] = []
        runtime = ButtonAnimationRuntime(FrameClock(target_fps=60, present_fps=20))
        controller = GlassButtonController(GlassButtonConfig())
        runtime.register(controller)
        controller.press_start()
        ticks = runtime.run_realtime(time_fn=lambda: next(times), sleep_fn=sleeps.append)
        self.assertTrue(runtime.idle)
        self.assertEqual(len(sleeps), len(ticks))
        self.assertTrue(all(s >= 0.0 for s in sleeps))
        self.assertTrue(ticks[0].present)
        self.assertFalse(all(t.present for t in ticks))


if __name__ == "__main__":
    unittest.main()
