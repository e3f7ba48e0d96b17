from __future__ import annotations

import unittest

from glasskit_ui.geometry import (
    ARC_SEGMENTS,
    MIN_STROKE_WIDTH,
    RoundRect,
    angle_to_point,
    arc_segments,
    faded_stroke_width,
)


class GeometryTests(unittest.TestCase):
    def test_angle_to_point_uses_screen_axes(self) -> None:
        x, y = angle_to_point(0.0, 0.0, 10.0, 0.0)
        self.assertAlmostEqual(x, 10.0)
        self.assertAlmostEqual(y, 0.0)
        x, y = angle_to_point(0.0, 0.0, 10.0, 90.0)
        self.assertAlmostEqual(x, 0.0)
        self.assertAlmostEqual(y, 10.0)

    def test_arc_segments_cover_quarter_circle(self) -> None:
        segments = arc_segments(5.0, 5.0, 5.0, 180.0)
        self.assertEqual(len(segments), ARC_SEGMENTS)
        self.assertAlmostEqual(segments[0].start[0], 0.0)
        self.assertAlmostEqual(segments[0].start[1], 5.0)
        self.assertAlmostEqual(segments[-1].end[0], 5.0)
        self.assertAlmostEqual(segments[-1].end[1], 0.0)
        for prev, cur in zip(segments, segments[1:]):
            self.assertEqual(prev.end, cur.start)

    def test_arc_segments_reject_zero_segments(self) -> None:
        with self.assertRaises(ValueError):
            arc_segments(0.0, 0.0, 1.0, 0.0, segments=0)

    def test_fade_in_starts_at_minimum_and_ends_near_max(self) -> None:
        n = ARC_SEGMENTS
        first = faded_stroke_width(0.0, 1.0 / n, 4.0, fade_in=True)
        last = faded_stroke_width((n - 1) / n, 1.0, 4.0, fade_in=True)
        self.assertEqual(first, MIN_STROKE_WIDTH)
        self.assertGreater(last, 3.9)
        self.assertLessEqual(last, 4.0)

    def test_fade_out_mirrors_fade_in(self) -> None:
        n = ARC_SEGMENTS
        for i in range(n):
            p, q = i / n, (i + 1) / n
            mirrored = faded_stroke_width(1.0 - q, 1.0 - p, 4.0, fade_in=True)
            self.assertAlmostEqual(faded_stroke_width(p, q, 4.0, fade_in=False), mirrored)

    def test_fade_widths_are_monotonic(self) -> None:
        n = ARC_SEGMENTS
        widths = [faded_stroke_width(i / n, (i + 1) / n, 4.0, fade_in=True) for i in range(n)]
        self.assertEqual(widths, sorted(widths))

    def test_round_rect_helpers(self) -> None:
        rect = RoundRect(0.0, 0.0, 150.0, 52.0, 16.0)
        self.assertEqual(rect.center, (75.0, 26.0))
        inset = rect.inset(0.5)
        self.assertEqual((inset.x, inset.y, inset.width, inset.height), (0.5, 0.5, 149.0, 51.0))
        self.assertEqual(rect.offset(dy=4.0).y, 4.0)
        self.assertEqual(RoundRect(0.0, 0.0, 10.0, 6.0, 19.0).effective_radius(), 3.0)
        with self.assertRaises(ValueError):
            RoundRect(0.0, 0.0, -1.0, 1.0)


if __name__ == "__main__":
    unittest.main()
