from __future__ import annotations

import unittest

from glasskit_ui.controls.draw_commands import BlurredRoundRect, RoundRectFill
from glasskit_ui.controls.shadow import depth_shadow_commands, layered_shadow_commands, soft_shadow_commands
from glasskit_ui.geometry import RoundRect
from glasskit_ui.style.color import BLACK


BODY = RoundRect(0.0, 0.0, 150.0, 52.0, 16.0)


class ShadowRendererTests(unittest.TestCase):
    def test_depth_shadow_extends_body(self) -> None:
        (command,) = depth_shadow_commands(RoundRect(0.0, 0.0, 224.0, 236.0, 19.0), BLACK, 2.0, 12.0, 12.0)
        self.assertIsInstance(command, RoundRectFill)
        rect = command.rect
        self.assertEqual((rect.x, rect.y, rect.width, rect.height), (-2.0, -2.0, 228.0, 262.0))
        self.assertEqual(rect.radius, 19.0)

    def test_blurred_soft_shadow_quantizes_alpha(self) -> None:
        (command,) = soft_shadow_commands(BODY, BLACK, 0.5, 4.0, supports_blur=True)
        self.assertIsInstance(command, BlurredRoundRect)
        self.assertAlmostEqual(command.color.alpha, 32 / 255.0)
        self.assertEqual(command.blur_radius, 4.0)
        self.assertEqual(command.rect.y, 4.0)

    def test_layered_fallback_steps_offset_and_fades(self) -> None:
        commands = soft_shadow_commands(BODY, BLACK, 1.0, 4.0, supports_blur=False)
        self.assertEqual(len(commands), 5)
        self.assertFalse(any(isinstance(c, BlurredRoundRect) for c in commands))
        offsets = [c.rect.y for c in commands]
        alphas = [c.color.alpha for c in commands]
        for actual, expected in zip(offsets, (0.8, 1.6, 2.4, 3.2, 4.0)):
            self.assertAlmostEqual(actual, expected)
        for actual, expected in zip(alphas, (0.15, 0.12, 0.09, 0.06, 0.03)):
            self.assertAlmostEqual(actual, expected)
        self.assertTrue(all(c.rect.width == BODY.width for c in commands))

    def test_invisible_shadow_is_skipped(self) -> None:
        self.assertEqual(soft_shadow_commands(BODY, BLACK, 0.005, 4.0, supports_blur=True), [])
        self.assertEqual(soft_shadow_commands(BODY, BLACK, 0.0, 4.0, supports_blur=False), [])

    def test_layered_requires_positive_layers(self) -> None:
        with self.assertRaises(ValueError):
            layered_shadow_commands(BODY, BLACK, 1.0, 4.0, layers=0)


if __name__ == "__main__":
    unittest.main()
