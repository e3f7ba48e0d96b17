from __future__ import annotations

import unittest

from glasskit_ui.animation import SpringSpec, TweenSpec
from glasskit_ui.controls.config import GlassButtonConfig, SecondaryGlassButtonConfig, config_from_overrides
from glasskit_ui.errors import ConfigurationError
from glasskit_ui.style.color import Color, adjust_brightness


class ButtonConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        glass = GlassButtonConfig()
        self.assertEqual(glass.text, "Start")
        self.assertEqual(glass.depth, 12.0)
        self.assertEqual(glass.motion, TweenSpec(duration_ms=150.0))
        secondary = SecondaryGlassButtonConfig()
        self.assertEqual(secondary.text, "Cancel")
        self.assertEqual((secondary.min_width, secondary.min_height), (150.0, 52.0))
        self.assertIsInstance(secondary.motion, SpringSpec)

    def test_shadow_color_derives_from_background(self) -> None:
        config = GlassButtonConfig()
        self.assertEqual(config.resolved_shadow_color, adjust_brightness(config.background_color, -0.28))
        explicit = GlassButtonConfig(shadow_color=Color(0.1, 0.1, 0.1))
        self.assertEqual(explicit.resolved_shadow_color, Color(0.1, 0.1, 0.1))

    def test_rejects_invalid_values(self) -> None:
        with self.assertRaises(ConfigurationError):
            GlassButtonConfig(depth=-1.0)
        with self.assertRaises(ConfigurationError):
            GlassButtonConfig(top_edge_highlight_opacity=1.5)
        with self.assertRaises(ConfigurationError):
            SecondaryGlassButtonConfig(normal_gradient_alphas=(0.5,))  # type: ignore[arg-type]
        with self.assertRaises(ConfigurationError):
            SecondaryGlassButtonConfig(font_size=0.0)
        with self.assertRaises(ConfigurationError):
            GlassButtonConfig(text_color=Color(2.0, 0.0, 0.0))

    def test_overrides_merge_over_defaults(self) -> None:
        config = config_from_overrides(
            "secondary",
            {
                "text": "Back",
                "base_color": "#112233",
                "normal_gradient_alphas": [0.5, 0.4],
                "corner_radius": 8,
                "font": {"family": "Inter", "weight": 700},
                "motion": {"kind": "tween", "duration_ms": 100},
            },
        )
        self.assertIsInstance(config, SecondaryGlassButtonConfig)
        self.assertEqual(config.text, "Back")
        self.assertEqual(config.base_color, Color.from_hex("#112233"))
        self.assertEqual(config.normal_gradient_alphas, (0.5, 0.4))
        self.assertEqual(config.corner_radius, 8.0)
        self.assertEqual(config.font.weight, 700)
        self.assertEqual(config.motion, TweenSpec(duration_ms=100.0))

    def test_motion_kind_defaults_from_fields(self) -> None:
        config = config_from_overrides("glass", {"motion": {"stiffness": 800}})
        self.assertEqual(config.motion, SpringSpec(stiffness=800.0))

    def test_text_shadow_can_be_disabled(self) -> None:
        config = config_from_overrides("glass", {"text_shadow": False})
        self.assertIsNone(config.text_shadow)  # type: ignore[union-attr]

    def test_rejects_bad_overrides(self) -> None:
        with self.assertRaisesRegex(ConfigurationError, "Unknown"):
            config_from_overrides("glass", {"hover_color": "#FFFFFF"})
        with self.assertRaises(ConfigurationError):
            config_from_overrides("glass", {"background_color": "green"})
        with self.assertRaises(ConfigurationError):
            config_from_overrides("glass", {"depth": "deep"})
        with self.assertRaises(ConfigurationError):
            config_from_overrides("glass", {"font": {"weight": 0}})
        with self.assertRaises(ConfigurationError):
            config_from_overrides("glass", {"motion": {"kind": "bounce"}})
        with self.assertRaises(ConfigurationError):
            config_from_overrides("tertiary", {})  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
