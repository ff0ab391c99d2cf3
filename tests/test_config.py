from __future__ import annotations

import unittest

from curveview.config import TITLE, PlotConfig, PlotStyle


class PlotConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = PlotConfig()
        self.assertEqual((config.domain_start, config.domain_end), (3.8, 7.6))
        self.assertEqual(
            (config.left_margin, config.top_margin, config.right_margin, config.bottom_margin),
            (60, 40, 40, 60),
        )
        self.assertEqual(config.points_per_pixel, 1.5)
        self.assertEqual(config.max_points, 5000)
        self.assertEqual(config.debounce_ms, 200)
        self.assertEqual(config.marker_cap, 1000)

    def test_rejects_inverted_domain(self) -> None:
        with self.assertRaises(ValueError):
            PlotConfig(domain_start=1.0, domain_end=1.0)

    def test_rejects_bad_limits(self) -> None:
        for kwargs in (
            {"left_margin": -1},
            {"points_per_pixel": 0.0},
            {"min_points": 1},
            {"min_points": 300, "max_points": 200},
            {"debounce_ms": 0},
            {"marker_cap": -1},
            {"min_sample_width_px": 0},
            {"min_graph_size_px": 0},
            {"flat_padding": 0.0},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    PlotConfig(**kwargs)


class PlotStyleTests(unittest.TestCase):
    def test_title_and_caption(self) -> None:
        style = PlotStyle()
        self.assertEqual(style.title, TITLE)
        self.assertTrue(style.caption.endswith(TITLE))


if __name__ == "__main__":
    unittest.main()
