from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from curveview.config import PlotConfig, PlotStyle
from curveview.controller import PaintReport, PlotController, PlotState
from curveview.errors import PlotInvariantError
from curveview.host import HeadlessEventSource
from curveview.sampler import SampleSet
from curveview.scales import ValueRange
from curveview.surface import DrawingSurface, RasterSurface


class _RecordingSurface(DrawingSurface):
    def __init__(self, width: int = 900, height: int = 700) -> None:
        self._width = width
        self._height = height
        self.calls: list[tuple] = []
        self.closed = False

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self, color) -> None:
        self.calls.append(("clear",))

    def draw_line(self, x0, y0, x1, y1, color, width=1, *, dotted=False) -> None:
        self.calls.append(("line",))

    def draw_polyline(self, xs, ys, color, width=1) -> None:
        self.calls.append(("polyline", np.asarray(xs).copy(), np.asarray(ys).copy()))

    def fill_ellipse(self, x, y, width, height, color) -> None:
        self.calls.append(("ellipse", x, y, width, height))

    def draw_text(self, x, y, text, color, *, font_size_px, bold=False) -> None:
        self.calls.append(("text", text))

    def measure_text(self, text, *, font_size_px, bold=False) -> tuple[int, int]:
        return (6 * len(text), 10)

    def new_layer(self, width: int, height: int) -> "_RecordingSurface":
        return _RecordingSurface(width, height)

    def draw_layer(self, layer, x=0, y=0) -> None:
        self.calls.append(("layer", layer))

    def close(self) -> None:
        self.closed = True

    def kinds(self) -> list[str]:
        return [c[0] for c in self.calls]


class PlotControllerConstructionTests(unittest.TestCase):
    def test_samples_immediately_for_initial_viewport(self) -> None:
        source = HeadlessEventSource(900, 700)
        controller = PlotController(source)
        self.assertEqual(controller.state, PlotState.IDLE)
        self.assertEqual(len(controller.samples), 1200)
        self.assertEqual(float(controller.samples.xs[0]), 3.8)
        self.assertAlmostEqual(float(controller.samples.xs[-1]), 7.6, delta=1e-9)
        self.assertEqual(controller.resample_count, 1)
        self.assertIsNone(controller.snapshot)
        self.assertTrue(source.connected)
        self.assertEqual(source.caption, PlotStyle().caption)
        controller.close()


class PlotControllerPaintTests(unittest.TestCase):
    def setUp(self) -> None:
        self.source = HeadlessEventSource(900, 700)
        self.controller = PlotController(self.source)

    def tearDown(self) -> None:
        self.controller.close()

    def test_reference_frame_draws_layer_then_single_polyline(self) -> None:
        surface = _RecordingSurface()
        report = self.controller.handle_paint(surface)
        self.assertIsInstance(report, PaintReport)
        assert report is not None
        self.assertEqual(surface.kinds(), ["layer", "polyline"])
        _, xs, ys = surface.calls[1]
        self.assertEqual(xs.size, 1200)
        self.assertAlmostEqual(float(xs[0]), 60.0, places=9)
        self.assertAlmostEqual(float(xs[-1]), 860.0, places=6)
        self.assertTrue(np.all(ys >= 40.0 - 1e-9))
        self.assertTrue(np.all(ys <= 640.0 + 1e-9))
        self.assertEqual(report.point_count, 1200)
        self.assertEqual(report.markers_drawn, 0)
        self.assertTrue(report.snapshot_rebuilt)

    def test_second_paint_reuses_snapshot(self) -> None:
        self.controller.handle_paint(_RecordingSurface())
        first = self.controller.snapshot
        report = self.controller.handle_paint(_RecordingSurface())
        assert report is not None
        self.assertFalse(report.snapshot_rebuilt)
        self.assertIs(self.controller.snapshot, first)

    def test_small_viewport_draws_markers_after_curve(self) -> None:
        self.source.resize(150, 700)
        self.source.advance(200)
        self.assertEqual(len(self.controller.samples), 200)
        surface = _RecordingSurface(150, 700)
        report = self.controller.handle_paint(surface)
        assert report is not None
        self.assertEqual(report.markers_drawn, 200)
        kinds = surface.kinds()
        self.assertEqual(kinds[:2], ["layer", "polyline"])
        self.assertEqual(kinds[2:], ["ellipse"] * 200)
        _, x, y, w, h = surface.calls[2]
        self.assertEqual((w, h), (8, 8))
        _, xs, ys = surface.calls[1]
        self.assertAlmostEqual(x, float(xs[0]) - 4, places=9)
        self.assertAlmostEqual(y, float(ys[0]) - 4, places=9)

    def test_marker_cap_is_inclusive(self) -> None:
        source = HeadlessEventSource(900, 700)
        config = PlotConfig(points_per_pixel=1.25)
        with PlotController(source, config=config) as controller:
            self.assertEqual(len(controller.samples), 1000)
            report = controller.handle_paint(_RecordingSurface())
            assert report is not None
            self.assertEqual(report.markers_drawn, 1000)

    def test_paint_into_raster_surface(self) -> None:
        surface, report = self.source.paint()
        self.assertIsInstance(surface, RasterSurface)
        self.assertIsInstance(report, PaintReport)
        curve = np.asarray(PlotStyle().curve_color[:3], dtype=np.uint8)
        self.assertTrue(np.any(np.all(surface.rgba[:, :, :3] == curve, axis=2)))
        marker = np.asarray(PlotStyle().marker_color[:3], dtype=np.uint8)
        self.assertFalse(np.any(np.all(surface.rgba[:, :, :3] == marker, axis=2)))

    def test_resize_before_settle_rebuilds_for_new_size(self) -> None:
        self.controller.handle_paint(_RecordingSurface())
        old = self.controller.snapshot
        assert old is not None
        self.source.resize(1000, 800)
        self.assertEqual(self.controller.state, PlotState.DEBOUNCING)
        report = self.controller.handle_paint(_RecordingSurface(1000, 800))
        assert report is not None
        self.assertTrue(report.snapshot_rebuilt)
        self.assertTrue(old.closed)
        self.assertEqual(self.controller.snapshot.size, (1000, 800))
        self.assertEqual(report.point_count, 1200)

    def test_resample_marks_snapshot_stale(self) -> None:
        self.controller.handle_paint(_RecordingSurface())
        old = self.controller.snapshot
        assert old is not None
        self.source.resize(900, 700)
        self.source.advance(200)
        self.assertTrue(old.stale)
        report = self.controller.handle_paint(_RecordingSurface())
        assert report is not None
        self.assertTrue(report.snapshot_rebuilt)
        self.assertIsNot(self.controller.snapshot, old)

    def test_empty_samples_make_paint_a_no_op(self) -> None:
        source = HeadlessEventSource(900, 700)
        with mock.patch("curveview.controller.sample", return_value=SampleSet.empty()):
            controller = PlotController(source)
        surface = _RecordingSurface()
        self.assertIsNone(controller.handle_paint(surface))
        self.assertEqual(surface.calls, [])
        controller.close()

    def test_broken_value_range_fails_fast(self) -> None:
        broken = ValueRange(min_x=1.0, max_x=1.0, min_y=0.0, max_y=1.0)
        with mock.patch("curveview.controller.compute_value_range", return_value=broken):
            with self.assertRaises(PlotInvariantError):
                self.controller.handle_paint(_RecordingSurface())


class PlotControllerDebounceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.source = HeadlessEventSource(900, 700)
        self.controller = PlotController(self.source)

    def tearDown(self) -> None:
        self.controller.close()

    def test_burst_of_resizes_resamples_once(self) -> None:
        for i in range(5):
            self.source.resize(900 + 10 * i, 700)
            self.source.advance(50)
        self.assertEqual(self.controller.resample_count, 1)
        self.assertEqual(self.controller.state, PlotState.DEBOUNCING)
        self.source.advance(149)
        self.assertEqual(self.controller.resample_count, 1)
        self.source.advance(1)
        self.assertEqual(self.controller.resample_count, 2)
        self.assertEqual(self.controller.state, PlotState.IDLE)
        self.assertEqual(self.source.redraw_requests, 1)
        self.assertEqual(len(self.controller.samples), int(round((940 - 100) * 1.5)))

    def test_quiet_period_is_timed_from_last_event(self) -> None:
        self.source.resize(1000, 700)
        self.source.advance(150)
        self.source.resize(1100, 700)
        self.source.advance(150)
        self.assertEqual(self.controller.resample_count, 1)
        self.source.advance(50)
        self.assertEqual(self.controller.resample_count, 2)
        self.assertEqual(len(self.controller.samples), 1500)

    def test_samples_are_replaced_wholesale(self) -> None:
        before = self.controller.samples
        self.source.resize(600, 700)
        self.source.advance(200)
        after = self.controller.samples
        self.assertIsNot(before, after)
        self.assertEqual(len(before), 1200)
        self.assertEqual(len(after), 750)

    def test_viewport_tracks_latest_resize(self) -> None:
        self.source.resize(640, 480)
        self.assertEqual(self.controller.viewport.size, (640, 480))


class PlotControllerCloseTests(unittest.TestCase):
    def test_close_cancels_pending_timer_and_releases_snapshot(self) -> None:
        source = HeadlessEventSource(900, 700)
        controller = PlotController(source)
        controller.handle_paint(_RecordingSurface())
        snapshot = controller.snapshot
        assert snapshot is not None
        source.resize(500, 500)
        self.assertTrue(source.timer.active)

        controller.close()
        self.assertEqual(controller.state, PlotState.CLOSED)
        self.assertFalse(source.timer.active)
        self.assertFalse(source.connected)
        self.assertTrue(snapshot.closed)
        self.assertTrue(snapshot.layer.closed)
        self.assertIsNone(controller.snapshot)

        source.advance(1000)
        self.assertEqual(controller.resample_count, 1)
        self.assertIsNone(controller.handle_paint(_RecordingSurface()))
        _, report = source.paint()
        self.assertIsNone(report)

    def test_close_is_idempotent_and_ignores_later_resizes(self) -> None:
        source = HeadlessEventSource(900, 700)
        controller = PlotController(source)
        controller.close()
        controller.close()
        controller.handle_resize(300, 300)
        self.assertEqual(controller.state, PlotState.CLOSED)
        self.assertFalse(source.timer.active)

    def test_context_manager_closes(self) -> None:
        source = HeadlessEventSource(900, 700)
        with PlotController(source) as controller:
            controller.handle_paint(_RecordingSurface())
        self.assertEqual(controller.state, PlotState.CLOSED)


if __name__ == "__main__":
    unittest.main()
