from __future__ import annotations

from datetime import datetime, timedelta, timezone
import re
import unittest
from unittest import mock

import numpy as np

from clickchart import SampleSeries, Viewport, normalize_samples, render_pipeline
from clickchart.curves import monotone_curve, monotone_tangents
from clickchart.render import (
    AreaFill,
    Axis,
    GridLines,
    HitSurface,
    LinePath,
    Placeholder,
    PLACEHOLDER_TEXT,
    time_tick_count,
)

T0 = datetime(2024, 5, 6, 12, 0, tzinfo=timezone.utc)


def _series(values, step=timedelta(hours=1)):
    return normalize_samples([(T0 + i * step, v) for i, v in enumerate(values)])


class MonotoneCurveTests(unittest.TestCase):
    def test_curve_never_leaves_segment_bounds(self) -> None:
        xs = np.asarray([0.0, 40.0, 55.0, 140.0, 141.0, 300.0])
        ys = np.asarray([0.0, 10.0, 5.0, 5.0, 8.0, 0.0])
        cx, cy = monotone_curve(xs, ys)
        for i in range(xs.size - 1):
            mask = (cx >= xs[i]) & (cx <= xs[i + 1])
            lo = min(ys[i], ys[i + 1])
            hi = max(ys[i], ys[i + 1])
            self.assertTrue(np.all(cy[mask] >= lo - 1e-9), f"segment {i} dips below its endpoints")
            self.assertTrue(np.all(cy[mask] <= hi + 1e-9), f"segment {i} rises above its endpoints")

    def test_curve_passes_through_samples(self) -> None:
        xs = np.asarray([0.0, 10.0, 20.0])
        ys = np.asarray([3.0, 1.0, 2.0])
        cx, cy = monotone_curve(xs, ys)
        for x, y in zip(xs.tolist(), ys.tolist()):
            idx = int(np.argmin(np.abs(cx - x)))
            self.assertAlmostEqual(float(cy[idx]), y, places=9)

    def test_flat_run_has_zero_tangent(self) -> None:
        tangents = monotone_tangents(np.asarray([0.0, 1.0, 2.0, 3.0]), np.asarray([1.0, 5.0, 5.0, 2.0]))
        self.assertEqual(float(tangents[1]), 0.0)
        self.assertEqual(float(tangents[2]), 0.0)

    def test_coincident_x_does_not_produce_nan(self) -> None:
        cx, cy = monotone_curve(np.asarray([0.0, 5.0, 5.0, 9.0]), np.asarray([1.0, 2.0, 6.0, 3.0]))
        self.assertTrue(np.all(np.isfinite(cx)))
        self.assertTrue(np.all(np.isfinite(cy)))


class RenderPipelineTests(unittest.TestCase):
    def test_layers_are_emitted_back_to_front(self) -> None:
        drawing = render_pipeline(_series([0, 10, 5]), Viewport(600, 200))
        kinds = [type(layer) for layer in drawing.layers]
        self.assertEqual(kinds, [GridLines, AreaFill, LinePath, HitSurface, Axis, Axis])
        self.assertEqual([layer.orientation for layer in drawing.layers[4:]], ["bottom", "left"])
        self.assertEqual(drawing.origin, (40.0, 20.0))

    def test_render_is_idempotent(self) -> None:
        series = _series([0, 10, 5, 7])
        viewport = Viewport(600, 200)
        self.assertEqual(render_pipeline(series, viewport), render_pipeline(series, viewport))

    def test_empty_series_renders_placeholder_without_scales(self) -> None:
        with mock.patch("clickchart.render.build_scales") as build:
            drawing = render_pipeline(SampleSeries.empty(), Viewport(600, 200))
        build.assert_not_called()
        self.assertTrue(drawing.is_placeholder)
        self.assertIsNone(drawing.hit_surface())
        self.assertEqual(len(drawing.layers), 1)
        self.assertIsInstance(drawing.layers[0], Placeholder)
        self.assertEqual(drawing.layers[0].text, PLACEHOLDER_TEXT)

    def test_undersized_viewport_renders_placeholder(self) -> None:
        series = _series([1, 2])
        for viewport in (Viewport(9, 200), Viewport(600, 9), Viewport(50, 60)):
            with mock.patch("clickchart.render.build_scales") as build:
                drawing = render_pipeline(series, viewport)
            build.assert_not_called()
            self.assertTrue(drawing.is_placeholder)

    def test_single_sample_line_is_one_centred_point(self) -> None:
        drawing = render_pipeline(_series([4]), Viewport(600, 200))
        line = next(layer for layer in drawing.layers if isinstance(layer, LinePath))
        self.assertEqual(len(line.points), 1)
        x, y = line.points[0]
        self.assertAlmostEqual(x, 270.0)
        self.assertAlmostEqual(y, 140 - 4 * 140 / 4.8)

    def test_all_zero_series_sits_on_baseline(self) -> None:
        drawing = render_pipeline(_series([0, 0, 0]), Viewport(600, 200))
        line = drawing.layers[2]
        area = drawing.layers[1]
        self.assertEqual(area.baseline, 140.0)
        self.assertTrue(np.allclose([y for _, y in line.points], 140.0))
        self.assertEqual(drawing.scales.value.d1, 1.0)

    def test_line_spans_plot_width(self) -> None:
        drawing = render_pipeline(_series([4, 9, 1]), Viewport(600, 200))
        xs = [x for x, _ in drawing.layers[2].points]
        self.assertEqual(xs[0], 0.0)
        self.assertAlmostEqual(xs[-1], 540.0, places=9)
        self.assertTrue(all(b >= a for a, b in zip(xs, xs[1:])))

    def test_grid_lines_follow_value_ticks(self) -> None:
        drawing = render_pipeline(_series([0, 10, 5]), Viewport(600, 200))
        grid = drawing.layers[0]
        expected = [drawing.scales.value_to_y(v) for v in (0.0, 5.0, 10.0)]
        self.assertEqual(list(grid.ys), expected)
        self.assertEqual((grid.x0, grid.x1), (0.0, 540.0))

    def test_time_tick_count_depends_on_width(self) -> None:
        self.assertEqual(time_tick_count(Viewport(600, 200)), 6)
        self.assertEqual(time_tick_count(Viewport(501, 200)), 6)
        self.assertEqual(time_tick_count(Viewport(500, 200)), 4)
        self.assertEqual(time_tick_count(Viewport(320, 200)), 4)

    def test_axis_labels(self) -> None:
        drawing = render_pipeline(_series([0, 10, 5]), Viewport(600, 200))
        bottom, left = drawing.layers[4], drawing.layers[5]
        labels = [t.label for t in bottom.ticks]
        self.assertEqual(labels[0], "12:00")
        self.assertEqual(labels[-1], "14:00")
        self.assertTrue(all(re.fullmatch(r"\d\d:\d\d", label) for label in labels))
        self.assertEqual(bottom.offset, 140.0)
        self.assertEqual([t.label for t in left.ticks], ["0", "5", "10"])

    def test_hit_surface_covers_plot_area(self) -> None:
        drawing = render_pipeline(_series([1, 2]), Viewport(600, 200))
        hit = drawing.hit_surface()
        self.assertEqual((hit.x, hit.y, hit.width, hit.height), (0.0, 0.0, 540.0, 140.0))
        self.assertTrue(hit.contains(540.0, 140.0))
        self.assertFalse(hit.contains(-0.5, 10.0))

    def test_precomputed_scales_are_reused(self) -> None:
        series = _series([1, 2, 3])
        viewport = Viewport(600, 200)
        first = render_pipeline(series, viewport)
        with mock.patch("clickchart.render.build_scales") as build:
            again = render_pipeline(series, viewport, scales=first.scales)
        build.assert_not_called()
        self.assertEqual(first, again)


if __name__ == "__main__":
    unittest.main()
