from __future__ import annotations

from datetime import datetime, timedelta, timezone
import re
import unittest

import numpy as np

from clickchart import normalize_samples
from clickchart.scales import (
    build_scales,
    format_ticks_for_axis,
    format_value_label,
    generate_nice_ticks,
    time_tick_interval,
    time_ticks,
    value_ticks,
)

T0 = datetime(2024, 5, 6, 12, 0, tzinfo=timezone.utc)


def _series(values, step=timedelta(hours=1)):
    return normalize_samples([(T0 + i * step, v) for i, v in enumerate(values)])


class ScaleEngineTests(unittest.TestCase):
    def test_value_domain_has_headroom_above_peak(self) -> None:
        scales = build_scales(_series([0, 10, 5]), 540, 140)
        self.assertEqual(scales.value.d0, 0.0)
        self.assertAlmostEqual(scales.value.d1, 12.0, places=9)

    def test_axis_orientation_is_inverted(self) -> None:
        for values in ([0, 10, 5], [3], [0.5, 0.25], [100, 2000, 7]):
            scales = build_scales(_series(values), 540, 140)
            self.assertAlmostEqual(scales.value_to_y(0.0), 140.0, places=9)
            self.assertAlmostEqual(scales.value_to_y(scales.value.d1), 0.0, places=9)

    def test_all_zero_series_floors_value_domain_at_one(self) -> None:
        scales = build_scales(_series([0, 0]), 540, 140)
        self.assertEqual(scales.value.d1, 1.0)
        self.assertEqual(scales.value_to_y(0.0), 140.0)

    def test_negative_values_keep_zero_lower_bound(self) -> None:
        scales = build_scales(_series([-4, -2]), 540, 140)
        self.assertEqual(scales.value.d0, 0.0)
        self.assertEqual(scales.value.d1, 1.0)

    def test_time_scale_is_monotonic(self) -> None:
        series = normalize_samples(
            [(T0 + timedelta(minutes=m), 1) for m in (0, 3, 3, 10, 55, 56, 120)]
        )
        scales = build_scales(series, 300, 100)
        xs = scales.time(series.epochs)
        self.assertTrue(np.all(np.diff(xs) >= 0))
        self.assertEqual(float(xs[0]), 0.0)
        self.assertAlmostEqual(float(xs[-1]), 300.0, places=9)

    def test_time_inverse_round_trips_pixels(self) -> None:
        series = _series([1, 2, 3])
        scales = build_scales(series, 540, 140)
        t = scales.x_to_time(135.0)
        self.assertAlmostEqual(t, T0.timestamp() + 1800.0, places=6)
        self.assertAlmostEqual(scales.time_to_x(t), 135.0, places=6)
        self.assertAlmostEqual(scales.y_to_value(scales.value_to_y(7.5)), 7.5, places=9)

    def test_single_timestamp_maps_to_range_midpoint(self) -> None:
        series = normalize_samples([(T0, 4), (T0, 9)])
        scales = build_scales(series, 540, 140)
        self.assertTrue(scales.time.degenerate)
        self.assertEqual(scales.time_to_x(T0), 270.0)
        self.assertEqual(scales.time_to_x(T0 + timedelta(days=3)), 270.0)
        self.assertEqual(scales.x_to_time(12.0), T0.timestamp())

    def test_build_scales_is_pure(self) -> None:
        series = _series([0, 10, 5])
        self.assertEqual(build_scales(series, 540, 140), build_scales(series, 540, 140))

    def test_value_ticks_stay_inside_domain(self) -> None:
        scales = build_scales(_series([0, 10, 5]), 540, 140)
        ticks = value_ticks(scales.value, 4)
        self.assertEqual(ticks.tolist(), [0.0, 5.0, 10.0])
        self.assertEqual(format_ticks_for_axis(ticks), ["0", "5", "10"])

    def test_value_ticks_for_floor_domain(self) -> None:
        scales = build_scales(_series([0, 0]), 540, 140)
        self.assertEqual(value_ticks(scales.value, 4).tolist(), [0.0, 0.5, 1.0])

    def test_time_tick_interval_prefers_closest_step(self) -> None:
        self.assertEqual(time_tick_interval(7200.0, 6), 900.0)
        self.assertEqual(time_tick_interval(7 * 86400.0, 7), 86400.0)
        self.assertEqual(time_tick_interval(0.5, 4), 1.0)

    def test_time_ticks_are_aligned_and_formatted(self) -> None:
        series = _series([1, 2, 3])
        scales = build_scales(series, 540, 140)
        ticks = time_ticks(scales.time, 6)
        self.assertEqual(ticks[0], T0.timestamp())
        self.assertEqual(ticks[-1], (T0 + timedelta(hours=2)).timestamp())
        self.assertTrue(np.allclose(np.diff(ticks), 900.0))

    def test_nice_ticks_snap_zero(self) -> None:
        ticks = generate_nice_ticks(-1.0, 1.0, 3)
        self.assertIn(0.0, ticks.tolist())

    def test_value_label_format(self) -> None:
        self.assertEqual(format_value_label(10.0), "10")
        self.assertEqual(format_value_label(2.5), "2.5")
        self.assertTrue(re.fullmatch(r"\d+", format_value_label(1200)))


if __name__ == "__main__":
    unittest.main()
