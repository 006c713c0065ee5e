from __future__ import annotations

from datetime import datetime, timedelta, timezone
import unittest
from unittest import mock

from clickchart import AreaChart, PointerEvent, normalize_samples
from clickchart import scales as scales_mod
from clickchart.tooltip import CARD_OFFSET_PX, place_card

T0 = datetime(2024, 5, 6, 12, 0, tzinfo=timezone.utc)


def _chart(values=(0, 10, 5), **kwargs) -> AreaChart:
    samples = [(T0 + timedelta(hours=i), v) for i, v in enumerate(values)]
    return AreaChart(samples, **kwargs)


def _move(x: float, y: float, kind: str = "pointer_move") -> PointerEvent:
    return PointerEvent(kind, x, y)


class CardPlacementTests(unittest.TestCase):
    def test_card_sits_below_right_of_anchor_when_it_fits(self) -> None:
        self.assertEqual(place_card(100, 50, 80, 40, 600, 200), (100 + CARD_OFFSET_PX, 50 + CARD_OFFSET_PX))

    def test_card_flips_left_near_right_edge(self) -> None:
        x, _ = place_card(590, 50, 80, 40, 600, 200)
        self.assertEqual(x, 590 - 80 - CARD_OFFSET_PX)

    def test_card_flips_up_near_bottom_edge(self) -> None:
        _, y = place_card(100, 180, 80, 40, 600, 200)
        self.assertEqual(y, 180 - 40 - CARD_OFFSET_PX)

    def test_oversized_card_is_clamped_into_container(self) -> None:
        x, y = place_card(50, 5, 580, 190, 600, 200)
        self.assertGreaterEqual(x, 0)
        self.assertGreaterEqual(y, 0)
        self.assertLessEqual(x + 580, 600)
        self.assertLessEqual(y + 190, 200)


class TooltipInteractionTests(unittest.TestCase):
    def test_hover_over_sample_shows_its_value(self) -> None:
        chart = _chart()
        changed = chart.handle_event(_move(40 + 270, 90))
        self.assertTrue(changed)
        state = chart.tooltip_state
        self.assertTrue(state.active)
        self.assertEqual(state.sample.value, 10.0)
        self.assertEqual(state.anchor_x, 270.0)
        self.assertAlmostEqual(state.anchor_y, 140.0 - 10.0 * 140.0 / 12.0, places=9)

        overlay = chart.tooltip_overlay()
        self.assertEqual(overlay.card.value_label, "10")
        self.assertEqual(overlay.card.time_label, "13:00")
        self.assertEqual(overlay.card.series_label, "Clicks")
        self.assertEqual(overlay.indicator.x, 310.0)
        self.assertEqual((overlay.indicator.y0, overlay.indicator.y1), (20.0, 160.0))

    def test_moving_within_same_sample_reports_no_change(self) -> None:
        chart = _chart()
        chart.handle_event(_move(310, 90))
        self.assertFalse(chart.handle_event(_move(310, 90)))
        self.assertFalse(chart.handle_event(_move(311, 60)))

    def test_leave_hides_and_is_idempotent(self) -> None:
        chart = _chart()
        chart.handle_event(_move(310, 90))
        self.assertTrue(chart.handle_event(PointerEvent("pointer_leave")))
        self.assertFalse(chart.tooltip_state.active)
        self.assertIsNone(chart.tooltip_overlay())
        self.assertFalse(chart.handle_event(PointerEvent("pointer_leave")))

    def test_touch_sequence_shows_then_hides(self) -> None:
        chart = _chart()
        self.assertTrue(chart.handle_event(_move(45, 100, "touch_start")))
        self.assertEqual(chart.tooltip_state.sample.value, 0.0)
        self.assertTrue(chart.handle_event(_move(575, 100, "touch_move")))
        self.assertEqual(chart.tooltip_state.sample.value, 5.0)
        self.assertTrue(chart.handle_event(PointerEvent("touch_end")))
        self.assertFalse(chart.tooltip_state.active)

    def test_pointer_outside_plot_hides(self) -> None:
        chart = _chart()
        chart.handle_event(_move(310, 90))
        self.assertTrue(chart.handle_event(_move(10, 90)))
        self.assertFalse(chart.tooltip_state.active)
        chart.handle_event(_move(310, 90))
        self.assertTrue(chart.handle_event(_move(310, 190)))
        self.assertFalse(chart.tooltip_state.active)

    def test_event_without_coordinates_hides(self) -> None:
        chart = _chart()
        chart.handle_event(_move(310, 90))
        self.assertTrue(chart.handle_event(PointerEvent("pointer_move")))
        self.assertFalse(chart.tooltip_state.active)

    def test_events_on_placeholder_do_nothing(self) -> None:
        chart = AreaChart([])
        self.assertFalse(chart.handle_event(_move(310, 90)))
        self.assertFalse(chart.tooltip_state.active)
        self.assertIsNone(chart.tooltip_overlay())

    def test_pointer_events_reuse_existing_scales(self) -> None:
        chart = _chart()
        chart.drawing()
        with mock.patch("clickchart.render.build_scales", wraps=scales_mod.build_scales) as build:
            for x in range(40, 581, 9):
                chart.handle_event(_move(float(x), 90))
            chart.tooltip_overlay()
            chart.handle_event(PointerEvent("pointer_leave"))
        build.assert_not_called()

    def test_new_sample_set_clears_tooltip(self) -> None:
        chart = _chart()
        chart.handle_event(_move(310, 90))
        chart.set_samples([(T0 + timedelta(hours=i), v) for i, v in enumerate((0, 10, 5))])
        self.assertFalse(chart.tooltip_state.active)

    def test_same_series_identity_keeps_tooltip(self) -> None:
        series = normalize_samples([(T0 + timedelta(hours=i), v) for i, v in enumerate((0, 10, 5))])
        chart = AreaChart(series)
        chart.handle_event(_move(310, 90))
        chart.set_samples(series)
        self.assertTrue(chart.tooltip_state.active)

    def test_card_stays_inside_container_at_every_edge(self) -> None:
        chart = _chart(values=(9, 0, 10))
        for x in (40.0, 41.0, 300.0, 579.0, 580.0):
            for y in (20.0, 100.0, 160.0):
                chart.handle_event(_move(x, y))
                card = chart.tooltip_overlay().card
                self.assertGreaterEqual(card.x, 0)
                self.assertGreaterEqual(card.y, 0)
                self.assertLessEqual(card.x + card.width, 600)
                self.assertLessEqual(card.y + card.height, 200)


if __name__ == "__main__":
    unittest.main()
