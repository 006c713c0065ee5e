from __future__ import annotations

from dataclasses import dataclass
import logging

from clickchart.events import HIDE_EVENTS, SHOW_EVENTS, PointerEvent
from clickchart.locator import locate_index
from clickchart.raster.draw_text import text_size, theme_font
from clickchart.render import ChartDrawing
from clickchart.samples import Sample, SampleSeries
from clickchart.scales import format_time_label, format_value_label
from clickchart.theme import DEFAULT_THEME, RGBA, ChartTheme

LOGGER = logging.getLogger(__name__)

CARD_OFFSET_PX = 10
CARD_LIFT_PX = 12
CARD_PAD_X = 12
CARD_PAD_Y = 8
CARD_ROW_GAP = 4
SWATCH_PX = 8
SWATCH_GAP_PX = 8
DOT_RADIUS_PX = 6
DOT_RING_PX = 2
INDICATOR_DASH_PX = 4


@dataclass(frozen=True)
class TooltipState:
    active: bool = False
    sample: Sample | None = None
    anchor_x: float = 0.0
    anchor_y: float = 0.0


HIDDEN = TooltipState()


@dataclass(frozen=True)
class TooltipIndicator:
    """Dashed guide through the active sample plus its dot, in container pixels."""

    x: float
    y0: float
    y1: float
    dot_y: float
    color: RGBA
    ring_color: RGBA
    radius: int = DOT_RADIUS_PX
    ring: int = DOT_RING_PX
    dash: int = INDICATOR_DASH_PX

    def bounds(self) -> tuple[int, int, int, int]:
        r = self.radius + self.ring
        x0 = int(self.x) - r - 1
        y0 = int(min(self.y0, self.dot_y - r)) - 1
        y1 = int(max(self.y1, self.dot_y + r)) + 2
        return (x0, y0, 2 * r + 3, y1 - y0)


@dataclass(frozen=True)
class TooltipCard:
    x: int
    y: int
    width: int
    height: int
    time_label: str
    series_label: str
    value_label: str
    background: RGBA
    border: RGBA
    muted: RGBA
    text: RGBA
    swatch: RGBA
    font_px: float

    def bounds(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.width, self.height)


@dataclass(frozen=True)
class TooltipOverlay:
    indicator: TooltipIndicator
    card: TooltipCard

    def bounds(self) -> tuple[int, int, int, int]:
        ax, ay, aw, ah = self.indicator.bounds()
        bx, by, bw, bh = self.card.bounds()
        x0 = min(ax, bx)
        y0 = min(ay, by)
        x1 = max(ax + aw, bx + bw)
        y1 = max(ay + ah, by + bh)
        return (x0, y0, x1 - x0, y1 - y0)


def place_card(
    anchor_left: float,
    anchor_top: float,
    width: int,
    height: int,
    container_width: float,
    container_height: float,
) -> tuple[int, int]:
    """Place a card beside an anchor, flipping then clamping to stay inside the container."""

    x = anchor_left + CARD_OFFSET_PX
    if x + width > container_width:
        x = anchor_left - width - CARD_OFFSET_PX
    y = anchor_top + CARD_OFFSET_PX
    if y + height > container_height:
        y = anchor_top - height - CARD_OFFSET_PX
    x = max(0.0, min(x, container_width - width))
    y = max(0.0, min(y, container_height - height))
    return (int(round(x)), int(round(y)))


class TooltipController:
    """Two-state (hidden/shown) tooltip driven by pointer and touch events.

    `bind` attaches the series and drawing from the latest render pass; the
    controller reuses that pass's scales and never rebuilds them.
    """

    def __init__(self, *, theme: ChartTheme = DEFAULT_THEME) -> None:
        self._theme = theme
        self._state = HIDDEN
        self._series: SampleSeries | None = None
        self._drawing: ChartDrawing | None = None

    @property
    def state(self) -> TooltipState:
        return self._state

    @property
    def is_shown(self) -> bool:
        return self._state.active

    def bind(self, series: SampleSeries, drawing: ChartDrawing) -> None:
        if series is not self._series or self._drawing is None or drawing.viewport != self._drawing.viewport:
            self.hide()
        self._series = series
        self._drawing = drawing

    def handle_event(self, event: PointerEvent) -> bool:
        """Apply one event; returns True when the tooltip state changed."""

        if event.event_type in HIDE_EVENTS:
            return self.hide()
        if event.event_type not in SHOW_EVENTS:
            return False
        drawing = self._drawing
        hit = drawing.hit_surface() if drawing is not None else None
        if hit is None or event.x is None or event.y is None:
            return self.hide()
        ox, oy = drawing.origin
        local_x = float(event.x) - ox
        local_y = float(event.y) - oy
        if not hit.contains(local_x, local_y):
            return self.hide()
        previous = self._state
        return self.show_at(local_x) != previous

    def show_at(self, plot_x: float) -> TooltipState:
        drawing = self._drawing
        series = self._series
        if drawing is None or drawing.scales is None or series is None or len(series) == 0:
            self.hide()
            return self._state
        scales = drawing.scales
        idx = locate_index(series, plot_x, scales)
        sample = series[idx]
        state = TooltipState(
            active=True,
            sample=sample,
            anchor_x=float(scales.time(float(series.epochs[idx]))),
            anchor_y=scales.value_to_y(sample.value),
        )
        if not self._state.active:
            LOGGER.debug("tooltip shown at sample index %d", idx)
        self._state = state
        return state

    def hide(self) -> bool:
        if not self._state.active:
            return False
        LOGGER.debug("tooltip hidden")
        self._state = HIDDEN
        return True

    def overlay(self) -> TooltipOverlay | None:
        state = self._state
        drawing = self._drawing
        series = self._series
        if not state.active or state.sample is None or drawing is None or series is None:
            return None
        theme = self._theme
        viewport = drawing.viewport
        ox, oy = drawing.origin
        indicator = TooltipIndicator(
            x=state.anchor_x + ox,
            y0=oy,
            y1=oy + viewport.inner_height,
            dot_y=state.anchor_y + oy,
            color=theme.rgba("primary"),
            ring_color=theme.rgba("dot_ring"),
        )

        time_label = format_time_label(state.sample.timestamp.timestamp(), series.tzinfo)
        value_label = format_value_label(state.sample.value)
        width, height = _card_size(time_label, theme.series_label, value_label, theme)
        x, y = place_card(
            state.anchor_x + ox,
            state.anchor_y + oy - CARD_LIFT_PX,
            width,
            height,
            viewport.width,
            viewport.height,
        )
        card = TooltipCard(
            x=x,
            y=y,
            width=width,
            height=height,
            time_label=time_label,
            series_label=theme.series_label,
            value_label=value_label,
            background=theme.rgba("tooltip_bg"),
            border=theme.rgba("tooltip_border"),
            muted=theme.rgba("tooltip_muted"),
            text=theme.rgba("tooltip_text"),
            swatch=theme.rgba("primary"),
            font_px=theme.tooltip_font_px,
        )
        return TooltipOverlay(indicator=indicator, card=card)


def _card_size(time_label: str, series_label: str, value_label: str, theme: ChartTheme) -> tuple[int, int]:
    font = theme_font(theme, theme.tooltip_font_px)
    tw, th = text_size(time_label, font)
    sw, sh = text_size(series_label, font)
    vw, vh = text_size(value_label, font)
    row_w = SWATCH_PX + SWATCH_GAP_PX + sw + SWATCH_GAP_PX + vw
    row_h = max(SWATCH_PX, sh, vh)
    width = CARD_PAD_X * 2 + max(tw, row_w)
    height = CARD_PAD_Y * 2 + th + CARD_ROW_GAP + row_h
    return (int(width), int(height))
