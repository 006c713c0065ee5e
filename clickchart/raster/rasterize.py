from __future__ import annotations

import numpy as np

from clickchart.raster.canvas import (
    draw_dashed_hline,
    draw_dashed_vline,
    draw_disc,
    fill_rect,
    fill_under_curve,
    new_canvas,
    stroke_rect,
)
from clickchart.raster.draw_lines import draw_polyline
from clickchart.raster.draw_text import draw_text, text_size, theme_font
from clickchart.render import AreaFill, Axis, ChartDrawing, GridLines, HitSurface, LinePath, Placeholder
from clickchart.theme import DEFAULT_THEME, ChartTheme
from clickchart.tooltip import CARD_PAD_X, CARD_PAD_Y, CARD_ROW_GAP, SWATCH_GAP_PX, SWATCH_PX, TooltipOverlay

AXIS_LABEL_GAP_PX = 8
VALUE_LABEL_DX_PX = 4


def canvas_size(drawing: ChartDrawing) -> tuple[int, int]:
    width = max(1, int(round(drawing.viewport.width)))
    height = max(1, int(round(drawing.viewport.height)))
    return width, height


def rasterize_drawing(drawing: ChartDrawing, *, theme: ChartTheme = DEFAULT_THEME) -> np.ndarray:
    width, height = canvas_size(drawing)
    canvas = new_canvas(width, height, color=theme.rgba("background"))
    ox, oy = drawing.origin
    for layer in drawing.layers:
        if isinstance(layer, Placeholder):
            _draw_placeholder(canvas, layer, theme)
        elif isinstance(layer, GridLines):
            for y in layer.ys:
                draw_dashed_hline(
                    canvas,
                    int(round(ox + layer.x0)),
                    int(round(ox + layer.x1)),
                    int(round(oy + y)),
                    layer.color,
                    dash=layer.dash,
                )
        elif isinstance(layer, AreaFill):
            pts = np.asarray(layer.points, dtype=np.float64).reshape(-1, 2)
            fill_under_curve(
                canvas,
                pts[:, 0] + ox,
                pts[:, 1] + oy,
                oy + layer.baseline,
                layer.top_color,
                layer.bottom_color,
            )
        elif isinstance(layer, LinePath):
            pts = np.asarray(layer.points, dtype=np.float64).reshape(-1, 2)
            if pts.shape[0] == 1:
                # A lone sample has no segment to stroke; mark it with a dot.
                x, y = pts[0]
                draw_disc(canvas, int(round(x + ox)), int(round(y + oy)), layer.width + 1, layer.color)
                continue
            draw_polyline(canvas, pts[:, 0] + ox, pts[:, 1] + oy, color=layer.color, width=layer.width)
        elif isinstance(layer, HitSurface):
            # Transparent: it only takes part in hit-testing.
            continue
        elif isinstance(layer, Axis):
            _draw_axis(canvas, layer, ox, oy, theme)
    return canvas


def rasterize_overlay(canvas: np.ndarray, overlay: TooltipOverlay, *, theme: ChartTheme = DEFAULT_THEME) -> np.ndarray:
    ind = overlay.indicator
    x = int(round(ind.x))
    draw_dashed_vline(canvas, x, int(round(ind.y0)), int(round(ind.y1)), ind.color, dash=ind.dash)
    dot_y = int(round(ind.dot_y))
    draw_disc(canvas, x, dot_y, ind.radius + ind.ring, ind.ring_color)
    draw_disc(canvas, x, dot_y, ind.radius, ind.color)

    card = overlay.card
    x0, y0 = card.x, card.y
    x1, y1 = card.x + card.width - 1, card.y + card.height - 1
    fill_rect(canvas, x0, y0, x1, y1, card.background)
    stroke_rect(canvas, x0, y0, x1, y1, card.border)

    font = theme_font(theme, card.font_px)
    _, th = text_size(card.time_label, font)
    draw_text(canvas, x0 + CARD_PAD_X, y0 + CARD_PAD_Y, card.time_label, card.muted, font)

    row_y = y0 + CARD_PAD_Y + th + CARD_ROW_GAP
    _, sh = text_size(card.series_label, font)
    row_h = max(SWATCH_PX, sh)
    swatch_cx = x0 + CARD_PAD_X + SWATCH_PX // 2
    draw_disc(canvas, swatch_cx, row_y + row_h // 2, SWATCH_PX // 2, card.swatch)
    label_x = x0 + CARD_PAD_X + SWATCH_PX + SWATCH_GAP_PX
    draw_text(canvas, label_x, row_y, card.series_label, card.text, font)
    vw, _ = text_size(card.value_label, font)
    draw_text(canvas, x1 - CARD_PAD_X - vw + 1, row_y, card.value_label, card.text, font)
    return canvas


def _draw_axis(canvas: np.ndarray, axis: Axis, ox: float, oy: float, theme: ChartTheme) -> None:
    font = theme_font(theme, axis.font_px)
    for tick in axis.ticks:
        w, h = text_size(tick.label, font)
        if axis.orientation == "bottom":
            x = int(round(ox + tick.position - w / 2.0))
            y = int(round(oy + axis.offset + AXIS_LABEL_GAP_PX))
        else:
            x = int(round(ox + axis.offset - VALUE_LABEL_DX_PX - AXIS_LABEL_GAP_PX - w))
            y = int(round(oy + tick.position - h / 2.0))
        draw_text(canvas, x, y, tick.label, axis.color, font)


def _draw_placeholder(canvas: np.ndarray, layer: Placeholder, theme: ChartTheme) -> None:
    font = theme_font(theme, theme.font_size_px + 3)
    w, h = text_size(layer.text, font)
    x = int(round((layer.width - w) / 2.0))
    y = int(round((layer.height - h) / 2.0))
    draw_text(canvas, x, y, layer.text, layer.color, font)
