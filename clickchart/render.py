from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal, Union

import numpy as np

from clickchart.curves import monotone_curve
from clickchart.samples import SampleSeries
from clickchart.scales import (
    ScaleMapping,
    build_scales,
    format_ticks_for_axis,
    format_time_label,
    time_ticks,
    value_ticks,
)
from clickchart.theme import DEFAULT_THEME, RGBA, ChartTheme
from clickchart.viewport import Viewport

LOGGER = logging.getLogger(__name__)

GRID_TICK_COUNT = 4
VALUE_AXIS_TICK_COUNT = 4
WIDE_TIME_TICK_COUNT = 6
NARROW_TIME_TICK_COUNT = 4
WIDE_VIEWPORT_PX = 500
DASH_PX = 4
LINE_WIDTH_PX = 2
PLACEHOLDER_TEXT = "No data available"

Points = tuple[tuple[float, float], ...]


@dataclass(frozen=True)
class GridLines:
    ys: tuple[float, ...]
    x0: float
    x1: float
    color: RGBA
    dash: int = DASH_PX


@dataclass(frozen=True)
class AreaFill:
    points: Points
    baseline: float
    top_color: RGBA
    bottom_color: RGBA


@dataclass(frozen=True)
class LinePath:
    points: Points
    color: RGBA
    width: int = LINE_WIDTH_PX


@dataclass(frozen=True)
class HitSurface:
    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        return (x >= self.x) and (x <= self.x + self.width) and (y >= self.y) and (y <= self.y + self.height)


@dataclass(frozen=True)
class AxisTick:
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    orientation: Literal["bottom", "left"]
    offset: float
    ticks: tuple[AxisTick, ...]
    color: RGBA
    font_px: float


@dataclass(frozen=True)
class Placeholder:
    width: float
    height: float
    text: str
    color: RGBA


Layer = Union[GridLines, AreaFill, LinePath, HitSurface, Axis, Placeholder]


@dataclass(frozen=True)
class ChartDrawing:
    """Ordered drawing commands for one render pass, back to front.

    Layer coordinates are plot-local; `origin` is the plot's top-left corner in
    container pixels.
    """

    viewport: Viewport
    layers: tuple[Layer, ...]
    scales: ScaleMapping | None = None

    @property
    def origin(self) -> tuple[float, float]:
        return (self.viewport.margin.left, self.viewport.margin.top)

    @property
    def is_placeholder(self) -> bool:
        return self.scales is None

    def hit_surface(self) -> HitSurface | None:
        for layer in self.layers:
            if isinstance(layer, HitSurface):
                return layer
        return None


def time_tick_count(viewport: Viewport) -> int:
    return WIDE_TIME_TICK_COUNT if viewport.width > WIDE_VIEWPORT_PX else NARROW_TIME_TICK_COUNT


def placeholder_drawing(viewport: Viewport, *, theme: ChartTheme = DEFAULT_THEME) -> ChartDrawing:
    layer = Placeholder(
        width=viewport.width,
        height=viewport.height,
        text=PLACEHOLDER_TEXT,
        color=theme.rgba("placeholder_text"),
    )
    return ChartDrawing(viewport=viewport, layers=(layer,), scales=None)


def render_pipeline(
    series: SampleSeries,
    viewport: Viewport,
    *,
    theme: ChartTheme = DEFAULT_THEME,
    scales: ScaleMapping | None = None,
) -> ChartDrawing:
    """Build the drawing commands for `series` inside `viewport`.

    Empty series and undersized viewports short-circuit to the placeholder
    before any scale exists.
    """

    if len(series) == 0 or not viewport.is_renderable():
        LOGGER.debug(
            "placeholder render: samples=%d viewport=%sx%s",
            len(series),
            viewport.width,
            viewport.height,
        )
        return placeholder_drawing(viewport, theme=theme)

    inner_w = viewport.inner_width
    inner_h = viewport.inner_height
    if scales is None:
        scales = build_scales(series, inner_w, inner_h)

    xs = np.asarray(scales.time(series.epochs), dtype=np.float64)
    ys = np.asarray(scales.value(series.values), dtype=np.float64)
    curve_x, curve_y = monotone_curve(xs, ys)
    points = tuple(zip(curve_x.tolist(), curve_y.tolist(), strict=True))

    grid_values = value_ticks(scales.value, GRID_TICK_COUNT)
    grid = GridLines(
        ys=tuple(float(scales.value(v)) for v in grid_values.tolist()),
        x0=0.0,
        x1=inner_w,
        color=theme.rgba("grid"),
    )
    area = AreaFill(
        points=points,
        baseline=float(scales.value(0.0)),
        top_color=theme.rgba("area_top"),
        bottom_color=theme.rgba("area_bottom"),
    )
    line = LinePath(points=points, color=theme.rgba("primary"))
    hit = HitSurface(x=0.0, y=0.0, width=inner_w, height=inner_h)

    return ChartDrawing(
        viewport=viewport,
        layers=(grid, area, line, hit, _time_axis(series, scales, viewport, theme), _value_axis(scales, theme)),
        scales=scales,
    )


def _time_axis(series: SampleSeries, scales: ScaleMapping, viewport: Viewport, theme: ChartTheme) -> Axis:
    tz = series.tzinfo
    ticks = time_ticks(scales.time, time_tick_count(viewport))
    return Axis(
        orientation="bottom",
        offset=viewport.inner_height,
        ticks=tuple(AxisTick(position=float(scales.time(t)), label=format_time_label(t, tz)) for t in ticks.tolist()),
        color=theme.rgba("axis_text"),
        font_px=theme.font_size_px,
    )


def _value_axis(scales: ScaleMapping, theme: ChartTheme) -> Axis:
    ticks = value_ticks(scales.value, VALUE_AXIS_TICK_COUNT)
    labels = format_ticks_for_axis(ticks)
    return Axis(
        orientation="left",
        offset=0.0,
        ticks=tuple(
            AxisTick(position=float(scales.value(v)), label=label)
            for v, label in zip(ticks.tolist(), labels, strict=True)
        ),
        color=theme.rgba("axis_text"),
        font_px=theme.font_size_px,
    )
