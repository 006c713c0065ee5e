from __future__ import annotations

import logging
import math
from typing import Callable

from clickchart.chart import AreaChart
from clickchart.events import PointerEvent
from clickchart.raster.rasterize import canvas_size
from clickchart.render import ChartDrawing
from clickchart.surface import FrameSurface

LOGGER = logging.getLogger(__name__)


class ResponsiveContainer:
    """Feeds the parent's width into an `AreaChart` whose height is fixed.

    Nothing is rendered until a first positive width has been observed.
    """

    def __init__(self, chart: AreaChart, *, width_provider: Callable[[], float] | None = None) -> None:
        self._chart = chart
        self._width_provider = width_provider
        self._width: float | None = None

    @property
    def chart(self) -> AreaChart:
        return self._chart

    @property
    def width(self) -> float | None:
        return self._width

    @property
    def ready(self) -> bool:
        return self._width is not None

    def observe_width(self, width: float) -> bool:
        """Record a parent width; returns True when the chart was re-laid out."""

        w = float(width)
        if not math.isfinite(w) or w <= 0:
            return False
        if w == self._width:
            return False
        LOGGER.debug("container width %s -> %s", self._width, w)
        self._width = w
        self._chart.resize(w)
        return True

    def poll(self) -> bool:
        if self._width_provider is None:
            return False
        return self.observe_width(self._width_provider())

    def render(self) -> ChartDrawing | None:
        if not self.ready:
            return None
        return self._chart.drawing()

    def handle_event(self, event: PointerEvent) -> bool:
        if not self.ready:
            return False
        return self._chart.handle_event(event)

    def present(self, surface: FrameSurface) -> int | None:
        """Push pending changes to `surface`; returns the new surface revision or None."""

        if not self.ready:
            return None
        width, height = canvas_size(self._chart.drawing())
        if (surface.width, surface.height) != (width, height):
            surface.resize(height, width)
            batch = self._chart.compile_write_batch()
        else:
            batch = self._chart.compile_incremental_write_batch()
        if batch is None:
            return None
        return surface.submit_write_batch(batch)
