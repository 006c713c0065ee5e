from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from clickchart.adapters import normalize_samples
from clickchart.compile import clip_rect, compile_full_rewrite_batch, compile_replace_rect_batch, union_rect
from clickchart.events import PointerEvent
from clickchart.raster.rasterize import canvas_size, rasterize_drawing, rasterize_overlay
from clickchart.render import ChartDrawing, render_pipeline
from clickchart.samples import SampleSeries
from clickchart.scales import ScaleMapping
from clickchart.surface import WriteBatch
from clickchart.theme import DEFAULT_THEME, ChartTheme
from clickchart.tooltip import TooltipController, TooltipOverlay, TooltipState
from clickchart.viewport import DEFAULT_HEIGHT, DEFAULT_WIDTH, Margin, Viewport

LOGGER = logging.getLogger(__name__)


class AreaChart:
    """Click-trend area chart with a pointer-tracking tooltip.

    Three independent triggers drive redraws: `set_samples` and `resize`
    rebuild the drawing (and its scales), while `handle_event` only touches
    the tooltip and reuses the scales of the current drawing.
    """

    def __init__(
        self,
        samples: Any = None,
        *,
        width: float = DEFAULT_WIDTH,
        height: float = DEFAULT_HEIGHT,
        margin: Margin | Mapping[str, float] | None = None,
        theme: ChartTheme = DEFAULT_THEME,
    ) -> None:
        self._theme = theme
        self._viewport = Viewport(width=float(width), height=float(height), margin=Margin.coerce(margin))
        self._series = normalize_samples(samples)
        self._tooltip = TooltipController(theme=theme)
        self._drawing: ChartDrawing | None = None
        self._base_rgba: np.ndarray | None = None
        self._dirty_rect: tuple[int, int, int, int] | None = None
        self._needs_full_rewrite = True

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def series(self) -> SampleSeries:
        return self._series

    @property
    def theme(self) -> ChartTheme:
        return self._theme

    @property
    def scales(self) -> ScaleMapping | None:
        return self.drawing().scales

    @property
    def tooltip_state(self) -> TooltipState:
        return self._tooltip.state

    def set_samples(self, samples: Any) -> None:
        series = normalize_samples(samples)
        if series is self._series:
            return
        self._series = series
        self._invalidate("samples")

    def resize(self, width: float, height: float | None = None) -> None:
        viewport = Viewport(
            width=float(width),
            height=self._viewport.height if height is None else float(height),
            margin=self._viewport.margin,
        )
        if viewport == self._viewport:
            return
        self._viewport = viewport
        self._invalidate("viewport")

    def drawing(self) -> ChartDrawing:
        if self._drawing is None:
            self._drawing = render_pipeline(self._series, self._viewport, theme=self._theme)
            self._tooltip.bind(self._series, self._drawing)
        return self._drawing

    def handle_event(self, event: PointerEvent) -> bool:
        self.drawing()
        before = self._overlay_rect()
        changed = self._tooltip.handle_event(event)
        if changed:
            self._dirty_rect = union_rect(self._dirty_rect, union_rect(before, self._overlay_rect()))
        return changed

    def tooltip_overlay(self) -> TooltipOverlay | None:
        self.drawing()
        return self._tooltip.overlay()

    def base_rgba(self) -> np.ndarray:
        if self._base_rgba is None:
            self._base_rgba = rasterize_drawing(self.drawing(), theme=self._theme)
        return self._base_rgba

    def to_rgba(self) -> np.ndarray:
        frame = self.base_rgba().copy()
        overlay = self.tooltip_overlay()
        if overlay is not None:
            rasterize_overlay(frame, overlay, theme=self._theme)
        return frame

    def compile_write_batch(self) -> WriteBatch:
        self._needs_full_rewrite = False
        self._dirty_rect = None
        return compile_full_rewrite_batch(self.to_rgba())

    def compile_incremental_write_batch(self) -> WriteBatch | None:
        """Batch covering only what changed since the last compile, or None."""

        if self._needs_full_rewrite:
            return self.compile_write_batch()
        dirty = self._dirty_rect
        self._dirty_rect = None
        if dirty is None:
            return None
        width, height = canvas_size(self.drawing())
        rect = clip_rect(dirty, width, height)
        if rect is None:
            return None
        return compile_replace_rect_batch(self.to_rgba(), *rect)

    def _overlay_rect(self) -> tuple[int, int, int, int] | None:
        overlay = self._tooltip.overlay()
        return overlay.bounds() if overlay is not None else None

    def _invalidate(self, reason: str) -> None:
        LOGGER.debug(
            "chart invalidated by %s: samples=%d viewport=%sx%s",
            reason,
            len(self._series),
            self._viewport.width,
            self._viewport.height,
        )
        self._tooltip.hide()
        self._drawing = None
        self._base_rgba = None
        self._dirty_rect = None
        self._needs_full_rewrite = True
