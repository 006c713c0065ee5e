from .canvas import (
    draw_dashed_hline,
    draw_dashed_vline,
    draw_disc,
    draw_hline,
    draw_vline,
    fill_rect,
    fill_under_curve,
    new_canvas,
    stroke_rect,
)
from .draw_lines import draw_polyline
from .draw_text import draw_text, text_size

__all__ = [
    "draw_dashed_hline",
    "draw_dashed_vline",
    "draw_disc",
    "draw_hline",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "fill_under_curve",
    "new_canvas",
    "stroke_rect",
    "text_size",
]
