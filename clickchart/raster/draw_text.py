from __future__ import annotations

from functools import lru_cache
from typing import Union

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from clickchart.raster.canvas import RGBA
from clickchart.theme import ChartTheme

Font = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

# Tried after the theme's family, in order; Pillow searches the system font dirs.
SANS_FONT_FILES = (
    "DejaVuSans.ttf",
    "LiberationSans-Regular.ttf",
    "Arial.ttf",
    "Helvetica.ttc",
)


def theme_font(theme: ChartTheme, size_px: float | None = None) -> Font:
    """Font for `theme.font_family` at `size_px` (the theme's axis size by default)."""

    return load_font(theme.font_family, theme.font_size_px if size_px is None else size_px)


@lru_cache(maxsize=32)
def load_font(family: str, size_px: float) -> Font:
    size = max(1, int(round(size_px)))
    compact = family.replace(" ", "")
    names = (f"{compact}.ttf", f"{compact}-Regular.ttf") if compact else ()
    for name in names + SANS_FONT_FILES:
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def text_size(text: str, font: Font) -> tuple[int, int]:
    """Ink size of `text`; empty text keeps the line height so layouts don't collapse."""

    left, top, right, bottom = font.getbbox(text or "Ag")
    width = int(right - left) if text else 0
    return (max(0, width), max(1, int(bottom - top)))


def draw_text(dst: np.ndarray, x: int, y: int, text: str, color: RGBA, font: Font) -> None:
    """Blend `text` onto an opaque canvas with its ink box's top-left at `(x, y)`."""

    if not text:
        return
    coverage = _glyph_coverage(text, font)
    h, w = coverage.shape
    x0, y0 = max(0, x), max(0, y)
    x1, y1 = min(dst.shape[1], x + w), min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    alpha = coverage[y0 - y : y1 - y, x0 - x : x1 - x, None] * (color[3] / 255.0)
    patch = dst[y0:y1, x0:x1]
    ink = np.asarray(color[:3], dtype=np.float32)
    patch[:, :, :3] = (ink * alpha + patch[:, :, :3].astype(np.float32) * (1.0 - alpha)).astype(np.uint8)
    patch[:, :, 3] = 255


@lru_cache(maxsize=256)
def _glyph_coverage(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    coverage = np.asarray(image, dtype=np.float32) / 255.0
    coverage.setflags(write=False)
    return coverage
