from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    segment = dst[y, xa : xb + 1]
    a = color[3] / 255.0
    inv = 1.0 - a
    segment[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * inv).astype(np.uint8)
    segment[:, 3] = 255


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    segment = dst[ya : yb + 1, x]
    a = color[3] / 255.0
    inv = 1.0 - a
    segment[:, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * inv).astype(np.uint8)
    segment[:, 3] = 255


def draw_dashed_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, dash: int = 4) -> None:
    start = min(x0, x1)
    end = max(x0, x1)
    dash = max(1, dash)
    for xa in range(start, end + 1, dash * 2):
        draw_hline(dst, xa, min(end, xa + dash - 1), y, color)


def draw_dashed_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, dash: int = 4) -> None:
    start = min(y0, y1)
    end = max(y0, y1)
    dash = max(1, dash)
    for ya in range(start, end + 1, dash * 2):
        draw_vline(dst, x, ya, min(end, ya + dash - 1), color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0] - 1, max(y0, y1))
    for yy in range(top, bottom + 1):
        draw_hline(dst, x0, x1, yy, color)


def stroke_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    draw_hline(dst, x0, x1, y0, color)
    draw_hline(dst, x0, x1, y1, color)
    draw_vline(dst, x0, y0, y1, color)
    draw_vline(dst, x1, y0, y1, color)


def draw_disc(dst: np.ndarray, cx: int, cy: int, radius: int, color: RGBA) -> None:
    r = max(0, int(radius))
    y0 = max(0, cy - r)
    y1 = min(dst.shape[0], cy + r + 1)
    x0 = max(0, cx - r)
    x1 = min(dst.shape[1], cx + r + 1)
    if y0 >= y1 or x0 >= x1:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    inside = (xx - cx) ** 2 + (yy - cy) ** 2 <= r * r
    patch = dst[y0:y1, x0:x1]
    a = color[3] / 255.0
    src = np.asarray(color[0:3], dtype=np.float32)
    blended = src * a + patch[:, :, :3].astype(np.float32) * (1.0 - a)
    patch[:, :, :3] = np.where(inside[:, :, None], blended, patch[:, :, :3]).astype(np.uint8)
    patch[:, :, 3] = np.where(inside, 255, patch[:, :, 3])


def fill_under_curve(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    baseline: float,
    top_color: RGBA,
    bottom_color: RGBA,
) -> None:
    """Fill between a polyline and a horizontal baseline with a vertical gradient.

    The gradient runs from the highest curve point (top_color) to the
    baseline (bottom_color); xs must be ascending.
    """

    if xs.size < 2:
        return
    col_start = max(0, int(np.ceil(xs[0])))
    col_end = min(dst.shape[1] - 1, int(np.floor(xs[-1])))
    if col_end < col_start:
        return
    cols = np.arange(col_start, col_end + 1, dtype=np.float64)
    curve_y = np.interp(cols, xs, ys)
    grad_top = float(np.min(ys))
    grad_span = max(1e-9, float(baseline) - grad_top)

    row_start = max(0, int(np.floor(grad_top)))
    row_end = min(dst.shape[0] - 1, int(np.floor(baseline)))
    if row_end < row_start:
        return
    rows = np.arange(row_start, row_end + 1, dtype=np.float64)
    inside = rows[:, None] >= curve_y[None, :]
    if not np.any(inside):
        return

    t = np.clip((rows - grad_top) / grad_span, 0.0, 1.0)[:, None]
    top = np.asarray(top_color, dtype=np.float32)
    bottom = np.asarray(bottom_color, dtype=np.float32)
    rgb = top[:3] * (1.0 - t[:, :, None]) + bottom[:3] * t[:, :, None]
    alpha = ((top[3] * (1.0 - t) + bottom[3] * t) / 255.0) * inside

    patch = dst[row_start : row_end + 1, col_start : col_end + 1]
    a = alpha[:, :, None].astype(np.float32)
    patch[:, :, :3] = (rgb * a + patch[:, :, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    patch[:, :, 3] = np.where(inside, 255, patch[:, :, 3])
