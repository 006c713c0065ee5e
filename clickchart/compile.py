from __future__ import annotations

import numpy as np
import torch

from clickchart.surface import FullRewrite, ReplaceRect, WriteBatch


def _check_frame(frame_rgba: np.ndarray, label: str) -> None:
    if frame_rgba.dtype != np.uint8:
        raise ValueError(f"{label} must be uint8")
    if frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError(f"{label} must have shape (H, W, 4)")


def compile_full_rewrite_batch(frame_rgba: np.ndarray) -> WriteBatch:
    _check_frame(frame_rgba, "frame_rgba")
    tensor = torch.from_numpy(np.ascontiguousarray(frame_rgba))
    return WriteBatch([FullRewrite(frame=tensor)])


def compile_replace_rect_batch(frame_rgba: np.ndarray, x: int, y: int, width: int, height: int) -> WriteBatch:
    _check_frame(frame_rgba, "frame_rgba")
    if width <= 0 or height <= 0:
        raise ValueError("rect width/height must be > 0")
    if x < 0 or y < 0:
        raise ValueError("rect x/y must be >= 0")
    if x + width > frame_rgba.shape[1] or y + height > frame_rgba.shape[0]:
        raise ValueError("rect exceeds frame bounds")
    patch = torch.from_numpy(np.ascontiguousarray(frame_rgba[y : y + height, x : x + width]))
    return WriteBatch([ReplaceRect(x=x, y=y, width=width, height=height, patch=patch)])


def clip_rect(
    rect: tuple[int, int, int, int],
    frame_width: int,
    frame_height: int,
) -> tuple[int, int, int, int] | None:
    x, y, width, height = rect
    x0 = max(0, int(x))
    y0 = max(0, int(y))
    x1 = min(frame_width, int(x) + int(width))
    y1 = min(frame_height, int(y) + int(height))
    if x1 <= x0 or y1 <= y0:
        return None
    return (x0, y0, x1 - x0, y1 - y0)


def union_rect(
    a: tuple[int, int, int, int] | None,
    b: tuple[int, int, int, int] | None,
) -> tuple[int, int, int, int] | None:
    if a is None:
        return b
    if b is None:
        return a
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    x0 = min(ax, bx)
    y0 = min(ay, by)
    x1 = max(ax + aw, bx + bw)
    y1 = max(ay + ah, by + bh)
    return (x0, y0, x1 - x0, y1 - y0)
