from __future__ import annotations

import numpy as np


MAX_STEPS_PER_SEGMENT = 64


def monotone_tangents(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    """Steffen tangents for a monotone cubic through points ordered by x.

    Interior tangents are zero at local extrema and bounded by the adjacent
    secants, so no segment overshoots its endpoints.
    """

    n = xs.size
    tangents = np.zeros(n, dtype=np.float64)
    if n < 2:
        return tangents
    h = np.diff(xs)
    dy = np.diff(ys)
    secants = np.divide(dy, h, out=np.zeros_like(dy), where=h != 0)
    if n == 2:
        tangents[:] = secants[0]
        return tangents

    h0 = h[:-1]
    h1 = h[1:]
    s0 = secants[:-1]
    s1 = secants[1:]
    span = h0 + h1
    p = np.divide(s0 * h1 + s1 * h0, span, out=np.zeros_like(span), where=span != 0)
    bound = np.minimum(np.minimum(np.abs(s0), np.abs(s1)), 0.5 * np.abs(p))
    tangents[1:-1] = (np.sign(s0) + np.sign(s1)) * bound

    tangents[0] = (3.0 * secants[0] - tangents[1]) / 2.0 if h[0] != 0 else tangents[1]
    tangents[-1] = (3.0 * secants[-1] - tangents[-2]) / 2.0 if h[-1] != 0 else tangents[-2]
    return tangents


def monotone_curve(xs: np.ndarray, ys: np.ndarray, *, px_per_step: float = 2.0) -> tuple[np.ndarray, np.ndarray]:
    """Flatten a monotone-X cubic through (xs, ys) into a dense polyline."""

    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.size < 2:
        return xs.copy(), ys.copy()
    tangents = monotone_tangents(xs, ys)

    out_x: list[np.ndarray] = [xs[:1]]
    out_y: list[np.ndarray] = [ys[:1]]
    for i in range(xs.size - 1):
        x0, x1 = xs[i], xs[i + 1]
        y0, y1 = ys[i], ys[i + 1]
        dx = x1 - x0
        steps = int(np.ceil(abs(dx) / max(px_per_step, 1e-9))) if dx != 0 else 1
        steps = max(1, min(MAX_STEPS_PER_SEGMENT, steps))
        u = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)[1:]
        c1 = y0 + dx / 3.0 * tangents[i]
        c2 = y1 - dx / 3.0 * tangents[i + 1]
        inv = 1.0 - u
        seg_y = inv**3 * y0 + 3.0 * inv**2 * u * c1 + 3.0 * inv * u**2 * c2 + u**3 * y1
        seg_x = x0 + dx * u
        out_x.append(seg_x)
        out_y.append(seg_y)
    return np.concatenate(out_x), np.concatenate(out_y)
