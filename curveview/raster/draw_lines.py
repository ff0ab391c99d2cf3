from __future__ import annotations

import numpy as np

from curveview.raster.canvas import RGBA, draw_hline, draw_pixel, draw_vline


def draw_line(
    dst: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: RGBA,
    width: int = 1,
    *,
    dotted: bool = False,
) -> None:
    ix0, iy0, ix1, iy1 = int(round(x0)), int(round(y0)), int(round(x1)), int(round(y1))
    if width <= 1 and iy0 == iy1:
        draw_hline(dst, ix0, ix1, iy0, color, dotted=dotted)
        return
    if width <= 1 and ix0 == ix1:
        draw_vline(dst, ix0, iy0, iy1, color, dotted=dotted)
        return
    _draw_line_segment(dst, ix0, iy0, ix1, iy1, color=color, width=width, dotted=dotted)


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    if xs.size != ys.size:
        raise ValueError(f"polyline coordinate length mismatch: {xs.size} != {ys.size}")
    if xs.size < 2:
        return
    px = np.rint(xs).astype(np.int64)
    py = np.rint(ys).astype(np.int64)
    for i in range(px.size - 1):
        # Segments collapsing to the previous pixel add nothing but cost.
        if px[i] == px[i + 1] and py[i] == py[i + 1] and i > 0:
            continue
        _draw_line_segment(dst, int(px[i]), int(py[i]), int(px[i + 1]), int(py[i + 1]), color=color, width=width)


def _draw_line_segment(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    width: int,
    dotted: bool = False,
) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    n = 0

    while True:
        if not dotted or n % 2 == 0:
            _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        n += 1
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    lo = -((width - 1) // 2)
    hi = width // 2
    if color[3] == 255:
        ya = max(0, y + lo)
        yb = min(dst.shape[0], y + hi + 1)
        xa = max(0, x + lo)
        xb = min(dst.shape[1], x + hi + 1)
        if ya < yb and xa < xb:
            dst[ya:yb, xa:xb] = np.asarray(color, dtype=np.uint8)
        return
    for yy in range(y + lo, y + hi + 1):
        for xx in range(x + lo, x + hi + 1):
            draw_pixel(dst, xx, yy, color)
