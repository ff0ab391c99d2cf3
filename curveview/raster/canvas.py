from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    fill(canvas, color)
    return canvas


def fill(dst: np.ndarray, color: RGBA) -> None:
    dst[:, :] = np.asarray(color, dtype=np.uint8)


def blit(dst: np.ndarray, src: np.ndarray, x0: int = 0, y0: int = 0) -> None:
    """Alpha-composite ``src`` onto ``dst`` with its top-left corner at (x0, y0)."""
    h, w, _ = src.shape
    xa = max(0, x0)
    ya = max(0, y0)
    xb = min(dst.shape[1], x0 + w)
    yb = min(dst.shape[0], y0 + h)
    if xa >= xb or ya >= yb:
        return

    patch = src[ya - y0 : yb - y0, xa - x0 : xb - x0]
    view = dst[ya:yb, xa:xb]
    alpha = patch[:, :, 3:4].astype(np.float32) / 255.0
    view[:, :, :3] = (patch[:, :, :3] * alpha + view[:, :, :3] * (1.0 - alpha)).astype(np.uint8)
    view[:, :, 3] = 255


def blend_mask(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGBA) -> None:
    """Blend ``color`` into ``dst`` weighted by a uint8 coverage mask placed at (x, y)."""
    h, w = coverage.shape
    xa = max(0, x)
    ya = max(0, y)
    xb = min(dst.shape[1], x + w)
    yb = min(dst.shape[0], y + h)
    if xa >= xb or ya >= yb:
        return

    cov = coverage[ya - y : yb - y, xa - x : xb - x].astype(np.float32) / 255.0
    alpha = (color[3] / 255.0) * cov
    if not np.any(alpha > 0):
        return
    view = dst[ya:yb, xa:xb]
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    view[:, :, :3] = np.clip(src_rgb * alpha[:, :, None] + view[:, :, :3] * (1.0 - alpha[:, :, None]), 0, 255).astype(
        np.uint8
    )
    view[:, :, 3] = 255


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = color[3] / 255.0
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, :3] = (np.asarray(color[:3], dtype=np.float32) * a + current * (1.0 - a)).astype(np.uint8)
    dst[y, x, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA, *, dotted: bool = False) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    step = 2 if dotted else 1
    # Dots stay anchored to the line's own start so they don't shimmer when clipped.
    start = xa + ((xa - min(x0, x1)) % step)
    segment = dst[y, start : xb + 1 : step]
    _blend_segment(segment, color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA, *, dotted: bool = False) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    step = 2 if dotted else 1
    start = ya + ((ya - min(y0, y1)) % step)
    segment = dst[start : yb + 1 : step, x]
    _blend_segment(segment, color)


def _blend_segment(segment: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    segment[:, :3] = (
        np.asarray(color[:3], dtype=np.float32) * a + segment[:, :3].astype(np.float32) * (1.0 - a)
    ).astype(np.uint8)
    segment[:, 3] = 255
