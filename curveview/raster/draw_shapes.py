from __future__ import annotations

import numpy as np

from curveview.raster.canvas import RGBA


def fill_ellipse(dst: np.ndarray, x: float, y: float, width: float, height: float, color: RGBA) -> None:
    """Fill the ellipse inscribed in the box whose top-left corner is (x, y)."""
    if width <= 0 or height <= 0:
        return
    rx = width / 2.0
    ry = height / 2.0
    cx = x + rx
    cy = y + ry

    xa = max(0, int(np.floor(x)))
    ya = max(0, int(np.floor(y)))
    xb = min(dst.shape[1], int(np.ceil(x + width)))
    yb = min(dst.shape[0], int(np.ceil(y + height)))
    if xa >= xb or ya >= yb:
        return

    # Sample at pixel centres.
    gx = (np.arange(xa, xb, dtype=np.float64) + 0.5 - cx) / rx
    gy = (np.arange(ya, yb, dtype=np.float64) + 0.5 - cy) / ry
    inside = (gx[None, :] ** 2 + gy[:, None] ** 2) <= 1.0
    if not np.any(inside):
        return

    view = dst[ya:yb, xa:xb]
    a = color[3] / 255.0
    rgb = np.asarray(color[:3], dtype=np.float32)
    blended = (rgb * a + view[inside][:, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    view[inside, :3] = blended
    view[inside, 3] = 255
