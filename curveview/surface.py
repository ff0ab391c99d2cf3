from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from curveview.errors import SurfaceClosedError
from curveview.raster import blit, draw_line, draw_polyline, draw_text, fill, fill_ellipse, new_canvas, text_size
from curveview.raster.canvas import RGBA


class DrawingSurface(ABC):
    """What the plot core needs from a host's drawing API."""

    @property
    @abstractmethod
    def width(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def height(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def clear(self, color: RGBA) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: RGBA,
        width: int = 1,
        *,
        dotted: bool = False,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_polyline(self, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
        raise NotImplementedError

    @abstractmethod
    def fill_ellipse(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_text(self, x: float, y: float, text: str, color: RGBA, *, font_size_px: float, bold: bool = False) -> None:
        raise NotImplementedError

    @abstractmethod
    def measure_text(self, text: str, *, font_size_px: float, bold: bool = False) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def new_layer(self, width: int, height: int) -> "DrawingSurface":
        """Create an offscreen surface that ``draw_layer`` on this surface can blit."""
        raise NotImplementedError

    @abstractmethod
    def draw_layer(self, layer: "DrawingSurface", x: int = 0, y: int = 0) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Release any backing buffer. Optional for surfaces that own nothing."""
        return


class RasterSurface(DrawingSurface):
    """In-memory RGBA surface backed by a numpy ``(height, width, 4)`` uint8 array."""

    def __init__(self, width: int, height: int, background: RGBA = (255, 255, 255, 255)) -> None:
        self._rgba: np.ndarray | None = new_canvas(max(1, int(width)), max(1, int(height)), color=background)

    @property
    def rgba(self) -> np.ndarray:
        if self._rgba is None:
            raise SurfaceClosedError("raster surface is closed")
        return self._rgba

    @property
    def closed(self) -> bool:
        return self._rgba is None

    @property
    def width(self) -> int:
        return int(self.rgba.shape[1])

    @property
    def height(self) -> int:
        return int(self.rgba.shape[0])

    def clear(self, color: RGBA) -> None:
        fill(self.rgba, color)

    def draw_line(
        self,
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        color: RGBA,
        width: int = 1,
        *,
        dotted: bool = False,
    ) -> None:
        draw_line(self.rgba, x0, y0, x1, y1, color, width, dotted=dotted)

    def draw_polyline(self, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
        draw_polyline(self.rgba, np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64), color, width)

    def fill_ellipse(self, x: float, y: float, width: float, height: float, color: RGBA) -> None:
        fill_ellipse(self.rgba, x, y, width, height, color)

    def draw_text(self, x: float, y: float, text: str, color: RGBA, *, font_size_px: float, bold: bool = False) -> None:
        draw_text(self.rgba, int(round(x)), int(round(y)), text, color, font_size_px=font_size_px, bold=bold)

    def measure_text(self, text: str, *, font_size_px: float, bold: bool = False) -> tuple[int, int]:
        return text_size(text, font_size_px=font_size_px, bold=bold)

    def new_layer(self, width: int, height: int) -> "RasterSurface":
        return RasterSurface(width, height, background=(0, 0, 0, 0))

    def draw_layer(self, layer: DrawingSurface, x: int = 0, y: int = 0) -> None:
        if not isinstance(layer, RasterSurface):
            raise TypeError(f"RasterSurface cannot composite {type(layer).__name__}")
        blit(self.rgba, layer.rgba, x, y)

    def close(self) -> None:
        self._rgba = None
