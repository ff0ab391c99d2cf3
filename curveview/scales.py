from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from curveview.config import PlotConfig
from curveview.errors import PlotInvariantError
from curveview.sampler import SampleSet


@dataclass(frozen=True)
class ViewportGeometry:
    width: int
    height: int
    left: int
    top: int
    right: int
    bottom: int
    min_graph_size: int = 1

    @classmethod
    def from_config(cls, width: int, height: int, config: PlotConfig) -> "ViewportGeometry":
        return cls(
            width=int(width),
            height=int(height),
            left=config.left_margin,
            top=config.top_margin,
            right=config.right_margin,
            bottom=config.bottom_margin,
            min_graph_size=config.min_graph_size_px,
        )

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def graph_width(self) -> int:
        return max(self.min_graph_size, self.width - self.left - self.right)

    @property
    def graph_height(self) -> int:
        return max(self.min_graph_size, self.height - self.top - self.bottom)

    @property
    def graph_right(self) -> int:
        return self.left + self.graph_width

    @property
    def graph_bottom(self) -> int:
        return self.height - self.bottom


@dataclass(frozen=True)
class ValueRange:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def x_span(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_span(self) -> float:
        return self.max_y - self.min_y

    @property
    def is_valid(self) -> bool:
        return bool(np.isfinite([self.min_x, self.max_x, self.min_y, self.max_y]).all()) and (
            self.max_x > self.min_x and self.max_y > self.min_y
        )


def compute_value_range(samples: SampleSet, config: PlotConfig) -> ValueRange:
    """Derive the padded plotting window for ``samples``.

    X bounds are the configured domain. Y bounds are the observed extrema
    widened by ``y_padding_ratio`` of the span on each side, or by a fixed
    ``flat_padding`` when the span is below ``flat_span_epsilon``.
    """
    ymin, ymax = samples.y_extent()
    span = ymax - ymin
    if abs(span) < config.flat_span_epsilon:
        ymin -= config.flat_padding
        ymax += config.flat_padding
    else:
        pad = span * config.y_padding_ratio
        ymin -= pad
        ymax += pad
    return ValueRange(min_x=config.domain_start, max_x=config.domain_end, min_y=ymin, max_y=ymax)


@dataclass(frozen=True)
class ViewTransform:
    """Affine math-to-screen mapping with the y axis flipped.

    ``sx = left + (x - min_x) * kx`` and ``sy = bottom_px - (y - min_y) * ky``
    where ``bottom_px`` is the pixel row of the graph's lower edge.
    """

    min_x: float
    min_y: float
    kx: float
    ky: float
    left_px: float
    bottom_px: float

    def x_to_screen(self, x: float) -> float:
        return self.left_px + (x - self.min_x) * self.kx

    def y_to_screen(self, y: float) -> float:
        return self.bottom_px - (y - self.min_y) * self.ky

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return (self.x_to_screen(x), self.y_to_screen(y))

    def map_to_screen(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        sx = self.left_px + (np.asarray(xs, dtype=np.float64) - self.min_x) * self.kx
        sy = self.bottom_px - (np.asarray(ys, dtype=np.float64) - self.min_y) * self.ky
        return sx, sy


def build_transform(viewport: ViewportGeometry, value_range: ValueRange) -> ViewTransform:
    if not value_range.is_valid:
        raise PlotInvariantError(
            "value range must be finite with positive spans: "
            f"x [{value_range.min_x}, {value_range.max_x}], y [{value_range.min_y}, {value_range.max_y}]"
        )
    return ViewTransform(
        min_x=value_range.min_x,
        min_y=value_range.min_y,
        kx=viewport.graph_width / value_range.x_span,
        ky=viewport.graph_height / value_range.y_span,
        left_px=float(viewport.left),
        bottom_px=float(viewport.graph_bottom),
    )
