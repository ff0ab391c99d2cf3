from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterator, NamedTuple

import numpy as np

from curveview.errors import PlotInvariantError

LOGGER = logging.getLogger(__name__)

DEFAULT_DENSITY = 1.5
DEFAULT_MIN_POINTS = 200
DEFAULT_MAX_POINTS = 5000
DEFAULT_MIN_WIDTH_PX = 100


class SamplePoint(NamedTuple):
    x: float
    y: float


def target_function(x: float | np.ndarray) -> float | np.ndarray:
    """y = cos²(x) / (x² + 1); total, since the denominator is never below 1."""
    c = np.cos(x)
    return (c * c) / (x * x + 1.0)


@dataclass(frozen=True)
class SampleSet:
    """Immutable, x-ordered samples of the target function.

    The coordinates are stored as read-only float64 copies; resampling always
    builds a new ``SampleSet`` rather than touching an existing one.
    """

    xs: np.ndarray
    ys: np.ndarray

    def __post_init__(self) -> None:
        xs = np.array(self.xs, dtype=np.float64)
        ys = np.array(self.ys, dtype=np.float64)
        if xs.shape != ys.shape or xs.ndim != 1:
            raise PlotInvariantError(f"sample arrays must be 1-D and equal length: {xs.shape} vs {ys.shape}")
        xs.setflags(write=False)
        ys.setflags(write=False)
        object.__setattr__(self, "xs", xs)
        object.__setattr__(self, "ys", ys)

    @classmethod
    def empty(cls) -> "SampleSet":
        return cls(xs=np.empty(0, dtype=np.float64), ys=np.empty(0, dtype=np.float64))

    def __len__(self) -> int:
        return int(self.xs.size)

    def __iter__(self) -> Iterator[SamplePoint]:
        for x, y in zip(self.xs.tolist(), self.ys.tolist(), strict=True):
            yield SamplePoint(x, y)

    def __getitem__(self, index: int) -> SamplePoint:
        return SamplePoint(float(self.xs[index]), float(self.ys[index]))

    @property
    def is_empty(self) -> bool:
        return self.xs.size == 0

    def y_extent(self) -> tuple[float, float]:
        if self.is_empty:
            raise PlotInvariantError("empty sample set has no y extent")
        return float(np.min(self.ys)), float(np.max(self.ys))


def sample_count(
    graph_width_px: float,
    density: float = DEFAULT_DENSITY,
    max_points: int = DEFAULT_MAX_POINTS,
    *,
    min_points: int = DEFAULT_MIN_POINTS,
    min_width_px: int = DEFAULT_MIN_WIDTH_PX,
) -> int:
    width = max(float(min_width_px), float(graph_width_px))
    desired = int(round(width * density))
    return max(min_points, min(desired, max_points))


def sample(
    domain_start: float,
    domain_end: float,
    graph_width_px: float,
    density: float = DEFAULT_DENSITY,
    max_points: int = DEFAULT_MAX_POINTS,
    *,
    min_points: int = DEFAULT_MIN_POINTS,
    min_width_px: int = DEFAULT_MIN_WIDTH_PX,
) -> SampleSet:
    """Sample the target function across ``[domain_start, domain_end]``.

    The point count follows the graph width (``density`` samples per pixel),
    with narrow or degenerate widths raised to ``min_width_px`` first and the
    result clamped to ``[min_points, max_points]``.
    """
    if not domain_end > domain_start:
        raise ValueError("domain_end must be > domain_start")
    if density <= 0:
        raise ValueError("density must be > 0")
    if min_points < 2 or max_points < min_points:
        raise ValueError("point limits must satisfy 2 <= min_points <= max_points")

    n = sample_count(graph_width_px, density, max_points, min_points=min_points, min_width_px=min_width_px)
    step = (domain_end - domain_start) / (n - 1)
    xs = domain_start + np.arange(n, dtype=np.float64) * step
    ys = target_function(xs)
    LOGGER.debug("sampled %d points over [%s, %s] for graph width %s px", n, domain_start, domain_end, graph_width_px)
    return SampleSet(xs=xs, ys=ys)
