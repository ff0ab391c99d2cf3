from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Callable

from curveview.config import PlotStyle
from curveview.scales import ValueRange, ViewportGeometry, build_transform
from curveview.surface import DrawingSurface, RasterSurface

LOGGER = logging.getLogger(__name__)

X_GRID_SCALE = 10
X_GRID_STEP = 0.5
Y_GRID_DIVISIONS = 10
Y_STEP_EPSILON = 1e-6
Y_STEP_FLOOR = 1e-3
LABEL_OFFSET_PX = 5

LayerFactory = Callable[[int, int], DrawingSurface]


def _raster_layer(width: int, height: int) -> DrawingSurface:
    return RasterSurface(width, height, background=(0, 0, 0, 0))


def x_gridline_values(min_x: float, max_x: float) -> list[float]:
    """Gridline positions from the first 0.1-aligned value >= ``min_x`` in 0.5 steps."""
    start = math.ceil(min_x * X_GRID_SCALE) / X_GRID_SCALE
    values: list[float] = []
    k = 0
    while True:
        x = start + k * X_GRID_STEP
        if x > max_x:
            return values
        values.append(x)
        k += 1


def y_gridline_values(min_y: float, max_y: float) -> list[float]:
    step = (max_y - min_y) / Y_GRID_DIVISIONS
    if abs(step) < Y_STEP_EPSILON:
        step = Y_STEP_FLOOR
    # Stepping by index keeps the top gridline from drifting past max_y.
    limit = max_y + abs(step) * 1e-9
    values: list[float] = []
    k = 0
    while True:
        y = min_y + k * step
        if y > limit:
            return values
        values.append(y)
        k += 1


@dataclass
class AxesSnapshot:
    """A rendered background layer plus the geometry it was built for."""

    layer: DrawingSurface
    size: tuple[int, int]
    value_range: ValueRange
    x_ticks: tuple[float, ...] = ()
    y_ticks: tuple[float, ...] = ()
    x_labels: tuple[str, ...] = ()
    y_labels: tuple[str, ...] = ()
    stale: bool = False
    _closed: bool = field(default=False, repr=False)

    def mark_stale(self) -> None:
        self.stale = True

    def is_current_for(self, viewport: ViewportGeometry) -> bool:
        return not self.stale and not self._closed and self.size == viewport.size

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.layer.close()


class AxesLayer:
    """Builds the static part of a frame: background, grid, axes, labels and title."""

    def __init__(self, style: PlotStyle | None = None, layer_factory: LayerFactory | None = None) -> None:
        self._style = style or PlotStyle()
        self._layer_factory = layer_factory or _raster_layer
        self._render_count = 0

    @property
    def render_count(self) -> int:
        return self._render_count

    def render(
        self,
        viewport: ViewportGeometry,
        value_range: ValueRange,
        prior: AxesSnapshot | None = None,
        *,
        layer_factory: LayerFactory | None = None,
    ) -> AxesSnapshot:
        """Return ``prior`` while it still fits ``viewport``; otherwise draw a fresh snapshot.

        ``layer_factory`` overrides the factory given at construction, so a host can
        have the layer allocated in whatever form its own surface composites.
        """
        if prior is not None and prior.is_current_for(viewport):
            return prior

        style = self._style
        transform = build_transform(viewport, value_range)
        layer = (layer_factory or self._layer_factory)(max(1, viewport.width), max(1, viewport.height))
        layer.clear(style.background)

        left = viewport.left
        top = viewport.top
        right = viewport.graph_right
        bottom = viewport.graph_bottom

        x_ticks = x_gridline_values(value_range.min_x, value_range.max_x)
        y_ticks = y_gridline_values(value_range.min_y, value_range.max_y)
        x_screen = [transform.x_to_screen(x) for x in x_ticks]
        y_screen = [transform.y_to_screen(y) for y in y_ticks]

        layer.draw_line(left, bottom, right, bottom, style.axis_color, style.axis_width)
        layer.draw_line(left, top, left, bottom, style.axis_color, style.axis_width)

        # Gridlines go over the axes, so the ones at min_x / min_y overdraw them.
        for sx in x_screen:
            layer.draw_line(sx, top, sx, bottom, style.grid_color, style.grid_width, dotted=style.grid_dotted)
        for sy in y_screen:
            layer.draw_line(left, sy, right, sy, style.grid_color, style.grid_width, dotted=style.grid_dotted)

        x_labels = tuple(f"{x:.1f}" for x in x_ticks)
        y_labels = tuple(f"{y:.3f}" for y in y_ticks)
        font_px = style.tick_font_px
        for label, sx in zip(x_labels, x_screen, strict=True):
            w, _ = layer.measure_text(label, font_size_px=font_px)
            layer.draw_text(sx - w / 2, bottom + LABEL_OFFSET_PX, label, style.text_color, font_size_px=font_px)
        for label, sy in zip(y_labels, y_screen, strict=True):
            w, h = layer.measure_text(label, font_size_px=font_px)
            layer.draw_text(left - w - LABEL_OFFSET_PX, sy - h / 2, label, style.text_color, font_size_px=font_px)

        name_px = style.axis_name_font_px
        layer.draw_text(right + 5, bottom - 15, "x", style.text_color, font_size_px=name_px, bold=True)
        layer.draw_text(left - 25, top - 15, "y", style.text_color, font_size_px=name_px, bold=True)
        title_w, _ = layer.measure_text(style.title, font_size_px=style.title_font_px, bold=True)
        layer.draw_text(
            (viewport.width - title_w) / 2,
            5,
            style.title,
            style.title_color,
            font_size_px=style.title_font_px,
            bold=True,
        )

        self._render_count += 1
        LOGGER.debug(
            "axes layer rebuilt for %dx%d with %d x / %d y gridlines",
            viewport.width,
            viewport.height,
            len(x_ticks),
            len(y_ticks),
        )
        return AxesSnapshot(
            layer=layer,
            size=viewport.size,
            value_range=value_range,
            x_ticks=tuple(x_ticks),
            y_ticks=tuple(y_ticks),
            x_labels=x_labels,
            y_labels=y_labels,
        )
