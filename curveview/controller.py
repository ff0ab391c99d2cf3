from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from curveview.axes import AxesLayer, AxesSnapshot
from curveview.config import PlotConfig, PlotStyle
from curveview.host import EventSource
from curveview.sampler import SampleSet, sample
from curveview.scales import ValueRange, ViewportGeometry, build_transform, compute_value_range
from curveview.surface import DrawingSurface

LOGGER = logging.getLogger(__name__)


class PlotState(Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    RESAMPLING = "resampling"
    CLOSED = "closed"


@dataclass(frozen=True)
class PaintReport:
    point_count: int
    markers_drawn: int
    snapshot_rebuilt: bool
    value_range: ValueRange


class PlotController:
    """Owns the samples and the cached axes layer, and turns host events into frames.

    Resize events only arm the debounce timer; the resample happens once the
    host has been quiet for ``config.debounce_ms``. Each paint draws the
    axes layer (rebuilt only when stale or resized), then the curve as one
    polyline, then per-sample markers when there are few enough of them.
    """

    def __init__(
        self,
        source: EventSource,
        config: PlotConfig | None = None,
        style: PlotStyle | None = None,
        axes_layer: AxesLayer | None = None,
    ) -> None:
        self._source = source
        self._config = config or PlotConfig()
        self._style = style or PlotStyle()
        self._axes = axes_layer or AxesLayer(self._style)
        self._timer = source.create_timer()
        self._state = PlotState.IDLE
        self._snapshot: AxesSnapshot | None = None
        self._resample_count = 0

        width, height = source.viewport_size()
        self._viewport = ViewportGeometry.from_config(width, height, self._config)
        self._samples = SampleSet.empty()
        self._resample()

        source.set_caption(self._style.caption)
        source.connect(self.handle_resize, self.handle_paint)
        LOGGER.info("plot controller ready for %dx%d viewport with %d samples", width, height, len(self._samples))

    def __enter__(self) -> "PlotController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def state(self) -> PlotState:
        return self._state

    @property
    def config(self) -> PlotConfig:
        return self._config

    @property
    def samples(self) -> SampleSet:
        return self._samples

    @property
    def snapshot(self) -> AxesSnapshot | None:
        return self._snapshot

    @property
    def viewport(self) -> ViewportGeometry:
        return self._viewport

    @property
    def resample_count(self) -> int:
        return self._resample_count

    def handle_resize(self, width: int, height: int) -> None:
        if self._state is PlotState.CLOSED:
            return
        self._viewport = ViewportGeometry.from_config(width, height, self._config)
        self._state = PlotState.DEBOUNCING
        self._timer.start(self._config.debounce_ms, self._on_resize_settled)
        LOGGER.debug("resize to %dx%d, resample deferred %d ms", width, height, self._config.debounce_ms)

    def _on_resize_settled(self) -> None:
        if self._state is not PlotState.DEBOUNCING:
            return
        self._state = PlotState.RESAMPLING
        try:
            self._resample()
        finally:
            self._state = PlotState.IDLE
        self._source.request_redraw()

    def _resample(self) -> None:
        cfg = self._config
        graph_width = self._viewport.width - self._viewport.left - self._viewport.right
        self._samples = sample(
            cfg.domain_start,
            cfg.domain_end,
            graph_width,
            cfg.points_per_pixel,
            cfg.max_points,
            min_points=cfg.min_points,
            min_width_px=cfg.min_sample_width_px,
        )
        self._resample_count += 1
        if self._snapshot is not None:
            self._snapshot.mark_stale()
        LOGGER.debug("resampled %d points for graph width %d px", len(self._samples), graph_width)

    def handle_paint(self, surface: DrawingSurface) -> PaintReport | None:
        samples = self._samples
        if self._state is PlotState.CLOSED or samples.is_empty:
            return None

        viewport = self._viewport
        value_range = compute_value_range(samples, self._config)
        transform = build_transform(viewport, value_range)

        previous = self._snapshot
        snapshot = self._axes.render(viewport, value_range, previous, layer_factory=surface.new_layer)
        rebuilt = snapshot is not previous
        if rebuilt:
            if previous is not None:
                previous.close()
            self._snapshot = snapshot
        surface.draw_layer(snapshot.layer)

        style = self._style
        sx, sy = transform.map_to_screen(samples.xs, samples.ys)
        if len(samples) >= 2:
            surface.draw_polyline(sx, sy, style.curve_color, style.curve_width)

        markers = 0
        if len(samples) <= self._config.marker_cap:
            size = style.marker_size
            half = size / 2
            for x, y in zip(sx.tolist(), sy.tolist(), strict=True):
                surface.fill_ellipse(x - half, y - half, size, size, style.marker_color)
            markers = len(samples)
        else:
            LOGGER.debug("markers suppressed: %d samples > cap %d", len(samples), self._config.marker_cap)

        return PaintReport(
            point_count=len(samples),
            markers_drawn=markers,
            snapshot_rebuilt=rebuilt,
            value_range=value_range,
        )

    def close(self) -> None:
        if self._state is PlotState.CLOSED:
            return
        self._state = PlotState.CLOSED
        self._timer.stop()
        self._source.disconnect()
        if self._snapshot is not None:
            self._snapshot.close()
            self._snapshot = None
        LOGGER.info("plot controller closed after %d resamples", self._resample_count)
