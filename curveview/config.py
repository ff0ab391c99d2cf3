from __future__ import annotations

from dataclasses import dataclass

from curveview.raster.canvas import RGBA


TITLE = "y = cos²(x) / (x² + 1)"


@dataclass(frozen=True)
class PlotConfig:
    """Compiled-in plot configuration.

    Every tunable of the pipeline lives here: the sampled domain, the pixel
    margins reserved for labels, sampling density and its clamps, the resize
    quiet period, and the value-range padding policy.
    """

    domain_start: float = 3.8
    domain_end: float = 7.6

    left_margin: int = 60
    top_margin: int = 40
    right_margin: int = 40
    bottom_margin: int = 60

    points_per_pixel: float = 1.5
    min_points: int = 200
    max_points: int = 5000
    min_sample_width_px: int = 100
    min_graph_size_px: int = 1

    debounce_ms: int = 200
    marker_cap: int = 1000

    y_padding_ratio: float = 0.1
    flat_span_epsilon: float = 1e-6
    flat_padding: float = 0.1

    def __post_init__(self) -> None:
        if not self.domain_end > self.domain_start:
            raise ValueError("domain_end must be > domain_start")
        if min(self.left_margin, self.top_margin, self.right_margin, self.bottom_margin) < 0:
            raise ValueError("margins must be >= 0")
        if self.points_per_pixel <= 0:
            raise ValueError("points_per_pixel must be > 0")
        if self.min_points < 2:
            raise ValueError("min_points must be >= 2")
        if self.max_points < self.min_points:
            raise ValueError("max_points must be >= min_points")
        if self.min_sample_width_px < 1:
            raise ValueError("min_sample_width_px must be >= 1")
        if self.min_graph_size_px < 1:
            raise ValueError("min_graph_size_px must be >= 1")
        if self.debounce_ms <= 0:
            raise ValueError("debounce_ms must be > 0")
        if self.marker_cap < 0:
            raise ValueError("marker_cap must be >= 0")
        if self.y_padding_ratio < 0:
            raise ValueError("y_padding_ratio must be >= 0")
        if self.flat_span_epsilon <= 0 or self.flat_padding <= 0:
            raise ValueError("flat_span_epsilon and flat_padding must be > 0")


@dataclass(frozen=True)
class PlotStyle:
    background: RGBA = (255, 255, 255, 255)
    axis_color: RGBA = (0, 0, 0, 255)
    axis_width: int = 2
    grid_color: RGBA = (211, 211, 211, 255)
    grid_width: int = 1
    grid_dotted: bool = True
    curve_color: RGBA = (0, 0, 139, 255)
    curve_width: int = 2
    marker_color: RGBA = (255, 0, 0, 255)
    marker_size: int = 8
    text_color: RGBA = (0, 0, 0, 255)
    title_color: RGBA = (0, 0, 139, 255)
    tick_font_px: float = 12.0
    axis_name_font_px: float = 16.0
    title_font_px: float = 19.0
    title: str = TITLE
    caption: str = f"Function graph: {TITLE}"
