from curveview.axes import AxesLayer, AxesSnapshot, x_gridline_values, y_gridline_values
from curveview.config import PlotConfig, PlotStyle
from curveview.controller import PaintReport, PlotController, PlotState
from curveview.errors import CurveViewError, PlotInvariantError, SurfaceClosedError
from curveview.host import AsyncioTimer, EventSource, HeadlessEventSource, ManualTimer, TimerService
from curveview.sampler import SamplePoint, SampleSet, sample, sample_count, target_function
from curveview.scales import ValueRange, ViewportGeometry, ViewTransform, build_transform, compute_value_range
from curveview.surface import DrawingSurface, RasterSurface

__all__ = [
    "AsyncioTimer",
    "AxesLayer",
    "AxesSnapshot",
    "CurveViewError",
    "DrawingSurface",
    "EventSource",
    "HeadlessEventSource",
    "ManualTimer",
    "PaintReport",
    "PlotConfig",
    "PlotController",
    "PlotInvariantError",
    "PlotState",
    "PlotStyle",
    "RasterSurface",
    "SamplePoint",
    "SampleSet",
    "SurfaceClosedError",
    "TimerService",
    "ValueRange",
    "ViewTransform",
    "ViewportGeometry",
    "build_transform",
    "compute_value_range",
    "sample",
    "sample_count",
    "target_function",
    "x_gridline_values",
    "y_gridline_values",
]
