from __future__ import annotations


class CurveViewError(Exception):
    """Base class for errors raised by curveview."""


class PlotInvariantError(CurveViewError, AssertionError):
    """A plotting contract was broken, e.g. a value range with zero span.

    Raised explicitly rather than via ``assert`` so the check survives ``python -O``.
    """


class SurfaceClosedError(CurveViewError, RuntimeError):
    """A drawing surface or cached layer was used after ``close()``."""
