from __future__ import annotations

from abc import ABC, abstractmethod
import asyncio
import logging
from typing import Any, Callable

from curveview.surface import DrawingSurface, RasterSurface

LOGGER = logging.getLogger(__name__)

ResizeHandler = Callable[[int, int], None]
PaintHandler = Callable[[DrawingSurface], Any]


class TimerService(ABC):
    """One-shot timer owned by a single component.

    ``start`` arms the timer, or re-arms it from now if it is already pending.
    """

    @abstractmethod
    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    @property
    @abstractmethod
    def active(self) -> bool:
        raise NotImplementedError


class ManualTimer(TimerService):
    """Timer driven by an explicit millisecond clock instead of wall time."""

    def __init__(self, now_ms: float = 0.0) -> None:
        self._now_ms = float(now_ms)
        self._deadline_ms: float | None = None
        self._callback: Callable[[], None] | None = None
        self.fired = 0

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def deadline_ms(self) -> float | None:
        return self._deadline_ms

    @property
    def active(self) -> bool:
        return self._deadline_ms is not None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        self._deadline_ms = self._now_ms + interval_ms
        self._callback = callback

    def stop(self) -> None:
        self._deadline_ms = None
        self._callback = None

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, firing the callback if its deadline passes."""
        if delta_ms < 0:
            raise ValueError("delta_ms must be >= 0")
        target_ms = self._now_ms + delta_ms
        fired = 0
        # Callbacks run with the clock at their own deadline, so a re-arm counts from there.
        while self._deadline_ms is not None and self._deadline_ms <= target_ms:
            self._now_ms = self._deadline_ms
            callback = self._callback
            self._deadline_ms = None
            self._callback = None
            if callback is not None:
                fired += 1
                self.fired += 1
                callback()
        self._now_ms = target_ms
        return fired


class AsyncioTimer(TimerService):
    """Timer scheduled on an asyncio event loop via ``call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        self.stop()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(interval_ms / 1000.0, self._fire, callback)

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        try:
            callback()
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("timer callback failed: %s", exc)


class EventSource(ABC):
    """The host window as seen by the plot: size, resize/paint delivery, timers, redraws."""

    @abstractmethod
    def viewport_size(self) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def connect(self, on_resize: ResizeHandler, on_paint: PaintHandler) -> None:
        raise NotImplementedError

    @abstractmethod
    def disconnect(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def create_timer(self) -> TimerService:
        raise NotImplementedError

    @abstractmethod
    def request_redraw(self) -> None:
        raise NotImplementedError

    def set_caption(self, caption: str) -> None:
        """Optional hook for hosts with a window title."""
        return


class HeadlessEventSource(EventSource):
    """In-process host: no window, a manual clock, and raster surfaces per paint."""

    def __init__(self, width: int = 900, height: int = 700) -> None:
        self._size = (int(width), int(height))
        self._on_resize: ResizeHandler | None = None
        self._on_paint: PaintHandler | None = None
        self._timer = ManualTimer()
        self.redraw_requests = 0
        self.caption = ""

    @property
    def timer(self) -> ManualTimer:
        return self._timer

    @property
    def connected(self) -> bool:
        return self._on_paint is not None

    def viewport_size(self) -> tuple[int, int]:
        return self._size

    def connect(self, on_resize: ResizeHandler, on_paint: PaintHandler) -> None:
        self._on_resize = on_resize
        self._on_paint = on_paint

    def disconnect(self) -> None:
        self._on_resize = None
        self._on_paint = None

    def create_timer(self) -> TimerService:
        return self._timer

    def request_redraw(self) -> None:
        self.redraw_requests += 1

    def set_caption(self, caption: str) -> None:
        self.caption = caption

    def resize(self, width: int, height: int) -> None:
        self._size = (int(width), int(height))
        if self._on_resize is not None:
            self._on_resize(*self._size)

    def advance(self, delta_ms: float) -> int:
        return self._timer.advance(delta_ms)

    def paint(self) -> tuple[RasterSurface, Any]:
        surface = RasterSurface(*self._size)
        result = self._on_paint(surface) if self._on_paint is not None else None
        return surface, result
