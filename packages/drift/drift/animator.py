"""Animator - frame loop, canvas sizing, and lifecycle hooks."""

import logging
import time
from typing import Callable

from drift.clock import FrameClock
from drift.stage import Stage
from drift.types import Canvas, FrameContext, System

logger = logging.getLogger(__name__)


class Animator:
    def __init__(
        self,
        seed: str = "",
        width: float = 0.0,
        height: float = 0.0,
        fps: int = 60,
    ) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive")
        self._fps = fps
        self._clock = FrameClock()
        self._stage = Stage()
        self._systems: list[System] = []
        self._start_hooks: list[Callable[[Stage, FrameContext], None]] = []
        self._stop_hooks: list[Callable[[Stage, FrameContext], None]] = []
        self._stop_requested: bool = False
        self._seed = seed
        self._canvas = Canvas(0.0, 0.0)
        self.resize(width, height)

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def clock(self) -> FrameClock:
        return self._clock

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    @property
    def seed(self) -> str:
        return self._seed

    @property
    def fps(self) -> int:
        return self._fps

    def resize(self, width: float, height: float) -> None:
        """Set the canvas size used from the next frame on.

        Zero is allowed (frames become no-ops); negative sizes are rejected.
        """
        if width < 0 or height < 0:
            raise ValueError(f"canvas size must be non-negative, got {width}x{height}")
        self._canvas = Canvas(width, height)
        logger.debug("canvas resized to %sx%s", width, height)

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Callable[[Stage, FrameContext], None]) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Callable[[Stage, FrameContext], None]) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        if not self._stop_requested:
            logger.debug("stop requested at frame %d", self._clock.frame_number)
        self._stop_requested = True

    def _context(self) -> FrameContext:
        return self._clock.context(self._canvas, self._seed, self._request_stop)

    def _frame(self, dt: float | None) -> None:
        self._clock.advance(1.0 / self._fps if dt is None else dt)
        ctx = self._context()
        for system in self._systems:
            system(self._stage, ctx)
            if self._stop_requested:
                break

    def step(self, dt: float | None = None) -> None:
        """Run one frame. *dt* defaults to one nominal frame at ``fps``."""
        self._stop_requested = False
        self._frame(dt)

    def run(self, n: int, dt: float | None = None) -> None:
        self._stop_requested = False
        ctx = self._context()
        for hook in self._start_hooks:
            hook(self._stage, ctx)

        for _ in range(n):
            self._frame(dt)
            if self._stop_requested:
                break

        ctx = self._context()
        for hook in self._stop_hooks:
            hook(self._stage, ctx)

    def run_forever(self) -> None:
        """Run in real time, feeding measured frame deltas to the clock."""
        self._stop_requested = False
        ctx = self._context()
        for hook in self._start_hooks:
            hook(self._stage, ctx)

        budget = 1.0 / self._fps
        last = time.monotonic()
        while not self._stop_requested:
            start = time.monotonic()
            self._frame(start - last)
            last = start
            if self._stop_requested:
                break
            sleep_time = budget - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)

        ctx = self._context()
        for hook in self._stop_hooks:
            hook(self._stage, ctx)
