"""Variable-timestep clock and FrameContext construction."""

from typing import Callable

from drift.types import Canvas, FrameContext


class FrameClock:
    def __init__(self, time_scale: float = 1.0) -> None:
        if time_scale < 0:
            raise ValueError("time_scale must be non-negative")
        self._time_scale = time_scale
        self._frame_number = 0
        self._elapsed = 0.0
        self._dt = 0.0

    @property
    def frame_number(self) -> int:
        return self._frame_number

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def dt(self) -> float:
        """Scaled delta of the most recent frame."""
        return self._dt

    @property
    def time_scale(self) -> float:
        return self._time_scale

    @time_scale.setter
    def time_scale(self, value: float) -> None:
        if value < 0:
            raise ValueError("time_scale must be non-negative")
        self._time_scale = value

    def advance(self, dt: float) -> int:
        # Frame deltas never run time backwards.
        self._dt = max(dt, 0.0) * self._time_scale
        self._elapsed += self._dt
        self._frame_number += 1
        return self._frame_number

    def context(
        self, canvas: Canvas, seed: str, stop_fn: Callable[[], None]
    ) -> FrameContext:
        return FrameContext(
            frame_number=self._frame_number,
            dt=self._dt,
            elapsed=self._elapsed,
            canvas=canvas,
            seed=seed,
            request_stop=stop_fn,
        )

    def reset(self, elapsed: float = 0.0) -> None:
        self._frame_number = 0
        self._elapsed = elapsed
        self._dt = 0.0
