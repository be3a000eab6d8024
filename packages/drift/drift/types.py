"""Shared types for the drift frame loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

SlotId = int


@dataclass(frozen=True, slots=True)
class Canvas:
    """Drawable area in pixels. May change between frames."""

    width: float
    height: float

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True, slots=True)
class FrameContext:
    """Per-frame inputs handed to every system.

    There is no shared random stream here: anything random must be derived
    from the scene seed and the identity of whatever consumes it.
    """

    frame_number: int
    dt: float
    elapsed: float
    canvas: Canvas
    seed: str
    request_stop: Callable[[], None]


class DeadSlotError(KeyError):
    """Raised when operating on a sprite slot that has been despawned."""

    def __init__(self, slot_id: int, message: str) -> None:
        self.slot_id = slot_id
        super().__init__(message)


if TYPE_CHECKING:
    from drift.stage import Stage

System = Callable[["Stage", FrameContext], None]
