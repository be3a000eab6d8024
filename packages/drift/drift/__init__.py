"""drift - A small frame-driven animation host in Python."""

from drift.animator import Animator
from drift.clock import FrameClock
from drift.stage import Stage
from drift.types import Canvas, DeadSlotError, FrameContext, SlotId

__all__ = [
    "Animator",
    "Stage",
    "FrameClock",
    "FrameContext",
    "Canvas",
    "SlotId",
    "DeadSlotError",
]
