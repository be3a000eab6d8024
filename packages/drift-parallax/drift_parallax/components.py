"""Parallax components and per-frame value types."""
from __future__ import annotations

from dataclasses import dataclass

from drift_parallax.bounds import DEFAULT_SAFETY_MARGIN_PX
from drift_parallax.depth import clamp_depth, grid_depth

DEFAULT_SPAWN_BACKOFF_PX = 0.1


@dataclass(frozen=True)
class MotionConfig:
    """One frame of motion. ``speed`` already includes depth and motion scale."""

    dir: tuple[float, float]
    dt: float
    speed: float


@dataclass(frozen=True)
class SpawnConfig:
    """Canvas and sprite sizing for one frame, in pixels."""

    canvas_width: float
    canvas_height: float
    sprite_width_px: float
    sprite_height_px: float
    safety_margin_px: float = DEFAULT_SAFETY_MARGIN_PX
    spawn_backoff_px: float = DEFAULT_SPAWN_BACKOFF_PX


@dataclass
class ParallaxSprite:
    """Static parameters of one drifting sprite.

    ``initial_u``/``initial_v`` are the sprite's normalized grid position.
    When ``depth`` is None it is derived from ``initial_u``.
    """

    angle: float = 0.0
    depth: float | None = None
    motion_scale: float = 1.0
    time_multiplier: float = 1.0
    start_phase: float = 0.0
    delay: float = 0.0
    size_px: float = 32.0
    height_px: float | None = None
    layer_index: int = 0
    sprite_index: int = 0
    initial_u: float = 0.0
    initial_v: float = 0.0
    line_sprite: bool = False

    @property
    def resolved_depth(self) -> float:
        if self.depth is None:
            return clamp_depth(grid_depth(self.initial_u % 1.0))
        return clamp_depth(self.depth)

    @property
    def width(self) -> float:
        return self.size_px

    @property
    def height(self) -> float:
        return self.size_px if self.height_px is None else self.height_px


@dataclass
class SpriteMotionState:
    """Mutable per-sprite state slot, owned by the frame loop."""

    x: float = 0.0
    y: float = 0.0
    cycle: int = 0
    visible: bool = False
    initialized: bool = False


@dataclass(frozen=True)
class SpriteFrame:
    """Engine output for one sprite on one frame.

    ``u``/``v`` are normalized canvas coordinates; values outside [0, 1]
    mean off-screen.
    """

    x: float
    y: float
    visible: bool
    u: float
    v: float
    cycle: int
