"""Incremental move / cull / respawn step for one sprite."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from drift_parallax import vec
from drift_parallax.bounds import (
    canvas_rect,
    compute_spawn_line,
    contains,
    pad_rect,
    ray_meets_rect,
    sample_spawn_point,
    sprite_radius,
    support_distance,
)
from drift_parallax.components import MotionConfig, SpawnConfig
from drift_parallax.vec import Vec2

INIT_SAFETY_MARGIN_PX = 2.0
INIT_BACKOFF_PX = 1.0


@dataclass(frozen=True)
class StepResult:
    position: Vec2
    respawned: bool


def step_sprite(
    position: Vec2,
    motion: MotionConfig,
    spawn: SpawnConfig,
    rng01: Callable[[], float],
) -> StepResult:
    """Advance *position* by ``dir * speed * dt``; respawn if it left the padded canvas.

    A sprite has left once it is outside the padded rect and moving away from
    it. Sprites still approaching the rect (fresh off the spawn line) keep
    travelling, and a sprite that did not move is never culled.

    *rng01* is only drawn from when a respawn happens. An empty canvas leaves
    the position untouched.
    """
    if spawn.canvas_width <= 0 or spawn.canvas_height <= 0:
        return StepResult(position, False)

    d = vec.normalize(motion.dir)
    travel = max(motion.speed, 0.0) * max(motion.dt, 0.0)
    if travel == 0.0:
        return StepResult(position, False)
    nxt = (position[0] + d[0] * travel, position[1] + d[1] * travel)

    radius = sprite_radius(
        spawn.sprite_width_px, spawn.sprite_height_px, spawn.safety_margin_px
    )
    outer = pad_rect(canvas_rect(spawn.canvas_width, spawn.canvas_height), radius)

    if contains(outer, nxt) or ray_meets_rect(outer, nxt, d):
        return StepResult(nxt, False)

    line = compute_spawn_line(outer, d, spawn.spawn_backoff_px)
    return StepResult(sample_spawn_point(rng01, line), True)


def init_sprite_position(
    canvas_width: float,
    canvas_height: float,
    sprite_size: float,
    rng01: Callable[[], float],
    direction: Vec2,
    safety_margin_px: float = INIT_SAFETY_MARGIN_PX,
    backoff_px: float = INIT_BACKOFF_PX,
    sprite_height: float | None = None,
) -> Vec2:
    """Place a sprite at a random point along its future path.

    The sprite is sampled on its spawn line and then advanced a random
    fraction of the full crossing. Draws twice from *rng01*: spawn offset,
    then progress. *sprite_size* is the width; *sprite_height* defaults to it.
    """
    height = sprite_size if sprite_height is None else sprite_height
    radius = sprite_radius(sprite_size, height, safety_margin_px)
    padded = pad_rect(canvas_rect(canvas_width, canvas_height), radius)
    spawn_point = sample_spawn_point(
        rng01, compute_spawn_line(padded, direction, backoff_px)
    )

    d = vec.normalize(direction)
    hx, hy = padded.half_extents
    crossing = 2.0 * support_distance(d, hx, hy) + 2.0 * backoff_px
    return vec.add(spawn_point, vec.mul(d, rng01() * crossing))
