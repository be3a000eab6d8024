"""Closed-form parallax position from absolute animation time.

Scenes authored against absolute time ("the sprite was already moving when
the scene started") compute each sprite's position directly from elapsed
time instead of stepping it frame by frame:

1. The sprite starts at its grid position and travels along its angle until
   it crosses the canvas bounds padded by its radius (the first journey).
2. From then on it repeats a recycle cycle: wait ``delay`` seconds at an
   off-screen entry point on the edge it enters from, then travel for the
   time the first journey took.

The entry point of every cycle is drawn from a generator keyed by the cycle
number, so any frame can be recomputed without history.
"""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from drift_parallax import vec
from drift_parallax.components import ParallaxSprite, SpriteFrame
from drift_parallax.depth import speed as depth_speed
from drift_parallax.rng import seed_key, seeded_rng
from drift_parallax.vec import Vec2

ENTRY_PULLBACK = 2.5
"""Entry points sit this many radii behind the entry edge."""

OFFSCREEN_SENTINEL = 10.0

ENTRY_SUBSYSTEM = "parallax-entry"


class EntryEdge(enum.Enum):
    LEFT = "left"
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class ExitPoint:
    distance: float
    x: float
    y: float


def find_exit(
    start: Vec2,
    cos_a: float,
    sin_a: float,
    left: float,
    top: float,
    right: float,
    bottom: float,
) -> ExitPoint:
    """Nearest forward crossing of the ray from *start* with the rect edges.

    Edges parallel to the ray are skipped. ``distance`` is ``inf`` when the
    ray never crosses the rect ahead of *start*.
    """
    sx, sy = start
    best = ExitPoint(math.inf, sx, sy)

    if cos_a != 0.0:
        for edge_x in (left, right):
            t = (edge_x - sx) / cos_a
            if t > 0:
                y = sy + t * sin_a
                if top <= y <= bottom and t < best.distance:
                    best = ExitPoint(t, edge_x, y)

    if sin_a != 0.0:
        for edge_y in (top, bottom):
            t = (edge_y - sy) / sin_a
            if t > 0:
                x = sx + t * cos_a
                if left <= x <= right and t < best.distance:
                    best = ExitPoint(t, x, edge_y)

    return best


def entry_edge(angle: float) -> EntryEdge:
    """Edge a sprite travelling at *angle* degrees re-enters from.

    Quadrants are 90 degrees wide and centred on the axes; a boundary angle
    belongs to the quadrant that starts there.
    """
    a = angle % 360.0
    if a >= 315.0 or a < 45.0:
        return EntryEdge.LEFT
    if a < 135.0:
        return EntryEdge.TOP
    if a < 225.0:
        return EntryEdge.RIGHT
    return EntryEdge.BOTTOM


def journey_radius(sprite: ParallaxSprite) -> float:
    """Exit buffer: half the sprite's larger side."""
    return max(sprite.width, sprite.height) * 0.5


def edge_anchor(
    edge: EntryEdge, width: float, height: float, radius: float
) -> tuple[Vec2, float]:
    """Centre of the padded entry edge and the length of the entry span."""
    if edge is EntryEdge.LEFT:
        return (-radius, height / 2), height + radius * 2
    if edge is EntryEdge.TOP:
        return (width / 2, -radius), width + radius * 2
    if edge is EntryEdge.RIGHT:
        return (width + radius, height / 2), height + radius * 2
    return (width / 2, height + radius), width + radius * 2


def entry_point(
    sprite: ParallaxSprite,
    width: float,
    height: float,
    cycle: int,
    scene_seed: str,
    entry_pullback: float = ENTRY_PULLBACK,
    subsystem: str = ENTRY_SUBSYSTEM,
) -> Vec2:
    radius = journey_radius(sprite)
    direction = vec.from_angle(sprite.angle)
    anchor, span = edge_anchor(entry_edge(sprite.angle), width, height, radius)

    rng = seeded_rng(
        seed_key(scene_seed, subsystem, sprite.layer_index, sprite.sprite_index, cycle)
    )
    offset = (rng() - 0.5) * span

    point = vec.add(anchor, vec.mul(vec.perp(direction), offset))
    return vec.sub(point, vec.mul(direction, radius * entry_pullback))


def is_visible(x: float, y: float, width: float, height: float, radius: float) -> bool:
    return -radius <= x <= width + radius and -radius <= y <= height + radius


def journey_position(
    sprite: ParallaxSprite,
    width: float,
    height: float,
    scaled_time: float,
    scene_seed: str,
    entry_pullback: float = ENTRY_PULLBACK,
    subsystem: str = ENTRY_SUBSYSTEM,
) -> tuple[Vec2, int]:
    """World position at *scaled_time* and the cycle it falls in (0 = first journey)."""
    radius = journey_radius(sprite)
    cos_a, sin_a = vec.from_angle(sprite.angle)
    initial = ((sprite.initial_u % 1.0) * width, sprite.initial_v * height)
    spd = depth_speed(sprite.resolved_depth, sprite.motion_scale)
    if spd <= 0:
        return initial, 0

    travel_distance = find_exit(
        initial, cos_a, sin_a, -radius, -radius, width + radius, height + radius
    ).distance
    travel_time = travel_distance / spd
    cycle_time = travel_time + sprite.delay

    current_time = scaled_time * sprite.time_multiplier + sprite.start_phase
    moved = current_time * spd

    if 0 <= moved < travel_distance:
        return (initial[0] + moved * cos_a, initial[1] + moved * sin_a), 0

    if moved < 0:
        # Scheduled to start already off-canvas.
        since_exit = abs(moved) / spd
    else:
        since_exit = current_time - travel_time

    if cycle_time > 0:
        cycle = math.floor(since_exit / cycle_time)
        in_cycle = since_exit % cycle_time
    else:
        cycle, in_cycle = 0, 0.0

    entry = entry_point(
        sprite, width, height, cycle, scene_seed, entry_pullback, subsystem
    )
    if in_cycle < sprite.delay:
        return entry, cycle + 1

    distance = (in_cycle - sprite.delay) * spd
    return (entry[0] + distance * cos_a, entry[1] + distance * sin_a), cycle + 1


def journey_frame(
    sprite: ParallaxSprite,
    width: float,
    height: float,
    scaled_time: float,
    scene_seed: str,
    entry_pullback: float = ENTRY_PULLBACK,
    sentinel: float = OFFSCREEN_SENTINEL,
    subsystem: str = ENTRY_SUBSYSTEM,
) -> SpriteFrame:
    """Position and visibility of *sprite* at *scaled_time*.

    Invisible sprites report normalized coordinates of ``±sentinel`` so a
    renderer can skip them. Line sprites keep their grid ``v``.
    """
    if width <= 0 or height <= 0:
        v = sprite.initial_v if sprite.line_sprite else -sentinel
        return SpriteFrame(0.0, 0.0, False, -sentinel, v, 0)

    (x, y), cycle = journey_position(
        sprite, width, height, scaled_time, scene_seed, entry_pullback, subsystem
    )
    visible = is_visible(x, y, width, height, journey_radius(sprite))

    if visible:
        u = x / width
        v = sprite.initial_v if sprite.line_sprite else y / height
    else:
        u = -sentinel if x < 0 else sentinel
        if sprite.line_sprite:
            v = sprite.initial_v
        else:
            v = -sentinel if y < 0 else sentinel
    return SpriteFrame(x, y, visible, u, v, cycle)
