"""Padded canvas bounds, culling, and spawn-line geometry.

Sprites are culled against the canvas grown by the sprite's radius, so a
sprite is only recycled once no part of it can still be on screen. Recycled
sprites re-enter from a line perpendicular to travel, placed just outside the
padded rectangle on the side they arrive from.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from drift_parallax import vec
from drift_parallax.vec import Vec2

DEFAULT_SAFETY_MARGIN_PX = 1.0


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in world pixels."""

    left: float
    top: float
    right: float
    bottom: float

    def __post_init__(self) -> None:
        if self.right < self.left or self.bottom < self.top:
            raise ValueError(
                f"Inverted rect: ({self.left}, {self.top}, {self.right}, {self.bottom})"
            )

    @property
    def centre(self) -> Vec2:
        return ((self.left + self.right) * 0.5, (self.top + self.bottom) * 0.5)

    @property
    def half_extents(self) -> tuple[float, float]:
        return ((self.right - self.left) * 0.5, (self.bottom - self.top) * 0.5)


@dataclass(frozen=True)
class SpawnLine:
    """Segment centred on ``base`` spanning ``±half_span`` along ``perp_unit``."""

    base: Vec2
    perp_unit: Vec2
    half_span: float


def sprite_radius(
    width_px: float,
    height_px: float,
    safety_margin_px: float = DEFAULT_SAFETY_MARGIN_PX,
) -> float:
    """Half-diagonal of the sprite's pixel bounds plus a safety margin."""
    return 0.5 * math.hypot(width_px, height_px) + safety_margin_px


def canvas_rect(width: float, height: float) -> Rect:
    return Rect(0.0, 0.0, width, height)


def pad_rect(r: Rect, pad: float) -> Rect:
    return Rect(r.left - pad, r.top - pad, r.right + pad, r.bottom + pad)


def contains(r: Rect, p: Vec2) -> bool:
    """Inclusive point-in-rect test."""
    return r.left <= p[0] <= r.right and r.top <= p[1] <= r.bottom


def ray_meets_rect(r: Rect, origin: Vec2, direction: Vec2) -> bool:
    """True when the ray from *origin* along *direction* touches *r* at or ahead of *origin*.

    Slab test; an axis the ray is parallel to must already contain *origin*.
    """
    t_near, t_far = -math.inf, math.inf
    for lo, hi, o, c in (
        (r.left, r.right, origin[0], direction[0]),
        (r.top, r.bottom, origin[1], direction[1]),
    ):
        if c == 0.0:
            if o < lo or o > hi:
                return False
            continue
        t0, t1 = (lo - o) / c, (hi - o) / c
        if t0 > t1:
            t0, t1 = t1, t0
        t_near = max(t_near, t0)
        t_far = min(t_far, t1)
    return t_near <= t_far and t_far >= 0.0


def support_distance(u: Vec2, hx: float, hy: float) -> float:
    """Distance from an AABB's centre to its boundary along unit axis *u*."""
    return abs(u[0]) * hx + abs(u[1]) * hy


def compute_spawn_line(padded: Rect, direction: Vec2, backoff_px: float) -> SpawnLine:
    hx, hy = padded.half_extents
    d = vec.normalize(direction)
    p = vec.normalize(vec.perp(d))

    # Any point with dot(d, point - centre) < -support(d) lies outside the rect.
    base = vec.add(padded.centre, vec.mul(d, -(support_distance(d, hx, hy) + backoff_px)))
    return SpawnLine(base=base, perp_unit=p, half_span=support_distance(p, hx, hy))


def sample_spawn_point(rng01: Callable[[], float], line: SpawnLine) -> Vec2:
    """Uniform point across the full span of *line*."""
    offset = (rng01() * 2.0 - 1.0) * line.half_span
    return vec.add(line.base, vec.mul(line.perp_unit, offset))
