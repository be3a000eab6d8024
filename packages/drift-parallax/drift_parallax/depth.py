"""Depth to travel-speed mapping. Depth 0 is farthest (slowest), 1 nearest."""
from __future__ import annotations

BASE_SPEED = 7.0
"""Pixels per animation-second at depth 0 and motion scale 1."""

DEPTH_SPEED_GAIN = 1.5


def depth_speed_multiplier(depth: float) -> float:
    """1.0 at depth 0 up to 2.5 at depth 1."""
    return 1.0 + depth * DEPTH_SPEED_GAIN


def speed(depth: float, motion_scale: float = 1.0) -> float:
    return BASE_SPEED * depth_speed_multiplier(depth) * motion_scale


def clamp_depth(depth: float) -> float:
    return max(0.0, min(1.0, depth))


def grid_depth(u: float) -> float:
    """Default depth for a sprite with no explicit depth, from its grid column."""
    return u * 0.5 + 0.25
