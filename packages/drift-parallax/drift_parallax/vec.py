"""2D vector math helpers operating on tuple[float, float]."""
from __future__ import annotations

import math

Vec2 = tuple[float, float]


def add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def mul(v: Vec2, s: float) -> Vec2:
    return (v[0] * s, v[1] * s)


def dot(a: Vec2, b: Vec2) -> float:
    return a[0] * b[0] + a[1] * b[1]


def perp(v: Vec2) -> Vec2:
    """Rotate 90 degrees: (x, y) -> (-y, x)."""
    return (-v[1], v[0])


def length(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def normalize(v: Vec2) -> Vec2:
    """Unit vector along *v*. The zero vector maps to (1, 0)."""
    mag = length(v)
    if mag == 0.0:
        return (1.0, 0.0)
    return (v[0] / mag, v[1] / mag)


def from_angle(degrees: float) -> Vec2:
    """Unit travel vector for an angle in degrees (0 = right, 90 = down)."""
    rad = math.radians(degrees)
    return (math.cos(rad), math.sin(rad))
