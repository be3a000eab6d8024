"""Seeded, identity-keyed random draws.

Every respawn decision builds its own generator from a string key made of
stable identity data (scene seed, subsystem, layer, sprite, recycle cycle).
Two runs with the same keys produce bit-identical draws, and no generator is
ever shared between sprites.

The hash and generator use unsigned 32-bit arithmetic over UTF-16 code units,
so a key hashes to the same seed here as in a JavaScript renderer using
``Math.imul``.
"""
from __future__ import annotations

from typing import Callable

_MASK = 0xFFFFFFFF

Rng = Callable[[], float]


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def _code_units(text: str) -> list[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def hash_seed(key: str | None) -> int:
    """Hash *key* to an unsigned 32-bit seed. ``None`` hashes like ``""``."""
    units = _code_units(key or "")
    h = (1779033703 ^ len(units)) & _MASK
    for c in units:
        h = _imul(h ^ c, 3432918353)
        h = ((h << 13) | (h >> 19)) & _MASK
    h = _imul(h ^ (h >> 16), 2246822507)
    h ^= h >> 13
    h = _imul(h, 3266489909)
    return (h ^ (h >> 16)) & _MASK


class Mulberry32:
    """mulberry32 generator. Calling the instance returns the next float in [0, 1)."""

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = seed & _MASK

    def next_u32(self) -> int:
        self._state = (self._state + 0x6D2B79F5) & _MASK
        t = self._state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK
        return (r ^ (r >> 14)) & _MASK

    def random(self) -> float:
        return self.next_u32() / 4294967296

    def __call__(self) -> float:
        return self.random()


def seeded_rng(key: str | None) -> Rng:
    """Fresh generator for *key*."""
    return Mulberry32(hash_seed(key))


def seed_key(
    scene_seed: str,
    subsystem: str,
    layer_index: int,
    sprite_index: int,
    cycle: int,
) -> str:
    return f"{scene_seed}-{subsystem}-{layer_index}-{sprite_index}-{cycle}"


def lazy_rng(key: str | None) -> Rng:
    """Like :func:`seeded_rng`, but hashing is deferred to the first draw."""
    generator: Mulberry32 | None = None

    def draw() -> float:
        nonlocal generator
        if generator is None:
            generator = Mulberry32(hash_seed(key))
        return generator.random()

    return draw
