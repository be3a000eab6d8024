"""drift-parallax - Depth-scaled sprite drift with seamless, seeded recycling."""
from __future__ import annotations

from drift_parallax import vec
from drift_parallax.bounds import Rect, SpawnLine
from drift_parallax.components import (
    MotionConfig,
    ParallaxSprite,
    SpawnConfig,
    SpriteFrame,
    SpriteMotionState,
)
from drift_parallax.config import MotionModelKind, ParallaxConfig
from drift_parallax.depth import speed
from drift_parallax.models import AnalyticModel, IncrementalModel, MotionModel, make_motion_model
from drift_parallax.rng import seed_key, seeded_rng
from drift_parallax.systems import make_parallax_system

__all__ = [
    "AnalyticModel",
    "IncrementalModel",
    "MotionConfig",
    "MotionModel",
    "MotionModelKind",
    "ParallaxConfig",
    "ParallaxSprite",
    "Rect",
    "SpawnConfig",
    "SpawnLine",
    "SpriteFrame",
    "SpriteMotionState",
    "make_motion_model",
    "make_parallax_system",
    "seed_key",
    "seeded_rng",
    "speed",
    "vec",
]
