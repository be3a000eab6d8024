"""Parallax configuration dataclass."""
from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Any, Mapping


class MotionModelKind(enum.Enum):
    """Which motion algorithm drives the sprites.

    INCREMENTAL steps each sprite from its previous position every frame.
    ANALYTIC recomputes every sprite from absolute elapsed time.
    """

    INCREMENTAL = "incremental"
    ANALYTIC = "analytic"


@dataclass(frozen=True)
class ParallaxConfig:
    """Immutable configuration for the parallax engine.

    Attributes:
        model: Motion algorithm used by the parallax system.
        safety_margin_px: Extra sprite radius absorbing anti-aliasing and strokes.
        spawn_backoff_px: Distance outside the padded canvas of the respawn line.
        init_safety_margin_px: Safety margin used for initial placement.
        init_backoff_px: Spawn-line backoff used for initial placement.
        entry_pullback: Analytic entry points sit this many radii behind the edge.
        offscreen_sentinel: Normalized coordinate reported for invisible sprites.
        subsystem: Seed-key component naming this engine's random draws.
    """

    model: MotionModelKind = MotionModelKind.INCREMENTAL
    safety_margin_px: float = 1.0
    spawn_backoff_px: float = 0.1
    init_safety_margin_px: float = 2.0
    init_backoff_px: float = 1.0
    entry_pullback: float = 2.5
    offscreen_sentinel: float = 10.0
    subsystem: str = "parallax"

    def __post_init__(self) -> None:
        for name in (
            "safety_margin_px",
            "spawn_backoff_px",
            "init_safety_margin_px",
            "init_backoff_px",
            "entry_pullback",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")
        if self.offscreen_sentinel <= 0:
            raise ValueError("offscreen_sentinel must be positive")
        if not isinstance(self.model, MotionModelKind):
            raise ValueError(f"Unknown motion model {self.model!r}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ParallaxConfig:
        """Build a config from plain data, e.g. a scene file section."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown parallax config keys: {', '.join(unknown)}")
        values = dict(data)
        model = values.get("model")
        if isinstance(model, str):
            try:
                values["model"] = MotionModelKind(model.lower())
            except ValueError:
                raise ValueError(f"Unknown motion model {model!r}") from None
        return cls(**values)
