"""Motion models: incremental stepping and closed-form journeys.

The two models own state differently. ``IncrementalModel`` reads and writes
the sprite's ``SpriteMotionState`` every frame, so frame N depends on frame
N-1. ``AnalyticModel`` is a pure function of elapsed time; it only mirrors its
result into the state slot for consumers.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from drift_parallax import vec
from drift_parallax.bounds import canvas_rect, contains, pad_rect, sprite_radius
from drift_parallax.components import (
    MotionConfig,
    ParallaxSprite,
    SpawnConfig,
    SpriteFrame,
    SpriteMotionState,
)
from drift_parallax.config import MotionModelKind, ParallaxConfig
from drift_parallax.depth import speed as depth_speed
from drift_parallax.journey import journey_frame
from drift_parallax.rng import lazy_rng, seed_key, seeded_rng
from drift_parallax.stepper import init_sprite_position, step_sprite

if TYPE_CHECKING:
    from drift import FrameContext


class MotionModel(Protocol):
    kind: MotionModelKind

    def update(
        self,
        sprite: ParallaxSprite,
        state: SpriteMotionState,
        ctx: FrameContext,
    ) -> SpriteFrame: ...


def _normalized(
    sprite: ParallaxSprite,
    x: float,
    y: float,
    width: float,
    height: float,
    visible: bool,
    sentinel: float,
) -> tuple[float, float]:
    """Normalized (u, v); line sprites keep their grid v."""
    if visible:
        u, v = x / width, y / height
    else:
        u = -sentinel if x < 0 else sentinel
        v = -sentinel if y < 0 else sentinel
    if sprite.line_sprite:
        v = sprite.initial_v
    return u, v


class IncrementalModel:
    """Moves each sprite by ``dir * speed * dt`` and respawns it on exit."""

    kind = MotionModelKind.INCREMENTAL

    def __init__(self, config: ParallaxConfig | None = None) -> None:
        self.config = config or ParallaxConfig()

    def _key(self, ctx: FrameContext, sprite: ParallaxSprite, cycle: int, tag: str = "") -> str:
        return seed_key(
            ctx.seed,
            self.config.subsystem + tag,
            sprite.layer_index,
            sprite.sprite_index,
            cycle,
        )

    def place(
        self,
        sprite: ParallaxSprite,
        state: SpriteMotionState,
        ctx: FrameContext,
    ) -> None:
        """Scatter a new sprite along its path."""
        cfg = self.config
        x, y = init_sprite_position(
            ctx.canvas.width,
            ctx.canvas.height,
            sprite.width,
            seeded_rng(self._key(ctx, sprite, 0, "-init")),
            vec.from_angle(sprite.angle),
            cfg.init_safety_margin_px,
            cfg.init_backoff_px,
            sprite_height=sprite.height,
        )
        state.x, state.y = x, y
        state.cycle = 0
        state.initialized = True

    def update(
        self,
        sprite: ParallaxSprite,
        state: SpriteMotionState,
        ctx: FrameContext,
    ) -> SpriteFrame:
        cfg = self.config
        width, height = ctx.canvas.width, ctx.canvas.height
        if ctx.canvas.is_empty:
            state.visible = False
            v = sprite.initial_v if sprite.line_sprite else -cfg.offscreen_sentinel
            return SpriteFrame(
                state.x, state.y, False, -cfg.offscreen_sentinel, v, state.cycle
            )

        if not state.initialized:
            self.place(sprite, state, ctx)
        else:
            motion = MotionConfig(
                dir=vec.from_angle(sprite.angle),
                dt=ctx.dt * sprite.time_multiplier,
                speed=depth_speed(sprite.resolved_depth, sprite.motion_scale),
            )
            spawn = SpawnConfig(
                canvas_width=width,
                canvas_height=height,
                sprite_width_px=sprite.width,
                sprite_height_px=sprite.height,
                safety_margin_px=cfg.safety_margin_px,
                spawn_backoff_px=cfg.spawn_backoff_px,
            )
            result = step_sprite(
                (state.x, state.y),
                motion,
                spawn,
                lazy_rng(self._key(ctx, sprite, state.cycle + 1)),
            )
            state.x, state.y = result.position
            if result.respawned:
                state.cycle += 1

        reach = sprite_radius(sprite.width, sprite.height, 0.0)
        state.visible = contains(pad_rect(canvas_rect(width, height), reach), (state.x, state.y))
        u, v = _normalized(
            sprite, state.x, state.y, width, height, state.visible, cfg.offscreen_sentinel
        )
        return SpriteFrame(state.x, state.y, state.visible, u, v, state.cycle)


class AnalyticModel:
    """Recomputes each sprite from ``ctx.elapsed`` with no frame-to-frame state."""

    kind = MotionModelKind.ANALYTIC

    def __init__(self, config: ParallaxConfig | None = None) -> None:
        self.config = config or ParallaxConfig()

    def update(
        self,
        sprite: ParallaxSprite,
        state: SpriteMotionState,
        ctx: FrameContext,
    ) -> SpriteFrame:
        cfg = self.config
        frame = journey_frame(
            sprite,
            ctx.canvas.width,
            ctx.canvas.height,
            ctx.elapsed,
            ctx.seed,
            entry_pullback=cfg.entry_pullback,
            sentinel=cfg.offscreen_sentinel,
            subsystem=cfg.subsystem + "-entry",
        )
        if not ctx.canvas.is_empty:
            state.x, state.y = frame.x, frame.y
            state.cycle = frame.cycle
            state.initialized = True
        state.visible = frame.visible
        return frame


def make_motion_model(config: ParallaxConfig | None = None) -> MotionModel:
    config = config or ParallaxConfig()
    if config.model is MotionModelKind.ANALYTIC:
        return AnalyticModel(config)
    return IncrementalModel(config)
