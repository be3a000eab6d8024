"""System factory for parallax motion."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from drift_parallax.components import ParallaxSprite, SpriteFrame, SpriteMotionState
from drift_parallax.config import ParallaxConfig
from drift_parallax.models import make_motion_model

if TYPE_CHECKING:
    from drift import FrameContext, SlotId, Stage

logger = logging.getLogger(__name__)


def make_parallax_system(
    config: ParallaxConfig | None = None,
    on_respawn: Callable[["Stage", "FrameContext", "SlotId", SpriteFrame], None] | None = None,
) -> Callable[["Stage", "FrameContext"], None]:
    """Advance every slot holding a ParallaxSprite and a SpriteMotionState.

    The latest SpriteFrame is attached to each slot for the renderer. A frame
    with an empty canvas is skipped entirely. on_respawn fires whenever a
    sprite enters a new recycle cycle.
    """
    model = make_motion_model(config)

    def parallax_system(stage: "Stage", ctx: "FrameContext") -> None:
        if ctx.canvas.is_empty:
            logger.debug("frame %d skipped: empty canvas", ctx.frame_number)
            return

        for sid, (sprite, state) in list(stage.query(ParallaxSprite, SpriteMotionState)):
            cycle = state.cycle
            was_initialized = state.initialized
            frame = model.update(sprite, state, ctx)
            stage.attach(sid, frame)
            if not was_initialized or frame.cycle == cycle:
                continue
            logger.debug(
                "slot %d recycled into cycle %d at (%.1f, %.1f)",
                sid, frame.cycle, frame.x, frame.y,
            )
            if on_respawn is not None:
                on_respawn(stage, ctx, sid, frame)

    return parallax_system
