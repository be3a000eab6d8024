"""
drift-parallax Field
Interactive demo of drift-parallax: depth-layered sprites drifting across a resizable window.
"""

import sys
from dataclasses import dataclass

import pygame

from drift import Animator
from drift_parallax import (
    MotionModelKind,
    ParallaxConfig,
    ParallaxSprite,
    SpriteFrame,
    SpriteMotionState,
    make_parallax_system,
)

# --- Configuration ---
WIDTH, HEIGHT = 1024, 640
FPS = 60
TITLE = "drift-parallax Field"
SEED = "parallax-field"

LAYERS = 3
GRID_COLS = 8
GRID_ROWS = 5
BASE_SIZE_PX = 18.0
MOTION_SCALE = 6.0
ANGLE_STEP = 15.0

# Colors
BG_COLOR = (14, 16, 30)
HUD_COLOR = (200, 200, 220)
LAYER_COLORS = [
    (70, 90, 150),    # far
    (120, 160, 230),  # mid
    (230, 240, 255),  # near
]


# --- Visual component (not part of drift-parallax, just for rendering) ---
@dataclass
class Visual:
    color: tuple[int, int, int]
    radius: float


def spawn_field(animator: Animator, angle: float) -> int:
    count = 0
    for layer in range(LAYERS):
        depth = layer / max(LAYERS - 1, 1)
        size = BASE_SIZE_PX * (0.5 + depth)
        for row in range(GRID_ROWS):
            for col in range(GRID_COLS):
                index = row * GRID_COLS + col
                sprite = ParallaxSprite(
                    angle=angle,
                    depth=depth,
                    motion_scale=MOTION_SCALE,
                    delay=0.5 * layer,
                    size_px=size,
                    layer_index=layer,
                    sprite_index=index,
                    initial_u=(col + 0.5 + 0.3 * layer) / GRID_COLS % 1.0,
                    initial_v=(row + 0.5 + 0.2 * layer) / GRID_ROWS % 1.0,
                )
                animator.stage.spawn(
                    sprite,
                    SpriteMotionState(),
                    Visual(color=LAYER_COLORS[layer % len(LAYER_COLORS)], radius=size * 0.5),
                )
                count += 1
    return count


def build_animator(kind: MotionModelKind, angle: float, size: tuple[int, int], counter: list[int]) -> Animator:
    """Fresh animator for the given motion model; counter[0] tallies respawns."""
    animator = Animator(seed=SEED, width=float(size[0]), height=float(size[1]), fps=FPS)

    def on_respawn(stage, ctx, sid, frame):
        counter[0] += 1

    animator.add_system(make_parallax_system(ParallaxConfig(model=kind), on_respawn=on_respawn))
    spawn_field(animator, angle)
    return animator


def main():
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    # --- State ---
    kind = MotionModelKind.INCREMENTAL
    angle = 0.0
    respawns = [0]
    animator = build_animator(kind, angle, screen.get_size(), respawns)
    paused = False
    running = True

    while running:
        dt = pg_clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                animator.resize(float(event.w), float(event.h))
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    paused = not paused
                elif event.key == pygame.K_m:
                    if kind is MotionModelKind.INCREMENTAL:
                        kind = MotionModelKind.ANALYTIC
                    else:
                        kind = MotionModelKind.INCREMENTAL
                    respawns[0] = 0
                    animator = build_animator(kind, angle, screen.get_size(), respawns)
                elif event.key in (pygame.K_LEFT, pygame.K_RIGHT):
                    step = ANGLE_STEP if event.key == pygame.K_RIGHT else -ANGLE_STEP
                    angle = (angle + step) % 360.0
                    respawns[0] = 0
                    animator = build_animator(kind, angle, screen.get_size(), respawns)

        # --- Update ---
        if not paused:
            animator.step(dt)

        # --- Draw ---
        screen.fill(BG_COLOR)

        visible = 0
        for sid, (frame, vis) in animator.stage.query(SpriteFrame, Visual):
            if not frame.visible:
                continue
            visible += 1
            pygame.draw.circle(screen, vis.color, (int(frame.x), int(frame.y)), max(int(vis.radius), 1))

        # --- HUD ---
        fps_val = pg_clock.get_fps()
        pause_str = "  [PAUSED]" if paused else ""

        hud_lines = [
            f"Model: {kind.value}   Angle: {angle:.0f}   Visible: {visible}/{len(animator.stage)}"
            f"   Respawns: {respawns[0]}   FPS: {fps_val:.0f}{pause_str}",
            "M=Model  Left/Right=Angle  Space=Pause  Esc=Quit  (resize the window freely)",
        ]
        for i, line in enumerate(hud_lines):
            surf = font.render(line, True, HUD_COLOR)
            screen.blit(surf, (10, 8 + i * 20))

        pygame.display.flip()

    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
