"""Tests for the incremental move / cull / respawn step."""
from __future__ import annotations

import math

import pytest

from drift_parallax import vec
from drift_parallax.bounds import (
    canvas_rect,
    compute_spawn_line,
    contains,
    pad_rect,
    sample_spawn_point,
    sprite_radius,
    support_distance,
)
from drift_parallax.components import MotionConfig, SpawnConfig
from drift_parallax.rng import lazy_rng, seed_key, seeded_rng
from drift_parallax.stepper import init_sprite_position, step_sprite


def _never() -> float:
    raise AssertionError("rng drawn without a respawn")


SPAWN = SpawnConfig(
    canvas_width=800.0,
    canvas_height=600.0,
    sprite_width_px=40.0,
    sprite_height_px=40.0,
)


class TestStepInside:
    @pytest.mark.parametrize("angle", [0.0, 45.0, 100.0, 190.0, 275.0])
    @pytest.mark.parametrize("dt", [0.0, 1 / 60, 0.25])
    def test_displacement_is_dir_speed_dt(self, angle: float, dt: float) -> None:
        d = vec.from_angle(angle)
        motion = MotionConfig(dir=d, dt=dt, speed=100.0)
        result = step_sprite((400.0, 300.0), motion, SPAWN, _never)
        assert not result.respawned
        moved = vec.sub(result.position, (400.0, 300.0))
        expected = vec.mul(d, 100.0 * dt)
        assert moved[0] == pytest.approx(expected[0], abs=1e-9)
        assert moved[1] == pytest.approx(expected[1], abs=1e-9)

    def test_zero_dt_holds_position(self) -> None:
        motion = MotionConfig(dir=(1.0, 0.0), dt=0.0, speed=100.0)
        assert step_sprite((10.0, 20.0), motion, SPAWN, _never).position == (10.0, 20.0)

    def test_negative_dt_and_speed_clamped(self) -> None:
        back_in_time = MotionConfig(dir=(1.0, 0.0), dt=-1.0, speed=100.0)
        backwards = MotionConfig(dir=(1.0, 0.0), dt=1.0, speed=-100.0)
        assert step_sprite((10.0, 20.0), back_in_time, SPAWN, _never).position == (10.0, 20.0)
        assert step_sprite((10.0, 20.0), backwards, SPAWN, _never).position == (10.0, 20.0)

    def test_zero_direction_moves_right(self) -> None:
        motion = MotionConfig(dir=(0.0, 0.0), dt=1.0, speed=10.0)
        assert step_sprite((100.0, 100.0), motion, SPAWN, _never).position == (110.0, 100.0)

    def test_stays_while_only_partly_offscreen(self) -> None:
        # Past the canvas edge but still inside the padded rect.
        motion = MotionConfig(dir=(1.0, 0.0), dt=1.0, speed=10.0)
        result = step_sprite((800.0, 300.0), motion, SPAWN, _never)
        assert result.position == (810.0, 300.0)
        assert not result.respawned


class TestEmptyCanvas:
    @pytest.mark.parametrize("size", [(0.0, 600.0), (800.0, 0.0), (-5.0, -5.0)])
    def test_noop_frame(self, size: tuple[float, float]) -> None:
        spawn = SpawnConfig(size[0], size[1], 40.0, 40.0)
        motion = MotionConfig(dir=(1.0, 0.0), dt=1.0, speed=10.0)
        result = step_sprite((5.0, 5.0), motion, spawn, _never)
        assert result.position == (5.0, 5.0)
        assert not result.respawned


class TestRespawn:
    def test_respawn_on_spawn_line(self) -> None:
        d = vec.from_angle(30.0)
        motion = MotionConfig(dir=d, dt=1.0, speed=5000.0)
        result = step_sprite((400.0, 300.0), motion, SPAWN, seeded_rng("k"))
        assert result.respawned

        radius = sprite_radius(40.0, 40.0, SPAWN.safety_margin_px)
        padded = pad_rect(canvas_rect(800.0, 600.0), radius)
        line = compute_spawn_line(padded, d, SPAWN.spawn_backoff_px)
        offset = vec.sub(result.position, line.base)
        assert math.isclose(vec.dot(offset, d), 0.0, abs_tol=1e-9)
        assert not contains(padded, result.position)

    def test_respawn_draws_from_given_generator(self) -> None:
        motion = MotionConfig(dir=(0.0, 1.0), dt=1.0, speed=5000.0)
        a = step_sprite((400.0, 300.0), motion, SPAWN, seeded_rng("same"))
        b = step_sprite((10.0, 10.0), motion, SPAWN, seeded_rng("same"))
        assert a.position == b.position

    def test_respawned_sprite_reenters_next_step(self) -> None:
        motion = MotionConfig(dir=(-1.0, 0.0), dt=1.0, speed=5000.0)
        respawn = step_sprite((400.0, 300.0), motion, SPAWN, seeded_rng("k"))
        slow = MotionConfig(dir=(-1.0, 0.0), dt=1 / 60, speed=100.0)
        following = step_sprite(respawn.position, slow, SPAWN, _never)
        assert not following.respawned


class TestStationary:
    def test_zero_speed_on_spawn_line_not_recycled(self) -> None:
        d = vec.from_angle(20.0)
        radius = sprite_radius(40.0, 40.0, SPAWN.safety_margin_px)
        padded = pad_rect(canvas_rect(800.0, 600.0), radius)
        start = sample_spawn_point(
            seeded_rng("still"), compute_spawn_line(padded, d, SPAWN.spawn_backoff_px)
        )
        assert not contains(padded, start)

        motion = MotionConfig(dir=d, dt=1 / 60, speed=0.0)
        for _ in range(10):
            result = step_sprite(start, motion, SPAWN, _never)
            assert not result.respawned
            assert result.position == start

    def test_zero_dt_far_outside_not_recycled(self) -> None:
        motion = MotionConfig(dir=(1.0, 0.0), dt=0.0, speed=100.0)
        result = step_sprite((5000.0, 300.0), motion, SPAWN, _never)
        assert not result.respawned
        assert result.position == (5000.0, 300.0)


class TestApproach:
    @pytest.mark.parametrize("angle", [20.0, 45.0, 135.0, 300.0])
    @pytest.mark.parametrize("draw", [0.02, 0.5, 0.97])
    def test_spawn_point_travels_through_before_recycling(self, angle: float, draw: float) -> None:
        d = vec.from_angle(angle)
        radius = sprite_radius(40.0, 40.0, SPAWN.safety_margin_px)
        padded = pad_rect(canvas_rect(800.0, 600.0), radius)
        position = sample_spawn_point(
            lambda: draw, compute_spawn_line(padded, d, SPAWN.spawn_backoff_px)
        )
        motion = MotionConfig(dir=d, dt=1 / 60, speed=300.0)

        entered = False
        for _ in range(1000):
            result = step_sprite(position, motion, SPAWN, lambda: 0.5)
            if result.respawned:
                break
            position = result.position
            entered = entered or contains(padded, position)
        assert result.respawned
        assert entered

    def test_first_step_off_spawn_line_keeps_travelling(self) -> None:
        d = vec.from_angle(45.0)
        radius = sprite_radius(40.0, 40.0, SPAWN.safety_margin_px)
        padded = pad_rect(canvas_rect(800.0, 600.0), radius)
        start = sample_spawn_point(
            lambda: 0.95, compute_spawn_line(padded, d, SPAWN.spawn_backoff_px)
        )
        motion = MotionConfig(dir=d, dt=1 / 60, speed=100.0)
        result = step_sprite(start, motion, SPAWN, _never)
        assert not result.respawned
        assert not contains(padded, result.position)


class TestEndToEnd:
    def test_800x600_rightward_recycle(self) -> None:
        """Travel right at 100 px/s until leaving the padded canvas, then re-enter left."""
        radius = sprite_radius(40.0, 40.0, SPAWN.safety_margin_px)
        motion = MotionConfig(dir=(1.0, 0.0), dt=1 / 60, speed=100.0)
        position = (400.0, 300.0)
        cycle = 0
        steps = 0
        while True:
            key = seed_key("scene-42", "parallax", 0, 5, cycle + 1)
            result = step_sprite(position, motion, SPAWN, lazy_rng(key))
            steps += 1
            if result.respawned:
                cycle += 1
                break
            assert result.position[0] <= 800.0 + radius
            position = result.position
            assert steps < 1000

        # Last committed position was within one step of the padded right edge.
        assert position[0] > 800.0 + radius - 100.0 / 60
        x, y = result.position
        assert x == pytest.approx(-radius - SPAWN.spawn_backoff_px)
        assert -radius <= y <= 600.0 + radius

        expected_draw = seeded_rng(seed_key("scene-42", "parallax", 0, 5, 1))()
        assert y == pytest.approx(300.0 + (expected_draw * 2 - 1) * (300.0 + radius))
        assert cycle == 1

    def test_replay_is_bit_identical(self) -> None:
        def run() -> list[tuple[float, float]]:
            motion = MotionConfig(dir=vec.from_angle(217.0), dt=1 / 60, speed=900.0)
            position = (400.0, 300.0)
            cycle = 0
            respawns = []
            for _ in range(600):
                key = seed_key("replay", "parallax", 2, 9, cycle + 1)
                result = step_sprite(position, motion, SPAWN, lazy_rng(key))
                position = result.position
                if result.respawned:
                    cycle += 1
                    respawns.append(position)
            return respawns

        first = run()
        assert len(first) >= 3
        assert first == run()


class TestInitPlacement:
    @pytest.mark.parametrize("angle", [0.0, 70.0, 180.0, 250.0])
    def test_lies_along_future_path(self, angle: float) -> None:
        d = vec.from_angle(angle)
        radius = sprite_radius(40.0, 40.0, 2.0)
        padded = pad_rect(canvas_rect(800.0, 600.0), radius)
        hx, hy = padded.half_extents
        line = compute_spawn_line(padded, d, 1.0)
        crossing = 2 * support_distance(d, hx, hy) + 2.0

        for sprite_index in range(50):
            rng = seeded_rng(seed_key("init", "parallax-init", 0, sprite_index, 0))
            p = init_sprite_position(800.0, 600.0, 40.0, rng, d)
            offset = vec.sub(p, line.base)
            along = vec.dot(offset, d)
            across = vec.dot(offset, line.perp_unit)
            assert -1e-9 <= along < crossing
            assert abs(across) <= line.half_span + 1e-9

    def test_spread_along_path(self) -> None:
        positions = [
            init_sprite_position(
                800.0, 600.0, 40.0, seeded_rng(f"spread-{i}"), (1.0, 0.0)
            )[0]
            for i in range(200)
        ]
        on_canvas = [x for x in positions if 0.0 <= x <= 800.0]
        # Not bunched on the spawn edge: most start somewhere on screen.
        assert len(on_canvas) > 150

    def test_draw_order_spawn_then_progress(self) -> None:
        draws = iter([0.5, 0.0])
        p = init_sprite_position(800.0, 600.0, 40.0, lambda: next(draws), (1.0, 0.0))
        radius = sprite_radius(40.0, 40.0, 2.0)
        assert p[0] == pytest.approx(-radius - 1.0)
        assert p[1] == pytest.approx(300.0)

    def test_non_square_sprite_pads_by_both_sides(self) -> None:
        draws = iter([0.5, 0.0])
        p = init_sprite_position(
            800.0, 600.0, 10.0, lambda: next(draws), (0.0, 1.0), sprite_height=200.0
        )
        radius = sprite_radius(10.0, 200.0, 2.0)
        assert p[0] == pytest.approx(400.0)
        assert p[1] == pytest.approx(-radius - 1.0)
