"""Terrain generation, height queries and the flatness check."""
from __future__ import annotations

import logging
import math
import random

import pytest

from moonlander.game.config import HEIGHT, WIDTH, TERRAIN_MIN_Y, TERRAIN_MAX_Y
from moonlander.game.terrain import Terrain, TerrainPoint, generate_terrain, splice_flat_spot

SEEDS = range(300)


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 12345])
def test_same_seed_same_terrain(seed: int) -> None:
    a = generate_terrain(random.Random(seed))
    b = generate_terrain(random.Random(seed))
    assert a.points == b.points


def test_generated_terrain_spans_screen_with_increasing_x() -> None:
    for seed in SEEDS:
        terrain = generate_terrain(random.Random(seed))
        xs = [p.x for p in terrain]
        assert len(xs) >= 2
        assert xs[0] <= 0, f"seed {seed}: terrain starts at {xs[0]}"
        assert xs[-1] == WIDTH, f"seed {seed}: terrain ends at {xs[-1]}"
        assert all(b > a for a, b in zip(xs, xs[1:])), f"seed {seed}: x not strictly increasing"


def test_generated_heights_stay_in_bounds() -> None:
    for seed in SEEDS:
        terrain = generate_terrain(random.Random(seed))
        assert all(TERRAIN_MIN_Y <= p.y <= TERRAIN_MAX_Y for p in terrain), f"seed {seed}"


def test_generated_terrain_has_two_landing_zones() -> None:
    for seed in SEEDS:
        terrain = generate_terrain(random.Random(seed))
        runs = terrain.flat_runs(min_width=40)
        assert len(runs) >= 2, f"seed {seed}: only {len(runs)} flat run(s) of >= 40px"
        # every landing zone passes the flatness check at its centre
        for run in runs:
            assert terrain.flatness(run.center).is_flat, f"seed {seed}: {run}"


def test_splice_flat_spot_inserts_level_run_mid_screen() -> None:
    # zig-zag terrain with no flat run at all
    points = [TerrainPoint(x, 500.0 + (x // 10 % 2) * 20.0) for x in range(0, WIDTH + 1, 10)]
    assert Terrain(points).flat_runs() == []

    spliced = Terrain(splice_flat_spot(points, random.Random(3)))
    xs = [p.x for p in spliced]
    assert all(b > a for a, b in zip(xs, xs[1:]))
    assert len(spliced) == len(points)

    runs = spliced.flat_runs(min_width=40)
    assert len(runs) == 1
    run = runs[0]
    assert (run.x_start, run.x_end) == (350, 400)
    assert 530.0 <= run.y < 570.0
    # points outside the spliced range are untouched
    assert spliced.points[0] == points[0]
    assert spliced.points[-1] == points[-1]


def test_splice_flat_spot_leaves_short_terrain_alone() -> None:
    points = [TerrainPoint(0, 500.0), TerrainPoint(300, 520.0)]
    assert splice_flat_spot(points, random.Random(0)) == points


def test_height_query_hits_points_exactly() -> None:
    terrain = generate_terrain(random.Random(99))
    for p in terrain.points[:-1]:
        assert terrain.height_at(p.x) == p.y
    assert terrain.height_at(WIDTH) == terrain.points[-1].y


def test_height_query_is_linear_within_segment() -> None:
    terrain = Terrain([(0, 500), (10, 520), (20, 480)])
    assert terrain.height_at(2.5) == pytest.approx(505.0)
    assert terrain.height_at(7.5) == pytest.approx(515.0)
    assert terrain.height_at(15.0) == pytest.approx(500.0)
    a, b = 11.0, 19.0
    assert terrain.height_at(a) + terrain.height_at(b) == pytest.approx(2 * terrain.height_at((a + b) / 2))


def test_height_query_outside_range_uses_end_points() -> None:
    terrain = Terrain([(10, 500), (20, 520)])
    assert terrain.height_at(-50) == 500
    assert terrain.height_at(900) == 520


def test_height_query_skips_out_of_order_segments() -> None:
    terrain = Terrain([(0, 500), (20, 520), (10, 540), (30, 560)])
    assert terrain.height_at(15) == pytest.approx(515.0)
    assert terrain.height_at(25) == pytest.approx(555.0)


def test_degenerate_terrain_falls_back_to_canvas_bottom(caplog) -> None:
    with caplog.at_level(logging.WARNING):
        assert Terrain([(0, 500)]).height_at(5) == HEIGHT
        assert Terrain([]).height_at(5) == HEIGHT
    assert "canvas bottom" in caplog.text


def test_failed_lookup_falls_back_to_last_point(caplog) -> None:
    terrain = Terrain([(0, 500), (10, 520)])
    with caplog.at_level(logging.WARNING):
        assert terrain.height_at(math.nan) == 520
    assert "lookup failed" in caplog.text


def test_flatness_on_flat_segment() -> None:
    terrain = Terrain([(90, 520), (100, 550), (110, 550), (120, 550), (130, 550), (140, 520)])
    is_flat, diff = terrain.flatness(115)
    assert is_flat
    assert diff == pytest.approx(0.0)


def test_flatness_rejects_step_in_window() -> None:
    terrain = Terrain([(90, 550), (100, 550), (110, 550), (120, 500), (130, 500)])
    is_flat, diff = terrain.flatness(110)
    assert not is_flat
    assert diff == pytest.approx(50.0)


def test_flatness_counts_window_edges() -> None:
    # level points inside the window, slope just beyond its edges
    terrain = Terrain([(80, 500), (100, 550), (110, 550), (120, 550), (140, 500)])
    is_flat, diff = terrain.flatness(110)
    assert not is_flat
    assert diff == pytest.approx(12.5)


def test_flatness_without_points_in_window_is_not_flat() -> None:
    terrain = Terrain([(0, 550), (WIDTH, 550)])
    is_flat, diff = terrain.flatness(400)
    assert not is_flat
    assert math.isinf(diff)


def test_flat_runs_are_maximal() -> None:
    terrain = Terrain([(0, 500), (10, 520), (20, 520), (30, 520), (40, 510), (50, 510)])
    runs = terrain.flat_runs()
    assert [(r.x_start, r.x_end, r.y) for r in runs] == [(10, 30, 520), (40, 50, 510)]
    assert terrain.flat_runs(min_width=15) == runs[:1]
    assert runs[0].width == 20
    assert runs[0].center == 20


def test_landing_segments_follow_flat_zones() -> None:
    pts = [(x, 550) for x in range(100, 160, 10)]
    terrain = Terrain([(0, 500), (90, 520)] + pts + [(170, 500), (800, 520)])
    segs = terrain.landing_segments()
    assert segs
    assert all(p1.y == p2.y == 550 for p1, p2 in segs)
    assert all(100 <= p1.x and p2.x <= 150 for p1, p2 in segs)
