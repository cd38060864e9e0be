"""Touchdown qualification and the approach cue."""
from __future__ import annotations

import pytest

from moonlander.game.lander import Lander
from moonlander.game.landing import LandingState, approach_is_safe, qualify_landing
from moonlander.game.terrain import Terrain


@pytest.fixture
def flat_terrain() -> Terrain:
    return Terrain([(x, 550) for x in range(0, 801, 10)])


@pytest.fixture
def rough_terrain() -> Terrain:
    return Terrain([(x, 500 + (x // 10 % 2) * 20) for x in range(0, 801, 10)])


def contact(angle: float = 0.0, vx: float = 0.0, vy: float = 1.0) -> Lander:
    return Lander(x=400.0, y=530.0, vx=vx, vy=vy, angle=angle)


def test_boundary_just_inside_limits_lands(flat_terrain: Terrain) -> None:
    report = qualify_landing(contact(angle=0.69, vx=3.9, vy=3.4), flat_terrain)
    assert report.is_flat and report.is_upright and report.is_slow
    assert report.qualified
    assert report.reasons() == []


def test_boundary_angle_just_outside_crashes(flat_terrain: Terrain) -> None:
    report = qualify_landing(contact(angle=0.71, vx=3.9, vy=3.4), flat_terrain)
    assert not report.is_upright
    assert not report.qualified
    reasons = report.reasons()
    assert len(reasons) == 1 and reasons[0].startswith("Angle too high")


def test_negative_angle_is_symmetric(flat_terrain: Terrain) -> None:
    assert qualify_landing(contact(angle=-0.69), flat_terrain).qualified
    assert not qualify_landing(contact(angle=-0.71), flat_terrain).qualified


@pytest.mark.parametrize("vx, vy, expected", [
    (0.0, 3.5, "Vertical speed too high"),
    (0.0, -3.5, "Vertical speed too high"),
    (4.0, 1.0, "Horizontal speed too high"),
    (-4.0, 1.0, "Horizontal speed too high"),
])
def test_speed_limits_are_strict(flat_terrain: Terrain, vx: float, vy: float, expected: str) -> None:
    report = qualify_landing(contact(vx=vx, vy=vy), flat_terrain)
    assert not report.is_slow
    assert not report.qualified
    assert any(r.startswith(expected) for r in report.reasons())


def test_rough_ground_crashes(rough_terrain: Terrain) -> None:
    report = qualify_landing(contact(), rough_terrain)
    assert not report.is_flat
    assert report.flatness.diff == pytest.approx(20.0)
    assert report.reasons()[0].startswith("Not flat enough")


def test_every_failure_is_reported(rough_terrain: Terrain) -> None:
    report = qualify_landing(contact(angle=1.0, vx=5.0, vy=5.0), rough_terrain)
    assert len(report.reasons()) == 4


def test_approach_cue(flat_terrain: Terrain) -> None:
    hovering = Lander(x=400.0, y=500.0, vy=1.0)      # 30 px above the ground
    assert approach_is_safe(hovering, flat_terrain, LandingState.FLYING)
    assert not approach_is_safe(hovering, flat_terrain, LandingState.LANDED)

    too_fast = Lander(x=400.0, y=500.0, vy=2.6)
    assert not approach_is_safe(too_fast, flat_terrain, LandingState.FLYING)

    tilted = Lander(x=400.0, y=500.0, angle=0.5)
    assert not approach_is_safe(tilted, flat_terrain, LandingState.FLYING)

    high = Lander(x=400.0, y=100.0)
    assert not approach_is_safe(high, flat_terrain, LandingState.FLYING)


def test_approach_cue_needs_flat_ground(rough_terrain: Terrain) -> None:
    hovering = Lander(x=400.0, y=450.0)
    assert not approach_is_safe(hovering, rough_terrain, LandingState.FLYING)
