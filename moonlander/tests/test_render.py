"""Renderer helpers and headless frame drawing."""
from __future__ import annotations

import math

import pygame
import pytest

from moonlander.game.config import COLOR_BG, COLOR_FUEL_EMPTY, COLOR_FUEL_LOW, COLOR_FUEL_OK, HEIGHT, WIDTH
from moonlander.game.lander import Lander
from moonlander.game.render import draw_frame, fuel_color, leg_length, load_fonts, restart_button_rect
from moonlander.game.sim import new_sim, touchdown
from moonlander.game.terrain import Terrain


@pytest.fixture(scope="module")
def fonts():
    pygame.init()
    yield load_fonts()
    pygame.quit()


def test_leg_length_deploys_near_ground() -> None:
    assert leg_length(100.0) == 5
    assert leg_length(60.0) == 5
    assert leg_length(30.0) == pytest.approx(10.0)
    assert leg_length(0.0) == pytest.approx(15.0)
    assert leg_length(-3.0) == 15
    assert leg_length(math.nan) == 5


def test_fuel_color_thresholds() -> None:
    assert fuel_color(150.0) == COLOR_FUEL_OK
    assert fuel_color(75.0) == COLOR_FUEL_OK
    assert fuel_color(74.9) == COLOR_FUEL_LOW
    assert fuel_color(29.9) == COLOR_FUEL_EMPTY


def test_restart_button_is_centered() -> None:
    rect = restart_button_rect()
    assert rect.centerx == WIDTH // 2
    assert rect.top > HEIGHT // 2


def test_draw_frame_flying(fonts) -> None:
    surf = pygame.Surface((WIDTH, HEIGHT))
    sim = new_sim(12)
    sim.lander.thrusting = True
    draw_frame(surf, sim, fonts)
    # terrain fills the bottom-left corner
    assert surf.get_at((0, HEIGHT - 1))[:3] != COLOR_BG


def test_draw_frame_after_crash_and_landing(fonts) -> None:
    surf = pygame.Surface((WIDTH, HEIGHT))

    crashed = new_sim(3)
    crashed.terrain = Terrain([(x, 550) for x in range(0, 801, 10)])
    crashed.lander = Lander(x=400.0, y=530.0, vy=9.0)
    touchdown(crashed)
    draw_frame(surf, crashed, fonts)

    landed = new_sim(3)
    landed.terrain = Terrain([(x, 550) for x in range(0, 801, 10)])
    landed.lander = Lander(x=400.0, y=530.0, vy=1.0)
    touchdown(landed)
    assert landed.landed
    draw_frame(surf, landed, fonts)
