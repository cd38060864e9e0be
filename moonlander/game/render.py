# moonlander/game/render.py
"""
Pygame drawing for a SimState. Everything here is read-only with respect to
the simulation: it may sample the terrain but never changes game state.
"""
from __future__ import annotations
import math
import random
from typing import Dict, List, Tuple
import pygame
from .config import (
    WIDTH, HEIGHT, FUEL_MAX,
    COLOR_BG, COLOR_FG, COLOR_STAR, COLOR_TERRAIN, COLOR_PAD, COLOR_LANDER,
    COLOR_LANDED, COLOR_DANGER, COLOR_FUEL_OK, COLOR_FUEL_LOW, COLOR_FUEL_EMPTY,
    COLOR_HINT, COLOR_BUTTON, COLOR_BUTTON_EDGE
)
from .lander import Lander, altitude
from .landing import approach_is_safe
from .sim import SimState

BODY_W = 10
BODY_H = 35
NOSE_H = 8
FIN_W = 5
LEG_DEPLOY_DISTANCE = 60
LEG_RETRACTED = 5
LEG_EXTENDED = 15
LEG_ANGLE = math.pi / 4


def load_fonts() -> Dict[str, pygame.font.Font]:
    """Call after pygame.init()."""
    return {
        "hud": pygame.font.SysFont("arial", 14),
        "hint": pygame.font.SysFont("arial", 12),
        "info": pygame.font.SysFont("arial", 18),
        "banner": pygame.font.SysFont("arialblack", 40),
    }


def restart_button_rect() -> pygame.Rect:
    w, h = 180, 44
    return pygame.Rect((WIDTH - w) // 2, HEIGHT // 2 + 50, w, h)


def leg_length(distance: float) -> float:
    """Landing legs extend linearly over the last LEG_DEPLOY_DISTANCE px."""
    if 0 <= distance < LEG_DEPLOY_DISTANCE:
        length = LEG_RETRACTED + (LEG_EXTENDED - LEG_RETRACTED) * (1 - distance / LEG_DEPLOY_DISTANCE)
    elif distance < 0:
        length = LEG_EXTENDED
    else:
        length = LEG_RETRACTED
    return length if math.isfinite(length) else LEG_RETRACTED


def fuel_color(fuel: float) -> Tuple[int, int, int]:
    if fuel < 30:
        return COLOR_FUEL_EMPTY
    if fuel < 75:
        return COLOR_FUEL_LOW
    return COLOR_FUEL_OK


def draw_frame(surf: pygame.Surface, sim: SimState, fonts: Dict[str, pygame.font.Font]):
    surf.fill(COLOR_BG)
    for star in sim.stars:
        surf.fill(COLOR_STAR, (int(star.x), int(star.y), 1, 1))

    _draw_terrain(surf, sim)
    if sim.landed:
        _draw_flag(surf, sim)
    _draw_particles(surf, sim)

    distance = altitude(sim.lander, sim.terrain)
    if not sim.game_over or sim.landed:
        _draw_lander(surf, sim, distance)

    _draw_hud(surf, sim, fonts, distance)


def _draw_terrain(surf: pygame.Surface, sim: SimState):
    pts = sim.terrain.points
    if len(pts) >= 2:
        poly = [(p.x, p.y) for p in pts] + [(pts[-1].x, HEIGHT), (pts[0].x, HEIGHT)]
        pygame.draw.polygon(surf, COLOR_TERRAIN, poly)
    for p1, p2 in sim.terrain.landing_segments():
        pygame.draw.line(surf, COLOR_PAD, (p1.x, p1.y + 2), (p2.x, p2.y + 2), 2)


def _draw_flag(surf: pygame.Surface, sim: SimState):
    flag_w, pole_h, flag_h = 30, 40, 21
    flag_x = max(10, min(sim.lander.x + 20, WIDTH - flag_w - 5))
    ground = sim.terrain.height_at(flag_x)
    top = ground - pole_h

    pygame.draw.line(surf, (169, 169, 169), (flag_x, ground), (flag_x, top), 2)
    stripe_h = flag_h / 7
    for i in range(7):
        color = (255, 0, 0) if i % 2 == 0 else (255, 255, 255)
        surf.fill(color, (int(flag_x), int(top + i * stripe_h), flag_w, int(math.ceil(stripe_h))))
    canton_w, canton_h = flag_w * 0.4, stripe_h * 4
    surf.fill((0, 0, 255), (int(flag_x), int(top), int(canton_w), int(canton_h)))
    for fx, fy in ((0.2, 0.2), (0.6, 0.2), (0.4, 0.5), (0.2, 0.8), (0.6, 0.8)):
        surf.fill(COLOR_FG, (int(flag_x + canton_w * fx), int(top + canton_h * fy), 1, 1))


def _draw_particles(surf: pygame.Surface, sim: SimState):
    for p in sim.particles:
        size = max(1, int(p.size))
        dot = pygame.Surface((size * 2, size * 2), pygame.SRCALPHA)
        color = (255, random.randint(100, 254), 0, int(255 * p.alpha))
        pygame.draw.circle(dot, color, (size, size), size)
        surf.blit(dot, (int(p.x) - size, int(p.y) - size))


def _lander_color(sim: SimState) -> Tuple[int, int, int]:
    if sim.landed:
        return COLOR_LANDED
    if approach_is_safe(sim.lander, sim.terrain, sim.state):
        pulse = abs(math.sin(pygame.time.get_ticks() / 200))
        return (192, int(180 + 75 * pulse), 192)
    return COLOR_LANDER


def _to_screen(lander: Lander, pts: List[Tuple[float, float]]) -> List[Tuple[float, float]]:
    c, s = math.cos(lander.angle), math.sin(lander.angle)
    return [(lander.x + lx * c - ly * s, lander.y + lx * s + ly * c) for lx, ly in pts]


def _draw_lander(surf: pygame.Surface, sim: SimState, distance: float):
    lander = sim.lander
    color = _lander_color(sim)
    hw, hh = BODY_W / 2, BODY_H / 2

    body = [(-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)]
    nose = [(0, -hh - NOSE_H), (-hw, -hh), (hw, -hh)]
    fin_base = hh - 5
    left_fin = [(-hw, fin_base), (-hw - FIN_W, hh), (-hw, hh)]
    right_fin = [(hw, fin_base), (hw + FIN_W, hh), (hw, hh)]
    for shape in (body, nose, left_fin, right_fin):
        pygame.draw.polygon(surf, color, _to_screen(lander, shape))

    length = leg_length(distance)
    dx, dy = length * math.cos(LEG_ANGLE), length * math.sin(LEG_ANGLE)
    for sign in (-1, 1):
        a, b = _to_screen(lander, [(sign * hw, hh), (sign * (hw + dx), hh + dy)])
        pygame.draw.line(surf, color, a, b, 2)

    if lander.engine_on and not sim.game_over:
        flame_h = 15 + random.random() * 15
        flame = [(-hw * 0.8, hh), (hw * 0.8, hh), (0, hh + flame_h)]
        inner = [(-hw * 0.4, hh), (hw * 0.4, hh), (0, hh + flame_h * 0.5)]
        pygame.draw.polygon(surf, (255, 165, 0), _to_screen(lander, flame))
        pygame.draw.polygon(surf, (255, 255, 0), _to_screen(lander, inner))


def _draw_hud(surf: pygame.Surface, sim: SimState, fonts: Dict[str, pygame.font.Font], distance: float):
    lander = sim.lander
    hud = fonts["hud"]
    surf.blit(hud.render(f"Seed: {sim.seed}", True, COLOR_HINT), (10, 10))

    # fuel bar
    bar_x, bar_y, bar_w, bar_h = 10, 45, 100, 10
    pygame.draw.rect(surf, COLOR_FG, (bar_x, bar_y, bar_w, bar_h), 1)
    fill_w = int(bar_w * max(0.0, lander.fuel / FUEL_MAX))
    if fill_w > 0:
        surf.fill(fuel_color(lander.fuel), (bar_x, bar_y, fill_w, bar_h))
    surf.blit(hud.render(f"Fuel: {lander.fuel:.0f}", True, COLOR_FG), (bar_x + bar_w + 5, bar_y - 3))

    lines = [
        f"Vert Speed: {lander.vy:.1f}",
        f"Horiz Speed: {lander.vx:.1f}",
        f"Angle: {math.degrees(lander.angle):.1f}°",
        f"Altitude: {max(0.0, distance):.0f}",
    ]
    for i, text in enumerate(lines):
        surf.blit(hud.render(text, True, COLOR_FG), (10, 65 + i * 20))

    if not sim.game_over:
        hint = fonts["hint"]
        for i, text in enumerate(("Controls:", "↑ Thrust", "← Rotate Left", "→ Rotate Right")):
            label = hint.render(text, True, COLOR_HINT)
            surf.blit(label, (WIDTH - 10 - label.get_width(), 20 + i * 15))
        return

    message = "LANDING SUCCESSFUL!" if sim.landed else "CRASHED!"
    banner = fonts["banner"].render(message, True, COLOR_LANDED if sim.landed else COLOR_DANGER)
    surf.blit(banner, (WIDTH // 2 - banner.get_width() // 2, HEIGHT // 2 - 20 - banner.get_height() // 2))
    if not sim.landed:
        info = fonts["info"].render("Better luck next time!", True, COLOR_FG)
        surf.blit(info, (WIDTH // 2 - info.get_width() // 2, HEIGHT // 2 + 15))

    btn = restart_button_rect()
    pygame.draw.rect(surf, COLOR_BUTTON, btn, border_radius=10)
    pygame.draw.rect(surf, COLOR_BUTTON_EDGE, btn, width=2, border_radius=10)
    label = fonts["info"].render("Restart (R)", True, COLOR_FG)
    surf.blit(label, (btn.centerx - label.get_width() // 2, btn.centery - label.get_height() // 2))
