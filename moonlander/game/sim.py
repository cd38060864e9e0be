# moonlander/game/sim.py
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass, field
from typing import List, Optional
from .config import (
    MAX_DT, Y_CEILING, CEILING_EXPLOSION_Y, LANDER_HALF_H,
    MAX_LANDING_ANGLE, MAX_LANDING_VY, MAX_LANDING_VX
)
from .lander import Lander
from .landing import LandingReport, LandingState, qualify_landing
from .particles import ExplosionParticle, spawn_explosion, update_particles
from .stars import Star, make_stars, update_stars
from .terrain import Terrain, generate_terrain

LOGGER = logging.getLogger(__name__)


@dataclass
class SimState:
    """
    Everything one run of the game owns. The frame driver passes it to
    step_sim(); the renderer only reads it.
    """
    seed: int
    rng: random.Random              # terrain, then debris
    star_rng: random.Random         # background only
    terrain: Terrain
    lander: Lander
    stars: List[Star]
    particles: List[ExplosionParticle] = field(default_factory=list)
    state: LandingState = LandingState.FLYING
    last_report: Optional[LandingReport] = None

    @property
    def game_over(self) -> bool:
        return self.state is not LandingState.FLYING

    @property
    def landed(self) -> bool:
        return self.state is LandingState.LANDED


def new_sim(seed: Optional[int] = None) -> SimState:
    """Build a fresh run (also used for restart). seed=None picks a random one."""
    if seed is None:
        seed = random.randrange(0, 2**32 - 1)
    rng = random.Random(seed)
    terrain = generate_terrain(rng)
    star_rng = random.Random(rng.getrandbits(32))
    stars = make_stars(star_rng)
    return SimState(seed=seed, rng=rng, star_rng=star_rng, terrain=terrain,
                    lander=Lander.spawn(), stars=stars)


def clamp_dt(dt: float) -> float:
    return min(max(dt, 0.0), MAX_DT)


def step_sim(sim: SimState, dt: float) -> float:
    """
    Advance one frame: background, lander (only while flying) and debris,
    which keeps animating after the game is over. Returns the dt used.
    """
    dt = clamp_dt(dt)
    update_stars(sim.stars, dt, sim.star_rng)
    if not sim.game_over:
        update_lander(sim, dt)
    sim.particles = update_particles(sim.particles, dt)
    return dt


def update_lander(sim: SimState, dt: float):
    """Integrate the lander, then resolve leaving the top or touching the ground."""
    if sim.game_over:
        return
    lander = sim.lander
    lander.update_physics(dt)

    if lander.y < Y_CEILING:
        LOGGER.info("CRASH! Went off the top of the screen.")
        _finish(sim, LandingState.CRASHED)
        spawn_explosion(sim.particles, lander.x, CEILING_EXPLOSION_Y, sim.rng)
        return

    terrain_y = sim.terrain.height_at(lander.x)
    if lander.bottom > terrain_y:
        lander.y = terrain_y - LANDER_HALF_H
        touchdown(sim)


def touchdown(sim: SimState) -> LandingState:
    """Qualify the current contact and move to LANDED or CRASHED."""
    lander = sim.lander
    report = qualify_landing(lander, sim.terrain)
    sim.last_report = report

    LOGGER.info("Landing attempt: isFlat=%s (diff %.2f), isUpright=%s (angle %.1f deg), "
                "isSlow=%s (vy %.2f, vx %.2f)",
                report.is_flat, report.flatness.diff, report.is_upright,
                math.degrees(report.angle), report.is_slow, report.vy, report.vx)
    LOGGER.info("Landing limits: max angle %.1f deg, max vy %.2f, max vx %.2f",
                math.degrees(MAX_LANDING_ANGLE), MAX_LANDING_VY, MAX_LANDING_VX)

    if report.qualified:
        LOGGER.info("SUCCESSFUL LANDING!")
        lander.angle = 0.0
        _finish(sim, LandingState.LANDED)
    else:
        LOGGER.info("CRASH!")
        for reason in report.reasons():
            LOGGER.info(" -> Reason: %s", reason)
        spawn_explosion(sim.particles, lander.x, lander.y, sim.rng)
        _finish(sim, LandingState.CRASHED)
    return sim.state


def _finish(sim: SimState, outcome: LandingState):
    sim.lander.freeze()
    sim.lander.clear_controls()
    sim.state = outcome
