# moonlander/env/observations.py
from __future__ import annotations
import math
from typing import Optional
import numpy as np

from moonlander.game.config import WIDTH, HEIGHT, FUEL_MAX, FLAT_MIN_W
from moonlander.game.lander import altitude
from moonlander.game.sim import SimState
from moonlander.game.terrain import Terrain

# velocities beyond this many px/frame saturate the observation
VEL_SCALE: float = 10.0

OBS_SIZE = 10
OBS_LOW = np.array([0.0, -1.0, -1.0, -1.0, -1.0, -1.0, 0.0, -1.0, 0.0, -1.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def nearest_flat_offset(terrain: Terrain, x: float) -> Optional[float]:
    """Signed x distance from x to the centre of the closest landing-sized flat run."""
    runs = terrain.flat_runs(min_width=FLAT_MIN_W)
    if not runs:
        return None
    best = min(runs, key=lambda r: abs(r.center - x))
    return best.center - x


def build_observation(sim: SimState) -> np.ndarray:
    """
    Returns a fixed (10,) float32 vector:
      [ x_norm, y_norm, vx_norm, vy_norm, sin(angle), cos(angle),
        fuel_norm, altitude_norm, flat_below, flat_offset_norm ]
    - positions normalised by the screen size, velocities by VEL_SCALE
    - flat_below is 1.0 when the ground under the lander passes the flatness check
    - flat_offset_norm is 0.0 when the terrain has no landing-sized flat run
    """
    lander = sim.lander
    terrain = sim.terrain

    offset = nearest_flat_offset(terrain, lander.x)
    feats = [
        lander.x / WIDTH,
        lander.y / HEIGHT,
        lander.vx / VEL_SCALE,
        lander.vy / VEL_SCALE,
        math.sin(lander.angle),
        math.cos(lander.angle),
        lander.fuel / FUEL_MAX,
        altitude(lander, terrain) / HEIGHT,
        1.0 if terrain.flatness(lander.x).is_flat else 0.0,
        0.0 if offset is None else offset / WIDTH,
    ]
    obs = np.asarray(feats, dtype=np.float32)
    return np.clip(obs, OBS_LOW, OBS_HIGH)
