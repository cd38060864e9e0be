# moonlander/game/lander.py
from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from .config import (
    HEIGHT, GRAVITY, THRUST_ACC, ROTATION_SPEED, FUEL_MAX, FUEL_BURN_RATE,
    LANDER_START_X, LANDER_START_Y, LANDER_HALF_H, X_MIN, X_MAX
)
from .terrain import Terrain

LOGGER = logging.getLogger(__name__)


@dataclass
class Lander:
    """
    Rigid craft in screen coordinates (y grows downward):
    - angle = 0 is upright, positive rotates clockwise
    - vx, vy are in px per frame; accelerations are scaled by dt before being added
    """
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0
    fuel: float = FUEL_MAX
    thrusting: bool = False
    rotating_left: bool = False
    rotating_right: bool = False

    @classmethod
    def spawn(cls) -> "Lander":
        return cls(x=LANDER_START_X, y=LANDER_START_Y)

    @property
    def bottom(self) -> float:
        return self.y + LANDER_HALF_H

    @property
    def engine_on(self) -> bool:
        return self.thrusting and self.fuel > 0

    def clear_controls(self):
        self.thrusting = False
        self.rotating_left = False
        self.rotating_right = False

    def freeze(self):
        self.vx = 0.0
        self.vy = 0.0

    def update_physics(self, dt: float):
        """Rotate, burn, fall, move, then keep the craft inside the side walls."""
        if self.rotating_left:
            self.angle -= ROTATION_SPEED * dt
        if self.rotating_right:
            self.angle += ROTATION_SPEED * dt

        if self.engine_on:
            self.vx += THRUST_ACC * math.sin(self.angle) * dt
            self.vy -= THRUST_ACC * math.cos(self.angle) * dt
            self.fuel -= FUEL_BURN_RATE * dt
            if self.fuel < 0:
                self.fuel = 0.0

        self.vy += GRAVITY * dt

        # velocity is already per-frame: no second dt here
        self.x += self.vx
        self.y += self.vy

        if self.x < X_MIN:
            self.x = float(X_MIN)
            self.vx = 0.0
        if self.x > X_MAX:
            self.x = float(X_MAX)
            self.vx = 0.0


def altitude(lander: Lander, terrain: Terrain) -> float:
    """Gap between the lander's bottom and the ground below it (negative once in contact)."""
    distance = terrain.height_at(lander.x) - lander.bottom
    if not math.isfinite(distance):
        LOGGER.warning("Invalid altitude %s at lander y=%s; using canvas height", distance, lander.y)
        return float(HEIGHT)
    return distance
