# moonlander/game/stars.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List
from .config import WIDTH, HEIGHT, STAR_COUNT, STAR_VX


@dataclass
class Star:
    x: float
    y: float
    vx: float


def make_stars(rng: random.Random, count: int = STAR_COUNT) -> List[Star]:
    return [Star(x=rng.random() * WIDTH, y=rng.random() * HEIGHT, vx=STAR_VX) for _ in range(count)]


def update_stars(stars: List[Star], dt: float, rng: random.Random):
    """Drift stars left; a star leaving the screen re-enters on the right at a new height."""
    for star in stars:
        star.x += star.vx * dt
        if star.x < 0:
            star.x = float(WIDTH)
            star.y = rng.random() * HEIGHT
