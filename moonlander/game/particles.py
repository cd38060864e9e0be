# moonlander/game/particles.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List
from .config import (
    GRAVITY, PARTICLE_COUNT, PARTICLE_SPEED, PARTICLE_MIN_SIZE, PARTICLE_SIZE_RANGE,
    PARTICLE_LIFE, PARTICLE_DECAY, PARTICLE_GRAVITY_SCALE
)


@dataclass
class ExplosionParticle:
    x: float
    y: float
    vx: float       # px per frame
    vy: float
    size: float
    life: float = PARTICLE_LIFE
    decay: float = PARTICLE_DECAY   # life lost per second

    @property
    def alpha(self) -> float:
        return max(0.0, min(1.0, self.life / PARTICLE_LIFE))


def spawn_explosion(particles: List[ExplosionParticle], x: float, y: float,
                    rng: random.Random, count: int = PARTICLE_COUNT):
    """Append a burst of debris centred on (x, y)."""
    for _ in range(count):
        particles.append(ExplosionParticle(
            x=x,
            y=y,
            vx=(rng.random() - 0.5) * 2 * PARTICLE_SPEED,
            vy=(rng.random() - 0.5) * 2 * PARTICLE_SPEED,
            size=rng.random() * PARTICLE_SIZE_RANGE + PARTICLE_MIN_SIZE,
        ))


def update_particles(particles: List[ExplosionParticle], dt: float) -> List[ExplosionParticle]:
    """Age every particle by dt and return the ones still alive."""
    for p in particles:
        p.vy += GRAVITY * PARTICLE_GRAVITY_SCALE * dt
        p.x += p.vx
        p.y += p.vy
        p.life -= p.decay * dt
    return [p for p in particles if p.life > 0]
