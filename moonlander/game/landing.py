# moonlander/game/landing.py
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import List
from .config import (
    MAX_LANDING_ANGLE, MAX_LANDING_VY, MAX_LANDING_VX, FLAT_TOLERANCE,
    APPROACH_DISTANCE, APPROACH_MAX_VY, APPROACH_MAX_ANGLE
)
from .lander import Lander, altitude
from .terrain import Flatness, Terrain


class LandingState(Enum):
    FLYING = "flying"
    LANDED = "landed"
    CRASHED = "crashed"


@dataclass(frozen=True)
class LandingReport:
    """Outcome of the touchdown checks for one contact."""
    flatness: Flatness
    is_upright: bool
    is_slow: bool
    angle: float
    vx: float
    vy: float

    @property
    def is_flat(self) -> bool:
        return self.flatness.is_flat

    @property
    def qualified(self) -> bool:
        return self.is_flat and self.is_upright and self.is_slow

    def reasons(self) -> List[str]:
        out = []
        if not self.is_flat:
            out.append(f"Not flat enough (diff {self.flatness.diff:.2f} >= {FLAT_TOLERANCE:.0f})")
        if not self.is_upright:
            out.append(f"Angle too high (|{math.degrees(self.angle):.1f} deg| >= "
                       f"{math.degrees(MAX_LANDING_ANGLE):.1f} deg)")
        if abs(self.vy) >= MAX_LANDING_VY:
            out.append(f"Vertical speed too high (|{self.vy:.2f}| >= {MAX_LANDING_VY:.2f})")
        if abs(self.vx) >= MAX_LANDING_VX:
            out.append(f"Horizontal speed too high (|{self.vx:.2f}| >= {MAX_LANDING_VX:.2f})")
        return out


def qualify_landing(lander: Lander, terrain: Terrain) -> LandingReport:
    """A touchdown counts only on flat ground, nearly upright and slow on both axes."""
    return LandingReport(
        flatness=terrain.flatness(lander.x),
        is_upright=abs(lander.angle) < MAX_LANDING_ANGLE,
        is_slow=abs(lander.vy) < MAX_LANDING_VY and abs(lander.vx) < MAX_LANDING_VX,
        angle=lander.angle,
        vx=lander.vx,
        vy=lander.vy,
    )


def approach_is_safe(lander: Lander, terrain: Terrain, state: LandingState) -> bool:
    """Visual cue: close above a flat spot and slow/upright enough to set down."""
    if state is not LandingState.FLYING:
        return False
    distance = altitude(lander, terrain)
    return (terrain.flatness(lander.x).is_flat
            and 0 < distance < APPROACH_DISTANCE
            and abs(lander.vy) < APPROACH_MAX_VY
            and abs(lander.angle) < APPROACH_MAX_ANGLE)
