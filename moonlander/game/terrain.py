# moonlander/game/terrain.py
from __future__ import annotations
import logging
import math
import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, NamedTuple, Sequence, Tuple, Union
from .config import (
    WIDTH, HEIGHT, TERRAIN_STEP, TERRAIN_START_Y, TERRAIN_MIN_Y, TERRAIN_MAX_Y,
    TERRAIN_JITTER, FLAT_CHANCE, MIN_FLAT_SPOTS, FLAT_MIN_W, FLAT_MAX_W,
    FLAT_FORCE_MIN_X, FLAT_FORCE_MAX_X, FLAT_LAST_START_X,
    FAILSAFE_FLAT_X, FAILSAFE_FLAT_W, FAILSAFE_FLAT_MIN_Y, FAILSAFE_FLAT_RANGE,
    FLAT_CHECK_RANGE, FLAT_TOLERANCE
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerrainPoint:
    x: float
    y: float


class Flatness(NamedTuple):
    is_flat: bool
    diff: float     # max - min height inside the check window (inf if empty)


class FlatRun(NamedTuple):
    x_start: float
    x_end: float
    y: float

    @property
    def width(self) -> float:
        return self.x_end - self.x_start

    @property
    def center(self) -> float:
        return 0.5 * (self.x_start + self.x_end)


PointLike = Union[TerrainPoint, Tuple[float, float]]


class Terrain:
    """
    Static piecewise-linear height profile, x increasing left to right.
    Screen coordinates: larger y is lower on screen.
    """
    def __init__(self, points: Iterable[PointLike]):
        self.points: Tuple[TerrainPoint, ...] = tuple(
            p if isinstance(p, TerrainPoint) else TerrainPoint(float(p[0]), float(p[1]))
            for p in points
        )

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[TerrainPoint]:
        return iter(self.points)

    def height_at(self, x: float) -> float:
        """Terrain y under x, linearly interpolated between neighbouring points."""
        pts = self.points
        if len(pts) < 2:
            LOGGER.warning("Terrain has %d point(s); using canvas bottom for x=%s", len(pts), x)
            return float(HEIGHT)
        if x <= pts[0].x:
            return pts[0].y
        if x >= pts[-1].x:
            return pts[-1].y

        for p1, p2 in zip(pts, pts[1:]):
            # skip segments that are out of order
            if p1.x >= p2.x:
                continue
            if p1.x <= x < p2.x:
                t = (x - p1.x) / (p2.x - p1.x)
                if not math.isfinite(t):
                    return p1.y
                return p1.y + t * (p2.y - p1.y)

        LOGGER.warning("Terrain height lookup failed for x=%s; using last point y=%.2f", x, pts[-1].y)
        return pts[-1].y

    def flatness(self, x: float) -> Flatness:
        """
        Height spread of the terrain in a +-FLAT_CHECK_RANGE window around x.
        Samples every terrain point inside the window plus the interpolated
        heights at both window edges.
        """
        start_x = max(0.0, x - FLAT_CHECK_RANGE)
        end_x = min(float(WIDTH), x + FLAT_CHECK_RANGE)

        ys = [p.y for p in self.points if start_x <= p.x <= end_x]
        if not ys:
            return Flatness(False, math.inf)

        for edge_x in (start_x, end_x):
            y_edge = self.height_at(edge_x)
            if math.isfinite(y_edge):
                ys.append(y_edge)

        diff = max(ys) - min(ys)
        return Flatness(diff < FLAT_TOLERANCE, diff)

    def flat_runs(self, min_width: float = 0.0) -> List[FlatRun]:
        """Maximal runs of consecutive points sharing the same y."""
        pts = self.points
        runs: List[FlatRun] = []
        i = 0
        while i < len(pts):
            j = i
            while j + 1 < len(pts) and pts[j + 1].y == pts[i].y:
                j += 1
            if j > i and pts[j].x - pts[i].x >= min_width:
                runs.append(FlatRun(pts[i].x, pts[j].x, pts[i].y))
            i = j + 1
        return runs

    def landing_segments(self) -> List[Tuple[TerrainPoint, TerrainPoint]]:
        """Segments that are level themselves and sit inside a flat window."""
        segs = []
        for p1, p2 in zip(self.points, self.points[1:]):
            if abs(p1.y - p2.y) < 0.1 and self.flatness(0.5 * (p1.x + p2.x)).is_flat:
                segs.append((p1, p2))
        return segs


def _clamp_height(y: float) -> float:
    return max(TERRAIN_MIN_Y, min(TERRAIN_MAX_Y, y))


def _next_height(rng: random.Random, y: float, leave_flat: bool) -> float:
    delta = (rng.random() - 0.5) * TERRAIN_JITTER
    new_y = _clamp_height(y + delta)
    # the point after a flat spot must break the run, even at a clamp bound
    if leave_flat and new_y == y:
        new_y = _clamp_height(y - delta)
    return new_y


def generate_terrain(rng: random.Random) -> Terrain:
    """
    Walk x across the screen in TERRAIN_STEP increments, mixing random height
    perturbations with flat landing spots 40-60 px wide. The first
    MIN_FLAT_SPOTS spots inside (100, 700) are forced; later ones happen by
    chance. Two spots are never emitted back to back, so each is a distinct
    landing zone.
    """
    points: List[TerrainPoint] = []
    x = 0
    y = TERRAIN_START_Y
    flat_spots = 0
    just_flat = False

    while x < WIDTH:
        should_try_flat = flat_spots < MIN_FLAT_SPOTS and FLAT_FORCE_MIN_X < x < FLAT_FORCE_MAX_X
        random_chance = rng.random() < FLAT_CHANCE

        if (should_try_flat or random_chance) and x < FLAT_LAST_START_X and not just_flat:
            flat_w = FLAT_MIN_W + rng.random() * (FLAT_MAX_W - FLAT_MIN_W)
            start_x = x
            i = 0
            while i * TERRAIN_STEP < flat_w and x < WIDTH:
                points.append(TerrainPoint(x, y))
                x += TERRAIN_STEP
                i += 1
            LOGGER.debug("Generated flat spot at y=%.1f from x=%d to x=%d", y, start_x, x)
            flat_spots += 1
            just_flat = True
        else:
            y = _next_height(rng, y, just_flat)
            points.append(TerrainPoint(x, y))
            x += TERRAIN_STEP
            just_flat = False

    # reach the right edge
    if points and points[-1].x < WIDTH:
        points.append(TerrainPoint(WIDTH, points[-1].y))
    elif not points:
        points = [TerrainPoint(0, TERRAIN_START_Y), TerrainPoint(WIDTH, TERRAIN_START_Y)]

    if flat_spots < MIN_FLAT_SPOTS:
        LOGGER.warning("Only %d flat spot(s) generated, adding one manually", flat_spots)
        points = splice_flat_spot(points, rng)

    return Terrain(points)


def splice_flat_spot(points: Sequence[TerrainPoint], rng: random.Random) -> List[TerrainPoint]:
    """
    Replace the points in [FAILSAFE_FLAT_X, FAILSAFE_FLAT_X + FAILSAFE_FLAT_W)
    with a level run at a random height, then restore x order and drop
    repeated x values (first one wins).
    """
    flat_y = FAILSAFE_FLAT_MIN_Y + rng.random() * FAILSAFE_FLAT_RANGE
    x_end = FAILSAFE_FLAT_X + FAILSAFE_FLAT_W

    start = next((i for i, p in enumerate(points) if p.x >= FAILSAFE_FLAT_X), None)
    if start is None:
        return list(points)
    end = next((i for i, p in enumerate(points) if p.x >= x_end), None)

    before = list(points[:start])
    after = list(points[end:]) if end is not None else []

    spot = []
    i = 0
    while i * TERRAIN_STEP < FAILSAFE_FLAT_W:
        spot.append(TerrainPoint(FAILSAFE_FLAT_X + i * TERRAIN_STEP, flat_y))
        i += 1
    # connect back to the surviving terrain at the same height
    if after:
        spot.append(TerrainPoint(after[0].x, flat_y))
    elif start > 0:
        spot.append(TerrainPoint(WIDTH, flat_y))

    merged = sorted(before + spot + after, key=lambda p: p.x)
    deduped: List[TerrainPoint] = []
    for p in merged:
        if deduped and deduped[-1].x == p.x:
            continue
        deduped.append(p)
    return deduped
