# sentinel/simulation.py
# ------------------------------------------------------------
# Synthetic motion model (demo/testing):
# - Assets spawn around a fixed map center
# - Each tick they move along their heading at their speed
# - Headings drift occasionally; assets bounce back at the area edge
#
# Not geodesic-perfect, but visually consistent for demo.
# ------------------------------------------------------------

from __future__ import annotations

import math
import random
from typing import Optional

from .geo import generate_id
from .models import Asset, AssetCreateRequest, Position


# Rough conversion: 1 degree ~ 111 km. The extra factor speeds up the demo.
METERS_PER_DEGREE = 111000.0
DEMO_SPEEDUP = 100.0

SPEED_RANGES = {
    "vehicle": (15.0, 50.0),
    "drone": (30.0, 80.0),
}
LABEL_PREFIX = {
    "vehicle": "VH",
    "drone": "DR",
}


def wrap_heading(deg: float) -> float:
    h = deg % 360.0
    # -1e-18 % 360.0 == 360.0 in floating point
    return 0.0 if h >= 360.0 else h


def step_position(pos: Position, heading: float, dist_deg: float) -> Position:
    rad = math.radians(heading)
    return Position(
        lat=pos.lat + math.cos(rad) * dist_deg,
        lng=pos.lng + math.sin(rad) * dist_deg,
    )


class MotionModel:
    """
    Upstream producer of asset positions.

    All randomness goes through `rng` so tests can seed it.
    """

    def __init__(
        self,
        center: Position,
        spawn_radius: float = 0.04,
        heading_change_chance: float = 0.03,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.center = center
        self.spawn_radius = spawn_radius
        self.heading_change_chance = heading_change_chance
        self.rng = rng or random.Random()

    # -------------------------------
    # Spawning
    # -------------------------------
    def _uniform(self, lo: float, hi: float) -> float:
        return self.rng.uniform(lo, hi)

    def random_position(self) -> Position:
        r = self.spawn_radius
        return Position(
            lat=self.center.lat + self._uniform(-r, r),
            lng=self.center.lng + self._uniform(-r, r),
        )

    def spawn(self, index: int, req: Optional[AssetCreateRequest] = None) -> Asset:
        """
        Create the index-th asset (0-based). Types alternate vehicle/drone.
        Fields given in `req` win over random ones.
        """
        req = req or AssetCreateRequest()

        a_type = req.type or ("vehicle" if index % 2 == 0 else "drone")
        lo, hi = SPEED_RANGES[a_type]

        return Asset(
            id=generate_id("ast"),
            label=req.label or f"{LABEL_PREFIX[a_type]}-{index + 1:03d}",
            type=a_type,
            position=req.position or self.random_position(),
            heading=req.heading if req.heading is not None else wrap_heading(self._uniform(0.0, 360.0)),
            speed=req.speed if req.speed is not None else self._uniform(lo, hi),
            status="safe",
        )

    # -------------------------------
    # Motion
    # -------------------------------
    def _out_of_bounds(self, pos: Position) -> bool:
        limit = self.spawn_radius * 1.5
        return (
            abs(pos.lat - self.center.lat) > limit
            or abs(pos.lng - self.center.lng) > limit
        )

    def displacement(self, speed_kmh: float, dt: float) -> float:
        """Distance in degrees covered in `dt` seconds."""
        return (speed_kmh / METERS_PER_DEGREE) * dt * DEMO_SPEEDUP

    def advance(self, asset: Asset, dt: float) -> Asset:
        """
        Return the asset moved forward by `dt` seconds.
        """
        heading = asset.heading
        if self.rng.random() < self.heading_change_chance:
            heading = wrap_heading(heading + self._uniform(-45.0, 45.0))

        dist = self.displacement(asset.speed, dt)
        pos = step_position(asset.position, heading, dist)

        if self._out_of_bounds(pos):
            heading = wrap_heading(heading + 180.0)
            pos = step_position(asset.position, heading, dist)

        return asset.model_copy(update={"position": pos, "heading": heading})
