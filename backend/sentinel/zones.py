# sentinel/zones.py
# ------------------------------------------------------------
# Zone registry: ordered, append-only collection of restricted zones.
#
# The registry owns the zone counter used for naming and for the
# round-robin risk assignment of newly drawn zones.
# ------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .geo import generate_id, risk_for_zone_number, risk_to_color
from .models import Position, RestrictedZone

logger = logging.getLogger(__name__)


class ZoneRegistry:
    def __init__(self) -> None:
        self._zones: List[RestrictedZone] = []
        self._by_id: Dict[str, RestrictedZone] = {}
        # published snapshot, rebuilt on every append
        self._snapshot: Tuple[RestrictedZone, ...] = ()
        self._counter = 0

    @property
    def counter(self) -> int:
        """Number of zones created through create_zone()."""
        return self._counter

    def add_zone(self, zone: RestrictedZone) -> None:
        self._zones.append(zone)
        self._by_id[zone.id] = zone
        self._snapshot = tuple(self._zones)

    def create_zone(
        self,
        points: Sequence[Position],
        name: Optional[str] = None,
    ) -> RestrictedZone:
        """
        Build a zone from a drawn polygon and append it.

        Risk level cycles low -> medium -> high -> critical by creation
        order, not by zone content.
        """
        self._counter += 1
        risk = risk_for_zone_number(self._counter)

        zone = RestrictedZone(
            id=generate_id("zon"),
            name=name or f"Zone {self._counter:02d}",
            points=list(points),
            risk_level=risk,
            color=risk_to_color(risk),
        )
        self.add_zone(zone)

        logger.info(
            "zone created id=%s name=%r risk=%s vertices=%d",
            zone.id, zone.name, zone.risk_level, len(zone.points),
        )
        return zone

    def list_zones(self) -> Tuple[RestrictedZone, ...]:
        return self._snapshot

    def get(self, zone_id: str) -> Optional[RestrictedZone]:
        return self._by_id.get(zone_id)

    def __len__(self) -> int:
        return len(self._zones)
