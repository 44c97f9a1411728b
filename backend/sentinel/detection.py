# sentinel/detection.py
# ------------------------------------------------------------
# Intrusion detection engine.
#
# Every tick re-evaluates all (asset, zone) pairs against the
# containment pairs seen on the previous evaluation:
# - pair newly contained      -> one IntrusionLog
# - pair still contained      -> nothing (dedup)
# - pair no longer contained  -> dropped from the active set
#
# Asset status follows: intruding iff contained in >= 1 zone.
# ------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, FrozenSet, Iterable, List, Optional, Set, Tuple

from .geo import generate_id, is_point_in_polygon
from .models import Asset, AssetStatus, IntrusionLog, RestrictedZone, utcnow

logger = logging.getLogger(__name__)

# (asset_id, zone_id)
PairKey = Tuple[str, str]

IntrusionCallback = Callable[[IntrusionLog], None]
StatusCallback = Callable[[str, AssetStatus], None]


class IntrusionDetector:
    """
    Stateful edge detector over containment pairs.

    Args:
        on_intrusion: called once per new containment event, in
            asset-major / zone-minor order.
        set_status: called when an asset's status must change.
    """

    def __init__(
        self,
        on_intrusion: Optional[IntrusionCallback] = None,
        set_status: Optional[StatusCallback] = None,
    ) -> None:
        self.on_intrusion = on_intrusion
        self.set_status = set_status
        self._active: Set[PairKey] = set()

    @property
    def active_intrusions(self) -> FrozenSet[PairKey]:
        return frozenset(self._active)

    def is_active(self, asset_id: str, zone_id: str) -> bool:
        return (asset_id, zone_id) in self._active

    def reset(self) -> None:
        self._active = set()

    # -------------------------------
    # Per-tick evaluation
    # -------------------------------
    def evaluate(
        self,
        assets: Iterable[Asset],
        zones: Iterable[RestrictedZone],
    ) -> List[IntrusionLog]:
        """
        Run one full pass over assets x zones and return the new logs.
        """
        zones = tuple(zones)
        current: Set[PairKey] = set()
        new_logs: List[IntrusionLog] = []

        for asset in assets:
            intruding = False

            for zone in zones:
                key = (asset.id, zone.id)

                try:
                    inside = is_point_in_polygon(asset.position, zone.points)
                except Exception:
                    # keep whatever we knew about this pair last tick
                    logger.exception(
                        "containment check failed asset=%s zone=%s",
                        asset.id, zone.id,
                    )
                    inside = key in self._active
                    if inside:
                        intruding = True
                        current.add(key)
                    continue

                if not inside:
                    continue

                intruding = True
                current.add(key)

                if key not in self._active:
                    log = self._build_log(asset, zone)
                    new_logs.append(log)
                    self._emit(log)

            self._update_status(asset, intruding)

        for asset_id, zone_id in self._active - current:
            logger.info("asset %s left zone %s", asset_id, zone_id)

        self._active = current
        return new_logs

    # -------------------------------
    # Helpers
    # -------------------------------
    @staticmethod
    def _build_log(asset: Asset, zone: RestrictedZone) -> IntrusionLog:
        return IntrusionLog(
            id=generate_id("itr"),
            asset_id=asset.id,
            asset_label=asset.label,
            zone_id=zone.id,
            zone_name=zone.name,
            risk_level=zone.risk_level,
            timestamp=utcnow(),
            position=asset.position,
        )

    def _emit(self, log: IntrusionLog) -> None:
        if self.on_intrusion is None:
            return
        try:
            self.on_intrusion(log)
        except Exception:
            logger.exception("on_intrusion callback failed log=%s", log.id)

    def _update_status(self, asset: Asset, intruding: bool) -> None:
        target: Optional[AssetStatus] = None
        if intruding and asset.status != "intruding":
            target = "intruding"
        elif not intruding and asset.status == "intruding":
            target = "safe"

        if target is None or self.set_status is None:
            return
        try:
            self.set_status(asset.id, target)
        except Exception:
            logger.exception("set_status callback failed asset=%s", asset.id)
