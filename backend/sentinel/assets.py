# sentinel/assets.py
# ------------------------------------------------------------
# Asset registry: current state of every tracked asset.
#
# Assets are replaced (never mutated) on each tick and on each
# status change, so a snapshot handed out by list_assets() stays
# consistent for the rest of the tick.
# ------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .models import Asset, AssetStatus
from .simulation import MotionModel

logger = logging.getLogger(__name__)


class AssetRegistry:
    def __init__(self, motion: MotionModel) -> None:
        self.motion = motion
        # dicts keep insertion order -> stable display order
        self._assets: Dict[str, Asset] = {}

    def bootstrap(self, count: int) -> None:
        """
        Create the initial fleet.
        Safe to call repeatedly; only runs if the registry is empty.
        """
        if self._assets:
            return
        for i in range(count):
            self.add_asset(self.motion.spawn(i))

    def add_asset(self, asset: Asset) -> Asset:
        if asset.id in self._assets:
            raise ValueError(f"duplicate asset id {asset.id}")
        self._assets[asset.id] = asset
        return asset

    def tick(self, dt: float) -> None:
        """
        Advance every asset by `dt` seconds.

        A fault moving one asset leaves it where it was; the others still move.
        """
        for asset_id, asset in list(self._assets.items()):
            try:
                self._assets[asset_id] = self.motion.advance(asset, dt)
            except Exception:
                logger.exception("failed to advance asset id=%s", asset_id)

    def set_status(self, asset_id: str, status: AssetStatus) -> bool:
        """
        Idempotent point update. Returns True only if the status changed.
        """
        asset = self._assets.get(asset_id)
        if asset is None:
            logger.debug("set_status for unknown asset id=%s", asset_id)
            return False
        if asset.status == status:
            return False

        self._assets[asset_id] = asset.model_copy(update={"status": status})
        return True

    def list_assets(self) -> List[Asset]:
        return list(self._assets.values())

    def get(self, asset_id: str) -> Optional[Asset]:
        return self._assets.get(asset_id)

    def __len__(self) -> int:
        return len(self._assets)
