# sentinel/monitor.py
# ------------------------------------------------------------
# Wires the registries, the detection engine, the alert log and
# the update bus together, and drives them from a fixed-interval
# asyncio timer.
#
# One tick = advance assets -> evaluate detection -> publish.
# A tick always runs to completion before the next one starts.
# ------------------------------------------------------------

from __future__ import annotations

import asyncio
import logging
import random
from typing import List, Optional, Sequence

from .alerts import AlertLog
from .assets import AssetRegistry
from .bus import UpdateBus
from .config import Settings
from .detection import IntrusionDetector
from .models import (
    Asset,
    AssetCreateRequest,
    AssetStatus,
    IntrusionLog,
    Position,
    RestrictedZone,
)
from .redis_client import get_redis
from .simulation import MotionModel
from .zones import ZoneRegistry

logger = logging.getLogger(__name__)


class Monitor:
    def __init__(
        self,
        assets: AssetRegistry,
        zones: Optional[ZoneRegistry] = None,
        alerts: Optional[AlertLog] = None,
        bus: Optional[UpdateBus] = None,
        tick_interval: float = 0.1,
    ) -> None:
        self.assets = assets
        self.zones = zones or ZoneRegistry()
        self.alerts = alerts or AlertLog()
        self.bus = bus or UpdateBus()
        self.tick_interval = tick_interval

        self.detector = IntrusionDetector(
            on_intrusion=self._on_intrusion,
            set_status=self._set_status,
        )

        self.tick_count = 0
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @classmethod
    def from_settings(cls, s: Settings, rng: Optional[random.Random] = None) -> "Monitor":
        motion = MotionModel(
            center=Position(lat=s.map_center_lat, lng=s.map_center_lng),
            spawn_radius=s.spawn_radius_deg,
            heading_change_chance=s.heading_change_chance,
            rng=rng,
        )
        assets = AssetRegistry(motion)
        assets.bootstrap(s.asset_count)

        r = get_redis(s.redis_url) if s.redis_enabled else None
        return cls(
            assets=assets,
            bus=UpdateBus(r, max_len=s.stream_max_len),
            tick_interval=s.tick_interval_sec,
        )

    # -------------------------------
    # Detection callbacks
    # -------------------------------
    def _on_intrusion(self, log: IntrusionLog) -> None:
        self.alerts.append(log)
        logger.warning(
            "INTRUSION %s entered %s (risk=%s) at %.5f, %.5f",
            log.asset_label, log.zone_name, log.risk_level,
            log.position.lat, log.position.lng,
        )
        self.bus.publish("intrusion_detected", log.model_dump(mode="json"))

    def _set_status(self, asset_id: str, status: AssetStatus) -> None:
        if self.assets.set_status(asset_id, status):
            self.bus.publish("asset_status", {"asset_id": asset_id, "status": status})

    # -------------------------------
    # Tick
    # -------------------------------
    def step(self, dt: Optional[float] = None) -> List[IntrusionLog]:
        """
        Run one simulation tick and return the alerts it raised.
        """
        self.assets.tick(self.tick_interval if dt is None else dt)

        new_logs = self.detector.evaluate(
            self.assets.list_assets(),
            self.zones.list_zones(),
        )
        self.tick_count += 1

        self.bus.publish("tick", {
            "tick": self.tick_count,
            "assets": [a.model_dump(mode="json") for a in self.assets.list_assets()],
        })
        return new_logs

    async def run(self) -> None:
        self._running = True
        logger.info("simulation started (interval=%.3fs)", self.tick_interval)
        try:
            while self._running:
                try:
                    self.step()
                except Exception:
                    logger.exception("simulation tick %d failed", self.tick_count + 1)
                await asyncio.sleep(self.tick_interval)
        finally:
            self._running = False
            logger.info("simulation stopped after %d ticks", self.tick_count)

    @property
    def running(self) -> bool:
        """True while the timer loop is active, however it was started."""
        return self._running

    def start(self) -> bool:
        """
        Start the timer loop on the running event loop.
        Returns False if it is already running.
        """
        if self._running:
            return False
        self._running = True
        self._task = asyncio.create_task(self.run())
        return True

    async def stop(self) -> bool:
        """
        Halt the loop. A task created by start() is cancelled and awaited;
        a loop awaited directly exits after its current sleep.
        """
        if not self._running:
            return False
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        return True

    # -------------------------------
    # Collaborator entry points
    # -------------------------------
    def create_zone(
        self,
        points: Sequence[Position],
        name: Optional[str] = None,
    ) -> RestrictedZone:
        zone = self.zones.create_zone(points, name=name)
        self.bus.publish("zone_created", zone.model_dump(mode="json"))
        return zone

    def add_asset(self, req: Optional[AssetCreateRequest] = None) -> Asset:
        asset = self.assets.add_asset(self.assets.motion.spawn(len(self.assets), req))
        logger.info("asset added id=%s label=%s type=%s", asset.id, asset.label, asset.type)
        self.bus.publish("asset_added", asset.model_dump(mode="json"))
        return asset

    # -------------------------------
    # Read models
    # -------------------------------
    def summary(self) -> dict:
        assets = self.assets.list_assets()
        return {
            "assets": len(assets),
            "safe": sum(1 for a in assets if a.status == "safe"),
            "intruding": sum(1 for a in assets if a.status == "intruding"),
            "zones": len(self.zones),
            "alerts": len(self.alerts),
            "active_intrusions": len(self.detector.active_intrusions),
        }
