# sentinel/routes/zones.py
# ------------------------------------------------------------
# Zones API
#
# POST is the zone-drawing tool's "zone created" hook. Risk level
# and default name are assigned by the registry, round-robin by
# creation order.
# ------------------------------------------------------------

from fastapi import APIRouter, Depends, HTTPException

from ..geo import risk_to_badge_class
from ..models import ZoneCreateRequest
from ..monitor import Monitor
from ._common import get_monitor

router = APIRouter(tags=["zones"])


def _zone_out(zone) -> dict:
    out = zone.model_dump(mode="json")
    out["badge_class"] = risk_to_badge_class(zone.risk_level)
    return out


@router.get("/api/zones")
def list_zones(monitor: Monitor = Depends(get_monitor)):
    """
    All zones, in the order they were drawn.
    """
    return {"items": [_zone_out(z) for z in monitor.zones.list_zones()]}


@router.get("/api/zones/{zone_id}")
def get_zone(zone_id: str, monitor: Monitor = Depends(get_monitor)):
    zone = monitor.zones.get(zone_id)
    if zone is None:
        raise HTTPException(status_code=404, detail=f"Unknown zone {zone_id}")
    return _zone_out(zone)


@router.post("/api/zones", status_code=201)
async def create_zone(body: ZoneCreateRequest, monitor: Monitor = Depends(get_monitor)):
    zone = monitor.create_zone(body.points, name=body.name)
    return _zone_out(zone)
