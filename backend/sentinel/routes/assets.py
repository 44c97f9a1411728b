# sentinel/routes/assets.py
# ------------------------------------------------------------
# Assets API
#
# Returns the latest known asset states (insertion order).
# Used by:
# - map markers
# - status bar counters
# ------------------------------------------------------------

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import AssetCreateRequest
from ..monitor import Monitor
from ._common import dump_items, get_monitor

router = APIRouter(tags=["assets"])


@router.get("/api/assets")
def list_assets(
    limit: int = Query(200, ge=1, le=1000),
    monitor: Monitor = Depends(get_monitor),
):
    """
    List assets (current state of each asset), up to `limit` items.
    """
    items = monitor.assets.list_assets()[:limit]
    return {"items": dump_items(items)}


@router.get("/api/assets/{asset_id}")
def get_asset(asset_id: str, monitor: Monitor = Depends(get_monitor)):
    asset = monitor.assets.get(asset_id)
    if asset is None:
        raise HTTPException(status_code=404, detail=f"Unknown asset {asset_id}")
    return asset.model_dump(mode="json")


@router.post("/api/assets", status_code=201)
async def add_asset(
    body: Optional[AssetCreateRequest] = None,
    monitor: Monitor = Depends(get_monitor),
):
    """
    Add an asset while the simulation runs.
    Runs on the event loop so it never interleaves with a tick.
    """
    asset = monitor.add_asset(body)
    return asset.model_dump(mode="json")
