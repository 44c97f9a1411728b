# sentinel/routes/alerts.py
# ------------------------------------------------------------
# Alerts API
#
# Intrusion logs live in the in-memory alert log (oldest first);
# this endpoint returns the newest slice, newest first.
# ------------------------------------------------------------

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..geo import risk_to_badge_class
from ..monitor import Monitor
from ._common import get_monitor

router = APIRouter(tags=["alerts"])


@router.get("/api/alerts")
def list_alerts(
    limit: Optional[int] = Query(None, ge=1, le=500),
    monitor: Monitor = Depends(get_monitor),
):
    """
    List recent intrusion alerts (newest first).
    """
    n = limit or settings.recent_alerts_limit

    items = []
    for log in monitor.alerts.list_recent(n):
        out = log.model_dump(mode="json")
        out["badge_class"] = risk_to_badge_class(log.risk_level)
        items.append(out)

    return {"items": items, "total": len(monitor.alerts)}
