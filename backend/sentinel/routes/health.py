# sentinel/routes/health.py
# ------------------------------------------------------------
# Health & metrics endpoint
#
# Purpose:
# - quick liveness check
# - counts for the status bar (assets / intruding / zones / alerts)
# - simulation and update-bus state
# ------------------------------------------------------------

from fastapi import APIRouter, Depends
from datetime import datetime, timezone
import time

from ..monitor import Monitor
from ._common import get_monitor

router = APIRouter(tags=["health"])

# server start reference (module load time)
STARTED_AT = datetime.now(timezone.utc)


def _utc_now_iso():
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/api/health")
def health(monitor: Monitor = Depends(get_monitor)):
    """
    Health status for the dashboard.

    Returns:
    - ok, utc
    - started_at, uptime_seconds
    - counts
    - simulation (running, ticks)
    - redis (enabled, ok)
    - latency_ms (server-measured for this handler)
    """
    t0 = time.perf_counter()

    now = datetime.now(timezone.utc)
    uptime_seconds = int((now - STARTED_AT).total_seconds())

    bus = monitor.bus
    redis_info = {"enabled": bus.enabled, "ok": bus.ping() if bus.enabled else None}

    latency_ms = round((time.perf_counter() - t0) * 1000, 2)

    return {
        # keep ok true if API is up; use redis.ok for dependency state
        "ok": True,
        "utc": _utc_now_iso(),
        "started_at": STARTED_AT.isoformat().replace("+00:00", "Z"),
        "uptime_seconds": uptime_seconds,
        "counts": monitor.summary(),
        "simulation": {
            "running": monitor.running,
            "ticks": monitor.tick_count,
        },
        "redis": redis_info,
        "latency_ms": latency_ms,
    }
