# sentinel/routes/simulation.py
# ------------------------------------------------------------
# Simulation controls
#
# Start/stop the fixed-interval tick loop. Stopping halts all
# further detection; state (assets, zones, alerts) is kept.
# ------------------------------------------------------------

from fastapi import APIRouter, Depends

from ..monitor import Monitor
from ._common import get_monitor

router = APIRouter(tags=["simulation"])


def _state(monitor: Monitor) -> dict:
    return {
        "running": monitor.running,
        "tick_interval_ms": round(monitor.tick_interval * 1000),
        "ticks": monitor.tick_count,
    }


@router.get("/api/simulation")
def simulation_state(monitor: Monitor = Depends(get_monitor)):
    return _state(monitor)


@router.post("/api/simulation/start")
async def start_simulation(monitor: Monitor = Depends(get_monitor)):
    changed = monitor.start()
    return {"ok": True, "changed": changed, **_state(monitor)}


@router.post("/api/simulation/stop")
async def stop_simulation(monitor: Monitor = Depends(get_monitor)):
    changed = await monitor.stop()
    return {"ok": True, "changed": changed, **_state(monitor)}
