# sentinel/main.py
# ------------------------------------------------------------
# FastAPI entrypoint for the zone intrusion monitor.
#
# Responsibilities:
# - App initialization & middleware
# - Route registration
# - Startup bootstrapping (fleet, monitor)
# - Background simulation loop
# ------------------------------------------------------------

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import settings
from .monitor import Monitor
from .routes import alerts, assets, health, simulation, stream, zones


logging.basicConfig(
    level=settings.log_level.upper(),
    format="[%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Application lifecycle
# ------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    On startup:
    1. Build the monitor and bootstrap the asset fleet.
    2. Start the simulation loop if enabled.
    On shutdown the loop is cancelled.
    """
    monitor = Monitor.from_settings(settings)
    app.state.monitor = monitor
    logger.info(
        "monitor ready: %d assets, redis=%s",
        len(monitor.assets), "on" if monitor.bus.enabled else "off",
    )

    # static mode: ticks only happen through Monitor.step()
    if settings.simulation_enabled:
        monitor.start()

    yield

    await monitor.stop()


# ------------------------------------------------------------
# FastAPI application instance
# ------------------------------------------------------------
app = FastAPI(
    title="Sentinel Zone Monitor API",
    version="0.1.0",
    description="Restricted-zone intrusion detection for simulated assets",
    lifespan=lifespan,
)


# ------------------------------------------------------------
# CORS configuration
# Allows frontend dashboards to connect safely
# ------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"ok": False, "error": str(exc), "path": str(request.url)},
    )


# ------------------------------------------------------------
# API routes
# ------------------------------------------------------------
app.include_router(assets.router)
app.include_router(zones.router)
app.include_router(alerts.router)
app.include_router(stream.router)
app.include_router(health.router)
app.include_router(simulation.router)

