# sentinel/routes/stream.py
# ------------------------------------------------------------
# Server-Sent Events (SSE) stream
#
# The monitor writes updates into the Redis list behind UpdateBus.
# This endpoint replays new items to connected clients:
# - event: <type>
# - data: <json>
# ------------------------------------------------------------

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
import asyncio
import json
import time
from typing import AsyncGenerator

from ..monitor import Monitor
from ._common import get_monitor

router = APIRouter(tags=["stream"])


def sse(event: str, data_obj) -> str:
    """
    Build an SSE message.

    Format:
        event: name
        data: json
    """
    return f"event: {event}\ndata: {json.dumps(data_obj)}\n\n"


@router.get("/api/stream")
def stream(monitor: Monitor = Depends(get_monitor)):
    """
    Live updates stream.

    Implementation notes:
    - Starts from "now" (does not replay history) to avoid huge bursts.
    - Sends a heartbeat periodically to keep connection alive.
    - Uses async sleep (does NOT block the server worker).
    """
    bus = monitor.bus
    if not bus.enabled:
        raise HTTPException(status_code=503, detail="Live updates disabled (redis_enabled=false).")

    last_seq = bus.last_seq()  # start from "now"

    async def gen() -> AsyncGenerator[str, None]:
        nonlocal last_seq

        # initial hello + retry hint (client reconnect delay)
        yield "retry: 2000\n\n"
        yield sse("hello", {"ok": True, "ts": time.time()})

        heartbeat_every = 10  # seconds
        poll_every = 0.25     # seconds (light polling)

        last_heartbeat = time.time()

        while True:
            for msg in bus.read_since(last_seq):
                last_seq = int(msg["seq"])
                yield sse(msg.get("type", "update"), msg.get("data", {}))

            # heartbeat
            now = time.time()
            if now - last_heartbeat >= heartbeat_every:
                yield sse("heartbeat", {"t": now})
                last_heartbeat = now

            await asyncio.sleep(poll_every)

    headers = {
        # SSE must not be cached
        "Cache-Control": "no-cache",
        # keep TCP connection open
        "Connection": "keep-alive",
        # if behind nginx, prevents response buffering
        "X-Accel-Buffering": "no",
    }

    return StreamingResponse(gen(), media_type="text/event-stream", headers=headers)
