# sentinel/routes/_common.py
# ------------------------------------------------------------
# Shared helpers for route modules.
# Keeps route files small and consistent.
# ------------------------------------------------------------

from typing import Any, Dict, Iterable, List

from fastapi import HTTPException, Request
from pydantic import BaseModel

from ..monitor import Monitor


def get_monitor(request: Request) -> Monitor:
    """
    FastAPI dependency: the Monitor created at startup.
    """
    monitor = getattr(request.app.state, "monitor", None)
    if monitor is None:
        raise HTTPException(status_code=503, detail="Monitor not initialised.")
    return monitor


def dump_items(items: Iterable[BaseModel]) -> List[Dict[str, Any]]:
    """
    Serialise models the same way the update bus does.
    """
    return [x.model_dump(mode="json") for x in items]
