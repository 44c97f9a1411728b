# sentinel/geo.py
# ------------------------------------------------------------
# Geometry and risk helpers (pure functions, no state).
#
# Flat-plane approximation: (lat, lng) are used directly as (y, x).
# Good enough for zones spanning a few kilometers.
# ------------------------------------------------------------

from typing import Sequence, Tuple

from .models import Position, uid


RISK_LEVELS: Tuple[str, ...] = ("low", "medium", "high", "critical")

_DEFAULT_COLOR = "hsl(142, 70%, 45%)"
_DEFAULT_BADGE = "bg-primary/20 text-primary"

_RISK_COLORS = {
    "critical": "hsl(0, 75%, 55%)",
    "high": "hsl(20, 85%, 55%)",
    "medium": "hsl(45, 90%, 55%)",
    "low": "hsl(200, 80%, 55%)",
}

_RISK_BADGES = {
    "critical": "bg-destructive text-destructive-foreground",
    "high": "bg-destructive/80 text-destructive-foreground",
    "medium": "bg-accent text-accent-foreground",
    "low": "bg-status-info/20 text-status-info",
}


def is_point_in_polygon(point: Position, polygon: Sequence[Position]) -> bool:
    """
    Ray casting (even-odd rule).

    A horizontal ray is cast from the point towards +x; the point is inside
    iff it crosses an odd number of edges. The polygon is implicitly closed.

    Boundary points follow the comparator: south/west edges count as inside,
    north/east edges as outside. Fewer than 3 vertices -> never inside.
    """
    n = len(polygon)
    if n < 3:
        return False

    y, x = point.lat, point.lng
    inside = False

    j = n - 1
    for i in range(n):
        yi, xi = polygon[i].lat, polygon[i].lng
        yj, xj = polygon[j].lat, polygon[j].lng

        # (yi > y) != (yj > y) excludes horizontal edges, so yj - yi != 0 below
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def risk_to_color(risk: str) -> str:
    return _RISK_COLORS.get(risk, _DEFAULT_COLOR)


def risk_to_badge_class(risk: str) -> str:
    return _RISK_BADGES.get(risk, _DEFAULT_BADGE)


def risk_for_zone_number(n: int) -> str:
    """
    Round-robin risk assignment keyed by the 1-based zone counter.
    1 -> low, 2 -> medium, 3 -> high, 4 -> critical, 5 -> low, ...
    """
    return RISK_LEVELS[(n - 1) % len(RISK_LEVELS)]


def generate_id(prefix: str = "id") -> str:
    return uid(prefix)
