"""
Builders and test doubles shared across the suite.
"""

from typing import Dict, List

import redis

from sentinel.models import Asset, Position, RestrictedZone


class RecordingRedis:
    """
    In-process stand-in for the handful of Redis list/counter
    commands the update bus uses. Set `down` to make every
    command fail the way an unreachable server does.
    """

    def __init__(self) -> None:
        self.lists: Dict[str, List[str]] = {}
        self.values: Dict[str, str] = {}
        self.down = False

    def _check(self) -> None:
        if self.down:
            raise redis.ConnectionError("redis is down")

    def flush(self) -> None:
        self.lists.clear()
        self.values.clear()

    def incr(self, key: str) -> int:
        self._check()
        v = int(self.values.get(key, "0")) + 1
        self.values[key] = str(v)
        return v

    def get(self, key: str):
        self._check()
        return self.values.get(key)

    def rpush(self, key: str, value: str) -> int:
        self._check()
        self.lists.setdefault(key, []).append(value)
        return len(self.lists[key])

    def ltrim(self, key: str, start: int, end: int) -> bool:
        self._check()
        # only the "keep last N" form is used
        assert end == -1 and start < 0
        self.lists[key] = self.lists.get(key, [])[start:]
        return True

    def lrange(self, key: str, start: int, end: int) -> List[str]:
        self._check()
        items = self.lists.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]

    def ping(self) -> bool:
        self._check()
        return True


class BrokenRedis(RecordingRedis):
    def __init__(self) -> None:
        super().__init__()
        self.down = True


def square(lat0: float, lng0: float, size: float = 1.0) -> List[Position]:
    return [
        Position(lat=lat0, lng=lng0),
        Position(lat=lat0, lng=lng0 + size),
        Position(lat=lat0 + size, lng=lng0 + size),
        Position(lat=lat0 + size, lng=lng0),
    ]


def make_zone(zone_id: str, points: List[Position], risk: str = "high") -> RestrictedZone:
    return RestrictedZone(
        id=zone_id,
        name=f"Zone {zone_id}",
        points=points,
        risk_level=risk,
        color="hsl(20, 85%, 55%)",
    )


def make_asset(asset_id: str, lat: float, lng: float, **kw) -> Asset:
    kw.setdefault("label", asset_id.upper())
    kw.setdefault("type", "vehicle")
    return Asset(id=asset_id, position=Position(lat=lat, lng=lng), **kw)
