# sentinel/bus.py
# ------------------------------------------------------------
# Live update bus.
#
# Messages are JSON payloads appended to a Redis list that the
# SSE endpoint replays:
#   {"seq": 42, "type": "intrusion_detected", "data": {...}}
#
# `seq` comes from a Redis counter so readers can resume after the
# list has been trimmed.
#
# The bus is transport only: the in-memory registries and the
# alert log stay authoritative. A Redis outage is logged once per
# outage and never stops the simulation or a connected stream.
# ------------------------------------------------------------

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import redis

logger = logging.getLogger(__name__)

K_UPDATES = "updates:stream"      # list of JSON messages (SSE pulls from here)
K_SEQ = "updates:seq"             # last assigned message sequence number


class UpdateBus:
    def __init__(self, r: Optional[redis.Redis] = None, max_len: int = 500) -> None:
        self.redis = r
        self.max_len = max_len
        self._down = False

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    @property
    def down(self) -> bool:
        """True while the last Redis call failed."""
        return self._down

    # -------------------------------
    # Outage bookkeeping
    # -------------------------------
    def _failed(self, op: str, e: Exception) -> None:
        if self._down:
            logger.debug("update bus %s failed (still down): %s", op, e)
            return
        self._down = True
        logger.warning("update bus %s failed, redis unreachable: %s", op, e)

    def _ok(self) -> None:
        if self._down:
            self._down = False
            logger.info("update bus recovered, redis reachable again")

    # -------------------------------
    # Write side
    # -------------------------------
    def publish(self, kind: str, data: Dict[str, Any]) -> bool:
        """
        Append a message and keep the last `max_len`.
        Returns False when disabled or when Redis is unreachable.
        """
        if self.redis is None:
            return False

        try:
            seq = int(self.redis.incr(K_SEQ))
            self.redis.rpush(K_UPDATES, json.dumps({"seq": seq, "type": kind, "data": data}))
            self.redis.ltrim(K_UPDATES, -self.max_len, -1)
        except redis.RedisError as e:
            self._failed(f"publish type={kind}", e)
            return False

        self._ok()
        return True

    # -------------------------------
    # Read side
    # -------------------------------
    def last_seq(self) -> int:
        """
        Last assigned sequence number, 0 if none or if Redis is unreachable.
        """
        if self.redis is None:
            return 0
        try:
            v = self.redis.get(K_SEQ)
        except redis.RedisError as e:
            self._failed("last_seq", e)
            return 0

        self._ok()
        try:
            return int(v) if v is not None else 0
        except (TypeError, ValueError):
            return 0

    def read_since(self, seq: int) -> List[Dict[str, Any]]:
        """
        Messages with a sequence number greater than `seq`, oldest first.

        Messages already trimmed away are lost to the reader. If the
        newest message is older than `seq` the counter was reset
        (Redis restart or flush) and everything still listed is returned.
        Returns [] while Redis is unreachable.
        """
        if self.redis is None:
            return []

        try:
            items = self.redis.lrange(K_UPDATES, 0, -1)
        except redis.RedisError as e:
            self._failed("read", e)
            return []
        self._ok()

        if not items:
            return []

        tail_seq = int(json.loads(items[-1]).get("seq", 0))
        if tail_seq < seq:
            logger.info("update bus sequence reset (%d -> %d), resyncing reader", seq, tail_seq)
            seq = 0

        out: List[Dict[str, Any]] = []
        # newest is at the tail; walk back until we reach what was seen
        for raw in reversed(items):
            msg = json.loads(raw)
            if int(msg.get("seq", 0)) <= seq:
                break
            out.append(msg)
        out.reverse()
        return out

    def ping(self) -> bool:
        if self.redis is None:
            return False
        try:
            return bool(self.redis.ping())
        except redis.RedisError:
            return False
