# sentinel/redis_client.py
# ------------------------------------------------------------
# Centralized Redis connection helper.
# ------------------------------------------------------------

import redis
from .config import settings


def get_redis(url: str = "") -> redis.Redis:
    """
    Returns a Redis client instance.

    - decode_responses=True ensures all values are returned as str
      (important for JSON handling and SSE payloads).
    """
    return redis.Redis.from_url(
        url or settings.redis_url,
        decode_responses=True,
    )
