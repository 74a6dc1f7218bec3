from __future__ import annotations

import logging
import os
from functools import lru_cache

import redis

logger = logging.getLogger(__name__)


class RedisNotConfiguredError(RuntimeError):
    pass


def redis_configured() -> bool:
    """The menu cache and till storage are optional; both need ``REDIS_URL``."""
    return bool(os.getenv("REDIS_URL"))


@lru_cache(maxsize=8)
def _build_client(redis_url: str, timeout_seconds: float) -> redis.Redis:
    return redis.Redis.from_url(
        redis_url,
        decode_responses=True,
        socket_connect_timeout=timeout_seconds,
        socket_timeout=timeout_seconds,
        health_check_interval=30,
    )


def get_redis_client(timeout_seconds: float = 1.0) -> redis.Redis:
    url = os.getenv("REDIS_URL")
    if not url:
        raise RedisNotConfiguredError("REDIS_URL is not set")
    return _build_client(url, timeout_seconds)


def ping_redis(timeout_seconds: float = 1.0) -> bool:
    if not redis_configured():
        return False
    try:
        return bool(get_redis_client(timeout_seconds).ping())
    except redis.RedisError:
        logger.warning("redis_ping_failed", exc_info=True)
        return False
