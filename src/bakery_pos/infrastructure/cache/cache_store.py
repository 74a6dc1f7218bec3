from __future__ import annotations

from bakery_pos.application.ports.cache import CacheStore
from bakery_pos.infrastructure.cache.redis_client import get_redis_client


class RedisCacheStore(CacheStore):
    """Read-through cache backend; callers treat every error as a miss."""

    def __init__(self, timeout_seconds: float = 0.5) -> None:
        self._timeout_seconds = timeout_seconds

    def get(self, key: str) -> str | None:
        return get_redis_client(timeout_seconds=self._timeout_seconds).get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        get_redis_client(timeout_seconds=self._timeout_seconds).set(key, value, ex=ttl_seconds)

    def delete(self, key: str) -> None:
        get_redis_client(timeout_seconds=self._timeout_seconds).delete(key)
