from __future__ import annotations

import redis

from bakery_pos.application.ports.key_value import KeyValueStore
from bakery_pos.infrastructure.cache.redis_client import get_redis_client


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def clear(self, key: str) -> None:
        self._values.pop(key, None)


class RedisKeyValueStore(KeyValueStore):
    """Till-local state kept in Redis under ``<namespace>:<key>``.

    Values never expire; the till owns their lifecycle. A ``client`` passed
    in must be created with ``decode_responses=True``.
    """

    def __init__(
        self,
        namespace: str = "till",
        client: redis.Redis | None = None,
        timeout_seconds: float = 1.0,
    ) -> None:
        self._namespace = namespace
        self._client = client
        self._timeout_seconds = timeout_seconds

    def get(self, key: str) -> str | None:
        return self._redis().get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self._redis().set(name=self._key(key), value=value)

    def clear(self, key: str) -> None:
        self._redis().delete(self._key(key))

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def _redis(self) -> redis.Redis:
        if self._client is not None:
            return self._client
        return get_redis_client(timeout_seconds=self._timeout_seconds)
