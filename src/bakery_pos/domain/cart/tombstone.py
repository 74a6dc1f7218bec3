from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Tombstone(Generic[T]):
    """A soft-deleted value that can be restored until it expires."""

    value: T
    deleted_at: datetime
    expires_at: datetime

    @classmethod
    def bury(cls, value: T, now: datetime, ttl: timedelta) -> Tombstone[T]:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        return cls(value=value, deleted_at=now, expires_at=now + ttl)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
