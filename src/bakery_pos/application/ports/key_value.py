from __future__ import annotations

from typing import Protocol


class KeyValueStore(Protocol):
    """Device-local persistent storage for the till."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def clear(self, key: str) -> None: ...
