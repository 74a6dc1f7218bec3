from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from pydantic import TypeAdapter, ValidationError

from bakery_pos.application.dto.responses import MenuItemResponse
from bakery_pos.application.mappers.menu_mapper import to_menu_item_response
from bakery_pos.application.metrics.pos_metrics import record_menu_cache
from bakery_pos.application.ports.cache import CacheStore
from bakery_pos.application.ports.repositories import MenuRepository

MENU_ITEMS_CACHE_KEY = "menu:items"

logger = logging.getLogger(__name__)
_items_adapter = TypeAdapter(list[MenuItemResponse])


@dataclass(frozen=True)
class MenuSnapshot:
    items: list[MenuItemResponse]
    etag: str


def menu_etag(payload: str) -> str:
    return '"' + hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16] + '"'


def invalidate_menu_cache(cache: CacheStore) -> None:
    try:
        cache.delete(MENU_ITEMS_CACHE_KEY)
    except Exception:
        logger.warning("menu_cache_invalidate_failed")


class GetMenuItems:
    def __init__(
        self,
        repository: MenuRepository,
        cache: CacheStore,
        ttl_seconds: int = 300,
    ) -> None:
        self._repository = repository
        self._cache = cache
        self._ttl_seconds = ttl_seconds

    def _cache_get(self, key: str) -> str | None:
        try:
            return self._cache.get(key)
        except Exception:
            return None

    def _cache_set(self, key: str, value: str) -> None:
        try:
            self._cache.set(key, value, ttl_seconds=self._ttl_seconds)
        except Exception:
            return

    def execute(self) -> MenuSnapshot:
        payload = self._cache_get(MENU_ITEMS_CACHE_KEY)
        if payload:
            try:
                items = _items_adapter.validate_json(payload)
            except ValidationError:
                items = None
            if items is not None:
                record_menu_cache("hit")
                return MenuSnapshot(items=items, etag=menu_etag(payload))

        record_menu_cache("miss")
        items = [to_menu_item_response(item) for item in self._repository.list_items()]
        payload = _items_adapter.dump_json(items).decode("utf-8")
        self._cache_set(MENU_ITEMS_CACHE_KEY, payload)
        return MenuSnapshot(items=items, etag=menu_etag(payload))


class ListCategories:
    def __init__(self, repository: MenuRepository) -> None:
        self._repository = repository

    def execute(self) -> list[str]:
        return self._repository.list_categories()
