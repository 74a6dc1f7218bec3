from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from bakery_pos.application.dto.requests import (
    ChannelStatusUpdateRequest,
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
)
from bakery_pos.application.use_cases.get_menu import (
    MENU_ITEMS_CACHE_KEY,
    GetMenuItems,
    menu_etag,
)
from bakery_pos.application.use_cases.manage_menu import (
    ChannelStatusNotFoundError,
    CreateMenuItem,
    MenuItemNotFoundError,
    SetChannelAvailability,
    UnknownChannelError,
    UpdateMenuItem,
)
from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType


class FakeMenuRepository:
    def __init__(self) -> None:
        self.items: dict[MenuItemId, MenuItem] = {
            MenuItemId(6): MenuItem(
                item_id=MenuItemId(6),
                name="Croissant",
                price=Money(amount_pence=250),
                category_name="Pastry",
            )
        }
        self.list_calls = 0

    def list_items(self) -> list[MenuItem]:
        self.list_calls += 1
        return list(self.items.values())

    def add_item(self, name, price, category_name, is_published) -> MenuItem:
        item = MenuItem(
            item_id=MenuItemId(len(self.items) + 10),
            name=name,
            price=price,
            category_name=category_name,
            is_published=is_published,
            channels={order_type: is_published for order_type in OrderType},
        )
        self.items[item.item_id] = item
        return item

    def update_item(self, item_id, changes) -> MenuItem | None:
        item = self.items.get(item_id)
        if item is None:
            return None
        if changes.price is not None:
            item = item.with_price(changes.price)
        if changes.is_archived:
            item = item.archived()
        elif changes.is_archived is False:
            item = item.restored()
        if changes.is_published is not None and not item.is_archived:
            item = item.published(changes.is_published)
        self.items[item_id] = item
        return item

    def set_channel_availability(self, item_id, order_type, is_available) -> bool:
        return item_id in self.items


class FakeCacheStore:
    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class BrokenCacheStore:
    def get(self, key: str) -> str | None:
        raise ConnectionError("redis down")

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise ConnectionError("redis down")

    def delete(self, key: str) -> None:
        raise ConnectionError("redis down")


def test_menu_is_served_from_cache_when_warm() -> None:
    repo = FakeMenuRepository()
    cache = FakeCacheStore()

    first = GetMenuItems(repository=repo, cache=cache).execute()
    second = GetMenuItems(repository=repo, cache=cache).execute()

    assert repo.list_calls == 1
    assert second.items == first.items
    assert second.etag == first.etag == menu_etag(cache.values[MENU_ITEMS_CACHE_KEY])


def test_menu_falls_back_to_database_when_cache_fails() -> None:
    repo = FakeMenuRepository()

    snapshot = GetMenuItems(repository=repo, cache=BrokenCacheStore()).execute()

    assert [item.name for item in snapshot.items] == ["Croissant"]
    assert snapshot.etag.startswith('"') and len(snapshot.etag) == 18


def test_corrupt_cache_entry_is_rebuilt() -> None:
    repo = FakeMenuRepository()
    cache = FakeCacheStore()
    cache.values[MENU_ITEMS_CACHE_KEY] = "{not json"

    GetMenuItems(repository=repo, cache=cache).execute()

    assert repo.list_calls == 1
    assert cache.values[MENU_ITEMS_CACHE_KEY].startswith("[")


def test_mutations_drop_cached_menu() -> None:
    repo = FakeMenuRepository()
    cache = FakeCacheStore()
    before = GetMenuItems(repository=repo, cache=cache).execute()

    UpdateMenuItem(repository=repo, cache=cache).execute(
        MenuItemId(6), MenuItemUpdateRequest(unit_cost="2.75")
    )
    assert MENU_ITEMS_CACHE_KEY not in cache.values

    after = GetMenuItems(repository=repo, cache=cache).execute()
    assert after.items[0].price == 2.75
    assert after.etag != before.etag


def test_create_item_survives_broken_cache() -> None:
    response = CreateMenuItem(repository=FakeMenuRepository(), cache=BrokenCacheStore()).execute(
        MenuItemCreateRequest(item_name="Eccles Cake", unit_cost="2.60", category_name="Pastry")
    )

    assert response.price == 2.6
    assert [channel.is_available for channel in response.channels] == [True, True]


def test_archiving_forces_unpublished() -> None:
    response = UpdateMenuItem(repository=FakeMenuRepository(), cache=FakeCacheStore()).execute(
        MenuItemId(6), MenuItemUpdateRequest(is_archived=True, is_published=True)
    )

    assert response.is_archived
    assert not response.is_published


def test_update_missing_item_raises() -> None:
    with pytest.raises(MenuItemNotFoundError):
        UpdateMenuItem(repository=FakeMenuRepository(), cache=FakeCacheStore()).execute(
            MenuItemId(404), MenuItemUpdateRequest(is_published=False)
        )


def test_channel_update_validates_order_type_and_row() -> None:
    use_case = SetChannelAvailability(repository=FakeMenuRepository(), cache=FakeCacheStore())
    request_dto = ChannelStatusUpdateRequest(is_available=False)

    response = use_case.execute(MenuItemId(6), 2, request_dto)
    assert (response.item_id, response.order_type_id, response.is_available) == (6, 2, False)

    with pytest.raises(UnknownChannelError):
        use_case.execute(MenuItemId(6), 3, request_dto)
    with pytest.raises(ChannelStatusNotFoundError):
        use_case.execute(MenuItemId(404), 1, request_dto)
