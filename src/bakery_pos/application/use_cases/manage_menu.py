from __future__ import annotations

from bakery_pos.application.dto.requests import (
    ChannelStatusUpdateRequest,
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
)
from bakery_pos.application.dto.responses import ChannelStatusResponse, MenuItemResponse
from bakery_pos.application.mappers.menu_mapper import to_menu_item_response
from bakery_pos.application.ports.cache import CacheStore
from bakery_pos.application.ports.repositories import MenuItemChanges, MenuRepository
from bakery_pos.application.use_cases.get_menu import invalidate_menu_cache
from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import OrderType, UnknownOrderTypeError


class MenuItemNotFoundError(Exception):
    pass


class ChannelStatusNotFoundError(Exception):
    pass


class UnknownChannelError(Exception):
    pass


class CreateMenuItem:
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, request_dto: MenuItemCreateRequest) -> MenuItemResponse:
        item = self._repository.add_item(
            name=request_dto.item_name,
            price=Money.from_decimal(request_dto.unit_cost),
            category_name=request_dto.category_name,
            is_published=request_dto.is_published,
        )
        invalidate_menu_cache(self._cache)
        return to_menu_item_response(item)


class UpdateMenuItem:
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(self, item_id: MenuItemId, request_dto: MenuItemUpdateRequest) -> MenuItemResponse:
        changes = MenuItemChanges(
            price=(
                Money.from_decimal(request_dto.unit_cost)
                if request_dto.unit_cost is not None
                else None
            ),
            is_published=request_dto.is_published,
            is_archived=request_dto.is_archived,
        )
        item = self._repository.update_item(item_id, changes)
        if item is None:
            raise MenuItemNotFoundError(f"menu item {item_id} not found")
        invalidate_menu_cache(self._cache)
        return to_menu_item_response(item)


class SetChannelAvailability:
    def __init__(self, repository: MenuRepository, cache: CacheStore) -> None:
        self._repository = repository
        self._cache = cache

    def execute(
        self,
        item_id: MenuItemId,
        order_type_id: int,
        request_dto: ChannelStatusUpdateRequest,
    ) -> ChannelStatusResponse:
        try:
            order_type = OrderType.from_channel_id(order_type_id)
        except UnknownOrderTypeError as exc:
            raise UnknownChannelError(str(exc)) from exc

        updated = self._repository.set_channel_availability(
            item_id,
            order_type,
            request_dto.is_available,
        )
        if not updated:
            raise ChannelStatusNotFoundError(
                f"no channel status for item {item_id} and order type {order_type_id}"
            )
        invalidate_menu_cache(self._cache)
        return ChannelStatusResponse(
            item_id=int(item_id),
            order_type_id=order_type.channel_id,
            is_available=request_dto.is_available,
        )
