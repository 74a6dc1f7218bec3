from __future__ import annotations

import logging

from bakery_pos.application.dto.responses import MenuItemResponse
from bakery_pos.application.mappers.menu_mapper import to_menu_item
from bakery_pos.application.ports.bakery_api import BakeryApi
from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.menu.entities import MenuItem, OrderType

logger = logging.getLogger(__name__)


class CatalogView:
    """The till's copy of the menu.

    Each refresh takes a ticket. A fetch only lands if no later-issued fetch
    has landed already, so a slow response cannot overwrite newer data.
    Refreshing never touches a cart; carts hold their own item snapshots.
    """

    def __init__(self, api: BakeryApi) -> None:
        self._api = api
        self._items: list[MenuItem] = []
        self._issued = 0
        self._applied = 0

    @property
    def items(self) -> list[MenuItem]:
        return list(self._items)

    def begin_refresh(self) -> int:
        self._issued += 1
        return self._issued

    def complete_refresh(self, ticket: int, responses: list[MenuItemResponse]) -> bool:
        if ticket <= self._applied:
            logger.info("stale_catalog_refresh_ignored")
            return False
        self._items = [to_menu_item(response) for response in responses]
        self._applied = ticket
        return True

    def refresh(self) -> list[MenuItem]:
        ticket = self.begin_refresh()
        self.complete_refresh(ticket, self._api.list_menu_items())
        return self.items

    def find(self, item_id: MenuItemId) -> MenuItem | None:
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def available_for(self, order_type: OrderType) -> list[MenuItem]:
        return [item for item in self._items if item.is_available_for(order_type)]

    def categories(self) -> list[str]:
        return sorted({item.category_name for item in self._items if not item.is_archived})

    def archived(self) -> list[MenuItem]:
        return [item for item in self._items if item.is_archived]
