from __future__ import annotations

from decimal import Decimal

from bakery_pos.application.dto.requests import (
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
    StaffCreateRequest,
    StaffUpdateRequest,
    WasteCreateRequest,
)
from bakery_pos.application.dto.responses import (
    ChannelStatusResponse,
    DeletedResponse,
    MenuItemResponse,
    StaffResponse,
    WasteResponse,
)
from bakery_pos.application.ports.bakery_api import BakeryApi
from bakery_pos.application.till.audit import AuditEmitter
from bakery_pos.domain.audit.entities import AuditAction
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType
from bakery_pos.domain.staff.entities import Actor


class BackOffice:
    """Manager actions from the till.

    Each helper makes one REST call and, only if it succeeded, writes one
    audit entry describing it.
    """

    def __init__(self, api: BakeryApi, audit: AuditEmitter, actor: Actor) -> None:
        self._api = api
        self._audit = audit
        self._actor = actor

    def change_price(self, item: MenuItem, new_price: Decimal | str) -> MenuItemResponse:
        price = Money.from_decimal(new_price)
        updated = self._api.update_menu_item(
            int(item.item_id),
            MenuItemUpdateRequest(unit_cost=price.to_decimal()),
        )
        self._audit.emit(
            self._actor,
            AuditAction.PRICE_UPDATED,
            f"{item.name}: {item.price.format()} → {price.format()}",
        )
        return updated

    def set_published(self, item: MenuItem, is_published: bool) -> MenuItemResponse:
        updated = self._api.update_menu_item(
            int(item.item_id),
            MenuItemUpdateRequest(is_published=is_published),
        )
        action = AuditAction.ITEM_PUBLISHED if is_published else AuditAction.ITEM_UNPUBLISHED
        self._audit.emit(self._actor, action, f"{item.name} ({item.category_name})")
        return updated

    def set_channel_availability(
        self,
        item: MenuItem,
        order_type: OrderType,
        is_available: bool,
    ) -> ChannelStatusResponse:
        status = self._api.set_channel_availability(int(item.item_id), order_type, is_available)
        state = "available" if is_available else "unavailable"
        self._audit.emit(
            self._actor,
            AuditAction.CHANNEL_TOGGLED,
            f"{item.name} · {order_type.value} · {state}",
        )
        return status

    def add_item(
        self,
        name: str,
        price: Decimal | str,
        category_name: str,
        is_published: bool = True,
    ) -> MenuItemResponse:
        amount = Money.from_decimal(price)
        created = self._api.create_menu_item(
            MenuItemCreateRequest(
                item_name=name,
                unit_cost=amount.to_decimal(),
                category_name=category_name,
                is_published=is_published,
            )
        )
        self._audit.emit(self._actor, AuditAction.ITEM_ADDED, f"{created.name} · {amount.format()}")
        return created

    def archive_item(self, item: MenuItem) -> MenuItemResponse:
        updated = self._api.update_menu_item(
            int(item.item_id),
            MenuItemUpdateRequest(is_archived=True),
        )
        self._audit.emit(self._actor, AuditAction.ITEM_ARCHIVED, item.name)
        return updated

    def restore_item(self, item: MenuItem) -> MenuItemResponse:
        updated = self._api.update_menu_item(
            int(item.item_id),
            MenuItemUpdateRequest(is_archived=False),
        )
        self._audit.emit(self._actor, AuditAction.ITEM_RESTORED, item.name)
        return updated

    def record_waste(
        self,
        item_name: str,
        category_name: str,
        quantity: int,
        unit_cost: Decimal | str,
        item: MenuItem | None = None,
    ) -> WasteResponse:
        cost = Money.from_decimal(unit_cost)
        entry = self._api.record_waste(
            WasteCreateRequest(
                staff_id=int(self._actor.staff_id),
                item_id=int(item.item_id) if item is not None else None,
                item_name=item_name,
                category_name=category_name,
                quantity=quantity,
                unit_cost=cost.to_decimal(),
            )
        )
        self._audit.emit(
            self._actor,
            AuditAction.WASTE_RECORDED,
            f"{entry.item_name} × {entry.qty} · {cost.times(quantity).format()}",
        )
        return entry

    def delete_waste(self, entry: WasteResponse) -> DeletedResponse:
        result = self._api.delete_waste(entry.id)
        self._audit.emit(
            self._actor,
            AuditAction.WASTE_DELETED,
            f"{entry.item_name} × {entry.qty}",
        )
        return result

    def register_staff(self, request_dto: StaffCreateRequest) -> StaffResponse:
        staff = self._api.register_staff(request_dto)
        self._audit.emit(
            self._actor,
            AuditAction.STAFF_REGISTERED,
            f"{staff.full_name} ({staff.role_name})",
        )
        return staff

    def set_staff_active(self, staff: StaffResponse, is_active: bool) -> StaffResponse:
        updated = self._api.update_staff(staff.staff_id, StaffUpdateRequest(is_active=is_active))
        action = AuditAction.STAFF_ACTIVATED if updated.is_active else AuditAction.STAFF_DEACTIVATED
        self._audit.emit(self._actor, action, updated.full_name)
        return updated
