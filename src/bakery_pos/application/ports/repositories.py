from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from bakery_pos.domain.audit.entities import AuditLogEntry
from bakery_pos.domain.common.ids import MenuItemId, OrderId, StaffId, WasteId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType
from bakery_pos.domain.order.entities import NewOrder, Order
from bakery_pos.domain.staff.entities import Actor, Staff, StaffRole
from bakery_pos.domain.waste.entities import WasteEntry


class StaffRepository(Protocol):
    def get(self, staff_id: StaffId) -> Staff | None: ...

    def find_active_by_access_code(self, access_code: str) -> Staff | None: ...

    def access_code_exists(self, access_code: str) -> bool: ...

    def list_newest_first(self) -> list[Staff]: ...

    def add(self, new_staff: NewStaff) -> Staff: ...

    def update_flags(self, staff_id: StaffId, changes: StaffFlagChanges) -> Staff | None: ...


class MenuRepository(Protocol):
    def list_items(self) -> list[MenuItem]: ...

    def get_item(self, item_id: MenuItemId) -> MenuItem | None: ...

    def get_items(self, item_ids: set[MenuItemId]) -> dict[MenuItemId, MenuItem]: ...

    def existing_add_on_ids(self, add_on_ids: set[int]) -> set[int]: ...

    def list_categories(self) -> list[str]: ...

    def add_item(
        self,
        name: str,
        price: Money,
        category_name: str,
        is_published: bool,
    ) -> MenuItem: ...

    def update_item(self, item_id: MenuItemId, changes: MenuItemChanges) -> MenuItem | None: ...

    def set_channel_availability(
        self,
        item_id: MenuItemId,
        order_type: OrderType,
        is_available: bool,
    ) -> bool: ...


class OrderRepository(Protocol):
    def add(self, order: NewOrder) -> Order: ...

    def table_exists(self, table_id: int) -> bool: ...

    def get(self, order_id: OrderId) -> Order | None: ...

    def list_between(self, start: datetime | None, end: datetime | None) -> list[Order]: ...


class WasteRepository(Protocol):
    def add(self, entry: NewWasteEntry) -> WasteEntry: ...

    def list_between(self, start: datetime | None, end: datetime | None) -> list[WasteEntry]: ...

    def delete(self, waste_id: WasteId) -> bool: ...


class AuditLogRepository(Protocol):
    def append(
        self,
        actor: Actor,
        action: str,
        details: str,
        timestamp: datetime,
    ) -> AuditLogEntry: ...

    def list_newest_first(self) -> list[AuditLogEntry]: ...


@dataclass(frozen=True)
class NewStaff:
    full_name: str
    access_code: str
    dob: date
    email: str
    joined_date: date
    is_active: bool
    role_name: StaffRole
    can_toggle_channel: bool
    can_waste: bool
    can_refund: bool


@dataclass(frozen=True)
class StaffFlagChanges:
    is_active: bool | None = None
    can_toggle_channel: bool | None = None
    can_waste: bool | None = None
    can_refund: bool | None = None

    def as_values(self) -> dict[str, bool]:
        return {name: value for name, value in self.__dict__.items() if value is not None}


@dataclass(frozen=True)
class MenuItemChanges:
    price: Money | None = None
    is_published: bool | None = None
    is_archived: bool | None = None


@dataclass(frozen=True)
class NewWasteEntry:
    staff_id: StaffId
    item_id: MenuItemId | None
    item_name: str
    category_name: str
    quantity: int
    unit_cost: Money
    recorded_at: datetime
