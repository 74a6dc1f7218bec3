from __future__ import annotations

from typing import Any, Protocol

from bakery_pos.application.dto.requests import (
    AuditLogCreateRequest,
    CreateOrderRequest,
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
    StaffCreateRequest,
    StaffUpdateRequest,
    WasteCreateRequest,
)
from bakery_pos.application.dto.responses import (
    AuditLogResponse,
    ChannelStatusResponse,
    DeletedResponse,
    MenuItemResponse,
    OrderResponse,
    StaffResponse,
    WasteResponse,
)
from bakery_pos.domain.menu.entities import OrderType


class ApiError(Exception):
    """The backend answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.details = details or {}


class ApiUnavailableError(Exception):
    """The backend could not be reached."""


class BakeryApi(Protocol):
    def login(self, access_code: str) -> StaffResponse: ...

    def list_menu_items(self) -> list[MenuItemResponse]: ...

    def list_categories(self) -> list[str]: ...

    def create_menu_item(self, request_dto: MenuItemCreateRequest) -> MenuItemResponse: ...

    def update_menu_item(
        self,
        item_id: int,
        request_dto: MenuItemUpdateRequest,
    ) -> MenuItemResponse: ...

    def set_channel_availability(
        self,
        item_id: int,
        order_type: OrderType,
        is_available: bool,
    ) -> ChannelStatusResponse: ...

    def create_order(self, request_dto: CreateOrderRequest) -> OrderResponse: ...

    def list_orders(self, period: str = "today") -> list[OrderResponse]: ...

    def record_waste(self, request_dto: WasteCreateRequest) -> WasteResponse: ...

    def list_waste(self, period: str = "today") -> list[WasteResponse]: ...

    def delete_waste(self, waste_id: int) -> DeletedResponse: ...

    def append_audit_log(self, request_dto: AuditLogCreateRequest) -> AuditLogResponse: ...

    def list_audit_logs(self) -> list[AuditLogResponse]: ...

    def list_staff(self) -> list[StaffResponse]: ...

    def register_staff(self, request_dto: StaffCreateRequest) -> StaffResponse: ...

    def update_staff(self, staff_id: int, request_dto: StaffUpdateRequest) -> StaffResponse: ...
