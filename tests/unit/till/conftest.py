from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from bakery_pos.application.dto.responses import (
    AuditLogResponse,
    ChannelStatusResponse,
    DeletedResponse,
    MenuItemResponse,
    OrderItemResponse,
    OrderResponse,
    PaymentResponse,
    StaffResponse,
    WasteResponse,
)
from bakery_pos.application.ports.bakery_api import ApiError
from bakery_pos.domain.common.ids import StaffId
from bakery_pos.domain.staff.entities import Actor

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def staff_response(staff_id: int = 1, full_name: str = "Olive Baker", **overrides) -> StaffResponse:
    values = {
        "staff_id": staff_id,
        "full_name": full_name,
        "access_code": "10001",
        "dob": date(1985, 4, 12),
        "email": "olive@happyday.example",
        "joined_date": date(2020, 1, 6),
        "is_active": True,
        "role_name": "Owner",
        "can_toggle_channel": True,
        "can_waste": True,
        "can_refund": True,
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return StaffResponse(**values)


class FakeBakeryApi:
    """Records every call; responses are built from the request."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []
        self.audit_entries: list[AuditLogResponse] = []
        self.orders: list[OrderResponse] = []
        self.menu_items: list[MenuItemResponse] = []
        self.staff = staff_response()
        self.fail_audit: Exception | None = None
        self.fail_orders: Exception | None = None

    def login(self, access_code: str) -> StaffResponse:
        self.calls.append(("login", access_code))
        if access_code != self.staff.access_code:
            raise ApiError(401, "INVALID_ACCESS_CODE", "Invalid access code or account is inactive.")
        return self.staff

    def list_menu_items(self) -> list[MenuItemResponse]:
        self.calls.append(("list_menu_items", None))
        return list(self.menu_items)

    def list_categories(self) -> list[str]:
        return sorted({item.category_name for item in self.menu_items})

    def create_menu_item(self, request_dto) -> MenuItemResponse:
        self.calls.append(("create_menu_item", request_dto))
        return MenuItemResponse(
            id=100,
            name=request_dto.item_name,
            price=float(request_dto.unit_cost),
            category_name=request_dto.category_name,
            is_published=request_dto.is_published,
            is_archived=False,
        )

    def update_menu_item(self, item_id: int, request_dto) -> MenuItemResponse:
        self.calls.append(("update_menu_item", (item_id, request_dto)))
        return MenuItemResponse(
            id=item_id,
            name="Croissant",
            price=float(request_dto.unit_cost) if request_dto.unit_cost is not None else 2.5,
            category_name="Pastry",
            is_published=bool(request_dto.is_published),
            is_archived=bool(request_dto.is_archived),
        )

    def set_channel_availability(self, item_id, order_type, is_available) -> ChannelStatusResponse:
        self.calls.append(("set_channel_availability", (item_id, order_type, is_available)))
        return ChannelStatusResponse(
            item_id=item_id,
            order_type_id=order_type.channel_id,
            is_available=is_available,
        )

    def create_order(self, request_dto) -> OrderResponse:
        self.calls.append(("create_order", request_dto))
        if self.fail_orders is not None:
            raise self.fail_orders
        order = OrderResponse(
            order_id=len(self.orders) + 1,
            customer_name=request_dto.customer_name,
            order_type=request_dto.order_type.value,
            status="paid",
            paid_at=NOW,
            created_at=NOW,
            staff_id=request_dto.staff_id,
            items=[
                OrderItemResponse(item_id=line.item_id, name="Item", price=0.0, qty=line.quantity)
                for line in request_dto.items
            ],
            payment=PaymentResponse(
                total=float(request_dto.total),
                subtotal=float(request_dto.subtotal),
                vat_amount=float(request_dto.vat_amount),
                service_amount=float(request_dto.service_amount),
                method=request_dto.payment_method.value,
            ),
        )
        self.orders.append(order)
        return order

    def list_orders(self, period: str = "today") -> list[OrderResponse]:
        self.calls.append(("list_orders", period))
        return list(self.orders)

    def record_waste(self, request_dto) -> WasteResponse:
        self.calls.append(("record_waste", request_dto))
        return WasteResponse(
            id=1,
            item_id=request_dto.item_id,
            item_name=request_dto.item_name,
            category_name=request_dto.category_name,
            qty=request_dto.quantity,
            unit_cost=float(request_dto.unit_cost),
            recorded_by=self.staff.full_name,
            recorded_at=NOW,
        )

    def list_waste(self, period: str = "today") -> list[WasteResponse]:
        return []

    def delete_waste(self, waste_id: int) -> DeletedResponse:
        self.calls.append(("delete_waste", waste_id))
        return DeletedResponse(deleted=True)

    def append_audit_log(self, request_dto) -> AuditLogResponse:
        if self.fail_audit is not None:
            raise self.fail_audit
        entry = AuditLogResponse(
            id=len(self.audit_entries) + 1,
            timestamp=NOW,
            user_id=request_dto.staff_id,
            user_name=request_dto.user_name or "",
            role=request_dto.role or "",
            action=request_dto.action,
            details=request_dto.details or "",
        )
        self.audit_entries.append(entry)
        return entry

    def list_audit_logs(self) -> list[AuditLogResponse]:
        return list(reversed(self.audit_entries))

    def list_staff(self) -> list[StaffResponse]:
        return [self.staff]

    def register_staff(self, request_dto) -> StaffResponse:
        self.calls.append(("register_staff", request_dto))
        return staff_response(
            staff_id=2,
            full_name=request_dto.full_name,
            access_code=request_dto.access_code,
            role_name=request_dto.role_name.value,
        )

    def update_staff(self, staff_id: int, request_dto) -> StaffResponse:
        self.calls.append(("update_staff", (staff_id, request_dto)))
        return staff_response(staff_id=staff_id, full_name="Sam Crust", is_active=request_dto.is_active)


@pytest.fixture
def api() -> FakeBakeryApi:
    return FakeBakeryApi()


@pytest.fixture
def actor() -> Actor:
    return Actor(staff_id=StaffId(1), full_name="Olive Baker", role_name="Owner")
