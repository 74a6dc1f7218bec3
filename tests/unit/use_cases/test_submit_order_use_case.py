from __future__ import annotations

import sys
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from bakery_pos.application.dto.requests import CreateOrderRequest
from bakery_pos.application.use_cases.submit_order import (
    OrderValidationError,
    SubmitOrder,
    TotalsMismatchError,
)
from bakery_pos.domain.common.ids import MenuItemId, OrderId, StaffId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem
from bakery_pos.domain.order.entities import NewOrder, Order, OrderedItem, OrderStatus
from bakery_pos.domain.staff.entities import Staff, StaffRole

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _staff(is_active: bool = True) -> Staff:
    return Staff(
        staff_id=StaffId(1),
        full_name="Olive Baker",
        access_code="10001",
        dob=date(1985, 4, 12),
        email="olive@happyday.example",
        joined_date=date(2020, 1, 6),
        is_active=is_active,
        role_name=StaffRole.OWNER,
        can_toggle_channel=True,
        can_waste=True,
        can_refund=True,
        created_at=NOW,
        updated_at=NOW,
    )


class FakeStaffRepository:
    def __init__(self, staff: Staff | None) -> None:
        self._staff = staff

    def get(self, staff_id: StaffId) -> Staff | None:
        if self._staff is not None and self._staff.staff_id == staff_id:
            return self._staff
        return None


class FakeMenuRepository:
    def __init__(self) -> None:
        self._items = {
            MenuItemId(6): MenuItem(
                item_id=MenuItemId(6),
                name="Croissant",
                price=Money(amount_pence=250),
                category_name="Pastry",
            ),
            MenuItemId(4): MenuItem(
                item_id=MenuItemId(4),
                name="Seeded Roll",
                price=Money(amount_pence=180),
                category_name="Bread",
            ),
        }

    def get_items(self, item_ids: set[MenuItemId]) -> dict[MenuItemId, MenuItem]:
        return {item_id: self._items[item_id] for item_id in item_ids if item_id in self._items}

    def existing_add_on_ids(self, add_on_ids: set[int]) -> set[int]:
        return add_on_ids & {1, 2}


class FakeOrderRepository:
    def __init__(self) -> None:
        self.saved: list[NewOrder] = []

    def table_exists(self, table_id: int) -> bool:
        return table_id == 3

    def add(self, order: NewOrder) -> Order:
        self.saved.append(order)
        return Order(
            order_id=OrderId(len(self.saved)),
            order_type=order.order_type,
            customer_name=order.customer_name,
            status=OrderStatus.PAID,
            created_at=order.created_at,
            updated_at=order.created_at,
            created_staff_id=order.staff_id,
            updated_staff_id=order.staff_id,
            payment=order.payment,
            items=[
                OrderedItem(
                    item_id=line.item_id,
                    name="Item",
                    unit_price=Money.zero(),
                    quantity=line.quantity,
                    add_on_ids=line.add_on_ids,
                )
                for line in order.lines
            ],
        )


def _request(**overrides) -> CreateOrderRequest:
    values = {
        "customer_name": "Walk-in",
        "order_type": "eat_in",
        "staff_id": 1,
        "payment_method": "cash",
        "total": "8.84",
        "subtotal": "6.80",
        "vat_amount": "1.36",
        "service_amount": "0.68",
        "items": [{"item_id": 6, "quantity": 2}, {"item_id": 4, "quantity": 1}],
    }
    values.update(overrides)
    return CreateOrderRequest.model_validate(values)


def _use_case(staff: Staff | None = None, strict_totals: bool = True):
    orders = FakeOrderRepository()
    use_case = SubmitOrder(
        staff_repository=FakeStaffRepository(staff if staff is not None else _staff()),
        menu_repository=FakeMenuRepository(),
        order_repository=orders,
        strict_totals=strict_totals,
        clock=lambda: NOW,
    )
    return use_case, orders


def test_valid_order_is_written_with_payment_breakdown() -> None:
    use_case, orders = _use_case()

    response = use_case.execute(_request())

    assert response.order_id == 1
    assert response.status == "paid"
    assert response.payment.total == 8.84
    assert response.payment.method == "cash"
    assert orders.saved[0].payment.totals.vat == Money(amount_pence=136)
    assert orders.saved[0].created_at == NOW


def test_unknown_item_is_reported_by_line() -> None:
    use_case, orders = _use_case()

    with pytest.raises(OrderValidationError) as exc_info:
        use_case.execute(
            _request(items=[{"item_id": 6, "quantity": 2}, {"item_id": 999, "quantity": 1}])
        )

    assert list(exc_info.value.fields) == ["items.1.item_id"]
    assert orders.saved == []


def test_unknown_add_on_and_inactive_staff_are_both_reported() -> None:
    use_case, orders = _use_case(staff=_staff(is_active=False))

    with pytest.raises(OrderValidationError) as exc_info:
        use_case.execute(
            _request(
                items=[
                    {"item_id": 6, "quantity": 2, "add_on_ids": [1, 7]},
                    {"item_id": 4, "quantity": 1},
                ]
            )
        )

    assert exc_info.value.fields["staff_id"] == ["staff 1 is not active"]
    assert exc_info.value.fields["items.0.add_on_ids"] == ["add-on 7 does not exist"]
    assert orders.saved == []


def test_total_must_equal_breakdown() -> None:
    use_case, orders = _use_case(strict_totals=False)

    with pytest.raises(TotalsMismatchError) as exc_info:
        use_case.execute(_request(total="8.85"))

    assert exc_info.value.details == {"expected": {"total": 8.84}}
    assert orders.saved == []


def test_strict_mode_checks_catalog_subtotal() -> None:
    use_case, _ = _use_case()

    with pytest.raises(TotalsMismatchError) as exc_info:
        use_case.execute(_request(subtotal="6.00", vat_amount="2.16", total="8.84"))

    assert exc_info.value.details == {"expected": {"subtotal": 6.8}}


def test_strict_mode_rejects_takeaway_service() -> None:
    use_case, _ = _use_case()

    with pytest.raises(TotalsMismatchError):
        use_case.execute(_request(order_type="takeaway"))


def test_relaxed_mode_trusts_client_subtotal() -> None:
    use_case, orders = _use_case(strict_totals=False)

    use_case.execute(_request(subtotal="6.00", vat_amount="2.16", total="8.84"))

    assert orders.saved[0].payment.totals.subtotal == Money(amount_pence=600)


def test_unknown_table_is_reported_before_writing() -> None:
    use_case, orders = _use_case()

    with pytest.raises(OrderValidationError) as exc_info:
        use_case.execute(_request(table_id=9))

    assert exc_info.value.fields == {"table_id": ["table 9 does not exist"]}
    assert orders.saved == []


def test_known_table_is_kept_on_the_order() -> None:
    use_case, orders = _use_case()

    use_case.execute(_request(table_id=3))

    assert orders.saved[0].table_id == 3


def test_repeated_add_on_in_a_line_is_rejected() -> None:
    with pytest.raises(ValidationError) as exc_info:
        _request(items=[{"item_id": 6, "quantity": 2, "add_on_ids": [1, 1]}])

    assert exc_info.value.errors()[0]["loc"] == ("items", 0, "add_on_ids")


def test_amounts_stay_within_stored_range() -> None:
    assert _request(total="9999999.99").total == Decimal("9999999.99")

    with pytest.raises(ValidationError) as exc_info:
        _request(total="12345678.91")

    assert exc_info.value.errors()[0]["loc"] == ("total",)
