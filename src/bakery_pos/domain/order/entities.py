from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from bakery_pos.domain.common.ids import MenuItemId, OrderId, StaffId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.domain.order.totals import OrderTotals


class OrderStatus(str, Enum):
    PAID = "paid"


class PaymentMethod(str, Enum):
    CARD = "card"
    CASH = "cash"
    QR = "qr"


@dataclass(frozen=True)
class OrderLine:
    item_id: MenuItemId
    quantity: int
    add_on_ids: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")


@dataclass(frozen=True)
class Payment:
    method: PaymentMethod
    totals: OrderTotals


@dataclass(frozen=True)
class NewOrder:
    """A paid order ready to be written in one transaction."""

    order_type: OrderType
    customer_name: str
    staff_id: StaffId
    lines: list[OrderLine]
    payment: Payment
    created_at: datetime
    table_id: int | None = None

    def __post_init__(self) -> None:
        if not self.lines:
            raise ValueError("order must contain at least one line")
        if not self.customer_name.strip():
            raise ValueError("customer_name must be non-empty")


@dataclass(frozen=True)
class OrderedItem:
    item_id: MenuItemId
    name: str
    unit_price: Money
    quantity: int
    add_on_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    order_type: OrderType
    customer_name: str
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    created_staff_id: StaffId
    updated_staff_id: StaffId
    payment: Payment | None
    items: list[OrderedItem] = field(default_factory=list)
    table_id: int | None = None

    @property
    def paid_at(self) -> datetime:
        return self.updated_at
