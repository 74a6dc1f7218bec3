from __future__ import annotations

from datetime import datetime

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session, selectinload

from bakery_pos.application.ports.repositories import OrderRepository
from bakery_pos.domain.common.clock import as_utc
from bakery_pos.domain.common.ids import MenuItemId, OrderId, StaffId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.domain.order.entities import (
    NewOrder,
    Order,
    OrderedItem,
    OrderStatus,
    Payment,
    PaymentMethod,
)
from bakery_pos.domain.order.totals import OrderTotals
from bakery_pos.infrastructure.db.models.order import (
    OrderedItemAddOnModel,
    OrderedItemModel,
    OrderModel,
    PaymentModel,
)
from bakery_pos.infrastructure.db.models.table import RestaurantTableModel
from bakery_pos.infrastructure.db.session import get_engine

UNKNOWN_ITEM_NAME = "Unknown"


class SqlAlchemyOrderRepository(OrderRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, order: NewOrder) -> Order:
        """Write header, lines and payment in a single transaction."""
        model = OrderModel(
            order_type=order.order_type.value,
            customer_name=order.customer_name,
            status=OrderStatus.PAID.value,
            created_at=order.created_at,
            updated_at=order.created_at,
            table_id=order.table_id,
            created_staff_id=int(order.staff_id),
            updated_staff_id=int(order.staff_id),
        )
        model.items = [
            OrderedItemModel(
                item_id=int(line.item_id),
                quantity=line.quantity,
                add_ons=[OrderedItemAddOnModel(add_on_id=add_on_id) for add_on_id in line.add_on_ids],
            )
            for line in order.lines
        ]
        totals = order.payment.totals
        model.payment = PaymentModel(
            total_pence=totals.total.amount_pence,
            subtotal_pence=totals.subtotal.amount_pence,
            vat_pence=totals.vat.amount_pence,
            service_pence=totals.service.amount_pence,
            method=order.payment.method.value,
        )

        with Session(self._engine) as session, session.begin():
            session.add(model)
            session.flush()
            order_id = OrderId(model.id)

        created = self.get(order_id)
        if created is None:
            raise RuntimeError(f"order {order_id} not found after insert")
        return created

    def table_exists(self, table_id: int) -> bool:
        with Session(self._engine) as session:
            return session.get(RestaurantTableModel, table_id) is not None

    def get(self, order_id: OrderId) -> Order | None:
        statement = _with_details(select(OrderModel)).where(OrderModel.id == int(order_id))
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            return _to_domain(model) if model is not None else None

    def list_between(self, start: datetime | None, end: datetime | None) -> list[Order]:
        statement = _with_details(select(OrderModel))
        if start is not None:
            statement = statement.where(OrderModel.created_at >= start)
        if end is not None:
            statement = statement.where(OrderModel.created_at < end)
        statement = statement.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())

        with Session(self._engine) as session:
            return [_to_domain(model) for model in session.execute(statement).scalars()]


def _with_details(statement):
    return statement.options(
        selectinload(OrderModel.items).selectinload(OrderedItemModel.menu_item),
        selectinload(OrderModel.items).selectinload(OrderedItemModel.add_ons),
        selectinload(OrderModel.payment),
    )


def _to_domain(model: OrderModel) -> Order:
    items = [
        OrderedItem(
            item_id=MenuItemId(item.item_id),
            name=item.menu_item.name if item.menu_item else UNKNOWN_ITEM_NAME,
            unit_price=Money(amount_pence=item.menu_item.price_pence if item.menu_item else 0),
            quantity=item.quantity,
            add_on_ids=tuple(add_on.add_on_id for add_on in item.add_ons),
        )
        for item in model.items
    ]

    payment: Payment | None = None
    if model.payment is not None:
        payment = Payment(
            method=PaymentMethod(model.payment.method),
            totals=OrderTotals(
                subtotal=Money(amount_pence=model.payment.subtotal_pence),
                vat=Money(amount_pence=model.payment.vat_pence),
                service=Money(amount_pence=model.payment.service_pence),
                total=Money(amount_pence=model.payment.total_pence),
            ),
        )

    return Order(
        order_id=OrderId(model.id),
        order_type=OrderType(model.order_type),
        customer_name=model.customer_name,
        status=OrderStatus(model.status),
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
        created_staff_id=StaffId(model.created_staff_id),
        updated_staff_id=StaffId(model.updated_staff_id),
        payment=payment,
        items=items,
        table_id=model.table_id,
    )
