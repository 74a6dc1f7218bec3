from __future__ import annotations

from bakery_pos.application.dto.responses import (
    OrderItemResponse,
    OrderResponse,
    PaymentResponse,
)
from bakery_pos.application.mappers.menu_mapper import money_to_float
from bakery_pos.domain.order.entities import Order


def to_order_response(order: Order) -> OrderResponse:
    payment = None
    if order.payment is not None:
        totals = order.payment.totals
        payment = PaymentResponse(
            total=money_to_float(totals.total),
            subtotal=money_to_float(totals.subtotal),
            vat_amount=money_to_float(totals.vat),
            service_amount=money_to_float(totals.service),
            method=order.payment.method.value,
        )

    return OrderResponse(
        order_id=int(order.order_id),
        customer_name=order.customer_name,
        order_type=order.order_type.value,
        status=order.status.value,
        paid_at=order.paid_at,
        created_at=order.created_at,
        staff_id=int(order.created_staff_id),
        table_id=order.table_id,
        items=[
            OrderItemResponse(
                item_id=int(item.item_id),
                name=item.name,
                price=money_to_float(item.unit_price),
                qty=item.quantity,
                add_on_ids=list(item.add_on_ids),
            )
            for item in order.items
        ],
        payment=payment,
    )
