from __future__ import annotations

from bakery_pos.application.dto.responses import OrderResponse
from bakery_pos.application.mappers.order_mapper import to_order_response
from bakery_pos.application.ports.repositories import OrderRepository
from bakery_pos.application.use_cases.periods import Period, period_window
from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.common.ids import OrderId


class OrderNotFoundError(Exception):
    pass


class ListOrders:
    """Orders created inside a reporting period, newest first."""

    def __init__(self, order_repository: OrderRepository, clock: Clock = utc_now) -> None:
        self._order_repository = order_repository
        self._clock = clock

    def execute(self, period: Period = Period.TODAY) -> list[OrderResponse]:
        start, end = period_window(period, self._clock())
        orders = self._order_repository.list_between(start, end)
        return [to_order_response(order) for order in orders]


class GetOrderReceipt:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, order_id: OrderId) -> OrderResponse:
        order = self._order_repository.get(order_id)
        if order is None:
            raise OrderNotFoundError(f"order {order_id} not found")
        return to_order_response(order)
