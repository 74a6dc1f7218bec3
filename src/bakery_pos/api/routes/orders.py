from __future__ import annotations

import os

from fastapi import APIRouter, Query, status

from bakery_pos.application.dto.requests import CreateOrderRequest
from bakery_pos.application.dto.responses import OrderResponse
from bakery_pos.application.use_cases.list_orders import GetOrderReceipt, ListOrders
from bakery_pos.application.use_cases.periods import Period
from bakery_pos.application.use_cases.submit_order import SubmitOrder
from bakery_pos.domain.common.ids import OrderId
from bakery_pos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from bakery_pos.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository
from bakery_pos.infrastructure.db.repositories.staff_repo import SqlAlchemyStaffRepository

router = APIRouter()


def _strict_totals() -> bool:
    return os.getenv("ORDER_TOTALS_CHECK", "strict").strip().lower() != "off"


def _submit_order_use_case() -> SubmitOrder:
    return SubmitOrder(
        staff_repository=SqlAlchemyStaffRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
        order_repository=SqlAlchemyOrderRepository(),
        strict_totals=_strict_totals(),
    )


@router.post("/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(request_dto: CreateOrderRequest) -> OrderResponse:
    return _submit_order_use_case().execute(request_dto)


@router.get("/orders", response_model=list[OrderResponse])
def list_orders(period: str = Query(default=Period.TODAY.value)) -> list[OrderResponse]:
    use_case = ListOrders(order_repository=SqlAlchemyOrderRepository())
    return use_case.execute(Period.parse(period))


@router.get("/orders/{order_id}", response_model=OrderResponse)
def get_order(order_id: int) -> OrderResponse:
    use_case = GetOrderReceipt(order_repository=SqlAlchemyOrderRepository())
    return use_case.execute(OrderId(order_id))
