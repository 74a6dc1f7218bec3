from __future__ import annotations

import logging

from bakery_pos.application.dto.requests import CreateOrderRequest
from bakery_pos.application.dto.responses import OrderResponse
from bakery_pos.application.mappers.order_mapper import to_order_response
from bakery_pos.application.metrics.pos_metrics import record_order_rejected, record_order_submitted
from bakery_pos.application.ports.repositories import (
    MenuRepository,
    OrderRepository,
    StaffRepository,
)
from bakery_pos.application.use_cases.errors import FieldValidationError
from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.common.ids import MenuItemId, StaffId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType
from bakery_pos.domain.order.entities import NewOrder, OrderLine, Payment
from bakery_pos.domain.order.totals import OrderTotals

logger = logging.getLogger(__name__)


class OrderValidationError(FieldValidationError):
    pass


class TotalsMismatchError(Exception):
    def __init__(self, message: str, details: dict[str, object]) -> None:
        super().__init__(message)
        self.details = details


class SubmitOrder:
    """Validate a paid order and write it in one transaction.

    Every referential check runs before the repository is touched, so a
    rejected submission never leaves a partial order behind.
    """

    def __init__(
        self,
        staff_repository: StaffRepository,
        menu_repository: MenuRepository,
        order_repository: OrderRepository,
        strict_totals: bool = True,
        clock: Clock = utc_now,
    ) -> None:
        self._staff_repository = staff_repository
        self._menu_repository = menu_repository
        self._order_repository = order_repository
        self._strict_totals = strict_totals
        self._clock = clock

    def execute(self, request_dto: CreateOrderRequest) -> OrderResponse:
        field_errors: dict[str, list[str]] = {}

        staff = self._staff_repository.get(StaffId(request_dto.staff_id))
        if staff is None:
            field_errors["staff_id"] = [f"staff {request_dto.staff_id} does not exist"]
        elif not staff.is_active:
            field_errors["staff_id"] = [f"staff {request_dto.staff_id} is not active"]

        item_ids = {MenuItemId(line.item_id) for line in request_dto.items}
        menu_items = self._menu_repository.get_items(item_ids)
        add_on_ids = {add_on_id for line in request_dto.items for add_on_id in line.add_on_ids}
        known_add_ons = self._menu_repository.existing_add_on_ids(add_on_ids)

        for index, line in enumerate(request_dto.items):
            if MenuItemId(line.item_id) not in menu_items:
                field_errors[f"items.{index}.item_id"] = [
                    f"menu item {line.item_id} does not exist"
                ]
            missing = sorted(set(line.add_on_ids) - known_add_ons)
            if missing:
                field_errors[f"items.{index}.add_on_ids"] = [
                    f"add-on {add_on_id} does not exist" for add_on_id in missing
                ]

        if request_dto.table_id is not None and not self._order_repository.table_exists(
            request_dto.table_id
        ):
            field_errors["table_id"] = [f"table {request_dto.table_id} does not exist"]

        if field_errors:
            record_order_rejected("validation")
            raise OrderValidationError(field_errors)

        totals = self._checked_totals(request_dto, menu_items)
        order = NewOrder(
            order_type=request_dto.order_type,
            customer_name=request_dto.customer_name,
            staff_id=StaffId(request_dto.staff_id),
            lines=[
                OrderLine(
                    item_id=MenuItemId(line.item_id),
                    quantity=line.quantity,
                    add_on_ids=tuple(line.add_on_ids),
                )
                for line in request_dto.items
            ],
            payment=Payment(method=request_dto.payment_method, totals=totals),
            created_at=self._clock(),
            table_id=request_dto.table_id,
        )

        created = self._order_repository.add(order)
        record_order_submitted(created)
        logger.info(
            "order_submitted",
            extra={
                "order_id": int(created.order_id),
                "staff_id": request_dto.staff_id,
                "payment_method": order.payment.method.value,
            },
        )
        return to_order_response(created)

    def _checked_totals(
        self,
        request_dto: CreateOrderRequest,
        menu_items: dict[MenuItemId, MenuItem],
    ) -> OrderTotals:
        subtotal = Money.from_decimal(request_dto.subtotal)
        vat = Money.from_decimal(request_dto.vat_amount)
        service = Money.from_decimal(request_dto.service_amount)
        total = Money.from_decimal(request_dto.total)

        expected_total = subtotal + vat + service
        if total != expected_total:
            raise self._mismatch(
                "total must equal subtotal + vat_amount + service_amount",
                expected={"total": float(expected_total.to_decimal())},
            )

        if self._strict_totals:
            catalog_subtotal = Money.zero()
            for line in request_dto.items:
                price = menu_items[MenuItemId(line.item_id)].price
                catalog_subtotal = catalog_subtotal + price.times(line.quantity)
            if subtotal != catalog_subtotal:
                raise self._mismatch(
                    "subtotal does not match catalog prices",
                    expected={"subtotal": float(catalog_subtotal.to_decimal())},
                )
            if request_dto.order_type == OrderType.TAKEAWAY and service != Money.zero():
                raise self._mismatch(
                    "takeaway orders carry no service charge",
                    expected={"service_amount": 0.0},
                )

        return OrderTotals(subtotal=subtotal, vat=vat, service=service, total=total)

    @staticmethod
    def _mismatch(message: str, expected: dict[str, float]) -> TotalsMismatchError:
        record_order_rejected("totals_mismatch")
        return TotalsMismatchError(message, details={"expected": expected})
