from __future__ import annotations

import logging
from typing import Callable
from uuid import uuid4

from bakery_pos.application.dto.requests import CreateOrderRequest, OrderItemRequest
from bakery_pos.application.dto.responses import OrderResponse
from bakery_pos.application.ports.bakery_api import BakeryApi
from bakery_pos.application.till.active_order import ActiveOrder
from bakery_pos.application.till.audit import AuditEmitter
from bakery_pos.application.till.held_orders import HeldOrder, HeldOrderQueue
from bakery_pos.application.till.rates import RateSettings
from bakery_pos.domain.audit.entities import AuditAction
from bakery_pos.domain.cart.entities import CartEntry
from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.order.entities import PaymentMethod
from bakery_pos.domain.payment.workflow import (
    ActionNotPermittedError,
    CancelResolution,
    CompletedPayment,
    PanelFactory,
    PaymentWorkflow,
)
from bakery_pos.domain.staff.entities import Actor

DEFAULT_CUSTOMER_NAME = "Walk-in"

logger = logging.getLogger(__name__)


def _order_ref() -> str:
    return f"ORD-{uuid4().hex[:8].upper()}"


class Checkout:
    """Takes the active order through payment, submission and audit.

    The cart is only cleared once the backend has accepted the order. If
    submission fails the completed payment stays pending and
    ``submit_pending`` retries it.
    """

    def __init__(
        self,
        api: BakeryApi,
        active: ActiveOrder,
        rates: RateSettings,
        held_orders: HeldOrderQueue,
        audit: AuditEmitter,
        actor: Actor,
        clock: Clock = utc_now,
        order_ref_factory: Callable[[], str] | None = None,
        qr_reference_factory: Callable[[], str] | None = None,
        panel_factories: dict[PaymentMethod, PanelFactory] | None = None,
    ) -> None:
        self._api = api
        self._active = active
        self._rates = rates
        self._held_orders = held_orders
        self._audit = audit
        self._actor = actor
        self._clock = clock
        self._order_ref_factory = order_ref_factory or _order_ref
        self._qr_reference_factory = qr_reference_factory
        self._panel_factories = panel_factories
        self._entries: list[CartEntry] = []
        self.workflow: PaymentWorkflow | None = None
        self.pending: CompletedPayment | None = None
        self.submitted: OrderResponse | None = None

    @property
    def customer_name(self) -> str:
        name = (self._active.customer_name or "").strip()
        return name or DEFAULT_CUSTOMER_NAME

    def start_payment(self) -> PaymentWorkflow:
        if self._active.is_empty:
            raise ActionNotPermittedError("cannot take payment for an empty order")
        if self._active.order_type is None:
            raise ActionNotPermittedError("choose takeaway or eat in before payment")
        if self.workflow is not None:
            self.workflow.dispose()

        self._entries = self._active.cart.entries
        self.pending = None
        self.submitted = None
        self.workflow = PaymentWorkflow(
            order_ref=self._order_ref_factory(),
            totals=self._active.totals(self._rates.load()),
            clock=self._clock,
            on_completed=self._on_completed,
            qr_reference_factory=self._qr_reference_factory,
            panel_factories=self._panel_factories,
        )
        return self.workflow

    def submit_pending(self) -> OrderResponse:
        if self.pending is None:
            raise ActionNotPermittedError("no completed payment is waiting to be submitted")

        completed = self.pending
        totals = completed.totals
        request_dto = CreateOrderRequest(
            customer_name=self.customer_name,
            order_type=self._active.order_type,
            staff_id=int(self._actor.staff_id),
            payment_method=completed.method,
            total=totals.total.to_decimal(),
            subtotal=totals.subtotal.to_decimal(),
            vat_amount=totals.vat.to_decimal(),
            service_amount=totals.service.to_decimal(),
            items=[
                OrderItemRequest(item_id=int(entry.item_id), quantity=entry.quantity)
                for entry in self._entries
            ],
        )
        order = self._api.create_order(request_dto)

        self.pending = None
        self.submitted = order
        self._audit.emit(
            self._actor,
            AuditAction.PAYMENT_COMPLETED,
            f"Order {order.order_id} · {order.customer_name} · "
            f"{totals.total.format()} · {completed.method.value}",
        )
        logger.info("till_order_submitted", extra={"order_id": order.order_id})
        self._active.reset()
        return order

    def cancel(self, resolution: CancelResolution) -> HeldOrder | None:
        workflow = self._require_workflow()
        workflow.cancel(resolution)
        total = workflow.totals.total.format()

        if resolution is CancelResolution.HOLD:
            held = self._held_orders.hold(self._active, staff_name=self._actor.full_name)
            if held is not None:
                self._audit.emit(
                    self._actor,
                    AuditAction.ORDER_HELD,
                    f"{held.held_id} · {held.customer_name or DEFAULT_CUSTOMER_NAME} · {total}",
                )
            return held

        customer_name = self.customer_name
        self._active.reset()
        self._audit.emit(
            self._actor,
            AuditAction.ORDER_CANCELLED,
            f"Order {workflow.order_ref} · {customer_name} · {total}",
        )
        return None

    def _on_completed(self, completed: CompletedPayment) -> None:
        self.pending = completed
        self.submit_pending()

    def _require_workflow(self) -> PaymentWorkflow:
        if self.workflow is None:
            raise ActionNotPermittedError("payment has not been started")
        return self.workflow
