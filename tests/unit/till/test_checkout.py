from __future__ import annotations

import sys
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from bakery_pos.application.ports.bakery_api import ApiUnavailableError
from bakery_pos.application.till.active_order import ActiveOrder
from bakery_pos.application.till.audit import AuditEmitter
from bakery_pos.application.till.checkout import Checkout
from bakery_pos.application.till.held_orders import HeldOrderQueue
from bakery_pos.application.till.rates import RateSettings
from bakery_pos.domain.cart.entities import Cart
from bakery_pos.domain.common.ids import HeldOrderId, MenuItemId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType
from bakery_pos.domain.order.entities import PaymentMethod
from bakery_pos.domain.payment.workflow import (
    ActionNotPermittedError,
    CancelResolution,
    WorkflowState,
)
from bakery_pos.infrastructure.storage.key_value_store import InMemoryKeyValueStore

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
CROISSANT = MenuItem(
    item_id=MenuItemId(6),
    name="Croissant",
    price=Money(amount_pence=250),
    category_name="Pastry",
)
SEEDED_ROLL = MenuItem(
    item_id=MenuItemId(4),
    name="Seeded Roll",
    price=Money(amount_pence=180),
    category_name="Bread",
)


def _active(order_type: OrderType | None = OrderType.EAT_IN) -> ActiveOrder:
    active = ActiveOrder(cart=Cart(clock=lambda: NOW))
    active.cart.add_item(CROISSANT)
    active.cart.add_item(CROISSANT)
    active.cart.add_item(SEEDED_ROLL)
    active.order_type = order_type
    return active


def _checkout(api, actor, active: ActiveOrder, store=None) -> Checkout:
    store = store or InMemoryKeyValueStore()
    audit = AuditEmitter(api)
    return Checkout(
        api=api,
        active=active,
        rates=RateSettings(store, audit),
        held_orders=HeldOrderQueue(store, clock=lambda: NOW, id_factory=lambda: HeldOrderId("HOLD-A1")),
        audit=audit,
        actor=actor,
        clock=lambda: NOW,
        order_ref_factory=lambda: "ORD-TEST",
    )


def test_cash_payment_submits_order_and_resets_cart(api, actor) -> None:
    active = _active()
    checkout = _checkout(api, actor, active)
    workflow = checkout.start_payment()
    assert workflow.totals.total == Money(amount_pence=884)

    panel = workflow.select_method(PaymentMethod.CASH)
    panel.apply_preset("exact")
    panel.tender()

    assert workflow.state is WorkflowState.COMPLETED
    assert checkout.submitted is not None
    request_dto = api.calls[-1][1]
    assert request_dto.customer_name == "Walk-in"
    assert request_dto.total == Decimal("8.84")
    assert request_dto.subtotal == Decimal("6.80")
    assert request_dto.vat_amount == Decimal("1.36")
    assert request_dto.service_amount == Decimal("0.68")
    assert [(line.item_id, line.quantity) for line in request_dto.items] == [(6, 2), (4, 1)]
    assert active.is_empty
    assert [(entry.action, entry.details) for entry in api.audit_entries] == [
        ("Payment completed", "Order 1 · Walk-in · £8.84 · cash")
    ]


def test_failed_submission_keeps_cart_and_can_retry(api, actor) -> None:
    active = _active(OrderType.TAKEAWAY)
    active.customer_name = "Ada"
    checkout = _checkout(api, actor, active)
    panel = checkout.start_payment().select_method(PaymentMethod.CASH)
    panel.apply_preset("+£5")
    api.fail_orders = ApiUnavailableError("backend down")

    with pytest.raises(ApiUnavailableError):
        panel.tender()

    assert checkout.pending is not None
    assert not active.is_empty
    assert api.audit_entries == []

    api.fail_orders = None
    order = checkout.submit_pending()

    assert order.customer_name == "Ada"
    assert order.payment.total == 8.16
    assert checkout.pending is None
    assert active.is_empty
    assert len(api.audit_entries) == 1


def test_cancel_and_hold_parks_the_order(api, actor) -> None:
    store = InMemoryKeyValueStore()
    active = _active()
    active.customer_name = "Ada"
    checkout = _checkout(api, actor, active, store=store)
    checkout.start_payment().select_method(PaymentMethod.QR)

    held = checkout.cancel(CancelResolution.HOLD)

    assert held is not None
    assert active.is_empty
    assert api.audit_entries[-1].action == "Order held"
    assert api.audit_entries[-1].details == "HOLD-A1 · Ada · £8.84"
    assert HeldOrderQueue(store).orders[0].customer_name == "Ada"


def test_cancel_and_discard_clears_the_order(api, actor) -> None:
    active = _active(OrderType.TAKEAWAY)
    checkout = _checkout(api, actor, active)
    checkout.start_payment()

    assert checkout.cancel(CancelResolution.DISCARD) is None

    assert active.is_empty
    assert api.audit_entries[-1].action == "Order cancelled"
    assert api.audit_entries[-1].details == "Order ORD-TEST · Walk-in · £8.16"
    assert not any(name == "create_order" for name, _ in api.calls)


def test_payment_needs_items_and_order_type(api, actor) -> None:
    with pytest.raises(ActionNotPermittedError):
        _checkout(api, actor, ActiveOrder()).start_payment()
    with pytest.raises(ActionNotPermittedError):
        _checkout(api, actor, _active(order_type=None)).start_payment()


def test_submit_without_completed_payment_is_rejected(api, actor) -> None:
    checkout = _checkout(api, actor, _active())
    with pytest.raises(ActionNotPermittedError):
        checkout.submit_pending()
