from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from bakery_pos.application.ports.bakery_api import ApiError
from bakery_pos.application.till.active_order import ActiveOrder
from bakery_pos.application.till.audit import AuditEmitter
from bakery_pos.application.till.back_office import BackOffice
from bakery_pos.application.till.catalog import CatalogView
from bakery_pos.application.till.checkout import Checkout
from bakery_pos.application.till.held_orders import HeldOrderQueue
from bakery_pos.application.till.rates import RateSettings
from bakery_pos.application.till.reconciliation import CashReconciliation
from bakery_pos.application.till.session import TillSession
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.domain.order.entities import PaymentMethod
from bakery_pos.domain.payment.workflow import CancelResolution
from bakery_pos.infrastructure.http.api_client import BakeryApiClient
from bakery_pos.infrastructure.storage.key_value_store import InMemoryKeyValueStore


class AuditCounter:
    def __init__(self, api: BakeryApiClient) -> None:
        self._api = api
        self._seen = len(api.list_audit_logs())

    def new_entries(self) -> list[tuple[str, str]]:
        entries = self._api.list_audit_logs()
        fresh = entries[: len(entries) - self._seen]
        self._seen = len(entries)
        return [(entry.action, entry.details) for entry in fresh]


@pytest.fixture
def api(client: TestClient) -> BakeryApiClient:
    return BakeryApiClient(client)


def test_till_sale_is_submitted_and_audited_once(api: BakeryApiClient) -> None:
    store = InMemoryKeyValueStore()
    audit = AuditEmitter(api)
    counter = AuditCounter(api)

    session = TillSession(api, store, audit)
    actor = session.login("10001")
    assert counter.new_entries() == [("Session started", "Olive Baker signed in")]

    catalog = CatalogView(api)
    catalog.refresh()
    by_name = {item.name: item for item in catalog.available_for(OrderType.EAT_IN)}

    active = ActiveOrder()
    active.cart.add_item(by_name["Croissant"])
    active.cart.add_item(by_name["Croissant"])
    active.cart.add_item(by_name["Seeded Roll"])
    active.order_type = OrderType.EAT_IN

    checkout = Checkout(
        api=api,
        active=active,
        rates=RateSettings(store, audit),
        held_orders=HeldOrderQueue(store),
        audit=audit,
        actor=actor,
    )
    panel = checkout.start_payment().select_method(PaymentMethod.CASH)
    panel.apply_preset("exact")
    panel.tender()

    order = checkout.submitted
    assert order is not None
    assert order.payment.total == 8.84
    assert active.is_empty
    assert counter.new_entries() == [
        ("Payment completed", f"Order {order.order_id} · Walk-in · £8.84 · cash")
    ]
    assert order.order_id in [row.order_id for row in api.list_orders("today")]

    session.logout()
    assert counter.new_entries() == [("Session ended", "Olive Baker signed out")]


def test_till_hold_and_failed_login(api: BakeryApiClient) -> None:
    store = InMemoryKeyValueStore()
    audit = AuditEmitter(api)
    counter = AuditCounter(api)
    session = TillSession(api, store, audit)

    with pytest.raises(ApiError) as exc_info:
        session.login("99999")
    assert exc_info.value.code == "INVALID_ACCESS_CODE"
    assert counter.new_entries() == []

    actor = session.login("20002")
    counter.new_entries()

    catalog = CatalogView(api)
    catalog.refresh()
    brownie = next(item for item in catalog.items if item.name == "Brownie")
    active = ActiveOrder(customer_name="Grace")
    active.cart.add_item(brownie)
    active.order_type = OrderType.TAKEAWAY
    queue = HeldOrderQueue(store)

    checkout = Checkout(
        api=api,
        active=active,
        rates=RateSettings(store, audit),
        held_orders=queue,
        audit=audit,
        actor=actor,
    )
    checkout.start_payment().select_method(PaymentMethod.CARD)
    held = checkout.cancel(CancelResolution.HOLD)

    assert held is not None
    assert HeldOrderQueue(store).orders[0].customer_name == "Grace"
    assert counter.new_entries() == [("Order held", f"{held.held_id} · Grace · £3.36")]


def test_back_office_actions_each_write_one_entry(api: BakeryApiClient) -> None:
    store = InMemoryKeyValueStore()
    audit = AuditEmitter(api)
    actor = TillSession(api, store, audit).login("10001")
    counter = AuditCounter(api)
    office = BackOffice(api, audit, actor)

    created = office.add_item("Chelsea Bun", "2.40", "Pastry")
    assert counter.new_entries() == [("Item added", "Chelsea Bun · £2.40")]

    catalog = CatalogView(api)
    catalog.refresh()
    bun = next(item for item in catalog.items if item.item_id == created.id)

    office.change_price(bun, Decimal("2.60"))
    assert counter.new_entries() == [("Price updated", "Chelsea Bun: £2.40 → £2.60")]

    office.set_channel_availability(bun, OrderType.EAT_IN, False)
    assert counter.new_entries() == [
        ("Channel availability changed", "Chelsea Bun · eat_in · unavailable")
    ]

    office.archive_item(bun)
    assert counter.new_entries() == [("Item archived", "Chelsea Bun")]

    RateSettings(store, audit).save_percentages("20", "12.5", actor)
    assert counter.new_entries() == [("Rates updated", "VAT 20.0% - Service 12.5%")]

    reconciliation = CashReconciliation(api, audit)
    expected = reconciliation.expected_cash()
    result = reconciliation.reconcile(expected.to_decimal(), actor)
    assert result.discrepancy_pence == 0
    assert counter.new_entries() == [
        (
            "EOD cash reconciliation",
            f"Expected {expected.format()} - Actual {expected.format()} - Discrepancy +£0.00",
        )
    ]
