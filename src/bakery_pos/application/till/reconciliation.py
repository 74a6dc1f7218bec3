from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from bakery_pos.application.ports.bakery_api import BakeryApi
from bakery_pos.application.till.audit import AuditEmitter
from bakery_pos.domain.audit.entities import AuditAction
from bakery_pos.domain.common.money import Money, format_pence
from bakery_pos.domain.order.entities import PaymentMethod
from bakery_pos.domain.staff.entities import Actor


@dataclass(frozen=True)
class CashCount:
    expected: Money
    counted: Money

    @property
    def discrepancy_pence(self) -> int:
        return self.counted.amount_pence - self.expected.amount_pence

    def describe(self) -> str:
        sign = "+" if self.discrepancy_pence >= 0 else ""
        return (
            f"Expected {self.expected.format()} - Actual {self.counted.format()} - "
            f"Discrepancy {sign}{format_pence(self.discrepancy_pence)}"
        )


class CashReconciliation:
    """End-of-day check of the drawer against today's paid cash orders."""

    def __init__(self, api: BakeryApi, audit: AuditEmitter) -> None:
        self._api = api
        self._audit = audit

    def expected_cash(self) -> Money:
        expected = Money.zero()
        for order in self._api.list_orders("today"):
            if order.payment is not None and order.payment.method == PaymentMethod.CASH.value:
                expected = expected + Money.from_decimal(order.payment.total)
        return expected

    def reconcile(self, counted: Decimal | str, actor: Actor) -> CashCount:
        result = CashCount(expected=self.expected_cash(), counted=Money.from_decimal(counted))
        self._audit.emit(actor, AuditAction.CASH_RECONCILED, result.describe())
        return result
