from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import OrderType

DEFAULT_VAT_RATE = Decimal("0.20")
DEFAULT_SERVICE_RATE = Decimal("0.10")


@dataclass(frozen=True)
class Rates:
    vat: Decimal = DEFAULT_VAT_RATE
    service: Decimal = DEFAULT_SERVICE_RATE

    def __post_init__(self) -> None:
        if self.vat < 0 or self.service < 0:
            raise ValueError("rates must be >= 0")


@dataclass(frozen=True)
class OrderTotals:
    subtotal: Money
    vat: Money
    service: Money
    total: Money

    def __post_init__(self) -> None:
        if self.total != self.subtotal + self.vat + self.service:
            raise ValueError("total must equal subtotal + vat + service")


def compute_totals(
    lines: Iterable[tuple[Money, int]],
    rates: Rates,
    order_type: OrderType | None,
) -> OrderTotals:
    """Totals for ``(unit_price, quantity)`` lines.

    VAT and service are each rounded half-up to the penny before being added,
    so the total is always the exact sum of the three displayed figures.
    Service applies to eat-in orders only.
    """
    subtotal = Money.zero()
    for unit_price, quantity in lines:
        subtotal = subtotal + unit_price.times(quantity)

    vat = subtotal.apply_rate(rates.vat)
    service = subtotal.apply_rate(rates.service) if order_type == OrderType.EAT_IN else Money.zero()
    return OrderTotals(subtotal=subtotal, vat=vat, service=service, total=subtotal + vat + service)
