from __future__ import annotations

from dataclasses import dataclass, field

from bakery_pos.domain.cart.entities import Cart
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.domain.order.totals import OrderTotals, Rates


@dataclass
class ActiveOrder:
    """The order currently being built on the till."""

    cart: Cart = field(default_factory=Cart)
    order_type: OrderType | None = None
    customer_name: str | None = None

    @property
    def is_empty(self) -> bool:
        return self.cart.is_empty

    def totals(self, rates: Rates) -> OrderTotals:
        return self.cart.compute_totals(rates, self.order_type)

    def reset(self) -> None:
        self.cart.clear()
        self.order_type = None
        self.customer_name = None
