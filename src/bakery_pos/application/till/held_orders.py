from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable
from uuid import uuid4

from bakery_pos.application.ports.key_value import KeyValueStore
from bakery_pos.application.till.active_order import ActiveOrder
from bakery_pos.domain.cart.entities import CartEntry
from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.common.ids import HeldOrderId, MenuItemId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType

HELD_ORDERS_KEY = "bakery_held_orders"

logger = logging.getLogger(__name__)


class HeldOrderNotFoundError(Exception):
    pass


@dataclass(frozen=True)
class HeldOrder:
    held_id: HeldOrderId
    customer_name: str | None
    entries: tuple[CartEntry, ...]
    order_type: OrderType | None
    held_at: datetime
    held_by: str


def _new_held_id() -> HeldOrderId:
    return HeldOrderId(f"HOLD-{uuid4().hex[:12].upper()}")


class HeldOrderQueue:
    """Suspended orders, newest first, persisted after every change.

    The whole list is written each time; the last writer wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Clock = utc_now,
        id_factory: Callable[[], HeldOrderId] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock
        self._id_factory = id_factory or _new_held_id
        self._orders: list[HeldOrder] = self._load()

    @property
    def orders(self) -> list[HeldOrder]:
        return list(self._orders)

    def get(self, held_id: HeldOrderId) -> HeldOrder:
        for held in self._orders:
            if held.held_id == held_id:
                return held
        raise HeldOrderNotFoundError(f"held order {held_id} not found")

    @staticmethod
    def needs_confirmation(active: ActiveOrder) -> bool:
        """Resuming over a non-empty cart replaces it; callers should ask first."""
        return not active.is_empty

    def hold(self, active: ActiveOrder, staff_name: str) -> HeldOrder | None:
        if active.is_empty:
            return None
        held = HeldOrder(
            held_id=self._id_factory(),
            customer_name=active.customer_name,
            entries=tuple(active.cart.entries),
            order_type=active.order_type,
            held_at=self._clock(),
            held_by=staff_name,
        )
        self._orders.insert(0, held)
        self._save()
        active.reset()
        return held

    def resume(self, held_id: HeldOrderId, active: ActiveOrder) -> HeldOrder:
        held = self._take(held_id)
        active.cart.replace_entries(held.entries)
        active.order_type = held.order_type
        active.customer_name = held.customer_name
        return held

    def discard(self, held_id: HeldOrderId) -> HeldOrder:
        return self._take(held_id)

    def _take(self, held_id: HeldOrderId) -> HeldOrder:
        held = self.get(held_id)
        self._orders = [order for order in self._orders if order.held_id != held_id]
        self._save()
        return held

    def _load(self) -> list[HeldOrder]:
        raw = self._store.get(HELD_ORDERS_KEY)
        if not raw:
            return []
        try:
            return [_from_payload(item) for item in json.loads(raw)]
        except (ValueError, KeyError, TypeError):
            logger.warning("held_orders_unreadable")
            return []

    def _save(self) -> None:
        self._store.set(
            HELD_ORDERS_KEY,
            json.dumps([_to_payload(held) for held in self._orders]),
        )


def _to_payload(held: HeldOrder) -> dict[str, Any]:
    return {
        "id": held.held_id,
        "customerName": held.customer_name,
        "cart": [
            {
                "item": {
                    "id": int(entry.item.item_id),
                    "name": entry.item.name,
                    "price_pence": entry.item.price.amount_pence,
                    "category_name": entry.item.category_name,
                    "is_published": entry.item.is_published,
                    "channels": {
                        order_type.value: available
                        for order_type, available in entry.item.channels.items()
                    },
                },
                "qty": entry.quantity,
            }
            for entry in held.entries
        ],
        "orderType": held.order_type.value if held.order_type else None,
        "heldAt": held.held_at.isoformat(),
        "heldBy": held.held_by,
    }


def _from_payload(payload: dict[str, Any]) -> HeldOrder:
    entries = []
    for line in payload["cart"]:
        item = line["item"]
        entries.append(
            CartEntry(
                item=MenuItem(
                    item_id=MenuItemId(int(item["id"])),
                    name=item["name"],
                    price=Money(amount_pence=int(item["price_pence"])),
                    category_name=item["category_name"],
                    is_published=bool(item["is_published"]),
                    channels={
                        OrderType(name): bool(available)
                        for name, available in item.get("channels", {}).items()
                    },
                ),
                quantity=int(line["qty"]),
            )
        )
    order_type = payload.get("orderType")
    return HeldOrder(
        held_id=HeldOrderId(payload["id"]),
        customer_name=payload.get("customerName"),
        entries=tuple(entries),
        order_type=OrderType(order_type) if order_type else None,
        held_at=datetime.fromisoformat(payload["heldAt"]),
        held_by=payload["heldBy"],
    )
