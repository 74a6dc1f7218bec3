from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Iterable, Union

from bakery_pos.domain.cart.tombstone import Tombstone
from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.menu.entities import MenuItem, OrderType
from bakery_pos.domain.order.totals import OrderTotals, Rates, compute_totals

UNDO_WINDOW = timedelta(seconds=3)


@dataclass(frozen=True)
class CartEntry:
    item: MenuItem
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be >= 1")

    @property
    def item_id(self) -> MenuItemId:
        return self.item.item_id


_Slot = Union[CartEntry, Tombstone[CartEntry]]


class Cart:
    """Working set of lines for one in-progress order.

    Removed lines stay in place as tombstones for ``undo_window`` so the most
    recent removal can be undone. Expired tombstones are purged lazily on
    every read or write.
    """

    def __init__(
        self,
        clock: Clock = utc_now,
        undo_window: timedelta = UNDO_WINDOW,
        entries: Iterable[CartEntry] = (),
    ) -> None:
        self._clock = clock
        self._undo_window = undo_window
        self._slots: list[_Slot] = list(entries)
        self._last_removed: Tombstone[CartEntry] | None = None

    @property
    def entries(self) -> list[CartEntry]:
        self._purge_expired()
        return [slot for slot in self._slots if isinstance(slot, CartEntry)]

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def pending_undo(self) -> CartEntry | None:
        self._purge_expired()
        if self._last_removed is None:
            return None
        return self._last_removed.value

    def quantity_of(self, item_id: MenuItemId) -> int:
        entry = self._find_active(item_id)
        return entry.quantity if entry else 0

    def add_item(self, item: MenuItem) -> None:
        if not item.is_orderable:
            return
        self._purge_expired()
        found = self._locate(item.item_id)
        if found is not None:
            index, entry = found
            self._slots[index] = replace(entry, quantity=entry.quantity + 1)
            return

        self._drop_tombstones_for(item.item_id)
        self._slots.append(CartEntry(item=item, quantity=1))

    def set_quantity(self, item_id: MenuItemId, quantity: int) -> None:
        if quantity <= 0:
            self.remove(item_id)
            return
        self._purge_expired()
        found = self._locate(item_id)
        if found is None:
            return
        index, entry = found
        self._slots[index] = replace(entry, quantity=quantity)

    def adjust_quantity(self, item_id: MenuItemId, delta: int) -> None:
        entry = self._find_active(item_id)
        if entry is None:
            return
        self.set_quantity(item_id, entry.quantity + delta)

    def remove(self, item_id: MenuItemId) -> None:
        self._purge_expired()
        found = self._locate(item_id)
        if found is None:
            return
        index, entry = found
        tombstone = Tombstone.bury(entry, now=self._clock(), ttl=self._undo_window)
        self._slots[index] = tombstone
        self._last_removed = tombstone

    def undo(self) -> CartEntry | None:
        self._purge_expired()
        tombstone = self._last_removed
        if tombstone is None:
            return None
        self._last_removed = None
        for index, slot in enumerate(self._slots):
            if slot is tombstone:
                self._slots[index] = tombstone.value
                return tombstone.value
        return None

    def clear(self) -> None:
        self._slots = []
        self._last_removed = None

    def replace_entries(self, entries: Iterable[CartEntry]) -> None:
        self._slots = list(entries)
        self._last_removed = None

    def compute_totals(self, rates: Rates, order_type: OrderType | None) -> OrderTotals:
        return compute_totals(
            ((entry.item.price, entry.quantity) for entry in self.entries),
            rates=rates,
            order_type=order_type,
        )

    def _purge_expired(self) -> None:
        now = self._clock()
        self._slots = [
            slot
            for slot in self._slots
            if isinstance(slot, CartEntry) or not slot.is_expired(now)
        ]
        if self._last_removed is not None and self._last_removed.is_expired(now):
            self._last_removed = None

    def _locate(self, item_id: MenuItemId) -> tuple[int, CartEntry] | None:
        for index, slot in enumerate(self._slots):
            if isinstance(slot, CartEntry) and slot.item_id == item_id:
                return index, slot
        return None

    def _find_active(self, item_id: MenuItemId) -> CartEntry | None:
        found = self._locate(item_id)
        return found[1] if found else None

    def _drop_tombstones_for(self, item_id: MenuItemId) -> None:
        kept: list[_Slot] = []
        for slot in self._slots:
            if isinstance(slot, Tombstone) and slot.value.item_id == item_id:
                if slot is self._last_removed:
                    self._last_removed = None
                continue
            kept.append(slot)
        self._slots = kept
