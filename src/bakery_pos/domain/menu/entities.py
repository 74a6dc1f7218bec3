from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.common.money import Money


class OrderType(str, Enum):
    TAKEAWAY = "takeaway"
    EAT_IN = "eat_in"

    @property
    def channel_id(self) -> int:
        return _CHANNEL_IDS[self]

    @classmethod
    def from_channel_id(cls, channel_id: int) -> OrderType:
        for order_type, known_id in _CHANNEL_IDS.items():
            if known_id == channel_id:
                return order_type
        raise UnknownOrderTypeError(f"unknown order type id: {channel_id}")


_CHANNEL_IDS = {OrderType.TAKEAWAY: 1, OrderType.EAT_IN: 2}


class UnknownOrderTypeError(ValueError):
    pass


@dataclass(frozen=True)
class MenuItem:
    item_id: MenuItemId
    name: str
    price: Money
    category_name: str
    is_published: bool = True
    is_archived: bool = False
    channels: dict[OrderType, bool] = field(
        default_factory=lambda: {order_type: True for order_type in OrderType}
    )

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be non-empty")
        if self.is_archived and self.is_published:
            raise ValueError("an archived item cannot be published")

    @property
    def is_orderable(self) -> bool:
        return self.is_published and not self.is_archived

    def is_available_for(self, order_type: OrderType) -> bool:
        return self.is_orderable and self.channels.get(order_type, False)

    def with_price(self, price: Money) -> MenuItem:
        return replace(self, price=price)

    def published(self, is_published: bool) -> MenuItem:
        if is_published and self.is_archived:
            raise ValueError("restore the item before publishing it")
        return replace(
            self,
            is_published=is_published,
            channels={order_type: is_published for order_type in self.channels},
        )

    def archived(self) -> MenuItem:
        return replace(self, is_archived=True, is_published=False)

    def restored(self) -> MenuItem:
        return replace(self, is_archived=False)
