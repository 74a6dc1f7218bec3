from __future__ import annotations

from bakery_pos.application.dto.responses import ChannelResponse, MenuItemResponse
from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType, UnknownOrderTypeError


def money_to_float(money: Money) -> float:
    return float(money.to_decimal())


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=int(item.item_id),
        name=item.name,
        price=money_to_float(item.price),
        category_name=item.category_name,
        is_published=item.is_published,
        is_archived=item.is_archived,
        channels=[
            ChannelResponse(order_type_id=order_type.channel_id, is_available=is_available)
            for order_type, is_available in sorted(
                item.channels.items(),
                key=lambda pair: pair[0].channel_id,
            )
        ],
    )


def to_menu_item(response: MenuItemResponse) -> MenuItem:
    channels = {order_type: False for order_type in OrderType}
    for channel in response.channels:
        try:
            channels[OrderType.from_channel_id(channel.order_type_id)] = channel.is_available
        except UnknownOrderTypeError:
            continue
    return MenuItem(
        item_id=MenuItemId(response.id),
        name=response.name,
        price=Money.from_decimal(response.price),
        category_name=response.category_name,
        is_published=response.is_published and not response.is_archived,
        is_archived=response.is_archived,
        channels=channels,
    )
