from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType, UnknownOrderTypeError


def _croissant(**overrides) -> MenuItem:
    values = {
        "item_id": MenuItemId(6),
        "name": "Croissant",
        "price": Money(amount_pence=250),
        "category_name": "Pastry",
    }
    values.update(overrides)
    return MenuItem(**values)


def test_order_type_channel_ids() -> None:
    assert OrderType.TAKEAWAY.channel_id == 1
    assert OrderType.EAT_IN.channel_id == 2
    assert OrderType.from_channel_id(2) is OrderType.EAT_IN
    with pytest.raises(UnknownOrderTypeError):
        OrderType.from_channel_id(3)


def test_channel_availability_requires_published_item() -> None:
    item = _croissant(channels={OrderType.TAKEAWAY: True, OrderType.EAT_IN: False})

    assert item.is_available_for(OrderType.TAKEAWAY)
    assert not item.is_available_for(OrderType.EAT_IN)
    assert not item.published(False).is_available_for(OrderType.TAKEAWAY)


def test_publishing_syncs_every_channel() -> None:
    item = _croissant(channels={OrderType.TAKEAWAY: True, OrderType.EAT_IN: False})

    republished = item.published(False).published(True)

    assert republished.channels == {OrderType.TAKEAWAY: True, OrderType.EAT_IN: True}


def test_archiving_unpublishes_and_blocks_publishing() -> None:
    archived = _croissant().archived()

    assert archived.is_archived
    assert not archived.is_published
    assert not archived.is_orderable
    with pytest.raises(ValueError):
        archived.published(True)
    assert archived.restored().published(True).is_orderable


def test_archived_item_cannot_be_built_published() -> None:
    with pytest.raises(ValueError):
        _croissant(is_archived=True, is_published=True)
