from __future__ import annotations

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session, selectinload

from bakery_pos.application.ports.repositories import MenuItemChanges, MenuRepository
from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.menu.entities import MenuItem, OrderType, UnknownOrderTypeError
from bakery_pos.infrastructure.db.models.menu import MenuChannelStatusModel, MenuItemModel
from bakery_pos.infrastructure.db.models.table import AddOnModel
from bakery_pos.infrastructure.db.session import get_engine


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def list_items(self) -> list[MenuItem]:
        statement = (
            select(MenuItemModel)
            .options(selectinload(MenuItemModel.channels))
            .order_by(MenuItemModel.category_name, MenuItemModel.name)
        )
        with Session(self._engine) as session:
            return [_to_domain(model) for model in session.execute(statement).scalars()]

    def get_item(self, item_id: MenuItemId) -> MenuItem | None:
        with Session(self._engine) as session:
            model = session.get(
                MenuItemModel,
                int(item_id),
                options=[selectinload(MenuItemModel.channels)],
            )
            return _to_domain(model) if model is not None else None

    def get_items(self, item_ids: set[MenuItemId]) -> dict[MenuItemId, MenuItem]:
        if not item_ids:
            return {}
        statement = (
            select(MenuItemModel)
            .options(selectinload(MenuItemModel.channels))
            .where(MenuItemModel.id.in_([int(item_id) for item_id in item_ids]))
        )
        with Session(self._engine) as session:
            items = [_to_domain(model) for model in session.execute(statement).scalars()]
        return {item.item_id: item for item in items}

    def existing_add_on_ids(self, add_on_ids: set[int]) -> set[int]:
        if not add_on_ids:
            return set()
        statement = select(AddOnModel.id).where(AddOnModel.id.in_(add_on_ids))
        with Session(self._engine) as session:
            return set(session.execute(statement).scalars())

    def list_categories(self) -> list[str]:
        statement = (
            select(MenuItemModel.category_name)
            .distinct()
            .order_by(MenuItemModel.category_name)
        )
        with Session(self._engine) as session:
            return list(session.execute(statement).scalars())

    def add_item(
        self,
        name: str,
        price: Money,
        category_name: str,
        is_published: bool,
    ) -> MenuItem:
        model = MenuItemModel(
            name=name,
            price_pence=price.amount_pence,
            category_name=category_name,
            is_published=is_published,
            is_archived=False,
        )
        model.channels = [
            MenuChannelStatusModel(order_type_id=order_type.channel_id, is_available=True)
            for order_type in OrderType
        ]
        with Session(self._engine) as session, session.begin():
            session.add(model)
            session.flush()
            item_id = model.id
        created = self.get_item(MenuItemId(item_id))
        if created is None:
            raise RuntimeError("created menu item not found")
        return created

    def update_item(self, item_id: MenuItemId, changes: MenuItemChanges) -> MenuItem | None:
        with Session(self._engine) as session, session.begin():
            model = session.get(MenuItemModel, int(item_id))
            if model is None:
                return None
            if changes.price is not None:
                model.price_pence = changes.price.amount_pence
            if changes.is_archived is not None:
                model.is_archived = changes.is_archived
                if changes.is_archived:
                    model.is_published = False
            if changes.is_published is not None and not model.is_archived:
                model.is_published = changes.is_published
                session.execute(
                    update(MenuChannelStatusModel)
                    .where(MenuChannelStatusModel.item_id == int(item_id))
                    .values(is_available=changes.is_published)
                )
        return self.get_item(item_id)

    def set_channel_availability(
        self,
        item_id: MenuItemId,
        order_type: OrderType,
        is_available: bool,
    ) -> bool:
        statement = (
            update(MenuChannelStatusModel)
            .where(
                MenuChannelStatusModel.item_id == int(item_id),
                MenuChannelStatusModel.order_type_id == order_type.channel_id,
            )
            .values(is_available=is_available)
        )
        with Session(self._engine) as session, session.begin():
            result = session.execute(statement)
            return result.rowcount == 1


def _to_domain(model: MenuItemModel) -> MenuItem:
    channels: dict[OrderType, bool] = {order_type: False for order_type in OrderType}
    for channel in model.channels:
        try:
            channels[OrderType.from_channel_id(channel.order_type_id)] = channel.is_available
        except UnknownOrderTypeError:
            continue
    return MenuItem(
        item_id=MenuItemId(model.id),
        name=model.name,
        price=Money(amount_pence=model.price_pence),
        category_name=model.category_name,
        is_published=model.is_published and not model.is_archived,
        is_archived=model.is_archived,
        channels=channels,
    )
