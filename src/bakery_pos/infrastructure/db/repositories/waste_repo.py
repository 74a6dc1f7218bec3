from __future__ import annotations

from datetime import datetime

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session, selectinload

from bakery_pos.application.ports.repositories import NewWasteEntry, WasteRepository
from bakery_pos.domain.common.clock import as_utc
from bakery_pos.domain.common.ids import MenuItemId, StaffId, WasteId
from bakery_pos.domain.common.money import Money
from bakery_pos.domain.waste.entities import WasteEntry
from bakery_pos.infrastructure.db.models.waste import WasteModel
from bakery_pos.infrastructure.db.session import get_engine


class SqlAlchemyWasteRepository(WasteRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, entry: NewWasteEntry) -> WasteEntry:
        model = WasteModel(
            staff_id=int(entry.staff_id),
            item_id=int(entry.item_id) if entry.item_id is not None else None,
            item_name=entry.item_name,
            category_name=entry.category_name,
            quantity=entry.quantity,
            unit_cost_pence=entry.unit_cost.amount_pence,
            recorded_at=entry.recorded_at,
        )
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
            statement = (
                select(WasteModel)
                .options(selectinload(WasteModel.staff))
                .where(WasteModel.id == model.id)
            )
            return _to_domain(session.execute(statement).scalar_one())

    def list_between(self, start: datetime | None, end: datetime | None) -> list[WasteEntry]:
        statement = select(WasteModel).options(selectinload(WasteModel.staff))
        if start is not None:
            statement = statement.where(WasteModel.recorded_at >= start)
        if end is not None:
            statement = statement.where(WasteModel.recorded_at < end)
        statement = statement.order_by(WasteModel.recorded_at.desc(), WasteModel.id.desc())

        with Session(self._engine) as session:
            return [_to_domain(model) for model in session.execute(statement).scalars()]

    def delete(self, waste_id: WasteId) -> bool:
        with Session(self._engine) as session, session.begin():
            result = session.execute(delete(WasteModel).where(WasteModel.id == int(waste_id)))
            return result.rowcount == 1


def _to_domain(model: WasteModel) -> WasteEntry:
    return WasteEntry(
        waste_id=WasteId(model.id),
        staff_id=StaffId(model.staff_id),
        item_id=MenuItemId(model.item_id) if model.item_id is not None else None,
        item_name=model.item_name,
        category_name=model.category_name,
        quantity=model.quantity,
        unit_cost=Money(amount_pence=model.unit_cost_pence),
        recorded_at=as_utc(model.recorded_at),
        recorded_by=model.staff.full_name if model.staff else None,
    )
