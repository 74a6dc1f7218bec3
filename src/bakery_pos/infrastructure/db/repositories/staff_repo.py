from __future__ import annotations

from sqlalchemy import Engine, select, update
from sqlalchemy.orm import Session

from bakery_pos.application.ports.repositories import (
    NewStaff,
    StaffFlagChanges,
    StaffRepository,
)
from bakery_pos.domain.common.clock import as_utc
from bakery_pos.domain.common.ids import StaffId
from bakery_pos.domain.staff.entities import Staff, StaffRole
from bakery_pos.infrastructure.db.models.staff import StaffModel
from bakery_pos.infrastructure.db.session import get_engine


class SqlAlchemyStaffRepository(StaffRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, staff_id: StaffId) -> Staff | None:
        with Session(self._engine) as session:
            model = session.get(StaffModel, int(staff_id))
            return _to_domain(model) if model is not None else None

    def find_active_by_access_code(self, access_code: str) -> Staff | None:
        statement = (
            select(StaffModel)
            .where(StaffModel.access_code == access_code, StaffModel.is_active.is_(True))
            .limit(1)
        )
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()
            return _to_domain(model) if model is not None else None

    def access_code_exists(self, access_code: str) -> bool:
        statement = select(StaffModel.id).where(StaffModel.access_code == access_code).limit(1)
        with Session(self._engine) as session:
            return session.execute(statement).first() is not None

    def list_newest_first(self) -> list[Staff]:
        statement = select(StaffModel).order_by(StaffModel.id.desc())
        with Session(self._engine) as session:
            return [_to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, new_staff: NewStaff) -> Staff:
        model = StaffModel(
            full_name=new_staff.full_name,
            access_code=new_staff.access_code,
            dob=new_staff.dob,
            email=new_staff.email,
            joined_date=new_staff.joined_date,
            is_active=new_staff.is_active,
            role_name=new_staff.role_name.value,
            can_toggle_channel=new_staff.can_toggle_channel,
            can_waste=new_staff.can_waste,
            can_refund=new_staff.can_refund,
        )
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
            session.refresh(model)
            return _to_domain(model)

    def update_flags(self, staff_id: StaffId, changes: StaffFlagChanges) -> Staff | None:
        values = changes.as_values()
        with Session(self._engine) as session:
            if values:
                result = session.execute(
                    update(StaffModel).where(StaffModel.id == int(staff_id)).values(**values)
                )
                if result.rowcount != 1:
                    session.rollback()
                    return None
                session.commit()
            model = session.get(StaffModel, int(staff_id))
            return _to_domain(model) if model is not None else None


def _to_domain(model: StaffModel) -> Staff:
    return Staff(
        staff_id=StaffId(model.id),
        full_name=model.full_name,
        access_code=model.access_code,
        dob=model.dob,
        email=model.email,
        joined_date=model.joined_date,
        is_active=model.is_active,
        role_name=StaffRole(model.role_name),
        can_toggle_channel=model.can_toggle_channel,
        can_waste=model.can_waste,
        can_refund=model.can_refund,
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
    )
