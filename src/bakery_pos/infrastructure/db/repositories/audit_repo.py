from __future__ import annotations

from datetime import datetime

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from bakery_pos.application.ports.repositories import AuditLogRepository
from bakery_pos.domain.audit.entities import AuditLogEntry
from bakery_pos.domain.common.clock import as_utc
from bakery_pos.domain.common.ids import AuditLogId, StaffId
from bakery_pos.domain.staff.entities import Actor
from bakery_pos.infrastructure.db.models.audit import AuditLogModel
from bakery_pos.infrastructure.db.session import get_engine


class SqlAlchemyAuditLogRepository(AuditLogRepository):
    """Append-only: there is deliberately no update or delete here."""

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def append(
        self,
        actor: Actor,
        action: str,
        details: str,
        timestamp: datetime,
    ) -> AuditLogEntry:
        model = AuditLogModel(
            staff_id=int(actor.staff_id),
            action=action,
            details=details,
            user_name=actor.full_name,
            role=actor.role_name,
            timestamp=timestamp,
        )
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
            return _to_domain(model)

    def list_newest_first(self) -> list[AuditLogEntry]:
        statement = select(AuditLogModel).order_by(
            AuditLogModel.timestamp.desc(),
            AuditLogModel.id.desc(),
        )
        with Session(self._engine) as session:
            return [_to_domain(model) for model in session.execute(statement).scalars()]


def _to_domain(model: AuditLogModel) -> AuditLogEntry:
    return AuditLogEntry(
        log_id=AuditLogId(model.id),
        staff_id=StaffId(model.staff_id),
        action=model.action,
        details=model.details,
        user_name=model.user_name,
        role=model.role,
        timestamp=as_utc(model.timestamp),
    )
