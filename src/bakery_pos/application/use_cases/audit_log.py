from __future__ import annotations

from bakery_pos.application.dto.requests import AuditLogCreateRequest
from bakery_pos.application.dto.responses import AuditLogResponse
from bakery_pos.application.mappers.records_mapper import to_audit_log_response
from bakery_pos.application.metrics.pos_metrics import record_audit_entry
from bakery_pos.application.ports.repositories import AuditLogRepository, StaffRepository
from bakery_pos.application.use_cases.errors import FieldValidationError
from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.common.ids import StaffId
from bakery_pos.domain.staff.entities import Actor


class AppendAuditLog:
    """Record an action with the actor's name and role as they are now.

    The client may supply ``user_name``/``role``; missing values are filled
    from the staff record. The timestamp is always assigned here.
    """

    def __init__(
        self,
        audit_repository: AuditLogRepository,
        staff_repository: StaffRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._audit_repository = audit_repository
        self._staff_repository = staff_repository
        self._clock = clock

    def execute(self, request_dto: AuditLogCreateRequest) -> AuditLogResponse:
        staff = self._staff_repository.get(StaffId(request_dto.staff_id))
        if staff is None:
            raise FieldValidationError(
                {"staff_id": [f"staff {request_dto.staff_id} does not exist"]}
            )

        actor = Actor(
            staff_id=staff.staff_id,
            full_name=request_dto.user_name or staff.full_name,
            role_name=request_dto.role or staff.role_name.value,
        )
        entry = self._audit_repository.append(
            actor=actor,
            action=request_dto.action,
            details=request_dto.details or "",
            timestamp=self._clock(),
        )
        record_audit_entry(entry.action)
        return to_audit_log_response(entry)


class ListAuditLogs:
    def __init__(self, audit_repository: AuditLogRepository) -> None:
        self._audit_repository = audit_repository

    def execute(self) -> list[AuditLogResponse]:
        return [to_audit_log_response(entry) for entry in self._audit_repository.list_newest_first()]
