from __future__ import annotations

from fastapi import APIRouter, status

from bakery_pos.application.dto.requests import AuditLogCreateRequest
from bakery_pos.application.dto.responses import AuditLogResponse
from bakery_pos.application.use_cases.audit_log import AppendAuditLog, ListAuditLogs
from bakery_pos.infrastructure.db.repositories.audit_repo import SqlAlchemyAuditLogRepository
from bakery_pos.infrastructure.db.repositories.staff_repo import SqlAlchemyStaffRepository

router = APIRouter()


@router.get("/audit-logs", response_model=list[AuditLogResponse])
def list_audit_logs() -> list[AuditLogResponse]:
    return ListAuditLogs(audit_repository=SqlAlchemyAuditLogRepository()).execute()


@router.post("/audit-logs", response_model=AuditLogResponse, status_code=status.HTTP_201_CREATED)
def append_audit_log(request_dto: AuditLogCreateRequest) -> AuditLogResponse:
    use_case = AppendAuditLog(
        audit_repository=SqlAlchemyAuditLogRepository(),
        staff_repository=SqlAlchemyStaffRepository(),
    )
    return use_case.execute(request_dto)
