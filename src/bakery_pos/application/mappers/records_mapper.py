from __future__ import annotations

from bakery_pos.application.dto.responses import (
    AuditLogResponse,
    StaffResponse,
    WasteResponse,
)
from bakery_pos.application.mappers.menu_mapper import money_to_float
from bakery_pos.domain.audit.entities import AuditLogEntry
from bakery_pos.domain.staff.entities import Staff
from bakery_pos.domain.waste.entities import WasteEntry

UNKNOWN_STAFF_NAME = "Unknown"


def to_staff_response(staff: Staff) -> StaffResponse:
    return StaffResponse(
        staff_id=int(staff.staff_id),
        full_name=staff.full_name,
        access_code=staff.access_code,
        dob=staff.dob,
        email=staff.email,
        joined_date=staff.joined_date,
        is_active=staff.is_active,
        role_name=staff.role_name.value,
        can_toggle_channel=staff.can_toggle_channel,
        can_waste=staff.can_waste,
        can_refund=staff.can_refund,
        created_at=staff.created_at,
        updated_at=staff.updated_at,
    )


def to_waste_response(entry: WasteEntry) -> WasteResponse:
    return WasteResponse(
        id=int(entry.waste_id),
        item_id=int(entry.item_id) if entry.item_id is not None else None,
        item_name=entry.item_name,
        category_name=entry.category_name,
        qty=entry.quantity,
        unit_cost=money_to_float(entry.unit_cost),
        recorded_by=entry.recorded_by or UNKNOWN_STAFF_NAME,
        recorded_at=entry.recorded_at,
    )


def to_audit_log_response(entry: AuditLogEntry) -> AuditLogResponse:
    return AuditLogResponse(
        id=int(entry.log_id),
        timestamp=entry.timestamp,
        user_id=int(entry.staff_id),
        user_name=entry.user_name,
        role=entry.role,
        action=entry.action,
        details=entry.details,
    )
