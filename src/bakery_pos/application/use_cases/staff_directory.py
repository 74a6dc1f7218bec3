from __future__ import annotations

from bakery_pos.application.dto.requests import StaffCreateRequest, StaffUpdateRequest
from bakery_pos.application.dto.responses import StaffResponse
from bakery_pos.application.mappers.records_mapper import to_staff_response
from bakery_pos.application.ports.repositories import (
    NewStaff,
    StaffFlagChanges,
    StaffRepository,
)
from bakery_pos.application.use_cases.errors import FieldValidationError
from bakery_pos.domain.common.ids import StaffId


class StaffNotFoundError(Exception):
    pass


class ListStaff:
    def __init__(self, staff_repository: StaffRepository) -> None:
        self._staff_repository = staff_repository

    def execute(self) -> list[StaffResponse]:
        return [to_staff_response(staff) for staff in self._staff_repository.list_newest_first()]


class RegisterStaff:
    def __init__(self, staff_repository: StaffRepository) -> None:
        self._staff_repository = staff_repository

    def execute(self, request_dto: StaffCreateRequest) -> StaffResponse:
        if self._staff_repository.access_code_exists(request_dto.access_code):
            raise FieldValidationError({"access_code": ["access code is already in use"]})

        staff = self._staff_repository.add(
            NewStaff(
                full_name=request_dto.full_name,
                access_code=request_dto.access_code,
                dob=request_dto.dob,
                email=request_dto.email,
                joined_date=request_dto.joined_date,
                is_active=request_dto.is_active,
                role_name=request_dto.role_name,
                can_toggle_channel=request_dto.can_toggle_channel,
                can_waste=request_dto.can_waste,
                can_refund=request_dto.can_refund,
            )
        )
        return to_staff_response(staff)


class UpdateStaff:
    def __init__(self, staff_repository: StaffRepository) -> None:
        self._staff_repository = staff_repository

    def execute(self, staff_id: StaffId, request_dto: StaffUpdateRequest) -> StaffResponse:
        changes = StaffFlagChanges(**request_dto.model_dump(exclude_none=True))
        staff = self._staff_repository.update_flags(staff_id, changes)
        if staff is None:
            raise StaffNotFoundError(f"staff {staff_id} not found")
        return to_staff_response(staff)
