from __future__ import annotations

from fastapi import APIRouter, status

from bakery_pos.application.dto.requests import StaffCreateRequest, StaffUpdateRequest
from bakery_pos.application.dto.responses import StaffResponse
from bakery_pos.application.use_cases.staff_directory import ListStaff, RegisterStaff, UpdateStaff
from bakery_pos.domain.common.ids import StaffId
from bakery_pos.infrastructure.db.repositories.staff_repo import SqlAlchemyStaffRepository

router = APIRouter()


@router.get("/staff", response_model=list[StaffResponse])
def list_staff() -> list[StaffResponse]:
    return ListStaff(staff_repository=SqlAlchemyStaffRepository()).execute()


@router.post("/staff", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
def register_staff(request_dto: StaffCreateRequest) -> StaffResponse:
    return RegisterStaff(staff_repository=SqlAlchemyStaffRepository()).execute(request_dto)


@router.patch("/staff/{staff_id}", response_model=StaffResponse)
def update_staff(staff_id: int, request_dto: StaffUpdateRequest) -> StaffResponse:
    use_case = UpdateStaff(staff_repository=SqlAlchemyStaffRepository())
    return use_case.execute(StaffId(staff_id), request_dto)
