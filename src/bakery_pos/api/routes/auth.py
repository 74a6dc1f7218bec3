from __future__ import annotations

from fastapi import APIRouter

from bakery_pos.application.dto.requests import LoginRequest
from bakery_pos.application.dto.responses import StaffResponse
from bakery_pos.application.use_cases.login import Login
from bakery_pos.infrastructure.db.repositories.staff_repo import SqlAlchemyStaffRepository

router = APIRouter()


def _login_use_case() -> Login:
    return Login(staff_repository=SqlAlchemyStaffRepository())


@router.post("/login", response_model=StaffResponse)
def login(request_dto: LoginRequest) -> StaffResponse:
    return _login_use_case().execute(request_dto)
