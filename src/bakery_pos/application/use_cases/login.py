from __future__ import annotations

import logging

from bakery_pos.application.dto.requests import LoginRequest
from bakery_pos.application.dto.responses import StaffResponse
from bakery_pos.application.mappers.records_mapper import to_staff_response
from bakery_pos.application.ports.repositories import StaffRepository

logger = logging.getLogger(__name__)


class InvalidAccessCodeError(Exception):
    pass


class Login:
    def __init__(self, staff_repository: StaffRepository) -> None:
        self._staff_repository = staff_repository

    def execute(self, request_dto: LoginRequest) -> StaffResponse:
        staff = self._staff_repository.find_active_by_access_code(request_dto.access_code)
        if staff is None:
            logger.info("login_rejected")
            raise InvalidAccessCodeError("Invalid access code or account is inactive.")
        logger.info("login_succeeded", extra={"staff_id": int(staff.staff_id)})
        return to_staff_response(staff)
