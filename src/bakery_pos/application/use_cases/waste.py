from __future__ import annotations

import logging

from bakery_pos.application.dto.requests import WasteCreateRequest
from bakery_pos.application.dto.responses import DeletedResponse, WasteResponse
from bakery_pos.application.mappers.records_mapper import to_waste_response
from bakery_pos.application.metrics.pos_metrics import record_waste
from bakery_pos.application.ports.repositories import (
    MenuRepository,
    NewWasteEntry,
    StaffRepository,
    WasteRepository,
)
from bakery_pos.application.use_cases.errors import FieldValidationError
from bakery_pos.application.use_cases.periods import Period, period_window
from bakery_pos.domain.common.clock import Clock, utc_now
from bakery_pos.domain.common.ids import MenuItemId, StaffId, WasteId
from bakery_pos.domain.common.money import Money

logger = logging.getLogger(__name__)


class WasteNotFoundError(Exception):
    pass


class RecordWaste:
    def __init__(
        self,
        waste_repository: WasteRepository,
        staff_repository: StaffRepository,
        menu_repository: MenuRepository,
        clock: Clock = utc_now,
    ) -> None:
        self._waste_repository = waste_repository
        self._staff_repository = staff_repository
        self._menu_repository = menu_repository
        self._clock = clock

    def execute(self, request_dto: WasteCreateRequest) -> WasteResponse:
        field_errors: dict[str, list[str]] = {}
        if self._staff_repository.get(StaffId(request_dto.staff_id)) is None:
            field_errors["staff_id"] = [f"staff {request_dto.staff_id} does not exist"]
        if (
            request_dto.item_id is not None
            and self._menu_repository.get_item(MenuItemId(request_dto.item_id)) is None
        ):
            field_errors["item_id"] = [f"menu item {request_dto.item_id} does not exist"]
        if field_errors:
            raise FieldValidationError(field_errors)

        entry = self._waste_repository.add(
            NewWasteEntry(
                staff_id=StaffId(request_dto.staff_id),
                item_id=MenuItemId(request_dto.item_id) if request_dto.item_id is not None else None,
                item_name=request_dto.item_name,
                category_name=request_dto.category_name,
                quantity=request_dto.quantity,
                unit_cost=Money.from_decimal(request_dto.unit_cost),
                recorded_at=self._clock(),
            )
        )
        record_waste(entry.category_name)
        logger.info("waste_recorded", extra={"staff_id": request_dto.staff_id})
        return to_waste_response(entry)


class ListWaste:
    def __init__(self, waste_repository: WasteRepository, clock: Clock = utc_now) -> None:
        self._waste_repository = waste_repository
        self._clock = clock

    def execute(self, period: Period = Period.TODAY) -> list[WasteResponse]:
        start, end = period_window(period, self._clock())
        return [to_waste_response(entry) for entry in self._waste_repository.list_between(start, end)]


class DeleteWaste:
    def __init__(self, waste_repository: WasteRepository) -> None:
        self._waste_repository = waste_repository

    def execute(self, waste_id: WasteId) -> DeletedResponse:
        if not self._waste_repository.delete(waste_id):
            raise WasteNotFoundError(f"waste entry {waste_id} not found")
        return DeletedResponse(deleted=True)
