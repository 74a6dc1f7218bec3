from __future__ import annotations

from fastapi import APIRouter, Query, status

from bakery_pos.application.dto.requests import WasteCreateRequest
from bakery_pos.application.dto.responses import DeletedResponse, WasteResponse
from bakery_pos.application.use_cases.periods import Period
from bakery_pos.application.use_cases.waste import DeleteWaste, ListWaste, RecordWaste
from bakery_pos.domain.common.ids import WasteId
from bakery_pos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from bakery_pos.infrastructure.db.repositories.staff_repo import SqlAlchemyStaffRepository
from bakery_pos.infrastructure.db.repositories.waste_repo import SqlAlchemyWasteRepository

router = APIRouter()


@router.get("/waste", response_model=list[WasteResponse])
def list_waste(period: str = Query(default=Period.TODAY.value)) -> list[WasteResponse]:
    use_case = ListWaste(waste_repository=SqlAlchemyWasteRepository())
    return use_case.execute(Period.parse(period))


@router.post("/waste", response_model=WasteResponse, status_code=status.HTTP_201_CREATED)
def record_waste(request_dto: WasteCreateRequest) -> WasteResponse:
    use_case = RecordWaste(
        waste_repository=SqlAlchemyWasteRepository(),
        staff_repository=SqlAlchemyStaffRepository(),
        menu_repository=SqlAlchemyMenuRepository(),
    )
    return use_case.execute(request_dto)


@router.delete("/waste/{waste_id}", response_model=DeletedResponse)
def delete_waste(waste_id: int) -> DeletedResponse:
    return DeleteWaste(waste_repository=SqlAlchemyWasteRepository()).execute(WasteId(waste_id))
