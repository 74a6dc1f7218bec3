from __future__ import annotations

import os

from fastapi import APIRouter, Header, Response, status

from bakery_pos.application.dto.requests import (
    ChannelStatusUpdateRequest,
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
)
from bakery_pos.application.dto.responses import ChannelStatusResponse, MenuItemResponse
from bakery_pos.application.use_cases.get_menu import GetMenuItems, ListCategories
from bakery_pos.application.use_cases.manage_menu import (
    CreateMenuItem,
    SetChannelAvailability,
    UpdateMenuItem,
)
from bakery_pos.domain.common.ids import MenuItemId
from bakery_pos.infrastructure.cache.cache_store import RedisCacheStore
from bakery_pos.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository

router = APIRouter()


def _menu_cache_ttl_seconds() -> int:
    return int(os.getenv("MENU_CACHE_TTL_SECONDS", "300"))


def _get_menu_items_use_case() -> GetMenuItems:
    return GetMenuItems(
        repository=SqlAlchemyMenuRepository(),
        cache=RedisCacheStore(),
        ttl_seconds=_menu_cache_ttl_seconds(),
    )


@router.get("/menu-items", response_model=list[MenuItemResponse])
def list_menu_items(
    response: Response,
    if_none_match: str | None = Header(default=None, alias="If-None-Match"),
) -> list[MenuItemResponse] | Response:
    snapshot = _get_menu_items_use_case().execute()
    if if_none_match == snapshot.etag:
        return Response(status_code=304, headers={"ETag": snapshot.etag})

    response.headers["ETag"] = snapshot.etag
    return snapshot.items


@router.get("/categories", response_model=list[str])
def list_categories() -> list[str]:
    return ListCategories(repository=SqlAlchemyMenuRepository()).execute()


@router.post("/menu-items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(request_dto: MenuItemCreateRequest) -> MenuItemResponse:
    use_case = CreateMenuItem(repository=SqlAlchemyMenuRepository(), cache=RedisCacheStore())
    return use_case.execute(request_dto)


@router.patch("/menu-items/{item_id}", response_model=MenuItemResponse)
def update_menu_item(item_id: int, request_dto: MenuItemUpdateRequest) -> MenuItemResponse:
    use_case = UpdateMenuItem(repository=SqlAlchemyMenuRepository(), cache=RedisCacheStore())
    return use_case.execute(MenuItemId(item_id), request_dto)


@router.patch(
    "/menu-channel-statuses/{item_id}/{order_type_id}",
    response_model=ChannelStatusResponse,
)
def update_channel_status(
    item_id: int,
    order_type_id: int,
    request_dto: ChannelStatusUpdateRequest,
) -> ChannelStatusResponse:
    use_case = SetChannelAvailability(
        repository=SqlAlchemyMenuRepository(),
        cache=RedisCacheStore(),
    )
    return use_case.execute(MenuItemId(item_id), order_type_id, request_dto)
