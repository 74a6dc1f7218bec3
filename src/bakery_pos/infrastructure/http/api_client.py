from __future__ import annotations

import logging
import os
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter

from bakery_pos.application.dto.requests import (
    AuditLogCreateRequest,
    ChannelStatusUpdateRequest,
    CreateOrderRequest,
    MenuItemCreateRequest,
    MenuItemUpdateRequest,
    StaffCreateRequest,
    StaffUpdateRequest,
    WasteCreateRequest,
)
from bakery_pos.application.dto.responses import (
    AuditLogResponse,
    ChannelStatusResponse,
    DeletedResponse,
    MenuItemResponse,
    OrderResponse,
    StaffResponse,
    WasteResponse,
)
from bakery_pos.application.ports.bakery_api import ApiError, ApiUnavailableError, BakeryApi
from bakery_pos.domain.menu.entities import OrderType

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"
T = TypeVar("T")


def _base_url() -> str:
    return os.getenv("BAKERY_API_URL", DEFAULT_BASE_URL)


def _wire(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _wire(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_wire(item) for item in value]
    return value


def _body(request_dto: BaseModel) -> dict[str, Any]:
    """JSON body with money as numbers, the shape the REST surface documents."""
    return _wire(request_dto.model_dump(mode="python", exclude_none=True))


class BakeryApiClient(BakeryApi):
    """Synchronous client for the bakery REST surface.

    Any ``httpx.Client`` works, including FastAPI's ``TestClient``.
    """

    def __init__(self, client: httpx.Client | None = None, timeout_seconds: float = 5.0) -> None:
        self._client = client or httpx.Client(base_url=_base_url(), timeout=timeout_seconds)

    def close(self) -> None:
        self._client.close()

    def login(self, access_code: str) -> StaffResponse:
        return self._send("POST", "/login", StaffResponse, json={"access_code": access_code})

    def list_menu_items(self) -> list[MenuItemResponse]:
        return self._send("GET", "/menu-items", list[MenuItemResponse])

    def list_categories(self) -> list[str]:
        return self._send("GET", "/categories", list[str])

    def create_menu_item(self, request_dto: MenuItemCreateRequest) -> MenuItemResponse:
        return self._send("POST", "/menu-items", MenuItemResponse, json=_body(request_dto))

    def update_menu_item(
        self,
        item_id: int,
        request_dto: MenuItemUpdateRequest,
    ) -> MenuItemResponse:
        return self._send(
            "PATCH",
            f"/menu-items/{item_id}",
            MenuItemResponse,
            json=_body(request_dto),
        )

    def set_channel_availability(
        self,
        item_id: int,
        order_type: OrderType,
        is_available: bool,
    ) -> ChannelStatusResponse:
        return self._send(
            "PATCH",
            f"/menu-channel-statuses/{item_id}/{order_type.channel_id}",
            ChannelStatusResponse,
            json=_body(ChannelStatusUpdateRequest(is_available=is_available)),
        )

    def create_order(self, request_dto: CreateOrderRequest) -> OrderResponse:
        return self._send("POST", "/orders", OrderResponse, json=_body(request_dto))

    def list_orders(self, period: str = "today") -> list[OrderResponse]:
        return self._send("GET", "/orders", list[OrderResponse], params={"period": period})

    def record_waste(self, request_dto: WasteCreateRequest) -> WasteResponse:
        return self._send("POST", "/waste", WasteResponse, json=_body(request_dto))

    def list_waste(self, period: str = "today") -> list[WasteResponse]:
        return self._send("GET", "/waste", list[WasteResponse], params={"period": period})

    def delete_waste(self, waste_id: int) -> DeletedResponse:
        return self._send("DELETE", f"/waste/{waste_id}", DeletedResponse)

    def append_audit_log(self, request_dto: AuditLogCreateRequest) -> AuditLogResponse:
        return self._send("POST", "/audit-logs", AuditLogResponse, json=_body(request_dto))

    def list_audit_logs(self) -> list[AuditLogResponse]:
        return self._send("GET", "/audit-logs", list[AuditLogResponse])

    def list_staff(self) -> list[StaffResponse]:
        return self._send("GET", "/staff", list[StaffResponse])

    def register_staff(self, request_dto: StaffCreateRequest) -> StaffResponse:
        return self._send("POST", "/staff", StaffResponse, json=_body(request_dto))

    def update_staff(self, staff_id: int, request_dto: StaffUpdateRequest) -> StaffResponse:
        return self._send("PATCH", f"/staff/{staff_id}", StaffResponse, json=_body(request_dto))

    def _send(self, method: str, path: str, response_type: type[T] | Any, **kwargs: Any) -> T:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("bakery_api_unreachable", extra={"method": method, "path": path})
            raise ApiUnavailableError(f"{method} {path} failed: {exc}") from exc

        if response.is_error:
            raise _api_error(response)
        return TypeAdapter(response_type).validate_python(response.json())


def _api_error(response: httpx.Response) -> ApiError:
    try:
        payload = response.json()
    except ValueError:
        payload = {}
    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        error = {}
    return ApiError(
        status_code=response.status_code,
        code=str(error.get("code", "HTTP_ERROR")),
        message=str(error.get("message", response.reason_phrase or "request failed")),
        details=error.get("details") if isinstance(error.get("details"), dict) else None,
    )
