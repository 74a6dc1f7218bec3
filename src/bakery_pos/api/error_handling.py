from __future__ import annotations

from typing import Any, cast

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bakery_pos.api.middleware.request_id import get_request_id
from bakery_pos.application.use_cases.errors import FieldValidationError
from bakery_pos.application.use_cases.list_orders import OrderNotFoundError
from bakery_pos.application.use_cases.login import InvalidAccessCodeError
from bakery_pos.application.use_cases.manage_menu import (
    ChannelStatusNotFoundError,
    MenuItemNotFoundError,
    UnknownChannelError,
)
from bakery_pos.application.use_cases.periods import InvalidPeriodError
from bakery_pos.application.use_cases.staff_directory import StaffNotFoundError
from bakery_pos.application.use_cases.submit_order import TotalsMismatchError
from bakery_pos.application.use_cases.waste import WasteNotFoundError

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _error_response(
    *,
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            },
            "requestId": get_request_id(),
        },
    )


def _exception_handler(status_code: int, code: str):
    async def handler(_: Request, exc: Exception) -> JSONResponse:
        details = getattr(exc, "details", None)
        return _error_response(
            status_code=status_code,
            code=code,
            message=str(exc),
            details=details if isinstance(details, dict) else None,
        )

    return handler


_HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
}


async def _http_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    http_exc = cast(StarletteHTTPException, exc)
    return _error_response(
        status_code=http_exc.status_code,
        code=_HTTP_STATUS_CODES.get(http_exc.status_code, "HTTP_ERROR"),
        message=str(http_exc.detail or "request failed"),
        headers=getattr(http_exc, "headers", None),
    )


def _field_path(location: tuple[Any, ...] | list[Any]) -> str:
    parts = list(location)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(part) for part in parts) or "body"


async def _validation_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    validation_exc = cast(RequestValidationError, exc)
    fields: dict[str, list[str]] = {}
    for error in validation_exc.errors():
        fields.setdefault(_field_path(error.get("loc", ())), []).append(str(error.get("msg")))
    return _error_response(
        status_code=422,
        code="VALIDATION_FAILED",
        message="request validation failed",
        details={"fields": fields},
    )


# Use case errors and the status and code each maps to.
_DOMAIN_ERRORS: tuple[tuple[type[Exception], int, str], ...] = (
    (InvalidAccessCodeError, 401, "INVALID_ACCESS_CODE"),
    (FieldValidationError, 422, "VALIDATION_FAILED"),
    (TotalsMismatchError, 422, "TOTALS_MISMATCH"),
    (InvalidPeriodError, 422, "INVALID_PERIOD"),
    (UnknownChannelError, 422, "UNKNOWN_ORDER_TYPE"),
    (StaffNotFoundError, 404, "STAFF_NOT_FOUND"),
    (MenuItemNotFoundError, 404, "MENU_ITEM_NOT_FOUND"),
    (ChannelStatusNotFoundError, 404, "CHANNEL_STATUS_NOT_FOUND"),
    (OrderNotFoundError, 404, "ORDER_NOT_FOUND"),
    (WasteNotFoundError, 404, "WASTE_NOT_FOUND"),
)


def register_exception_handlers(app: FastAPI) -> None:
    for exc_cls, status_code, code in _DOMAIN_ERRORS:
        app.add_exception_handler(exc_cls, _exception_handler(status_code, code))

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
