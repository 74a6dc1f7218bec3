from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bakery_pos.application.dto.requests import WasteCreateRequest
from bakery_pos.application.ports.bakery_api import ApiError, ApiUnavailableError
from bakery_pos.domain.menu.entities import OrderType
from bakery_pos.infrastructure.http.api_client import BakeryApiClient


def _client(handler) -> BakeryApiClient:
    return BakeryApiClient(
        httpx.Client(base_url="http://bakery.test", transport=httpx.MockTransport(handler))
    )


def test_error_envelope_becomes_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={
                "error": {"code": "WASTE_NOT_FOUND", "message": "waste 7 not found", "details": {}},
                "requestId": "req-1",
            },
        )

    with pytest.raises(ApiError) as exc_info:
        _client(handler).delete_waste(7)

    assert exc_info.value.status_code == 404
    assert exc_info.value.code == "WASTE_NOT_FOUND"
    assert str(exc_info.value) == "waste 7 not found"


def test_non_json_error_still_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(ApiError) as exc_info:
        _client(handler).list_staff()

    assert exc_info.value.code == "HTTP_ERROR"


def test_transport_failure_becomes_api_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiUnavailableError):
        _client(handler).list_menu_items()


def test_money_is_sent_as_numbers_and_none_is_omitted() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            201,
            json={
                "id": 1,
                "item_id": None,
                "item_name": "Croissant",
                "category_name": "Pastry",
                "qty": 2,
                "unit_cost": 2.5,
                "recorded_by": "Sam Crust",
                "recorded_at": "2026-10-19T12:00:00Z",
            },
        )

    entry = _client(handler).record_waste(
        WasteCreateRequest(
            staff_id=2,
            item_name="Croissant",
            category_name="Pastry",
            quantity=2,
            unit_cost="2.50",
        )
    )

    assert seen["body"] == {
        "staff_id": 2,
        "item_name": "Croissant",
        "category_name": "Pastry",
        "quantity": 2,
        "unit_cost": 2.5,
    }
    assert entry.recorded_by == "Sam Crust"


def test_channel_update_uses_order_type_id() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        return httpx.Response(200, json={"item_id": 6, "order_type_id": 2, "is_available": False})

    _client(handler).set_channel_availability(6, OrderType.EAT_IN, False)

    assert seen["path"] == "/menu-channel-statuses/6/2"
