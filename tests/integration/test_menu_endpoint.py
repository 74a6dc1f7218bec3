from __future__ import annotations

from fastapi.testclient import TestClient


def test_menu_items_support_conditional_get(client: TestClient) -> None:
    first = client.get("/menu-items")
    assert first.status_code == 200
    etag = first.headers["ETag"]
    assert etag.startswith('"') and etag.endswith('"')

    second = client.get("/menu-items", headers={"If-None-Match": etag})

    assert second.status_code == 304
    assert second.headers["ETag"] == etag


def test_seeded_menu_is_grouped_by_category(client: TestClient) -> None:
    items = client.get("/menu-items").json()
    croissant = next(item for item in items if item["name"] == "Croissant")

    assert croissant["price"] == 2.5
    assert croissant["category_name"] == "Pastry"
    assert croissant["channels"] == [
        {"order_type_id": 1, "is_available": True},
        {"order_type_id": 2, "is_available": True},
    ]
    assert {"Bread", "Cakes", "Drinks", "Pastry", "Savory"} <= set(
        client.get("/categories").json()
    )


def test_new_item_channels_and_archive(client: TestClient) -> None:
    etag_before = client.get("/menu-items").headers["ETag"]

    create_response = client.post(
        "/menu-items",
        json={"item_name": "Eccles Cake", "unit_cost": 2.60, "category_name": "Pastry"},
    )
    assert create_response.status_code == 201
    item = create_response.json()
    assert item["is_published"] is True
    assert [channel["is_available"] for channel in item["channels"]] == [True, True]

    channel_response = client.patch(
        f"/menu-channel-statuses/{item['id']}/2",
        json={"is_available": False},
    )
    assert channel_response.status_code == 200
    assert channel_response.json() == {
        "item_id": item["id"],
        "order_type_id": 2,
        "is_available": False,
    }

    listing = client.get("/menu-items")
    assert listing.headers["ETag"] != etag_before
    listed = next(row for row in listing.json() if row["id"] == item["id"])
    assert listed["channels"][1] == {"order_type_id": 2, "is_available": False}

    archive_response = client.patch(f"/menu-items/{item['id']}", json={"is_archived": True})
    assert archive_response.status_code == 200
    assert archive_response.json()["is_archived"] is True
    assert archive_response.json()["is_published"] is False


def test_price_update_and_errors(client: TestClient) -> None:
    created = client.post(
        "/menu-items",
        json={"item_name": "Bath Bun", "unit_cost": 1.95, "category_name": "Bread"},
    ).json()

    price_response = client.patch(f"/menu-items/{created['id']}", json={"unit_cost": 2.10})
    assert price_response.status_code == 200
    assert price_response.json()["price"] == 2.1

    bad_price = client.patch(f"/menu-items/{created['id']}", json={"unit_cost": 2.105})
    assert bad_price.status_code == 422

    unknown_channel = client.patch(
        f"/menu-channel-statuses/{created['id']}/3",
        json={"is_available": False},
    )
    assert unknown_channel.status_code == 422
    assert unknown_channel.json()["error"]["code"] == "UNKNOWN_ORDER_TYPE"

    missing_row = client.patch("/menu-channel-statuses/999999/1", json={"is_available": False})
    assert missing_row.status_code == 404
    assert missing_row.json()["error"]["code"] == "CHANNEL_STATUS_NOT_FOUND"

    missing_item = client.patch("/menu-items/999999", json={"is_published": False})
    assert missing_item.status_code == 404
    assert missing_item.json()["error"]["code"] == "MENU_ITEM_NOT_FOUND"
