"""API tests for browsing and managing catalog items."""

import pytest

ITEMS_URL = "/items"
MANAGE_URL = "/items-management"


def test_list_items_returns_seed_catalog(client):
    r = client.get(ITEMS_URL)
    assert r.status_code == 200
    assert r.json() == [
        {"id": 1, "name": "Laptop", "price": 999.99, "stock": 10},
        {"id": 2, "name": "Phone", "price": 499.99, "stock": 20},
        {"id": 3, "name": "Headphones", "price": 79.99, "stock": 50},
    ]


def test_create_item_returns_201_and_appends(client):
    r = client.post(MANAGE_URL, data={"name": "Mouse", "price": 19.5, "stock": 4}, content_type="application/json")
    assert r.status_code == 201
    assert r.json() == {"id": 4, "name": "Mouse", "price": 19.5, "stock": 4}
    assert len(client.get(ITEMS_URL).json()) == 4


def test_update_item_returns_200_and_overwrites(client):
    payload = {"id": 2, "name": "Phone Pro", "price": 650, "stock": 0}
    r = client.post(MANAGE_URL, data=payload, content_type="application/json")
    assert r.status_code == 200
    assert r.json() == {"id": 2, "name": "Phone Pro", "price": 650.0, "stock": 0}
    items = client.get(ITEMS_URL).json()
    assert len(items) == 3
    assert items[1]["name"] == "Phone Pro"


def test_upsert_with_unknown_id_creates_new_sequential_id(client):
    payload = {"id": 77, "name": "Cable", "price": 5, "stock": 100}
    r = client.post(MANAGE_URL, data=payload, content_type="application/json")
    assert r.status_code == 201
    assert r.json()["id"] == 4


@pytest.mark.parametrize(
    "payload",
    [
        {"price": 1, "stock": 1},
        {"name": "", "price": 1, "stock": 1},
        {"name": "   ", "price": 1, "stock": 1},
        {"name": "X", "price": -1, "stock": 1},
        {"name": "X", "price": 1, "stock": -1},
        {"name": "X", "price": "cheap", "stock": 1},
        {"name": "X", "price": 1},
        {"name": "X", "price": 5, "stock": True},
        {"name": "X", "price": "5", "stock": 3},
        {"name": "X", "price": 5, "stock": "3"},
        {"name": "X", "price": True, "stock": 3},
        {"id": "2", "name": "X", "price": 5, "stock": 3},
    ],
)
def test_upsert_item_invalid_fields_returns_400(client, payload):
    r = client.post(MANAGE_URL, data=payload, content_type="application/json")
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_ITEM"
    assert len(client.get(ITEMS_URL).json()) == 3


def test_remove_item_returns_204(client):
    r = client.delete(f"{MANAGE_URL}/2")
    assert r.status_code == 204
    assert [i["id"] for i in client.get(ITEMS_URL).json()] == [1, 3]


def test_remove_missing_item_returns_404(client):
    r = client.delete(f"{MANAGE_URL}/99")
    assert r.status_code == 404
    assert r.json() == {"detail": "ITEM_NOT_FOUND", "message": "Item 99 not found"}
    assert len(client.get(ITEMS_URL).json()) == 3


def test_new_item_after_removal_keeps_ids_unique(client):
    assert client.delete(f"{MANAGE_URL}/1").status_code == 204
    r = client.post(MANAGE_URL, data={"name": "Tablet", "price": 300, "stock": 3}, content_type="application/json")
    assert r.status_code == 201
    ids = [i["id"] for i in client.get(ITEMS_URL).json()]
    assert len(ids) == len(set(ids))
