"""API tests for browsing and managing discount offers."""

import pytest

OFFERS_URL = "/offers"
MANAGE_URL = "/offers-management"


def test_list_offers_returns_seed_offers(client):
    r = client.get(OFFERS_URL)
    assert r.status_code == 200
    assert r.json() == [
        {"id": 1, "name": "Buy 2 Get 10% Off", "condition": {"minItems": 2}, "discount": 0.1},
        {"id": 2, "name": "Laptop 5% Off", "condition": {"itemId": 1}, "discount": 0.05},
    ]


def test_create_offer_returns_201(client):
    payload = {"name": "Phone deal", "condition": {"itemId": 2}, "discount": 0.2}
    r = client.post(MANAGE_URL, data=payload, content_type="application/json")
    assert r.status_code == 201
    assert r.json() == {"id": 3, "name": "Phone deal", "condition": {"itemId": 2}, "discount": 0.2}


def test_update_offer_returns_200_and_changes_condition(client):
    payload = {"id": 1, "name": "Bulk", "condition": {"minItems": 5}, "discount": 0.25}
    r = client.post(MANAGE_URL, data=payload, content_type="application/json")
    assert r.status_code == 200
    offers = client.get(OFFERS_URL).json()
    assert len(offers) == 2
    assert offers[0] == {"id": 1, "name": "Bulk", "condition": {"minItems": 5}, "discount": 0.25}


def test_new_offer_takes_part_in_pricing(client):
    payload = {"name": "Headphones 50%", "condition": {"itemId": 3}, "discount": 0.5}
    assert client.post(MANAGE_URL, data=payload, content_type="application/json").status_code == 201

    r = client.post("/orders", data={"items": [{"id": 3, "quantity": 1}]}, content_type="application/json")
    assert r.status_code == 201
    assert r.json()["appliedOffers"] == ["Headphones 50%"]
    assert r.json()["total"] == pytest.approx(40.0)  # 79.99 * 0.5 = 39.995 -> 40.00


@pytest.mark.parametrize(
    "payload",
    [
        {"condition": {"minItems": 2}, "discount": 0.1},
        {"name": "x", "discount": 0.1},
        {"name": "x", "condition": {}, "discount": 0.1},
        {"name": "x", "condition": {"minItems": 2, "itemId": 1}, "discount": 0.1},
        {"name": "x", "condition": {"category": "audio"}, "discount": 0.1},
        {"name": "x", "condition": {"minItems": 0}, "discount": 0.1},
        {"name": "x", "condition": {"minItems": 2}, "discount": 1.5},
        {"name": "x", "condition": {"minItems": 2}, "discount": -0.1},
        {"name": "x", "condition": {"itemId": "2"}, "discount": 0.5},
        {"name": "x", "condition": {"minItems": True}, "discount": 0.5},
        {"name": "x", "condition": {"itemId": 2}, "discount": "0.5"},
        {"name": "x", "condition": {"itemId": 2}, "discount": False},
    ],
)
def test_upsert_offer_invalid_fields_returns_400(client, payload):
    r = client.post(MANAGE_URL, data=payload, content_type="application/json")
    assert r.status_code == 400
    assert r.json()["detail"] == "INVALID_OFFER"
    assert len(client.get(OFFERS_URL).json()) == 2


def test_remove_offer(client):
    assert client.delete(f"{MANAGE_URL}/1").status_code == 204
    r = client.delete(f"{MANAGE_URL}/1")
    assert r.status_code == 404
    assert r.json()["detail"] == "OFFER_NOT_FOUND"
    assert [o["id"] for o in client.get(OFFERS_URL).json()] == [2]
