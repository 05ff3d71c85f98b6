from apps.orders import providers


def test_health_reports_registry_sizes(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["components"]["catalog"] == {"ok": True, "items": 3}
    assert body["components"]["offers"] == {"ok": True, "offers": 2}
    assert body["components"]["orders"] == {"ok": True, "orders": 0}


def test_health_fails_on_negative_stock(client):
    providers.get_store().catalog.get(1).stock = -1
    r = client.get("/health")
    assert r.status_code == 503
    assert r.json()["components"]["catalog"]["ok"] is False


def test_health_counts_orders_after_placement(client):
    r = client.post("/orders", data={"items": [{"id": 2, "quantity": 1}]}, content_type="application/json")
    assert r.status_code == 201
    assert client.get("/health").json()["components"]["orders"]["orders"] == 1
