from __future__ import annotations

from pathlib import Path

import pytest
from starlette.testclient import TestClient

from inventory_manager.inventory import DatabaseInitError
from inventory_manager.inventory.frontend import create_app


@pytest.fixture
def client(tmp_path: Path):
    app = create_app(str(tmp_path / "inventory.db"))
    with TestClient(app) as test_client:
        yield test_client


def _create(client: TestClient, name: str, quantity: int, price: float) -> dict:
    response = client.post("/api/products", json={"name": name, "quantity": quantity, "price": price})
    assert response.status_code == 201
    return response.json()


def test_health_reports_db_path(client: TestClient, tmp_path: Path) -> None:
    payload = client.get("/api/health").json()
    assert payload["status"] == "ok"
    assert payload["db_path"] == str(tmp_path / "inventory.db")


def test_create_list_and_fetch(client: TestClient) -> None:
    created = _create(client, "Gadget", 5, 9.99)
    assert created["id"] > 0
    assert created["name"] == "Gadget"

    listing = client.get("/api/products").json()
    assert listing["total"] == 1
    assert listing["items"][0] == created

    assert client.get(f"/api/products/{created['id']}").json() == created
    assert client.get("/api/products/999").status_code == 404


def test_invalid_payloads_are_rejected(client: TestClient) -> None:
    bad = [
        {"name": "", "quantity": 1, "price": 1.0},
        {"name": "Widget", "quantity": -1, "price": 1.0},
        {"name": "Widget", "quantity": 1, "price": -0.5},
        {"name": "Widget", "quantity": "many", "price": 1.0},
    ]
    for body in bad:
        assert client.post("/api/products", json=body).status_code == 400
    assert client.post("/api/products", content=b"not json").status_code == 400
    assert client.get("/api/products").json()["total"] == 0


def test_update_and_delete(client: TestClient) -> None:
    created = _create(client, "Widget", 1, 1.0)
    pid = created["id"]

    response = client.put(f"/api/products/{pid}", json={"name": "Widget Pro", "quantity": 4, "price": 3.25})
    assert response.status_code == 200
    assert client.get(f"/api/products/{pid}").json()["name"] == "Widget Pro"

    missing = client.put("/api/products/999", json={"name": "Ghost", "quantity": 1, "price": 1.0})
    assert missing.status_code == 404

    assert client.delete(f"/api/products/{pid}").status_code == 204
    assert client.delete(f"/api/products/{pid}").status_code == 404


def test_search_filter_and_report(client: TestClient) -> None:
    _create(client, "Widget", 12, 2.0)
    _create(client, "Gizmo", 3, 1.0)
    _create(client, "Sprocket", 7, 1.0)

    found = client.get("/api/products", params={"search": "WID"}).json()
    assert [p["name"] for p in found["items"]] == ["Widget"]

    low = client.get("/api/products", params={"below": "10"}).json()
    assert [p["quantity"] for p in low["items"]] == [3, 7]

    assert client.get("/api/products", params={"below": "-1"}).status_code == 400
    assert client.get("/api/products", params={"search": "a", "below": "1"}).status_code == 400

    report = client.get("/api/report").json()
    assert report == {"total_items": 3, "total_value": 34.0}


def test_unusable_database_path_fails_at_startup(tmp_path: Path) -> None:
    with pytest.raises(DatabaseInitError):
        create_app(str(tmp_path / "missing-dir" / "inventory.db"))


def test_oversized_integers_are_client_errors(client: TestClient) -> None:
    huge = 99999999999999999999
    response = client.post("/api/products", json={"name": "Gadget", "quantity": huge, "price": 1.0})
    assert response.status_code == 400
    assert client.post("/api/products", json={"name": "Gadget", "quantity": 1, "price": 1e308}).status_code == 400
    assert client.get("/api/products", params={"below": str(huge)}).status_code == 400

    assert client.get(f"/api/products/{huge}").status_code == 404
    assert client.delete(f"/api/products/{huge}").status_code == 404
    put = client.put(f"/api/products/{huge}", json={"name": "Ghost", "quantity": 1, "price": 1.0})
    assert put.status_code == 404
    assert client.get("/api/products").json()["total"] == 0
