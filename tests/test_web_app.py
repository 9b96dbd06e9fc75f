"""Mini README: Tests for the FastAPI JSON service.

Structure:
    * catalog and tray routes - badges, additions, rejections.
    * purchase and report routes - finalize then read back the figures.
    * expense routes - creation with conversion, validation errors, edits.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from trayledger.interface import create_application
from trayledger.ledger import Ledger


@pytest.fixture
def client(ledger: Ledger) -> TestClient:
    return TestClient(create_application(ledger))


def test_products_include_stock_badges(client: TestClient) -> None:
    response = client.get("/products")

    assert response.status_code == 200
    badges = {product["id"]: product["stock_level"] for product in response.json()["products"]}
    assert badges == {"p1": "low", "p2": "low", "p3": "out"}


def test_tray_add_and_duplicate_rejection(client: TestClient) -> None:
    created = client.post("/tray/items", data={"product_id": "p1"})
    duplicate = client.post("/tray/items", data={"product_id": "p1"})

    assert created.status_code == 201
    assert created.json()["tray"]["total"] == 100.0
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "already_in_tray"
    assert "Shuka Blanket" in duplicate.json()["message"]


def test_remove_out_of_range_is_404(client: TestClient) -> None:
    response = client.delete("/tray/items/3")

    assert response.status_code == 404
    assert response.json()["code"] == "index_out_of_range"


def test_finalize_then_report(client: TestClient) -> None:
    client.post("/tray/items", data={"product_id": "p1"})
    client.post("/tray/items", data={"product_id": "p2"})

    finalized = client.post("/tray/finalize")
    report = client.get("/reports").json()

    assert finalized.status_code == 201
    assert finalized.json()["order"]["totalAmount"] == 300.0
    assert finalized.json()["stock_expense"]["amount"] == 210.0
    assert client.get("/tray").json()["count"] == 0
    assert report["revenue"] == 300.0
    assert report["total_expenses"] == 210.0
    assert report["net_profit"] == 90.0
    assert report["orders_today"] == 1
    assert report["expense_by_category"] == {"Stock": 210.0}


def test_finalize_empty_tray_is_400(client: TestClient) -> None:
    response = client.post("/tray/finalize")

    assert response.status_code == 400
    assert response.json()["code"] == "empty_tray"


def test_add_expense_with_conversion(client: TestClient) -> None:
    response = client.post(
        "/expenses",
        data={"name": "Rent", "amount": "50", "date": "2024-06-01", "category": "Fixed", "currency": "USD"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["expense"]["amount"] == 6500.0
    assert body["expense"]["originalCurrency"] == "USD"
    assert body["conversion"] == "50.00 USD converted to 6,500.00 KES"
    assert len(client.get("/expenses").json()["expenses"]) == 1


def test_add_expense_invalid_amount(client: TestClient) -> None:
    response = client.post(
        "/expenses",
        data={"name": "Rent", "amount": "0", "date": "2024-06-01", "category": "Fixed"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "invalid_amount"


def test_update_and_delete_expense(client: TestClient) -> None:
    created = client.post(
        "/expenses",
        data={"name": "Rent", "amount": "1000", "date": "2024-06-01", "category": "Fixed"},
    ).json()["expense"]

    updated = client.put(f"/expenses/{created['id']}", json={"name": "Shop rent"})
    deleted = client.delete(f"/expenses/{created['id']}")
    missing = client.delete(f"/expenses/{created['id']}")

    assert updated.status_code == 200
    assert updated.json()["expense"]["name"] == "Shop rent"
    assert deleted.status_code == 200
    assert missing.status_code == 404
