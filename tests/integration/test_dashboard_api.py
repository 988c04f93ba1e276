"""
Integration tests for the dashboard API.
"""
import csv
import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from dashboard.app import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def payload():
    return {
        "products": [
            {
                "id": "P-1", "name": "Nitrile Gloves", "code": "GLV-100",
                "supplier": "MedSupply", "quantity": 3, "unitPrice": 10,
                "publicPrice": 15, "vat": 20,
                "priceBreakdowns": [
                    {"quantity": 3, "unitPrice": 10, "supplier": "MedSupply", "stock": 40},
                ],
            },
            {
                "id": "P-2", "name": "Surgical Masks", "code": "MSK-50",
                "supplier": "CareDirect", "quantity": 10, "unitPrice": 4,
                "averagePrice": 4.5,
            },
        ],
        "total_amount": 70.0,
        "user_role": "Buyer",
    }


@pytest.mark.integration
@pytest.mark.api
class TestDashboardAPI:
    """Integration tests for the order endpoints."""

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}

    def test_summary(self, client, payload):
        response = client.post("/api/orders/summary", json=payload)
        assert response.status_code == 200

        body = response.json()
        summary = body["summary"]
        assert summary["product_count"] == 2
        assert summary["total_quantity"] == 13
        assert summary["unique_supplier_count"] == 2
        assert summary["total_savings_vs_average"] == pytest.approx(5.0)
        assert summary["average_discount_percent"] == pytest.approx(100 / 3)

        figures = {p["id"]: p for p in body["products"]}
        assert figures["P-1"]["net_public_price"] == pytest.approx(12.5)
        assert figures["P-2"]["net_public_price"] is None

    def test_summary_without_public_prices(self, client):
        response = client.post("/api/orders/summary", json={
            "products": [
                {"id": "a", "name": "A", "code": "A", "supplier": "S", "quantity": 1, "unit_price": 2},
            ],
        })
        summary = response.json()["summary"]
        assert summary["average_discount_percent"] is None
        assert summary["total_amount"] == 2.0

    def test_summary_rejects_invalid_product(self, client):
        response = client.post("/api/orders/summary", json={
            "products": [{"id": "a", "name": "A", "code": "A", "supplier": "S", "quantity": -1, "unit_price": 2}],
        })
        assert response.status_code == 422

    @pytest.mark.parametrize("total", ["1e999", "-1e999", "NaN"])
    def test_summary_rejects_non_finite_total(self, client, total):
        response = client.post(
            "/api/orders/summary",
            content=f'{{"products": [], "total_amount": {total}}}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "total_amount"]

    def test_summary_rejects_non_finite_price(self, client):
        response = client.post(
            "/api/orders/summary",
            content='{"products": [{"id": "a", "name": "A", "code": "A", "supplier": "S", '
                    '"quantity": 1, "unit_price": 1e999}]}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422

    def test_export_csv(self, client, payload):
        payload["order_name"] = "PO-42"
        response = client.post("/api/orders/export?format=csv", json=payload)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="PO-42_' in response.headers["content-disposition"]

        rows = list(csv.DictReader(io.StringIO(response.content.decode("utf-8-sig"))))
        assert [r["Product ID"] for r in rows] == ["P-1", "P-2"]
        assert rows[0]["Order"] == "PO-42"
        assert "Tier Suppliers" not in rows[0]

    def test_export_xlsx_admin(self, client, payload):
        payload["user_role"] = "Admin"
        response = client.post("/api/orders/export?format=xlsx", json=payload)

        assert response.status_code == 200
        wb = load_workbook(io.BytesIO(response.content))
        assert wb["Products"]["A1"].value == "Untitled Order"
        headers = [c.value for c in wb["Products"][2]]
        assert "Tier Suppliers" in headers
        assert "Summary" in wb.sheetnames

    def test_export_empty_order(self, client):
        response = client.post("/api/orders/export?format=csv", json={"products": []})
        assert response.status_code == 200
        lines = response.content.decode("utf-8-sig").strip().splitlines()
        assert len(lines) == 1

    def test_export_unknown_format(self, client, payload):
        response = client.post("/api/orders/export?format=pdf", json=payload)
        assert response.status_code == 422

    def test_preview(self, client, payload):
        payload["order"] = {"order_name": "PO-42", "priority": "scheduled"}
        response = client.post("/api/orders/preview", json=payload)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "PO-42" in response.text
        assert "Scheduled" in response.text
        assert "<th>Supplier</th>" not in response.text
