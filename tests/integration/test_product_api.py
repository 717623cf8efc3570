"""Integration tests for the Product API endpoints."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration

URL = "/api/v1/products/"


class TestProductApi:
    def test_create_generates_code(self, api_client):
        response = api_client.post(
            URL, {"name": "Widget", "price": "12.50"}, format="json"
        )

        assert response.status_code == 201
        data = response.json()
        assert data["product_code"]
        assert Decimal(data["price"]) == Decimal("12.50")

    def test_negative_price_is_400(self, api_client):
        response = api_client.post(
            URL, {"name": "Widget", "price": "-1"}, format="json"
        )
        assert response.status_code == 400

    def test_duplicate_code_is_409(self, api_client, products):
        response = api_client.post(
            URL,
            {
                "name": "Clone",
                "price": "1.00",
                "product_code": str(products[0].product_code),
            },
            format="json",
        )
        assert response.status_code == 409

    def test_by_code(self, api_client, products):
        response = api_client.get(f"{URL}code/{products[1].product_code}/")
        assert response.status_code == 200
        assert response.json()["name"] == "Bracket"

    def test_by_code_malformed_is_404(self, api_client):
        assert api_client.get(f"{URL}code/not-a-guid/").status_code == 404

    def test_price_range_filter(self, api_client, products):
        data = api_client.get(URL, {"min_price": "20", "max_price": "40"}).json()
        assert [p["name"] for p in data["results"]] == ["Widget"]

    def test_update_price(self, api_client, products):
        response = api_client.patch(
            f"{URL}{products[2].id}/", {"price": "11.00"}, format="json"
        )
        assert response.status_code == 200
        products[2].refresh_from_db()
        assert products[2].price == Decimal("11.00")

    def test_delete_missing_is_404(self, api_client):
        assert api_client.delete(f"{URL}999/").status_code == 404

    def test_delete(self, api_client, products):
        assert api_client.delete(f"{URL}{products[0].id}/").status_code == 204
        assert not Product.objects.filter(pk=products[0].id).exists()
