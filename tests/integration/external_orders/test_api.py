"""Integration tests for the external order endpoints.

Covers:
- POST /api/v1/external-orders/speedy/ and /vault/ (transform preview).
- POST /api/v1/external-orders/speedy/create/ and /vault/create/.
- GET /api/v1/external-orders/suppliers/.
- Status mapping: 400 for malformed bodies and unknown references,
  500 for store failures.
"""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from django.db import OperationalError

from modules.orders.models import Order

pytestmark = pytest.mark.integration

BASE = "/api/v1/external-orders"


def _speedy(customer, products, **overrides) -> dict:
    data = {
        "customerId": customer.id,
        "orderTimestamp": "2024-01-15T10:30:00Z",
        "billTo": {
            "streetAddress": "1 High Street",
            "city": "London",
            "region": "Greater London",
            "postCode": "EC1A 1BB",
            "country": "GB",
        },
        "lineItems": [
            {"productId": products[0].id, "qty": 5, "unitPrice": 29.99},
            {"productId": products[1].id, "qty": 3, "unitPrice": 49.99},
            {"productId": products[2].id, "qty": 2, "unitPrice": 10.00},
        ],
    }
    data.update(overrides)
    return data


def _vault(products, codes=None) -> dict:
    codes = codes or [str(p.product_code) for p in products[:2]]
    return {
        "customerEmail": "buyer@example.com",
        "placedAt": 1705315800,
        "deliveryDetails": {
            "shippingLocation": {"addressLine": "10 Vault Lane", "cityName": "Bath"}
        },
        "items": [
            {"productCode": code, "quantityOrdered": 2, "pricePerUnit": 10.00}
            for code in codes
        ],
    }


# ===========================================================================
# Speedy
# ===========================================================================


class TestSpeedyTransform:
    def test_returns_canonical_order(self, api_client, customer, products):
        response = api_client.post(
            f"{BASE}/speedy/", _speedy(customer, products), format="json"
        )

        assert response.status_code == 200
        data = response.json()
        order = data["transformed_order"]
        assert data["supplier"] == "Speedy"
        assert order["supplier_id"] == 1
        assert order["customer_id"] == customer.id
        assert order["status"] == 0
        assert order["billing_address"]["county"] == "Greater London"
        assert Decimal(order["total_amount"]) == Decimal("319.92")
        assert Order.objects.count() == 0

    def test_unknown_customer_still_transforms(self, api_client, products):
        response = api_client.post(
            f"{BASE}/speedy/",
            _speedy(SimpleNamespace(id=999), products),
            format="json",
        )
        assert response.status_code == 200

    def test_malformed_body_is_400(self, api_client):
        response = api_client.post(f"{BASE}/speedy/", {"lineItems": []}, format="json")
        assert response.status_code == 400
        assert response.json()["errors"]


class TestSpeedyCreate:
    def test_creates_order(self, api_client, suppliers, customer, products):
        response = api_client.post(
            f"{BASE}/speedy/create/", _speedy(customer, products), format="json"
        )

        assert response.status_code == 201
        data = response.json()
        order = Order.objects.get(pk=data["order_id"])
        assert data["success"] is True
        assert data["order_reference"] == f"SPEEDY-{order.id}"
        assert data["status"] == "Received"
        assert data["item_count"] == 3
        assert Decimal(data["total_amount"]) == Decimal("319.92")
        assert order.customer_id == customer.id
        assert order.supplier_id == 1
        assert order.total_amount == Decimal("319.92")
        assert order.billing_address["city"] == "London"
        assert order.delivery_address is None

    def test_unknown_customer_is_400_and_nothing_saved(
        self, api_client, suppliers, products
    ):
        response = api_client.post(
            f"{BASE}/speedy/create/",
            _speedy(SimpleNamespace(id=999), products),
            format="json",
        )

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Customer ID 999 not found.",
            "kind": "Customer",
            "identifier": "999",
        }
        assert Order.objects.count() == 0

    def test_unknown_product_is_400(self, api_client, suppliers, customer, products):
        payload = _speedy(
            customer,
            products,
            lineItems=[{"productId": 4242, "qty": 1, "unitPrice": 1}],
        )
        response = api_client.post(f"{BASE}/speedy/create/", payload, format="json")

        assert response.status_code == 400
        assert response.json()["kind"] == "Product"
        assert Order.objects.count() == 0

    def test_store_failure_is_500(self, api_client, suppliers, customer, products):
        with patch(
            "modules.orders.repositories.django_repository."
            "OrderDjangoRepository.create",
            side_effect=OperationalError("database is locked"),
        ):
            response = api_client.post(
                f"{BASE}/speedy/create/", _speedy(customer, products), format="json"
            )

        assert response.status_code == 500
        assert "database is locked" not in response.json()["detail"]

    def test_negative_quantity_is_400_and_nothing_saved(
        self, api_client, suppliers, customer, products
    ):
        payload = _speedy(
            customer,
            products,
            lineItems=[{"productId": products[0].id, "qty": -1, "unitPrice": 1}],
        )
        response = api_client.post(f"{BASE}/speedy/create/", payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["loc"] == ["lineItems", 0, "qty"]
        assert Order.objects.count() == 0

    def test_reported_total_matches_stored_total(
        self, api_client, suppliers, customer, products
    ):
        response = api_client.post(
            f"{BASE}/speedy/create/", _speedy(customer, products), format="json"
        )

        data = response.json()
        stored = Order.objects.get(pk=data["order_id"])
        assert Decimal(data["total_amount"]) == stored.total_amount
        assert data["item_count"] == stored.item_count


# ===========================================================================
# Vault
# ===========================================================================


@pytest.mark.django_db(transaction=True)
class TestVaultTransform:
    def test_resolves_product_codes(self, api_client, products):
        response = api_client.post(f"{BASE}/vault/", _vault(products), format="json")

        assert response.status_code == 200
        data = response.json()
        items = data["transformed_order"]["items"]
        assert [i["product_id"] for i in items] == [products[0].id, products[1].id]
        assert data["transformed_order"]["order_date"].startswith("2024-01-15T10:50:00")
        assert data["product_code_resolution"][0]["product_name"] == "Widget"
        assert Order.objects.count() == 0

    def test_unknown_code_is_400(self, api_client, products):
        unknown = "0190d6d2-7a5e-7cc0-8f55-2b1c4a3e9dff"
        response = api_client.post(
            f"{BASE}/vault/", _vault(products, codes=[unknown]), format="json"
        )

        assert response.status_code == 400
        assert response.json()["kind"] == "ProductCode"
        assert response.json()["identifier"] == unknown

    def test_out_of_range_placed_at_is_400(self, api_client, products):
        payload = {**_vault(products), "placedAt": 10**12}
        response = api_client.post(f"{BASE}/vault/", payload, format="json")

        assert response.status_code == 400
        assert response.json()["errors"][0]["loc"] == ["placedAt"]


@pytest.mark.django_db(transaction=True)
class TestVaultCreate:
    def test_creates_order(self, api_client, suppliers, products):
        response = api_client.post(
            f"{BASE}/vault/create/", _vault(products), format="json"
        )

        assert response.status_code == 201
        data = response.json()
        order = Order.objects.get(pk=data["order_id"])
        assert data["order_reference"] == f"VAULT-{order.id}"
        assert order.customer_id is None
        assert order.customer_email == "buyer@example.com"
        assert order.supplier_id == 2
        assert order.total_amount == Decimal("40.00")
        assert order.billing_address is None
        assert order.delivery_address["city"] == "Bath"
        assert len(data["product_resolutions"]) == 2
        assert Decimal(data["total_amount"]) == order.total_amount

    def test_unknown_code_is_400_and_nothing_saved(
        self, api_client, suppliers, products
    ):
        codes = [str(products[0].product_code), "0190d6d2-7a5e-7cc0-8f55-2b1c4a3e9dff"]
        response = api_client.post(
            f"{BASE}/vault/create/", _vault(products, codes=codes), format="json"
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Product Code ")
        assert Order.objects.count() == 0

    def test_invalid_email_is_400(self, api_client, suppliers, products):
        payload = {**_vault(products), "customerEmail": "not-an-email"}
        response = api_client.post(f"{BASE}/vault/create/", payload, format="json")
        assert response.status_code == 400


class TestSupportedSuppliers:
    def test_lists_both_suppliers(self, api_client):
        response = api_client.get(f"{BASE}/suppliers/")

        assert response.status_code == 200
        names = [s["name"] for s in response.json()]
        assert names == ["Speedy", "Vault"]
