"""Integration tests for the Customer API endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from modules.customers.models import Customer
from modules.orders.models import Order

pytestmark = pytest.mark.integration

URL = "/api/v1/customers/"


class TestCustomerCreate:
    def test_create_with_phone_numbers(self, api_client):
        response = api_client.post(
            URL,
            {
                "name": "Jane Buyer",
                "email": "jane@example.com",
                "phone_numbers": [
                    {"type": "Mobile", "number": "07700 900123"},
                    {"type": "Work", "number": "0113 496 0000"},
                ],
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "jane@example.com"
        assert [p["type"] for p in data["phone_numbers"]] == ["Mobile", "Work"]

    def test_duplicate_email_is_409(self, api_client, customer):
        response = api_client.post(
            URL, {"name": "Other", "email": customer.email}, format="json"
        )
        assert response.status_code == 409

    def test_invalid_email_is_400(self, api_client):
        response = api_client.post(URL, {"name": "X", "email": "nope"}, format="json")
        assert response.status_code == 400


class TestCustomerRead:
    def test_list_is_paginated(self, api_client, customer):
        data = api_client.get(URL).json()
        assert data["count"] == 1
        assert data["results"][0]["name"] == "Jane Buyer"

    def test_retrieve(self, api_client, customer):
        response = api_client.get(f"{URL}{customer.id}/")
        assert response.status_code == 200
        assert response.json()["id"] == customer.id

    def test_retrieve_missing_is_404(self, api_client):
        assert api_client.get(f"{URL}999/").status_code == 404

    def test_by_email_is_case_insensitive(self, api_client, customer):
        response = api_client.get(f"{URL}email/JANE@example.com/")
        assert response.status_code == 200
        assert response.json()["id"] == customer.id

    def test_by_email_missing_is_404(self, api_client):
        assert api_client.get(f"{URL}email/ghost@example.com/").status_code == 404

    def test_filter_by_name(self, api_client, customer):
        Customer.objects.create(name="Bob Seller", email="bob@example.com")
        data = api_client.get(URL, {"name": "bob"}).json()
        assert [c["email"] for c in data["results"]] == ["bob@example.com"]


class TestCustomerUpdateDelete:
    def test_update_replaces_phone_numbers(self, api_client, customer):
        customer.phone_numbers.create(type="Home", number="111")
        response = api_client.put(
            f"{URL}{customer.id}/",
            {"name": "Jane B.", "phone_numbers": [{"type": "Work", "number": "222"}]},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Jane B."
        assert [p["number"] for p in response.json()["phone_numbers"]] == ["222"]

    def test_delete(self, api_client, customer):
        assert api_client.delete(f"{URL}{customer.id}/").status_code == 204
        assert not Customer.objects.filter(pk=customer.id).exists()

    def test_delete_with_orders_is_409(self, api_client, customer, suppliers):
        Order.objects.create(
            customer=customer,
            supplier=suppliers[0],
            order_date=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )
        assert api_client.delete(f"{URL}{customer.id}/").status_code == 409
