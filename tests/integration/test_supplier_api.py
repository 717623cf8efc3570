"""Integration tests for the Supplier API endpoints."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

URL = "/api/v1/suppliers/"


class TestSupplierApi:
    def test_list(self, api_client, suppliers):
        data = api_client.get(URL).json()
        assert [s["name"] for s in data["results"]] == ["Speedy", "Vault"]

    def test_create_and_duplicate(self, api_client):
        first = api_client.post(URL, {"name": "Acme"}, format="json")
        second = api_client.post(URL, {"name": "acme"}, format="json")

        assert first.status_code == 201
        assert second.status_code == 409

    def test_by_name(self, api_client, suppliers):
        response = api_client.get(f"{URL}name/vault/")
        assert response.status_code == 200
        assert response.json()["id"] == 2

    def test_retrieve_missing_is_404(self, api_client):
        assert api_client.get(f"{URL}42/").status_code == 404
