from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.products.models import Product
from modules.suppliers.models import Supplier


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def suppliers():
    """The two known suppliers, with their fixed ids."""
    speedy = Supplier.objects.create(id=1, name="Speedy")
    vault = Supplier.objects.create(id=2, name="Vault")
    return speedy, vault


@pytest.fixture()
def customer():
    return Customer.objects.create(name="Jane Buyer", email="jane@example.com")


@pytest.fixture()
def products():
    return [
        Product.objects.create(name="Widget", price=Decimal("29.99")),
        Product.objects.create(name="Bracket", price=Decimal("49.99")),
        Product.objects.create(name="Cable", price=Decimal("10.00")),
    ]
