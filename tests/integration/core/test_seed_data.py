"""Integration tests for the ``seed_data`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.customers.models import Customer
from modules.orders.models import Order
from modules.products.models import Product
from modules.suppliers.models import Supplier

pytestmark = pytest.mark.integration


def _seed(**options) -> str:
    out = StringIO()
    call_command("seed_data", stdout=out, **options)
    return out.getvalue()


class TestSeedData:
    def test_creates_known_suppliers(self):
        _seed(customers=1, products=1, orders=0)
        assert dict(Supplier.objects.values_list("id", "name")) == {
            1: "Speedy",
            2: "Vault",
        }

    def test_respects_counts(self):
        output = _seed(customers=3, products=4, orders=5)

        assert Customer.objects.count() == 3
        assert Product.objects.count() == 4
        assert Order.objects.count() == 5
        assert "orders=5" in output

    def test_customers_have_phone_numbers(self):
        _seed(customers=3, products=1, orders=0)
        for customer in Customer.objects.all():
            assert 1 <= customer.phone_numbers.count() <= 3

    def test_orders_identify_customer_by_supplier_convention(self):
        _seed(customers=2, products=3, orders=10)
        for order in Order.objects.all():
            if order.supplier_id == 1:
                assert order.customer_id is not None
            else:
                assert order.customer_email
            assert order.item_count >= 1

    def test_rerun_is_idempotent_for_reference_data(self):
        _seed(customers=2, products=2, orders=0)
        _seed(customers=2, products=2, orders=0)

        assert Supplier.objects.count() == 2
        assert Customer.objects.count() == 2
        assert Product.objects.count() == 2
