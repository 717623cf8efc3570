"""Unit tests for ProductService."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock
from uuid import UUID

import pytest
from django.db.models import ProtectedError
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductInUse,
    ProductNotFound,
)
from modules.products.models import Product
from modules.products.services import ProductService

pytestmark = pytest.mark.unit

CODE = UUID("0190d6d2-7a5e-7cc0-8f55-2b1c4a3e9d01")


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.product_code_exists.return_value = False
    repo.save.side_effect = lambda p: p
    return repo


@pytest.fixture()
def service(mock_repo):
    return ProductService(repository=mock_repo)


class TestCreateProduct:
    def test_generates_product_code_when_absent(self, service):
        product = service.create_product(
            CreateProductDTO(name="Widget", price=Decimal("9.99"))
        )
        assert isinstance(product.product_code, UUID)
        assert product.price == Decimal("9.99")

    def test_keeps_supplied_product_code(self, service):
        product = service.create_product(
            CreateProductDTO(name="Widget", price=Decimal("1"), product_code=CODE)
        )
        assert product.product_code == CODE

    def test_duplicate_code_rejected(self, service, mock_repo):
        mock_repo.product_code_exists.return_value = True
        with pytest.raises(ProductAlreadyExists):
            service.create_product(
                CreateProductDTO(name="Widget", price=Decimal("1"), product_code=CODE)
            )
        mock_repo.save.assert_not_called()

    def test_negative_price_rejected_by_dto(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Widget", price=Decimal("-0.01"))


class TestUpdateProduct:
    def test_updates_price(self, service, mock_repo):
        mock_repo.get_by_id.return_value = Product(
            id=1, name="Widget", price=Decimal("1.00"), product_code=CODE
        )
        product = service.update_product(1, UpdateProductDTO(price=Decimal("2.50")))
        assert product.price == Decimal("2.50")
        assert product.name == "Widget"

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(ProductNotFound):
            service.update_product(1, UpdateProductDTO(name="X"))


class TestDeleteProduct:
    def test_not_found(self, service, mock_repo):
        mock_repo.delete.return_value = False
        with pytest.raises(ProductNotFound):
            service.delete_product(1)

    def test_used_by_orders(self, service, mock_repo):
        mock_repo.delete.side_effect = ProtectedError("protected", set())
        with pytest.raises(ProductInUse):
            service.delete_product(1)


class TestGetProductByCode:
    def test_found(self, service, mock_repo):
        product = Product(id=1, name="Widget", price=Decimal("1"), product_code=CODE)
        mock_repo.get_by_product_code.return_value = product
        assert service.get_product_by_code(CODE) is product

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_product_code.return_value = None
        with pytest.raises(ProductNotFound, match=str(CODE)):
            service.get_product_by_code(CODE)
