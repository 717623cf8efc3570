"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- ``product_code`` must be unique.
- Price is non-negative (validated by DTO).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import ProtectedError

from modules.products.exceptions import (
    ProductAlreadyExists,
    ProductInUse,
    ProductNotFound,
)
from modules.products.models import Product

if TYPE_CHECKING:
    from django.db import models

    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product.

        Raises:
            ProductAlreadyExists: if the supplied product code is taken.
        """
        log = logger.bind(name=dto.name)

        if dto.product_code is not None and self._repo.product_code_exists(
            dto.product_code
        ):
            log.warning("product.duplicate_code", product_code=str(dto.product_code))
            raise ProductAlreadyExists(
                f"Product code '{dto.product_code}' already registered."
            )

        product = Product(
            name=dto.name,
            price=dto.price,
            description=dto.description,
        )
        if dto.product_code is not None:
            product.product_code = dto.product_code
        product = self._repo.save(product)
        log.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def update_product(self, id: int, dto: UpdateProductDTO) -> Product:
        """Update an existing product with the supplied fields.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new product code collides.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")

        log = logger.bind(product_id=id)

        if (
            dto.product_code is not None
            and dto.product_code != product.product_code
            and self._repo.product_code_exists(dto.product_code, exclude_id=product.id)
        ):
            log.warning("product.duplicate_code", product_code=str(dto.product_code))
            raise ProductAlreadyExists(
                f"Product code '{dto.product_code}' already registered."
            )

        for field in ("name", "price", "description", "product_code"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)

        product = self._repo.save(product)
        log.info("product.updated")
        return product

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductInUse: if order items still reference the product.
        """
        try:
            deleted = self._repo.delete(id)
        except ProtectedError as exc:
            logger.warning("product.delete_blocked", product_id=id)
            raise ProductInUse(
                f"Product {id} is used by orders and cannot be deleted."
            ) from exc
        if not deleted:
            raise ProductNotFound(f"Product {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """Return products, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def get_product_by_code(self, product_code: UUID | str) -> Product:
        product = self._repo.get_by_product_code(product_code)
        if not product:
            raise ProductNotFound(f"Product code {product_code} not found.")
        return product
