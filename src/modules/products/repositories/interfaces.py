"""Product repository interface.

Extends ``IRepository[Product]`` with the product-code look-ups used
for uniqueness checks and for resolving Vault line items.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional filters."""

    @abstractmethod
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""

    @abstractmethod
    def get_by_product_code(self, product_code: UUID | str) -> Optional[Product]:
        """Retrieve a product by its GUID product code."""

    @abstractmethod
    def product_code_exists(
        self, product_code: UUID, exclude_id: Optional[int] = None
    ) -> bool:
        """Return whether another product already uses *product_code*."""
