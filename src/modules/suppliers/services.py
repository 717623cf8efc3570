"""Supplier service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction
from django.db.models import ProtectedError

from modules.suppliers.exceptions import (
    SupplierAlreadyExists,
    SupplierInUse,
    SupplierNotFound,
)
from modules.suppliers.models import Supplier

if TYPE_CHECKING:
    from django.db import models

    from modules.suppliers.dtos import CreateSupplierDTO, UpdateSupplierDTO
    from modules.suppliers.repositories.interfaces import ISupplierRepository

logger = structlog.get_logger(__name__)


class SupplierService:
    def __init__(self, repository: ISupplierRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def create_supplier(self, dto: CreateSupplierDTO) -> Supplier:
        """Raises ``SupplierAlreadyExists`` when the name is taken."""
        if self._repo.name_exists(dto.name):
            logger.warning("supplier.duplicate_name", name=dto.name)
            raise SupplierAlreadyExists(f"Supplier '{dto.name}' already exists.")
        supplier = self._repo.save(
            Supplier(name=dto.name, description=dto.description)
        )
        logger.info("supplier.created", supplier_id=supplier.id)
        return supplier

    @transaction.atomic
    def update_supplier(self, id: int, dto: UpdateSupplierDTO) -> Supplier:
        supplier = self._repo.get_by_id(id)
        if not supplier:
            raise SupplierNotFound(f"Supplier {id} not found.")

        if dto.name is not None and self._repo.name_exists(
            dto.name, exclude_id=supplier.id
        ):
            logger.warning("supplier.duplicate_name", name=dto.name)
            raise SupplierAlreadyExists(f"Supplier '{dto.name}' already exists.")

        for field in ("name", "description"):
            value = getattr(dto, field)
            if value is not None:
                setattr(supplier, field, value)
        return self._repo.save(supplier)

    @transaction.atomic
    def delete_supplier(self, id: int) -> None:
        try:
            deleted = self._repo.delete(id)
        except ProtectedError as exc:
            raise SupplierInUse(
                f"Supplier {id} has orders and cannot be deleted."
            ) from exc
        if not deleted:
            raise SupplierNotFound(f"Supplier {id} not found.")

    def list_suppliers(self) -> "models.QuerySet[Supplier]":
        return self._repo.list()

    def get_supplier(self, id: int) -> Supplier:
        supplier = self._repo.get_by_id(id)
        if not supplier:
            raise SupplierNotFound(f"Supplier {id} not found.")
        return supplier

    def get_supplier_by_name(self, name: str) -> Supplier:
        supplier = self._repo.get_by_name(name)
        if not supplier:
            raise SupplierNotFound(f"Supplier '{name}' not found.")
        return supplier
