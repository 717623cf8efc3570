"""Django ORM implementation of the Supplier repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.db import models, transaction

from modules.suppliers.models import Supplier
from modules.suppliers.repositories.interfaces import ISupplierRepository

logger = structlog.get_logger(__name__)


class SupplierDjangoRepository(ISupplierRepository):
    """Concrete Supplier repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Supplier]:
        try:
            return Supplier.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Supplier]":
        queryset = Supplier.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def exists(self, id: int) -> bool:
        return Supplier.objects.filter(id=id).exists()

    @transaction.atomic
    def save(self, entity: Supplier) -> Supplier:
        entity.save()
        logger.info("supplier.saved", supplier_id=entity.id, name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        supplier = self.get_by_id(id)
        if not supplier:
            return False
        supplier.delete()
        logger.info("supplier.deleted", supplier_id=id)
        return True

    def get_by_name(self, name: str) -> Optional[Supplier]:
        return Supplier.objects.filter(name__iexact=name).first()

    def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        queryset = Supplier.objects.filter(name__iexact=name)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.exists()
